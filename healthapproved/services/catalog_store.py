"""
Read-only access to the static JSON catalogs (products and additive KB).

Every loader returns a LoadResult instead of raising: a missing or broken
file yields the fallback value together with the reason, so a lookup always
completes from whatever data is available. Records are validated one by one;
an invalid record is skipped and reported without hiding the rest of the file.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from healthapproved.schemas.additive import AdditiveRecord
from healthapproved.schemas.product import Product

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    value: T
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def read_json(path: str, fallback: Any) -> LoadResult[Any]:
    """Read a JSON document, returning `fallback` when absent or unreadable."""
    if not os.path.exists(path):
        return LoadResult(fallback, f"file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return LoadResult(json.load(f))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return LoadResult(fallback, str(e))


def read_json_list(path: str) -> LoadResult[List[Any]]:
    result = read_json(path, [])
    if not result.ok:
        return result
    if not isinstance(result.value, list):
        logger.warning(f"Expected a JSON list in {path}, got {type(result.value).__name__}")
        return LoadResult([], f"expected a list in {path}")
    return result


def validate_records(records: List[Any], model: Type[M], path: str) -> LoadResult[List[M]]:
    valid: List[M] = []
    skipped = 0
    for index, record in enumerate(records):
        try:
            valid.append(model.model_validate(record))
        except ValidationError as e:
            skipped += 1
            logger.warning(f"Skipping invalid {model.__name__} #{index} in {path}: {e.error_count()} error(s)")
    if skipped:
        return LoadResult(valid, f"skipped {skipped} invalid record(s) in {path}")
    return LoadResult(valid)


def load_products(path: str) -> LoadResult[List[Product]]:
    raw = read_json_list(path)
    if not raw.ok:
        return LoadResult([], raw.error)
    return validate_records(raw.value, Product, path)


def load_additives(path: str) -> LoadResult[List[AdditiveRecord]]:
    raw = read_json_list(path)
    if not raw.ok:
        return LoadResult([], raw.error)
    return validate_records(raw.value, AdditiveRecord, path)


def find_product(products: List[Product], gtin: str) -> Optional[Product]:
    for product in products:
        if product.gtin == gtin:
            return product
    return None
