from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from healthapproved.core.config import settings
from healthapproved.core.exceptions import InvalidInputError
from healthapproved.schemas.additive import AdditiveRecord
from healthapproved.schemas.product import Product
from healthapproved.services import catalog_store
from healthapproved.services.catalog_store import LoadResult
from healthapproved.services.openfoodfacts import OpenFoodFactsClient
from .engine import compute_health_score
from .schemas import LookupResponse

logger = logging.getLogger(__name__)


class FoodScoringService:
    """Resolves a barcode to a product and scores it.

    Catalog and KB are re-read on every call; nothing is cached between
    lookups, so concurrent requests share no mutable state.
    """

    def __init__(
        self,
        products_path: Optional[str] = None,
        additives_path: Optional[str] = None,
        off_client: Optional[OpenFoodFactsClient] = None,
        off_enabled: Optional[bool] = None,
    ):
        self.products_path = products_path or settings.PRODUCTS_PATH
        self.additives_path = additives_path or settings.ADDITIVES_PATH
        self.off_enabled = settings.OFF_ENABLED if off_enabled is None else off_enabled
        self.off_client = off_client or OpenFoodFactsClient()

    # Data sources
    def load_additives(self) -> LoadResult[List[AdditiveRecord]]:
        return catalog_store.load_additives(self.additives_path)

    def load_products(self) -> LoadResult[List[Product]]:
        return catalog_store.load_products(self.products_path)

    def list_additives(self) -> List[Any]:
        """The KB exactly as stored, without validation or normalization."""
        return catalog_store.read_json_list(self.additives_path).value

    async def resolve_product(self, gtin: str) -> Optional[Product]:
        # File reads run off the event loop
        catalog = await asyncio.to_thread(self.load_products)
        if not catalog.ok:
            logger.warning(f"Local product catalog degraded: {catalog.error}")

        product = catalog_store.find_product(catalog.value, gtin)
        if product is not None:
            logger.debug(f"Resolved {gtin} from local catalog")
            return product

        if not self.off_enabled:
            return None
        return await self.off_client.fetch_product(gtin)

    # High-level lookup API
    async def lookup(self, identifier: Optional[str]) -> LookupResponse:
        gtin = (identifier or "").strip()
        if not gtin:
            raise InvalidInputError("gtin required")

        try:
            product = await self.resolve_product(gtin)
        except Exception as e:
            logger.error(f"Product resolution failed for {gtin}: {e}")
            product = None

        if product is None:
            logger.info(f"No product found for {gtin}")
            return LookupResponse.unknown()

        kb = await asyncio.to_thread(self.load_additives)
        if not kb.ok:
            logger.warning(f"Additive knowledge base degraded, scoring with {len(kb.value)} record(s): {kb.error}")

        score = compute_health_score(product, kb.value)
        logger.info(f"Scored {gtin}: {score.score} ({score.status.value})")
        return LookupResponse(status=score.status, score=score, product=product)
