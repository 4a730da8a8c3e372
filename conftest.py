import json
import os

import httpx
import pytest

from healthapproved.schemas.additive import AdditiveRecord
from healthapproved.schemas.product import Product


ADDITIVES = [
    {"name": "Tartrazine", "aliases": ["E102", "INS 102"], "level": "red", "severity": 12, "short": "Synthetic azo colour"},
    {"name": "Sodium nitrite", "aliases": ["E250"], "level": "red"},
    {"name": "Monosodium glutamate", "aliases": ["MSG", "INS 621"], "level": "amber", "severity": 5, "short": "Flavour enhancer"},
    {"name": "Sodium benzoate", "aliases": ["E211", "INS 211"], "level": "amber"},
    {"name": "Citric acid", "aliases": ["E330", "INS 330"], "level": "green"},
]

PRODUCTS = [
    {
        "id": 1,
        "gtin": 8901234567890,
        "brand": "Fizzup",
        "name": "Lemon Soda",
        "category": "Soft Drink",
        "nutrition": {"sugar": 30, "sodium": 50},
        "ingredients_raw": "Carbonated Water, Sugar, Acidity Regulator (INS 330)",
    },
    {
        "id": 2,
        "gtin": "8900000000017",
        "brand": "Grainwise",
        "name": "Atta Crackers",
        "category": "Biscuits",
        "nutrition": {"sugar": 3},
        "ingredients_raw": "Whole Wheat Flour, Sugar",
    },
]


def make_product(**kwargs) -> Product:
    data = {"gtin": "0000000000000", "category": "", "nutrition": {}, "ingredients_raw": ""}
    data.update(kwargs)
    return Product(**data)


@pytest.fixture
def additives():
    return [AdditiveRecord(**a) for a in ADDITIVES]


@pytest.fixture
def kb_path(tmp_path):
    path = tmp_path / "additives.json"
    path.write_text(json.dumps(ADDITIVES), encoding="utf-8")
    return str(path)


@pytest.fixture
def catalog_path(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps(PRODUCTS), encoding="utf-8")
    return str(path)


@pytest.fixture
def missing_path(tmp_path):
    return os.path.join(str(tmp_path), "does-not-exist.json")


@pytest.fixture
def not_found_transport():
    """Transport where every Open Food Facts lookup misses"""
    return httpx.MockTransport(lambda request: httpx.Response(404, json={"status": 0}))
