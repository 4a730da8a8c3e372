"""
Open Food Facts client used as the fallback product source.

Only the v2 product endpoint is used. Any transport, status or shape problem
is reported as "not found" (None) and logged; nothing propagates to callers.
"""
import logging
import math
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from healthapproved.core.config import settings
from healthapproved.schemas.product import Nutrition, Product

logger = logging.getLogger(__name__)

# Our nutrient key -> Open Food Facts per-100g nutriment key
NUTRIMENT_KEYS = {
    "energy": "energy-kcal_100g",
    "protein": "proteins_100g",
    "fat": "fat_100g",
    "sat_fat": "saturated-fat_100g",
    "trans_fat": "trans-fat_100g",
    "carbs": "carbohydrates_100g",
    "sugar": "sugars_100g",
    "fiber": "fiber_100g",
}

# salt (g) -> sodium (mg): 1 g salt ~ 400 mg sodium
SALT_TO_SODIUM_MG = 400
SODIUM_G_TO_MG = 1000


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return float(value)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def sodium_mg_from_nutriments(nutriments: Dict[str, Any]) -> Optional[int]:
    """Sodium in mg per 100g; direct sodium wins over salt-derived sodium."""
    sodium = _number(nutriments.get("sodium_100g"))
    if sodium is not None:
        return _round_half_up(sodium * SODIUM_G_TO_MG)
    salt = _number(nutriments.get("salt_100g"))
    if salt is not None:
        return _round_half_up(salt * SALT_TO_SODIUM_MG)
    return None


def map_off_product(gtin: str, payload: Any) -> Optional[Product]:
    """Map an Open Food Facts v2 response body to our Product shape."""
    if not isinstance(payload, dict) or payload.get("status") != 1:
        return None
    p = payload.get("product")
    if not isinstance(p, dict) or not p:
        return None

    nutriments = p.get("nutriments")
    if not isinstance(nutriments, dict):
        nutriments = {}

    values: Dict[str, Optional[float]] = {
        key: _number(nutriments.get(off_key)) for key, off_key in NUTRIMENT_KEYS.items()
    }
    sodium = sodium_mg_from_nutriments(nutriments)
    values["sodium"] = float(sodium) if sodium is not None else None

    categories = p.get("categories") or ""
    category = categories.split(",")[0] if isinstance(categories, str) else ""

    return Product(
        id=0,
        gtin=gtin,
        brand=p.get("brands") or p.get("brand") or "Unknown",
        name=p.get("product_name") or p.get("generic_name") or "Unknown product",
        variant=p.get("quantity") or "",
        category=category,
        per=100,
        nutrition=Nutrition(**values),
        ingredients_raw=p.get("ingredients_text") or "",
    )


class OpenFoodFactsClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.OFF_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.OFF_TIMEOUT_SECONDS
        self.user_agent = user_agent or settings.OFF_USER_AGENT
        self._transport = transport

    def product_url(self, gtin: str) -> str:
        return f"{self.base_url}/api/v2/product/{quote(gtin, safe='')}.json"

    async def fetch_product(self, gtin: str) -> Optional[Product]:
        url = self.product_url(gtin)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                transport=self._transport,
            ) as client:
                resp = await client.get(url)
            if not resp.is_success:
                logger.info(f"Open Food Facts returned {resp.status_code} for {gtin}")
                return None
            product = map_off_product(gtin, resp.json())
        except httpx.HTTPError as e:
            logger.warning(f"Open Food Facts request failed for {gtin}: {e!r}")
            return None
        except (ValueError, TypeError) as e:
            # ValueError covers invalid JSON bodies and pydantic validation errors
            logger.warning(f"Unexpected Open Food Facts response for {gtin}: {e}")
            return None

        if product is None:
            logger.info(f"Product {gtin} not found on Open Food Facts")
        return product
