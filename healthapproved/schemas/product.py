import math
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from typing import Any, Optional

NUTRIENT_FIELDS = (
    "energy", "protein", "fat", "sat_fat", "trans_fat", "carbs", "sugar", "sodium", "fiber"
)

DEFAULT_PER = 100


class Nutrition(BaseModel):
    """Nutrient amounts per `Product.per` grams. None means unknown, not zero."""
    model_config = ConfigDict(extra="ignore")

    energy: Optional[float] = Field(None, description="Energy in kcal")
    protein: Optional[float] = Field(None, description="Protein in grams")
    fat: Optional[float] = Field(None, description="Total fat in grams")
    sat_fat: Optional[float] = Field(None, description="Saturated fat in grams")
    trans_fat: Optional[float] = Field(None, description="Trans fat in grams")
    carbs: Optional[float] = Field(None, description="Carbohydrates in grams")
    sugar: Optional[float] = Field(None, description="Sugar in grams")
    sodium: Optional[float] = Field(None, description="Sodium in milligrams")
    fiber: Optional[float] = Field(None, description="Fiber in grams")

    @field_validator(*NUTRIENT_FIELDS, mode="before")
    @classmethod
    def numbers_only(cls, v: Any) -> Any:
        # "30" or true in a catalog is not a nutrient amount
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        return v

    @field_serializer(*NUTRIENT_FIELDS, when_used="json")
    def finite_or_null(self, v: Optional[float]) -> Optional[float]:
        if v is None or not math.isfinite(v):
            return None
        return v


class Product(BaseModel):
    """A packaged-food item from the local catalog or the remote provider"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    gtin: str = Field("", description="Barcode / GTIN used as the lookup identifier")
    brand: Optional[str] = None
    name: Optional[str] = None
    variant: Optional[str] = None
    category: Optional[str] = None
    veg_mark: Optional[str] = None
    per: float = Field(DEFAULT_PER, description="Serving basis in grams for all nutrient fields")
    nutrition: Nutrition = Field(default_factory=Nutrition)
    ingredients_raw: str = Field("", description="Ingredient list as printed on the pack")

    @field_validator("gtin", mode="before")
    @classmethod
    def coerce_gtin(cls, v: Any) -> str:
        # Catalog files sometimes store barcodes as JSON numbers
        if v is None:
            return ""
        return str(v)

    @field_validator("per", mode="before")
    @classmethod
    def default_per(cls, v: Any) -> Any:
        return DEFAULT_PER if not v else v

    @field_validator("nutrition", mode="before")
    @classmethod
    def default_nutrition(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("ingredients_raw", mode="before")
    @classmethod
    def default_ingredients(cls, v: Any) -> Any:
        return "" if v is None else v
