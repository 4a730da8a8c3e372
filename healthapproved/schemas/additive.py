from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional
from enum import Enum


class AdditiveLevel(str, Enum):
    """Risk level of a knowledge-base entry"""
    RED = "red"  # avoid
    AMBER = "amber"  # caution
    GREEN = "green"  # safe


class AdditiveRecord(BaseModel):
    """One additive / ingredient entry of the knowledge base"""
    model_config = ConfigDict(extra="ignore")

    name: str
    aliases: List[str] = Field(default_factory=list)
    # Unknown levels are kept as-is and scored like green
    level: str = AdditiveLevel.AMBER.value
    # Fractional severities are floored when the penalty is applied
    severity: Optional[float] = Field(None, allow_inf_nan=False, description="Score penalty magnitude")
    short: Optional[str] = Field(None, description="Human-readable note")

    @field_validator("aliases", mode="before")
    @classmethod
    def default_aliases(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("level", mode="before")
    @classmethod
    def default_level(cls, v: Any) -> Any:
        if v is None or v == "":
            return AdditiveLevel.AMBER.value
        if isinstance(v, AdditiveLevel):
            return v.value
        return v
