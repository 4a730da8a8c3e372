from typing import Any, Dict, List, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

from healthapproved.schemas.product import Product


class ScoreStatus(str, Enum):
    APPROVED = "Approved"
    CAUTION = "Caution"
    NOT_APPROVED = "Not Approved"
    UNKNOWN = "Unknown"


class Highlight(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    level: str  # red | amber | green
    note: str


class ScoreResult(BaseModel):
    score: int = Field(..., ge=0, le=100)
    status: ScoreStatus
    reasons: List[str] = Field(default_factory=list)
    highlights: List[Highlight] = Field(default_factory=list)


class LookupResponse(BaseModel):
    status: ScoreStatus
    score: Optional[ScoreResult] = None
    product: Optional[Product] = None

    @classmethod
    def unknown(cls) -> "LookupResponse":
        return cls(status=ScoreStatus.UNKNOWN, product=None)

    def to_payload(self) -> Dict[str, Any]:
        """JSON body; `score` is omitted for Unknown while `product` stays null."""
        exclude = {"score"} if self.score is None else None
        return self.model_dump(mode="json", exclude=exclude)
