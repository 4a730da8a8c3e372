import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from healthapproved.api import deps
from healthapproved.core.exceptions import InvalidInputError
from healthapproved.food_scoring.services import FoodScoringService
from healthapproved.schemas.submission import (
    AdditiveListResponse, EducationArticle, EducationResponse, SubmissionResponse
)
from healthapproved.services.submission_store import SubmissionStore

logger = logging.getLogger(__name__)

router = APIRouter()

EDUCATION_ARTICLES = [
    EducationArticle(
        id="label-basics",
        title="Label Reading Basics (India)",
        summary="Understand per 100g, serving size, and claims.",
    ),
    EducationArticle(
        id="oil-guide",
        title="Edible Oils: Refined vs Cold-Pressed",
        summary="Picking daily-use oils wisely.",
    ),
    EducationArticle(
        id="school-snacks",
        title="Smarter School Snacks",
        summary="Lower-sugar, whole-food swaps for tiffins.",
    ),
]


@router.get("/lookup")
async def lookup_product(
    gtin: Optional[str] = Query(None, description="Product barcode (GTIN)"),
    service: FoodScoringService = Depends(deps.get_scoring_service),
) -> Dict[str, Any]:
    """Resolve a barcode and return its health score, or status Unknown"""
    try:
        result = await service.lookup(gtin)
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.exception(f"Lookup failed for {gtin!r}")
        raise HTTPException(status_code=500, detail=f"lookup_failed: {e}")
    return result.to_payload()


@router.post("/submit", response_model=SubmissionResponse)
def submit_product(
    payload: Any = Body(None),
    store: SubmissionStore = Depends(deps.get_submission_store),
) -> Any:
    """Store a user-submitted product correction"""
    submission_id = store.append(payload)
    return SubmissionResponse(ok=True, submission_id=submission_id)


@router.get("/kb/additives", response_model=AdditiveListResponse)
def list_additives(
    service: FoodScoringService = Depends(deps.get_scoring_service),
) -> Any:
    """The additive knowledge base as stored"""
    return AdditiveListResponse(additives=service.list_additives())


@router.get("/education", response_model=EducationResponse)
def list_education() -> Any:
    return EducationResponse(articles=EDUCATION_ARTICLES)
