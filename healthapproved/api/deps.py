from healthapproved.food_scoring.services import FoodScoringService
from healthapproved.services.submission_store import SubmissionStore


def get_scoring_service() -> FoodScoringService:
    return FoodScoringService()


def get_submission_store() -> SubmissionStore:
    return SubmissionStore()
