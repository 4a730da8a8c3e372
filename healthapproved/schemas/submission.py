from typing import Any, List
from pydantic import BaseModel


class SubmissionResponse(BaseModel):
    ok: bool = True
    submission_id: int


class AdditiveListResponse(BaseModel):
    additives: List[Any]


class EducationArticle(BaseModel):
    id: str
    title: str
    lang: str = "en"
    summary: str


class EducationResponse(BaseModel):
    articles: List[EducationArticle]
