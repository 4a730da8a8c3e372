from fastapi import APIRouter

from healthapproved.api.v1.endpoints import health_approved

api_router = APIRouter()

api_router.include_router(health_approved.router, prefix="/health-approved", tags=["health-approved"])
