from fastapi import APIRouter
from app.api.v1.endpoints import donors, eligibility

api_router = APIRouter()

api_router.include_router(donors.router, prefix="/donors", tags=["donors"])
api_router.include_router(eligibility.router, prefix="/eligibility", tags=["eligibility"])
