from fastapi import APIRouter
from roster.api.v1.endpoints import roster

api_router = APIRouter()
api_router.include_router(roster.router, prefix="/roster", tags=["roster"])
