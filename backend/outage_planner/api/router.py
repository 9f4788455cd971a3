from fastapi import APIRouter
from outage_planner.api.routers import auth, imports, requests

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(imports.router, prefix="/imports", tags=["imports"])
api_router.include_router(requests.router, prefix="/requests", tags=["requests"])
