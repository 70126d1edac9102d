from fastapi import APIRouter
from taskflow.api import health
from taskflow.features import timer

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health.router)
api_router.include_router(timer.router)
