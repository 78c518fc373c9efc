# routers/__init__.py

from fastapi import APIRouter

from .access import router as access_router
from .health import router as health_router


# Master router for embedding the access API in another app
api_router = APIRouter()

api_router.include_router(access_router)
api_router.include_router(health_router)

__all__ = ["api_router"]
