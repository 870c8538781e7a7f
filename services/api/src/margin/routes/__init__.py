from fastapi import APIRouter

from services.api.src.margin.routes.margin_pools import router as margin_pools_router

api_router = APIRouter(prefix="/api")
api_router.include_router(margin_pools_router)

__all__ = ["api_router"]
