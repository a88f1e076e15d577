from __future__ import annotations

from fastapi import APIRouter

from .customers import router as customers_router
from .media import router as media_router
from .meta import router as meta_router
from .send import router as send_router
from .webhook import router as webhook_router

api_router = APIRouter()
api_router.include_router(meta_router)
api_router.include_router(webhook_router)
api_router.include_router(customers_router)
api_router.include_router(send_router)
api_router.include_router(media_router)

__all__ = ["api_router"]
