from __future__ import annotations

import platform

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ..config import VERSION_MARKER, Settings, get_settings
from ..models import HealthResponse, VersionResponse
from ..utils.timestamps import to_storage_timestamp, utc_now

router = APIRouter(tags=["meta"])


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "OK"


@router.get("/health", response_model=HealthResponse)
# Return service health status for monitoring and load balancers
def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        ok=True,
        service="wa-inbox",
        version=settings.app_version,
        whatsapp_configured=settings.whatsapp_configured,
    )


@router.get("/__version", response_model=VersionResponse)
# Deployment probe: confirms which build is answering
def version() -> VersionResponse:
    return VersionResponse(
        ts=to_storage_timestamp(utc_now()),
        marker=VERSION_MARKER,
        python=platform.python_version(),
    )


__all__ = ["router"]
