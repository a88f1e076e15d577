from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    ok: bool
    service: str
    version: str
    whatsapp_configured: bool = False


class VersionResponse(BaseModel):
    ok: bool = True
    ts: str
    marker: str
    python: str


class SendMessageRequest(BaseModel):
    to: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1, max_length=4096)


class SendMessageResponse(BaseModel):
    ok: bool = True
    message_id: Optional[str] = None
    provider_response: Dict[str, Any] = Field(default_factory=dict)
