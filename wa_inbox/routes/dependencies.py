from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from ..config import Settings, get_settings

_basic = HTTPBasic(realm="WhatsApp CS", auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": 'Basic realm="WhatsApp CS"'},
    )


# Guard operator routes (customers, send, media) with HTTP Basic auth
def require_operator(
    credentials: Optional[HTTPBasicCredentials] = Depends(_basic),
    settings: Settings = Depends(get_settings),
) -> str:
    if not settings.ui_auth_configured:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="UI auth not configured on server",
        )
    if credentials is None:
        raise _unauthorized()
    user_ok = secrets.compare_digest(credentials.username.encode("utf-8"), settings.ui_user.encode("utf-8"))
    pass_ok = secrets.compare_digest(credentials.password.encode("utf-8"), settings.ui_pass.encode("utf-8"))
    if not (user_ok and pass_ok):
        raise _unauthorized()
    return credentials.username


__all__ = ["require_operator"]
