from __future__ import annotations

import json

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError

from .config import get_settings
from .logging_config import configure_logging, logger
from .routes import api_router
from .services.whatsapp import get_whatsapp_client
from .utils.responses import error_response


# Register global exception handlers for consistent error responses across the API
def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.debug("validation error", extra={"errors": exc.errors(), "path": str(request.url)})
        return error_response(
            "Invalid request",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=jsonable_errors(exc),
        )

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException):
        logger.debug(
            "http error",
            extra={"detail": exc.detail, "status": exc.status_code, "path": str(request.url)},
        )
        detail = exc.detail
        if not isinstance(detail, str):
            detail = json.dumps(detail)
        return error_response(detail, status_code=exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"path": str(request.url)})
        return error_response("Internal server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]


def create_app() -> FastAPI:
    configure_logging()
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url=settings.resolved_docs_url,
        redoc_url=None,
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.on_event("startup")
    # Surface missing configuration at boot instead of on the first webhook
    async def _report_configuration() -> None:
        if not settings.verify_token:
            logger.warning("VERIFY_TOKEN not set; webhook verification will be refused")
        if not settings.app_secret:
            logger.warning("APP_SECRET not set; webhook signatures will not be checked")
        if not settings.ui_auth_configured:
            logger.warning("UI_USER/UI_PASS not set; operator routes are disabled")
        logger.info(
            "inbox server ready",
            extra={"data_dir": str(settings.data_dir), "whatsapp_configured": settings.whatsapp_configured},
        )

    @app.on_event("shutdown")
    # Release the pooled Graph API connection
    async def _close_whatsapp_client() -> None:
        if not settings.whatsapp_configured:
            return
        client = get_whatsapp_client()
        if client is not None:
            await client.close()

    return app


app = create_app()


__all__ = ["app", "create_app"]
