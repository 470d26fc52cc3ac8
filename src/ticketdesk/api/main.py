import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ticketdesk.config import settings
from ticketdesk.exceptions import ConfigError, TicketDeskError
from ticketdesk.api.middleware import add_request_id, log_requests
from ticketdesk.api import deps
from ticketdesk.services.form_session import FormSession

# Routers
from ticketdesk.api.routers import system, tickets

# Configure logging
logging.basicConfig(level=getattr(logging, settings.logging.level.upper(), logging.INFO))
logger = logging.getLogger("ticketdesk.api")

def create_app(session: Optional[FormSession] = None) -> FastAPI:
    """
    Factory to build the FastAPI application.
    Passing a session replaces the settings-built one (used by tests with fake transports).
    """
    if session is not None:
        deps.set_session(session)

    app = FastAPI(title="TicketDesk API", version=settings.app.version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(add_request_id)
    if settings.logging.log_requests:
        app.middleware("http")(log_requests)

    app.include_router(system.router)
    app.include_router(tickets.router)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        if isinstance(exc, StarletteHTTPException):
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

        rid = getattr(request.state, "request_id", None)
        logger.exception("Unhandled error", extra={"path": str(request.url), "request_id": rid})
        payload = {"error": "internal_error", "detail": "Unexpected server error"}
        if rid:
            payload["request_id"] = rid
        return JSONResponse(status_code=500, content=payload)

    @app.exception_handler(ConfigError)
    async def config_exception_handler(request: Request, exc: ConfigError):
        rid = getattr(request.state, "request_id", None)
        payload = {"error": "not_configured", "detail": str(exc)}
        if rid:
            payload["request_id"] = rid
        return JSONResponse(status_code=503, content=payload)

    @app.exception_handler(TicketDeskError)
    async def backend_exception_handler(request: Request, exc: TicketDeskError):
        rid = getattr(request.state, "request_id", None)
        payload = {"error": "backend_error", "detail": str(exc)}
        if rid:
            payload["request_id"] = rid
        return JSONResponse(status_code=502, content=payload)

    return app

# Module-level app for uvicorn entrypoint
app = create_app()
