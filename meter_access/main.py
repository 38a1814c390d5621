"""
Meter access application.

Wires together:
- One shared httpx client to the metering backend
- The session guard, run before every route
- Page loaders (server context) and actions (browser context)
- Sanitized ErrorResponse bodies for rejected action input
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from meter_access.auth import RoutePolicy
from meter_access.client import build_async_client
from meter_access.logging import get_access_logger
from meter_access.middleware import session_guard_middleware
from meter_access.models import ErrorCode, ErrorResponse, FailedValidation, ValidationIssue
from meter_access.routes import actions_router, pages_router


def _issue_for(error_type: str) -> ValidationIssue:
    if error_type == "missing":
        return ValidationIssue.REQUIRED
    if error_type.endswith("too_long"):
        return ValidationIssue.TOO_LARGE
    return ValidationIssue.INVALID


def create_app(
    http_client: Optional[httpx.AsyncClient] = None,
    route_policy: Optional[RoutePolicy] = None,
) -> FastAPI:
    """
    Build the application.

    Passing `http_client` lets tests point the app at a fake backend; when
    omitted the lifespan opens (and closes) a client from settings.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = app.state.http is None
        if owned:
            app.state.http = build_async_client()
        yield
        if owned:
            await app.state.http.aclose()
            app.state.http = None

    app = FastAPI(
        title="Meter Access",
        description="Authenticated data access and session guard for the fluid meter UI",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.http = http_client
    app.state.route_policy = route_policy

    # ─── Exception Handlers ──────────────────────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Answer rejected input in the backend's own error shape, so pages
        show field issues the same way whoever rejected the input.
        Values are never echoed back or logged.
        """
        errors = exc.errors()
        failures = [
            FailedValidation(
                field=".".join(str(loc) for loc in err.get("loc", [])[1:]) or "body",
                issue=_issue_for(err.get("type", "")),
            )
            for err in errors
        ]

        get_access_logger().log_validation_failure(
            route=request.url.path,
            error_count=len(errors),
            error_fields=[f.field for f in failures],
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ErrorResponse(
                code=ErrorCode.INVALID_INPUT.value,
                message="Request data is invalid",
                data=tuple(failures),
            ).model_dump(mode="json"),
        )

    # ─── Middleware ──────────────────────────────────────────────────────

    app.middleware("http")(session_guard_middleware)

    # ─── Routes ──────────────────────────────────────────────────────────

    app.include_router(pages_router)
    app.include_router(actions_router)

    @app.get("/health")
    async def health_check():
        """Liveness probe; no session required."""
        return {"status": "healthy"}

    return app


app = create_app()
