from __future__ import annotations

import logging
import uuid

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from geocell import __version__
from geocell.api.router import api_router
from geocell.core.errors import APIError, make_error_payload
from geocell.core.logging import configure_logging
from geocell.core.settings import get_settings


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(title="geocell API", version=__version__)

    def _with_trace_id_header(
        headers: dict[str, str] | None, trace_id: str | None
    ) -> dict[str, str] | None:
        """Return headers merged with X-Trace-Id when trace_id is present."""

        if not trace_id:
            return headers
        merged: dict[str, str] = dict(headers or {})
        merged["X-Trace-Id"] = trace_id
        return merged

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_allow_origin],
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def _trace_id_middleware(request, call_next):
        trace_id = request.headers.get("X-Trace-Id") or str(uuid.uuid4())
        request.state.trace_id = trace_id
        response = await call_next(request)
        response.headers["X-Trace-Id"] = trace_id
        return response

    @app.exception_handler(APIError)
    async def _api_error_handler(request, exc: APIError):
        trace_id = getattr(request.state, "trace_id", None)
        return JSONResponse(
            status_code=exc.status_code,
            headers=_with_trace_id_header(None, trace_id),
            content=make_error_payload(
                code=exc.code,
                message=exc.message,
                trace_id=trace_id,
                details=exc.details,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request, exc: RequestValidationError):
        trace_id = getattr(request.state, "trace_id", None)
        return JSONResponse(
            status_code=422,
            headers=_with_trace_id_header(None, trace_id),
            content=make_error_payload(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                trace_id=trace_id,
                details=jsonable_errors(exc),
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error_handler(request, exc: StarletteHTTPException):
        trace_id = getattr(request.state, "trace_id", None)
        return JSONResponse(
            status_code=exc.status_code,
            headers=_with_trace_id_header(None, trace_id),
            content=make_error_payload(
                code="HTTP_ERROR",
                message=exc.detail if isinstance(exc.detail, str) else "HTTP error",
                trace_id=trace_id,
                details=None,
            ),
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request, exc: Exception):
        trace_id = getattr(request.state, "trace_id", None)
        method = getattr(request, "method", None)
        path = getattr(getattr(request, "url", None), "path", None)
        logger.error(
            "Unhandled exception (trace_id=%s method=%s path=%s)",
            trace_id,
            method,
            path,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return JSONResponse(
            status_code=500,
            headers=_with_trace_id_header(None, trace_id),
            content=make_error_payload(
                code="INTERNAL_ERROR",
                message="Internal error",
                trace_id=trace_id,
                details=None,
            ),
        )

    app.include_router(api_router)

    logger.info(
        "geocell API ready (default_precision=%s cache_enabled=%s)",
        settings.default_precision,
        settings.encode_cache_enabled,
    )
    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, object]]:
    # Pydantic may put non-JSON values (e.g. exceptions) under "ctx".
    out: list[dict[str, object]] = []
    for err in exc.errors():
        item = {k: v for k, v in err.items() if k != "ctx"}
        out.append(item)
    return out


app = create_app()
