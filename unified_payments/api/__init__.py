"""
Unified Payments API Application Factory
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .deps import PaymentSystem, get_payment_system
from .accounts import router as accounts_router
from .transfers import router as transfers_router
from .transactions import router as transactions_router
from ..errors import (
    PaymentError, TransferValidationError, EndpointNotFoundError, InternalError
)
from ..logging_config import get_logger, log_action

logger = get_logger("payments.api")


def _error_response(error: PaymentError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_envelope())


def _error_field(loc) -> str:
    """Request field a validation error belongs to

    Union members and nested keys follow the field name in ``loc``, so the
    entry right after the request part is the field alias.
    """
    if len(loc) > 1 and loc[0] in ("body", "query", "path"):
        return str(loc[1])
    return str(loc[-1]) if loc else "body"


def create_app(system: Optional[PaymentSystem] = None) -> FastAPI:
    """Create and configure the FastAPI application"""
    system = system or PaymentSystem()

    app = FastAPI(
        title="Unified Payments API",
        description="Domestic and international transfer initiation",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.payment_system = system

    app.add_middleware(
        CORSMiddleware,
        allow_origins=system.config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PaymentError)
    async def payment_error_handler(request: Request, exc: PaymentError):
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = {}
        for error in exc.errors():
            field = _error_field(error.get("loc") or ())
            details.setdefault(field, error.get("msg", "Invalid value"))
        return _error_response(TransferValidationError(details=details))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return _error_response(EndpointNotFoundError())
        log_action(logger, "warning", f"HTTP error {exc.status_code}: {exc.detail}",
                   action="http_error", resource=request.url.path)
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail), "code": InternalError.code.value}
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        log_action(logger, "error", f"Unhandled error: {exc}",
                   action="unhandled_error", resource=request.url.path,
                   extra={"error_type": type(exc).__name__})
        return _error_response(InternalError())

    app.include_router(accounts_router, prefix="/api", tags=["Accounts"])
    app.include_router(transfers_router, prefix="/api", tags=["Transfers"])
    app.include_router(transactions_router, prefix="/api", tags=["Transactions"])

    # Health check endpoint
    @app.get("/api/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "server": system.config.server_name
        }

    return app


__all__ = ["create_app", "PaymentSystem", "get_payment_system"]
