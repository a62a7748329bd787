"""Main FastAPI application."""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from authcore.config import settings
from authcore.routers import auth
from authcore.schemas.common import ErrorDetail, ErrorResponse
from authcore.services.exceptions import AccountError

# Configure logging (verbose in development)
logging.basicConfig(
    level=logging.DEBUG if settings.is_development else getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Authcore API",
    description="User accounts, session tokens, password reset and BVN verification",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.is_development:

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request with status and duration (development only)."""
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f} ms"
        )
        return response


def _error_response(status_code: int, error: str, message: str, **kwargs) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, **kwargs)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(AccountError)
async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    """Render service errors as ``{success: false, error, message}``."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.kind}")
    return _error_response(exc.status_code, exc.kind, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures in the same shape as service errors."""
    details = [
        ErrorDetail(
            field=".".join(str(part) for part in error["loc"] if part != "body") or None,
            message=error["msg"],
        )
        for error in exc.errors()
    ]
    message = "; ".join(
        f"{detail.field}: {detail.message}" if detail.field else detail.message for detail in details
    )
    return _error_response(400, "validation_error", message or "Invalid input", details=details)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = "auth_error" if exc.status_code == 401 else "http_error"
    response = _error_response(exc.status_code, kind, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Authcore API", "version": "0.1.0", "status": "running"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(auth.router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, reload=True)
