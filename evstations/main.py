"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from evstations.api import auth, stations
from evstations.config import get_settings
from evstations.services.exceptions import ServiceError, UnauthorizedError, ValidationError

settings = get_settings()

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging()
    logger.info(f"Starting EV Station API ({settings.environment})")
    yield
    logger.info("Shutting down EV Station API")


app = FastAPI(
    title="EV Station API",
    description="User accounts and EV charging station management",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api-docs",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization", "x-auth-token"],
)

# Baseline hardening headers on every response
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Set security headers unless a handler already chose its own."""
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render schema validation failures as 400 with field-level messages."""
    errors = []
    for error in exc.errors():
        loc = [part for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        # Malformed JSON reports a byte offset, not a field name
        if not loc or (len(loc) == 1 and isinstance(loc[0], int)):
            field = None
        else:
            field = ".".join(str(part) for part in loc)
        errors.append({"field": field, "msg": error.get("msg")})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Translate domain exceptions into their HTTP status."""
    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=exc.status_code, content={"errors": exc.errors})

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Log unexpected failures and hide their details from the client."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Server error"}
    )


# Register routers
app.include_router(auth.router)
app.include_router(stations.router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness text."""
    return "API is running..."


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
