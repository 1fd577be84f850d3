from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from qrlink_app.config import settings
from qrlink_app.logging_config import setup_logging, get_logger
from qrlink_app.database.connection import engine, Base, check_connection
from qrlink_app.dependencies import get_image_store
from qrlink_app.errors import QRLinkError
from qrlink_app.middleware import ErrorBoundaryMiddleware, LoggingMiddleware
from qrlink_app.api import web, redirect
from qrlink_app.api.v1 import links, qrcodes

# Import models to ensure they're registered with Base
from qrlink_app.models import ShortLink, QRCode

setup_logging(settings.log_level, settings.log_file)
logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Fail fast if the database is unreachable; otherwise create tables and
    the content directory.
    """
    try:
        check_connection(engine)
    except Exception:
        logger.critical(f"Database not reachable at startup ({engine.url.render_as_string()})")
        raise
    Base.metadata.create_all(bind=engine)
    get_image_store().ensure_content_dir()
    logger.info(f"{settings.app_name} {settings.app_version} started ({settings.environment})")
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Shortens URLs and generates QR codes for them",
    debug=settings.debug,
    lifespan=lifespan
)

# Last added runs first: logging wraps the error boundary
app.add_middleware(ErrorBoundaryMiddleware)
app.add_middleware(LoggingMiddleware)


@app.exception_handler(QRLinkError)
async def qrlink_error_handler(request: Request, exc: QRLinkError):
    """Map service errors to their status with a generic message"""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
    else:
        logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
    return PlainTextResponse(exc.public_message, status_code=exc.status_code)


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
app.include_router(web.router)
app.include_router(links.router, prefix="/api/v1")
app.include_router(qrcodes.router, prefix="/api/v1")
# Catch-all /{short_link} goes last
app.include_router(redirect.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
