# app/main.py

"""Blog Backend - Blog post management API with cover image uploads."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.configs import settings
from app.db import ping_db
from app.errors import (
    BlogValidationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    UploadError,
    blog_exception_handler,
    database_exception_handler,
    upload_exception_handler,
    validation_exception_handler,
)
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import blog_router
from app.schemas import HealthCheckResponse
from app.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog post management API",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

app.include_router(blog_router)

if settings.STORAGE_PROVIDER == "local":
    # Serves LocalStorage URLs (/uploads/blog_images/<file>)
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.UPLOADS_DIR, check_dir=False),
        name="uploads",
    )

errors = [
    (BlogValidationError, blog_exception_handler),
    (NotFoundError, blog_exception_handler),
    (ConflictError, blog_exception_handler),
    (UploadError, upload_exception_handler),
    (DatabaseError, database_exception_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "ok",
                        "version": "1.0.0",
                        "timestamp": "2025-01-01 00:00:00",
                        "database": "ok",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check() -> HealthCheckResponse:
    """
    Health check endpoint.

    Returns
    -------
    HealthCheckResponse
        Service version and database reachability.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"status": "ok", "version": "1.0.0", "timestamp": "...", "database": "ok"}
    """
    database_ok = await ping_db()

    return HealthCheckResponse(
        status="ok" if database_ok else "degraded",
        version=app.version,
        timestamp=today_str(),
        database="ok" if database_ok else "unavailable",
    )


if __name__ == "__main__":
    from uvicorn import run

    run("app.main:app", host="127.0.0.1", port=8000, log_level="info", reload=True)
