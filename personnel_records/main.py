"""
Personnel Records FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from personnel_records.config import check_settings, get_settings
from personnel_records.logging_config import configure_logging
from personnel_records.api.health import router as health_router
from personnel_records.api.auth import router as auth_router
from personnel_records.api.user import router as user_router
from personnel_records.api.admin import router as admin_router
from personnel_records.api.records import router as records_router
from personnel_records.api.dashboard import router as dashboard_router
from personnel_records.api.uploads import router as uploads_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
check_settings(settings)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Personnel records with an admin-reviewed audit trail",
)

# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(user_router)
app.include_router(admin_router)
app.include_router(records_router)
app.include_router(dashboard_router)
app.include_router(uploads_router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures; never leak internals to the client."""
    logger.exception(
        "Unhandled error on %s %s", request.method, request.url.path
    )
    return JSONResponse(
        status_code=500, content={"detail": "Internal server error"}
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
