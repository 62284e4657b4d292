"""
API Router - Main API routing configuration
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from moviepin.api.endpoints import movies
from moviepin.core.logging import get_logger

logger = get_logger(__name__)

# Create main API router
api_router = APIRouter()

# ==========================================
# HEALTH AND STATUS ENDPOINTS
# ==========================================

@api_router.get("/health")
async def health_check(request: Request):
    """API health check endpoint"""

    settings = request.app.state.settings
    database = request.app.state.database

    if database is None:
        database_status = {"status": "unavailable", "checks": {}}
    else:
        database_status = await database.check_health()

    healthy = database_status["status"] != "unhealthy"

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "services": {"database": database_status},
        },
    )

# ==========================================
# INCLUDE ENDPOINT ROUTERS
# ==========================================

api_router.include_router(
    movies.router,
    prefix="/movies",
    tags=["movies"],
)
