"""
Speedball Tracker - FastAPI server

Players, physical tests and test results with derived analytics
(age group, score aggregation, performance analysis).
All routes live under /api/v1.
"""
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .assessments import assessments_router
from .config import get_settings
from .errors import register_exception_handlers
from .health import router as health_router
from .logging_setup import configure_logging
from .players import players_router
from .results import results_router

API_PREFIX = "/api/v1"


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Speedball Tracker",
        description="Player testing and performance analytics API",
        version="1.0.0"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept", "Origin"],
    )

    register_exception_handlers(app)

    api = APIRouter(prefix=API_PREFIX)
    api.include_router(health_router)
    api.include_router(players_router)
    api.include_router(assessments_router)
    api.include_router(results_router)
    app.include_router(api)

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"Server started ({settings.environment}), health check: {API_PREFIX}/health")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Server stopped")

    return app


app = create_app()


# ==================== Run ====================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    configure_logging(settings)

    uvicorn.run(
        "app.server:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
        log_level="info"
    )
