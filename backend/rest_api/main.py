"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI

from rest_api.core import (
    configure_cors,
    lifespan,
    register_exception_handlers,
    register_middlewares,
)
from rest_api.routers import (
    analytics_router,
    dashboard_router,
    health_router,
    reports_router,
    restaurants_router,
)
from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware


app = FastAPI(
    title="POS Reporting API",
    description="Tenant-scoped dashboard metrics, end-of-day reports and sales analytics",
    version="0.1.0",
    lifespan=lifespan,
)

# Middleware order: last added runs first, so correlation ids wrap everything
register_middlewares(app)
configure_cors(app)
app.add_middleware(CorrelationIdMiddleware)

register_exception_handlers(app)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(dashboard_router)
app.include_router(reports_router)
app.include_router(analytics_router)
app.include_router(restaurants_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=settings.environment == "development",
    )
