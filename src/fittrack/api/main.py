"""FastAPI application factory."""
from typing import Callable

from fastapi import FastAPI

from fittrack.api.routes import activities, tracking
from fittrack.tracking.engine import TrackingEngine


def create_app(engine_factory: Callable[[], TrackingEngine] = TrackingEngine) -> FastAPI:
    """
    Build and return the FastAPI app.

    The app owns exactly one TrackingEngine, kept on app.state. Tests pass an
    engine_factory that injects a fake clock.
    """
    app = FastAPI(
        title="Fittrack API",
        description="Live GPS activity tracking",
        version="0.1.0",
    )
    app.state.tracking_engine = engine_factory()

    app.include_router(tracking.router, prefix="/tracking", tags=["tracking"])
    app.include_router(activities.router, prefix="/activities", tags=["activities"])

    return app


# Module-level app instance for uvicorn
app = create_app()
