"""Itinerary Map API."""

from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from logging_config import quiet_noisy_loggers, setup_logging
from travel_map.orchestrate import MapOrchestrator
from web.config import settings
from web.routers import maps


def create_app(orchestrator: Optional[MapOrchestrator] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        orchestrator: Session orchestrator (a new one is created if None)

    Returns:
        FastAPI app with the orchestrator on app.state
    """
    app = FastAPI(
        title="Itinerary Map API",
        description="Turns a travel itinerary into a decorated, clickable map",
        version="0.1.0"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.orchestrator = orchestrator or MapOrchestrator()
    app.include_router(maps.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "itinerary-map-api"}

    return app


app = create_app()


if __name__ == "__main__":
    setup_logging("")
    quiet_noisy_loggers()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
