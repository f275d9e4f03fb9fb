"""FastAPI application for the League Service."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from libs.common.config import get_settings
from libs.common.error_handler import add_exception_handlers
from libs.common.middleware import add_observability_middleware
from libs.common.rate_limit import limiter, rate_limit_exceeded_handler
from services.league_service.routers import (
    auth_router,
    challenge_router,
    events_router,
    gymnasts_router,
    gyms_router,
    leaderboard_router,
    registration_router,
    reward_router,
    roster_router,
    scores_router,
    users_router,
)
from slowapi.errors import RateLimitExceeded

API_PREFIX = "/api/v1"


def create_app() -> FastAPI:
    """Create and configure the League Service FastAPI app."""
    settings = get_settings()
    app = FastAPI(
        title="JGL League Service",
        version="0.1.0",
        description="Gym, gymnast, registration and event management for the "
        "Jewish Gymnastics League.",
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_observability_middleware(app)
    add_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "league"}

    for router in (
        auth_router,
        users_router,
        gyms_router,
        gymnasts_router,
        registration_router,
        roster_router,
        events_router,
        challenge_router,
        reward_router,
        scores_router,
        leaderboard_router,
    ):
        app.include_router(router, prefix=API_PREFIX)

    return app


app = create_app()
