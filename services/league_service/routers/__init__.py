"""League service routers package."""

from services.league_service.routers.auth import router as auth_router
from services.league_service.routers.challenges import (
    challenge_router,
    reward_router,
)
from services.league_service.routers.events import router as events_router
from services.league_service.routers.gymnasts import router as gymnasts_router
from services.league_service.routers.gyms import router as gyms_router
from services.league_service.routers.leaderboard import router as leaderboard_router
from services.league_service.routers.registration import router as registration_router
from services.league_service.routers.roster import router as roster_router
from services.league_service.routers.scores import router as scores_router
from services.league_service.routers.users import router as users_router

__all__ = [
    "auth_router",
    "users_router",
    "gyms_router",
    "gymnasts_router",
    "registration_router",
    "roster_router",
    "events_router",
    "challenge_router",
    "reward_router",
    "scores_router",
    "leaderboard_router",
]
