"""League Service models package.

Re-exports all models and enums so that:
  - ``from services.league_service.models import Gymnast`` works
  - Alembic env.py sees every table on import

Model definitions are split across:
  - models/user.py          - User and CoachAssociation
  - models/gym.py           - Gym
  - models/gymnast.py       - Gymnast and the shared applicant columns
  - models/registration.py  - RegistrationRequest and RosterUpload
  - models/events.py        - Event, EventSession, EventRegistration
  - models/gamification.py  - Challenge, Reward and their ledgers
  - models/scores.py        - Score
"""

from services.league_service.models.enums import (  # noqa: F401
    GymnastLevel,
    GymnastType,
    RedemptionStatus,
    RegistrationStatus,
    RosterUploadStatus,
    UserRole,
)
from services.league_service.models.events import (  # noqa: F401
    Event,
    EventRegistration,
    EventSession,
)
from services.league_service.models.gamification import (  # noqa: F401
    Challenge,
    ChallengeCompletion,
    Reward,
    RewardRedemption,
)
from services.league_service.models.gym import Gym  # noqa: F401
from services.league_service.models.gymnast import (  # noqa: F401
    APPLICANT_FIELDS,
    Gymnast,
)
from services.league_service.models.registration import (  # noqa: F401
    RegistrationRequest,
    RosterUpload,
)
from services.league_service.models.scores import Score  # noqa: F401
from services.league_service.models.user import CoachAssociation, User  # noqa: F401

__all__ = [
    "APPLICANT_FIELDS",
    "UserRole",
    "GymnastLevel",
    "GymnastType",
    "RegistrationStatus",
    "RosterUploadStatus",
    "RedemptionStatus",
    "User",
    "CoachAssociation",
    "Gym",
    "Gymnast",
    "RegistrationRequest",
    "RosterUpload",
    "Event",
    "EventSession",
    "EventRegistration",
    "Challenge",
    "ChallengeCompletion",
    "Reward",
    "RewardRedemption",
    "Score",
]
