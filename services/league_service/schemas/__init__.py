"""League Service schemas package.

Re-exports all schemas so that routers use a single import namespace:
``from services.league_service.schemas import GymResponse``.
"""

from services.league_service.schemas.event import (  # noqa: F401
    EventCreate,
    EventRegistrationCreate,
    EventRegistrationResponse,
    EventResponse,
    EventSessionCreate,
    EventSessionResponse,
)
from services.league_service.schemas.gamification import (  # noqa: F401
    ChallengeCompletionResponse,
    ChallengeCreate,
    ChallengeResponse,
    RedemptionResponse,
    RewardCreate,
    RewardResponse,
)
from services.league_service.schemas.gym import (  # noqa: F401
    CoachAssociationCreate,
    CoachAssociationResponse,
    GymApprovalUpdate,
    GymCreate,
    GymPaymentUpdate,
    GymResponse,
    GymSelfRegistrationUpdate,
)
from services.league_service.schemas.gymnast import (  # noqa: F401
    ApplicantFields,
    GymnastApprovalUpdate,
    GymnastCreate,
    GymnastResponse,
    PointsAdjustment,
)
from services.league_service.schemas.leaderboard import LeaderboardEntry  # noqa: F401
from services.league_service.schemas.registration import (  # noqa: F401
    RegistrationApprovalResponse,
    RegistrationReject,
    RegistrationRequestCreate,
    RegistrationRequestResponse,
)
from services.league_service.schemas.roster import (  # noqa: F401
    RosterProcessRequest,
    RosterProcessResult,
    RosterRow,
    RosterRowError,
    RosterUploadCreate,
    RosterUploadResponse,
)
from services.league_service.schemas.score import (  # noqa: F401
    ScoreCreate,
    ScoreResponse,
)
from services.league_service.schemas.user import (  # noqa: F401
    ProfileResponse,
    RoleUpdate,
    UserCreate,
    UserResponse,
)
