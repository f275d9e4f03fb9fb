"""Enums for the League Service models."""

import enum

from sqlalchemy import Enum as SAEnum


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    GYM_ADMIN = "gym_admin"
    COACH = "coach"
    GYMNAST = "gymnast"
    SPECTATOR = "spectator"


class GymnastLevel(str, enum.Enum):
    PRE_TEAM = "pre-team"
    LEVEL_3 = "3"
    LEVEL_4 = "4"
    LEVEL_5 = "5"
    LEVEL_6 = "6"
    LEVEL_7 = "7"
    LEVEL_8 = "8"
    LEVEL_9 = "9"
    LEVEL_10 = "10"


class GymnastType(str, enum.Enum):
    TEAM = "team"
    PRE_TEAM = "pre-team"
    NON_TEAM = "non-team"


class RegistrationStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RosterUploadStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class RedemptionStatus(str, enum.Enum):
    PENDING = "pending"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"


def db_enum(enum_cls, name: str):
    """Non-native enum column type, stored as VARCHAR on every backend."""
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=enum_values,
        validate_strings=True,
        native_enum=False,
        length=20,
    )
