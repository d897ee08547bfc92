"""Shared types, enums, and base models used across Real Landlording domain models."""

import math
from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps (SQLite drops tzinfo on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (86.5 -> 87)."""
    return math.floor(value + 0.5)


# --- Reusable annotated types ---

UTCTimestamp = Annotated[
    datetime, Field(description="UTC timezone-aware timestamp.")
]


# --- Shared enums ---


class VendorStatus(StrEnum):
    """Vendor lifecycle status."""

    PENDING_REVIEW = "pending_review"
    ACTIVE = "active"
    INACTIVE = "inactive"
    REJECTED = "rejected"


# --- Base model ---


class LandlordingBase(BaseModel):
    """Base model with common configuration for all Real Landlording Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
    }
