"""
Response models for the metering backend.

Design principles:
- Immutable value objects, created when a response is parsed
- Unknown fields are ignored so backend additions don't break parsing
- Enums carry stable string wire values, never ordinals
"""

from datetime import datetime
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

T = TypeVar("T")

INTERNAL_ERROR_CODE = "InternalError"
INTERNAL_ERROR_MESSAGE = "We encountered an error"


# ─── Enums ───────────────────────────────────────────────────────────────

class ErrorCode(str, Enum):
    """Error codes the backend is known to send."""
    INVALID_INPUT = "InvalidInput"
    INTERNAL_ERROR = "InternalError"
    VALIDATION_ERROR = "ValidationError"


class ValidationIssue(str, Enum):
    """Why a single input field was rejected."""
    INVALID = "Invalid"
    REQUIRED = "Required"
    TOO_LARGE = "TooLarge"
    TOO_FREQUENT = "TooFrequent"
    TOO_WEAK = "TooWeak"


class FluidMeterStatus(str, Enum):
    """
    Lifecycle of a meter.

    Inactive meters are still shown but never raise alarms; deleted meters
    are hidden. This layer transports the value and never filters on it.
    """
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    DELETED = "Deleted"


class UserAuthProvider(str, Enum):
    PASSWORD = "password"


class AlertType(str, Enum):
    CONSTANT_FLOW = "ConstantFlow"
    NOT_REPORTING = "NotReporting"


class SeriesGranularity(str, Enum):
    """Time bucket for a measurement series. Callers pick exactly one."""
    HOUR = "Hour"
    DAY = "Day"
    MONTH = "Month"


# ─── Errors ──────────────────────────────────────────────────────────────

class FailedValidation(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    field: str
    issue: ValidationIssue


class ErrorResponse(BaseModel):
    """
    Canonical failure shape for every operation in this package.

    The backend sends ``data`` either as ``""`` or as
    ``{"ValidationInfo": [{"field": ..., "issue": ...}]}``; both parse
    into a tuple of FailedValidation and serialize back to the wire form.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: str = Field(..., min_length=1, description="Error category")
    message: str = Field(..., description="Human-readable message")
    data: tuple[FailedValidation, ...] = ()

    @field_validator("data", mode="before")
    @classmethod
    def unwrap_validation_info(cls, v: Any) -> Any:
        if v is None or v == "":
            return ()
        if isinstance(v, dict):
            if set(v) != {"ValidationInfo"}:
                raise ValueError("data must be empty or hold ValidationInfo")
            return v["ValidationInfo"] or ()
        return v

    @field_serializer("data")
    def wrap_validation_info(self, data: tuple[FailedValidation, ...]) -> Any:
        if not data:
            return ""
        return {"ValidationInfo": [item.model_dump(mode="json") for item in data]}

    @property
    def issues(self) -> dict[str, ValidationIssue]:
        """Field name to issue kind, for showing next to form inputs."""
        return {item.field: item.issue for item in self.data}

    @property
    def is_internal(self) -> bool:
        return self.code == INTERNAL_ERROR_CODE


def internal_error() -> ErrorResponse:
    """The generic error every unrecoverable failure collapses to."""
    return ErrorResponse(code=INTERNAL_ERROR_CODE, message=INTERNAL_ERROR_MESSAGE)


# ─── Pagination ──────────────────────────────────────────────────────────

class Pagination(BaseModel):
    """Cursor continuation flags. Never a total count."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    has_more: bool
    has_less: bool


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of a list endpoint, items in backend order."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    items: list[T]
    pagination: Pagination


# ─── Time Series ─────────────────────────────────────────────────────────

class SeriesItem(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    period_start: datetime
    # Opaque on purpose: the backend owns unit and precision
    value: str


class Series(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    granularity: SeriesGranularity
    items: list[SeriesItem]


# ─── Entities ────────────────────────────────────────────────────────────

class FluidMeter(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    owner_id: str
    status: FluidMeterStatus
    recorded_at: datetime


class Alert(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    alert_type: AlertType


class FluidMeterAlerts(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    meter: FluidMeter
    alerts: list[Alert]


class User(BaseModel):
    """User data as returned by sign-up, log-in and /v1/me."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    provider: UserAuthProvider
    name: str
    email: str
    email_verified_at: Optional[datetime] = None
    recorded_at: datetime


class SessionToken(BaseModel):
    """Log-in reply carrying the token the session cookie should hold."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    token: str = Field(..., min_length=1)
