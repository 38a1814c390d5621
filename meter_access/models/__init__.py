from .requests import (
    CreateFluidMeterInput,
    LogInInput,
    NewPasswordInput,
    RecoverPasswordInput,
    SignUpUserInput,
)
from .responses import (
    Alert,
    AlertType,
    ErrorCode,
    ErrorResponse,
    FailedValidation,
    FluidMeter,
    FluidMeterAlerts,
    FluidMeterStatus,
    PaginatedResponse,
    Pagination,
    Series,
    SeriesGranularity,
    SeriesItem,
    SessionToken,
    User,
    UserAuthProvider,
    ValidationIssue,
    internal_error,
)
from .session import ANONYMOUS, Session

__all__ = [
    "CreateFluidMeterInput",
    "LogInInput",
    "NewPasswordInput",
    "RecoverPasswordInput",
    "SignUpUserInput",
    "Alert",
    "AlertType",
    "ErrorCode",
    "ErrorResponse",
    "FailedValidation",
    "FluidMeter",
    "FluidMeterAlerts",
    "FluidMeterStatus",
    "PaginatedResponse",
    "Pagination",
    "Series",
    "SeriesGranularity",
    "SeriesItem",
    "SessionToken",
    "User",
    "UserAuthProvider",
    "ValidationIssue",
    "internal_error",
    "ANONYMOUS",
    "Session",
]
