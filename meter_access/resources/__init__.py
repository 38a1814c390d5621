from .fluid_meter import FluidMeterClient
from .pagination import PAGE_SIZE, next_cursor, page_params
from .timeseries import anchor_date, measurement_params
from .user import UserClient

__all__ = [
    "FluidMeterClient",
    "PAGE_SIZE",
    "next_cursor",
    "page_params",
    "anchor_date",
    "measurement_params",
    "UserClient",
]
