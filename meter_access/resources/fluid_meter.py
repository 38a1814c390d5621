"""
Fluid meter operations.

Reads keep the full ErrorResponse; activate, deactivate and delete only
report 200, 400 or 500.
"""

from datetime import date
from typing import Optional, Union
from urllib.parse import quote

from meter_access.client import RequestExecutor, mutation_status
from meter_access.models import (
    CreateFluidMeterInput,
    ErrorResponse,
    FluidMeter,
    FluidMeterAlerts,
    PaginatedResponse,
    Series,
    SeriesGranularity,
)

from .pagination import page_params
from .timeseries import measurement_params

BASE_PATH = "/v1/fluid-meter"


def meter_path(meter_id: str, *suffix: str) -> str:
    return "/".join([BASE_PATH, quote(meter_id, safe=""), *suffix])


class FluidMeterClient:
    """Fluid meter endpoints over whichever executor the caller runs in."""

    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    async def list(
        self,
        cursor: Optional[str] = None,
    ) -> Union[PaginatedResponse[FluidMeter], ErrorResponse]:
        """One page of the current user's meters, in backend order."""
        return await self._executor.fetch(
            "GET",
            BASE_PATH,
            params=page_params(cursor),
            expected=PaginatedResponse[FluidMeter],
        )

    async def get(self, meter_id: str) -> Union[FluidMeter, ErrorResponse]:
        return await self._executor.fetch("GET", meter_path(meter_id), expected=FluidMeter)

    async def create(self, body: CreateFluidMeterInput) -> Union[FluidMeter, ErrorResponse]:
        return await self._executor.fetch("POST", BASE_PATH, body=body, expected=FluidMeter)

    async def _mutate(self, method: str, path: str) -> int:
        body = {} if method == "POST" else None
        result = await self._executor.fetch(method, path, body=body, expected=None)
        return mutation_status(result, route=path)

    async def activate(self, meter_id: str) -> int:
        return await self._mutate("POST", meter_path(meter_id, "activate"))

    async def deactivate(self, meter_id: str) -> int:
        return await self._mutate("POST", meter_path(meter_id, "deactivate"))

    async def delete(self, meter_id: str) -> int:
        return await self._mutate("DELETE", meter_path(meter_id))

    async def get_alerts(self, meter_id: str) -> Union[FluidMeterAlerts, ErrorResponse]:
        return await self._executor.fetch(
            "GET",
            meter_path(meter_id, "alert"),
            expected=FluidMeterAlerts,
        )

    async def get_measurements(
        self,
        meter_id: str,
        granularity: SeriesGranularity,
        day: Optional[date] = None,
    ) -> Union[Series, ErrorResponse]:
        """
        Measurement series for a meter.

        Non-2xx answers go through the same normalization as every other
        read: a parseable ErrorResponse is returned as is, anything else
        becomes InternalError.
        """
        return await self._executor.fetch(
            "GET",
            meter_path(meter_id, "measurement"),
            params=measurement_params(granularity, day),
            expected=Series,
        )
