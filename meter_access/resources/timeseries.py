"""Query shape for measurement series: granularity plus an optional anchor day."""

from datetime import date, datetime
from typing import Any, Optional, Union

from meter_access.models import SeriesGranularity


def anchor_date(day: date) -> str:
    """Bare calendar date, YYYY-MM-DD. A datetime loses its time of day."""
    if isinstance(day, datetime):
        day = day.date()
    return day.isoformat()


def measurement_params(
    granularity: Union[SeriesGranularity, str],
    day: Optional[date] = None,
) -> dict[str, Any]:
    """
    Query for a measurement series.

    Without `day` the backend picks its default (most recent) window, so
    the key is left out entirely.
    """
    params: dict[str, Any] = {"granularity": SeriesGranularity(granularity).value}
    if day is not None:
        params["day"] = anchor_date(day)
    return params
