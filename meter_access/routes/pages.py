"""
Page loaders (server context).

Each loader answers with the data a page needs, or an `error` entry the
page shows instead. The session guard has already run: private loaders
only see authenticated sessions.
"""

import asyncio
from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Depends

from meter_access.client import ServerClient
from meter_access.dependencies import get_server_client, get_session
from meter_access.models import ErrorResponse, SeriesGranularity, Session
from meter_access.resources import FluidMeterClient, UserClient


router = APIRouter(tags=["pages"])

NO_TOKEN = {"error": "No authorization token"}


def _dump(result: Any) -> Any:
    return result.model_dump(mode="json")


@router.get("/")
async def landing() -> dict:
    return {}


@router.get("/session")
async def current_session(session: Session = Depends(get_session)) -> dict:
    """The resolved user, if any. The token itself never leaves the server."""
    return {"user": _dump(session.user) if session.user else None}


@router.get("/dashboard")
async def dashboard(
    session: Session = Depends(get_session),
    server: ServerClient = Depends(get_server_client),
) -> dict:
    """First page of the user's meters."""
    if session.token is None:
        return NO_TOKEN

    meters = await FluidMeterClient(server).list()
    if isinstance(meters, ErrorResponse):
        return {"error": _dump(meters)}
    return {"meters": _dump(meters)}


@router.get("/meter/{meter_id}")
async def meter_detail(
    meter_id: str,
    granularity: SeriesGranularity = SeriesGranularity.DAY,
    day: Optional[date] = None,
    session: Session = Depends(get_session),
    server: ServerClient = Depends(get_server_client),
) -> dict:
    """
    Measurements and alerts for one meter.

    Both calls are issued together and joined; either leg may come back
    as an ErrorResponse without affecting the other.
    """
    if session.token is None:
        return NO_TOKEN

    meters = FluidMeterClient(server)
    series, alerts = await asyncio.gather(
        meters.get_measurements(meter_id, granularity, day),
        meters.get_alerts(meter_id),
    )
    return {
        "meter_id": meter_id,
        "series": _dump(series),
        "alerts": _dump(alerts),
    }


@router.get("/meter/{meter_id}/created")
async def meter_created(meter_id: str, name: Optional[str] = None) -> dict:
    return {"meter_id": meter_id, "meter_name": name}


@router.get("/email-verification/{token}")
async def email_verification(
    token: str,
    server: ServerClient = Depends(get_server_client),
) -> dict:
    """Backend status for the verification link; the page picks its message from it."""
    return {"status": await UserClient(server).verify_email(token)}
