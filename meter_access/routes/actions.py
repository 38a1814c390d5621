"""
User-triggered actions (browser context).

The token comes from the caller's cookies on every call. Mutations answer
with `{"status": 200 | 400 | 500}`; reads answer with the parsed value or
the ErrorResponse.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Response

from meter_access.client import BrowserClient, mutation_status
from meter_access.config import get_settings
from meter_access.dependencies import get_browser_client
from meter_access.models import (
    CreateFluidMeterInput,
    ErrorResponse,
    LogInInput,
    NewPasswordInput,
    SeriesGranularity,
    SessionToken,
)
from meter_access.resources import FluidMeterClient, UserClient


router = APIRouter(prefix="/actions", tags=["actions"])


@router.get("/fluid-meter")
async def list_fluid_meters(
    cursor: Optional[str] = None,
    browser: BrowserClient = Depends(get_browser_client),
) -> dict:
    """Page of meters continuing after `cursor`."""
    page = await FluidMeterClient(browser).list(cursor)
    return page.model_dump(mode="json")


@router.post("/fluid-meter")
async def create_fluid_meter(
    body: CreateFluidMeterInput,
    browser: BrowserClient = Depends(get_browser_client),
) -> dict:
    meter = await FluidMeterClient(browser).create(body)
    return meter.model_dump(mode="json")


@router.post("/fluid-meter/{meter_id}/activate")
async def activate_fluid_meter(
    meter_id: str,
    browser: BrowserClient = Depends(get_browser_client),
) -> dict:
    return {"status": await FluidMeterClient(browser).activate(meter_id)}


@router.post("/fluid-meter/{meter_id}/deactivate")
async def deactivate_fluid_meter(
    meter_id: str,
    browser: BrowserClient = Depends(get_browser_client),
) -> dict:
    return {"status": await FluidMeterClient(browser).deactivate(meter_id)}


@router.delete("/fluid-meter/{meter_id}")
async def delete_fluid_meter(
    meter_id: str,
    browser: BrowserClient = Depends(get_browser_client),
) -> dict:
    return {"status": await FluidMeterClient(browser).delete(meter_id)}


@router.get("/fluid-meter/{meter_id}/measurement")
async def fluid_meter_measurements(
    meter_id: str,
    granularity: SeriesGranularity,
    day: Optional[date] = None,
    browser: BrowserClient = Depends(get_browser_client),
) -> dict:
    series = await FluidMeterClient(browser).get_measurements(meter_id, granularity, day)
    return series.model_dump(mode="json")


@router.post("/log-in")
async def log_in(
    body: LogInInput,
    response: Response,
    browser: BrowserClient = Depends(get_browser_client),
) -> dict:
    """Store the session token in the cookie; failures come back with their field issues."""
    result = await UserClient(browser).log_in(body)
    if isinstance(result, ErrorResponse):
        return {"status": mutation_status(result), "error": result.model_dump(mode="json")}
    if isinstance(result, SessionToken):
        response.set_cookie(
            get_settings().authorization_cookie,
            result.token,
            path="/",
            httponly=True,
            samesite="lax",
        )
    return {"status": 200}


@router.post("/log-out")
async def log_out(
    response: Response,
    browser: BrowserClient = Depends(get_browser_client),
) -> dict:
    status_code = await UserClient(browser).log_out()
    if status_code == 200:
        response.delete_cookie(get_settings().authorization_cookie, path="/")
    return {"status": status_code}


@router.post("/new-password")
async def new_password(
    body: NewPasswordInput,
    browser: BrowserClient = Depends(get_browser_client),
) -> dict:
    return {"status": await UserClient(browser).set_new_password(body)}
