"""
Runtime configuration.

Every value comes from the environment so the same build can point at a
local backend or a deployed one.
"""

import functools
import os

from pydantic import BaseModel, ConfigDict, Field


BACKEND_URL = os.getenv("PUBLIC_BACKEND_URL", "http://localhost:3000")
AUTHORIZATION_COOKIE = os.getenv("AUTHORIZATION_COOKIE", "Authorization")
BACKEND_TIMEOUT_SECONDS = float(os.getenv("BACKEND_TIMEOUT_SECONDS", "10.0"))
LANDING_PATH = os.getenv("LANDING_PATH", "/")
DASHBOARD_PATH = os.getenv("DASHBOARD_PATH", "/dashboard")


class Settings(BaseModel):
    """Resolved settings shared by the clients, the guard and the app."""

    model_config = ConfigDict(frozen=True)

    backend_url: str = Field(..., min_length=1)
    authorization_cookie: str = Field(..., min_length=1)
    backend_timeout_seconds: float = Field(..., gt=0)
    landing_path: str = "/"
    dashboard_path: str = "/dashboard"


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get singleton settings instance."""
    return Settings(
        backend_url=os.getenv("PUBLIC_BACKEND_URL", BACKEND_URL),
        authorization_cookie=os.getenv("AUTHORIZATION_COOKIE", AUTHORIZATION_COOKIE),
        backend_timeout_seconds=float(
            os.getenv("BACKEND_TIMEOUT_SECONDS", str(BACKEND_TIMEOUT_SECONDS))
        ),
        landing_path=os.getenv("LANDING_PATH", LANDING_PATH),
        dashboard_path=os.getenv("DASHBOARD_PATH", DASHBOARD_PATH),
    )
