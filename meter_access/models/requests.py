"""
Request bodies sent to the metering backend.

Design principles:
- strict=True: No implicit type coercion
- extra="forbid": Reject unknown fields before they leave the process
- Upper length limits only; emptiness is reported by the backend so the
  caller gets the same field-level ValidationInfo as any other rejection
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ─── Strict String Types ─────────────────────────────────────────────────

ShortString = Annotated[str, Field(max_length=64)]
MediumString = Annotated[str, Field(max_length=256)]
LongString = Annotated[str, Field(max_length=1024)]
# CAPTCHA responses are long opaque blobs; only their presence is modeled here
CaptchaString = Annotated[str, Field(max_length=4096)]


# ─── Request Models ──────────────────────────────────────────────────────

class CreateFluidMeterInput(BaseModel):
    """Body of POST /v1/fluid-meter."""

    model_config = ConfigDict(
        strict=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    name: MediumString = Field(..., examples=["Kitchen sink", "Garden"])


class SignUpUserInput(BaseModel):
    """
    Body of POST /v1/sign-up.

    The captcha token is forwarded untouched; verifying it is the
    backend's job.
    """

    model_config = ConfigDict(
        strict=True,
        extra="forbid",
    )

    captcha: CaptchaString
    email: MediumString
    name: ShortString
    password: LongString

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class LogInInput(BaseModel):
    model_config = ConfigDict(
        strict=True,
        extra="forbid",
    )

    email: MediumString
    password: LongString

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class RecoverPasswordInput(BaseModel):
    model_config = ConfigDict(
        strict=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    email: MediumString


class NewPasswordInput(BaseModel):
    """Body of POST /v1/new-password; token comes from the recovery email."""

    model_config = ConfigDict(
        strict=True,
        extra="forbid",
    )

    token: LongString
    password: LongString
