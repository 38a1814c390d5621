"""
User account operations.

Password recovery and email verification are anonymous and report the
backend's own status code; log-out and new-password are mutations and
report 200, 400 or 500.
"""

from typing import Union

from meter_access.client import RequestExecutor, mutation_status
from meter_access.models import (
    ErrorResponse,
    LogInInput,
    NewPasswordInput,
    RecoverPasswordInput,
    SessionToken,
    SignUpUserInput,
    User,
)


class UserClient:
    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    async def sign_up(self, body: SignUpUserInput) -> Union[User, ErrorResponse]:
        return await self._executor.fetch("POST", "/v1/sign-up", body=body, expected=User)

    async def log_in(self, body: LogInInput) -> Union[SessionToken, User, ErrorResponse]:
        """
        Exchange credentials for a session.

        The backend answers with the session token; a reply shaped as the
        User is accepted too.
        """
        return await self._executor.fetch(
            "POST",
            "/v1/log-in",
            body=body,
            expected=Union[SessionToken, User],
        )

    async def recover_password(self, body: RecoverPasswordInput) -> int:
        return await self._executor.fetch_status(
            "GET",
            "/v1/recover-password",
            params={"email": body.email},
        )

    async def verify_email(self, token: str) -> int:
        return await self._executor.fetch_status(
            "GET",
            "/v1/email-verification",
            params={"token": token},
        )

    async def me(self, token: str) -> Union[User, ErrorResponse]:
        """The user owning `token`, or the backend's reason for rejecting it."""
        return await self._executor.fetch("GET", "/v1/me", expected=User, token=token)

    async def log_out(self) -> int:
        result = await self._executor.fetch("POST", "/v1/log-out", body={}, expected=None)
        return mutation_status(result, route="/v1/log-out")

    async def set_new_password(self, body: NewPasswordInput) -> int:
        result = await self._executor.fetch("POST", "/v1/new-password", body=body, expected=None)
        return mutation_status(result, route="/v1/new-password")
