"""
ASGI side of the session guard.

Runs the guard once per incoming request and applies its decision:
- Redirect: answer with a 307 before any route runs
- Proceed: expose the Session on request.state.session
- clear_cookie: unset the token cookie on whatever response goes out,
  unless the route itself just set a new one (log-in)
"""

from typing import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import RedirectResponse

from meter_access.auth import Redirect, SessionGuard, default_policy
from meter_access.client import ServerClient
from meter_access.config import get_settings
from meter_access.resources import UserClient


def _sets_cookie(response: Response, name: str) -> bool:
    return any(
        value.startswith(f"{name}=")
        for value in response.headers.getlist("set-cookie")
    )


async def session_guard_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    settings = get_settings()
    policy = getattr(request.app.state, "route_policy", None) or default_policy(settings)

    # The token is read from the cookie jar exactly once per request
    token = request.cookies.get(settings.authorization_cookie)
    guard = SessionGuard(UserClient(ServerClient(request.app.state.http)), policy)
    decision = await guard.evaluate(request.url.path, token)

    if isinstance(decision, Redirect):
        response: Response = RedirectResponse(
            decision.location,
            status_code=decision.status_code,
        )
    else:
        request.state.session = decision.session
        response = await call_next(request)

    if decision.clear_cookie and not _sets_cookie(response, settings.authorization_cookie):
        response.delete_cookie(settings.authorization_cookie, path="/")
    return response
