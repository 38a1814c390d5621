"""
Route-level session guard.

Two states, Anonymous and Authenticated:
1. No token cookie              -> Anonymous, no backend call
2. Token accepted by /v1/me     -> Authenticated, user kept for the request
   Token rejected               -> Anonymous, cookie cleared
3. Anonymous on a non-public path           -> redirect to the landing page
   Authenticated on a public-only path      -> redirect to the dashboard

The guard never touches the response itself. It returns a decision value
and the routing layer applies it.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from meter_access.client import SessionInvalid
from meter_access.config import Settings, get_settings
from meter_access.logging import get_access_logger, hash_token
from meter_access.models import ANONYMOUS, ErrorResponse, Session
from meter_access.resources import UserClient


REDIRECT_STATUS = 307


@dataclass(frozen=True)
class RoutePolicy:
    """
    Which paths skip the guard.

    public_paths / public_prefixes: reachable without a session.
    public_only_paths: make no sense once logged in (landing, log-in, ...).
    """
    public_paths: frozenset[str] = field(default_factory=frozenset)
    public_prefixes: tuple[str, ...] = ()
    public_only_paths: frozenset[str] = field(default_factory=frozenset)
    landing_path: str = "/"
    dashboard_path: str = "/dashboard"

    def is_public(self, path: str) -> bool:
        return path in self.public_paths or any(
            path.startswith(prefix) for prefix in self.public_prefixes
        )

    def is_public_only(self, path: str) -> bool:
        return path in self.public_only_paths


def default_policy(settings: Optional[Settings] = None) -> RoutePolicy:
    settings = settings or get_settings()
    public_only = frozenset({
        settings.landing_path,
        "/log-in",
        "/sign-up",
        "/recover-password",
    })
    return RoutePolicy(
        public_paths=public_only | {
            "/health",
            "/new-password",
            "/actions/new-password",
            "/actions/log-in",
        },
        public_prefixes=("/email-verification/",),
        public_only_paths=public_only,
        landing_path=settings.landing_path,
        dashboard_path=settings.dashboard_path,
    )


@dataclass(frozen=True)
class Proceed:
    session: Session
    clear_cookie: bool = False


@dataclass(frozen=True)
class Redirect:
    location: str
    status_code: int = REDIRECT_STATUS
    clear_cookie: bool = False


GuardDecision = Union[Proceed, Redirect]


class SessionGuard:
    """Decides, per incoming request, between proceeding and redirecting."""

    def __init__(self, users: UserClient, policy: Optional[RoutePolicy] = None) -> None:
        self._users = users
        self._policy = policy or default_policy()

    async def resolve_session(self, token: Optional[str]) -> Session:
        """
        Validate `token` against the backend.

        Raises SessionInvalid when the backend rejects a present token.
        """
        if not token:
            return ANONYMOUS

        logger = get_access_logger()
        result = await self._users.me(token)
        if isinstance(result, ErrorResponse) or not result.email:
            error = result if isinstance(result, ErrorResponse) else None
            code = error.code if error is not None else "MissingEmail"
            logger.log_session_invalid(token_hash=hash_token(token), code=code)
            raise SessionInvalid(error or ErrorResponse(code=code, message="User has no email"))

        logger.log_session_resolved(token_hash=hash_token(token), user_id=result.id)
        return Session(token=token, user=result)

    async def evaluate(self, path: str, token: Optional[str]) -> GuardDecision:
        try:
            session = await self.resolve_session(token)
        except SessionInvalid:
            session = ANONYMOUS

        if not session.is_authenticated:
            if self._policy.is_public(path):
                return Proceed(session, clear_cookie=True)
            return self._redirect(path, self._policy.landing_path, clear_cookie=True)

        if self._policy.is_public_only(path):
            return self._redirect(path, self._policy.dashboard_path, authenticated=True)
        return Proceed(session)

    def _redirect(
        self,
        path: str,
        location: str,
        clear_cookie: bool = False,
        authenticated: bool = False,
    ) -> Redirect:
        get_access_logger().log_guard_redirect(
            route=path,
            location=location,
            authenticated=authenticated,
        )
        return Redirect(location, REDIRECT_STATUS, clear_cookie=clear_cookie)
