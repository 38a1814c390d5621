"""
Token sources for the browser-context client.

The client asks its provider for a token on every call instead of reading
a cookie jar behind the caller's back, so tests can hand it a fixed token.
"""

from typing import Mapping, Optional, Protocol, runtime_checkable

from meter_access.config import get_settings


@runtime_checkable
class CredentialProvider(Protocol):
    def get_token(self) -> Optional[str]:
        """Return the current session token, or None when logged out."""
        ...


class CookieCredentials:
    """Reads the token from a cookie mapping (request cookies, a jar, ...)."""

    def __init__(self, cookies: Mapping[str, str], cookie_name: Optional[str] = None) -> None:
        self._cookies = cookies
        self._cookie_name = cookie_name or get_settings().authorization_cookie

    def get_token(self) -> Optional[str]:
        return self._cookies.get(self._cookie_name) or None


class StaticCredentials:
    def __init__(self, token: Optional[str]) -> None:
        self._token = token

    def get_token(self) -> Optional[str]:
        return self._token
