"""
Failure taxonomy for backend access.

None of these escape the package: the normalizer turns the first three
into an ErrorResponse and the session guard consumes SessionInvalid.
"""

from typing import Optional

from meter_access.models import ErrorResponse


class AccessError(Exception):
    """Base class for backend access failures."""


class TransportError(AccessError):
    """No usable response was obtained (DNS, connection, timeout, undecodable body, unencodable token)."""

    def __init__(self, method: str, path: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"{method} {path} failed before a response was received")
        self.method = method
        self.path = path
        self.cause = cause


class ProtocolError(AccessError):
    """The backend answered non-2xx with a well-formed ErrorResponse."""

    def __init__(self, status_code: int, error: ErrorResponse) -> None:
        super().__init__(f"backend returned {status_code} {error.code}")
        self.status_code = status_code
        self.error = error


class MalformedResponseError(AccessError):
    """A body did not parse into the shape expected for its status."""

    def __init__(self, status_code: int, expected: str) -> None:
        super().__init__(f"{status_code} body is not a valid {expected}")
        self.status_code = status_code
        self.expected = expected


class SessionInvalid(AccessError):
    """A token was present but the backend rejected it."""

    def __init__(self, error: ErrorResponse) -> None:
        super().__init__(f"session rejected: {error.code}")
        self.error = error
