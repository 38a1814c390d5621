"""
Structured logging for backend access and session decisions.

Design principles:
- Every failure is logged before it is collapsed into an ErrorResponse
- Never log: raw tokens, request bodies, passwords
- Always log: token hash, route, failure classification
- Structured JSON format so failures can be grouped by class
"""

import functools
import hashlib
from enum import Enum
from typing import Any, Optional

import structlog


class FailureClass(str, Enum):
    """Failure classification for access events."""
    NONE = "NONE"
    TRANSPORT = "TRANSPORT"
    PROTOCOL = "PROTOCOL"
    MALFORMED = "MALFORMED"
    SESSION_INVALID = "SESSION_INVALID"


def hash_token(token: Optional[str]) -> str:
    """Short SHA-256 digest of a token, safe to put in a log line."""
    if not token:
        return "<anonymous>"
    return hashlib.sha256(token.encode()).hexdigest()[:16]


def _sanitize_for_log(value: Any, max_length: int = 100) -> str:
    """
    Sanitize value for safe logging.
    Prevents log injection and limits size.
    """
    if value is None:
        return "<none>"

    s = str(value)
    s = "".join(c if c.isprintable() and c not in "\n\r\t" else "?" for c in s)

    if len(s) > max_length:
        return s[:max_length] + "...<truncated>"
    return s


class AccessLogger:
    """
    Structured logger for calls to the metering backend.

    All methods produce JSON log lines keyed by event name, e.g.
    ``backend.request`` or ``session.invalid``.
    """

    def __init__(self) -> None:
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=True,
        )
        self._logger = structlog.get_logger("meter_access")

    def _log(
        self,
        level: str,
        event: str,
        failure_class: FailureClass = FailureClass.NONE,
        **kwargs: Any,
    ) -> None:
        sanitized = {
            k: _sanitize_for_log(v) if isinstance(v, str) else v
            for k, v in kwargs.items()
        }

        log_method = getattr(self._logger, level)
        log_method(
            event,
            failure_class=failure_class.value,
            **sanitized,
        )

    # ─── Backend Calls ───────────────────────────────────────────────────

    def log_backend_request(
        self,
        token_hash: str,
        method: str,
        route: str,
        status_code: int,
        duration_ms: float,
    ) -> None:
        """Log a completed backend call."""
        self._log(
            "info",
            "backend.request",
            token_hash=token_hash,
            method=method,
            route=route,
            status_code=status_code,
            duration_ms=round(duration_ms, 2),
        )

    def log_transport_failure(
        self,
        method: str,
        route: str,
        error_type: str,
    ) -> None:
        """Log a call that produced no response at all."""
        self._log(
            "error",
            "backend.transport_failure",
            failure_class=FailureClass.TRANSPORT,
            method=method,
            route=route,
            error_type=error_type,
        )

    def log_malformed_response(
        self,
        route: str,
        status_code: int,
        expected: str,
    ) -> None:
        """Log a body that did not parse into the expected shape."""
        self._log(
            "error",
            "backend.malformed_response",
            failure_class=FailureClass.MALFORMED,
            route=route,
            status_code=status_code,
            expected=expected,
        )

    def log_protocol_error(
        self,
        route: str,
        status_code: int,
        code: str,
    ) -> None:
        """Log a well-formed error answer from the backend."""
        self._log(
            "warning",
            "backend.protocol_error",
            failure_class=FailureClass.PROTOCOL,
            route=route,
            status_code=status_code,
            code=code,
        )

    # ─── Session Events ──────────────────────────────────────────────────

    def log_session_resolved(
        self,
        token_hash: str,
        user_id: str,
    ) -> None:
        """Log a token accepted by the backend."""
        self._log(
            "info",
            "session.resolved",
            token_hash=token_hash,
            user_id=user_id,
        )

    def log_session_invalid(
        self,
        token_hash: str,
        code: str,
    ) -> None:
        """Log a token rejected by the backend."""
        self._log(
            "warning",
            "session.invalid",
            failure_class=FailureClass.SESSION_INVALID,
            token_hash=token_hash,
            code=code,
        )

    def log_guard_redirect(
        self,
        route: str,
        location: str,
        authenticated: bool,
    ) -> None:
        """Log a redirect decided by the session guard."""
        self._log(
            "info",
            "guard.redirect",
            route=route,
            location=location,
            authenticated=authenticated,
        )

    # ─── Incoming Requests ───────────────────────────────────────────────

    def log_validation_failure(
        self,
        route: str,
        error_count: int,
        error_fields: list[str],
    ) -> None:
        """Log an action body rejected before any backend call."""
        self._log(
            "warning",
            "validation.failure",
            route=route,
            error_count=error_count,
            error_fields=error_fields,
        )

    # ─── Mutations ───────────────────────────────────────────────────────

    def log_mutation_status(
        self,
        route: str,
        status_code: int,
        code: Optional[str] = None,
    ) -> None:
        """Log the status a mutation was collapsed to."""
        self._log(
            "info" if status_code < 400 else "warning",
            "mutation.status",
            route=route,
            status_code=status_code,
            code=code,
        )


# Singleton instance
@functools.lru_cache(maxsize=1)
def get_access_logger() -> AccessLogger:
    """Get singleton access logger instance."""
    return AccessLogger()
