from .session_guard import (
    GuardDecision,
    Proceed,
    Redirect,
    RoutePolicy,
    SessionGuard,
    default_policy,
)

__all__ = [
    "GuardDecision",
    "Proceed",
    "Redirect",
    "RoutePolicy",
    "SessionGuard",
    "default_policy",
]
