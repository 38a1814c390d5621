from .session import session_guard_middleware

__all__ = ["session_guard_middleware"]
