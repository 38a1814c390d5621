from .access_logger import AccessLogger, FailureClass, get_access_logger, hash_token

__all__ = ["AccessLogger", "FailureClass", "get_access_logger", "hash_token"]
