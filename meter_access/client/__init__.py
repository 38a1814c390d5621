from .credentials import CookieCredentials, CredentialProvider, StaticCredentials
from .errors import (
    AccessError,
    MalformedResponseError,
    ProtocolError,
    SessionInvalid,
    TransportError,
)
from .executors import BrowserClient, RequestExecutor, ServerClient, mutation_status
from .normalizer import normalize, parse
from .transport import build_async_client, build_headers, send

__all__ = [
    "CookieCredentials",
    "CredentialProvider",
    "StaticCredentials",
    "AccessError",
    "MalformedResponseError",
    "ProtocolError",
    "SessionInvalid",
    "TransportError",
    "BrowserClient",
    "RequestExecutor",
    "ServerClient",
    "mutation_status",
    "normalize",
    "parse",
    "build_async_client",
    "build_headers",
    "send",
]
