"""
Outgoing request primitives.

One call to `send` is exactly one request against the backend: no
retries, no caching, no interpretation of the response.
"""

import time
from typing import Any, Mapping, Optional

import httpx
from pydantic import BaseModel

from meter_access.config import Settings, get_settings
from meter_access.logging import get_access_logger, hash_token

from .errors import TransportError


def build_async_client(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create the shared AsyncClient pointed at the backend.

    `transport` lets tests substitute an httpx.MockTransport.
    """
    settings = settings or get_settings()
    return httpx.AsyncClient(
        base_url=settings.backend_url,
        timeout=httpx.Timeout(settings.backend_timeout_seconds),
        transport=transport,
    )


def build_headers(token: Optional[str] = None, has_body: bool = False) -> dict[str, str]:
    """Accept is always JSON; Content-Type only accompanies a body."""
    headers = {"Accept": "application/json"}
    if has_body:
        headers["Content-Type"] = "application/json"
    if token:
        # Raw token, no scheme prefix
        headers["Authorization"] = token
    return headers


def _encode_body(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json")
    return body


async def send(
    http: httpx.AsyncClient,
    method: str,
    path: str,
    *,
    params: Optional[Mapping[str, Any]] = None,
    token: Optional[str] = None,
    body: Any = None,
) -> httpx.Response:
    """
    Perform one request and return the raw response.

    Raises TransportError when no usable response could be obtained: a
    network failure, a body httpx cannot decode, or a token that cannot
    be carried in a header. Query parameters whose value is None are
    dropped rather than sent empty.
    """
    logger = get_access_logger()
    query = {k: v for k, v in (params or {}).items() if v is not None}
    has_body = body is not None

    start_time = time.time()
    try:
        response = await http.request(
            method,
            path,
            params=query or None,
            headers=build_headers(token, has_body),
            json=_encode_body(body) if has_body else None,
        )
    except (httpx.RequestError, UnicodeEncodeError) as e:
        logger.log_transport_failure(
            method=method,
            route=path,
            error_type=type(e).__name__,
        )
        raise TransportError(method, path, cause=e) from e

    logger.log_backend_request(
        token_hash=hash_token(token),
        method=method,
        route=path,
        status_code=response.status_code,
        duration_ms=(time.time() - start_time) * 1000,
    )
    return response
