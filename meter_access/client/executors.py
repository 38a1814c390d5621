"""
Authenticated clients for the two calling contexts.

Server context:
- The token is read once from the incoming request and injected
- get/post return the raw response; TransportError propagates

Browser context:
- The token is recovered from a CredentialProvider on every call
- get/post/put/delete always return `T | ErrorResponse` and never raise

Both implement RequestExecutor, the capability resource clients are
written against.
"""

from typing import Any, Mapping, Optional, Protocol, TypeVar, Union

import httpx

from meter_access.logging import get_access_logger
from meter_access.models import ErrorResponse

from .credentials import CredentialProvider
from .errors import TransportError
from .normalizer import normalize
from .transport import send

T = TypeVar("T")

Params = Optional[Mapping[str, Any]]


class RequestExecutor(Protocol):
    """
    What a resource client needs from an authenticated client.

    An explicit `token` overrides the executor's own way of finding one.
    The server context only authenticates GET: its POSTs (sign-up, log-in)
    are anonymous, and passing a `token` with one raises ValueError.
    """

    async def fetch(
        self,
        method: str,
        path: str,
        *,
        params: Params = None,
        body: Any = None,
        expected: Optional[type[T]] = None,
        token: Optional[str] = None,
    ) -> Union[T, ErrorResponse, None]:
        ...

    async def fetch_status(
        self,
        method: str,
        path: str,
        *,
        params: Params = None,
        token: Optional[str] = None,
    ) -> int:
        ...


def mutation_status(result: Any, route: Optional[str] = None) -> int:
    """
    Collapse a mutation result into 200, 400 or 500.

    No error code -> 200; InternalError -> 500; any other code -> 400.
    """
    if isinstance(result, ErrorResponse):
        status_code = 500 if result.is_internal else 400
        code: Optional[str] = result.code
    else:
        status_code = 200
        code = None

    if route is not None:
        get_access_logger().log_mutation_status(
            route=route,
            status_code=status_code,
            code=code,
        )
    return status_code


class ServerClient:
    """
    Server-context client.

    GET carries the token only when one is supplied, so anonymous reads
    (password recovery, email verification) work. POST is used for the
    anonymous sign-up and log-in calls and carries no token.
    """

    def __init__(self, http: httpx.AsyncClient, token: Optional[str] = None) -> None:
        self._http = http
        self.token = token

    async def get(
        self,
        path: str,
        token: Optional[str] = None,
        params: Params = None,
    ) -> httpx.Response:
        return await send(self._http, "GET", path, params=params, token=token)

    async def post(self, path: str, body: Any) -> httpx.Response:
        return await send(self._http, "POST", path, body=body)

    async def _raw(
        self,
        method: str,
        path: str,
        params: Params,
        body: Any,
        token: Optional[str],
    ) -> httpx.Response:
        if method == "GET":
            return await self.get(path, token or self.token, params)
        if method == "POST":
            if token is not None:
                raise ValueError("server context does not authenticate POST requests")
            return await self.post(path, body)
        raise ValueError(f"server context does not issue {method} requests")

    async def fetch(
        self,
        method: str,
        path: str,
        *,
        params: Params = None,
        body: Any = None,
        expected: Optional[type[T]] = None,
        token: Optional[str] = None,
    ) -> Union[T, ErrorResponse, None]:
        try:
            response: Optional[httpx.Response] = await self._raw(method, path, params, body, token)
        except TransportError:
            response = None
        return normalize(response, expected)

    async def fetch_status(
        self,
        method: str,
        path: str,
        *,
        params: Params = None,
        token: Optional[str] = None,
    ) -> int:
        try:
            response = await self._raw(method, path, params, None, token)
        except TransportError:
            return 500
        return response.status_code


class BrowserClient:
    """
    Browser-context client.

    Results are terminal: already normalized, ready to put in UI state.
    """

    def __init__(self, http: httpx.AsyncClient, credentials: CredentialProvider) -> None:
        self._http = http
        self._credentials = credentials

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Params = None,
        body: Any = None,
        expected: Optional[type[T]] = None,
        token: Optional[str] = None,
    ) -> Union[T, ErrorResponse, None]:
        try:
            response: Optional[httpx.Response] = await send(
                self._http,
                method,
                path,
                params=params,
                token=token or self._credentials.get_token(),
                body=body,
            )
        except TransportError:
            response = None
        return normalize(response, expected)

    async def get(
        self,
        path: str,
        *,
        params: Params = None,
        expected: Optional[type[T]] = None,
    ) -> Union[T, ErrorResponse, None]:
        return await self._request("GET", path, params=params, expected=expected)

    async def post(
        self,
        path: str,
        body: Any,
        *,
        expected: Optional[type[T]] = None,
    ) -> Union[T, ErrorResponse, None]:
        return await self._request("POST", path, body=body, expected=expected)

    async def put(
        self,
        path: str,
        body: Any,
        *,
        expected: Optional[type[T]] = None,
    ) -> Union[T, ErrorResponse, None]:
        return await self._request("PUT", path, body=body, expected=expected)

    async def delete(
        self,
        path: str,
        *,
        expected: Optional[type[T]] = None,
    ) -> Union[T, ErrorResponse, None]:
        return await self._request("DELETE", path, expected=expected)

    async def fetch(
        self,
        method: str,
        path: str,
        *,
        params: Params = None,
        body: Any = None,
        expected: Optional[type[T]] = None,
        token: Optional[str] = None,
    ) -> Union[T, ErrorResponse, None]:
        return await self._request(
            method,
            path,
            params=params,
            body=body,
            expected=expected,
            token=token,
        )

    async def fetch_status(
        self,
        method: str,
        path: str,
        *,
        params: Params = None,
        token: Optional[str] = None,
    ) -> int:
        try:
            response = await send(
                self._http,
                method,
                path,
                params=params,
                token=token or self._credentials.get_token(),
            )
        except TransportError:
            return 500
        return response.status_code
