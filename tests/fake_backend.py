"""Fake metering backend and canned payloads shared by the tests."""

import json
from typing import Any, Callable, Optional

import httpx

VALID_TOKEN = "valid-session-token-0123456789"


class FakeBackend:
    """
    Route table of canned answers, recording every request it receives.

    Unknown routes answer 404 with a well-formed ErrorResponse.
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def on(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        *,
        json_body: Any = None,
        content: Optional[bytes] = None,
        exc: Optional[type[httpx.TransportError]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        def answer(request: httpx.Request) -> httpx.Response:
            if exc is not None:
                raise exc("backend unreachable", request=request)
            if content is not None:
                return httpx.Response(status_code, content=content, headers=headers)
            if json_body is not None:
                return httpx.Response(status_code, json=json_body)
            return httpx.Response(status_code)

        self._routes[(method, path)] = answer

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        answer = self._routes.get((request.method, request.url.path))
        if answer is None:
            return httpx.Response(
                404,
                json={"code": "NotFound", "message": "No such route", "data": ""},
            )
        return answer(request)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def json_of(request: httpx.Request) -> Any:
    return json.loads(request.content)


def meter_json(meter_id: str = "m1", status: str = "Active", name: str = "Kitchen") -> dict:
    return {
        "id": meter_id,
        "name": name,
        "owner_id": "u1",
        "status": status,
        "recorded_at": "2024-02-28T09:30:00",
    }


def user_json(email: str = "ana@example.com") -> dict:
    return {
        "id": "u1",
        "provider": "password",
        "name": "Ana",
        "email": email,
        "email_verified_at": "2024-01-02T03:04:05",
        "recorded_at": "2024-01-01T00:00:00",
    }


def validation_error_json(field: str = "name", issue: str = "Required") -> dict:
    return {
        "code": "ValidationError",
        "message": "Request data is invalid",
        "data": {"ValidationInfo": [{"field": field, "issue": issue}]},
    }


INTERNAL_ERROR_JSON = {
    "code": "InternalError",
    "message": "We made a mistake. Sorry",
    "data": "",
}
