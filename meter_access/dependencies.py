"""
FastAPI dependencies wiring the request to the two client contexts.
"""

import httpx
from fastapi import Depends, Request

from meter_access.client import BrowserClient, CookieCredentials, ServerClient
from meter_access.models import ANONYMOUS, Session


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http


def get_session(request: Request) -> Session:
    """Session resolved by the guard middleware, anonymous if none ran."""
    return getattr(request.state, "session", ANONYMOUS)


def get_server_client(
    http: httpx.AsyncClient = Depends(get_http_client),
    session: Session = Depends(get_session),
) -> ServerClient:
    """Server context: reuse the token the guard already read and validated."""
    return ServerClient(http, token=session.token)


def get_browser_client(
    request: Request,
    http: httpx.AsyncClient = Depends(get_http_client),
) -> BrowserClient:
    """Browser context: the client recovers the token from the cookies itself."""
    return BrowserClient(http, CookieCredentials(request.cookies))
