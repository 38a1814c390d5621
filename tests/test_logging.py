"""
Tests for access logging.

Verifies:
- Each failure is logged with its failure class before being collapsed
- Raw tokens never reach a log line
- Logged strings are sanitized against injection
"""

import httpx
import pytest
from structlog.testing import capture_logs

from meter_access.client import BrowserClient, StaticCredentials
from meter_access.logging import FailureClass, get_access_logger, hash_token
from meter_access.logging.access_logger import _sanitize_for_log
from meter_access.models import User

from fake_backend import VALID_TOKEN, FakeBackend, user_json


@pytest.fixture
def access_logger():
    """Configure the logger before capturing so capture_logs wins."""
    return get_access_logger()


def events(logs: list[dict], name: str) -> list[dict]:
    return [entry for entry in logs if entry["event"] == name]


class TestFailureClasses:
    @pytest.mark.asyncio
    async def test_transport_failure(
        self,
        access_logger,
        browser_client: BrowserClient,
        backend: FakeBackend,
    ):
        backend.on("GET", "/v1/me", exc=httpx.ConnectError)
        with capture_logs() as logs:
            await browser_client.get("/v1/me", expected=User)

        [entry] = events(logs, "backend.transport_failure")
        assert entry["failure_class"] == FailureClass.TRANSPORT.value
        assert entry["error_type"] == "ConnectError"
        assert entry["log_level"] == "error"

    @pytest.mark.asyncio
    async def test_malformed_response(
        self,
        access_logger,
        browser_client: BrowserClient,
        backend: FakeBackend,
    ):
        backend.on("GET", "/v1/me", status_code=502, content=b"<html></html>")
        with capture_logs() as logs:
            await browser_client.get("/v1/me", expected=User)

        [entry] = events(logs, "backend.malformed_response")
        assert entry["failure_class"] == "MALFORMED"
        assert entry["status_code"] == 502
        assert entry["expected"] == "ErrorResponse"

    @pytest.mark.asyncio
    async def test_protocol_error(
        self,
        access_logger,
        browser_client: BrowserClient,
        backend: FakeBackend,
    ):
        with capture_logs() as logs:
            await browser_client.get("/v1/nowhere", expected=User)

        [entry] = events(logs, "backend.protocol_error")
        assert entry["failure_class"] == "PROTOCOL"
        assert entry["code"] == "NotFound"


class TestTokenHygiene:
    @pytest.mark.asyncio
    async def test_token_is_hashed(
        self,
        access_logger,
        http_client: httpx.AsyncClient,
        backend: FakeBackend,
    ):
        backend.on("GET", "/v1/me", json_body=user_json())
        browser = BrowserClient(http_client, StaticCredentials(VALID_TOKEN))
        with capture_logs() as logs:
            await browser.get("/v1/me", expected=User)

        [entry] = events(logs, "backend.request")
        assert entry["token_hash"] == hash_token(VALID_TOKEN)
        assert VALID_TOKEN not in repr(logs)

    def test_anonymous_hash(self):
        assert hash_token(None) == "<anonymous>"
        assert hash_token("") == "<anonymous>"
        assert len(hash_token("abc")) == 16


class TestSanitization:
    def test_control_characters_replaced(self):
        assert _sanitize_for_log("/v1/me\nforged=1") == "/v1/me?forged=1"

    def test_truncated(self):
        assert _sanitize_for_log("a" * 150).endswith("...<truncated>")

    def test_logged_route_is_sanitized(self, access_logger):
        with capture_logs() as logs:
            access_logger.log_guard_redirect(route="/x\r\ny", location="/", authenticated=False)
        assert logs[0]["route"] == "/x??y"
