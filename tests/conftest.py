from typing import Callable, List
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from artschool_signup.commonUtils.emailUtil import EmailNotifier
from artschool_signup.config.settings import EmailDispatchConfig
from artschool_signup.crud.signupService import SignupStoreClient
from artschool_signup.dependencies.signup_dependencies import (
    get_email_config,
    get_email_notifier,
    get_postmark_client,
    get_signup_store,
)
from artschool_signup.main import app

SEND_EMAIL_URL = "http://testserver/api/send-email"


class UpstreamRecorder:
    """httpx MockTransport handler that records every request it serves."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"MessageID": "abc-123", "ErrorCode": 0})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)


def _make_config(**overrides) -> EmailDispatchConfig:
    values = {
        "EMAIL_DRY_RUN": True,
        "POSTMARK_SERVER_TOKEN": None,
        "POSTMARK_FROM_EMAIL": None,
        "POSTMARK_API_URL": "https://api.postmarkapp.com/email",
        "EMAIL_TIMEOUT_SECONDS": 10.0,
    }
    values.update(overrides)
    return EmailDispatchConfig(**values)


@pytest.fixture
def live_config():
    return _make_config(
        EMAIL_DRY_RUN=False,
        POSTMARK_SERVER_TOKEN="server-token-123",
        POSTMARK_FROM_EMAIL="hello@gallagherartschool.com",
    )


@pytest.fixture
def upstream():
    return UpstreamRecorder()


@pytest_asyncio.fixture
async def upstream_client(upstream):
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as client:
        yield client


@pytest.fixture
def dispatch_config():
    """Mutable holder for the config the send-email route will see."""
    holder = {"config": _make_config()}
    app.dependency_overrides[get_email_config] = lambda: holder["config"]
    yield holder
    app.dependency_overrides.pop(get_email_config, None)


@pytest.fixture
def override_postmark_client(upstream_client):
    async def _client():
        yield upstream_client

    app.dependency_overrides[get_postmark_client] = _client
    yield upstream_client
    app.dependency_overrides.pop(get_postmark_client, None)


@pytest.fixture
def mock_store():
    store = MagicMock(spec=SignupStoreClient)
    store.insert_signup = AsyncMock(return_value=None)
    return store


@pytest.fixture
def email_endpoint():
    """Stand-in for the send-email endpoint as seen by the signup flow."""
    recorder = UpstreamRecorder()
    recorder.handler = lambda request: httpx.Response(
        200, json={"ok": True, "dryRun": True, "message": "Simulated send (Postmark not contacted)."}
    )
    return recorder


@pytest_asyncio.fixture
async def notifier(email_endpoint):
    async with httpx.AsyncClient(transport=httpx.MockTransport(email_endpoint)) as client:
        yield EmailNotifier(SEND_EMAIL_URL, timeout=5.0, client=client)


@pytest.fixture
def override_signup_dependencies(mock_store, notifier):
    app.dependency_overrides[get_signup_store] = lambda: mock_store
    app.dependency_overrides[get_email_notifier] = lambda: notifier
    yield
    app.dependency_overrides.pop(get_signup_store, None)
    app.dependency_overrides.pop(get_email_notifier, None)


@pytest_asyncio.fixture
async def api_client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def valid_draft_fields():
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "phone": "",
        "interests": ["Drawing", "Watercolor"],
        "availability": "Weeknights after 6pm",
        "notes": "",
        "experience_level": "",
    }


@pytest.fixture
def make_config():
    return _make_config
