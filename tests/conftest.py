"""Shared fixtures: a fake Calendar API behind httpx.MockTransport."""

import httpx
import pytest

from calendar_api import CalendarClient, ClientConfig


class FakeCredentials:
    """Stands in for google-auth credentials; records every signed request."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def before_request(self, request, method, url, headers):
        self.calls.append((method, url))
        if self.error is not None:
            raise self.error
        headers["authorization"] = "Bearer test-token"


class FakeCalendarApi:
    """Queue of canned responses; records the requests it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response | Exception] = []

    def respond(self, status_code: int, **kwargs) -> None:
        self.responses.append(httpx.Response(status_code, **kwargs))

    def fail(self, error: Exception) -> None:
        self.responses.append(error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def config():
    """A config with a key file that is never read."""
    return ClientConfig(
        service_account_email="booking@test-project.iam.gserviceaccount.com",
        key_file="service_account_key.json",
        timezone="Asia/Singapore",
    )


@pytest.fixture
def api():
    return FakeCalendarApi()


@pytest.fixture
def credentials():
    return FakeCredentials()


@pytest.fixture
def client(config, api, credentials):
    """A CalendarClient wired to the fake API with fake credentials."""
    calendar_client = CalendarClient(config, transport=httpx.MockTransport(api.handler))
    calendar_client._signer._credentials = credentials
    yield calendar_client
    calendar_client.close()
