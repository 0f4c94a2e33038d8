import base64

import pytest
from prometheus_client import CollectorRegistry, Counter
from starlette.requests import Request

from configs.settings import get_settings
from models.models import CredentialPair

SETTINGS_VARIABLES = [
    "AUTH_FILE",
    "HTTP_AUTH",
    "METRICS_PATH",
    "METRICS_ERROR_HANDLING",
    "HOST",
    "PORT",
    "ROOT_PATH",
    "GIT_COMMIT_HASH",
    "VERSION",
    "SENTRY_DSN",
    "DOTENV_FILE_LOCATION",
]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    # Don't let the environment of whoever runs the tests leak into the settings
    for var in SETTINGS_VARIABLES:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def registry():
    registry = CollectorRegistry()
    counter = Counter("test_scrapes", "Scrapes seen by the test", registry=registry)
    counter.inc()
    return registry


@pytest.fixture
def credentials():
    return CredentialPair(username="alice", password="secret")


@pytest.fixture
def basic_auth():
    def header(username: str, password: str) -> dict:
        token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
        return {"Authorization": f"Basic {token}"}

    return header


@pytest.fixture
def auth_file(tmp_path):
    def write(contents: str) -> str:
        path = tmp_path / "auth.yml"
        path.write_text(contents)
        return str(path)

    return write


@pytest.fixture
def make_request():
    def build(headers: dict = None) -> Request:
        scope = {
            "type": "http",
            "method": "GET",
            "path": "/metrics",
            "query_string": b"",
            "headers": [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()],
        }
        return Request(scope)

    return build
