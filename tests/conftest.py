from __future__ import annotations

import pytest

from signer_proxy.config import Config
from signer_proxy.main import create_app
from signer_proxy import upstream as upstream_module

UPSTREAM_URL = "http://web3signer.test:9000"


class FakeResponse:
    def __init__(self, status_code: int = 200, content: bytes = b""):
        self.status_code = status_code
        self.content = content


class FakeTransport:
    """Stands in for requests.post/requests.get and records every call."""

    def __init__(self):
        self.calls: list[tuple[str, str, dict]] = []
        self.response = FakeResponse(200, b'{"jsonrpc":"2.0","id":1,"result":"0xsig"}')
        self.error: Exception | None = None

    def _handle(self, verb, url, **kwargs):
        self.calls.append((verb, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def post(self, url, **kwargs):
        return self._handle("POST", url, **kwargs)

    def get(self, url, **kwargs):
        return self._handle("GET", url, **kwargs)


@pytest.fixture()
def config():
    return Config(upstream_url=UPSTREAM_URL)


@pytest.fixture()
def transport(monkeypatch):
    fake = FakeTransport()
    monkeypatch.setattr(upstream_module.requests, "post", fake.post)
    monkeypatch.setattr(upstream_module.requests, "get", fake.get)
    return fake


@pytest.fixture()
def client(config, transport):
    app = create_app(config)
    app.testing = True
    with app.test_client() as c:
        yield c
