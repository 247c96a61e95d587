from __future__ import annotations

import sys
from importlib import util
from pathlib import Path
from urllib.parse import urlsplit

import pytest

from conftest import FakeResponse

_ROOT = Path(__file__).resolve().parent.parent

_MODULE_SPEC = util.spec_from_file_location("mock_signer", _ROOT / "mock-signer" / "main.py")
assert _MODULE_SPEC and _MODULE_SPEC.loader  # for type checkers
mock_signer = util.module_from_spec(_MODULE_SPEC)
sys.modules[_MODULE_SPEC.name] = mock_signer
_MODULE_SPEC.loader.exec_module(mock_signer)


@pytest.fixture()
def signer_client():
    # not entered as a context manager; it runs inside the proxy client's request
    return mock_signer.app.test_client()


@pytest.fixture()
def wired(monkeypatch, signer_client):
    """Route the proxy's outbound calls into the mock signer app."""
    from signer_proxy import upstream as upstream_module

    def post(url, data=None, headers=None, timeout=None):
        r = signer_client.post(urlsplit(url).path or "/", data=data, headers=headers)
        return FakeResponse(r.status_code, r.data)

    def get(url, timeout=None):
        r = signer_client.get(urlsplit(url).path)
        return FakeResponse(r.status_code, r.data)

    monkeypatch.setattr(upstream_module.requests, "post", post)
    monkeypatch.setattr(upstream_module.requests, "get", get)


def test_mock_answers_eth_sign(signer_client):
    resp = signer_client.post("/", json={"jsonrpc": "2.0", "method": "eth_sign", "params": ["0xabc", "0xdead"], "id": 3})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["id"] == 3
    assert body["result"].startswith("0x")
    assert "error" not in body


def test_mock_rejects_other_methods(signer_client):
    resp = signer_client.post("/", json={"jsonrpc": "2.0", "method": "eth_signTypedData", "params": [], "id": 4})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["error"]["code"] == -32601


def test_proxy_against_mock_signer(client, wired, signer_client):
    resp = client.post(
        "/sign",
        data=b'{"jsonrpc":"2.0","method":"opsigner_signBlockPayload","params":{"address":"0xabc","input":"0xdead"},"id":11}',
    )
    direct = signer_client.post("/", json={"jsonrpc": "2.0", "method": "eth_sign", "params": ["0xabc", "0xdead"], "id": 11})

    assert resp.status_code == 200
    assert resp.get_json() == direct.get_json()


def test_healthz_against_mock_signer(client, wired):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "ok"
