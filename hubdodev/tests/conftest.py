"""Shared fixtures: a fake requests.Session so no test touches the network."""

import json

import pytest

from hubdodev import client as client_module
from hubdodev.client import HubDoDevClient
from hubdodev.config import Config


class FakeResponse:
    def __init__(self, body, status_code=200, url=None, content_type="application/json", history=None):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        self.text = body
        self.status_code = status_code
        self.url = url
        self.headers = {"Content-Type": content_type}
        self.history = history or []

    def json(self):
        return json.loads(self.text)


class FakeTransport:
    """Records every request and answers with a queued response or error."""

    def __init__(self):
        self.calls = []
        self.response = FakeResponse({})
        self.error = None
        self.sessions_opened = 0
        self.sessions_closed = 0

    def reply(self, body, status_code=200, **kwargs):
        self.response = FakeResponse(body, status_code=status_code, **kwargs)

    def fail(self, error):
        self.error = error

    @property
    def last(self):
        return self.calls[-1]

    def session(self):
        return _FakeSession(self)


class _FakeSession:
    def __init__(self, transport):
        self.transport = transport

    def __enter__(self):
        self.transport.sessions_opened += 1
        return self

    def __exit__(self, *exc):
        self.transport.sessions_closed += 1
        return False

    def request(self, method, url, **kwargs):
        self.transport.calls.append({"method": method, "url": url, **kwargs})
        if self.transport.error is not None:
            raise self.transport.error
        resp = self.transport.response
        if resp.url is None:
            resp.url = url
        return resp


@pytest.fixture
def transport(monkeypatch):
    fake = FakeTransport()
    monkeypatch.setattr(client_module.requests, "Session", fake.session)
    return fake


@pytest.fixture
def client(transport):
    return HubDoDevClient(Config(token="T"))
