"""Shared fixtures for GitHub client tests."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
import requests

from ghrepos import GitHubClient


def make_response(
    body=None,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
    url: str = "https://api.github.com/",
) -> requests.Response:
    raw = requests.Response()
    raw.status_code = status_code
    raw.url = url
    raw.encoding = "utf-8"
    raw.headers.update(headers or {})
    if body is None:
        raw._content = b""
    elif isinstance(body, bytes):
        raw._content = body
    else:
        raw._content = json.dumps(body).encode("utf-8")
    return raw


@pytest.fixture
def session():
    s = requests.Session()
    s.trust_env = False
    s.send = MagicMock(return_value=make_response())
    return s


@pytest.fixture
def client(session):
    return GitHubClient(token="t0ken", session=session)


@pytest.fixture
def respond(session):
    """Set the reply the mocked session returns for the next request."""

    def _respond(body=None, status_code: int = 200, headers: dict[str, str] | None = None):
        session.send.return_value = make_response(body, status_code, headers)

    return _respond


@pytest.fixture
def sent(session):
    """Return the last PreparedRequest handed to the session."""

    def _sent() -> requests.PreparedRequest:
        return session.send.call_args.args[0]

    return _sent
