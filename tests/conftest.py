"""Shared fixtures: a scripted stand-in for requests.Session."""

from __future__ import annotations

import json

import pytest
import requests

USER_PAYLOAD = {
    "id": "u-1",
    "email": "ana@danclean.mx",
    "name": "Ana",
    "lastName": "Garza",
    "role": "ADMIN",
}


def make_response(status_code: int, body=None, raw: bytes | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.url = "http://api.test/me"
    if raw is not None:
        response._content = raw
    else:
        response._content = json.dumps(body).encode("utf-8")
    response.encoding = "utf-8"
    return response


class ScriptedSession:
    """Returns (or raises) queued outcomes in order and records each GET."""

    def __init__(self, outcomes):
        self.headers: dict[str, str] = {}
        self.outcomes = list(outcomes)
        self.calls: list[tuple[str, float]] = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def scripted_session():
    return ScriptedSession


@pytest.fixture(autouse=True)
def debug_log_in_tmp(tmp_path, monkeypatch):
    monkeypatch.setenv("DANCLEAN_DEBUG_LOG", str(tmp_path / "debug.log"))
    return tmp_path / "debug.log"
