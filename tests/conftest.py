"""Shared fixtures: fake Groq client and temporary data/log directories."""

import json
from types import SimpleNamespace

import pytest

from petra import audit, groq_client, storage


class FakeGroq:
    """Stands in for groq.Groq; returns a canned completion and records each request."""

    def __init__(self, content, calls):
        self._content = content
        self._calls = calls
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self._calls.append(kwargs)
        if isinstance(self._content, Exception):
            raise self._content
        message = SimpleNamespace(content=self._content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def fake_groq(monkeypatch):
    """Call fake_groq(content) to make the next Groq calls return content (str, dict or Exception)."""
    calls = []

    def install(content):
        if isinstance(content, dict):
            content = json.dumps(content)
        monkeypatch.setattr(groq_client, "Groq", lambda api_key: FakeGroq(content, calls))
        monkeypatch.setenv("GROQ_API_KEY", "test-key")
        return calls

    return install


@pytest.fixture
def no_groq_key(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    path = tmp_path / "data"
    monkeypatch.setattr(storage, "DATA_DIR", path)
    return path


@pytest.fixture
def audit_dir(tmp_path, monkeypatch):
    path = tmp_path / "logs"
    monkeypatch.setattr(audit, "AUDIT_DIR", path)
    return path
