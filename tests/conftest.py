"""Shared test fixtures for sorry."""

import json

import httpx
import pytest

from sorry.config import Config, ProviderConfig
from sorry.moods import Mood


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config" / "sorry" / "config.json"


@pytest.fixture
def configured(config_path):
    """Write a config with an active openai provider and return its path."""
    config = Config(
        provider="openai",
        mood=Mood.BRO,
        providers={
            "openai": ProviderConfig(
                api_key="sk-test", base_url="https://api.example.com/v1", model="gpt-test"
            ),
            "groq": ProviderConfig(
                api_key="", base_url="https://api.groq.com/openai/v1", model="openai/gpt-oss-20b"
            ),
        },
    )
    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps(config.to_dict()), encoding="utf-8")
    return config_path


@pytest.fixture
def home(tmp_path, monkeypatch):
    """An empty home directory with no shell history environment."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.delenv("HISTFILE", raising=False)
    monkeypatch.delenv("ZDOTDIR", raising=False)
    monkeypatch.delenv("SHELL", raising=False)
    return home_dir


def chat_reply(content: str) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
    }


@pytest.fixture
def recorder():
    """A MockTransport that records requests and returns queued responses."""

    class Recorder:
        def __init__(self):
            self.requests: list[httpx.Request] = []
            self.response = httpx.Response(200, json=chat_reply("git pull --rebase"))

        def handler(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return self.response

        @property
        def transport(self) -> httpx.MockTransport:
            return httpx.MockTransport(self.handler)

        def last_json(self) -> dict:
            return json.loads(self.requests[-1].content)

    return Recorder()
