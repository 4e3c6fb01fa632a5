"""Tests for the chat completion client."""

import httpx
import pytest

from conftest import chat_reply
from sorry.client import SorryClient, extract_reply, send_prompt
from sorry.config import ProviderConfig
from sorry.errors import (
    ApiError,
    ApiStatusError,
    EmptyResponse,
    InvalidProviderSettings,
    NetworkFailure,
    ResponseParseFailure,
)
from sorry.moods import Mood


@pytest.fixture
def provider():
    return ProviderConfig(api_key="sk-test", base_url="https://api.example.com/v1/", model="gpt-test")


def test_send_posts_chat_request(recorder, provider):
    with SorryClient.from_provider(provider, transport=recorder.transport) as client:
        reply = client.send("be nice", "it broke")

    assert reply == "git pull --rebase"
    request = recorder.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.example.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert request.headers["Content-Type"] == "application/json"
    assert recorder.last_json() == {
        "model": "gpt-test",
        "messages": [
            {"role": "system", "content": "be nice"},
            {"role": "user", "content": "it broke"},
        ],
    }


def test_structured_error_body(recorder, provider):
    recorder.response = httpx.Response(401, json={"error": {"message": "invalid key"}})
    with SorryClient.from_provider(provider, transport=recorder.transport) as client:
        with pytest.raises(ApiError) as exc_info:
            client.send("s", "u")
    assert str(exc_info.value) == "API error: invalid key"
    assert exc_info.value.status_code == 401


def test_unstructured_error_body(recorder, provider):
    recorder.response = httpx.Response(502, text="<html>bad gateway</html>")
    with SorryClient.from_provider(provider, transport=recorder.transport) as client:
        with pytest.raises(ApiStatusError) as exc_info:
            client.send("s", "u")
    assert exc_info.value.status_code == 502
    assert "502" in str(exc_info.value)
    assert "<html>bad gateway</html>" in str(exc_info.value)


def test_empty_choices_is_empty_response(recorder, provider):
    recorder.response = httpx.Response(200, json={"choices": []})
    with SorryClient.from_provider(provider, transport=recorder.transport) as client:
        with pytest.raises(EmptyResponse, match="No response from API"):
            client.send("s", "u")


def test_network_failure(provider):
    def boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    with SorryClient.from_provider(provider, transport=httpx.MockTransport(boom)) as client:
        with pytest.raises(NetworkFailure, match="connection refused"):
            client.send("s", "u")


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        "{}",
        '{"choices": "nope"}',
        '{"choices": [{"message": {}}]}',
        '{"choices": [{"message": {"content": null}}]}',
    ],
)
def test_unparseable_success_body(body):
    with pytest.raises(ResponseParseFailure) as exc_info:
        extract_reply(body)
    assert body in str(exc_info.value)


def test_extract_reply_takes_first_choice():
    body = '{"choices": [{"message": {"content": "first"}}, {"message": {"content": "second"}}]}'
    assert extract_reply(body) == "first"


def test_send_prompt_includes_history_and_mood(recorder, provider):
    reply = send_prompt("push failed", provider, Mood.BRO, ["git push"], transport=recorder.transport)
    assert reply == "git pull --rebase"
    system, user = recorder.last_json()["messages"]
    assert system["content"] == Mood.BRO.system_prompt()
    assert "1. git push" in user["content"]
    assert user["content"].endswith("My question/problem: push failed")


def test_send_prompt_without_history(recorder, provider):
    recorder.response = httpx.Response(200, json=chat_reply("ok"))
    assert send_prompt("hello", provider, None, [], transport=recorder.transport) == "ok"
    _system, user = recorder.last_json()["messages"]
    assert user["content"] == "hello"


def test_non_ascii_api_key_is_reported(recorder):
    provider = ProviderConfig(api_key="sk-tést", base_url="https://api.example.com/v1", model="m")
    with pytest.raises(InvalidProviderSettings):
        send_prompt("hi", provider, None, [], transport=recorder.transport)
    assert recorder.requests == []


def test_malformed_base_url_is_reported(recorder):
    provider = ProviderConfig(api_key="sk-test", base_url="https://api.example.com/\x01v1", model="m")
    with pytest.raises(InvalidProviderSettings):
        send_prompt("hi", provider, None, [], transport=recorder.transport)
