"""Synchronous OpenAI-compatible HTTP client for chat completions."""

import json
import logging
from typing import Any

import httpx

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
from sorry.prompt import build_messages, build_user_message, system_prompt

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30.0


class SorryClient:
    """Wraps httpx.Client to send one chat request to an OpenAI-compatible endpoint."""

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: str,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model

        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        try:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=REQUEST_TIMEOUT,
                headers=headers,
                transport=transport,
            )
        except (httpx.InvalidURL, UnicodeEncodeError) as e:
            raise InvalidProviderSettings(e) from e

    @classmethod
    def from_provider(
        cls, provider: ProviderConfig, transport: httpx.BaseTransport | None = None
    ) -> "SorryClient":
        return cls(provider.base_url, provider.model, provider.api_key, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SorryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def send(self, system: str, user_message: str) -> str:
        """POST to /chat/completions and return the first choice's text."""
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": build_messages(system, user_message),
        }
        url = f"{self.base_url}/chat/completions"
        logger.debug("POST %s model=%s", url, self.model)

        try:
            resp = self._client.post("/chat/completions", json=payload)
        except (httpx.InvalidURL, UnicodeEncodeError) as e:
            raise InvalidProviderSettings(e) from e
        except httpx.HTTPError as e:
            raise NetworkFailure(url, e) from e

        body = resp.text
        logger.debug("Response status %s, %d bytes", resp.status_code, len(body))
        if not resp.is_success:
            raise _error_from_response(resp.status_code, resp.reason_phrase, body)
        return extract_reply(body)


def _error_from_response(status_code: int, reason: str, body: str) -> Exception:
    try:
        message = json.loads(body)["error"]["message"]
    except (ValueError, KeyError, TypeError):
        message = None
    if isinstance(message, str):
        return ApiError(message, status_code=status_code)
    return ApiStatusError(status_code, reason, body)


def extract_reply(body: str) -> str:
    """Pull choices[0].message.content out of a chat completion body."""
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ResponseParseFailure(str(e), body) from e

    choices = data.get("choices") if isinstance(data, dict) else None
    if not isinstance(choices, list):
        raise ResponseParseFailure("missing 'choices' list", body)
    if not choices:
        raise EmptyResponse()

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise ResponseParseFailure("missing 'message.content' in first choice", body)
    return content


def send_prompt(
    prompt: str,
    provider: ProviderConfig,
    mood: Mood | None,
    commands: list[str],
    transport: httpx.BaseTransport | None = None,
) -> str:
    """Build the mood system prompt and history-framed user message, then send."""
    user_message = build_user_message(prompt, commands)
    with SorryClient.from_provider(provider, transport=transport) as client:
        return client.send(system_prompt(mood), user_message)
