"""Unit tests for chatgate.services.completion (no network: httpx.AsyncClient is mocked)."""

import asyncio
import json
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
from pydantic import SecretStr

from chatgate.core.config import Settings
from chatgate.services.completion import CompletionClient, CompletionServiceError

MESSAGES_MOCK_RESPONSE = {
    "id": "msg_01",
    "type": "message",
    "role": "assistant",
    "content": [{"type": "text", "text": "Hello from the model."}],
}


def _settings(**kwargs: object) -> Settings:
    defaults: dict[str, object] = {
        "LLM_API_KEY": SecretStr("test-key"),
        "LLM_BASE_URL": "https://llm.example.com/",
        "LLM_REQUEST_TIMEOUT_SEC": 5.0,
        "BCRYPT_ROUNDS": 4,
    }
    defaults.update(kwargs)
    return Settings(**defaults)


def _install_client(mock_client_class: MagicMock, post: AsyncMock) -> MagicMock:
    mock_instance = MagicMock()
    mock_instance.post = post
    mock_client_class.return_value.__aenter__ = AsyncMock(return_value=mock_instance)
    mock_client_class.return_value.__aexit__ = AsyncMock(return_value=None)
    return mock_instance


def _response(status_code: int = 200, body: object = MESSAGES_MOCK_RESPONSE) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = body
    return resp


class TestCompletionRequest(unittest.TestCase):
    """complete() posts a single user message with the configured model, budget and headers."""

    @patch("chatgate.services.completion.httpx.AsyncClient")
    def test_payload_and_headers(self, mock_client_class: MagicMock) -> None:
        captured: dict[str, object] = {}

        async def fake_post(url: str, **kwargs: object) -> MagicMock:
            captured["url"] = url
            captured.update(kwargs)
            return _response()

        _install_client(mock_client_class, AsyncMock(side_effect=fake_post))
        settings = _settings()

        text = asyncio.run(CompletionClient(settings).complete("Say hello"))

        self.assertEqual(text, "Hello from the model.")
        self.assertEqual(captured["url"], "https://llm.example.com/v1/messages")
        self.assertEqual(
            captured["json"],
            {
                "model": "claude-3-sonnet-20240229",
                "max_tokens": 1000,
                "messages": [{"role": "user", "content": "Say hello"}],
            },
        )
        headers = captured["headers"]
        self.assertEqual(headers["x-api-key"], "test-key")
        self.assertEqual(headers["anthropic-version"], "2023-06-01")
        self.assertEqual(headers["content-type"], "application/json")
        timeout = mock_client_class.call_args.kwargs["timeout"]
        self.assertEqual(timeout.read, 5.0)


class TestCompletionFailures(unittest.TestCase):
    """Every transport or remote failure surfaces as CompletionServiceError."""

    def _complete_with(self, mock_client_class: MagicMock, post: AsyncMock) -> CompletionServiceError:
        _install_client(mock_client_class, post)
        with self.assertRaises(CompletionServiceError) as ctx:
            asyncio.run(CompletionClient(_settings()).complete("hi"))
        return ctx.exception

    @patch("chatgate.services.completion.httpx.AsyncClient")
    def test_unreachable(self, mock_client_class: MagicMock) -> None:
        err = self._complete_with(mock_client_class, AsyncMock(side_effect=httpx.ConnectError("refused")))
        self.assertIn("unreachable", err.message)
        self.assertIsInstance(err.cause, httpx.ConnectError)

    @patch("chatgate.services.completion.httpx.AsyncClient")
    def test_timeout(self, mock_client_class: MagicMock) -> None:
        err = self._complete_with(mock_client_class, AsyncMock(side_effect=httpx.ReadTimeout("slow")))
        self.assertIn("timed out", err.message)

    @patch("chatgate.services.completion.httpx.AsyncClient")
    def test_other_transport_error(self, mock_client_class: MagicMock) -> None:
        err = self._complete_with(mock_client_class, AsyncMock(side_effect=httpx.RemoteProtocolError("eof")))
        self.assertEqual(err.message, "Completion request failed.")

    @patch("chatgate.services.completion.httpx.AsyncClient")
    def test_non_200(self, mock_client_class: MagicMock) -> None:
        err = self._complete_with(
            mock_client_class,
            AsyncMock(return_value=_response(529, {"type": "error", "error": {"type": "overloaded_error"}})),
        )
        self.assertIn("529", err.message)

    @patch("chatgate.services.completion.httpx.AsyncClient")
    def test_invalid_json(self, mock_client_class: MagicMock) -> None:
        resp = _response()
        resp.json.side_effect = json.JSONDecodeError("Expecting value", "", 0)
        err = self._complete_with(mock_client_class, AsyncMock(return_value=resp))
        self.assertIn("not valid JSON", err.message)

    @patch("chatgate.services.completion.httpx.AsyncClient")
    def test_missing_text(self, mock_client_class: MagicMock) -> None:
        err = self._complete_with(mock_client_class, AsyncMock(return_value=_response(200, {"content": []})))
        self.assertIn("content[0].text", err.message)

    @patch("chatgate.services.completion.httpx.AsyncClient")
    def test_missing_api_key(self, mock_client_class: MagicMock) -> None:
        client = CompletionClient(_settings(LLM_API_KEY=None))
        self.assertFalse(client.configured)
        with self.assertRaises(CompletionServiceError) as ctx:
            asyncio.run(client.complete("hi"))
        self.assertIn("LLM_API_KEY", ctx.exception.message)
        mock_client_class.assert_not_called()
