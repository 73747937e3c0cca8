"""Completion client: forward a prompt to the remote language model (Anthropic Messages API)."""

import json
import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from chatgate.core.config import Settings

logger = logging.getLogger(__name__)


class CompletionServiceError(Exception):
    """Raised when the completion service cannot produce text (unreachable, timeout, bad status or body)."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


def _extract_text(body: Any) -> str:
    """Return content[0].text from a Messages API response body."""
    try:
        text = body["content"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise CompletionServiceError(
            "Completion response missing 'content[0].text'.",
            cause=e,
        ) from e
    if not isinstance(text, str):
        raise CompletionServiceError("Completion response text is not a string.")
    return text


class CompletionClient:
    """Single-turn completion against the configured model. No retries."""

    def __init__(self, settings: "Settings") -> None:
        self._settings = settings

    @property
    def configured(self) -> bool:
        return self._settings.LLM_API_KEY is not None

    def _headers(self) -> dict[str, str]:
        if self._settings.LLM_API_KEY is None:
            raise CompletionServiceError("LLM_API_KEY is not configured.")
        return {
            "content-type": "application/json",
            "x-api-key": self._settings.LLM_API_KEY.get_secret_value(),
            "anthropic-version": self._settings.LLM_API_VERSION,
        }

    async def complete(self, prompt: str) -> str:
        """
        Send prompt as a single user message and return the model's text.

        Raises CompletionServiceError on missing API key, connection failure,
        timeout, non-200 status or an unexpected response body.
        """
        settings = self._settings
        url = f"{settings.LLM_BASE_URL}/v1/messages"
        payload = {
            "model": settings.LLM_MODEL,
            "max_tokens": settings.LLM_MAX_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        }
        headers = self._headers()
        timeout = httpx.Timeout(settings.LLM_REQUEST_TIMEOUT_SEC)
        start = time.perf_counter()

        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            self._log_failure(start, "timeout")
            raise CompletionServiceError(
                "Completion request timed out.",
                cause=e,
            ) from e
        except httpx.ConnectError as e:
            self._log_failure(start, "unreachable")
            raise CompletionServiceError(
                "Completion service is unreachable.",
                cause=e,
            ) from e
        except httpx.HTTPError as e:
            self._log_failure(start, "error")
            raise CompletionServiceError(
                "Completion request failed.",
                cause=e,
            ) from e

        elapsed = time.perf_counter() - start
        if response.status_code != 200:
            self._log_failure(start, f"http_{response.status_code}")
            raise CompletionServiceError(
                f"Completion service returned status {response.status_code}."
            )

        try:
            body = response.json()
        except json.JSONDecodeError as e:
            raise CompletionServiceError(
                "Completion response body is not valid JSON.",
                cause=e,
            ) from e

        text = _extract_text(body)
        logger.info(
            "LLM completion request completed",
            extra={
                "llm_latency_seconds": elapsed,
                "model": settings.LLM_MODEL,
                "prompt_chars": len(prompt),
                "status": "ok",
            },
        )
        return text

    def _log_failure(self, start: float, status: str) -> None:
        logger.info(
            "LLM completion request failed",
            extra={
                "llm_latency_seconds": time.perf_counter() - start,
                "model": self._settings.LLM_MODEL,
                "status": status,
            },
        )
