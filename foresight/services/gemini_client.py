"""Gemini generation client: one prompt in, raw response text out."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ..config import Config, get_config

LOGGER = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

# Client errors worth another attempt; every other 4xx is final.
RETRYABLE_CLIENT_CODES = {408, 429}


class GenerationFailure(RuntimeError):
    """Raised when a generation call cannot produce response text."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, retryable: bool = True) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable


class ConfigError(GenerationFailure):
    """Raised when Gemini configuration is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, retryable=False)


@dataclass(frozen=True)
class GenerationSettings:
    """Model selection and call policy shared by every request."""

    model: str = DEFAULT_MODEL
    temperature: float = 0.7
    top_p: float = 0.95
    top_k: int = 40
    max_output_tokens: int = 8192
    json_mode: bool = True
    timeout: float = 60.0
    max_retries: int = 2
    retry_delay: float = 1.0
    max_concurrency: int = 4

    @classmethod
    def from_config(cls, config: Config) -> "GenerationSettings":
        return cls(
            model=config.GENERATION_MODEL,
            temperature=config.GENERATION_TEMPERATURE,
            max_output_tokens=config.GENERATION_MAX_OUTPUT_TOKENS,
            timeout=config.GENERATION_TIMEOUT_SECONDS,
            max_retries=config.GENERATION_MAX_RETRIES,
            retry_delay=config.GENERATION_RETRY_DELAY_SECONDS,
            max_concurrency=config.GENERATION_MAX_CONCURRENCY,
        )


def _require_api_key(explicit_key: Optional[str] = None) -> str:
    """Get API key from config or explicit parameter."""
    if explicit_key:
        return explicit_key
    api_key = get_config().get_gemini_api_key()
    if not api_key:
        raise ConfigError("GEMINI_API_KEY environment variable is required.")
    return api_key


def _tool_list(tool_flags: Optional[Dict[str, bool]]) -> Optional[List[types.Tool]]:
    if not tool_flags:
        return None
    tools: List[types.Tool] = []
    if tool_flags.get("google_search"):
        tools.append(types.Tool(google_search=types.GoogleSearch()))
    if tool_flags.get("url_context"):
        tools.append(types.Tool(url_context=types.UrlContext()))
    return tools or None


def _extract_text(response: Any) -> str:
    text = getattr(response, "text", None)
    if text:
        return text
    collected: List[str] = []
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        if not content:
            continue
        for part in getattr(content, "parts", None) or []:
            part_text = getattr(part, "text", None)
            if part_text:
                collected.append(part_text)
    return "\n".join(collected).strip()


class GenerationClient:
    """
    Async wrapper around the Gemini API for single-prompt text generation.

    Build one instance per credential at process start and share it. The
    instance bounds in-flight calls with a semaphore, applies a per-call
    timeout, and retries transient failures with exponential backoff. It
    never interprets the response text.
    """

    def __init__(
        self,
        settings: Optional[GenerationSettings] = None,
        *,
        api_key: Optional[str] = None,
        client: Optional[genai.Client] = None,
    ) -> None:
        """
        Args:
            settings: Model and call policy. Defaults to GenerationSettings().
            api_key: Optional explicit API key. If not provided, uses config.
            client: Pre-built genai client, mainly for tests.

        Raises:
            ConfigError: If no client is given and the API key is missing.
        """
        self.settings = settings or GenerationSettings()
        self._client = client or genai.Client(api_key=_require_api_key(api_key))
        self._semaphore = asyncio.Semaphore(self.settings.max_concurrency)

    def _config(self, tools: Optional[Dict[str, bool]]) -> types.GenerateContentConfig:
        tool_list = _tool_list(tools)
        # Search grounding cannot be combined with a JSON response mime type.
        mime_type = "application/json" if self.settings.json_mode and not tool_list else None
        return types.GenerateContentConfig(
            temperature=float(self.settings.temperature),
            top_p=self.settings.top_p,
            top_k=self.settings.top_k,
            max_output_tokens=self.settings.max_output_tokens,
            tools=tool_list,
            response_mime_type=mime_type,
        )

    async def _call_once(self, prompt: str, config: types.GenerateContentConfig) -> str:
        async with self._semaphore:
            try:
                response = await asyncio.wait_for(
                    self._client.aio.models.generate_content(
                        model=self.settings.model,
                        contents=prompt,
                        config=config,
                    ),
                    timeout=self.settings.timeout,
                )
            except asyncio.TimeoutError as exc:
                raise GenerationFailure(f"Gemini call timed out after {self.settings.timeout:.0f}s") from exc
            except genai_errors.ServerError as exc:
                code = getattr(exc, "code", None)
                raise GenerationFailure(f"Gemini server error ({code}): {exc}", status_code=code) from exc
            except genai_errors.APIError as exc:
                code = getattr(exc, "code", None)
                raise GenerationFailure(
                    f"Gemini API error ({code}): {exc}",
                    status_code=code,
                    retryable=code in RETRYABLE_CLIENT_CODES,
                ) from exc
            except Exception as exc:  # network errors from the transport
                raise GenerationFailure(f"Gemini call failed: {exc}") from exc

        text = _extract_text(response)
        if not text.strip():
            raise GenerationFailure("Gemini returned an empty response")
        return text

    async def generate(self, prompt: str, *, tools: Optional[Dict[str, bool]] = None) -> str:
        """
        Send ``prompt`` to the configured model and return the raw text.

        Args:
            prompt: Fully rendered prompt.
            tools: Optional dict with google_search / url_context flags.

        Returns:
            Response text exactly as the model produced it.

        Raises:
            GenerationFailure: When every attempt failed or the failure is not retryable.
        """
        if not prompt:
            raise ValueError("prompt must not be empty")
        config = self._config(tools)
        attempts = self.settings.max_retries + 1
        for attempt in range(attempts):
            try:
                return await self._call_once(prompt, config)
            except GenerationFailure as exc:
                if not exc.retryable or attempt == attempts - 1:
                    LOGGER.error("Gemini generation failed after %d attempt(s): %s", attempt + 1, exc)
                    raise
                delay = self.settings.retry_delay * (2 ** attempt)
                LOGGER.warning(
                    "Gemini generation failed (attempt %d/%d), retrying in %.1fs: %s",
                    attempt + 1,
                    attempts,
                    delay,
                    exc,
                )
                await asyncio.sleep(delay)
        raise RuntimeError("Retry loop exhausted without result")


def build_generation_client(config: Optional[Config] = None) -> GenerationClient:
    """Construct the process-wide client from application config."""
    config = config or get_config()
    return GenerationClient(
        GenerationSettings.from_config(config),
        api_key=config.get_gemini_api_key(),
    )


__all__ = [
    "ConfigError",
    "DEFAULT_MODEL",
    "GenerationClient",
    "GenerationFailure",
    "GenerationSettings",
    "build_generation_client",
]
