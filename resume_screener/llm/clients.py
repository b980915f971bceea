"""Language-model transports: OpenAI chat completions and Gemini REST."""

import logging
from typing import Protocol

import requests

from resume_screener.config import LLMConfig
from resume_screener.errors import ExternalServiceFailure
from resume_screener.utils.http_client import create_session, post_json

logger = logging.getLogger("resume_screener.llm")

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class LLMClient(Protocol):
    def complete(self, prompt: str) -> str:
        """Send a single-turn prompt and return the model's text reply."""
        ...


class OpenAIClient:
    """Chat-completions client. Raises ExternalServiceFailure on any API error."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.1,
        max_tokens: int = 500,
        timeout: int = 60,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._client = None

    def _get_client(self):
        # Built on first use so a missing key fails the batch, not app startup
        if self._client is None:
            from openai import OpenAI
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout)
        return self._client

    def complete(self, prompt: str) -> str:
        try:
            response = self._get_client().chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            content = response.choices[0].message.content
        except Exception as e:
            logger.warning("OpenAI request failed: %s", e)
            raise ExternalServiceFailure(f"OpenAI request failed: {e}") from e

        if content is None:
            raise ExternalServiceFailure("OpenAI returned an empty message")
        return content.strip()


class GeminiClient:
    """Gemini generateContent over HTTP with a retrying requests session."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        session: requests.Session | None = None,
        timeout: int = 60,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.session = session or create_session()

    def complete(self, prompt: str) -> str:
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        url = GEMINI_API_URL.format(model=self.model)

        try:
            data = post_json(
                url,
                payload,
                session=self.session,
                timeout=self.timeout,
                params={"key": self.api_key},
            )
        except (requests.RequestException, ValueError) as e:
            logger.warning("Gemini request failed: %s", e)
            raise ExternalServiceFailure(f"Failed to call Gemini API: {e}") from e

        try:
            return data["candidates"][0]["content"]["parts"][0]["text"].strip()
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ExternalServiceFailure(f"Failed to parse Gemini response: {data}") from e


def create_llm_client(config: LLMConfig) -> LLMClient:
    """Build the client named by config.provider."""
    if config.provider == "gemini":
        return GeminiClient(
            api_key=config.api_key,
            model=config.model or "gemini-2.0-flash",
            timeout=config.timeout,
        )
    if config.provider == "openai":
        return OpenAIClient(
            api_key=config.api_key,
            model=config.model or "gpt-4o-mini",
            temperature=config.temperature,
            timeout=config.timeout,
        )
    raise ValueError(f"Unsupported LLM provider: {config.provider} (supported: openai, gemini)")
