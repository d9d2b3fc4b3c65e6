"""
LLM client abstraction layer to support multiple providers.

`EndpointClient` posts chat requests to any HTTP endpoint the user types
in (OpenAI, Anthropic, Gemini or self-hosted) and adapts the response
shape; `OpenAIClient` goes through the official SDK. Both surface
failures as the LLMError subclasses from errors.py.
"""

from __future__ import annotations
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import openai
import requests

from resume_optimizer import config
from resume_optimizer.errors import (
    LLMNetworkError,
    LLMResponseFormatError,
    LLMStatusError,
    LLMTimeoutError,
)

log = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"

# tried in order; first non-empty string wins
_CONTENT_PATHS = (
    ("choices", 0, "message", "content"),  # OpenAI
    ("content", 0, "text"),  # Anthropic
    ("candidates", 0, "content", "parts", 0, "text"),  # Gemini
)


def _dig(data: Any, *path: Any) -> Any:
    for key in path:
        try:
            data = data[key]
        except (KeyError, IndexError, TypeError):
            return None
    return data


def extract_content(data: Any) -> str:
    """Pull the assistant text out of a provider-specific response body."""
    if isinstance(data, str):
        return data
    for path in _CONTENT_PATHS:
        content = _dig(data, *path)
        if isinstance(content, str):
            return content
    raise LLMResponseFormatError("Unexpected response format from LLM API")


class LLMClient(ABC):
    """Abstract base class for LLM clients."""

    model: str

    @abstractmethod
    def chat(self, system: str, user: str, temperature: float, max_tokens: int) -> str:
        """Send one system + user exchange and return the assistant text."""


class EndpointClient(LLMClient):
    """Plain HTTP client for any chat-completions style endpoint."""

    def __init__(self, endpoint: str, model: str, api_key: str | None = None,
                 timeout: float | None = None):
        self.endpoint = endpoint
        self.model = model
        self.api_key = api_key
        self.timeout = timeout or config.LLM_TIMEOUT

    @property
    def is_anthropic(self) -> bool:
        return "anthropic.com" in self.endpoint

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            if self.is_anthropic:
                headers["x-api-key"] = self.api_key
                headers["anthropic-version"] = ANTHROPIC_VERSION
            else:
                headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _payload(self, system: str, user: str, temperature: float, max_tokens: int) -> Dict[str, Any]:
        if self.is_anthropic:
            return {
                "model": self.model,
                "max_tokens": max_tokens,
                "temperature": temperature,
                "system": system,
                "messages": [{"role": "user", "content": user}],
            }
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

    def chat(self, system: str, user: str, temperature: float, max_tokens: int) -> str:
        payload = self._payload(system, user, temperature, max_tokens)
        log.info("Making request to LLM endpoint: %s", self.endpoint)
        log.debug("Request payload: %s", json.dumps(payload, ensure_ascii=False))
        try:
            rsp = requests.post(
                self.endpoint, headers=self._headers(), json=payload, timeout=self.timeout
            )
        except requests.Timeout as exc:
            raise LLMTimeoutError(self.timeout) from exc
        except requests.RequestException as exc:
            raise LLMNetworkError(str(exc)) from exc

        log.info("Response status: %s", rsp.status_code)
        if not rsp.ok:
            log.error("API error response: %s", rsp.text)
            raise LLMStatusError(rsp.status_code, rsp.text)
        try:
            data = rsp.json()
        except ValueError as exc:
            raise LLMResponseFormatError("LLM API returned a body that is not JSON") from exc
        log.debug("Raw LLM response data: %s", data)
        return extract_content(data)


class OpenAIClient(LLMClient):
    """OpenAI client implementation."""

    def __init__(self, model: str, api_key: str | None = None, base_url: str | None = None,
                 timeout: float | None = None):
        api_key = api_key or config.LLM_API_KEY
        if not api_key:
            raise ValueError("OpenAI API key is required. Set LLM_API_KEY or OPENAI_API_KEY, or pass api_key.")
        self.model = model
        self.timeout = timeout or config.LLM_TIMEOUT
        self.client = openai.OpenAI(api_key=api_key, base_url=base_url, timeout=self.timeout)

    def chat(self, system: str, user: str, temperature: float, max_tokens: int) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APITimeoutError as exc:
            raise LLMTimeoutError(self.timeout) from exc
        except openai.APIConnectionError as exc:
            raise LLMNetworkError(str(exc)) from exc
        except openai.APIStatusError as exc:
            raise LLMStatusError(exc.status_code, exc.response.text) from exc

        content = response.choices[0].message.content if response.choices else None
        if content is None:
            raise LLMResponseFormatError("Unexpected response format from LLM API")
        return content


def get_llm_client(endpoint: Optional[str] = None, model: Optional[str] = None,
                   api_key: Optional[str] = None, provider: Optional[str] = None) -> LLMClient:
    """Factory function to get the appropriate LLM client based on configuration."""
    provider = (provider or config.LLM_PROVIDER).lower()
    model = model or config.get_model_for_provider(provider)
    api_key = api_key or config.LLM_API_KEY

    if provider == "endpoint":
        return EndpointClient(endpoint or config.LLM_ENDPOINT, model, api_key)
    elif provider == "openai":
        return OpenAIClient(model, api_key, base_url=endpoint)
    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")
