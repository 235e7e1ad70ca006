"""
OpenAI Provider

LLM provider implementation for the OpenAI API.
"""

from __future__ import annotations

from typing import Any

import openai
from openai import OpenAI

from axiom.config import LLMSettings, get_settings
from axiom.core.exceptions import LLMError, LLMProviderError, LLMRateLimitError, MissingAPIKeyError
from axiom.llm.base import BaseLLMProvider, LLMResponse, Message


class OpenAIProvider(BaseLLMProvider):
    """
    OpenAI chat-completions provider.

    Retries are left to the caller (the audit service owns the retry
    policy), so the SDK client is built with ``max_retries=0``.
    """

    def __init__(
        self,
        model: str = "gpt-4o",
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 120.0,
    ) -> None:
        """
        Initialize OpenAI provider.

        Args:
            model: Model name (gpt-4o, gpt-4-turbo, etc.).
            api_key: OpenAI API key.
            base_url: Custom base URL (for Azure or proxies).
            timeout: Request timeout.

        Raises:
            MissingAPIKeyError: If no API key is supplied.
        """
        if not api_key:
            raise MissingAPIKeyError("OPENAI_API_KEY")

        super().__init__(model, api_key, base_url, timeout)

        client_kwargs: dict[str, Any] = {
            "api_key": api_key,
            "timeout": timeout,
            "max_retries": 0,
        }
        if base_url:
            client_kwargs["base_url"] = base_url

        self._client = OpenAI(**client_kwargs)

    @classmethod
    def from_settings(cls, settings: LLMSettings | None = None) -> OpenAIProvider:
        settings = settings or get_settings().llm
        return cls(
            model=settings.openai_model,
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            timeout=settings.request_timeout,
        )

    @property
    def name(self) -> str:
        return "openai"

    def complete(
        self,
        messages: list[Message],
        temperature: float = 0.0,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """Synchronous completion."""
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=[m.to_dict() for m in messages],
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs,
            )
        except openai.RateLimitError as e:
            retry_after = e.response.headers.get("Retry-After") if e.response is not None else None
            raise LLMRateLimitError(
                provider=self.name,
                retry_after=float(retry_after) if retry_after else None,
            ) from e
        except openai.APIStatusError as e:
            raise LLMProviderError(
                provider=self.name,
                message=str(e),
                status_code=e.status_code,
                retryable=e.status_code >= 500,
            ) from e
        except openai.APIError as e:
            raise LLMProviderError(provider=self.name, message=str(e), retryable=True) from e

        if not response.choices:
            raise LLMError("OpenAI returned no choices", {"model": response.model})

        choice = response.choices[0]
        return LLMResponse(
            content=choice.message.content or "",
            model=response.model,
            provider=self.name,
            usage={
                "input_tokens": response.usage.prompt_tokens if response.usage else 0,
                "output_tokens": response.usage.completion_tokens if response.usage else 0,
            },
            finish_reason=choice.finish_reason,
            raw_response=response,
        )
