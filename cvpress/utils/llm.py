"""
LLM provider abstraction.

Provides a provider-agnostic interface for chat-completion calls with automatic
retries on transient (rate limit / overload) errors. Providers are constructed by
the caller and handed to whatever needs them; nothing here holds a global client.
"""

import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# Retry configuration
MAX_RETRIES = 5
BASE_DELAY = 1.0

# Generous enough for a full two-page resume
DEFAULT_MAX_TOKENS = 4096

T = TypeVar("T")


def _retry_with_backoff(
    operation: Callable[[], T],
    retryable_exception: type,
    error_message: str,
    max_retries: int = MAX_RETRIES,
    base_delay: float = BASE_DELAY,
) -> T:
    """
    Execute operation with exponential backoff retry on specific exception.

    Args:
        operation: Callable that performs the API request and returns result
        retryable_exception: Exception type that triggers retry
        error_message: Message prefix for retry logging (e.g., "API overloaded")
        max_retries: Total attempts before the exception is re-raised
        base_delay: Delay before the first retry, doubled on each attempt
    """
    for attempt in range(max_retries):
        try:
            return operation()
        except retryable_exception:
            if attempt == max_retries - 1:
                raise
            delay = base_delay * (2**attempt)
            logger.warning(
                f"{error_message}, retrying in {delay:.1f}s... "
                f"(attempt {attempt + 1}/{max_retries})"
            )
            time.sleep(delay)


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "anthropic", "openai")
    - Set self._retryable_exception to the exception type that triggers retry
    - Set self._retry_message for logging during retries
    - Implement _call_api() for the actual API call
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str
    _retryable_exception: type
    _retry_message: str

    name: str
    model: str
    max_tokens: int = DEFAULT_MAX_TOKENS

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Make a single API call (no retries). Implemented by subclasses."""
        pass

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Generate a response from the LLM with automatic retry on transient errors."""
        return _retry_with_backoff(
            partial(self._call_api, system_prompt, user_prompt),
            self._retryable_exception,
            self._retry_message,
        )


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider with exponential backoff retry."""

    _provider_prefix = "anthropic"
    _retry_message = "API overloaded"

    def __init__(
        self,
        model: str = "claude-sonnet-4-20250514",
        api_key: Optional[str] = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        # Lazy import - the SDK is only needed if this provider is used
        try:
            import anthropic
        except ImportError:
            raise ImportError("anthropic package required. Install with: pip install anthropic")

        api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self.client = anthropic.Anthropic(api_key=api_key)
        self._retryable_exception = anthropic.OverloadedError
        self.max_tokens = max_tokens
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        return LLMResponse(
            content=response.content[0].text if response.content else "",
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider with exponential backoff retry."""

    _provider_prefix = "openai"
    _retry_message = "Rate limit hit"

    def __init__(
        self,
        model: str = "gpt-4o",
        api_key: Optional[str] = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        # Lazy import - the SDK is only needed if this provider is used
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install openai")

        api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        self.client = openai.OpenAI(api_key=api_key)
        self._retryable_exception = openai.RateLimitError
        self.max_tokens = max_tokens
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


def get_provider(provider_name: Optional[str] = None, model: Optional[str] = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "anthropic" or "openai" (default: from LLM_PROVIDER env var)
        model: Model name (default: provider-specific default)

    Returns:
        LLMProvider instance
    """
    if provider_name is None:
        provider_name = os.getenv("LLM_PROVIDER", "openai")
    provider_name = provider_name.lower()

    if provider_name == "anthropic":
        return AnthropicProvider(model=model) if model else AnthropicProvider()
    elif provider_name == "openai":
        return OpenAIProvider(model=model) if model else OpenAIProvider()
    else:
        raise ValueError(f"Unknown provider: {provider_name}. Use 'anthropic' or 'openai'")
