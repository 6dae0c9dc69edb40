"""Custom exceptions for generation context."""

from typing import Optional


class GenerationError(Exception):
    """
    Exception raised when resume text cannot be generated.

    Raised for empty inputs, provider failures and empty replies. Provider
    exceptions are chained (raise ... from).

    Attributes:
        message: Error description
        provider: Provider name (e.g., "openai/gpt-4o"), when known
        original_error: The underlying provider/SDK error
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.provider = provider
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if provider:
            parts.append(f"Provider: {provider}")

        if original_error:
            parts.append(f"Original error: {type(original_error).__name__}: {original_error}")

        super().__init__("\n".join(parts))
