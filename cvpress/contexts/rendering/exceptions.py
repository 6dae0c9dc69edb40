"""Custom exceptions for rendering context."""

from typing import Optional


class SerializationError(Exception):
    """
    Exception raised when the drawing document cannot be built or written out.

    Covers invalid page sizes, font registration failures and PDF save errors.
    Always propagated to the caller.

    Attributes:
        message: Error description
        page_index: Zero-based page being processed when the failure happened
        original_error: The underlying reportlab / font error
    """

    def __init__(
        self,
        message: str,
        page_index: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.page_index = page_index
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if page_index is not None:
            parts.append(f"Page: {page_index + 1}")

        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
