"""
Generation context logger.

Provides logging interface for generation context with automatic [generate] prefix.
All generation modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from cvpress.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[generate]"


def setup_generation_logger(log_dir: Path, provider_name: str = None) -> Path:
    """
    Setup logger for generation context.

    Args:
        log_dir: Directory for this generation session
        provider_name: Provider/model identifier for provenance (default: LLM_PROVIDER env var)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="generate",
        log_dir=log_dir,
        extra_provenance={"LLM provider": provider_name or os.getenv("LLM_PROVIDER", "openai")},
    )


# Wrapper functions with automatic [generate] prefix


def _log_info(message: str) -> None:
    """Log info message with [generate] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [generate] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [generate] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [generate] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level generation-specific logging helpers


def log_generation_start(provider_name: str, resume_chars: int, job_chars: int) -> None:
    _log_info(f"Requesting tailored resume from {provider_name}")
    _log_debug(f"  Current resume: {resume_chars:,} chars")
    _log_debug(f"  Job description: {job_chars:,} chars")


def log_generation_result(response, elapsed_time: float) -> None:
    """
    Log a provider reply.

    Args:
        response: LLMResponse from the provider
        elapsed_time: Time taken by the call (retries included)
    """
    _log_success(
        f"Received {len(response.content):,} chars from {response.model} ({elapsed_time:.2f}s)"
    )
    _log_debug(f"  Tokens: {response.input_tokens} in / {response.output_tokens} out")
