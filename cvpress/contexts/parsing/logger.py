"""
Parsing context logger.

Provides logging interface for parsing context with automatic [parse] prefix.
All parsing modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from cvpress.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[parse]"


def setup_parsing_logger(log_dir: Path) -> Path:
    """
    Setup logger for parsing context.

    Args:
        log_dir: Directory for this parsing session

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="parse", log_dir=log_dir)


# Wrapper functions with automatic [parse] prefix


def _log_info(message: str) -> None:
    """Log info message with [parse] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [parse] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [parse] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [parse] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level parsing-specific logging helpers


def log_ambiguity(line_number: int, line: str, placement: str) -> None:
    """Log a line no rule claimed and where it was kept instead."""
    preview = line if len(line) <= 60 else line[:57] + "..."
    _log_debug(f"Ambiguous line {line_number} kept in {placement}: {preview!r}")


def log_parse_summary(model) -> None:
    """
    Log a one-line overview of a parsed resume plus per-section counts at debug level.

    Args:
        model: ResumeModel returned by parse_resume()
    """
    if model.is_empty:
        _log_warning("Parsed an empty resume (no non-blank lines)")
        return

    _log_info(
        f"Parsed resume for {model.header.name!r}: "
        f"{len(model.sections)} sections, {len(model.header.contact)} contact tokens"
    )
    for name, content in model.sections.items():
        if hasattr(content, "entries"):
            detail = f"{len(content.entries)} entries"
        elif hasattr(content, "categories"):
            detail = f"{len(content.categories)} categories, {len(content.items)} items"
        elif hasattr(content, "text"):
            detail = f"{len(content.text.split())} words"
        else:
            detail = f"{len(content.lines)} lines"
        _log_debug(f"  {name} ({content.kind.value}): {detail}")
