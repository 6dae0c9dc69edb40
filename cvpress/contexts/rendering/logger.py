"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from cvpress.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, config=None) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session
        config: Optional LayoutConfig, recorded in the provenance header

    Returns:
        Path to log file

    Example:
        from cvpress.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir)
        _log_info("Starting layout...")
    """
    extra = None
    if config is not None:
        extra = {
            "Page size": f"{config.page_width:g}x{config.page_height:g}",
            "Margins": (
                f"top={config.margins.top:g} bottom={config.margins.bottom:g} "
                f"left={config.margins.left:g} right={config.margins.right:g}"
            ),
        }
    return _setup_logger(context_name="render", log_dir=log_dir, extra_provenance=extra)


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_page_break(page_number: int, y: float, reserve: float) -> None:
    """Log an automatic page break (content reached the bottom margin)."""
    _log_debug(f"Page break at y={y:.1f} (reserve {reserve:g}); starting page {page_number}")


def log_render_result(
    resume_name: str,
    page_count: int,
    size_bytes: int,
    elapsed_time: float,
    output_path: Optional[Path] = None,
) -> None:
    """Log a finished render."""
    _log_success(f"{resume_name}: {page_count} page(s), {size_bytes:,} bytes ({elapsed_time:.2f}s)")
    if output_path:
        _log_info(f"  PDF: {output_path}")


def log_validation_result(source: str, result, verbose: bool = False) -> None:
    """
    Log read-back validation result.

    Args:
        source: PDF being validated (path or label)
        result: ValidationResult from validate_pdf()
        verbose: Show every issue instead of the first few
    """
    if result.is_valid:
        _log_success(f"Validation passed: {source} ({result.page_count} pages)")
    else:
        _log_error(f"Validation failed: {source} ({len(result.issues)} issues)")
        limit = len(result.issues) if verbose else 5
        for i, issue in enumerate(result.issues[:limit], 1):
            _log_error(f"  Issue {i}: {issue}")
        if len(result.issues) > limit:
            _log_error(f"  ... and {len(result.issues) - limit} more issues")
