"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from cvcraft.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, mode: str = "web") -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        mode: Output mode recorded in the provenance header ("web" or "pdf")

    Returns:
        Path to log file

    Example:
        from cvcraft.contexts.rendering.logger import setup_rendering_logger

        log_file = setup_rendering_logger(log_dir, mode="pdf")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Render mode": mode},
    )


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


def log_document_start(name: str, num_sections: int, layout: str, mode: str) -> None:
    """Log start of a document render with context."""
    _log_info(f"Rendering CV: {name or 'untitled'}")
    _log_debug(f"  Sections: {num_sections}")
    _log_debug(f"  Layout: {layout}")
    _log_debug(f"  Mode: {mode}")


def log_document_result(html_length: int, css_length: int, elapsed_time: float) -> None:
    """Log the size of a finished render."""
    _log_success(f"Rendered {html_length} chars of HTML, {css_length} chars of CSS ({elapsed_time:.3f}s)")


def log_blocked_url(url: str) -> None:
    """Log a link href replaced by the safe placeholder."""
    _log_warning(f"Blocked unsafe URL: {url[:80]!r}")
