"""
Pagination context logger.

Provides logging interface for pagination context with automatic [paginate] prefix.
All pagination modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from cvcraft.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[paginate]"


def setup_pagination_logger(log_dir: Path) -> Path:
    """Setup logger for pagination context."""
    return _setup_logger(context_name="paginate", log_dir=log_dir)


def _log_info(message: str) -> None:
    """Log info message with [paginate] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [paginate] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [paginate] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level pagination-specific logging helpers


def log_height(key: str, height: float, source: str) -> None:
    """Log one block height and whether it was measured or estimated."""
    _log_debug(f"  {key}: {height:.1f}px ({source})")


def log_page_closed(page_number: int, num_sections: int, height: float, usable: float) -> None:
    """Log a page boundary decision."""
    _log_debug(
        f"Closed page {page_number}: {num_sections} sections, "
        f"{height:.1f}/{usable:.1f}px ({height / usable:.0%})"
    )


def log_estimate(num_pages: int, warnings: list) -> None:
    """Log the outcome of a section-aware estimate, one warning per line."""
    _log_info(f"Estimated {num_pages} page(s)")
    for warning in warnings:
        _log_warning(warning)


def log_stale_result(generation: int, current: int) -> None:
    """Log an estimate discarded because a newer one was scheduled."""
    _log_debug(f"Discarding stale estimate (generation {generation}, current {current})")
