"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from cvcraft.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Path) -> Path:
    """Setup logger for intake context."""
    return _setup_logger(context_name="intake", log_dir=log_dir)


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_parsed_document(name: str, section_types: list, used_frontmatter: bool) -> None:
    """Log a summary of a parsed markdown document."""
    source = "front-matter" if used_frontmatter else "body"
    _log_info(f"Parsed CV markdown: {name or 'untitled'} (contact from {source})")
    _log_debug(f"  Sections: {', '.join(section_types) or 'none'}")
