"""
Styling context logger.

Provides logging interface for styling context with automatic [style] prefix.
All styling modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from cvcraft.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[style]"


def setup_styling_logger(log_dir: Path) -> Path:
    """Setup logger for styling context."""
    return _setup_logger(context_name="style", log_dir=log_dir)


def _log_info(message: str) -> None:
    """Log info message with [style] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [style] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [style] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_presets_applied(preset_names: list) -> None:
    """Log which presets were layered onto a config."""
    if preset_names:
        _log_info(f"Applied presets: {', '.join(preset_names)}")


def log_compiled_tokens(tokens: dict) -> None:
    """Log a compiled token map summary."""
    _log_debug(f"Compiled {len(tokens)} style tokens")
    _log_debug(f"  --main-width: {tokens.get('--main-width')}")
    _log_debug(f"  --title-font-size: {tokens.get('--title-font-size')}")
