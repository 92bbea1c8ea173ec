"""
Style Config Resolution

Brings caller-supplied style configs to one canonical shape before anything
reads them: partial configs are merged onto the defaults (shallow per group),
legacy fields are renamed via the alias table, and named presets are layered on.

Examples:
    # Partial override keeps every other default
    >>> config = resolve_style_config({"colors": {"primary": "#0d9488"}})

    # Apply presets (later overrides earlier)
    >>> config = apply_presets(config, ["colors_forest", "spacing_compact"])
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

from cvcraft.contexts.styling.defaults import (
    LEGACY_FIELD_ALIASES,
    STYLE_GROUPS,
    get_default_style_config,
)
from cvcraft.contexts.styling.logger import _log_debug, log_presets_applied
from cvcraft.exceptions import PresetNotFoundError, StyleConfigError

load_dotenv()
STYLE_PRESETS_PATH = Path(
    os.getenv(
        "CVCRAFT_PRESETS_PATH",
        str(Path(__file__).parent / "presets" / "style_presets.yaml"),
    )
)


def _as_plain_dict(config: Any) -> Dict[str, Any]:
    """Accept plain dicts or OmegaConf configs; reject everything else."""
    if config is None:
        return {}
    if isinstance(config, DictConfig):
        return OmegaConf.to_container(config, resolve=True)
    if not isinstance(config, dict):
        raise StyleConfigError(f"Style config must be a mapping, got {type(config).__name__}")
    return config


def merge_style_config(
    overrides: Optional[Dict[str, Any]] = None,
    base: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Merge a partial style config onto a base config, shallow per group.

    Each top-level group (colors, typography, ...) is merged key by key, so
    omitted keys keep the base value. Nested values inside a group are replaced
    as a whole.

    Args:
        overrides: Partial style config
        base: Config to merge onto (defaults to the system defaults)

    Returns:
        New merged config; inputs are not modified

    Raises:
        StyleConfigError: If overrides or one of its groups isn't a mapping
    """
    overrides = _as_plain_dict(overrides)
    merged = copy.deepcopy(base) if base is not None else get_default_style_config()

    for group, values in overrides.items():
        if values is None:
            continue
        if group not in STYLE_GROUPS:
            merged[group] = copy.deepcopy(values)
            continue
        if not isinstance(values, dict):
            raise StyleConfigError(f"Style group '{group}' must be a mapping, got {type(values).__name__}")
        merged[group] = {**merged.get(group, {}), **copy.deepcopy(values)}

    return merged


def _get_path(config: Dict[str, Any], path: str) -> Any:
    node: Any = config
    for key in path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def normalize_style_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Rename legacy fields to their current names.

    Applies LEGACY_FIELD_ALIASES once: a legacy value is copied to its current
    field only when the current field is unset. Legacy fields are left in place.

    Returns:
        Normalized copy of `config`
    """
    normalized = copy.deepcopy(_as_plain_dict(config))

    for legacy_path, current_path in LEGACY_FIELD_ALIASES:
        legacy_value = _get_path(normalized, legacy_path)
        if legacy_value in (None, ""):
            continue
        if _get_path(normalized, current_path) not in (None, ""):
            continue

        *parents, leaf = current_path.split(".")
        container = _get_path(normalized, ".".join(parents))
        if isinstance(container, dict):
            container[leaf] = legacy_value
            _log_debug(f"Mapped legacy field {legacy_path} -> {current_path}")

    return normalized


def resolve_style_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Normalize legacy fields, then merge onto the defaults.

    Normalizing first lets a legacy override (colors.accent) take effect before
    the default for its current field (colors.tertiary) fills the gap.
    """
    return merge_style_config(normalize_style_config(config))


def load_style_config(config_path: Path) -> Dict[str, Any]:
    """
    Load a style config YAML file and resolve it against the defaults.

    Args:
        config_path: Path to a (possibly partial) style config YAML

    Returns:
        Complete, normalized style config
    """
    raw = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    return resolve_style_config(raw)


def load_style_presets(config_path: Path = None) -> Dict[str, Any]:
    """
    Load style_presets.yaml and flatten to a single-level dict.

    Collapses nested structure: colors.forest -> colors_forest

    Args:
        config_path: Optional path to presets file (defaults to CVCRAFT_PRESETS_PATH)

    Returns:
        Flattened dict mapping preset names to partial style configs
    """
    if config_path is None:
        config_path = STYLE_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    flattened = {}
    for category, presets in nested.items():
        for name, preset in presets.items():
            flattened[f"{category}_{name}"] = preset

    return flattened


def apply_presets(
    config: Dict[str, Any],
    preset_names: List[str],
    config_path: Path = None,
) -> Dict[str, Any]:
    """
    Layer named presets onto a style config.

    Presets are applied in order with the same per-group merge as
    merge_style_config, so later presets override earlier ones.

    Args:
        config: Style config (partial or complete)
        preset_names: Preset names (e.g., ["colors_forest", "spacing_compact"])
        config_path: Optional presets file (defaults to CVCRAFT_PRESETS_PATH)

    Returns:
        New complete config with presets applied

    Raises:
        PresetNotFoundError: If a preset name is unknown
    """
    presets = load_style_presets(config_path)
    result = resolve_style_config(config)

    for preset_name in preset_names:
        if preset_name not in presets:
            raise PresetNotFoundError(preset_name, sorted(presets.keys()))
        result = merge_style_config(normalize_style_config(presets[preset_name]), base=result)

    log_presets_applied(preset_names)
    return result
