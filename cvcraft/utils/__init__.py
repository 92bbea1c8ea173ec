"""
Shared utilities for CV-Craft.

Common functionality used across contexts:
- Logger setup with provenance
- CSS length parsing and arithmetic
"""

from cvcraft.utils.css_units import ensure_units, parse_length, scale_length, subtract_lengths

__all__ = ["ensure_units", "parse_length", "scale_length", "subtract_lengths"]
