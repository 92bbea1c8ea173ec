"""Unit tests for CSS length helpers."""

import pytest

from cvcraft.utils.css_units import (
    ensure_units,
    format_number,
    parse_length,
    scale_length,
    subtract_lengths,
)


@pytest.mark.unit
def test_parse_length():
    assert parse_length("10pt") == (10.0, "pt")
    assert parse_length(" 1.5rem ") == (1.5, "rem")
    assert parse_length("12") == (12.0, "")
    assert parse_length("calc(1px + 2px)") is None
    assert parse_length(None) is None


@pytest.mark.unit
def test_scale_length_keeps_unit_and_one_decimal():
    assert scale_length(3.2, "10pt") == "32.0pt"
    assert scale_length(3.2, "12px") == "38.4px"
    assert scale_length(1.0, "1rem") == "1.0rem"
    assert scale_length(2, "big") is None


@pytest.mark.unit
def test_scale_length_monotonic_in_scale():
    """Larger scales never produce smaller sizes for the same base."""
    sizes = [float(scale_length(scale, "11px")[:-2]) for scale in (0.5, 1.0, 1.3, 2.4, 3.2)]
    assert sizes == sorted(sizes)


@pytest.mark.unit
def test_format_number():
    assert format_number(126.0) == "126"
    assert format_number(0.5) == "0.5"
    assert format_number(1 / 3) == "0.3333"


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        ("20mm", "20mm"),
        (15, "15mm"),
        ("0", "0mm"),
        ("", "20mm"),
        (None, "20mm"),
        ("1in", "1in"),
    ],
)
def test_ensure_units(value, expected):
    assert ensure_units(value, default="20mm") == expected


@pytest.mark.unit
def test_subtract_lengths_same_unit_is_numeric():
    assert subtract_lengths("210mm", "84mm") == "126mm"
    assert subtract_lengths("800px", "250.5px") == "549.5px"


@pytest.mark.unit
def test_subtract_lengths_unitless_means_mm():
    assert subtract_lengths("210", "84mm") == "126mm"


@pytest.mark.unit
@pytest.mark.parametrize(
    "page,sidebar",
    [("210mm", "30%"), ("100%", "30%"), ("8.5in", "3in"), ("210mm", "80px")],
)
def test_subtract_lengths_defers_to_calc(page, sidebar):
    assert subtract_lengths(page, sidebar) == f"calc({page} - {sidebar})"
