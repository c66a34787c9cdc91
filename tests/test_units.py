"""
Test unit parsing and conversion.

Tests:
1. Length, wavelength and angle conversion constants
2. Unknown units pass the value through
3. Unparseable input yields the invalid sentinel
4. Infinite working distance sentinel
"""

import math

from doe_studio.core.units import (
    INVALID_QUANTITY,
    Quantity,
    convert_to_degrees,
    convert_to_mm,
    convert_to_nm,
    is_infinite_distance,
    parse_count,
    parse_number,
    parse_quantity,
    working_distance_to_mm,
)


def test_length_conversion():
    """Length suffixes convert to mm."""
    assert convert_to_mm("1in") == 25.4
    assert convert_to_mm("2.5cm") == 25.0
    assert convert_to_mm("1m") == 1000.0
    assert convert_to_mm("12.7mm") == 12.7
    assert convert_to_mm("1ft") == 304.8
    assert math.isclose(convert_to_mm("500um"), 0.5)
    assert math.isclose(convert_to_mm("500µm"), 0.5)


def test_wavelength_conversion():
    assert convert_to_nm("532nm") == 532.0
    assert math.isclose(convert_to_nm("1.55um"), 1550.0)
    assert math.isclose(convert_to_nm("0.000633mm"), 633.0)


def test_angle_conversion():
    assert convert_to_degrees("30deg") == 30.0
    assert math.isclose(convert_to_degrees("π rad"), 180.0)
    assert math.isclose(convert_to_degrees("0.5pi rad"), 90.0)
    assert math.isclose(convert_to_degrees("1rad"), 180.0 / math.pi)


def test_unknown_unit_passes_through():
    """Unrecognized units leave the value unconverted."""
    assert convert_to_mm("7furlong") == 7.0
    assert convert_to_nm("600") == 600.0
    assert convert_to_degrees("30°") == 30.0


def test_unparseable_is_sentinel():
    """Non-quantity strings parse to (0, '') and are flagged invalid."""
    for raw in ("abc", "", "12.7 mm extra", "-5mm", "inf"):
        parsed = parse_quantity(raw)
        assert parsed == INVALID_QUANTITY, f"{raw!r} parsed as {parsed}"
        assert not parsed.is_valid

    assert parse_quantity("12.7mm") == Quantity(12.7, "mm")
    assert parse_quantity("12.7 MM") == Quantity(12.7, "mm")
    assert parse_quantity(".5cm") == Quantity(0.5, "cm")
    assert parse_quantity(3) == Quantity(3.0, "")
    assert not parse_quantity(None).is_valid
    assert not parse_quantity(True).is_valid


def test_infinite_distance():
    for raw in ("inf", "INF", "Infinity", " inf "):
        assert is_infinite_distance(raw), raw
        assert working_distance_to_mm(raw) == math.inf
    assert not is_infinite_distance("100mm")
    assert working_distance_to_mm("10cm") == 100.0


def test_number_and_count():
    assert parse_number("0.5") == 0.5
    assert parse_number("2%") == 2.0
    assert parse_number("abc") is None
    assert parse_count("50") == 50
    assert parse_count("7.9") == 7
    assert parse_count("") is None


if __name__ == "__main__":
    test_length_conversion()
    test_wavelength_conversion()
    test_angle_conversion()
    test_unknown_unit_passes_through()
    test_unparseable_is_sentinel()
    test_infinite_distance()
    test_number_and_count()
    print("All unit tests passed")
