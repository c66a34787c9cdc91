"""
Test the tolerance & resolution engine.

Tests:
1. Angle-mode minimum tolerance against the closed form
2. Pixel ceiling cap in size mode
3. Fixed fallback for degenerate input
4. Square array side from the linear element count
"""

import math

from doe_studio.core.tolerance import (
    PIXEL_CEILING,
    ToleranceLimits,
    angle_mode_limits,
    calculate_min_tolerance,
    max_array_size,
    size_mode_limits,
)


def _sig(x, digits=6):
    return float(f"{x:.{digits - 1}e}")


def test_angle_mode_min_tolerance():
    limits = calculate_min_tolerance(532, 12.7, 15, None, is_angle_mode=True)
    theta = 15 * math.pi / 180
    expected = (532e-6 / 12.7 / math.cos(theta) / theta) * 100
    assert _sig(limits.min_tolerance_percent) == _sig(expected), \
        f"{limits.min_tolerance_percent} != {expected}"
    # floor(1 / ratio) is about 6036, above the ceiling
    assert limits.max_effective_pixels == PIXEL_CEILING


def test_angle_mode_below_ceiling():
    # Long wavelength on a small aperture resolves few elements
    limits = angle_mode_limits(1550, 1.0, 5)
    ratio = 1550e-6 / 1.0 / math.cos(math.radians(5)) / math.radians(5)
    assert limits.max_effective_pixels == math.floor(1 / ratio)
    assert limits.max_effective_pixels < PIXEL_CEILING


def test_size_mode_never_exceeds_ceiling():
    for diameter in (0.5, 6.35, 12.7, 50.8):
        for size in (0.001, 0.5, 1, 100, 1e6):
            limits = size_mode_limits(diameter, size)
            assert limits.max_effective_pixels <= PIXEL_CEILING, (diameter, size)
            expected = (diameter / PIXEL_CEILING) / size * 100
            assert math.isclose(limits.min_tolerance_percent, expected)


def test_degenerate_inputs_fallback():
    fallback = ToleranceLimits(min_tolerance_percent=0.1, max_effective_pixels=3000)
    assert calculate_min_tolerance(532, 12.7, 0, None, is_angle_mode=True) == fallback
    assert calculate_min_tolerance(532, 12.7, -3, None, is_angle_mode=True) == fallback
    assert calculate_min_tolerance(532, 12.7, 15, 0, is_angle_mode=False) == fallback
    assert calculate_min_tolerance(532, 12.7, 15, None, is_angle_mode=False) == fallback
    assert calculate_min_tolerance(532, 0, 15, None, is_angle_mode=True) == fallback


def test_custom_ceiling():
    limits = size_mode_limits(12.7, 100, pixel_ceiling=500)
    assert limits.max_effective_pixels == 500


def test_max_array_size():
    assert max_array_size(3000) == 54
    assert max_array_size(2916) == 54
    assert max_array_size(2915) == 53
    assert max_array_size(0) == 0


def test_limits_to_dict():
    assert ToleranceLimits(0.25, 400).to_dict() == {
        'minTolerancePercent': 0.25,
        'maxEffectivePixels': 400,
    }


if __name__ == "__main__":
    test_angle_mode_min_tolerance()
    test_angle_mode_below_ceiling()
    test_size_mode_never_exceeds_ceiling()
    test_degenerate_inputs_fallback()
    test_custom_ceiling()
    test_max_array_size()
    test_limits_to_dict()
    print("All tolerance tests passed")
