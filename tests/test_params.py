"""
Test the parameter model and its load boundary.

Tests:
1. Missing fields are filled with defaults
2. Infinite distance forces angle targets for every target mode
3. Legacy generic keys in older templates
4. Unknown modes are rejected
5. Field resolution flags unparseable values
"""

import math

from doe_studio.params import (
    FIELD_DEFAULTS,
    TARGET_KEYS,
    CustomParams,
    DiffuserParams,
    DOEMode,
    FieldResolver,
    LensArrayParams,
    LensParams,
    PrismParams,
    SplitterParams,
    SpotProjectorParams,
    TargetType,
    load_params,
    normalize_dict,
    to_dict,
)


TARGET_MODES = [
    DOEMode.DIFFUSER,
    DOEMode.SPLITTER_1D,
    DOEMode.SPOT_PROJECTOR_2D,
    DOEMode.CUSTOM,
]


def test_defaults_filled():
    params = load_params({})
    assert isinstance(params, SpotProjectorParams), type(params)
    assert params.wavelength == '532nm'
    assert params.device_diameter == '12.7mm'
    assert params.working_distance == 'inf'
    assert params.array_rows == '50' and params.array_cols == '50'
    assert params.target.target_angle == '30deg'
    assert params.target.tolerance == '1'

    # Empty strings count as missing
    params = load_params({'mode': 'diffuser', 'wavelength': '  '})
    assert isinstance(params, DiffuserParams)
    assert params.wavelength == FIELD_DEFAULTS['wavelength']


def test_mode_classes():
    expected = {
        'diffuser': DiffuserParams,
        '1d_splitter': SplitterParams,
        '2d_spot_projector': SpotProjectorParams,
        'lens': LensParams,
        'lens_array': LensArrayParams,
        'prism': PrismParams,
        'custom': CustomParams,
    }
    for mode, cls in expected.items():
        params = load_params({'mode': mode})
        assert type(params) is cls, f"{mode}: {type(params)}"
        assert params.mode.value == mode

    assert isinstance(load_params({'mode': 'lens_array'}), LensParams)
    assert load_params({'mode': 'lens'}).target_spec is None
    assert load_params({'mode': 'prism'}).tolerance_field == ('prismTolerance', '1')


def test_infinite_distance_forces_angle():
    for mode in TARGET_MODES:
        keys = TARGET_KEYS[mode]
        params = load_params({
            'mode': mode.value,
            'workingDistance': 'inf',
            keys.target_type: 'size',
        })
        assert params.target_spec.target_type == TargetType.ANGLE, \
            f"{mode.value} kept a size target at infinite distance"


def test_finite_distance_keeps_size():
    for mode in TARGET_MODES:
        keys = TARGET_KEYS[mode]
        params = load_params({
            'mode': mode.value,
            'workingDistance': '100mm',
            keys.target_type: 'size',
        })
        assert params.target_spec.target_type == TargetType.SIZE, mode.value


def test_normalize_dict_forces_every_mode():
    """Stored blobs carry target types for all modes; all are corrected."""
    blob = {'mode': 'diffuser', 'workingDistance': 'Infinity'}
    for keys in TARGET_KEYS.values():
        blob[keys.target_type] = 'size'

    normalized = normalize_dict(blob)
    for keys in TARGET_KEYS.values():
        assert normalized[keys.target_type] == 'angle', keys.target_type
    # Input is not modified
    assert blob['targetType'] == 'size'


def test_legacy_generic_keys():
    params = load_params({
        'mode': 'diffuser',
        'targetAngle': '10deg',
        'tolerance': '5',
    })
    assert params.target.target_angle == '10deg'
    assert params.target.tolerance == '5'

    # Mode-specific keys win over generic ones
    params = load_params({
        'mode': 'diffuser',
        'targetAngle': '10deg',
        'diffuserAngle': '20deg',
    })
    assert params.target.target_angle == '20deg'


def test_legacy_splitter_and_prism():
    splitter = load_params({'mode': '1d_splitter', 'arrayRows': '1', 'arrayCols': '7'})
    assert splitter.splitter_count == '7', splitter.splitter_count

    splitter = load_params({'mode': '1d_splitter', 'splitterCount': '3', 'arrayCols': '7'})
    assert splitter.splitter_count == '3'

    prism = load_params({'mode': 'prism', 'targetAngle': '5deg', 'tolerance': '2'})
    assert prism.deflection_angle == '5deg'
    assert prism.tolerance == '2'


def test_unknown_mode_rejected():
    try:
        load_params({'mode': 'hologram'})
    except ValueError as e:
        assert 'hologram' in str(e)
    else:
        raise AssertionError("unknown mode was accepted")


def test_to_dict_reload():
    params = load_params({
        'mode': 'lens_array',
        'lensArraySize': '8',
        'lensArrayFocalLength': '20mm',
    })
    data = to_dict(params)
    assert data['lensArraySize'] == '8'
    assert 'lensFocalLength' not in data
    assert load_params(data) == params

    custom = load_params({
        'mode': 'custom',
        'customPatternInfo': {
            'maxPixelValue': 255, 'brightnessPercent': 12.5, 'width': 64, 'height': 32,
        },
    })
    assert custom.pattern_shape == (32, 64)
    assert to_dict(custom)['customPatternInfo']['width'] == 64


def test_non_positive_pattern_info_dropped():
    for width, height in ((0, 0), (-4, -4), (64, 0)):
        custom = load_params({
            'mode': 'custom',
            'customPatternInfo': {
                'maxPixelValue': 255, 'brightnessPercent': 50.0,
                'width': width, 'height': height,
            },
        })
        assert custom.pattern_info is None, (width, height)
        assert custom.pattern_shape is None
        assert 'customPatternInfo' not in to_dict(custom)


def test_field_resolver_defaults_invalid():
    resolver = FieldResolver()
    assert resolver.wavelength_nm('wavelength', 'abc') == 532.0
    assert resolver.length_mm('deviceDiameter', '1in') == 25.4
    assert resolver.working_distance_mm('workingDistance', 'inf') == math.inf
    assert resolver.count('arrayRows', '0') == 50
    assert resolver.percent('tolerance', '-1') == 1.0
    assert resolver.invalid_fields == ['wavelength', 'arrayRows', 'tolerance']


if __name__ == "__main__":
    test_defaults_filled()
    test_mode_classes()
    test_infinite_distance_forces_angle()
    test_finite_distance_keeps_size()
    test_normalize_dict_forces_every_mode()
    test_legacy_generic_keys()
    test_legacy_splitter_and_prism()
    test_unknown_mode_rejected()
    test_to_dict_reload()
    test_non_positive_pattern_info_dropped()
    test_field_resolver_defaults_invalid()
    print("All parameter tests passed")
