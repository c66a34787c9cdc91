"""
Test parameter validation.

Tests:
1. Default parameters are valid
2. Unparseable and out-of-range fields are errors
3. Unknown mode
4. Automatic target-type correction is reported as info
5. Rule warnings and the diffraction-limit warning
"""

from doe_studio.api.errors import ErrorCode
from doe_studio.validation import validate_params


def codes(messages):
    return [m.code for m in messages]


def test_defaults_valid():
    result = validate_params({'mode': '2d_spot_projector'})
    assert result.is_valid
    assert result.errors == []
    data = result.to_dict()
    assert data['is_valid'] is True
    assert data['errors'] == []


def test_invalid_quantity():
    result = validate_params({'mode': 'diffuser', 'wavelength': 'abc'})
    assert not result.is_valid
    assert codes(result.errors) == ['INVALID_QUANTITY']
    assert result.errors[0].field == 'wavelength'
    assert result.errors[0].suggestion
    assert result.to_dict()['fields'] == {'wavelength': 'error'}


def test_out_of_range():
    result = validate_params({'mode': '2d_spot_projector', 'deviceDiameter': '0mm'})
    assert 'OUT_OF_RANGE' in codes(result.errors)
    assert result.errors[0].field == 'deviceDiameter'

    result = validate_params({'mode': 'prism', 'prismDeflectionAngle': '95deg'})
    assert [m.field for m in result.errors] == ['prismDeflectionAngle']

    result = validate_params({'mode': '2d_spot_projector', 'targetAngle': '200deg'})
    assert [m.field for m in result.errors] == ['targetAngle']


def test_unknown_mode():
    result = validate_params({'mode': 'hologram'})
    assert codes(result.errors) == ['UNKNOWN_MODE']
    assert result.errors[0].field == 'mode'


def test_every_error_code_is_reported():
    reported = set()
    for parameters in (
        {'mode': 'diffuser', 'wavelength': 'abc'},
        {'mode': '2d_spot_projector', 'deviceDiameter': '0mm'},
        {'mode': 'hologram'},
    ):
        reported.update(codes(validate_params(parameters).errors))
    assert reported == {code.value for code in ErrorCode}


def test_target_type_correction_info():
    result = validate_params({
        'mode': '1d_splitter',
        'workingDistance': 'inf',
        'splitterTargetType': 'size',
    })
    assert result.is_valid
    assert codes(result.infos) == ['TARGET_TYPE_CORRECTED']
    assert result.infos[0].field == 'splitterTargetType'


def test_rule_and_limit_warnings():
    result = validate_params({'mode': '2d_spot_projector', 'tolerance': '0.001'})
    assert result.is_valid
    assert 'TOLERANCE_TIGHT' in codes(result.warnings)
    assert 'TOLERANCE_BELOW_LIMIT' in codes(result.warnings)
    limit = [m for m in result.warnings if m.code == 'TOLERANCE_BELOW_LIMIT'][0]
    assert limit.field == 'tolerance'
    assert result.to_dict()['fields'] == {'tolerance': 'warning'}

    result = validate_params({'mode': 'prism', 'prismTolerance': '0.0001'})
    limit = [m for m in result.warnings if m.code == 'TOLERANCE_BELOW_LIMIT'][0]
    assert limit.field == 'prismTolerance'


def test_lens_has_no_tolerance_warnings():
    result = validate_params({'mode': 'lens'})
    assert result.is_valid
    assert result.warnings == []


if __name__ == "__main__":
    test_defaults_valid()
    test_invalid_quantity()
    test_out_of_range()
    test_unknown_mode()
    test_every_error_code_is_reported()
    test_target_type_correction_info()
    test_rule_and_limit_warnings()
    test_lens_has_no_tolerance_warnings()
    print("All validation tests passed")
