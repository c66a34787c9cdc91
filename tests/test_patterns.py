"""
Test custom pattern preprocessing.

Tests:
1. Resize dimensions and clamping
2. Grayscale conversion
3. Padding to a centered square
4. Preset patterns
5. Decoding uploaded images
"""

import base64
from io import BytesIO

import numpy as np
from PIL import Image

from doe_studio.params.base import PatternPreset, ResizeMode
from doe_studio.patterns import (
    MAX_PATTERN_SIDE,
    decode_image,
    preprocess_image,
    preset_pattern,
    process_pattern,
    resize_dimensions,
    to_grayscale,
)


def encode_png(img, data_url=True):
    buffer = BytesIO()
    img.save(buffer, format='PNG')
    encoded = base64.b64encode(buffer.getvalue()).decode('ascii')
    return f"data:image/png;base64,{encoded}" if data_url else encoded


def test_resize_dimensions():
    assert resize_dimensions(100, 60, ResizeMode.PERCENTAGE, 50) == (50, 30)
    assert resize_dimensions(100, 60, ResizeMode.PERCENTAGE, None) == (100, 60)
    assert resize_dimensions(4000, 1000, ResizeMode.PERCENTAGE, 100) == (MAX_PATTERN_SIDE, 1000)
    assert resize_dimensions(100, 60, ResizeMode.PIXELS, target_width=40) == (40, 60)
    assert resize_dimensions(100, 60, ResizeMode.PIXELS, target_width=40, target_height=10) == (40, 10)
    assert resize_dimensions(3, 3, ResizeMode.PERCENTAGE, 1) == (1, 1)


def test_grayscale_weights():
    rgb = np.array([[[255, 0, 0], [0, 255, 0], [0, 0, 255], [255, 255, 255]]], dtype=np.float64)
    gray = to_grayscale(rgb)
    assert gray.dtype == np.uint8
    assert gray.tolist() == [[76, 150, 29, 255]]


def test_pad_to_centered_square():
    img = Image.new('RGB', (100, 50), (255, 255, 255))
    processed = preprocess_image(img)

    assert processed.image.shape == (100, 100)
    # 25 black rows above and below
    assert processed.image[:25].max() == 0
    assert processed.image[75:].max() == 0
    assert processed.image[25:75].min() == 255
    assert processed.info_dict() == {
        'maxPixelValue': 255,
        'brightnessPercent': 100.0,
        'width': 100,
        'height': 100,
    }
    assert processed.preview.startswith("data:image/png;base64,")


def test_transparent_is_black():
    img = Image.new('RGBA', (20, 20), (255, 255, 255, 0))
    processed = preprocess_image(img)
    assert processed.info.max_pixel_value == 0
    assert processed.info.brightness_percent == 0.0


def test_presets():
    for preset in (PatternPreset.CROSS, PatternPreset.RING, PatternPreset.GRID):
        image = preset_pattern(preset)
        assert image.shape == (256, 256), preset
        assert set(np.unique(image).tolist()) == {0, 255}, preset

    cross = preset_pattern(PatternPreset.CROSS)
    assert cross[128, 0] == 255 and cross[0, 128] == 255 and cross[0, 0] == 0

    try:
        preset_pattern(PatternPreset.NONE)
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError")


def test_process_uploaded_image():
    img = Image.new('RGB', (100, 50), (255, 0, 0))
    for data in (encode_png(img), encode_png(img, data_url=False)):
        processed = process_pattern(image_data=data)
        assert processed.info.width == 100 and processed.info.height == 100
        assert processed.info.max_pixel_value == 76

    processed = process_pattern(image_data=encode_png(img), percentage=50)
    assert processed.image.shape == (50, 50)


def test_process_preset_and_errors():
    processed = process_pattern(preset=PatternPreset.RING, percentage=50)
    assert processed.image.shape == (128, 128)
    assert processed.info.max_pixel_value == 255

    for kwargs in ({}, {'image_data': 'not-an-image'}):
        try:
            process_pattern(**kwargs)
        except ValueError:
            pass
        else:
            raise AssertionError(f"expected ValueError for {kwargs}")


def test_decode_preview_round_trip():
    processed = process_pattern(preset=PatternPreset.CROSS)
    decoded = np.asarray(decode_image(processed.preview))
    assert np.array_equal(decoded, processed.image)


if __name__ == "__main__":
    test_resize_dimensions()
    test_grayscale_weights()
    test_pad_to_centered_square()
    test_transparent_is_black()
    test_presets()
    test_process_uploaded_image()
    test_process_preset_and_errors()
    test_decode_preview_round_trip()
    print("All pattern tests passed")
