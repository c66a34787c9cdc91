"""
Custom pattern preprocessing.

Uploaded images are decoded, resized, clamped, padded to a centered
square on black and converted to 8-bit grayscale. The processed pattern
is summarized by a PatternInfo and returned as a PNG data URL for the
preview panel. Preset patterns (cross, ring, grid) go through the same
pipeline.
"""

import base64
import math
from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from ..params.base import PatternPreset, ResizeMode
from ..params.modes import PatternInfo


MAX_PATTERN_SIDE = 3000
PRESET_SIZE = 256

# ITU-R BT.601 luminance weights
LUMINANCE_WEIGHTS = (0.299, 0.587, 0.114)


@dataclass
class ProcessedPattern:
    """Result of preprocessing a pattern image.

    Attributes:
        image: Square grayscale image [N, N], uint8
        info: Max value, brightness and final size
        preview: PNG data URL of ``image``
    """
    image: np.ndarray
    info: PatternInfo
    preview: str

    def info_dict(self) -> dict:
        return {
            'maxPixelValue': self.info.max_pixel_value,
            'brightnessPercent': self.info.brightness_percent,
            'width': self.info.width,
            'height': self.info.height,
        }


def decode_image(image_data: str) -> Image.Image:
    """Decode a base64 string or data URL into a PIL image.

    Raises:
        ValueError: If the data cannot be decoded as an image
    """
    if image_data.startswith('data:'):
        _, _, image_data = image_data.partition(',')
    try:
        img_bytes = base64.b64decode(image_data, validate=False)
        img = Image.open(BytesIO(img_bytes))
        img.load()
    except Exception as e:
        raise ValueError(f"Could not decode image data: {e}")
    return img


def resize_dimensions(
    width: int,
    height: int,
    resize_mode: ResizeMode = ResizeMode.PERCENTAGE,
    percentage: Optional[float] = None,
    target_width: Optional[int] = None,
    target_height: Optional[int] = None
) -> Tuple[int, int]:
    """Target (width, height) after resizing, clamped to 1..MAX_PATTERN_SIDE.

    Percentage mode scales both sides; pixel mode uses the explicit sizes
    and keeps the original side where one is not given.
    """
    if resize_mode == ResizeMode.PERCENTAGE:
        scale = (percentage if percentage and percentage > 0 else 100.0) / 100.0
        new_width = int(math.floor(width * scale + 0.5))
        new_height = int(math.floor(height * scale + 0.5))
    else:
        new_width = target_width if target_width and target_width > 0 else width
        new_height = target_height if target_height and target_height > 0 else height

    new_width = min(max(new_width, 1), MAX_PATTERN_SIDE)
    new_height = min(max(new_height, 1), MAX_PATTERN_SIDE)
    return new_width, new_height


def to_grayscale(rgb: np.ndarray) -> np.ndarray:
    """Luminance of an RGB array [H, W, 3], rounded to uint8."""
    r, g, b = LUMINANCE_WEIGHTS
    gray = r * rgb[..., 0] + g * rgb[..., 1] + b * rgb[..., 2]
    return np.clip(np.floor(gray + 0.5), 0, 255).astype(np.uint8)


def to_data_url(image: np.ndarray) -> str:
    """Encode a grayscale uint8 array as a PNG data URL."""
    buffer = BytesIO()
    Image.fromarray(image).save(buffer, format='PNG')
    encoded = base64.b64encode(buffer.getvalue()).decode('ascii')
    return f"data:image/png;base64,{encoded}"


def preprocess_image(
    img: Image.Image,
    resize_mode: ResizeMode = ResizeMode.PERCENTAGE,
    percentage: Optional[float] = None,
    target_width: Optional[int] = None,
    target_height: Optional[int] = None
) -> ProcessedPattern:
    """Resize, pad to a centered black square and convert to grayscale.

    Transparent regions end up black.
    """
    width, height = resize_dimensions(
        img.width, img.height, resize_mode, percentage, target_width, target_height
    )
    rgba = img.convert('RGBA')
    if (width, height) != rgba.size:
        rgba = rgba.resize((width, height), Image.LANCZOS)

    side = max(width, height)
    canvas = Image.new('RGB', (side, side), (0, 0, 0))
    canvas.paste(rgba, ((side - width) // 2, (side - height) // 2), rgba)

    gray = to_grayscale(np.asarray(canvas, dtype=np.float64))
    max_value = int(gray.max())
    info = PatternInfo(
        max_pixel_value=max_value,
        brightness_percent=max_value / 255 * 100,
        width=side,
        height=side,
    )
    return ProcessedPattern(image=gray, info=info, preview=to_data_url(gray))


def preset_pattern(preset: PatternPreset, size: int = PRESET_SIZE) -> np.ndarray:
    """Binary preset pattern [size, size], uint8 (0 or 255).

    Raises:
        ValueError: For PatternPreset.NONE
    """
    image = np.zeros((size, size), dtype=np.uint8)
    center = size / 2

    if preset == PatternPreset.CROSS:
        half_bar = max(size // 16, 1)
        lo, hi = int(center) - half_bar, int(center) + half_bar
        image[lo:hi, :] = 255
        image[:, lo:hi] = 255

    elif preset == PatternPreset.RING:
        y, x = np.indices((size, size))
        r = np.hypot(x + 0.5 - center, y + 0.5 - center)
        outer = size / 2
        image[(r <= outer) & (r >= outer - size / 16)] = 255

    elif preset == PatternPreset.GRID:
        # 4 x 4 blocks separated by gaps
        cells = 4
        gap = max(size // 16, 1)
        block = (size - gap * (cells - 1)) // cells
        for i in range(cells):
            for j in range(cells):
                y0 = i * (block + gap)
                x0 = j * (block + gap)
                image[y0:y0 + block, x0:x0 + block] = 255

    else:
        raise ValueError(f"No image for pattern preset: {preset.value}")

    return image


def process_pattern(
    image_data: Optional[str] = None,
    preset: PatternPreset = PatternPreset.NONE,
    resize_mode: ResizeMode = ResizeMode.PERCENTAGE,
    percentage: Optional[float] = None,
    target_width: Optional[int] = None,
    target_height: Optional[int] = None
) -> ProcessedPattern:
    """Preprocess an uploaded image or, if none is given, a preset.

    Raises:
        ValueError: If neither is given or the image cannot be decoded
    """
    if image_data:
        img = decode_image(image_data)
    elif preset != PatternPreset.NONE:
        img = Image.fromarray(preset_pattern(preset))
    else:
        raise ValueError("Either image_data or a pattern preset is required")

    return preprocess_image(img, resize_mode, percentage, target_width, target_height)
