"""Custom pattern preprocessing and preset patterns."""

from .custom import (
    MAX_PATTERN_SIDE,
    ProcessedPattern,
    decode_image,
    resize_dimensions,
    to_grayscale,
    preprocess_image,
    preset_pattern,
    process_pattern,
)

__all__ = [
    "MAX_PATTERN_SIDE",
    "ProcessedPattern",
    "decode_image",
    "resize_dimensions",
    "to_grayscale",
    "preprocess_image",
    "preset_pattern",
    "process_pattern",
]
