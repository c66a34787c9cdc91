"""Preset values offered next to the parameter form fields."""

from typing import Dict, List


DISTANCE_PRESETS: List[Dict[str, str]] = [
    {'value': "1cm", 'label': "1 cm"},
    {'value': "1in", 'label': "1 in"},
    {'value': "10cm", 'label': "10 cm"},
    {'value': "1ft", 'label': "1 ft"},
    {'value': "1m", 'label': "1 m"},
    {'value': "inf", 'label': "∞ (Infinity)"},
]

WAVELENGTH_PRESETS: List[Dict[str, str]] = [
    {'value': "405nm", 'label': "405 nm (Violet)"},
    {'value': "450nm", 'label': "450 nm (Blue)"},
    {'value': "532nm", 'label': "532 nm (Green)"},
    {'value': "633nm", 'label': "633 nm (Red HeNe)"},
    {'value': "650nm", 'label': "650 nm (Red)"},
    {'value': "850nm", 'label': "850 nm (NIR)"},
    {'value': "1064nm", 'label': "1064 nm (Nd:YAG)"},
    {'value': "1550nm", 'label': "1550 nm (Telecom)"},
]

DIAMETER_PRESETS: List[Dict[str, str]] = [
    {'value': "6.35mm", 'label': "6.35 mm (1/4\")"},
    {'value': "12.7mm", 'label': "12.7 mm (1/2\")"},
    {'value': "25.4mm", 'label': "25.4 mm (1\")"},
    {'value': "50.8mm", 'label': "50.8 mm (2\")"},
]

FABRICATION_RECIPES: List[Dict[str, str]] = [
    {'value': "ideal", 'label': "Ideal (No fabrication effects)"},
    {'value': "binary", 'label': "Binary Phase (2 levels)"},
    {'value': "multilevel4", 'label': "Multi-level (4 levels)"},
    {'value': "multilevel8", 'label': "Multi-level (8 levels)"},
    {'value': "multilevel16", 'label': "Multi-level (16 levels)"},
    {'value': "grayscale", 'label': "Grayscale (256 levels)"},
]


def all_presets() -> Dict[str, List[Dict[str, str]]]:
    return {
        'distances': DISTANCE_PRESETS,
        'wavelengths': WAVELENGTH_PRESETS,
        'diameters': DIAMETER_PRESETS,
        'fabricationRecipes': FABRICATION_RECIPES,
    }
