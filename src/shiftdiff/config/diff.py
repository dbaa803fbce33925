"""
Diff configuration knobs centralization.

All default regions, thresholds, slider ranges and environment toggles live
here. Controllers, the GUI and ConfigManager import from this module instead
of hardcoding values.
"""
from __future__ import annotations

from typing import Dict, Tuple
import os

# Input files
REFERENCE_FILE: str = "reference.tiff"
COMPARE_FILE: str = "compare.tiff"

# Reference region (x, y, width, height); leave room around it for the shift
REFERENCE_RECT: Tuple[int, int, int, int] = (20, 100, 1200, 900)
# Template region; needs a prominent feature, tall because y-shift dominates
TEMPLATE_RECT: Tuple[int, int, int, int] = (1085, 100, 100, 300)

# Difference processing
THRESHOLD_VALUE: int = 50
MAX_THRESHOLD_VALUE: int = 255
ERODE_DILATE_SEED: int = 0
MIN_DEFECT_AREA: int = 300

# Slider upper bounds
MAX_X: int = 1400
MAX_Y: int = 1000
MAX_ERODE_DILATE_SEED: int = 50
MAX_DEFECT_AREA: int = 2000

# Template matching
MATCH_METHOD: str = "ccorr_normed"
MATCH_METHODS: Tuple[str, ...] = (
    "ccorr_normed",
    "ccoeff_normed",
    "sqdiff_normed",
    "ccorr",
    "ccoeff",
    "sqdiff",
)

# Contour colours
RNG_SEED: int = 12345

# Image read mode: "grayscale" or "color"
READ_MODE: str = "grayscale"

# Environment flags
COLOR_MODE: bool = os.environ.get("SD_COLOR", "0") == "1"


def config_defaults() -> Dict[str, str]:
    """Return the DEFAULT section values ConfigManager seeds config.ini with."""
    rx, ry, rw, rh = REFERENCE_RECT
    tx, ty, tw, th = TEMPLATE_RECT
    return {
        "log_level": "INFO",
        "reference_file": REFERENCE_FILE,
        "compare_file": COMPARE_FILE,
        "read_mode": "color" if COLOR_MODE else READ_MODE,
        "match_method": MATCH_METHOD,
        "ref_x": str(rx),
        "ref_y": str(ry),
        "ref_width": str(rw),
        "ref_height": str(rh),
        "templ_x": str(tx),
        "templ_y": str(ty),
        "templ_width": str(tw),
        "templ_height": str(th),
        "threshold_value": str(THRESHOLD_VALUE),
        "erode_dilate_seed": str(ERODE_DILATE_SEED),
        "min_defect_area": str(MIN_DEFECT_AREA),
        "rng_seed": str(RNG_SEED),
    }


__all__ = [
    "REFERENCE_FILE",
    "COMPARE_FILE",
    "REFERENCE_RECT",
    "TEMPLATE_RECT",
    "THRESHOLD_VALUE",
    "MAX_THRESHOLD_VALUE",
    "ERODE_DILATE_SEED",
    "MIN_DEFECT_AREA",
    "MAX_X",
    "MAX_Y",
    "MAX_ERODE_DILATE_SEED",
    "MAX_DEFECT_AREA",
    "MATCH_METHOD",
    "MATCH_METHODS",
    "RNG_SEED",
    "READ_MODE",
    "COLOR_MODE",
    "config_defaults",
]
