"""Config subpackage.

- diff: central knobs for regions, thresholds, slider ranges and toggles
"""
# Import diff configuration explicitly to avoid F403
from .diff import (
    REFERENCE_FILE,
    COMPARE_FILE,
    REFERENCE_RECT,
    TEMPLATE_RECT,
    THRESHOLD_VALUE,
    MAX_THRESHOLD_VALUE,
    ERODE_DILATE_SEED,
    MIN_DEFECT_AREA,
    MAX_X,
    MAX_Y,
    MAX_ERODE_DILATE_SEED,
    MAX_DEFECT_AREA,
    MATCH_METHOD,
    MATCH_METHODS,
    RNG_SEED,
    READ_MODE,
    COLOR_MODE,
    config_defaults,
)

# Re-export all diff constants for convenience
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
