"""Vision package: pure image ops, matching and defect detection.

Submodules:
- preprocess: stateless crop / difference / threshold / morphology helpers
- matcher: template matching and shift estimation
- detectors: contour-based defect regions and their rendering
"""
from .preprocess import (
    crop,
    abs_difference,
    threshold_diff,
    morph_kernel,
    erode_dilate,
    to_bgr,
)
from .matcher import MatchResult, locate_template, estimate_shift, method_flag
from .detectors import ContourSet, DefectRegion, find_defect_regions, draw_defect_regions

__all__ = [
    "crop",
    "abs_difference",
    "threshold_diff",
    "morph_kernel",
    "erode_dilate",
    "to_bgr",
    "MatchResult",
    "locate_template",
    "estimate_shift",
    "method_flag",
    "ContourSet",
    "DefectRegion",
    "find_defect_regions",
    "draw_defect_regions",
]
