"""
Template matching used to estimate the shift between the two images.

This module provides pure functions that take numpy arrays and return the
best match location and the resulting shift. The controller composes them
with cropping and differencing.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple
import logging

import cv2
import numpy as np

from ..config.diff import MATCH_METHOD
from ..core.params import Rect

logger = logging.getLogger(__name__)

METHODS: Dict[str, int] = {
    "ccorr_normed": cv2.TM_CCORR_NORMED,
    "ccoeff_normed": cv2.TM_CCOEFF_NORMED,
    "sqdiff_normed": cv2.TM_SQDIFF_NORMED,
    "ccorr": cv2.TM_CCORR,
    "ccoeff": cv2.TM_CCOEFF,
    "sqdiff": cv2.TM_SQDIFF,
}

# For these the best match is the minimum of the response map
_MIN_IS_BEST = {"sqdiff", "sqdiff_normed"}


@dataclass(frozen=True)
class MatchResult:
    location: Tuple[int, int]
    score: float
    method: str


def method_flag(name: str) -> int:
    """Map a method name (e.g. 'ccorr_normed') to its cv2.TM_* constant."""
    try:
        return METHODS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown match method {name!r}; expected one of {', '.join(METHODS)}") from None


def locate_template(image: np.ndarray, template: np.ndarray, method: str = MATCH_METHOD) -> MatchResult:
    """Return the top-left location of the best template match inside image."""
    if template.size == 0:
        raise ValueError("template is empty")
    th, tw = template.shape[:2]
    ih, iw = image.shape[:2]
    if th > ih or tw > iw:
        raise ValueError(f"template {tw}x{th} is larger than the searched image {iw}x{ih}")

    name = method.strip().lower()
    res = cv2.matchTemplate(image, template, method_flag(name))
    min_val, max_val, min_loc, max_loc = cv2.minMaxLoc(res)
    if name in _MIN_IS_BEST:
        loc, score = min_loc, min_val
    else:
        loc, score = max_loc, max_val
    logger.debug("match: method=%s loc=%s score=%.4f", name, loc, score)
    return MatchResult(location=(int(loc[0]), int(loc[1])), score=float(score), method=name)


def estimate_shift(template_rect: Rect, location: Tuple[int, int]) -> Tuple[int, int]:
    """Delta between where the template was cut and where it was found.

    A feature at reference position p appears at p - delta in the compare
    image.
    """
    return (template_rect.x - int(location[0]), template_rect.y - int(location[1]))
