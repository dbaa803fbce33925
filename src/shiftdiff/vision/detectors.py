"""
Pure defect detectors (no IO):

- Contour extraction over a binary difference mask, keeping the regions
  whose area exceeds a minimum, each tagged with a display colour.
- Rendering of the qualifying regions over the mask.

All functions here are side-effect free; the RNG is passed in so callers
control colour stability.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple
import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)

CONTOUR_THICKNESS = 6


@dataclass(frozen=True)
class DefectRegion:
    index: int  # position in the full contour list
    contour: np.ndarray
    area: float
    bbox: Tuple[int, int, int, int]  # x, y, w, h
    color: Tuple[int, int, int]  # BGR


@dataclass(frozen=True)
class ContourSet:
    contours: Sequence[np.ndarray]
    hierarchy: np.ndarray | None
    regions: List[DefectRegion]


def _random_color(rng: np.random.Generator) -> Tuple[int, int, int]:
    b, g, r = rng.integers(0, 256, size=3)
    return (int(b), int(g), int(r))


def find_defect_regions(mask: np.ndarray, min_area: float, rng: np.random.Generator) -> ContourSet:
    """Trace contours in mask and keep the ones with area > min_area.

    One colour is drawn per contour, qualifying or not, so a region keeps its
    colour while the minimum-area slider moves.
    """
    if mask.size == 0:
        return ContourSet(contours=(), hierarchy=None, regions=[])
    contours, hierarchy = cv2.findContours(mask, cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE)
    regions: List[DefectRegion] = []
    for i, cnt in enumerate(contours):
        color = _random_color(rng)
        area = float(cv2.contourArea(cnt))
        if area > min_area:
            x, y, w, h = cv2.boundingRect(cnt)
            regions.append(DefectRegion(i, cnt, area, (int(x), int(y), int(w), int(h)), color))
    logger.debug("detectors: %d contours, %d above area %s", len(contours), len(regions), min_area)
    return ContourSet(contours=contours, hierarchy=hierarchy, regions=regions)


def draw_defect_regions(mask: np.ndarray, found: ContourSet) -> np.ndarray:
    """Mask merged to 3 channels with each qualifying region outlined in its colour."""
    canvas = cv2.merge([mask, mask, mask])
    for region in found.regions:
        cv2.drawContours(
            canvas,
            found.contours,
            region.index,
            region.color,
            CONTOUR_THICKNESS,
            cv2.LINE_8,
            found.hierarchy,
            0,
        )
    return canvas
