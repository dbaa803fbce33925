"""Diff orchestration used by the app.

Responsibility:
- Own pristine copies of the reference and compare images.
- Compose the pure helpers from shiftdiff.vision into one redraw pass:
  template match -> shift -> aligned crops -> difference -> threshold ->
  erode/dilate -> contours.
- Produce annotated previews on copies; the source images are never drawn on.
- Structured logging: INFO for the per-redraw measurements, WARNING when the
  chosen regions leave nothing to compare, DEBUG for scores.

The GUI calls run() from its trackbar callback; nothing here touches highgui.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging

import cv2
import numpy as np

from ..config.diff import MATCH_METHOD, RNG_SEED
from ..core.params import DiffParams, Rect
from ..gui import design_tokens as T
from ..vision import (
    DefectRegion,
    MatchResult,
    abs_difference,
    crop,
    draw_defect_regions,
    erode_dilate,
    estimate_shift,
    find_defect_regions,
    locate_template,
    method_flag,
    threshold_diff,
    to_bgr,
)

logger = logging.getLogger(__name__)


@dataclass
class DiffResult:
    params: DiffParams
    match: Optional[MatchResult]
    delta: Tuple[int, int]
    reference_crop_rect: Rect
    compare_crop_rect: Rect
    difference: np.ndarray
    nonzero_count: int
    reference_preview: np.ndarray
    compare_preview: np.ndarray
    difference_preview: np.ndarray
    regions: List[DefectRegion] = field(default_factory=list)

    @property
    def region_count(self) -> int:
        return len(self.regions)


class DiffController:
    """Runs one full diff pass for a parameter snapshot."""

    def __init__(
        self,
        reference: np.ndarray,
        compare: np.ndarray,
        method: str = MATCH_METHOD,
        seed: int = RNG_SEED,
    ) -> None:
        if reference.ndim != compare.ndim:
            raise ValueError("reference and compare images must both be grayscale or both be colour")
        method_flag(method)  # fail fast on unknown names
        self._reference = reference.copy()
        self._compare = compare.copy()
        self.method = method
        self.seed = seed

    @property
    def reference(self) -> np.ndarray:
        return self._reference

    @property
    def compare(self) -> np.ndarray:
        return self._compare

    def _template_rect(self, params: DiffParams) -> Rect:
        """Template region limited to the reference image and to the compare image size."""
        r = params.template.clamped(self._reference.shape)
        ch, cw = self._compare.shape[:2]
        return Rect(r.x, r.y, min(r.width, cw), min(r.height, ch))

    def _aligned_rects(self, ref_rect: Rect, cmp_rect: Rect) -> Tuple[Rect, Rect]:
        """Equal-size sub-rectangles of ref_rect/cmp_rect lying inside their images.

        Both keep the same offset relative to their parent rectangle, so pixel
        (i, j) of one crop corresponds to pixel (i, j) of the other.
        """
        ref_valid = ref_rect.clamped(self._reference.shape).shifted(-ref_rect.x, -ref_rect.y)
        cmp_valid = cmp_rect.clamped(self._compare.shape).shifted(-cmp_rect.x, -cmp_rect.y)
        common = ref_valid.intersection(cmp_valid)
        return common.shifted(ref_rect.x, ref_rect.y), common.shifted(cmp_rect.x, cmp_rect.y)

    def run(self, params: DiffParams) -> DiffResult:
        p = params.normalized()
        rng = np.random.default_rng(self.seed)
        ref_rect = p.reference
        templ_rect = self._template_rect(p)

        # Preview 1: selected reference region and template
        ref_preview = to_bgr(self._reference)
        cv2.rectangle(ref_preview, ref_rect.top_left, ref_rect.bottom_right, T.RECT_COLOR, T.REGION_THICKNESS, cv2.LINE_8)
        cv2.rectangle(ref_preview, templ_rect.top_left, templ_rect.bottom_right, T.RECT_COLOR, T.TEMPLATE_THICKNESS, cv2.LINE_8)

        match: Optional[MatchResult] = None
        delta = (0, 0)
        if templ_rect.is_empty:
            logger.warning("Template region %s lies outside the reference image; assuming no shift", p.template)
        else:
            match = locate_template(self._compare, crop(self._reference, templ_rect), self.method)
            delta = estimate_shift(templ_rect, match.location)
            logger.info("MAXIMUM MATCH LOCATION = %s;  DELTA = %s (score %.4f)", match.location, delta, match.score)

        cmp_rect = ref_rect.shifted(-delta[0], -delta[1])
        logger.info("Image_crop_rect = %s", cmp_rect)

        # Preview 2: where the reference region and the template landed
        cmp_preview = to_bgr(self._compare)
        cv2.rectangle(cmp_preview, cmp_rect.top_left, cmp_rect.bottom_right, T.RECT_COLOR, T.REGION_THICKNESS, cv2.LINE_8)
        if match is not None:
            mx, my = match.location
            cv2.rectangle(
                cmp_preview,
                (mx, my),
                (mx + templ_rect.width, my + templ_rect.height),
                T.RECT_COLOR,
                T.TEMPLATE_THICKNESS,
                cv2.LINE_8,
            )

        ref_crop_rect, cmp_crop_rect = self._aligned_rects(ref_rect, cmp_rect)
        if ref_crop_rect.is_empty:
            logger.warning("Reference region %s has no overlap with the shifted compare region", ref_rect)
            blank = np.zeros((ref_rect.height, ref_rect.width), np.uint8)
            return DiffResult(
                params=p,
                match=match,
                delta=delta,
                reference_crop_rect=ref_crop_rect,
                compare_crop_rect=cmp_crop_rect,
                difference=blank,
                nonzero_count=0,
                reference_preview=ref_preview,
                compare_preview=cmp_preview,
                difference_preview=cv2.merge([blank, blank, blank]),
            )
        if ref_crop_rect != ref_rect:
            logger.debug("Compared area trimmed to %s (reference) / %s (compare)", ref_crop_rect, cmp_crop_rect)

        diff = abs_difference(crop(self._reference, ref_crop_rect), crop(self._compare, cmp_crop_rect))
        mask = threshold_diff(diff, p.threshold)
        mask = erode_dilate(mask, p.erode_dilate_seed)
        nonzero = int(cv2.countNonZero(mask))
        logger.info("Discrepancy Pixels Count = %d", nonzero)

        found = find_defect_regions(mask, p.min_area, rng)
        logger.info("Count of regions with area > %d = %d", p.min_area, len(found.regions))

        return DiffResult(
            params=p,
            match=match,
            delta=delta,
            reference_crop_rect=ref_crop_rect,
            compare_crop_rect=cmp_crop_rect,
            difference=mask,
            nonzero_count=nonzero,
            reference_preview=ref_preview,
            compare_preview=cmp_preview,
            difference_preview=draw_defect_regions(mask, found),
            regions=found.regions,
        )
