"""OpenCV highgui front end: three windows and their trackbars.

Every trackbar shares one callback. It re-reads all positions into a
DiffParams snapshot, runs the DiffController and re-shows the three
previews, so the screen always reflects the current slider state.
"""
from __future__ import annotations

from typing import Callable, Optional
import logging

import cv2

from ..config.diff import (
    MAX_X,
    MAX_Y,
    MAX_THRESHOLD_VALUE,
    MAX_ERODE_DILATE_SEED,
    MAX_DEFECT_AREA,
)
from ..controllers.diff import DiffController, DiffResult
from ..core.params import DiffParams, Rect
from . import design_tokens as T

logger = logging.getLogger(__name__)


def place_window(name: str, geometry) -> None:
    """Create a resizable window at the given (w, h, x, y) geometry."""
    w, h, x, y = geometry
    cv2.namedWindow(name, cv2.WINDOW_NORMAL)
    cv2.resizeWindow(name, w, h)
    cv2.moveWindow(name, x, y)


class DiffWindows:
    """Window and trackbar wiring around a DiffController."""

    def __init__(
        self,
        controller: DiffController,
        params: DiffParams,
        reference_title: str,
        compare_title: str,
        on_result: Optional[Callable[[DiffResult], None]] = None,
    ) -> None:
        self.controller = controller
        self.initial = params.normalized()
        self.reference_title = reference_title
        self.compare_title = compare_title
        self.on_result = on_result
        self.last_result: Optional[DiffResult] = None
        self._ready = False

    # ------------------------------ trackbars ------------------------------
    def _trackbars(self):
        """(label, window, initial value, maximum) for every slider."""
        p = self.initial
        return (
            (T.TB_REF_X, self.reference_title, p.reference.x, MAX_X),
            (T.TB_REF_Y, self.reference_title, p.reference.y, MAX_Y),
            (T.TB_REF_W, self.reference_title, p.reference.width, MAX_X),
            (T.TB_REF_H, self.reference_title, p.reference.height, MAX_Y),
            (T.TB_TEMPL_X, self.compare_title, p.template.x, MAX_X),
            (T.TB_TEMPL_Y, self.compare_title, p.template.y, MAX_Y),
            (T.TB_TEMPL_W, self.compare_title, p.template.width, MAX_X),
            (T.TB_TEMPL_H, self.compare_title, p.template.height, MAX_Y),
            (T.TB_THRESHOLD, T.DIFFERENCE_WINDOW, p.threshold, MAX_THRESHOLD_VALUE),
            (T.TB_ERODE_DILATE, T.DIFFERENCE_WINDOW, p.erode_dilate_seed, MAX_ERODE_DILATE_SEED),
            (T.TB_MIN_AREA, T.DIFFERENCE_WINDOW, p.min_area, MAX_DEFECT_AREA),
        )

    def create(self) -> None:
        """Create the three windows and attach the trackbars."""
        place_window(self.reference_title, T.REFERENCE_GEOMETRY)
        place_window(self.compare_title, T.COMPARE_GEOMETRY)
        place_window(T.DIFFERENCE_WINDOW, T.DIFFERENCE_GEOMETRY)
        for label, window, value, maximum in self._trackbars():
            cv2.createTrackbar(label, window, min(int(value), maximum), maximum, self._on_change)
        self._ready = True

    def read_params(self) -> DiffParams:
        """Snapshot of the current trackbar positions."""

        def pos(label: str, window: str) -> int:
            return int(cv2.getTrackbarPos(label, window))

        ref_w, cmp_w, diff_w = self.reference_title, self.compare_title, T.DIFFERENCE_WINDOW
        return DiffParams(
            reference=Rect(pos(T.TB_REF_X, ref_w), pos(T.TB_REF_Y, ref_w), pos(T.TB_REF_W, ref_w), pos(T.TB_REF_H, ref_w)),
            template=Rect(
                pos(T.TB_TEMPL_X, cmp_w), pos(T.TB_TEMPL_Y, cmp_w), pos(T.TB_TEMPL_W, cmp_w), pos(T.TB_TEMPL_H, cmp_w)
            ),
            threshold=pos(T.TB_THRESHOLD, diff_w),
            erode_dilate_seed=pos(T.TB_ERODE_DILATE, diff_w),
            min_area=pos(T.TB_MIN_AREA, diff_w),
        )

    # ------------------------------- redraw --------------------------------
    def _on_change(self, _value: int = 0) -> None:
        # createTrackbar may fire before all sliders exist
        if not self._ready:
            return
        self.refresh()

    def refresh(self) -> Optional[DiffResult]:
        """Run one diff pass for the current sliders and show the previews.

        An OpenCV failure keeps the previous frame on screen.
        """
        params = self.read_params()
        try:
            result = self.controller.run(params)
        except (cv2.error, ValueError):
            logger.exception("Diff pass failed for %s", params)
            return None
        cv2.imshow(self.reference_title, result.reference_preview)
        cv2.imshow(self.compare_title, result.compare_preview)
        cv2.imshow(T.DIFFERENCE_WINDOW, result.difference_preview)
        self.last_result = result
        if self.on_result is not None:
            self.on_result(result)
        return result

    # -------------------------------- loop ---------------------------------
    def _closed(self) -> bool:
        for title in (self.reference_title, self.compare_title, T.DIFFERENCE_WINDOW):
            if cv2.getWindowProperty(title, cv2.WND_PROP_VISIBLE) < 1:
                return True
        return False

    def run(self) -> None:
        """Render once, then pump events until Esc/q or a window is closed."""
        if not self._ready:
            self.create()
        self.refresh()
        logger.info("Adjust the sliders; press Esc or q to quit")
        try:
            while True:
                key = cv2.waitKey(T.WAIT_KEY_MS) & 0xFF
                if key in T.EXIT_KEYS:
                    logger.info("Exit key pressed")
                    break
                if self._closed():
                    logger.info("Window closed")
                    break
        finally:
            cv2.destroyAllWindows()
