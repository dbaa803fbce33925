"""Parameter snapshot for one diff pass.

Rect is the integer rectangle type used across the package (x, y, width,
height in pixel coordinates, top-left origin). DiffParams groups every
slider-controlled value so a redraw can be expressed as a pure function of
(images, params).
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from ..config.diff import (
    REFERENCE_RECT,
    TEMPLATE_RECT,
    THRESHOLD_VALUE,
    MAX_THRESHOLD_VALUE,
    ERODE_DILATE_SEED,
    MIN_DEFECT_AREA,
)


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def top_left(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def bottom_right(self) -> Tuple[int, int]:
        return (self.x + self.width, self.y + self.height)

    @property
    def area(self) -> int:
        return max(0, self.width) * max(0, self.height)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def slices(self) -> Tuple[slice, slice]:
        """(rows, cols) slices for numpy indexing: img[rect.slices]."""
        return (slice(self.y, self.y + self.height), slice(self.x, self.x + self.width))

    def shifted(self, dx: int, dy: int) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def intersection(self, other: "Rect") -> "Rect":
        """Overlap of both rectangles; width/height are 0 when they are disjoint."""
        x0 = max(self.x, other.x)
        y0 = max(self.y, other.y)
        x1 = min(self.x + self.width, other.x + other.width)
        y1 = min(self.y + self.height, other.y + other.height)
        return Rect(x0, y0, max(0, x1 - x0), max(0, y1 - y0))

    def clamped(self, shape: Tuple[int, ...]) -> "Rect":
        """Restrict to an image of the given numpy shape (h, w[, c])."""
        h, w = int(shape[0]), int(shape[1])
        return self.intersection(Rect(0, 0, w, h))

    def __str__(self) -> str:
        return f"[{self.width} x {self.height} from ({self.x}, {self.y})]"


@dataclass(frozen=True)
class DiffParams:
    reference: Rect
    template: Rect
    threshold: int = THRESHOLD_VALUE
    erode_dilate_seed: int = ERODE_DILATE_SEED
    min_area: int = MIN_DEFECT_AREA

    @classmethod
    def defaults(cls) -> "DiffParams":
        return cls(reference=Rect(*REFERENCE_RECT), template=Rect(*TEMPLATE_RECT))

    @classmethod
    def from_config(cls, cfg) -> "DiffParams":
        """Build the initial slider positions from a ConfigManager."""
        d = cls.defaults()
        ref = Rect(
            cfg.get_int("ref_x", d.reference.x),
            cfg.get_int("ref_y", d.reference.y),
            cfg.get_int("ref_width", d.reference.width),
            cfg.get_int("ref_height", d.reference.height),
        )
        templ = Rect(
            cfg.get_int("templ_x", d.template.x),
            cfg.get_int("templ_y", d.template.y),
            cfg.get_int("templ_width", d.template.width),
            cfg.get_int("templ_height", d.template.height),
        )
        return cls(
            reference=ref,
            template=templ,
            threshold=cfg.get_int("threshold_value", d.threshold),
            erode_dilate_seed=cfg.get_int("erode_dilate_seed", d.erode_dilate_seed),
            min_area=cfg.get_int("min_defect_area", d.min_area),
        ).normalized()

    def normalized(self) -> "DiffParams":
        """Clamp to values every OpenCV call downstream accepts."""

        def _rect(r: Rect) -> Rect:
            return Rect(max(0, r.x), max(0, r.y), max(1, r.width), max(1, r.height))

        return replace(
            self,
            reference=_rect(self.reference),
            template=_rect(self.template),
            threshold=min(MAX_THRESHOLD_VALUE, max(0, self.threshold)),
            erode_dilate_seed=max(0, self.erode_dilate_seed),
            min_area=max(0, self.min_area),
        )
