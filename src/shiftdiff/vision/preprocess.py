"""
Pure image operations for the difference stage.

This module contains only stateless, side-effect-free functions used by the
diff controller: cropping, absolute difference, binary thresholding and the
erode/dilate cleanup. All inputs and outputs are numpy arrays.

Logging: Functions here avoid logging for performance; the controller logs
the per-redraw measurements.
"""
from __future__ import annotations

import cv2
import numpy as np

from ..config.diff import MAX_THRESHOLD_VALUE
from ..core.params import Rect


def crop(img: np.ndarray, rect: Rect) -> np.ndarray:
    """Return a view of img restricted to rect (clamped to the image bounds)."""
    return img[rect.clamped(img.shape).slices]


def abs_difference(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Per-pixel |a - b| for two crops of equal shape."""
    if a.shape != b.shape:
        raise ValueError(f"crop shapes differ: {a.shape} vs {b.shape}")
    return cv2.absdiff(a, b)


def threshold_diff(diff: np.ndarray, value: int, max_value: int = MAX_THRESHOLD_VALUE) -> np.ndarray:
    """Binary threshold of a difference image into a single-channel mask.

    Pixels strictly above value become max_value, everything else 0. A colour
    difference is collapsed to its per-pixel channel maximum first, so a
    change in any channel counts.
    """
    if diff.ndim == 3:
        diff = np.max(diff, axis=2).astype(np.uint8)
    _, mask = cv2.threshold(diff, value, max_value, cv2.THRESH_BINARY)
    return mask


def morph_kernel(seed: int) -> np.ndarray:
    """Rectangular (2*seed+1) square structuring element anchored at its centre."""
    size = 2 * seed + 1
    return cv2.getStructuringElement(cv2.MORPH_RECT, (size, size), (seed, seed))


def erode_dilate(mask: np.ndarray, seed: int) -> np.ndarray:
    """Erode then dilate with the seed kernel; removes specks narrower than the kernel."""
    if seed <= 0:
        return mask.copy()
    kernel = morph_kernel(seed)
    eroded = cv2.erode(mask, kernel)
    return cv2.dilate(eroded, kernel)


def to_bgr(img: np.ndarray) -> np.ndarray:
    """3-channel copy of img suitable for drawing coloured annotations."""
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    return img.copy()
