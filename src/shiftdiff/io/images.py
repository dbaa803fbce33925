"""Image file IO.

Keeps file access out of the pure vision modules: everything under
shiftdiff.vision works on numpy arrays only.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union
import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class ImageLoadError(RuntimeError):
    """Raised when an input image is missing or cannot be decoded."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        super().__init__(f"Couldn't load {self.path}")


def load_image(path: Union[str, Path], color: bool = False) -> np.ndarray:
    """Read an image as 8-bit grayscale (default) or BGR.

    cv2.imread returns None instead of raising, so both a missing file and an
    undecodable one surface here as ImageLoadError.
    """
    p = Path(path)
    flag = cv2.IMREAD_COLOR if color else cv2.IMREAD_GRAYSCALE
    img = cv2.imread(str(p), flag)
    if img is None or img.size == 0:
        raise ImageLoadError(p)
    logger.info("Loaded %s: %dx%d (%s)", p.name, img.shape[1], img.shape[0], "color" if color else "grayscale")
    return img
