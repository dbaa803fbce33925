"""Pytest configuration.

Ensures src/ is on sys.path so tests can import `shiftdiff.*` without an
install, and provides synthetic image pairs with a known shift.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from shiftdiff.core.params import DiffParams, Rect  # noqa: E402

# compare[y, x] == reference[y + DY, x + DX]
DX, DY = -4, 7
MARGIN = 30
H, W = 400, 500


def make_pair(dx=DX, dy=DY, seed=7):
    """Reference/compare crops of one noise canvas offset by (dx, dy)."""
    rng = np.random.default_rng(seed)
    canvas = rng.integers(0, 256, size=(H + 2 * MARGIN, W + 2 * MARGIN), dtype=np.uint8)
    reference = canvas[MARGIN:MARGIN + H, MARGIN:MARGIN + W].copy()
    compare = canvas[MARGIN + dy:MARGIN + dy + H, MARGIN + dx:MARGIN + dx + W].copy()
    return reference, compare


def add_defect(img, x, y, size):
    """Flip a square so its absolute difference from the original is 128 everywhere."""
    patch = img[y:y + size, x:x + size].astype(np.int32)
    img[y:y + size, x:x + size] = ((patch + 128) % 256).astype(np.uint8)


@pytest.fixture
def image_pair():
    return make_pair()


@pytest.fixture
def params():
    return DiffParams(
        reference=Rect(40, 40, 400, 300),
        template=Rect(300, 60, 40, 120),
        threshold=50,
        erode_dilate_seed=0,
        min_area=300,
    )
