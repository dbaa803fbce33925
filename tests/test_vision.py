import numpy as np
import pytest

from shiftdiff.core.params import Rect
from shiftdiff.vision import (
    abs_difference,
    crop,
    draw_defect_regions,
    erode_dilate,
    estimate_shift,
    find_defect_regions,
    locate_template,
    method_flag,
    morph_kernel,
    threshold_diff,
    to_bgr,
)

from conftest import DX, DY


def test_crop_is_clamped_view():
    img = np.zeros((20, 30), np.uint8)
    c = crop(img, Rect(25, 15, 10, 10))
    assert c.shape == (5, 5)
    c[:] = 9
    assert img[19, 29] == 9


def test_abs_difference_requires_equal_shapes():
    a = np.full((4, 4), 10, np.uint8)
    b = np.full((4, 4), 250, np.uint8)
    assert (abs_difference(a, b) == 240).all()
    with pytest.raises(ValueError):
        abs_difference(a, np.zeros((3, 4), np.uint8))


def test_threshold_is_strictly_greater():
    diff = np.array([[49, 50, 51, 200]], np.uint8)
    assert threshold_diff(diff, 50).tolist() == [[0, 0, 255, 255]]


def test_threshold_colour_uses_channel_max():
    diff = np.zeros((1, 2, 3), np.uint8)
    diff[0, 0] = (0, 0, 90)
    diff[0, 1] = (30, 30, 30)
    mask = threshold_diff(diff, 50)
    assert mask.shape == (1, 2)
    assert mask.tolist() == [[255, 0]]


def test_morph_kernel_size():
    assert morph_kernel(0).shape == (1, 1)
    k = morph_kernel(3)
    assert k.shape == (7, 7)
    assert (k == 1).all()


def test_erode_dilate_removes_specks_keeps_blocks():
    mask = np.zeros((60, 60), np.uint8)
    mask[5, 5] = 255
    mask[20:40, 20:40] = 255
    out = erode_dilate(mask, 1)
    assert out[5, 5] == 0
    assert (out[20:40, 20:40] == 255).all()
    assert (erode_dilate(mask, 0) == mask).all()


def test_to_bgr():
    gray = np.zeros((3, 4), np.uint8)
    assert to_bgr(gray).shape == (3, 4, 3)
    colour = np.zeros((3, 4, 3), np.uint8)
    out = to_bgr(colour)
    assert out is not colour


def test_method_flag_unknown():
    with pytest.raises(ValueError):
        method_flag("phase_correlation")


@pytest.mark.parametrize("method", ["ccorr_normed", "ccoeff_normed", "sqdiff_normed"])
def test_locate_template_recovers_shift(image_pair, method):
    reference, compare = image_pair
    templ = Rect(300, 60, 40, 120)
    match = locate_template(compare, crop(reference, templ), method)
    assert match.location == (300 - DX, 60 - DY)
    assert estimate_shift(templ, match.location) == (DX, DY)


def test_locate_template_rejects_oversized_template():
    with pytest.raises(ValueError):
        locate_template(np.zeros((10, 10), np.uint8), np.zeros((11, 5), np.uint8))
    with pytest.raises(ValueError):
        locate_template(np.zeros((10, 10), np.uint8), np.zeros((0, 0), np.uint8))


def _mask_with_blocks():
    mask = np.zeros((100, 100), np.uint8)
    mask[10:50, 10:50] = 255  # area 39*39
    mask[70:75, 70:75] = 255  # area 16
    return mask


def test_find_defect_regions_filters_by_area():
    found = find_defect_regions(_mask_with_blocks(), 300, np.random.default_rng(12345))
    assert len(found.contours) == 2
    assert len(found.regions) == 1
    region = found.regions[0]
    assert region.area == pytest.approx(39 * 39)
    assert region.bbox == (10, 10, 40, 40)


def test_region_colours_do_not_depend_on_min_area():
    mask = _mask_with_blocks()
    low = find_defect_regions(mask, 0, np.random.default_rng(12345))
    high = find_defect_regions(mask, 300, np.random.default_rng(12345))
    colours = {r.index: r.color for r in low.regions}
    for r in high.regions:
        assert colours[r.index] == r.color


def test_find_defect_regions_empty_mask():
    found = find_defect_regions(np.zeros((0, 0), np.uint8), 0, np.random.default_rng(1))
    assert found.regions == []


def test_draw_defect_regions_outlines_in_colour():
    mask = _mask_with_blocks()
    found = find_defect_regions(mask, 300, np.random.default_rng(12345))
    canvas = draw_defect_regions(mask, found)
    assert canvas.shape == (100, 100, 3)
    b, g, r = found.regions[0].color
    assert tuple(canvas[10, 10]) == (b, g, r)
    # small block left as plain white mask
    assert tuple(canvas[72, 72]) == (255, 255, 255)
