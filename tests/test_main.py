import logging
import sys

import cv2
import pytest

from shiftdiff import main as app
from shiftdiff.core.logging_setup import prune_old_sessions, setup_logging
from shiftdiff.core.config import ConfigManager
from shiftdiff.io.images import ImageLoadError, load_image

from conftest import make_pair


@pytest.fixture(autouse=True)
def _restore_logging(monkeypatch):
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    yield
    for h in root.handlers[:]:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)


def _write_pair(tmp_path):
    reference, compare = make_pair()
    ref_path, cmp_path = tmp_path / "reference.png", tmp_path / "compare.png"
    cv2.imwrite(str(ref_path), reference)
    cv2.imwrite(str(cmp_path), compare)
    return ref_path, cmp_path


def test_load_image_grayscale_and_colour(tmp_path):
    ref_path, _ = _write_pair(tmp_path)
    assert load_image(ref_path).shape == (400, 500)
    assert load_image(ref_path, color=True).shape == (400, 500, 3)


def test_load_image_missing(tmp_path):
    with pytest.raises(ImageLoadError) as exc:
        load_image(tmp_path / "nope.tiff")
    assert "Couldn't load" in str(exc.value)


def test_setup_logging_creates_session(tmp_path):
    cfg = ConfigManager(str(tmp_path / "config.ini"))
    session = setup_logging(cfg, "DEBUG")
    assert session.parent == tmp_path / "logs"
    assert (session / "session_info.txt").read_text(encoding="utf-8").startswith("SHIFTDIFF SESSION INFORMATION")
    assert logging.getLogger().level == logging.DEBUG


def test_prune_old_sessions(tmp_path):
    for i in range(5):
        (tmp_path / f"session-2026010{i}_000000").mkdir()
    (tmp_path / "notes").mkdir()
    prune_old_sessions(tmp_path, keep=3)
    sessions = [p for p in tmp_path.iterdir() if p.name.startswith("session-")]
    assert len(sessions) == 3
    assert (tmp_path / "notes").exists()


def test_main_runs_windows(tmp_path, monkeypatch):
    ref_path, cmp_path = _write_pair(tmp_path)
    seen = {}

    def fake_run(self):
        seen["titles"] = (self.reference_title, self.compare_title)
        seen["result"] = self.controller.run(self.initial)

    monkeypatch.setattr(app.DiffWindows, "run", fake_run)
    cfg = tmp_path / "config.ini"
    cfg.write_text(
        "[DEFAULT]\nref_x = 40\nref_y = 40\nref_width = 400\nref_height = 300\n"
        "templ_x = 300\ntempl_y = 60\ntempl_width = 40\ntempl_height = 120\n",
        encoding="utf-8",
    )
    status = app.main([str(ref_path), str(cmp_path), "--config", str(cfg), "--method", "ccoeff_normed"])
    assert status == 0
    assert sys.excepthook.__name__ == "_excepthook"
    assert seen["titles"] == ("reference.png", "compare.png")
    assert seen["result"].delta == (-4, 7)
    assert seen["result"].nonzero_count == 0


def test_main_missing_image_returns_1(tmp_path):
    status = app.main([str(tmp_path / "a.tiff"), str(tmp_path / "b.tiff"), "--config", str(tmp_path / "config.ini")])
    assert status == 1


def test_window_titles_are_distinct(tmp_path):
    assert app.window_titles(tmp_path / "x" / "img.png", tmp_path / "y" / "img.png") == ("img.png", "img.png (compare)")
