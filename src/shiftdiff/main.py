"""Main Application entry point.

Loads configuration and logging, reads both images, and launches the
trackbar windows.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

# Running as script - go up from shiftdiff/main.py to the src directory
src_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from shiftdiff.config.diff import MATCH_METHODS, RNG_SEED
from shiftdiff.controllers.diff import DiffController
from shiftdiff.core.config import ConfigManager
from shiftdiff.core.logging_setup import setup_logging
from shiftdiff.core.params import DiffParams
from shiftdiff.gui.windows import DiffWindows
from shiftdiff.io.images import ImageLoadError, load_image

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="shiftdiff",
        description="Compare two images taking the relative shift between them into account",
    )
    ap.add_argument("reference", nargs="?", help="Reference image (default: config reference_file)")
    ap.add_argument("compare", nargs="?", help="Image compared with the reference (default: config compare_file)")
    ap.add_argument("--config", help="Path to config.ini (default: per-user config directory)")
    ap.add_argument("--log-level", help="Override log level (DEBUG, INFO, ...)")
    ap.add_argument("--color", action="store_true", help="Load images in colour instead of grayscale")
    ap.add_argument("--method", choices=MATCH_METHODS, help="Template matching method")
    return ap


def window_titles(reference: Path, compare: Path):
    """Window titles from file names; highgui identifies windows by title."""
    ref_title, cmp_title = reference.name, compare.name
    if ref_title == cmp_title:
        cmp_title = f"{cmp_title} (compare)"
    return ref_title, cmp_title


def _install_excepthook() -> None:
    def _excepthook(exc_type, exc, tb):
        logging.getLogger(__name__).error("Unhandled exception:", exc_info=(exc_type, exc, tb))
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _excepthook


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, load both images and run the interactive windows.

    Returns the process exit status.
    """
    args = build_parser().parse_args(argv)

    config_manager = ConfigManager(args.config)
    setup_logging(config_manager, args.log_level)
    _install_excepthook()

    reference = Path(args.reference or config_manager.get("reference_file"))
    compare = Path(args.compare or config_manager.get("compare_file"))
    color = args.color or str(config_manager.get("read_mode", "grayscale")).strip().lower() == "color"
    method = args.method or config_manager.get("match_method")

    try:
        ref_img = load_image(reference, color=color)
        cmp_img = load_image(compare, color=color)
    except ImageLoadError as e:
        logger.error("%s", e)
        return 1

    try:
        controller = DiffController(ref_img, cmp_img, method=method, seed=config_manager.get_int("rng_seed", RNG_SEED))
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    ref_title, cmp_title = window_titles(reference, compare)
    windows = DiffWindows(controller, DiffParams.from_config(config_manager), ref_title, cmp_title)
    windows.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
