"""core.config
Configuration core: read helpers for config.ini.

This module provides a tiny ConfigManager used by the application to read
simple key/value settings. It purposely keeps a small API:
ConfigManager.load(), get(key, fallback) and get_int(key, fallback).
"""

import logging
import os
from configparser import ConfigParser
from pathlib import Path
from typing import Optional

from ..config.diff import config_defaults

logger = logging.getLogger(__name__)


class ConfigManager:
    """Read-only configuration manager backed by an INI file.

    Behaviour:
    - Uses a single DEFAULT section for lookups.
    - Missing keys are filled in memory with the defaults from config.diff;
      the file itself is never written.
    - Defaults to a per-user config path (%APPDATA% on Windows,
      XDG_CONFIG_HOME or ~/.config on other systems) unless an explicit
      path is provided.
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        if config_path:
            self.config_path = Path(config_path)
        else:
            if os.name == "nt":
                base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
                self.config_path = base.joinpath("ShiftDiff", "config.ini")
            else:
                base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
                self.config_path = base.joinpath("shiftdiff", "config.ini")

        self.config = ConfigParser()
        self.load()

    def load(self) -> None:
        """Load configuration from disk and fill in missing defaults."""
        if self.config_path.exists():
            self.config.read(self.config_path, encoding="utf-8")
            logger.debug("config: loaded %s", self.config_path)

        for key, value in config_defaults().items():
            if key not in self.config["DEFAULT"]:
                self.config["DEFAULT"][key] = value

    def get(self, key: str, fallback=None):
        """Get a configuration value.

        Precedence is env > config.ini > fallback. Environment candidates are
        SD_<KEY>, <KEY> and the key itself.
        """
        for ek in (f"SD_{str(key).upper()}", str(key).upper(), str(key)):
            val = os.environ.get(ek)
            if val is not None and str(val) != "":
                return val
        return self.config["DEFAULT"].get(key, fallback)

    def get_int(self, key: str, fallback: int = 0) -> int:
        """Integer view of get(); unparsable values fall back with a warning."""
        raw = self.get(key)
        if raw is None:
            return fallback
        try:
            return int(str(raw).strip())
        except ValueError:
            logger.warning("config: %s=%r is not an integer, using %d", key, raw, fallback)
            return fallback
