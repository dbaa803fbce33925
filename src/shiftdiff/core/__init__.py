"""Core services: configuration, logging and the per-redraw parameter snapshot.

Submodules:
- config: ConfigManager over config.ini with environment overrides
- logging_setup: session-based logging configuration
- params: Rect and DiffParams
"""
from .params import Rect, DiffParams

__all__ = ["Rect", "DiffParams"]
