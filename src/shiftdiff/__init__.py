"""ShiftDiff: interactive shift-compensated image comparison."""

__version__ = "0.1.0"
