"""IO package: image file access isolated from the pure vision code."""
from .images import ImageLoadError, load_image

__all__ = ["ImageLoadError", "load_image"]
