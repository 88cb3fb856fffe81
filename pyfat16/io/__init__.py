from .base import ImageSource
from .posix import open_image_source

__all__ = ["ImageSource", "open_image_source"]
