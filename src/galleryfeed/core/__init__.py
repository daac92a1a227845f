"""Core components: configuration, the entry model, and the gallery scanner."""

from .config import GalleryFeedConfig, config
from .models import ImageEntry
from .scanner import FEATURED_SUBDIR, IMAGE_EXTENSIONS, list_images, scan_directory

__all__ = [
    "FEATURED_SUBDIR",
    "GalleryFeedConfig",
    "IMAGE_EXTENSIONS",
    "ImageEntry",
    "config",
    "list_images",
    "scan_directory",
]
