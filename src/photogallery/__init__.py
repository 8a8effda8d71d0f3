"""Photo Gallery - a small CRUD gallery server with a filterable front-end."""

__version__ = "0.1.0"

from photogallery.core.config import GalleryConfig, config

__all__ = [
    "GalleryConfig",
    "config",
]
