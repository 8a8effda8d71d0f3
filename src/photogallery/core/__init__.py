"""Core functionality for the photo gallery.

- **GalleryConfig**: Configuration management using Pydantic Settings
- **config**: Global configuration instance (loads from environment variables)
- **GalleryDB**: SQLite-backed store for gallery entries
- **errors**: Exception hierarchy shared by the store and the API
"""

from photogallery.core.config import GalleryConfig, config
from photogallery.core.errors import (
    EntryNotFoundError,
    GalleryError,
    MissingFieldsError,
    NoFieldsError,
    StoreError,
    ValidationError,
)
from photogallery.core.gallery_db import ENTRY_FIELDS, SEED_ENTRIES, GalleryDB

__all__ = [
    "ENTRY_FIELDS",
    "SEED_ENTRIES",
    "EntryNotFoundError",
    "GalleryConfig",
    "GalleryDB",
    "GalleryError",
    "MissingFieldsError",
    "NoFieldsError",
    "StoreError",
    "ValidationError",
    "config",
]
