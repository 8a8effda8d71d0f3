"""Client-side gallery view: state, render/filter/search rules, API client."""

from .client import GalleryClient
from .models import GalleryViewState, RowView
from .state import (
    add_entry,
    apply_search,
    author_filter_chips,
    compute_visible_rows,
    render_all,
    toggle_author_filter,
)

__all__ = [
    "GalleryClient",
    "GalleryViewState",
    "RowView",
    "add_entry",
    "apply_search",
    "author_filter_chips",
    "compute_visible_rows",
    "render_all",
    "toggle_author_filter",
]
