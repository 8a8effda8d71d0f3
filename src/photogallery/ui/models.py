"""Data models for the gallery view state."""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class RowView:
    """One rendered gallery row.

    The two hide flags are independent: a row is shown only when neither
    the author filter nor the text search hides it.
    """

    entry: dict[str, Any]
    hidden_by_filter: bool = False
    hidden_by_search: bool = False

    @property
    def author(self) -> str:
        return self.entry.get("author", "")

    @property
    def visible(self) -> bool:
        """True if neither the author filter nor the search hides the row."""
        return not (self.hidden_by_filter or self.hidden_by_search)


@dataclass
class GalleryViewState:
    """Client-side state of the gallery page.

    Owned by the UI layer and passed explicitly to the functions in
    :mod:`photogallery.ui.state`. Nothing here is persisted.

    Attributes
    ----------
    unique_authors : list[str]
        Authors seen so far, in insertion order
    active_filters : dict[str, bool]
        Author filter toggles. Survive re-renders; new authors start False
    rows : list[RowView]
        Rendered rows in display order
    search_text : str
        Last search query as typed
    """

    unique_authors: list[str] = field(default_factory=list)
    active_filters: dict[str, bool] = field(default_factory=dict)
    rows: list[RowView] = field(default_factory=list)
    search_text: str = ""

    def any_filter_active(self) -> bool:
        return any(self.active_filters.values())

    def visible_rows(self) -> list[RowView]:
        return [row for row in self.rows if row.visible]

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"GalleryViewState(rows={len(self.rows)}, "
            f"authors={len(self.unique_authors)}, "
            f"active_filters={[a for a, on in self.active_filters.items() if on]})"
        )

