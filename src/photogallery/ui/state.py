"""State management utilities for the gallery view.

Everything here is a plain function over a :class:`GalleryViewState`, so the
render, filter and search behavior of the page can be exercised without a
browser. :func:`compute_visible_rows` is the stateless form of the same
rules.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .models import GalleryViewState, RowView

logger = logging.getLogger(__name__)


def split_tags(tags: str) -> list[str]:
    """Split the comma-joined tags string for display."""
    return tags.split(",")


def row_text(entry: Mapping[str, Any]) -> str:
    """Return the searchable text of a rendered row.

    A row shows the author twice (image caption and heading), the alt text,
    each tag and the description, joined by newlines. The edit button label
    is not part of it. The browser script stores the same string in each
    row's ``data-search`` attribute.
    """
    author = entry.get("author", "")
    parts = [
        author,
        author,
        entry.get("alt", ""),
        *split_tags(entry.get("tags", "")),
        entry.get("description", ""),
    ]
    return "\n".join(parts)


def normalize_query(text: str) -> str:
    """Uppercase and trim a search query."""
    return text.upper().strip()


def matches_search(entry: Mapping[str, Any], query: str) -> bool:
    """Case-insensitive substring match of *query* against the row text."""
    return normalize_query(query) in row_text(entry).upper()


def hidden_by_filter(author: str, filters: Mapping[str, bool]) -> bool:
    """True if some filter is active and *author* is not one of them."""
    if not any(filters.values()):
        return False
    return not filters.get(author, False)


def compute_visible_rows(
    entries: Iterable[Mapping[str, Any]],
    filters: Mapping[str, bool],
    search_text: str = "",
) -> list[Mapping[str, Any]]:
    """Return the entries that would be visible for the given filters and query.

    Args:
        entries: Entries in display order
        filters: Author filter toggles
        search_text: Raw search query (trimmed and uppercased here)

    Returns:
        Visible entries in their original order
    """
    return [
        entry
        for entry in entries
        if not hidden_by_filter(entry.get("author", ""), filters)
        and matches_search(entry, search_text)
    ]


def _register_author(state: GalleryViewState, author: str) -> None:
    if author not in state.unique_authors:
        state.unique_authors.append(author)


def _apply_visibility(state: GalleryViewState, row: RowView) -> None:
    row.hidden_by_filter = hidden_by_filter(row.author, state.active_filters)
    row.hidden_by_search = not matches_search(row.entry, state.search_text)


def regenerate_author_filters(state: GalleryViewState) -> list[tuple[str, bool]]:
    """Rebuild the filter chip list from the known authors.

    New authors get a filter entry switched off; existing toggles keep their
    value.

    Returns:
        ``(author, active)`` pairs in insertion order
    """
    for name in state.unique_authors:
        state.active_filters.setdefault(name, False)
    return author_filter_chips(state)


def author_filter_chips(state: GalleryViewState) -> list[tuple[str, bool]]:
    """Return ``(author, active)`` pairs for the known authors."""
    return [(name, state.active_filters.get(name, False)) for name in state.unique_authors]


def clear_rows(state: GalleryViewState) -> GalleryViewState:
    """Remove every rendered row."""
    state.rows.clear()
    return state


def render_all(state: GalleryViewState, entries: Iterable[Mapping[str, Any]]) -> GalleryViewState:
    """Render a batch of entries.

    Clears the author list, appends a row per entry (registering authors as
    it goes), then regenerates the author filter chips.

    Args:
        state: View state to update
        entries: Entries as returned by ``GET /``

    Returns:
        Updated state
    """
    state.unique_authors = []

    for entry in entries:
        _register_author(state, entry["author"])
        row = RowView(entry=dict(entry))
        _apply_visibility(state, row)
        state.rows.append(row)

    regenerate_author_filters(state)
    logger.debug(f"Rendered entries: {state}")
    return state


def add_entry(state: GalleryViewState, entry: Mapping[str, Any]) -> GalleryViewState:
    """Append a single newly created entry to the view.

    Args:
        state: View state to update
        entry: Entry fields as submitted

    Returns:
        Updated state
    """
    row = RowView(entry=dict(entry))
    _apply_visibility(state, row)
    state.rows.append(row)

    _register_author(state, row.author)
    regenerate_author_filters(state)
    return state


def toggle_author_filter(state: GalleryViewState, author: str) -> GalleryViewState:
    """Flip one author's filter and recompute filter visibility of every row.

    Args:
        state: View state to update
        author: Author whose chip was clicked

    Returns:
        Updated state
    """
    state.active_filters[author] = not state.active_filters.get(author, False)
    logger.debug(f"Author filter {author!r} -> {state.active_filters[author]}")

    for row in state.rows:
        row.hidden_by_filter = hidden_by_filter(row.author, state.active_filters)

    return state


def apply_search(state: GalleryViewState, text: str) -> GalleryViewState:
    """Hide rows whose visible text does not contain the query.

    Only ``hidden_by_search`` changes; the author filter is left alone.

    Args:
        state: View state to update
        text: Raw search input

    Returns:
        Updated state
    """
    state.search_text = text
    query = normalize_query(text)

    for row in state.rows:
        row.hidden_by_search = query not in row_text(row.entry).upper()

    return state
