"""HTTP client that drives a :class:`GalleryViewState` from the gallery API.

Each action calls the API once and updates the view state only after a
successful response. Failures (transport errors and non-2xx statuses) are
logged and leave the state as it was; nothing is retried.
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from photogallery.core.config import config

from .models import GalleryViewState
from .state import add_entry, clear_rows, render_all

logger = logging.getLogger(__name__)


class GalleryClient:
    """Gallery page actions backed by the REST API.

    Args:
        base_url: API root, defaults to ``config.api_url``
        http_client: Pre-built ``httpx.Client`` (e.g. FastAPI's ``TestClient``);
            when given, *base_url* is ignored
        state: Existing view state to drive; a new one is created if omitted
    """

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.Client | None = None,
        state: GalleryViewState | None = None,
    ):
        self.http = http_client or httpx.Client(base_url=base_url or config.api_url)
        self.state = state or GalleryViewState()

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "GalleryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response | None:
        """Send a request, returning None (after logging) on any failure."""
        try:
            response = self.http.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"{method} {url} failed with {e.response.status_code}: {e.response.text}"
            )
            return None
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            return None
        return response

    def _entries(self, response: httpx.Response) -> list[dict] | None:
        """Decode a JSON list of entries, returning None (after logging) on bad JSON."""
        try:
            return response.json()
        except ValueError as e:
            request = response.request
            logger.error(f"{request.method} {request.url} returned invalid JSON: {e}")
            return None

    def load(self) -> bool:
        """Fetch every entry and render it.

        Returns:
            True if the entries were loaded
        """
        response = self._request("GET", "/")
        if response is None:
            return False

        entries = self._entries(response)
        if entries is None:
            return False

        clear_rows(self.state)
        render_all(self.state, entries)
        logger.info(f"Loaded {len(self.state.rows)} gallery entries")
        return True

    def submit(self, fields: Mapping[str, Any]) -> bool:
        """Create an entry from form fields and append it to the view.

        Returns:
            True if the server accepted the entry
        """
        data = dict(fields)
        response = self._request("POST", "/", json=data)
        if response is None:
            logger.error("Error while submitting")
            return False

        add_entry(self.state, data)
        return True

    def reset(self) -> bool:
        """Reset the gallery to its seed entries and re-render.

        Returns:
            True if the reset succeeded
        """
        response = self._request("GET", "/reset")
        if response is None:
            logger.error("Error while resetting data")
            return False

        entries = self._entries(response)
        if entries is None:
            logger.error("Error while resetting data")
            return False

        clear_rows(self.state)
        render_all(self.state, entries)
        return True

    def edit(self, entry_id: int) -> None:
        """Placeholder for the row edit button; does nothing."""
        logger.debug(f"Edit requested for entry {entry_id} (not implemented)")
