"""Pydantic request and response models for the Gallery API.

These models define the JSON schema for every API endpoint. FastAPI uses
them for request parsing, serialisation, and OpenAPI documentation.

Presence of the entry fields is deliberately *not* enforced here: every
field is optional so that the store can report exactly which ones are
missing, in a single ``400`` response.

Models
------
EntryCreate
    Payload for ``POST /`` — the five entry fields.
EntryUpdate
    Payload for ``PATCH /`` — ``id`` plus any subset of the five fields.
EntryDelete
    Payload for ``DELETE /`` — ``id`` only.
GalleryEntry
    Response shape of a stored entry.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Largest id SQLite can store in an INTEGER PRIMARY KEY.
MAX_ENTRY_ID = 2**63 - 1


class EntryCreate(BaseModel):
    """Request body for the ``POST /`` endpoint.

    Attributes:
        author: Name of the person pictured.
        alt: Alternative text for the image.
        tags: Comma-separated tags, stored as a single string.
        image: URL of the image.
        description: Free-text description.
    """

    author: str | None = Field(default=None, description="Name of the person pictured.")
    alt: str | None = Field(default=None, description="Alternative text for the image.")
    tags: str | None = Field(default=None, description="Comma-separated tags.")
    image: str | None = Field(default=None, description="Image URL.")
    description: str | None = Field(default=None, description="Free-text description.")


class EntryUpdate(EntryCreate):
    """Request body for the ``PATCH /`` endpoint.

    Attributes:
        id: Entry to update.  Required; checked by the route so that a
            missing id produces the gallery's own ``400`` message.
    """

    id: int | None = Field(
        default=None,
        ge=1,
        le=MAX_ENTRY_ID,
        description="Identifier of the entry to update.",
    )


class EntryDelete(BaseModel):
    """Request body for the ``DELETE /`` endpoint.

    Attributes:
        id: Entry to delete.
    """

    id: int | None = Field(
        default=None,
        ge=1,
        le=MAX_ENTRY_ID,
        description="Identifier of the entry to delete.",
    )


class GalleryEntry(BaseModel):
    """A stored gallery entry as returned by the API."""

    id: int
    author: str
    alt: str
    tags: str
    image: str
    description: str
