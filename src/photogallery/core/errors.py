"""Exception hierarchy for the gallery store and API.

The API layer maps these onto HTTP status codes:

- :class:`ValidationError` and subclasses → 400
- :class:`EntryNotFoundError` → 404
- :class:`StoreError` → 500
"""


class GalleryError(Exception):
    """Base class for all gallery errors.

    The message is human-readable and is returned to API callers as-is.
    """

    pass


class ValidationError(GalleryError):
    """User-friendly validation error for missing request data."""

    pass


class MissingFieldsError(ValidationError):
    """One or more required entry fields were missing or empty."""

    def __init__(self, fields: list[str]):
        self.fields = list(fields)
        super().__init__(f"Error! {', '.join(self.fields)} must be not empty")


class NoFieldsError(ValidationError):
    """An update supplied no field that could be changed."""

    def __init__(self, message: str = "Error! at least one field must be supplied"):
        super().__init__(message)


class EntryNotFoundError(GalleryError):
    """No gallery entry exists with the requested id."""

    def __init__(self, entry_id: int):
        self.entry_id = entry_id
        super().__init__(f"Error! no entry with id {entry_id}")


class StoreError(GalleryError):
    """The database driver failed to execute a statement."""

    pass
