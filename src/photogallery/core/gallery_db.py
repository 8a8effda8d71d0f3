"""SQLite database for gallery entries."""

import logging
import sqlite3
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from photogallery.core.errors import MissingFieldsError, NoFieldsError, StoreError

logger = logging.getLogger(__name__)

# Required entry fields, in the order used for inserts and error messages.
ENTRY_FIELDS = ("author", "alt", "tags", "image", "description")

SEED_ENTRIES: tuple[dict[str, str], ...] = (
    {
        "author": "Tim Berners-Lee",
        "alt": "Image of Berners-Lee",
        "tags": "html,http,url,cern,mit",
        "image": "https://upload.wikimedia.org/wikipedia/commons/9/9d/Sir_Tim_Berners-Lee.jpg",
        "description": "The internet and the Web aren't the same thing.",
    },
    {
        "author": "Grace Hopper",
        "alt": "Image of Grace Hopper at the UNIVAC I console",
        "tags": "programming,linking,navy",
        "image": "https://upload.wikimedia.org/wikipedia/commons/3/37/Grace_Hopper_and_UNIVAC.jpg",
        "description": (
            "Grace was very curious as a child; this was a lifelong trait. "
            "At the age of seven, she decided to determine how an alarm clock "
            "worked and dismantled seven alarm clocks before her mother realized "
            "what she was doing (she was then limited to one clock)."
        ),
    },
)

_CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS gallery (
        id INTEGER PRIMARY KEY,
        author CHAR(100) NOT NULL,
        alt CHAR(100) NOT NULL,
        tags CHAR(256) NOT NULL,
        image CHAR(2048) NOT NULL,
        description CHAR(1024) NOT NULL
    )
    """

_INSERT_SQL = """
    INSERT INTO gallery (author, alt, tags, image, description)
    VALUES (?, ?, ?, ?, ?)
    """


class GalleryDB:
    """Manage the gallery table using SQLite.

    Every public method opens its own connection, so one instance can be
    shared by all request handlers. A re-entrant lock serializes
    :meth:`reset_all` (drop + recreate) against every other operation, which
    keeps concurrent requests from ever observing a missing table.

    Driver failures are logged and re-raised as :class:`StoreError`.
    """

    def __init__(self, db_path: Path, seed: bool = True):
        """Initialize the gallery database.

        Args:
            db_path: Path to SQLite database file
            seed: Insert the seed entries when the table is empty
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.RLock()
        self._initialize_db()
        logger.info(f"Connected to the gallery database at {self.db_path}")
        if seed:
            self.seed_if_empty()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, commit on success and always close it.

        ``sqlite3.Error`` raised inside the block, and values the driver cannot
        bind (integers outside 64 bits, strings with lone surrogates), are
        converted to :class:`StoreError` with the driver message embedded.
        """
        with self._lock:
            try:
                conn = sqlite3.connect(self.db_path)
            except sqlite3.Error as e:
                logger.error(f"Error opening gallery database {self.db_path}: {e}")
                raise StoreError(f"Error! {e}") from e

            conn.row_factory = sqlite3.Row
            try:
                yield conn
                conn.commit()
            except (sqlite3.Error, OverflowError, UnicodeEncodeError) as e:
                conn.rollback()
                logger.error(f"Gallery database error: {e}")
                raise StoreError(f"Error! {e}") from e
            finally:
                conn.close()

    def _initialize_db(self) -> None:
        """Create database schema if it doesn't exist."""
        with self._connect() as conn:
            conn.execute(_CREATE_TABLE_SQL)

    @staticmethod
    def _insert_seed(conn: sqlite3.Connection) -> None:
        conn.executemany(
            _INSERT_SQL,
            [tuple(entry[name] for name in ENTRY_FIELDS) for entry in SEED_ENTRIES],
        )

    def seed_if_empty(self) -> bool:
        """Insert the seed entries when the table holds no rows.

        Returns:
            True if the seed entries were inserted
        """
        with self._connect() as conn:
            count = conn.execute("SELECT COUNT(*) FROM gallery").fetchone()[0]
            if count == 0:
                self._insert_seed(conn)
                logger.info("Inserted seed entries into empty database")
                return True

        logger.info(f"Database already contains {count} item(s) at startup.")
        return False

    def count_entries(self) -> int:
        """Get total count of gallery entries."""
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM gallery").fetchone()[0]

    def create_entry(self, fields: Mapping[str, Any]) -> int:
        """Insert a new gallery entry.

        Args:
            fields: Mapping holding all five entry fields

        Returns:
            The id assigned to the new entry

        Raises:
            MissingFieldsError: If any required field is missing or empty
        """
        missing = [name for name in ENTRY_FIELDS if not fields.get(name)]
        if missing:
            raise MissingFieldsError(missing)

        with self._connect() as conn:
            cursor = conn.execute(_INSERT_SQL, tuple(fields[name] for name in ENTRY_FIELDS))
            entry_id = cursor.lastrowid

        logger.info(f"Created gallery entry {entry_id} by {fields['author']}")
        return entry_id

    def list_entries(self) -> list[dict]:
        """Get all gallery entries ordered by id."""
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM gallery ORDER BY id").fetchall()
        return [dict(row) for row in rows]

    def get_entry(self, entry_id: int) -> dict | None:
        """Get a single gallery entry, or None if the id is unknown."""
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM gallery WHERE id = ?", (entry_id,)).fetchone()
        return dict(row) if row is not None else None

    def update_entry(self, entry_id: int, fields: Mapping[str, Any]) -> bool:
        """Update the supplied fields of an entry.

        Only non-empty values for the five known fields are applied; the rest
        keep their stored values. Column names come from ``ENTRY_FIELDS`` and
        values are always bound as parameters.

        Args:
            entry_id: Entry to update
            fields: Partial mapping of entry fields

        Returns:
            True if a row matched, False if the id is unknown

        Raises:
            NoFieldsError: If no updatable field was supplied
        """
        changes = {name: fields[name] for name in ENTRY_FIELDS if fields.get(name)}
        if not changes:
            raise NoFieldsError()

        assignments = ", ".join(f"{name} = ?" for name in changes)
        with self._connect() as conn:
            cursor = conn.execute(
                f"UPDATE gallery SET {assignments} WHERE id = ?",
                (*changes.values(), entry_id),
            )
            was_updated = cursor.rowcount > 0

        if was_updated:
            logger.info(f"Updated gallery entry {entry_id}: {', '.join(changes)}")
        else:
            logger.debug(f"No gallery entry to update with id {entry_id}")
        return was_updated

    def delete_entry(self, entry_id: int) -> bool:
        """Delete an entry.

        Returns:
            True if removed, False if the id is unknown
        """
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM gallery WHERE id = ?", (entry_id,))
            was_deleted = cursor.rowcount > 0

        if was_deleted:
            logger.info(f"Deleted gallery entry {entry_id}")
        else:
            logger.debug(f"No gallery entry to delete with id {entry_id}")
        return was_deleted

    def reset_all(self) -> list[dict]:
        """Drop and recreate the table, then re-insert the seed entries.

        Returns:
            The freshly seeded entries
        """
        with self._lock:
            with self._connect() as conn:
                conn.execute("DROP TABLE IF EXISTS gallery")
                conn.execute(_CREATE_TABLE_SQL)
                self._insert_seed(conn)
            logger.info("Reset gallery to seed entries")
            return self.list_entries()
