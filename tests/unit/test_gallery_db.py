"""Tests for photogallery.core.gallery_db — SQLite gallery store.

Tests cover:
- Table creation and seeding on first open.
- Create / list / get / update / delete of entries.
- Presence validation on create and update.
- Parameterized updates (SQL metacharacters stored verbatim).
- Reset to the seed entries.
- Driver failures surfacing as StoreError.
"""

from __future__ import annotations

import sqlite3

import pytest

from photogallery.core.errors import MissingFieldsError, NoFieldsError, StoreError, ValidationError
from photogallery.core.gallery_db import ENTRY_FIELDS, SEED_ENTRIES, GalleryDB


class TestInitialization:
    """Opening a database creates and seeds the table."""

    def test_creates_database_file(self, temp_dir):
        db_path = temp_dir / "nested" / "gallery.db"
        GalleryDB(db_path)
        assert db_path.exists()

    def test_seeds_empty_database(self, gallery_db: GalleryDB):
        """A fresh database should contain exactly the two seed entries."""
        entries = gallery_db.list_entries()
        assert [e["author"] for e in entries] == ["Tim Berners-Lee", "Grace Hopper"]

    def test_seed_values_are_exact(self, gallery_db: GalleryDB):
        entries = gallery_db.list_entries()
        for stored, seed in zip(entries, SEED_ENTRIES):
            for name in ENTRY_FIELDS:
                assert stored[name] == seed[name]

    def test_reopen_does_not_reseed(self, gallery_db: GalleryDB, sample_fields):
        """Seeding only happens when the table is empty."""
        gallery_db.create_entry(sample_fields)

        reopened = GalleryDB(gallery_db.db_path)

        assert reopened.count_entries() == 3

    def test_seed_disabled(self, temp_dir):
        db = GalleryDB(temp_dir / "empty.db", seed=False)
        assert db.list_entries() == []

    def test_seed_if_empty_reports_result(self, temp_dir):
        db = GalleryDB(temp_dir / "empty.db", seed=False)
        assert db.seed_if_empty() is True
        assert db.seed_if_empty() is False
        assert db.count_entries() == 2


class TestCreateEntry:
    """Test GalleryDB.create_entry."""

    def test_returns_new_id(self, gallery_db: GalleryDB, sample_fields):
        seeded_ids = [e["id"] for e in gallery_db.list_entries()]

        entry_id = gallery_db.create_entry(sample_fields)

        assert entry_id not in seeded_ids
        assert gallery_db.get_entry(entry_id)["author"] == "Ada Lovelace"

    def test_ids_are_unique(self, gallery_db: GalleryDB, sample_fields):
        first = gallery_db.create_entry(sample_fields)
        second = gallery_db.create_entry(sample_fields)
        assert first != second

    def test_round_trip_is_byte_identical(self, gallery_db: GalleryDB, sample_fields):
        """Stored strings should come back unchanged, including unicode and quotes."""
        fields = dict(sample_fields, description="Ünïcode ✓ with 'quotes' and \"doubles\"")
        entry_id = gallery_db.create_entry(fields)

        stored = gallery_db.get_entry(entry_id)

        for name in ENTRY_FIELDS:
            assert stored[name] == fields[name]

    def test_missing_fields_are_listed(self, gallery_db: GalleryDB, sample_fields):
        """Exactly the missing fields should be reported, in canonical order."""
        fields = dict(sample_fields)
        del fields["tags"]
        fields["author"] = ""

        with pytest.raises(MissingFieldsError) as exc_info:
            gallery_db.create_entry(fields)

        assert exc_info.value.fields == ["author", "tags"]
        assert str(exc_info.value) == "Error! author, tags must be not empty"

    def test_missing_fields_inserts_nothing(self, gallery_db: GalleryDB):
        with pytest.raises(ValidationError):
            gallery_db.create_entry({})
        assert gallery_db.count_entries() == 2


class TestUpdateEntry:
    """Test GalleryDB.update_entry."""

    def test_updates_only_supplied_field(self, gallery_db: GalleryDB):
        before = gallery_db.list_entries()[0]

        assert gallery_db.update_entry(before["id"], {"alt": "New alt"}) is True

        after = gallery_db.get_entry(before["id"])
        assert after["alt"] == "New alt"
        for name in ("author", "tags", "image", "description"):
            assert after[name] == before[name]

    def test_empty_values_are_ignored(self, gallery_db: GalleryDB):
        before = gallery_db.list_entries()[0]

        gallery_db.update_entry(before["id"], {"author": "", "tags": "a,b"})

        after = gallery_db.get_entry(before["id"])
        assert after["author"] == before["author"]
        assert after["tags"] == "a,b"

    def test_unknown_fields_are_ignored(self, gallery_db: GalleryDB):
        entry = gallery_db.list_entries()[0]
        gallery_db.update_entry(entry["id"], {"id": 999, "author": "Someone"})
        assert gallery_db.get_entry(entry["id"])["author"] == "Someone"
        assert gallery_db.get_entry(999) is None

    def test_no_fields_raises(self, gallery_db: GalleryDB):
        entry = gallery_db.list_entries()[0]
        with pytest.raises(NoFieldsError):
            gallery_db.update_entry(entry["id"], {"author": None})

    def test_unknown_id_returns_false(self, gallery_db: GalleryDB):
        assert gallery_db.update_entry(12345, {"author": "Nobody"}) is False
        assert [e["author"] for e in gallery_db.list_entries()] == [
            "Tim Berners-Lee",
            "Grace Hopper",
        ]

    def test_sql_metacharacters_are_stored_verbatim(self, gallery_db: GalleryDB):
        """Values are bound as parameters, never interpolated."""
        entry = gallery_db.list_entries()[0]
        hostile = "x', author = 'pwned' WHERE 1=1; DROP TABLE gallery; --"

        gallery_db.update_entry(entry["id"], {"description": hostile})

        entries = gallery_db.list_entries()
        assert len(entries) == 2
        assert entries[0]["description"] == hostile
        assert entries[1]["author"] == "Grace Hopper"


class TestDeleteEntry:
    """Test GalleryDB.delete_entry."""

    def test_delete_known_id(self, gallery_db: GalleryDB):
        entry = gallery_db.list_entries()[0]

        assert gallery_db.delete_entry(entry["id"]) is True

        assert entry["id"] not in [e["id"] for e in gallery_db.list_entries()]

    def test_delete_unknown_id(self, gallery_db: GalleryDB):
        assert gallery_db.delete_entry(12345) is False
        assert gallery_db.count_entries() == 2


class TestResetAll:
    """Test GalleryDB.reset_all."""

    def test_reset_restores_seed_entries(self, gallery_db: GalleryDB, sample_fields):
        gallery_db.create_entry(sample_fields)
        gallery_db.delete_entry(gallery_db.list_entries()[0]["id"])

        entries = gallery_db.reset_all()

        assert [e["author"] for e in entries] == ["Tim Berners-Lee", "Grace Hopper"]
        assert gallery_db.list_entries() == entries

    def test_reset_from_missing_table(self, gallery_db: GalleryDB):
        """Reset should work even if the table was dropped externally."""
        with sqlite3.connect(gallery_db.db_path) as conn:
            conn.execute("DROP TABLE gallery")

        assert len(gallery_db.reset_all()) == 2


class TestStoreErrors:
    """Driver failures are reported as StoreError."""

    def test_missing_table_raises_store_error(self, gallery_db: GalleryDB):
        with sqlite3.connect(gallery_db.db_path) as conn:
            conn.execute("DROP TABLE gallery")

        with pytest.raises(StoreError) as exc_info:
            gallery_db.list_entries()

        assert "no such table" in str(exc_info.value)

    def test_unopenable_database_raises_store_error(self, gallery_db: GalleryDB, temp_dir):
        gallery_db.db_path = temp_dir

        with pytest.raises(StoreError):
            gallery_db.count_entries()

    def test_id_beyond_64_bits_raises_store_error(self, gallery_db: GalleryDB):
        with pytest.raises(StoreError):
            gallery_db.get_entry(2**63)

    def test_lone_surrogate_raises_store_error(self, gallery_db: GalleryDB, sample_fields):
        with pytest.raises(StoreError):
            gallery_db.create_entry(dict(sample_fields, author="\ud800"))

        assert gallery_db.count_entries() == 2
