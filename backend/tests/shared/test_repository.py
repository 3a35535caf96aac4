"""Tests for shared/repository.py."""

from datetime import datetime, timezone
from typing import Optional
from unittest.mock import MagicMock

from shared.repository import BaseRepository


class TestBaseRepository:
    """Tests for BaseRepository base class."""

    def test_init_stores_db_client(self):
        mock_db = MagicMock()
        assert BaseRepository(mock_db)._db is mock_db

    def test_subclass_can_access_db(self):
        """Subclass should be able to access _db and use it."""
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.execute.return_value.data = [
            {"id": "c1", "title": "DSA"}
        ]

        class CourseTitles(BaseRepository[dict]):
            def get_all(self) -> list[dict]:
                return self._db.table("courses").select("id, title").execute().data

            def get(self, course_id: str) -> Optional[dict]:
                return None

        repo = CourseTitles(mock_db)

        assert repo.get_all() == [{"id": "c1", "title": "DSA"}]
        mock_db.table.assert_called_once_with("courses")

    def test_now_iso_is_utc(self):
        stamp = datetime.fromisoformat(BaseRepository._now_iso())
        assert stamp.tzinfo is not None
        assert stamp.utcoffset() == timezone.utc.utcoffset(None)
