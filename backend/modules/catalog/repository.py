"""
Catalog repository for database access.

Courses keep their module/video/resource tree in a JSONB ``modules``
column; note bundles keep their files in a JSONB ``files`` column. Every
write touches exactly one row.
"""

from typing import Any, Optional

from shared.repository import BaseRepository

from .models import Course, CourseModule, Note


class CatalogRepository(BaseRepository[Course]):
    """Repository for courses and note bundles."""

    COURSES = "courses"
    NOTES = "notes"

    # -------------------------------------------------------------------------
    # Courses
    # -------------------------------------------------------------------------

    def list_courses(self) -> list[Course]:
        result = (
            self._db.table(self.COURSES)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [Course.model_validate(row) for row in result.data]

    def get_course(self, course_id: str) -> Optional[Course]:
        result = self._db.table(self.COURSES).select("*").eq("id", course_id).execute()
        if not result.data:
            return None
        return Course.model_validate(result.data[0])

    def upsert_course(self, course_id: str, fields: dict[str, Any]) -> Course:
        """Insert a course or update the given columns of an existing one."""
        data = {"id": course_id, **fields}
        result = (
            self._db.table(self.COURSES)
            .upsert(data, on_conflict="id")
            .execute()
        )
        return Course.model_validate(result.data[0])

    def save_modules(self, course_id: str, modules: list[CourseModule]) -> Course:
        data = {"modules": [m.model_dump(mode="json") for m in modules]}
        result = (
            self._db.table(self.COURSES)
            .update(data)
            .eq("id", course_id)
            .execute()
        )
        return Course.model_validate(result.data[0])

    def delete_course(self, course_id: str) -> None:
        self._db.table(self.COURSES).delete().eq("id", course_id).execute()

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------

    def list_notes(self) -> list[Note]:
        result = (
            self._db.table(self.NOTES)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [Note.model_validate(row) for row in result.data]

    def get_note(self, note_id: str) -> Optional[Note]:
        result = self._db.table(self.NOTES).select("*").eq("id", note_id).execute()
        if not result.data:
            return None
        return Note.model_validate(result.data[0])

    def upsert_note(self, note_id: str, fields: dict[str, Any]) -> Note:
        data = {"id": note_id, **fields}
        result = (
            self._db.table(self.NOTES)
            .upsert(data, on_conflict="id")
            .execute()
        )
        return Note.model_validate(result.data[0])

    def delete_note(self, note_id: str) -> None:
        self._db.table(self.NOTES).delete().eq("id", note_id).execute()

    # -------------------------------------------------------------------------
    # Maintenance
    # -------------------------------------------------------------------------

    def delete_all(self) -> None:
        """Remove every course and note bundle."""
        self._db.table(self.COURSES).delete().neq("id", "").execute()
        self._db.table(self.NOTES).delete().neq("id", "").execute()
