"""
Catalog module interfaces.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import (
    Course,
    CourseModule,
    CourseSummary,
    CourseUpsertRequest,
    Note,
    NoteUpsertRequest,
    VideoCreateRequest,
)


@runtime_checkable
class ICatalogRepository(Protocol):
    """Persistence contract for courses and note bundles."""

    def list_courses(self) -> list[Course]: ...

    def get_course(self, course_id: str) -> Optional[Course]: ...

    def upsert_course(self, course_id: str, fields: dict[str, Any]) -> Course: ...

    def save_modules(self, course_id: str, modules: list[CourseModule]) -> Course: ...

    def delete_course(self, course_id: str) -> None: ...

    def list_notes(self) -> list[Note]: ...

    def get_note(self, note_id: str) -> Optional[Note]: ...

    def upsert_note(self, note_id: str, fields: dict[str, Any]) -> Note: ...

    def delete_note(self, note_id: str) -> None: ...

    def delete_all(self) -> None: ...


@runtime_checkable
class ICatalogService(Protocol):
    """Catalog operations used by the API layer."""

    async def list_courses(self) -> list[CourseSummary]: ...

    async def get_course(self, course_id: str) -> Course:
        """
        Raises:
            CourseNotFoundError: If the course does not exist
        """
        ...

    async def upsert_course(self, request: CourseUpsertRequest) -> Course: ...

    async def delete_course(self, course_id: str) -> None: ...

    async def add_module(self, course_id: str, title: str) -> Course: ...

    async def add_video(
        self, course_id: str, module_index: int, request: VideoCreateRequest
    ) -> Course: ...

    async def update_video(
        self,
        course_id: str,
        module_index: int,
        video_id: str,
        title: str,
        description: Optional[str],
    ) -> Course: ...

    async def delete_video(self, course_id: str, module_index: int, video_id: str) -> Course: ...

    async def list_notes(self) -> list[Note]: ...

    async def get_note(self, note_id: str) -> Note: ...

    async def upsert_note(self, request: NoteUpsertRequest) -> Note: ...

    async def delete_note(self, note_id: str) -> None: ...

    async def reset(self) -> None: ...
