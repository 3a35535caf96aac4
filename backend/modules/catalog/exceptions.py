"""
Catalog module exceptions.
"""

from shared.exceptions import NotFoundError


class CourseNotFoundError(NotFoundError):
    """Raised when a course is not found."""

    def __init__(self, course_id: str):
        super().__init__(
            "Course not found",
            code="COURSE_NOT_FOUND",
            details={"course_id": course_id},
        )


class ModuleNotFoundError(NotFoundError):
    """Raised when a module index is out of range for a course."""

    def __init__(self, course_id: str, module_index: int):
        super().__init__(
            "Module not found",
            code="MODULE_NOT_FOUND",
            details={"course_id": course_id, "module_index": module_index},
        )


class VideoNotFoundError(NotFoundError):
    """Raised when a video is not in the given module."""

    def __init__(self, course_id: str, video_id: str):
        super().__init__(
            "Video not found",
            code="VIDEO_NOT_FOUND",
            details={"course_id": course_id, "video_id": video_id},
        )


class NoteNotFoundError(NotFoundError):
    """Raised when a note bundle is not found."""

    def __init__(self, note_id: str):
        super().__init__(
            "Note not found",
            code="NOTE_NOT_FOUND",
            details={"note_id": note_id},
        )
