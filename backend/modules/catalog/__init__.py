"""
Catalog module.

Courses (modules -> videos -> resources) and note bundles (files).

Public API:
- ICatalogService / ICatalogRepository
- Course, CourseModule, Video, Resource, Note, NoteFile models
"""

from .interfaces import ICatalogService, ICatalogRepository
from .models import Course, CourseModule, CourseSummary, Video, Resource, Note, NoteFile
from .exceptions import (
    CourseNotFoundError,
    ModuleNotFoundError,
    VideoNotFoundError,
    NoteNotFoundError,
)

__all__ = [
    "ICatalogService",
    "ICatalogRepository",
    "Course",
    "CourseModule",
    "CourseSummary",
    "Video",
    "Resource",
    "Note",
    "NoteFile",
    "CourseNotFoundError",
    "ModuleNotFoundError",
    "VideoNotFoundError",
    "NoteNotFoundError",
]
