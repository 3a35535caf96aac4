"""
Catalog data models.

Older records come in two legacy shapes:
- a video with a single ``notesUrl`` instead of a ``resources`` list
- a note bundle with a single ``fileUrl`` instead of a ``files`` list

Both are folded into the list form when a model is built, so nothing past
this module ever sees the legacy fields.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import Field, model_validator

from shared.models import CamelModel

LEGACY_NOTES_TITLE = "Notes"
LEGACY_FILE_TITLE = "Main Notes"


def _pop_first(data: dict[str, Any], *names: str) -> Any:
    value = None
    for name in names:
        found = data.pop(name, None)
        if value is None:
            value = found
    return value


def fold_legacy_notes(data: Any) -> Any:
    """Turn a video's single ``notesUrl`` into a one-item ``resources`` list."""
    if not isinstance(data, dict):
        return data
    data = dict(data)
    notes_url = _pop_first(data, "notesUrl", "notes_url")
    if notes_url and not data.get("resources"):
        data["resources"] = [
            {"title": LEGACY_NOTES_TITLE, "url": notes_url, "type": "pdf"}
        ]
    return data


def fold_legacy_file(data: Any) -> Any:
    """Turn a note's single ``fileUrl`` into a one-item ``files`` list."""
    if not isinstance(data, dict):
        return data
    data = dict(data)
    file_url = _pop_first(data, "fileUrl", "file_url")
    if file_url and not data.get("files"):
        data["files"] = [{"title": LEGACY_FILE_TITLE, "url": file_url}]
    return data


class Resource(CamelModel):
    """A secondary document attached to a video."""

    title: str = ""
    url: str
    type: str = "pdf"


class Video(CamelModel):
    """A lesson. ``video_url`` is a storage key or an external URL."""

    id: str
    title: str = ""
    description: Optional[str] = None
    duration: Optional[str] = None
    video_url: Optional[str] = None
    resources: list[Resource] = Field(default_factory=list)
    is_free_preview: bool = False

    @model_validator(mode="before")
    @classmethod
    def _fold_legacy_notes(cls, data: Any) -> Any:
        return fold_legacy_notes(data)


class CourseModule(CamelModel):
    """An ordered group of videos inside a course."""

    title: str = ""
    videos: list[Video] = Field(default_factory=list)


class Course(CamelModel):
    """A purchasable video course."""

    id: str
    title: str
    branch_slug: str
    year: str
    description: Optional[str] = None
    price: float = 0
    thumbnail: Optional[str] = None
    modules: list[CourseModule] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    def all_videos(self) -> list[Video]:
        return [video for module in self.modules for video in module.videos]

    def count_videos(self) -> int:
        return len(self.all_videos())

    def count_pdfs(self) -> int:
        return sum(len(video.resources) for video in self.all_videos())


class CourseSummary(Course):
    """A course as shown in listings."""

    video_count: int = 0
    pdf_count: int = 0


class NoteFile(CamelModel):
    """One file inside a note bundle."""

    title: str = ""
    url: str


class Note(CamelModel):
    """A purchasable bundle of PDF notes."""

    id: str
    title: str
    branch_slug: Optional[str] = None
    year: Optional[str] = None
    subject: Optional[str] = None
    description: Optional[str] = None
    price: float = 0
    coverage: Optional[str] = None
    files: list[NoteFile] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _fold_legacy_file(cls, data: Any) -> Any:
        return fold_legacy_file(data)


# -----------------------------------------------------------------------------
# Request bodies
# -----------------------------------------------------------------------------


class CourseUpsertRequest(CamelModel):
    """Create or replace a course's top-level fields."""

    id: Optional[str] = None
    title: str = Field(..., min_length=1)
    branch_slug: str = Field(..., min_length=1)
    year: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: float = Field(default=0, ge=0)
    thumbnail: Optional[str] = None
    modules: Optional[list[CourseModule]] = None


class ModuleCreateRequest(CamelModel):
    title: str = Field(..., min_length=1)


class VideoCreateRequest(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    duration: Optional[str] = None
    video_url: Optional[str] = None
    resources: list[Resource] = Field(default_factory=list)
    is_free_preview: bool = False

    @model_validator(mode="before")
    @classmethod
    def _fold_legacy_notes(cls, data: Any) -> Any:
        return fold_legacy_notes(data)


class VideoUpdateRequest(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None


class NoteUpsertRequest(CamelModel):
    """Create or replace a note bundle."""

    id: Optional[str] = None
    title: str = Field(..., min_length=1)
    branch_slug: Optional[str] = None
    year: Optional[str] = None
    subject: Optional[str] = None
    description: Optional[str] = None
    price: float = Field(default=0, ge=0)
    coverage: Optional[str] = None
    files: list[NoteFile] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _fold_legacy_file(cls, data: Any) -> Any:
        return fold_legacy_file(data)
