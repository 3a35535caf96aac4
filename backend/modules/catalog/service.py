"""
Catalog service.

Thin CRUD over courses and note bundles. The only media-aware parts are
signing thumbnails and note files on the way out and removing stored
objects when a video or note bundle is deleted.
"""

import logging
import time
import uuid
from typing import Optional

from shared.config import Settings, get_settings
from modules.media.interfaces import IMediaService
from modules.media.signer import KeySigner, is_external_url

from .exceptions import (
    CourseNotFoundError,
    ModuleNotFoundError,
    NoteNotFoundError,
    VideoNotFoundError,
)
from .interfaces import ICatalogRepository, ICatalogService
from .models import (
    Course,
    CourseModule,
    CourseSummary,
    CourseUpsertRequest,
    Note,
    NoteFile,
    NoteUpsertRequest,
    Video,
    VideoCreateRequest,
)

logger = logging.getLogger(__name__)


def new_video_id() -> str:
    return f"v_{int(time.time() * 1000)}"


class CatalogService(ICatalogService):
    """Catalog reads and admin writes."""

    def __init__(
        self,
        repository: ICatalogRepository,
        signer: KeySigner,
        media: IMediaService,
        settings: Optional[Settings] = None,
    ):
        self._repository = repository
        self._signer = signer
        self._media = media
        self._settings = settings or get_settings()

    # -------------------------------------------------------------------------
    # Courses
    # -------------------------------------------------------------------------

    async def list_courses(self) -> list[CourseSummary]:
        summaries = []
        for course in self._repository.list_courses():
            signed = await self._with_signed_thumbnail(course)
            summaries.append(
                CourseSummary(
                    **signed.model_dump(),
                    video_count=course.count_videos(),
                    pdf_count=course.count_pdfs(),
                )
            )
        return summaries

    async def get_course(self, course_id: str) -> Course:
        return await self._with_signed_thumbnail(self._require_course(course_id))

    async def upsert_course(self, request: CourseUpsertRequest) -> Course:
        course_id = request.id or f"c_{uuid.uuid4().hex[:12]}"
        # Only the fields the editor sent are written; the rest keep their stored values
        sent = request.model_fields_set - {"id", "modules", "thumbnail"}
        fields = request.model_dump(include=sent, mode="json")

        # A signed URL echoed back by the editor must not overwrite the key
        if request.thumbnail and not is_external_url(request.thumbnail):
            fields["thumbnail"] = request.thumbnail
        if request.modules is not None:
            fields["modules"] = [m.model_dump(mode="json") for m in request.modules]

        course = self._repository.upsert_course(course_id, fields)
        logger.info("Saved course %s", course_id)
        return course

    async def delete_course(self, course_id: str) -> None:
        self._repository.delete_course(course_id)
        logger.info("Deleted course %s", course_id)

    async def add_module(self, course_id: str, title: str) -> Course:
        course = self._require_course(course_id)
        modules = list(course.modules) + [CourseModule(title=title, videos=[])]
        return self._repository.save_modules(course_id, modules)

    async def add_video(
        self,
        course_id: str,
        module_index: int,
        request: VideoCreateRequest,
    ) -> Course:
        course = self._require_course(course_id)
        module = self._require_module(course, module_index)

        video = Video(id=new_video_id(), **request.model_dump())
        module.videos.append(video)
        return self._repository.save_modules(course_id, course.modules)

    async def update_video(
        self,
        course_id: str,
        module_index: int,
        video_id: str,
        title: str,
        description: Optional[str],
    ) -> Course:
        course = self._require_course(course_id)
        module = self._require_module(course, module_index)

        for index, video in enumerate(module.videos):
            if video.id == video_id:
                module.videos[index] = video.model_copy(
                    update={"title": title, "description": description}
                )
                return self._repository.save_modules(course_id, course.modules)

        raise VideoNotFoundError(course_id, video_id)

    async def delete_video(self, course_id: str, module_index: int, video_id: str) -> Course:
        course = self._require_course(course_id)
        module = self._require_module(course, module_index)

        video = next((v for v in module.videos if v.id == video_id), None)
        if video is None:
            raise VideoNotFoundError(course_id, video_id)

        # Storage first; a failed delete leaves an orphan object, not a dangling record
        await self._media.delete_reference(video.video_url)
        for resource in video.resources:
            await self._media.delete_reference(resource.url)

        module.videos = [v for v in module.videos if v.id != video_id]
        return self._repository.save_modules(course_id, course.modules)

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------

    async def list_notes(self) -> list[Note]:
        """List note bundles, newest first, with signed file URLs."""
        return [await self._with_signed_files(note) for note in self._repository.list_notes()]

    async def get_note(self, note_id: str) -> Note:
        note = self._repository.get_note(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        return await self._with_signed_files(note)

    async def upsert_note(self, request: NoteUpsertRequest) -> Note:
        note_id = request.id or f"n_{uuid.uuid4().hex[:12]}"
        # Omitted fields, files included, keep their stored values
        fields = request.model_dump(include=request.model_fields_set - {"id"}, mode="json")
        note = self._repository.upsert_note(note_id, fields)
        logger.info("Saved note bundle %s", note_id)
        return note

    async def delete_note(self, note_id: str) -> None:
        note = self._repository.get_note(note_id)
        if note is not None:
            for file in note.files:
                await self._media.delete_reference(file.url)
        self._repository.delete_note(note_id)
        logger.info("Deleted note bundle %s", note_id)

    async def reset(self) -> None:
        self._repository.delete_all()
        logger.warning("Catalog reset: all courses and note bundles deleted")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require_course(self, course_id: str) -> Course:
        course = self._repository.get_course(course_id)
        if course is None:
            raise CourseNotFoundError(course_id)
        return course

    @staticmethod
    def _require_module(course: Course, module_index: int) -> CourseModule:
        if module_index < 0 or module_index >= len(course.modules):
            raise ModuleNotFoundError(course.id, module_index)
        return course.modules[module_index]

    async def _with_signed_thumbnail(self, course: Course) -> Course:
        if not course.thumbnail:
            return course
        thumbnail = await self._signer.sign(
            course.thumbnail, self._settings.thumbnail_url_ttl_seconds
        )
        return course.model_copy(update={"thumbnail": thumbnail})

    async def _with_signed_files(self, note: Note) -> Note:
        if not note.files:
            return note
        urls = await self._signer.sign_many(
            [f.url for f in note.files], self._settings.document_url_ttl_seconds
        )
        files = [
            NoteFile(title=f.title, url=url or f.url)
            for f, url in zip(note.files, urls)
        ]
        return note.model_copy(update={"files": files})
