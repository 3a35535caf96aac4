import pytest
from unittest.mock import AsyncMock, MagicMock

from modules.catalog.exceptions import (
    CourseNotFoundError,
    ModuleNotFoundError,
    NoteNotFoundError,
    VideoNotFoundError,
)
from modules.catalog.models import (
    Course,
    CourseUpsertRequest,
    Note,
    NoteUpsertRequest,
    VideoCreateRequest,
)
from modules.catalog.service import CatalogService
from modules.media.signer import KeySigner
from shared.config import Settings


def make_course(**overrides) -> Course:
    data = {
        "id": "c1",
        "title": "DSA",
        "branch_slug": "cse",
        "year": "2",
        "thumbnail": "thumbs/c1.png",
        "modules": [
            {
                "title": "Basics",
                "videos": [
                    {
                        "id": "v1",
                        "title": "Intro",
                        "video_url": "videos/c1/v1.mp4",
                        "resources": [{"title": "Slides", "url": "notes/v1.pdf"}],
                    }
                ],
            }
        ],
    }
    data.update(overrides)
    return Course.model_validate(data)


@pytest.fixture
def repository():
    repository = MagicMock()
    repository.get_course.side_effect = lambda course_id: make_course() if course_id == "c1" else None
    repository.save_modules.side_effect = lambda course_id, modules: make_course(
        modules=[m.model_dump() for m in modules]
    )
    return repository


@pytest.fixture
def store():
    store = MagicMock()
    store.presign_get = AsyncMock(side_effect=lambda key, ttl: f"https://signed/{key}?ttl={ttl}")
    return store


@pytest.fixture
def media():
    media = MagicMock()
    media.delete_reference = AsyncMock(return_value=True)
    return media


@pytest.fixture
def service(repository, store, media) -> CatalogService:
    return CatalogService(
        repository=repository,
        signer=KeySigner(store),
        media=media,
        settings=Settings(_env_file=None),
    )


class TestCourses:

    @pytest.mark.asyncio
    async def test_list_signs_thumbnails_and_counts(self, service, repository):
        repository.list_courses.return_value = [make_course()]

        [summary] = await service.list_courses()

        assert summary.thumbnail == "https://signed/thumbs/c1.png?ttl=3600"
        assert summary.video_count == 1
        assert summary.pdf_count == 1

    @pytest.mark.asyncio
    async def test_external_thumbnail_unsigned(self, service, repository, store):
        repository.list_courses.return_value = [make_course(thumbnail="https://img/x.png")]
        [summary] = await service.list_courses()
        assert summary.thumbnail == "https://img/x.png"
        store.presign_get.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_missing(self, service):
        with pytest.raises(CourseNotFoundError):
            await service.get_course("nope")

    @pytest.mark.asyncio
    async def test_upsert_keeps_key_and_drops_echoed_url(self, service, repository):
        repository.upsert_course.return_value = make_course()

        await service.upsert_course(
            CourseUpsertRequest(
                id="c1", title="DSA", branch_slug="cse", year="2",
                thumbnail="https://signed/thumbs/c1.png?X-Amz-Signature=1",
            )
        )
        _, fields = repository.upsert_course.call_args[0]
        assert "thumbnail" not in fields
        assert "modules" not in fields

        await service.upsert_course(
            CourseUpsertRequest(title="New", branch_slug="ece", year="1", thumbnail="thumbs/new.png")
        )
        course_id, fields = repository.upsert_course.call_args[0]
        assert course_id.startswith("c_")
        assert fields["thumbnail"] == "thumbs/new.png"


    @pytest.mark.asyncio
    async def test_partial_update_writes_only_sent_fields(self, service, repository):
        repository.upsert_course.return_value = make_course()

        await service.upsert_course(
            CourseUpsertRequest.model_validate(
                {"id": "c1", "title": "DSA II", "branchSlug": "cse", "year": "2"}
            )
        )
        _, fields = repository.upsert_course.call_args[0]
        assert fields == {"title": "DSA II", "branch_slug": "cse", "year": "2"}


class TestModulesAndVideos:

    @pytest.mark.asyncio
    async def test_add_module(self, service, repository):
        course = await service.add_module("c1", "Advanced")
        assert [m.title for m in course.modules] == ["Basics", "Advanced"]

    @pytest.mark.asyncio
    async def test_add_video_assigns_id(self, service):
        course = await service.add_video(
            "c1", 0, VideoCreateRequest(title="Arrays", video_url="videos/c1/v2.mp4")
        )
        videos = course.modules[0].videos
        assert videos[-1].title == "Arrays"
        assert videos[-1].id.startswith("v_")

    @pytest.mark.asyncio
    async def test_add_video_bad_module(self, service):
        with pytest.raises(ModuleNotFoundError):
            await service.add_video("c1", 5, VideoCreateRequest(title="x"))

    @pytest.mark.asyncio
    async def test_update_video(self, service):
        course = await service.update_video("c1", 0, "v1", "Welcome", "Start here")
        video = course.modules[0].videos[0]
        assert (video.title, video.description) == ("Welcome", "Start here")
        assert video.video_url == "videos/c1/v1.mp4"

    @pytest.mark.asyncio
    async def test_update_missing_video(self, service):
        with pytest.raises(VideoNotFoundError):
            await service.update_video("c1", 0, "nope", "x", None)

    @pytest.mark.asyncio
    async def test_delete_video_removes_media(self, service, media):
        course = await service.delete_video("c1", 0, "v1")
        assert course.modules[0].videos == []
        deleted = [call.args[0] for call in media.delete_reference.await_args_list]
        assert deleted == ["videos/c1/v1.mp4", "notes/v1.pdf"]


class TestNotes:

    @pytest.mark.asyncio
    async def test_get_signs_files(self, service, repository):
        repository.get_note.return_value = Note.model_validate(
            {"id": "n1", "title": "DSA", "fileUrl": "notes/dsa.pdf"}
        )
        note = await service.get_note("n1")
        assert note.files[0].url == "https://signed/notes/dsa.pdf?ttl=10800"
        assert note.files[0].title == "Main Notes"

    @pytest.mark.asyncio
    async def test_list_signs_private_files_only(self, service, repository):
        repository.list_notes.return_value = [
            Note.model_validate(
                {"id": "n1", "title": "DSA", "files": [{"url": "notes/a.pdf"}, {"url": "https://x/b.pdf"}]}
            ),
            Note(id="n2", title="Empty"),
        ]
        first, second = await service.list_notes()
        assert [f.url for f in first.files] == [
            "https://signed/notes/a.pdf?ttl=10800",
            "https://x/b.pdf",
        ]
        assert second.files == []

    @pytest.mark.asyncio
    async def test_get_missing(self, service, repository):
        repository.get_note.return_value = None
        with pytest.raises(NoteNotFoundError):
            await service.get_note("nope")

    @pytest.mark.asyncio
    async def test_upsert_generates_id(self, service, repository):
        repository.upsert_note.return_value = Note(id="n_x", title="DSA")
        await service.upsert_note(NoteUpsertRequest(title="DSA", files=[{"url": "a.pdf"}]))
        note_id, fields = repository.upsert_note.call_args[0]
        assert note_id.startswith("n_")
        assert fields["files"] == [{"title": "", "url": "a.pdf"}]

    @pytest.mark.asyncio
    async def test_rename_keeps_files_and_price(self, service, repository):
        repository.upsert_note.return_value = Note(id="n1", title="New title")

        await service.upsert_note(NoteUpsertRequest.model_validate({"id": "n1", "title": "New title"}))

        note_id, fields = repository.upsert_note.call_args[0]
        assert note_id == "n1"
        assert fields == {"title": "New title"}

    @pytest.mark.asyncio
    async def test_legacy_file_url_is_written_as_files(self, service, repository):
        repository.upsert_note.return_value = Note(id="n1", title="DSA")

        await service.upsert_note(
            NoteUpsertRequest.model_validate({"id": "n1", "title": "DSA", "fileUrl": "notes/a.pdf"})
        )

        _, fields = repository.upsert_note.call_args[0]
        assert fields["files"] == [{"title": "Main Notes", "url": "notes/a.pdf"}]
        assert "price" not in fields

    @pytest.mark.asyncio
    async def test_delete_removes_files(self, service, repository, media):
        repository.get_note.return_value = Note.model_validate(
            {"id": "n1", "title": "DSA", "files": [{"url": "notes/a.pdf"}, {"url": "https://x/b.pdf"}]}
        )
        await service.delete_note("n1")
        assert media.delete_reference.await_count == 2
        repository.delete_note.assert_called_once_with("n1")

    @pytest.mark.asyncio
    async def test_reset(self, service, repository):
        await service.reset()
        repository.delete_all.assert_called_once()
