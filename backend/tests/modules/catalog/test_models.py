"""
Tests for catalog models, including normalisation of legacy record shapes.
"""

from modules.catalog.models import (
    Course,
    CourseSummary,
    Note,
    Video,
    VideoCreateRequest,
)


class TestVideoLegacyNotes:

    def test_notes_url_becomes_resource(self):
        video = Video.model_validate({"id": "v1", "title": "Intro", "notesUrl": "notes/v1.pdf"})
        assert len(video.resources) == 1
        assert video.resources[0].url == "notes/v1.pdf"
        assert video.resources[0].type == "pdf"

    def test_resources_win_over_notes_url(self):
        video = Video.model_validate(
            {
                "id": "v1",
                "notesUrl": "notes/old.pdf",
                "resources": [{"title": "Slides", "url": "slides/v1.pdf"}],
            }
        )
        assert [r.url for r in video.resources] == ["slides/v1.pdf"]

    def test_snake_case_legacy_field(self):
        video = Video.model_validate({"id": "v1", "notes_url": "notes/v1.pdf"})
        assert video.resources[0].url == "notes/v1.pdf"

    def test_legacy_field_not_serialised(self):
        video = Video.model_validate({"id": "v1", "notesUrl": "notes/v1.pdf"})
        dumped = video.model_dump(by_alias=True)
        assert "notesUrl" not in dumped
        assert dumped["videoUrl"] is None

    def test_create_request_folds_too(self):
        request = VideoCreateRequest.model_validate({"title": "Intro", "notesUrl": "n.pdf"})
        assert request.resources[0].url == "n.pdf"


class TestNoteLegacyFile:

    def test_file_url_becomes_file(self):
        note = Note.model_validate({"id": "n1", "title": "DSA", "fileUrl": "notes/dsa.pdf"})
        assert [(f.title, f.url) for f in note.files] == [("Main Notes", "notes/dsa.pdf")]

    def test_files_win_over_file_url(self):
        note = Note.model_validate(
            {
                "id": "n1",
                "title": "DSA",
                "fileUrl": "notes/old.pdf",
                "files": [{"title": "Unit 1", "url": "notes/u1.pdf"}],
            }
        )
        assert [f.url for f in note.files] == ["notes/u1.pdf"]


class TestCourse:

    def course(self) -> Course:
        return Course.model_validate(
            {
                "id": "c1",
                "title": "DSA",
                "branchSlug": "cse",
                "year": "2",
                "modules": [
                    {"title": "M1", "videos": [{"id": "v1", "notesUrl": "n1.pdf"}, {"id": "v2"}]},
                    {"title": "M2", "videos": [{"id": "v3", "resources": [{"url": "a"}, {"url": "b"}]}]},
                ],
            }
        )

    def test_counts(self):
        course = self.course()
        assert [v.id for v in course.all_videos()] == ["v1", "v2", "v3"]
        assert course.count_videos() == 3
        assert course.count_pdfs() == 3

    def test_summary_serialises_counts_in_camel_case(self):
        course = self.course()
        summary = CourseSummary(
            **course.model_dump(),
            video_count=course.count_videos(),
            pdf_count=course.count_pdfs(),
        )
        dumped = summary.model_dump(by_alias=True)
        assert dumped["videoCount"] == 3
        assert dumped["pdfCount"] == 3
        assert dumped["branchSlug"] == "cse"
