"""
Catalog API endpoints.

Reads are public. Writes require an admin token.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_catalog_service
from api.middleware.auth import require_admin
from shared.models import AuthenticatedUser

from .interfaces import ICatalogService
from .models import (
    Course,
    CourseSummary,
    CourseUpsertRequest,
    ModuleCreateRequest,
    Note,
    NoteUpsertRequest,
    VideoCreateRequest,
    VideoUpdateRequest,
)

router = APIRouter()


# -----------------------------------------------------------------------------
# Courses
# -----------------------------------------------------------------------------


@router.get("/courses", response_model=list[CourseSummary])
async def list_courses(
    service: ICatalogService = Depends(get_catalog_service),
) -> list[CourseSummary]:
    """List courses, newest first, with signed thumbnails and content counts."""
    return await service.list_courses()


@router.get("/courses/{course_id}", response_model=Course)
async def get_course(
    course_id: str,
    service: ICatalogService = Depends(get_catalog_service),
) -> Course:
    return await service.get_course(course_id)


@router.post("/courses", response_model=Course)
async def upsert_course(
    request: CourseUpsertRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ICatalogService = Depends(get_catalog_service),
) -> Course:
    """Create a course or update an existing one by id."""
    return await service.upsert_course(request)


@router.delete("/courses/{course_id}")
async def delete_course(
    course_id: str,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ICatalogService = Depends(get_catalog_service),
) -> dict[str, str]:
    await service.delete_course(course_id)
    return {"message": "Course deleted"}


@router.post("/courses/{course_id}/modules", response_model=Course)
async def add_module(
    course_id: str,
    request: ModuleCreateRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ICatalogService = Depends(get_catalog_service),
) -> Course:
    return await service.add_module(course_id, request.title)


@router.post("/courses/{course_id}/modules/{module_index}/videos", response_model=Course)
async def add_video(
    course_id: str,
    module_index: int,
    request: VideoCreateRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ICatalogService = Depends(get_catalog_service),
) -> Course:
    return await service.add_video(course_id, module_index, request)


@router.put(
    "/courses/{course_id}/modules/{module_index}/videos/{video_id}",
    response_model=Course,
)
async def update_video(
    course_id: str,
    module_index: int,
    video_id: str,
    request: VideoUpdateRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ICatalogService = Depends(get_catalog_service),
) -> Course:
    """Update a video's title and description."""
    return await service.update_video(
        course_id, module_index, video_id, request.title, request.description
    )


@router.delete(
    "/courses/{course_id}/modules/{module_index}/videos/{video_id}",
    response_model=Course,
)
async def delete_video(
    course_id: str,
    module_index: int,
    video_id: str,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ICatalogService = Depends(get_catalog_service),
) -> Course:
    """Delete a video and its stored media."""
    return await service.delete_video(course_id, module_index, video_id)


# -----------------------------------------------------------------------------
# Notes
# -----------------------------------------------------------------------------


@router.get("/notes", response_model=list[Note])
async def list_notes(
    service: ICatalogService = Depends(get_catalog_service),
) -> list[Note]:
    return await service.list_notes()


@router.get("/notes/{note_id}", response_model=Note)
async def get_note(
    note_id: str,
    service: ICatalogService = Depends(get_catalog_service),
) -> Note:
    """Get a note bundle with signed file URLs."""
    return await service.get_note(note_id)


@router.post("/notes", response_model=Note)
async def upsert_note(
    request: NoteUpsertRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ICatalogService = Depends(get_catalog_service),
) -> Note:
    return await service.upsert_note(request)


@router.delete("/notes/{note_id}")
async def delete_note(
    note_id: str,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ICatalogService = Depends(get_catalog_service),
) -> dict[str, bool]:
    await service.delete_note(note_id)
    return {"success": True}


@router.delete("/admin/reset-catalog")
async def reset_catalog(
    admin: AuthenticatedUser = Depends(require_admin),
    service: ICatalogService = Depends(get_catalog_service),
) -> dict[str, str]:
    await service.reset()
    return {"message": "All content deleted from Database."}
