"""
Media API endpoints.

- GET  /media/sign        presigned URL for a document (bearer token)
- GET  /stream            byte-range video proxy (token in query string)
- POST /upload            single file upload (admin)
- POST /upload/multiple   multi-file upload (admin)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import PlainTextResponse, StreamingResponse

from api.dependencies import get_media_service
from api.errors import status_code_for
from api.middleware.auth import get_current_user, require_admin
from shared.exceptions import AppError
from shared.models import AuthenticatedUser

from .interfaces import IMediaService
from .models import MultipleUploadResult, SignedUrlResponse, UploadResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/media/sign", response_model=SignedUrlResponse)
async def sign_media(
    key: Optional[str] = Query(default=None, description="Storage key or external URL"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IMediaService = Depends(get_media_service),
) -> SignedUrlResponse:
    """
    Get a time-limited URL for a private document.

    External URLs are returned unchanged.
    """
    return SignedUrlResponse(url=await service.sign_document(key))


@router.get("/stream", status_code=206)
async def stream_media(
    request: Request,
    key: Optional[str] = Query(default=None, description="Storage key of the video"),
    token: Optional[str] = Query(default=None, description="Session token"),
    service: IMediaService = Depends(get_media_service),
):
    """
    Serve one byte range of a private video.

    The token travels in the query string because a ``<video src>`` cannot
    send headers. A Range header is required; whole-object reads are not
    served here.

    Responses:
    - 206 with Content-Range, Accept-Ranges, Content-Length, Content-Type
    - 400 missing key, missing or malformed Range
    - 403 missing or invalid token
    - 404 unknown key
    - 500 storage failure
    """
    try:
        content = await service.open_stream(key, token, request.headers.get("range"))
    except AppError as e:
        status_code = status_code_for(e)
        if status_code >= 500:
            logger.error("Stream error for %s: %s", key, e.message)
        return PlainTextResponse(e.message, status_code=status_code)

    return StreamingResponse(
        content.body,
        status_code=206,
        headers=content.headers(),
        media_type=content.content_type,
    )


@router.post("/upload", response_model=UploadResult)
async def upload_file(
    file: Optional[UploadFile] = File(default=None),
    folder: Optional[str] = Form(default=None),
    admin: AuthenticatedUser = Depends(require_admin),
    service: IMediaService = Depends(get_media_service),
) -> UploadResult:
    """Upload one file. Returns its storage key, not a public URL."""
    if file is None:
        return await service.upload("", None, b"", folder)
    data = await file.read()
    return await service.upload(file.filename or "", file.content_type, data, folder)


@router.post("/upload/multiple", response_model=MultipleUploadResult)
async def upload_files(
    files: Optional[list[UploadFile]] = File(default=None),
    folder: Optional[str] = Form(default=None),
    admin: AuthenticatedUser = Depends(require_admin),
    service: IMediaService = Depends(get_media_service),
) -> MultipleUploadResult:
    """Upload several files. Returns their storage keys."""
    payload = [
        (f.filename or "", f.content_type, await f.read())
        for f in files or []
    ]
    return await service.upload_many(payload, folder)
