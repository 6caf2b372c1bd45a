"""Access to stored original files.

Both endpoints resolve the resume by id and owner before touching storage.
The proxy response sets no Access-Control-Allow-Origin header of its own, so
cross-origin reads are governed by the app-wide CORS middleware only.
"""

from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import Response

from resume_enhancer.api.deps import CurrentUser, DbSession, Storage
from resume_enhancer.models.resume import FileType
from resume_enhancer.schemas.resume import ResumeFileResponse
from resume_enhancer.services.extraction import DOCX_MIME_TYPE, PDF_MIME_TYPE
from resume_enhancer.services.resume_service import ResumeService

router = APIRouter()

MEDIA_TYPES = {FileType.PDF: PDF_MIME_TYPE, FileType.DOCX: DOCX_MIME_TYPE}


def content_disposition(disposition: str, filename: str) -> str:
    """Header value with an ASCII fallback and an RFC 5987 UTF-8 name."""
    ascii_name = filename.encode("ascii", "ignore").decode().replace('"', "").replace("\\", "")
    return f"{disposition}; filename=\"{ascii_name or 'resume'}\"; filename*=UTF-8''{quote(filename)}"


@router.get("/resume-file/{resume_id}", response_model=ResumeFileResponse)
async def get_resume_file(
    resume_id: int,
    db: DbSession,
    current_user: CurrentUser,
    storage: Storage,
):
    """Signed, time-limited URL to the original upload."""
    resume = await ResumeService(db).get_owned_resume(current_user, resume_id)
    url = await storage.generate_presigned_url(resume.cloud_storage_path)
    return ResumeFileResponse(
        url=url,
        file_name=resume.original_name,
        file_type=resume.file_type,
    )


@router.get("/proxy-pdf/{resume_id}")
async def proxy_pdf(
    resume_id: int,
    db: DbSession,
    current_user: CurrentUser,
    storage: Storage,
):
    """Stream the original upload through the server for inline preview."""
    resume = await ResumeService(db).get_owned_resume(current_user, resume_id)
    content = await storage.download(resume.cloud_storage_path)

    return Response(
        content=content,
        media_type=MEDIA_TYPES[resume.file_type],
        headers={
            "Content-Disposition": content_disposition("inline", resume.original_name),
            "Cache-Control": "private, max-age=3600",
        },
    )
