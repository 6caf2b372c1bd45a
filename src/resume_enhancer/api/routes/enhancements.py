"""Enhancement request and download endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import Response

from resume_enhancer.api.deps import CurrentUser, DbSession, LLMClient, Vault
from resume_enhancer.api.routes.files import content_disposition
from resume_enhancer.schemas.resume import EnhanceRequest, EnhanceResponse, EnhancementResponse
from resume_enhancer.services.enhancement_service import EnhancementService
from resume_enhancer.services.pdf_service import render_enhancement_pdf
from resume_enhancer.services.resume_service import ResumeService

router = APIRouter()


@router.post("/enhance-resume/{resume_id}", response_model=EnhanceResponse)
async def enhance_resume(
    resume_id: int,
    data: EnhanceRequest,
    db: DbSession,
    current_user: CurrentUser,
    vault: Vault,
    llm_client: LLMClient,
):
    """Rewrite a resume with the user's active LLM provider.

    Blocks for the duration of the provider call.
    """
    service = EnhancementService(db, vault, http_client=llm_client)
    enhancement = await service.enhance(current_user, resume_id, data.enhancement_type)
    return EnhanceResponse(enhancement=EnhancementResponse.model_validate(enhancement))


@router.get("/download-resume/{enhancement_id}")
async def download_resume(enhancement_id: int, db: DbSession, current_user: CurrentUser):
    """Download an enhancement rendered as a PDF."""
    enhancement = await ResumeService(db).get_owned_enhancement(current_user, enhancement_id)
    pdf_bytes = render_enhancement_pdf(enhancement)

    stamp = int(datetime.now(timezone.utc).timestamp() * 1000)
    filename = f"resume-{enhancement.enhancement_type}-{stamp}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition("attachment", filename)},
    )
