from fastapi import APIRouter, Depends

from .. import schemas
from ..services.llm.assistant import ResumeAssistant
from .deps import get_resume_assistant

router = APIRouter()

@router.post("/optimize-resume", response_model=schemas.assistant.OptimizeResponse)
async def optimize_resume_endpoint(
    request: schemas.assistant.OptimizeRequest,
    assistant: ResumeAssistant = Depends(get_resume_assistant),
):
    """
    ATS-optimize a plaintext resume. The response text always starts with the
    submitted text unchanged.
    """
    result = await assistant.optimize(request.resume_text, request.target_role)
    return schemas.assistant.OptimizeResponse(
        optimized_text=result.optimized_text,
        ats_score=result.ats_score,
    )


@router.post("/generate-cover-letter", response_model=schemas.assistant.CoverLetterResponse)
async def generate_cover_letter_endpoint(
    request: schemas.assistant.CoverLetterRequest,
    assistant: ResumeAssistant = Depends(get_resume_assistant),
):
    """
    Generate a cover letter for a role. The letter is signed with the literal
    ``[Your Name]`` placeholder for the client to fill in.
    """
    letter = await assistant.generate_cover_letter(
        request.resume_text, request.target_role, request.company_name or None
    )
    return schemas.assistant.CoverLetterResponse(cover_letter=letter)
