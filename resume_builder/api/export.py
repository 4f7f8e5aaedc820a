from fastapi import APIRouter, Response

from .. import schemas
from ..schemas.draft import ResumeDraft
from ..services.export import pdf_exporter

router = APIRouter()

def _pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{pdf_exporter.safe_file_name(filename)}"'},
    )

@router.post("/export/resume")
async def export_resume_endpoint(draft: ResumeDraft):
    """
    Render a draft (as sent by the client) to an A4 PDF.
    """
    pdf = pdf_exporter.render_resume_pdf(draft)
    return _pdf_response(pdf, pdf_exporter.resume_file_name(draft))


@router.post("/export/cover-letter")
async def export_cover_letter_endpoint(request: schemas.assistant.CoverLetterExportRequest):
    pdf = pdf_exporter.render_cover_letter_pdf(request.cover_letter)
    return _pdf_response(pdf, request.file_name or "Cover_Letter.pdf")
