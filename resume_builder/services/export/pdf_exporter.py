"""
PDF rendering for resumes and cover letters.

Both documents use the same page: A4 portrait with a fixed 10 mm margin.
Template style and colour scheme only change typography and accent colours;
unknown values fall back to the defaults.
"""

import io
import logging
import re
from pathlib import Path
from typing import List, Union
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4, portrait
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer

from ...exceptions import ExportError
from ...schemas.draft import ResumeDraft, resolve_color_scheme, resolve_template_style
from ...utils.file_handler import write_file_atomic

logger = logging.getLogger(__name__)

PAGE_SIZE = portrait(A4)
PAGE_MARGIN = 10 * mm

# heading colour, rule colour
PALETTES = {
    "blue": ("#1e40af", "#2563eb"),
    "green": ("#166534", "#16a34a"),
    "gray": ("#1f2937", "#4b5563"),
    "purple": ("#6b21a8", "#9333ea"),
}


def _text(value) -> str:
    # Paragraph parses a mini-markup, so user text must be escaped
    return escape(value or "").replace("\n", "<br/>")


def _styles(template_style: str, color_scheme: str) -> dict:
    heading_color, rule_color = PALETTES[color_scheme]
    base = getSampleStyleSheet()
    minimalist = template_style == "minimalist"
    accent_name = template_style in ("modern", "creative")

    return {
        "name": ParagraphStyle(
            "Name",
            parent=base["Title"],
            fontSize=20 if not minimalist else 16,
            leading=24,
            alignment=TA_LEFT if template_style == "modern" else TA_CENTER,
            textColor=colors.HexColor(heading_color) if accent_name else colors.black,
            spaceAfter=4,
        ),
        "contact": ParagraphStyle(
            "Contact",
            parent=base["Normal"],
            fontSize=9,
            alignment=TA_LEFT if template_style == "modern" else TA_CENTER,
            textColor=colors.HexColor("#4b5563"),
            spaceAfter=6,
        ),
        "section": ParagraphStyle(
            "Section",
            parent=base["Heading2"],
            fontSize=8 if minimalist else 12,
            textColor=colors.HexColor(heading_color),
            spaceBefore=8,
            spaceAfter=2,
        ),
        "item_title": ParagraphStyle("ItemTitle", parent=base["Normal"], fontName="Helvetica-Bold", fontSize=10),
        "item_meta": ParagraphStyle(
            "ItemMeta", parent=base["Normal"], fontName="Helvetica-Oblique", fontSize=9,
            textColor=colors.HexColor("#6b7280"),
        ),
        "body": ParagraphStyle("Body", parent=base["Normal"], fontSize=10, leading=13, spaceAfter=4),
        "rule": colors.HexColor(rule_color),
    }


def _section(story: List, title: str, styles: dict, minimalist: bool) -> None:
    story.append(Paragraph(title.upper() if minimalist else title, styles["section"]))
    story.append(HRFlowable(width="100%", thickness=0.75, color=styles["rule"], spaceAfter=4))


def _date_range(item) -> str:
    end = "Present" if item.current else (item.end_date or "")
    return f"{item.start_date} - {end}" if end else item.start_date


def build_resume_story(draft: ResumeDraft) -> List:
    template_style = resolve_template_style(draft.template_style)
    color_scheme = resolve_color_scheme(draft.color_scheme)
    minimalist = template_style == "minimalist"
    styles = _styles(template_style, color_scheme)
    info = draft.personal_info

    story: List = [Paragraph(_text(f"{info.first_name} {info.last_name}"), styles["name"])]
    contact = [v for v in (info.email, info.phone, info.website, info.linkedin) if v]
    if contact:
        story.append(Paragraph(" | ".join(_text(v) for v in contact), styles["contact"]))

    if info.summary:
        _section(story, "Summary", styles, minimalist)
        story.append(Paragraph(_text(info.summary), styles["body"]))

    if draft.experience:
        _section(story, "Experience", styles, minimalist)
        for exp in draft.experience:
            story.append(Paragraph(f"{_text(exp.position)} - {_text(exp.company)}", styles["item_title"]))
            story.append(Paragraph(_text(_date_range(exp)), styles["item_meta"]))
            if exp.description:
                story.append(Paragraph(_text(exp.description), styles["body"]))

    if draft.education:
        _section(story, "Education", styles, minimalist)
        for edu in draft.education:
            story.append(Paragraph(f"{_text(edu.degree)} - {_text(edu.school)}", styles["item_title"]))
            story.append(Paragraph(_text(_date_range(edu)), styles["item_meta"]))
            if edu.description:
                story.append(Paragraph(_text(edu.description), styles["body"]))

    if draft.skills:
        _section(story, "Skills", styles, minimalist)
        story.append(Paragraph(_text(", ".join(draft.skills)), styles["body"]))

    if draft.projects:
        _section(story, "Projects", styles, minimalist)
        for project in draft.projects:
            story.append(Paragraph(_text(project.name), styles["item_title"]))
            if project.technologies:
                story.append(Paragraph(_text(project.technologies), styles["item_meta"]))
            if project.url:
                story.append(Paragraph(_text(project.url), styles["item_meta"]))
            if project.description:
                story.append(Paragraph(_text(project.description), styles["body"]))

    return story


def _render(story: List, title: str) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=PAGE_SIZE,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN,
        title=title,
    )
    try:
        doc.build(story)
    except Exception as e:
        logger.exception("Failed to render %s", title)
        raise ExportError(f"Failed to render {title}", {"cause": str(e)}) from e
    return buffer.getvalue()


def render_resume_pdf(draft: ResumeDraft) -> bytes:
    return _render(build_resume_story(draft), "Resume")


def render_cover_letter_pdf(cover_letter: str) -> bytes:
    base = getSampleStyleSheet()
    body = ParagraphStyle("Letter", parent=base["Normal"], fontName="Helvetica", fontSize=11, leading=15, spaceAfter=10)
    story: List = []
    for paragraph in cover_letter.split("\n\n"):
        story.append(Paragraph(_text(paragraph.strip()), body))
    story.append(Spacer(1, 4 * mm))
    return _render(story, "Cover Letter")


def safe_file_name(filename: str) -> str:
    """ASCII-only, separator-free PDF file name, safe on disk and in headers."""
    cleaned = re.sub(r"[^A-Za-z0-9._-]+", "_", filename).strip("._")
    if not cleaned.lower().endswith(".pdf"):
        cleaned += ".pdf"
    return cleaned if cleaned != ".pdf" else "document.pdf"


def resume_file_name(draft: ResumeDraft) -> str:
    info = draft.personal_info
    return safe_file_name(f"{info.first_name}_{info.last_name}_Resume.pdf")


def cover_letter_file_name(draft: ResumeDraft) -> str:
    info = draft.personal_info
    return safe_file_name(f"Cover_Letter_{info.first_name}_{info.last_name}.pdf")


async def export_resume(draft: ResumeDraft, directory: Union[str, Path]) -> Path:
    """Render the resume and write it into ``directory``; nothing is written if rendering fails."""
    pdf = render_resume_pdf(draft)
    return await write_file_atomic(Path(directory) / resume_file_name(draft), pdf)


async def export_cover_letter(cover_letter: str, draft: ResumeDraft, directory: Union[str, Path]) -> Path:
    pdf = render_cover_letter_pdf(cover_letter)
    return await write_file_atomic(Path(directory) / cover_letter_file_name(draft), pdf)
