"""
Plaintext projection of a resume draft.

This is the only input the optimizer and cover-letter generator ever see, and
doubles as a human-readable export. The output is a pure function of the
draft: identical drafts always give byte-identical text.
"""

from typing import List, Sequence, Union

from ..schemas.draft import EducationItem, ExperienceItem, ResumeDraft


def _date_range(item: Union[EducationItem, ExperienceItem]) -> str:
    end = "Present" if item.current else (item.end_date or "")
    return f"{item.start_date} - {end}"


def _format_header(draft: ResumeDraft) -> List[str]:
    info = draft.personal_info
    contact = f"{info.email} | {info.phone or ''}"
    if info.linkedin:
        contact += f" | LinkedIn: {info.linkedin}"

    lines = [f"{info.first_name} {info.last_name}", contact]
    if info.website:
        lines.append(f"Website: {info.website}")
    lines += ["", "SUMMARY", info.summary or "", ""]
    return lines


def _format_experience(experience: Sequence[ExperienceItem]) -> List[str]:
    lines = ["EXPERIENCE"]
    for exp in experience:
        lines += [f"{exp.position} at {exp.company}", _date_range(exp), exp.description or "", ""]
    return lines


def _format_education(education: Sequence[EducationItem]) -> List[str]:
    lines = ["EDUCATION"]
    for edu in education:
        lines += [f"{edu.degree} at {edu.school}", _date_range(edu), edu.description or "", ""]
    return lines


def _format_projects(draft: ResumeDraft) -> List[str]:
    lines = ["PROJECTS"]
    for project in draft.projects:
        lines += [project.name, f"Technologies: {project.technologies or ''}"]
        if project.url:
            lines.append(f"URL: {project.url}")
        lines += [project.description or "", ""]
    return lines


def resume_to_text(draft: ResumeDraft) -> str:
    lines = _format_header(draft)

    # Empty sections are left out entirely, heading included
    if draft.experience:
        lines += _format_experience(draft.experience)
    if draft.education:
        lines += _format_education(draft.education)
    if draft.skills:
        lines += ["SKILLS", ", ".join(draft.skills), ""]
    if draft.projects:
        lines += _format_projects(draft)

    return "\n".join(lines) + "\n"
