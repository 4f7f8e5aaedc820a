"""
Field-level validation for resume drafts.

Problems are reported per field so a form can show each one next to its input;
nothing here prevents a draft from being stored.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, EmailStr, HttpUrl, TypeAdapter, ValidationError

from ..schemas.draft import ResumeDraft

_email = TypeAdapter(EmailStr)
_url = TypeAdapter(HttpUrl)

Errors = Dict[str, List[str]]


def _add(errors: Errors, field: str, message: str) -> None:
    errors.setdefault(field, []).append(message)


def _required(errors: Errors, field: str, value: Optional[str], message: str) -> None:
    if not (value or "").strip():
        _add(errors, field, message)


def _optional_url(errors: Errors, field: str, value: Optional[str]) -> None:
    if not value:
        return
    try:
        _url.validate_python(value)
    except ValidationError:
        _add(errors, field, "Invalid URL")


def validate_personal_info(draft: ResumeDraft, errors: Errors) -> None:
    info = draft.personal_info
    _required(errors, "personalInfo.firstName", info.first_name, "First name is required")
    _required(errors, "personalInfo.lastName", info.last_name, "Last name is required")
    try:
        _email.validate_python(info.email)
    except ValidationError:
        _add(errors, "personalInfo.email", "Invalid email address")
    _optional_url(errors, "personalInfo.website", info.website)
    _optional_url(errors, "personalInfo.linkedin", info.linkedin)


def validate_sections(draft: ResumeDraft, errors: Errors) -> None:
    for i, edu in enumerate(draft.education):
        _required(errors, f"education.{i}.school", edu.school, "School name is required")
        _required(errors, f"education.{i}.degree", edu.degree, "Degree is required")
        _required(errors, f"education.{i}.startDate", edu.start_date, "Start date is required")

    for i, exp in enumerate(draft.experience):
        _required(errors, f"experience.{i}.company", exp.company, "Company name is required")
        _required(errors, f"experience.{i}.position", exp.position, "Position is required")
        _required(errors, f"experience.{i}.startDate", exp.start_date, "Start date is required")

    for i, project in enumerate(draft.projects):
        _required(errors, f"projects.{i}.name", project.name, "Project name is required")
        _optional_url(errors, f"projects.{i}.url", project.url)


def validate_draft(draft: ResumeDraft) -> Errors:
    """
    Return ``{dotted.field.path: [messages]}`` for every invalid field.

    End dates are never required; an entry marked ``current`` ignores its end
    date entirely. An empty dict means the draft is complete.
    """
    errors: Errors = {}
    validate_personal_info(draft, errors)
    validate_sections(draft, errors)
    return errors


def is_valid(draft: ResumeDraft) -> bool:
    return not validate_draft(draft)
