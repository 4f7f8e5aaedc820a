"""
Resume draft: the client-held, canonical model while editing.

Drafts are deliberately lenient: every field has an empty default so a
half-filled form can always be stored. Field rules (required names, valid
email/URLs) are reported separately by ``services.validation``.
"""

import uuid
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TEMPLATE_STYLES = ("professional", "modern", "minimalist", "creative")
COLOR_SCHEMES = ("blue", "green", "gray", "purple")
DEFAULT_TEMPLATE_STYLE = "professional"
DEFAULT_COLOR_SCHEME = "blue"

DRAFT_SCHEMA_VERSION = 2


def new_item_id() -> str:
    """Client-generated id for education/experience/project entries."""
    return str(uuid.uuid4())


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalInfo(CamelModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: Optional[str] = ""
    summary: Optional[str] = ""
    website: Optional[str] = ""
    linkedin: Optional[str] = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class EducationItem(CamelModel):
    id: str = Field(default_factory=new_item_id)
    school: str = ""
    degree: str = ""
    start_date: str = ""
    end_date: Optional[str] = None
    description: Optional[str] = None
    current: bool = False


class ExperienceItem(CamelModel):
    id: str = Field(default_factory=new_item_id)
    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: Optional[str] = None
    description: Optional[str] = None
    current: bool = False


class ProjectItem(CamelModel):
    id: str = Field(default_factory=new_item_id)
    name: str = ""
    technologies: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None


SECTION_ITEM_TYPES = {
    "education": EducationItem,
    "experience": ExperienceItem,
    "projects": ProjectItem,
}


class ResumeDraft(CamelModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    education: List[EducationItem] = Field(default_factory=list)
    experience: List[ExperienceItem] = Field(default_factory=list)
    # Append-only: order is display order and duplicates are kept
    skills: List[str] = Field(default_factory=list)
    projects: List[ProjectItem] = Field(default_factory=list)
    template_style: str = DEFAULT_TEMPLATE_STYLE
    color_scheme: str = DEFAULT_COLOR_SCHEME
    is_ats_optimized: bool = True
    target_role: Optional[str] = ""
    ats_score: Optional[int] = Field(default=None, ge=0, le=100)
    last_updated: int = 0
    schema_version: int = DRAFT_SCHEMA_VERSION

    def to_storage(self) -> Dict[str, Any]:
        """JSON-ready camelCase dict, the shape kept in local storage."""
        return self.model_dump(mode="json", by_alias=True)

    # --- list editing, always by id ---

    def add_education(self, **fields) -> EducationItem:
        item = EducationItem(**fields)
        self.education = [*self.education, item]
        return item

    def add_experience(self, **fields) -> ExperienceItem:
        item = ExperienceItem(**fields)
        self.experience = [*self.experience, item]
        return item

    def add_project(self, **fields) -> ProjectItem:
        item = ProjectItem(**fields)
        self.projects = [*self.projects, item]
        return item

    def remove_entry(self, section: str, item_id: str) -> bool:
        """Remove an education/experience/project entry by id.

        Returns False when no entry carries that id; other entries keep their
        ids and relative order.
        """
        if section not in SECTION_ITEM_TYPES:
            raise ValueError(f"Unknown list section: {section}")
        items = getattr(self, section)
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            return False
        setattr(self, section, remaining)
        return True

    def add_skill(self, skill: str) -> None:
        skill = skill.strip()
        if skill:
            self.skills = [*self.skills, skill]

    def remove_skill(self, index: int) -> None:
        self.skills = [s for i, s in enumerate(self.skills) if i != index]


def resolve_template_style(value: Optional[str]) -> str:
    return value if value in TEMPLATE_STYLES else DEFAULT_TEMPLATE_STYLE


def resolve_color_scheme(value: Optional[str]) -> str:
    return value if value in COLOR_SCHEMES else DEFAULT_COLOR_SCHEME


# --- draft <-> record conversion ---

PERSONAL_FIELDS = ("first_name", "last_name", "email", "phone", "summary", "website", "linkedin")


def draft_to_record_payload(draft: ResumeDraft) -> Dict[str, Any]:
    """Flatten a draft into the camelCase body accepted by ``POST/PUT /api/resumes``.

    ``atsScore`` is ephemeral and never sent.
    """
    personal = draft.personal_info
    payload: Dict[str, Any] = {
        to_camel(name): getattr(personal, name) for name in PERSONAL_FIELDS
    }
    payload.update(
        {
            "education": [item.model_dump(by_alias=True) for item in draft.education],
            "experience": [item.model_dump(by_alias=True) for item in draft.experience],
            "skills": list(draft.skills),
            "projects": [item.model_dump(by_alias=True) for item in draft.projects],
            "templateStyle": draft.template_style,
            "colorScheme": draft.color_scheme,
            "isAtsOptimized": draft.is_ats_optimized,
            "targetRole": draft.target_role,
        }
    )
    return payload


def record_to_draft(record: Dict[str, Any]) -> ResumeDraft:
    """Build a draft from a camelCase record returned by the API."""
    personal = {
        to_camel(name): record.get(to_camel(name)) or "" for name in PERSONAL_FIELDS
    }
    return ResumeDraft.model_validate(
        {
            "personalInfo": personal,
            "education": record.get("education") or [],
            "experience": record.get("experience") or [],
            "skills": record.get("skills") or [],
            "projects": record.get("projects") or [],
            "templateStyle": record.get("templateStyle") or DEFAULT_TEMPLATE_STYLE,
            "colorScheme": record.get("colorScheme") or DEFAULT_COLOR_SCHEME,
            "isAtsOptimized": bool(record.get("isAtsOptimized")),
            "targetRole": record.get("targetRole") or "",
        }
    )
