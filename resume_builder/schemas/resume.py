from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any
from datetime import datetime

# Fields the server owns; stripped from create/update payloads
SERVER_MANAGED_FIELDS = {"id", "user_id", "ats_score", "created_at", "updated_at"}


class ResumeBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    summary: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None

    education: Optional[List[Dict[str, Any]]] = None
    experience: Optional[List[Dict[str, Any]]] = None
    skills: Optional[List[str]] = None
    projects: Optional[List[Dict[str, Any]]] = None

    template_style: Optional[str] = None
    color_scheme: Optional[str] = None
    target_role: Optional[str] = None
    is_ats_optimized: Optional[bool] = None


# For POST /api/resumes and PUT /api/resumes/{id}
class ResumeWrite(ResumeBase):
    # Accepted so clients can send a whole draft, but never persisted
    ats_score: Optional[int] = None

    def to_columns(self) -> Dict[str, Any]:
        """Only the fields the client actually sent, minus server-managed ones."""
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if k not in SERVER_MANAGED_FIELDS}


# Response model
class Resume(ResumeBase):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    user_id: int
    education: List[Dict[str, Any]] = []
    experience: List[Dict[str, Any]] = []
    skills: List[str] = []
    projects: List[Dict[str, Any]] = []
    template_style: str = "professional"
    color_scheme: str = "blue"
    is_ats_optimized: bool = False
    created_at: datetime
    updated_at: datetime
