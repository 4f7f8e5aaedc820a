from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel
from typing import Optional


class AssistantModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# For POST /api/optimize-resume
class OptimizeRequest(AssistantModel):
    resume_text: StrictStr = Field(min_length=1)
    target_role: Optional[str] = None


class OptimizeResponse(AssistantModel):
    optimized_text: str
    ats_score: int = Field(ge=0, le=100)


# For POST /api/generate-cover-letter
class CoverLetterRequest(AssistantModel):
    resume_text: StrictStr = Field(min_length=1)
    target_role: StrictStr = Field(min_length=1)
    company_name: Optional[str] = None


class CoverLetterResponse(AssistantModel):
    cover_letter: str


# For POST /api/export/cover-letter
class CoverLetterExportRequest(AssistantModel):
    cover_letter: StrictStr = Field(min_length=1)
    file_name: Optional[str] = None
