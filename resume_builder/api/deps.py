from fastapi import Depends
from sqlalchemy.orm import Session

from ..database import SessionLocal
from ..exceptions import InvalidResumeIdError
from ..models.user import User as UserModel
from ..services.llm.assistant import ResumeAssistant, get_assistant
from ..services.storage.resume_repository import ResumeRepository, ensure_default_user

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_repository(db: Session = Depends(get_db)) -> ResumeRepository:
    return ResumeRepository(db)

# No authentication: every request acts as the single default identity.
def get_current_user(db: Session = Depends(get_db)) -> UserModel:
    return ensure_default_user(db)

def get_resume_assistant() -> ResumeAssistant:
    return get_assistant()

def parse_resume_id(resume_id: str) -> int:
    """Path ids arrive as text so a non-numeric id is a 400, not a 422."""
    try:
        return int(resume_id)
    except ValueError:
        raise InvalidResumeIdError(resume_id)
