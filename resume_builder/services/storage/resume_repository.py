import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ...config import settings
from ...models.resume import Resume
from ...models.user import User
from ...schemas.resume import SERVER_MANAGED_FIELDS

logger = logging.getLogger(__name__)

# Defaults applied on create for fields the client left out
CREATE_DEFAULTS: Dict[str, Any] = {
    "first_name": None,
    "last_name": None,
    "email": None,
    "phone": None,
    "summary": None,
    "website": None,
    "linkedin": None,
    "education": [],
    "experience": [],
    "skills": [],
    "projects": [],
    "template_style": "professional",
    "color_scheme": "blue",
    "target_role": None,
    "is_ats_optimized": False,
}

# Columns that cannot hold NULL; an explicit null in a payload leaves them alone
NON_NULLABLE = {"education", "experience", "skills", "projects", "template_style", "color_scheme", "is_ats_optimized"}


def _clean(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: v
        for k, v in data.items()
        if k in CREATE_DEFAULTS and k not in SERVER_MANAGED_FIELDS and not (k in NON_NULLABLE and v is None)
    }


def ensure_default_user(db: Session) -> User:
    """Fetch the fixed user identity, creating it on first use."""
    user = db.query(User).filter(User.id == settings.DEFAULT_USER_ID).first()
    if not user:
        user = User(id=settings.DEFAULT_USER_ID, username=settings.DEFAULT_USERNAME)
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Created default user %s", user.id)
    return user


class ResumeRepository:
    """CRUD over the ``resumes`` table, one row per resume."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, data: Dict[str, Any], user_id: int) -> Resume:
        values = {**CREATE_DEFAULTS, **_clean(data)}
        resume = Resume(user_id=user_id, **values)
        self.db.add(resume)
        self.db.commit()
        self.db.refresh(resume)
        logger.info("Created resume %s for user %s", resume.id, user_id)
        return resume

    def get(self, resume_id: int) -> Optional[Resume]:
        return self.db.query(Resume).filter(Resume.id == resume_id).first()

    def list_for_user(self, user_id: int) -> List[Resume]:
        return self.db.query(Resume).filter(Resume.user_id == user_id).order_by(Resume.id).all()

    def update(self, resume_id: int, data: Dict[str, Any]) -> Optional[Resume]:
        resume = self.get(resume_id)
        if resume is None:
            return None

        # Partial update: untouched fields keep their stored value
        for column, value in _clean(data).items():
            setattr(resume, column, value)
        resume.updated_at = datetime.now(timezone.utc)

        self.db.commit()
        self.db.refresh(resume)
        logger.info("Updated resume %s", resume_id)
        return resume

    def delete(self, resume_id: int) -> bool:
        resume = self.get(resume_id)
        if resume is None:
            return False
        self.db.delete(resume)
        self.db.commit()
        logger.info("Deleted resume %s", resume_id)
        return True
