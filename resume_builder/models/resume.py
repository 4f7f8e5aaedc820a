from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, TIMESTAMP, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from ..database import Base

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONList = JSON().with_variant(JSONB(), "postgresql")

class Resume(Base):
    __tablename__ = "resumes"
    # Ids stay monotonic on SQLite too; a deleted id is never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, default=1)

    # Personal information
    first_name = Column(Text, nullable=True)
    last_name = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    summary = Column(Text, nullable=True)
    website = Column(Text, nullable=True)
    linkedin = Column(Text, nullable=True)

    # List sections are stored as opaque JSON blobs
    education = Column(JSONList, nullable=False, default=list)
    experience = Column(JSONList, nullable=False, default=list)
    skills = Column(JSONList, nullable=False, default=list)
    projects = Column(JSONList, nullable=False, default=list)

    template_style = Column(String(50), nullable=False, default="professional")
    color_scheme = Column(String(50), nullable=False, default="blue")

    target_role = Column(Text, nullable=True)
    is_ats_optimized = Column(Boolean, nullable=False, default=False)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
