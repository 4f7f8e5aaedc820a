from .api_client import ResumeApiClient
from .cover_letter import CoverLetterEditor, personalize_cover_letter
from .draft_store import DraftStore, FileStorage, MemoryStorage
from .session import ResumeEditingSession, apply_optimization

__all__ = [
    "ResumeApiClient",
    "CoverLetterEditor",
    "personalize_cover_letter",
    "DraftStore",
    "FileStorage",
    "MemoryStorage",
    "ResumeEditingSession",
    "apply_optimization",
]
