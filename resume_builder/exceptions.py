"""
Exception hierarchy for the resume builder.

Server-side errors are translated into ``{message, error}`` JSON responses by
``resume_builder.exception_handlers``. Client-side errors (draft storage,
remote calls, cover-letter editing) are raised to the caller.
"""

from typing import Any, Dict, Optional


class ResumeBuilderError(Exception):
    """Base exception for all resume builder errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ResumeNotFoundError(ResumeBuilderError):
    """Raised when a resume record does not exist."""

    def __init__(self, resume_id: int):
        super().__init__("Resume not found", {"resume_id": resume_id})
        self.resume_id = resume_id


class InvalidResumeIdError(ResumeBuilderError):
    """Raised when a resume id in the path is not numeric."""

    def __init__(self, raw_id: str):
        super().__init__("Invalid resume ID", {"resume_id": raw_id})


class AssistantError(ResumeBuilderError):
    """Raised when the optimization/generation backend fails."""


class ExportError(ResumeBuilderError):
    """Raised when a document cannot be rendered or written."""


# Client-side errors

class DraftStorageError(ResumeBuilderError):
    """Raised when a stored draft cannot be read or migrated."""


class RemoteServiceError(ResumeBuilderError):
    """Raised when a call to the resume API fails.

    Carries the HTTP status (``None`` for transport failures) and the
    ``error`` field of the server's error body when there is one.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, error: Optional[str] = None):
        super().__init__(message, {"status_code": status_code, "error": error})
        self.status_code = status_code
        self.error = error


class CoverLetterStateError(ResumeBuilderError):
    """Raised when a cover-letter edit operation is not valid yet."""
