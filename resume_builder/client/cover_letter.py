import re
from typing import Optional

from ..exceptions import CoverLetterStateError
from ..services.llm.generator import NAME_PLACEHOLDER


def personalize_cover_letter(
    letter: str,
    full_name: str,
    recipient_name: Optional[str] = None,
    company_name: Optional[str] = None,
) -> str:
    """
    Fill the ``[Your Name]`` placeholder and, when a recipient is given, swap
    the generated greeting (either form) for ``Dear {recipient},``.
    """
    letter = letter.replace(NAME_PLACEHOLDER, full_name, 1)

    if recipient_name:
        greeting = f"Dear {recipient_name},"
        letter = letter.replace("Dear Hiring Manager,", greeting)
        letter = re.sub(
            rf"Dear {re.escape(company_name or '')} ?Hiring Team,",
            lambda _: greeting,
            letter,
        )
    return letter


class CoverLetterEditor:
    """Generated text plus the user's edits, with revert to the generated version."""

    def __init__(self):
        self.generated: Optional[str] = None
        self.current: Optional[str] = None
        self.is_edited = False

    def load_generated(self, letter: str) -> None:
        self.generated = letter
        self.current = letter
        self.is_edited = False

    def edit(self, text: str) -> None:
        if self.generated is None:
            raise CoverLetterStateError("Generate a cover letter before editing it")
        self.current = text
        self.is_edited = text != self.generated

    def revert(self) -> str:
        if self.generated is None:
            raise CoverLetterStateError("Nothing to revert to: no cover letter has been generated")
        self.current = self.generated
        self.is_edited = False
        return self.current
