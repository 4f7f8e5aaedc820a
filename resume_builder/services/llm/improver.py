import random
from typing import Optional

from langchain_core.prompts import PromptTemplate

ATS_SCORE_RANGE = (65, 95)

OPTIMIZATION_TEMPLATE = """
You are an expert ATS resume coach. Review the resume below{role_clause}.
- Identify keywords an applicant tracking system would expect and which are missing.
- Point out formatting that ATS parsers struggle with.
- Suggest how to reorder experience to put the most relevant qualifications first.

Resume:
{resume_text}

Respond with a short bulleted list of concrete improvements only.
"""

optimization_prompt = PromptTemplate.from_template(OPTIMIZATION_TEMPLATE)


def annotation_block(target_role: Optional[str] = None) -> str:
    """The note appended to optimized text describing what was improved."""
    if target_role:
        return (
            f"\n\n[ATS Optimized for {target_role}]\n"
            f"- Added {target_role}-specific keywords\n"
            f"- Highlighted relevant skills for {target_role}\n"
            f"- Reordered experience to emphasize {target_role} qualifications\n"
            "- Improved formatting for ATS systems"
        )
    return (
        "\n\n[ATS Optimized]\n"
        "- Added relevant keywords\n"
        "- Improved formatting\n"
        "- Enhanced readability for ATS systems"
    )


def simulated_score(rng: random.Random) -> int:
    low, high = ATS_SCORE_RANGE
    return rng.randint(low, high)


def optimize_text(resume_text: str, target_role: Optional[str], rng: random.Random) -> tuple:
    """
    Simulated optimization: the input is kept verbatim as a prefix and an
    annotation block is appended. The score carries no meaning beyond its range.
    """
    return f"{resume_text}{annotation_block(target_role)}", simulated_score(rng)


def format_prompt_inputs(resume_text: str, target_role: Optional[str]) -> dict:
    role_clause = f" for a {target_role} position" if target_role else ""
    return {"resume_text": resume_text, "role_clause": role_clause}
