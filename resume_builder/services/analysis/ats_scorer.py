import re
from typing import Dict, List, Optional

from .keyword_matcher import calculate_role_match

# Headings emitted by the text projection, with the advice given when one is missing
SECTION_ADVICE = {
    "SUMMARY": "Write a short professional summary; it is the first thing a parser reads.",
    "EXPERIENCE": "Add at least one experience entry with position, company and dates.",
    "EDUCATION": "Add an education entry with school, degree and start date.",
    "SKILLS": "Add a skills list so keyword filters have something to match.",
    "PROJECTS": "Add a project or two to show hands-on work.",
}
SECTION_POINTS = 7

# (label, pattern, points, advice)
CONTACT_CHECKS = [
    ("email", r"[\w.%+-]+@[\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,}", 7, "Provide an email address recruiters can reply to."),
    ("phone", r"\+?\d[\d\s().-]{7,}\d", 5, "Provide a phone number."),
    ("linkedin", r"linkedin\.com/", 3, "Add your LinkedIn profile URL."),
]

METRIC_PATTERNS = [
    r"\d+(?:\.\d+)?\s?%",
    r"\$\s?\d",
    r"\b\d+(?:\.\d+)?\s?(?:k|m|bn|million|billion)\b",
    r"\b\d+\+?\s(?:years?|services|projects?|users|customers|clients|people|engineers)\b",
]

WORD_RANGE = (250, 750)


def _headings(text: str) -> set:
    return {line.strip() for line in text.splitlines() if line.strip().isupper()}


def _skills(text: str) -> List[str]:
    lines = text.splitlines()
    for i, line in enumerate(lines):
        if line.strip() == "SKILLS" and i + 1 < len(lines):
            return [s.strip() for s in lines[i + 1].split(",") if s.strip()]
    return []


def _word_count(text: str) -> int:
    return len(re.findall(r"\w+", text))


def calculate_ats_score(resume_text: str, target_role: Optional[str] = None) -> dict:
    """
    Heuristic ATS score for a plaintext resume (as produced by the text projection).

    Sections 35, contact 15, quantified impact 10, skills depth 10, length 10,
    role keywords 20. Always clamped to 0-100.
    """
    score = 0
    feedback: List[str] = []

    headings = _headings(resume_text)
    for heading, advice in SECTION_ADVICE.items():
        if heading in headings:
            score += SECTION_POINTS
        else:
            feedback.append(advice)

    contact: Dict[str, bool] = {}
    for label, pattern, points, advice in CONTACT_CHECKS:
        contact[label] = bool(re.search(pattern, resume_text, re.IGNORECASE))
        if contact[label]:
            score += points
        else:
            feedback.append(advice)

    if any(re.search(p, resume_text, re.IGNORECASE) for p in METRIC_PATTERNS):
        score += 10
    else:
        feedback.append("Quantify results in your descriptions, e.g. \"cut build time by 30%\".")

    skills = _skills(resume_text)
    if len(skills) >= 5:
        score += 10
    elif skills:
        score += 5
        feedback.append("List at least five skills.")

    word_count = _word_count(resume_text)
    low, high = WORD_RANGE
    if low <= word_count <= high:
        score += 10
    else:
        score += 5
        if word_count < low:
            feedback.append("Expand your descriptions; the resume is under 250 words.")
        else:
            feedback.append("Tighten the resume; it runs past 750 words.")

    # Half credit when there is no role to match against
    role_match = calculate_role_match(resume_text, target_role or "")
    if target_role:
        score += round(20 * role_match["percentage"] / 100)
        if role_match["missing"]:
            feedback.append(f"Mention {', '.join(role_match['missing'])} to match the target role.")
    else:
        score += 10

    return {
        "score": max(0, min(100, score)),
        "feedback": feedback,
        "metadata": {
            "word_count": word_count,
            "skills_detected": len(skills),
            "contact": contact,
            "role_match": role_match["percentage"],
        },
    }
