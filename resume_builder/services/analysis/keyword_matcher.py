import re


def calculate_role_match(resume_text: str, target_role: str) -> dict:
    """
    Share of the target role's keywords that appear in the resume text.
    Naive word matching; short words (3 letters or fewer) are ignored.
    """
    role_keywords = {w.lower().strip(".,()") for w in target_role.split() if len(w.strip(".,()")) > 3}

    if not role_keywords:
        return {"percentage": 0, "found": [], "missing": []}

    text = resume_text.lower()
    found = [k for k in role_keywords if re.search(rf"\b{re.escape(k)}\b", text)]
    missing = [k for k in role_keywords if k not in found]

    percentage = int((len(found) / len(role_keywords)) * 100)

    return {"percentage": percentage, "found": sorted(found), "missing": sorted(missing)}
