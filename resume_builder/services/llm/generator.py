from typing import Optional

from langchain_core.prompts import PromptTemplate

NAME_PLACEHOLDER = "[Your Name]"

COVER_LETTER_TEMPLATE = """
You are an experienced career writer. Draft a concise, five-paragraph cover letter
for the {target_role} position{company_clause}, based only on the resume below.
- Open with the greeting "{greeting}".
- Do not invent employers, dates or degrees that are not in the resume.
- End with "Sincerely," followed by the literal placeholder {name_placeholder} on its own line.

Resume:
{resume_text}
"""

cover_letter_prompt = PromptTemplate.from_template(COVER_LETTER_TEMPLATE)

BODY = (
    "After reviewing the job description, I believe my skills and experience make me a strong "
    "candidate. My background has prepared me for the challenges of this role, and I am excited "
    "about the opportunity to contribute to your team.\n\n"
    "Based on my resume, I have relevant experience that aligns with your requirements. My approach "
    "combines technical expertise with a strong work ethic, which enables me to deliver high-quality "
    "results consistently."
)


def greeting_for(company_name: Optional[str]) -> str:
    return f"Dear {company_name} Hiring Team," if company_name else "Dear Hiring Manager,"


def build_cover_letter(target_role: str, company_name: Optional[str] = None) -> str:
    """
    Fixed cover-letter template. Only the greeting, introduction and closing
    depend on the inputs; the body paragraphs are static.
    """
    introduction = (
        f"I am writing to express my interest in the {target_role} position."
        if target_role
        else "I am writing to express my interest in the open position at your company."
    )
    closing = (
        f"I am particularly drawn to {company_name} because of your reputation for innovation and "
        "excellence in the industry. I would welcome the opportunity to discuss how my qualifications "
        "align with your needs."
        if company_name
        else "I would welcome the opportunity to discuss how my qualifications align with your needs "
        "for this position."
    )

    return (
        f"{greeting_for(company_name)}\n\n"
        f"{introduction}\n\n"
        f"{BODY}\n\n"
        f"{closing}\n\n"
        "Thank you for considering my application. I look forward to the possibility of working "
        "with your team.\n\n"
        f"Sincerely,\n{NAME_PLACEHOLDER}"
    )


def format_prompt_inputs(resume_text: str, target_role: str, company_name: Optional[str]) -> dict:
    return {
        "resume_text": resume_text,
        "target_role": target_role,
        "company_clause": f" at {company_name}" if company_name else "",
        "greeting": greeting_for(company_name),
        "name_placeholder": NAME_PLACEHOLDER,
    }
