"""Tests for the plaintext projection of a draft."""

from resume_builder.schemas.draft import ResumeDraft
from resume_builder.services.text_projection import resume_to_text


def make_draft(**fields) -> ResumeDraft:
    return ResumeDraft.model_validate(fields)


def test_current_experience_renders_present():
    draft = make_draft(personalInfo={"firstName": "Ana"})
    draft.add_experience(company="Acme", position="Engineer", start_date="2020-01", current=True)

    lines = resume_to_text(draft).split("\n")

    index = lines.index("Engineer at Acme")
    assert "Present" in lines[index + 1]


def test_header_lines():
    draft = make_draft(
        personalInfo={
            "firstName": "Ana",
            "lastName": "Silva",
            "email": "ana@example.com",
            "phone": "555-0100",
            "linkedin": "linkedin.com/in/ana",
            "website": "ana.dev",
            "summary": "Backend engineer.",
        }
    )

    lines = resume_to_text(draft).split("\n")

    assert lines[:6] == [
        "Ana Silva",
        "ana@example.com | 555-0100 | LinkedIn: linkedin.com/in/ana",
        "Website: ana.dev",
        "",
        "SUMMARY",
        "Backend engineer.",
    ]


def test_optional_contact_parts_are_left_out():
    text = resume_to_text(make_draft(personalInfo={"email": "a@b.co", "phone": "1"}))

    assert "a@b.co | 1\n" in text
    assert "LinkedIn" not in text
    assert "Website" not in text


def test_empty_sections_are_omitted():
    text = resume_to_text(make_draft(personalInfo={"firstName": "Ana"}))

    assert "SUMMARY" in text
    for heading in ("EXPERIENCE", "EDUCATION", "SKILLS", "PROJECTS"):
        assert heading not in text


def test_sections_in_fixed_order():
    draft = make_draft(skills=["Python", "SQL"])
    draft.add_project(name="Site", technologies="Hugo", url="https://ana.dev", description="Blog")
    draft.add_education(school="MIT", degree="BSc", start_date="2014", end_date="2018")
    draft.add_experience(company="Acme", position="Engineer", start_date="2020", end_date="2022")

    text = resume_to_text(draft)

    positions = [text.index(h) for h in ("SUMMARY", "EXPERIENCE", "EDUCATION", "SKILLS", "PROJECTS")]
    assert positions == sorted(positions)
    assert "BSc at MIT\n2014 - 2018\n" in text
    assert "Engineer at Acme\n2020 - 2022\n" in text
    assert "SKILLS\nPython, SQL\n" in text
    assert "Site\nTechnologies: Hugo\nURL: https://ana.dev\nBlog\n" in text


def test_projection_is_deterministic():
    draft = make_draft(personalInfo={"firstName": "Ana"}, skills=["Go"])
    assert resume_to_text(draft) == resume_to_text(draft.model_copy(deep=True))
