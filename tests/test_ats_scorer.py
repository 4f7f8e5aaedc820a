"""Tests for the heuristic ATS scorer used by the model-backed assistant."""

from resume_builder.schemas.draft import ResumeDraft
from resume_builder.services.analysis.ats_scorer import calculate_ats_score
from resume_builder.services.analysis.keyword_matcher import calculate_role_match
from resume_builder.services.text_projection import resume_to_text


def rich_resume_text() -> str:
    draft = ResumeDraft.model_validate(
        {
            "personalInfo": {
                "firstName": "Ana",
                "lastName": "Silva",
                "email": "ana@silva.dev",
                "phone": "+1 555 010 0100",
                "linkedin": "linkedin.com/in/ana",
                "summary": "Backend engineer focused on reliable data platforms.",
            },
            "skills": ["Python", "SQL", "Docker", "Kubernetes", "PostgreSQL"],
        }
    )
    draft.add_experience(
        company="Acme",
        position="Backend Engineer",
        start_date="2020-01",
        current=True,
        description="Cut API latency by 40% and migrated 12 services.",
    )
    draft.add_education(school="MIT", degree="BSc Computer Science", start_date="2014")
    draft.add_project(name="Pipeline", technologies="Python", description="ETL tool.")
    return resume_to_text(draft)


def test_score_is_bounded():
    for text in ("", "x", rich_resume_text()):
        result = calculate_ats_score(text)
        assert 0 <= result["score"] <= 100


def test_rich_resume_scores_higher_than_empty():
    assert calculate_ats_score(rich_resume_text())["score"] > calculate_ats_score("")["score"]


def test_empty_resume_gets_feedback():
    assert calculate_ats_score("")["feedback"]


def test_role_keywords_affect_score():
    text = rich_resume_text()
    matched = calculate_ats_score(text, "Backend Engineer")
    unmatched = calculate_ats_score(text, "Pastry Chef")

    assert matched["score"] > unmatched["score"]
    assert matched["metadata"]["role_match"] == 100


def test_role_match_ignores_short_words():
    result = calculate_role_match("Senior Backend Engineer", "Sr. Backend Engineer")
    assert result["found"] == ["backend", "engineer"]
    assert result["percentage"] == 100


def test_role_match_without_keywords():
    assert calculate_role_match("anything", "QA")["percentage"] == 0
