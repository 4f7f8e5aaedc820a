"""Tests for list editing on the draft model."""

import pytest

from resume_builder.schemas.draft import ResumeDraft


def draft_with_jobs():
    draft = ResumeDraft()
    for company in ("Acme", "Globex", "Initech"):
        draft.add_experience(company=company, position="Engineer", start_date="2020-01")
    return draft


class TestRemoveEntry:
    def test_remove_middle_keeps_others_in_order(self):
        draft = draft_with_jobs()
        first, middle, last = [item.id for item in draft.experience]

        assert draft.remove_entry("experience", middle) is True

        assert [item.id for item in draft.experience] == [first, last]
        assert [item.company for item in draft.experience] == ["Acme", "Initech"]

    def test_unknown_id_returns_false(self):
        draft = draft_with_jobs()
        before = [item.id for item in draft.experience]

        assert draft.remove_entry("experience", "no-such-id") is False
        assert [item.id for item in draft.experience] == before

    def test_unknown_section_raises(self):
        with pytest.raises(ValueError):
            ResumeDraft().remove_entry("skills", "x")

    def test_education_and_projects(self):
        draft = ResumeDraft()
        school = draft.add_education(school="MIT")
        draft.add_education(school="ETH")
        project = draft.add_project(name="Site")

        assert draft.remove_entry("education", school.id)
        assert draft.remove_entry("projects", project.id)

        assert [item.school for item in draft.education] == ["ETH"]
        assert draft.projects == []

    def test_ids_are_unique(self):
        draft = draft_with_jobs()
        assert len({item.id for item in draft.experience}) == 3


class TestSkills:
    def test_duplicates_kept_in_insertion_order(self):
        draft = ResumeDraft()
        for skill in ("Python", "SQL", "Python"):
            draft.add_skill(skill)

        assert draft.skills == ["Python", "SQL", "Python"]

    def test_add_strips_and_ignores_blank(self):
        draft = ResumeDraft()
        draft.add_skill("  Go  ")
        draft.add_skill("   ")
        draft.add_skill("")

        assert draft.skills == ["Go"]

    def test_remove_by_index_only_removes_that_entry(self):
        draft = ResumeDraft(skills=["Python", "SQL", "Python"])

        draft.remove_skill(2)

        assert draft.skills == ["Python", "SQL"]

    def test_remove_out_of_range_is_noop(self):
        draft = ResumeDraft(skills=["Python"])
        draft.remove_skill(5)
        assert draft.skills == ["Python"]
