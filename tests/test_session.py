"""Tests for the editing session: local mirroring, remote saves and optimization."""

import asyncio

import pytest

from resume_builder.client.api_client import ResumeApiClient
from resume_builder.client.session import ResumeEditingSession, apply_optimization
from resume_builder.exceptions import RemoteServiceError
from resume_builder.schemas.draft import ResumeDraft
from resume_builder.services.llm.assistant import OptimizationResult


class GatedClient:
    """Fake API client whose responses are released by the test, in any order.

    ``fail`` maps a call index to the error that call should raise once released.
    """

    def __init__(self, fail=None):
        self.gates = []
        self.calls = []
        self.fail = fail or {}
        self.next_id = 1

    async def _respond(self, method, record):
        index = len(self.gates)
        gate = asyncio.Event()
        self.gates.append(gate)
        self.calls.append(method)
        await gate.wait()
        if index in self.fail:
            raise self.fail[index]
        return record

    async def create(self, payload):
        record = {"id": self.next_id, **payload}
        self.next_id += 1
        return await self._respond("create", record)

    async def update(self, resume_id, payload):
        return await self._respond("update", {"id": resume_id, **payload})


async def wait_for_calls(client, count):
    while len(client.gates) < count:
        await asyncio.sleep(0)


class FailingClient:
    async def create(self, payload):
        raise RemoteServiceError("Internal server error", status_code=500, error="boom")

    async def update(self, resume_id, payload):
        raise RemoteServiceError("Internal server error", status_code=500, error="boom")


class TestLocalMirroring:
    def test_update_is_persisted_before_any_remote_call(self, store):
        session = ResumeEditingSession(store, FailingClient())

        session.update(personal_info={"first_name": "Ana"}, skills=["Python"])

        assert session.is_dirty
        reloaded = store.load()
        assert reloaded.personal_info.first_name == "Ana"
        assert reloaded.skills == ["Python"]

    def test_commit_persists_in_place_edits(self, store):
        session = ResumeEditingSession(store, FailingClient())

        item = session.draft.add_experience(company="Acme", position="Engineer", start_date="2020-01")
        session.commit()

        assert store.load().experience[0].id == item.id

    def test_session_resumes_from_stored_draft(self, store):
        store.save({"personalInfo": {"firstName": "Ana"}})
        session = ResumeEditingSession(store, FailingClient())
        assert session.draft.personal_info.first_name == "Ana"


class TestSaveRemote:
    @pytest.mark.asyncio
    async def test_failure_keeps_local_draft(self, store):
        session = ResumeEditingSession(store, FailingClient())
        session.update(skills=["Python"])

        with pytest.raises(RemoteServiceError):
            await session.save_remote()

        assert session.is_dirty
        assert session.last_error is not None
        assert session.last_error.status_code == 500
        assert store.load().skills == ["Python"]
        assert session.resume_id is None

    @pytest.mark.asyncio
    async def test_stale_response_is_discarded(self, store):
        client = GatedClient()
        session = ResumeEditingSession(store, client, resume_id=5)
        session.update(skills=["first"])

        first = asyncio.create_task(session.save_remote())
        await wait_for_calls(client, 1)
        session.update(skills=["second"])
        second = asyncio.create_task(session.save_remote())
        await wait_for_calls(client, 2)

        # Latest response arrives first, the older one afterwards
        client.gates[1].set()
        latest = await second
        client.gates[0].set()
        stale = await first

        assert stale is None
        assert latest["skills"] == ["second"]
        assert session.resume_id == 5
        assert not session.is_dirty

    @pytest.mark.asyncio
    async def test_stale_failure_is_not_raised(self, store):
        client = GatedClient(fail={0: RemoteServiceError("Internal server error", status_code=500)})
        session = ResumeEditingSession(store, client, resume_id=5)

        first = asyncio.create_task(session.save_remote())
        await wait_for_calls(client, 1)
        second = asyncio.create_task(session.save_remote())
        await wait_for_calls(client, 2)

        client.gates[1].set()
        assert (await second)["id"] == 5
        client.gates[0].set()

        assert await first is None
        assert session.last_error is None
        assert not session.is_dirty

    @pytest.mark.asyncio
    async def test_overlapping_first_saves_create_one_record(self, store):
        client = GatedClient()
        session = ResumeEditingSession(store, client)
        session.update(skills=["first"])

        first = asyncio.create_task(session.save_remote())
        await wait_for_calls(client, 1)
        session.update(skills=["second"])
        second = asyncio.create_task(session.save_remote())
        await asyncio.sleep(0)

        # The second save waits for the create instead of issuing its own
        assert client.calls == ["create"]
        client.gates[0].set()
        assert await first is None
        await wait_for_calls(client, 2)
        client.gates[1].set()
        latest = await second

        assert client.calls == ["create", "update"]
        assert latest["id"] == 1
        assert latest["skills"] == ["second"]
        assert session.resume_id == 1

    @pytest.mark.asyncio
    async def test_edit_during_save_keeps_session_dirty(self, store):
        client = GatedClient()
        session = ResumeEditingSession(store, client)
        session.update(skills=["a"])

        pending = asyncio.create_task(session.save_remote())
        await wait_for_calls(client, 1)
        session.update(skills=["a", "b"])
        client.gates[0].set()
        await pending

        assert session.is_dirty


class TestAgainstApi:
    @pytest.mark.asyncio
    async def test_create_then_update_same_record(self, store, asgi_transport):
        async with ResumeApiClient("http://test", transport=asgi_transport) as client:
            session = ResumeEditingSession(store, client)
            session.update(personal_info={"first_name": "Ana"})
            created = await session.save_remote()

            session.update(skills=["Python"])
            updated = await session.save_remote()

            assert updated["id"] == created["id"]
            assert updated["firstName"] == "Ana"
            assert updated["skills"] == ["Python"]
            assert len(await client.list_resumes()) == 1

    @pytest.mark.asyncio
    async def test_deleted_record_is_recreated(self, store, asgi_transport):
        async with ResumeApiClient("http://test", transport=asgi_transport) as client:
            session = ResumeEditingSession(store, client)
            created = await session.save_remote()
            assert await client.delete(created["id"])

            recreated = await session.save_remote()

            assert recreated["id"] != created["id"]
            assert session.resume_id == recreated["id"]

    @pytest.mark.asyncio
    async def test_optimize_merges_and_saves(self, store, asgi_transport):
        async with ResumeApiClient("http://test", transport=asgi_transport) as client:
            session = ResumeEditingSession(store, client)
            session.update(personal_info={"first_name": "Ana", "summary": "Caring."})

            result = await session.optimize("Nurse")

            assert 65 <= result.ats_score <= 95
            assert session.draft.ats_score == result.ats_score
            assert session.draft.target_role == "Nurse"
            assert session.draft.is_ats_optimized
            assert session.draft.personal_info.summary.startswith("Caring.\n\n")
            assert "Nurse position" in store.load().personal_info.summary

            record = await client.get(session.resume_id)
            assert record["targetRole"] == "Nurse"
            assert record["isAtsOptimized"] is True
            assert "atsScore" not in record
            assert not session.is_dirty

    @pytest.mark.asyncio
    async def test_generate_cover_letter_personalizes(self, store, asgi_transport):
        async with ResumeApiClient("http://test", transport=asgi_transport) as client:
            session = ResumeEditingSession(store, client)
            session.update(personal_info={"first_name": "Ana", "last_name": "Silva"})

            letter = await session.generate_cover_letter("Backend Engineer", "Acme")

            assert "Dear Acme Hiring Team," in letter
            assert letter.endswith("Ana Silva")
            assert session.cover_letter.generated == letter

    @pytest.mark.asyncio
    async def test_hydrate_pulls_record_into_draft(self, store, asgi_transport, sample_record):
        store.save({"atsScore": 81, "skills": ["Local"]})
        async with ResumeApiClient("http://test", transport=asgi_transport) as client:
            created = await client.create(sample_record)
            session = ResumeEditingSession(store, client)
            session.update(target_role="Nurse")

            draft = await session.hydrate_from_remote(created["id"])

            assert session.resume_id == created["id"]
            assert not session.is_dirty
            assert draft.personal_info.full_name == "Ana Silva"
            assert draft.skills == ["Python", "SQL"]
            assert draft.template_style == "modern"
            assert [e.id for e in draft.experience] == ["exp-1"]
            assert draft.ats_score == 81
            assert store.load().personal_info.first_name == "Ana"

    @pytest.mark.asyncio
    async def test_hydrate_missing_record_raises(self, store, asgi_transport):
        async with ResumeApiClient("http://test", transport=asgi_transport) as client:
            session = ResumeEditingSession(store, client)

            with pytest.raises(RemoteServiceError) as excinfo:
                await session.hydrate_from_remote(999)

        assert excinfo.value.status_code == 404
        assert session.resume_id is None

    @pytest.mark.asyncio
    async def test_render_pdf_remote_returns_pdf(self, store, asgi_transport):
        async with ResumeApiClient("http://test", transport=asgi_transport) as client:
            session = ResumeEditingSession(store, client)
            session.update(personal_info={"first_name": "Ana", "last_name": "Silva"}, skills=["Python"])

            pdf = await session.render_pdf_remote()

        assert pdf.startswith(b"%PDF")


def test_apply_optimization_returns_a_copy():
    draft = ResumeDraft.model_validate({"personalInfo": {"summary": "Hi."}})

    optimized = apply_optimization(draft, OptimizationResult("x", 80), None)

    assert draft.personal_info.summary == "Hi."
    assert draft.ats_score is None
    assert optimized.personal_info.summary.endswith("optimized for ATS systems using AI.")
    assert optimized.ats_score == 80
