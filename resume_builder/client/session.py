"""
Editing session: keeps the in-memory draft, the local draft store and the
remote record in step.

Every edit is mirrored to the local store before anything else happens, so a
failed or slow remote save can never lose work. Remote saves are numbered;
only the response to the most recently issued save is applied, older ones
are dropped.
"""

import asyncio
import logging
from typing import Optional

from ..exceptions import RemoteServiceError
from ..schemas.draft import ResumeDraft, draft_to_record_payload, record_to_draft
from ..services.llm.assistant import OptimizationResult
from ..services.text_projection import resume_to_text
from .api_client import ResumeApiClient
from .cover_letter import CoverLetterEditor, personalize_cover_letter
from .draft_store import DraftStore, merge_draft

logger = logging.getLogger(__name__)


def optimization_note(target_role: Optional[str]) -> str:
    if target_role:
        return f"This resume has been optimized for the {target_role} position using AI."
    return "This resume has been optimized for ATS systems using AI."


def apply_optimization(draft: ResumeDraft, result: OptimizationResult, target_role: Optional[str]) -> ResumeDraft:
    """Merge an optimization result back into a copy of the draft."""
    optimized = draft.model_copy(deep=True)
    summary = optimized.personal_info.summary or ""
    optimized.personal_info.summary = f"{summary}\n\n{optimization_note(target_role)}"
    optimized.target_role = target_role or ""
    optimized.ats_score = result.ats_score
    optimized.is_ats_optimized = True
    return optimized


class ResumeEditingSession:
    def __init__(self, store: DraftStore, client: ResumeApiClient, resume_id: Optional[int] = None):
        self.store = store
        self.client = client
        self.resume_id = resume_id
        self.draft = store.load()
        self.is_dirty = False
        self.last_error: Optional[RemoteServiceError] = None
        self.cover_letter = CoverLetterEditor()
        self._issued_seq = 0
        self._edit_version = 0
        # Held while the first create is in flight so overlapping saves update it
        self._create_lock = asyncio.Lock()

    def update(self, **sections) -> ResumeDraft:
        """
        Apply an edit (e.g. ``update(skills=[...])`` or
        ``update(personal_info={"first_name": "Ana"})``) and persist it locally.
        """
        self.draft = self.store.save(merge_draft(self.draft.to_storage(), sections))
        self._mark_dirty()
        return self.draft

    def commit(self) -> ResumeDraft:
        """Persist in-place changes made on ``self.draft`` (e.g. via ``add_experience``)."""
        self.draft = self.store.save(self.draft)
        self._mark_dirty()
        return self.draft

    def _mark_dirty(self) -> None:
        self._edit_version += 1
        self.is_dirty = True

    async def _create(self, payload: dict) -> dict:
        async with self._create_lock:
            if self.resume_id is not None:
                # An earlier overlapping save created the record while we waited
                return await self._update(payload)
            record = await self.client.create(payload)
            # Adopted even if this response turns out stale: the row exists now
            self.resume_id = record["id"]
            return record

    async def _update(self, payload: dict) -> dict:
        record = await self.client.update(self.resume_id, payload)
        if record is None:
            # Deleted elsewhere; recreate so the draft is not orphaned
            logger.warning("Resume %s no longer exists remotely, recreating", self.resume_id)
            record = await self.client.create(payload)
            self.resume_id = record["id"]
        return record

    async def save_remote(self) -> Optional[dict]:
        """
        Push the current draft to the server (create first, then update).

        Returns the applied record, or ``None`` when a newer save was issued
        while this one was in flight; its response, success or failure, is
        then discarded. Saves that overlap the first create wait for it and
        update the record it made.
        """
        self._issued_seq += 1
        seq = self._issued_seq
        edit_version = self._edit_version
        payload = draft_to_record_payload(self.draft)

        try:
            if self.resume_id is None:
                record = await self._create(payload)
            else:
                record = await self._update(payload)
        except RemoteServiceError as e:
            if seq != self._issued_seq:
                logger.info("Ignoring failure of stale save #%s: %s", seq, e.message)
                return None
            self.last_error = e
            logger.error("Remote save #%s failed: %s", seq, e.message)
            raise

        if seq != self._issued_seq:
            logger.info("Discarding stale save response #%s (latest is #%s)", seq, self._issued_seq)
            return None

        self.resume_id = record["id"]
        # Edits made while the request was in flight still need saving
        self.is_dirty = edit_version != self._edit_version
        self.last_error = None
        return record

    async def hydrate_from_remote(self, resume_id: int) -> ResumeDraft:
        """
        Pull a saved record into the local draft and adopt its id.

        The record is merged over the local draft, so purely local state
        (``atsScore``, ``lastUpdated``) is kept.
        """
        record = await self.client.get(resume_id)
        if record is None:
            raise RemoteServiceError("Resume not found", status_code=404)

        remote = record_to_draft(record).to_storage()
        self.draft = self.store.save(merge_draft(self.draft.to_storage(), remote))
        self.resume_id = record["id"]
        # Any save still in flight predates this state
        self._issued_seq += 1
        self.is_dirty = False
        self.last_error = None
        return self.draft

    async def render_pdf_remote(self) -> bytes:
        """Have the server render the current draft to PDF."""
        return await self.client.export_resume_pdf(self.draft.to_storage())

    async def optimize(self, target_role: Optional[str] = None) -> OptimizationResult:
        """Optimize the current draft, merge the result locally, then save remotely."""
        result = await self.client.optimize(resume_to_text(self.draft), target_role or None)
        self.draft = self.store.save(apply_optimization(self.draft, result, target_role))
        self._mark_dirty()
        await self.save_remote()
        return result

    async def generate_cover_letter(
        self,
        target_role: str,
        company_name: Optional[str] = None,
        recipient_name: Optional[str] = None,
    ) -> str:
        letter = await self.client.generate_cover_letter(
            resume_to_text(self.draft), target_role, company_name or None
        )
        letter = personalize_cover_letter(
            letter, self.draft.personal_info.full_name, recipient_name, company_name
        )
        self.cover_letter.load_generated(letter)
        return letter
