import logging
from typing import Any, Dict, List, Optional

import httpx

from ..exceptions import RemoteServiceError
from ..services.llm.assistant import OptimizationResult

logger = logging.getLogger(__name__)


class ResumeApiClient:
    """
    Async client for the resume API.

    Absent records are reported as ``None``/``False``; every other failure
    (transport error or unexpected status) raises ``RemoteServiceError``.
    Nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "ResumeApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise RemoteServiceError(f"Request to {url} failed", error=str(e)) from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or f"Unexpected status {response.status_code}"
        logger.warning("%s %s -> %s: %s", response.request.method, response.request.url, response.status_code, message)
        raise RemoteServiceError(message, status_code=response.status_code, error=body.get("error"))

    # --- resumes ---

    async def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._request("POST", "/api/resumes", json=payload)
        self._raise_for_status(response)
        return response.json()

    async def get(self, resume_id: int) -> Optional[Dict[str, Any]]:
        response = await self._request("GET", f"/api/resumes/{resume_id}")
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return response.json()

    async def list_resumes(self) -> List[Dict[str, Any]]:
        response = await self._request("GET", "/api/resumes")
        self._raise_for_status(response)
        return response.json()

    async def update(self, resume_id: int, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        response = await self._request("PUT", f"/api/resumes/{resume_id}", json=payload)
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return response.json()

    async def delete(self, resume_id: int) -> bool:
        response = await self._request("DELETE", f"/api/resumes/{resume_id}")
        if response.status_code == 404:
            return False
        self._raise_for_status(response)
        return True

    # --- assistant ---

    async def optimize(self, resume_text: str, target_role: Optional[str] = None) -> OptimizationResult:
        response = await self._request(
            "POST", "/api/optimize-resume", json={"resumeText": resume_text, "targetRole": target_role}
        )
        self._raise_for_status(response)
        data = response.json()
        return OptimizationResult(optimized_text=data["optimizedText"], ats_score=data["atsScore"])

    async def generate_cover_letter(
        self, resume_text: str, target_role: str, company_name: Optional[str] = None
    ) -> str:
        response = await self._request(
            "POST",
            "/api/generate-cover-letter",
            json={"resumeText": resume_text, "targetRole": target_role, "companyName": company_name},
        )
        self._raise_for_status(response)
        return response.json()["coverLetter"]

    async def export_resume_pdf(self, draft_payload: Dict[str, Any]) -> bytes:
        response = await self._request("POST", "/api/export/resume", json=draft_payload)
        self._raise_for_status(response)
        return response.content
