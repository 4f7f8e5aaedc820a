"""
Resume assistant: ATS optimization and cover-letter generation.

Callers depend only on ``ResumeAssistant``. ``SimulatedAssistant`` is the
default (and test) implementation; ``OllamaAssistant`` runs the same prompts
against a local model through LangChain.
"""

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from ...config import settings
from ...exceptions import AssistantError
from ..analysis.ats_scorer import calculate_ats_score
from . import generator, improver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptimizationResult:
    optimized_text: str
    ats_score: int


class ResumeAssistant(ABC):
    """Contract: ``optimized_text`` always starts with the input text verbatim,
    ``ats_score`` is an integer in 0-100, cover letters contain ``[Your Name]``."""

    @abstractmethod
    async def optimize(self, resume_text: str, target_role: Optional[str] = None) -> OptimizationResult:
        ...

    @abstractmethod
    async def generate_cover_letter(
        self, resume_text: str, target_role: str, company_name: Optional[str] = None
    ) -> str:
        ...


class SimulatedAssistant(ResumeAssistant):
    """Stand-in for a real model: fixed annotation, score drawn from [65, 95]."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    async def optimize(self, resume_text: str, target_role: Optional[str] = None) -> OptimizationResult:
        optimized_text, score = improver.optimize_text(resume_text, target_role, self._rng)
        logger.info("Simulated optimization (role=%s, score=%s)", target_role, score)
        return OptimizationResult(optimized_text=optimized_text, ats_score=score)

    async def generate_cover_letter(
        self, resume_text: str, target_role: str, company_name: Optional[str] = None
    ) -> str:
        return generator.build_cover_letter(target_role, company_name)


class OllamaAssistant(ResumeAssistant):
    """Live generation through a local Ollama model."""

    def __init__(self, model: str = "llama3"):
        # langchain_ollama is only needed by this backend
        from langchain_core.output_parsers import StrOutputParser
        from langchain_ollama import OllamaLLM

        llm = OllamaLLM(model=model)
        self._optimize_chain = improver.optimization_prompt | llm | StrOutputParser()
        self._letter_chain = generator.cover_letter_prompt | llm | StrOutputParser()

    async def optimize(self, resume_text: str, target_role: Optional[str] = None) -> OptimizationResult:
        try:
            suggestions = await self._optimize_chain.ainvoke(
                improver.format_prompt_inputs(resume_text, target_role)
            )
        except Exception as e:
            raise AssistantError("Failed to optimize resume", {"cause": str(e)}) from e

        header = f"[ATS Optimized for {target_role}]" if target_role else "[ATS Optimized]"
        optimized_text = f"{resume_text}\n\n{header}\n{suggestions.strip()}"
        score = calculate_ats_score(resume_text, target_role)["score"]
        return OptimizationResult(optimized_text=optimized_text, ats_score=score)

    async def generate_cover_letter(
        self, resume_text: str, target_role: str, company_name: Optional[str] = None
    ) -> str:
        try:
            letter = await self._letter_chain.ainvoke(
                generator.format_prompt_inputs(resume_text, target_role, company_name)
            )
        except Exception as e:
            raise AssistantError("Failed to generate cover letter", {"cause": str(e)}) from e

        letter = letter.strip()
        if generator.NAME_PLACEHOLDER not in letter:
            letter += f"\n\nSincerely,\n{generator.NAME_PLACEHOLDER}"
        return letter


@lru_cache()
def get_assistant() -> ResumeAssistant:
    backend = settings.ASSISTANT_BACKEND.lower()
    if backend == "ollama":
        logger.info("Using Ollama assistant (model=%s)", settings.OLLAMA_MODEL)
        return OllamaAssistant(model=settings.OLLAMA_MODEL)
    if backend != "simulated":
        logger.warning("Unknown ASSISTANT_BACKEND %r, falling back to simulated", backend)
    return SimulatedAssistant()
