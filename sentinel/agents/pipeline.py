"""
Classification pipeline.

The three remote capabilities the monitor relies on: profiling, candidate
discovery and candidate evaluation. Every failure surfaces as a single
ExternalServiceError kind.
"""

import asyncio
import logging
from abc import ABC, abstractmethod

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_deepseek import ChatDeepSeek

from sentinel.agents.critic import build_critic_prompt, build_match_message
from sentinel.agents.profiler import PROFILER_PROMPT, truncate_resume
from sentinel.agents.scout import build_extract_prompt, build_search_query
from sentinel.config import settings
from sentinel.core.models import Candidate, Profile, Verdict
from sentinel.errors import ExternalServiceError
from sentinel.tools.web_search import format_results, search_postings
from sentinel.utils.parser import (
    parse_candidates_response,
    parse_profile_response,
    parse_verdict_response,
)

logger = logging.getLogger(__name__)


class ClassificationPipeline(ABC):
    """Request/response boundary to the external model."""

    @abstractmethod
    async def synthesize_profile(self, raw_text: str) -> Profile:
        ...

    @abstractmethod
    async def find_candidates(self, org_name: str, domain: str, primary_role: str) -> list[Candidate]:
        ...

    @abstractmethod
    async def evaluate_candidate(self, candidate: Candidate, profile: Profile) -> Verdict:
        ...


class LLMPipeline(ClassificationPipeline):
    """DeepSeek for reasoning, Tavily/Brave for grounding."""

    def __init__(
        self,
        model: ChatDeepSeek,
        max_candidates: int | None = None,
        freshness_days: int | None = None,
    ):
        self.model = model
        self.max_candidates = max_candidates or settings.max_candidates
        self.freshness_days = freshness_days or settings.freshness_days

    async def _ask(self, system_prompt: str, content: str) -> str:
        try:
            response = await self.model.ainvoke(
                [SystemMessage(content=system_prompt), HumanMessage(content=content)]
            )
        except Exception as e:
            raise ExternalServiceError(f"Model call failed: {e}") from e
        return getattr(response, "content", "") or ""

    async def synthesize_profile(self, raw_text: str) -> Profile:
        answer = await self._ask(PROFILER_PROMPT, f"Resume:\n\n{truncate_resume(raw_text)}")
        data = parse_profile_response(answer)
        if not data["target_roles"]:
            raise ExternalServiceError("Profiler returned no target roles")
        return Profile(source_text=raw_text, **data)

    async def find_candidates(self, org_name: str, domain: str, primary_role: str) -> list[Candidate]:
        query = build_search_query(domain, primary_role, self.freshness_days)
        logger.info(f"Scout query for {org_name}: {query}")

        try:
            hits = await asyncio.to_thread(
                search_postings, query, max_results=8, days=self.freshness_days
            )
        except ExternalServiceError:
            raise
        except Exception as e:
            raise ExternalServiceError(f"Search failed for {org_name}: {e}") from e

        if not hits:
            return []

        prompt = build_extract_prompt(org_name, primary_role, self.freshness_days, self.max_candidates)
        answer = await self._ask(prompt, f"Search results:\n\n{format_results(hits)}")
        return parse_candidates_response(answer, limit=self.max_candidates)

    async def evaluate_candidate(self, candidate: Candidate, profile: Profile) -> Verdict:
        answer = await self._ask(
            build_critic_prompt(self.freshness_days), build_match_message(candidate, profile)
        )
        verdict = parse_verdict_response(answer)
        if verdict is None:
            raise ExternalServiceError(f"Critic returned no decision for {candidate.link}")
        return verdict


def create_pipeline() -> LLMPipeline:
    """Create the model-backed pipeline."""
    if not settings.deepseek_api_key:
        raise ValueError("DEEPSEEK_API_KEY not set")

    model = ChatDeepSeek(
        model=settings.deepseek_model,
        api_key=settings.deepseek_api_key,
        temperature=settings.llm_temperature,
    )
    return LLMPipeline(model)
