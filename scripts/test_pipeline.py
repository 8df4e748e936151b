"""
Test the model-backed pipeline and search provider selection without network access.

Usage: pytest scripts/test_pipeline.py
"""

import asyncio
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fakes import PM_PROFILE, candidate

from sentinel.agents import pipeline as pipeline_module
from sentinel.agents.pipeline import LLMPipeline, create_pipeline
from sentinel.agents.profiler import truncate_resume
from sentinel.agents.scout import build_search_query
from sentinel.config import settings
from sentinel.errors import ExternalServiceError
from sentinel.tools import web_search

HITS = [
    {
        "title": "Senior PM, Platform",
        "url": "https://openai.com/careers/senior-pm",
        "snippet": "Own the platform roadmap.",
        "published": "2026-10-15",
    }
]


class FakeChatModel:
    """Returns canned answers in order and records the prompts it received."""

    def __init__(self, *answers: str, error: Exception | None = None):
        self.answers = list(answers)
        self.error = error
        self.prompts: list[list] = []

    async def ainvoke(self, messages):
        self.prompts.append(messages)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=self.answers.pop(0))


def _pipeline(model, monkeypatch, hits=None) -> LLMPipeline:
    searches: list[tuple] = []

    def fake_search(query, max_results=8, days=None):
        searches.append((query, days))
        return HITS if hits is None else hits

    monkeypatch.setattr(pipeline_module, "search_postings", fake_search)
    pipe = LLMPipeline(model, max_candidates=2, freshness_days=7)
    pipe.searches = searches
    return pipe


# Pipeline

def test_synthesize_profile(monkeypatch):
    model = FakeChatModel('{"skills": ["Agile"], "targetRoles": ["Senior PM"], "vectorSummary": "PM"}')
    pipe = _pipeline(model, monkeypatch)

    profile = asyncio.run(pipe.synthesize_profile("Senior PM resume"))

    assert profile.source_text == "Senior PM resume"
    assert profile.primary_role == "Senior PM"
    assert "Senior PM resume" in model.prompts[0][1].content
    print("[OK] Profile synthesis")


def test_synthesize_profile_without_roles_fails(monkeypatch):
    pipe = _pipeline(FakeChatModel('{"skills": ["Agile"]}'), monkeypatch)
    with pytest.raises(ExternalServiceError):
        asyncio.run(pipe.synthesize_profile("resume"))


def test_model_errors_become_external_service_errors(monkeypatch):
    pipe = _pipeline(FakeChatModel(error=RuntimeError("quota exceeded")), monkeypatch)
    with pytest.raises(ExternalServiceError, match="quota exceeded"):
        asyncio.run(pipe.evaluate_candidate(candidate("https://a.com/1"), PM_PROFILE))


def test_find_candidates_searches_then_extracts(monkeypatch):
    answer = (
        '[{"title": "Senior PM", "link": "https://openai.com/careers/1"},'
        ' {"title": "PM", "link": "https://openai.com/careers/2"},'
        ' {"title": "Lead PM", "link": "https://openai.com/careers/3"}]'
    )
    model = FakeChatModel(answer)
    pipe = _pipeline(model, monkeypatch)

    found = asyncio.run(pipe.find_candidates("OpenAI", "openai.com", "Senior PM"))

    assert [c.link for c in found] == ["https://openai.com/careers/1", "https://openai.com/careers/2"]
    query, days = pipe.searches[0]
    assert query.startswith("site:openai.com")
    assert '"Senior PM"' in query
    assert days == 7
    assert "https://openai.com/careers/senior-pm" in model.prompts[0][1].content


def test_find_candidates_skips_model_when_search_is_empty(monkeypatch):
    model = FakeChatModel()
    pipe = _pipeline(model, monkeypatch, hits=[])

    assert asyncio.run(pipe.find_candidates("OpenAI", "openai.com", "Senior PM")) == []
    assert model.prompts == []


def test_search_errors_are_wrapped(monkeypatch):
    def broken_search(query, max_results=8, days=None):
        raise ConnectionError("network down")

    monkeypatch.setattr(pipeline_module, "search_postings", broken_search)
    pipe = LLMPipeline(FakeChatModel(), max_candidates=2, freshness_days=7)

    with pytest.raises(ExternalServiceError, match="OpenAI"):
        asyncio.run(pipe.find_candidates("OpenAI", "openai.com", "Senior PM"))


def test_evaluate_candidate(monkeypatch):
    model = FakeChatModel('{"isValid": true, "reason": "Matches PM seniority."}', "no decision")
    pipe = _pipeline(model, monkeypatch)

    verdict = asyncio.run(pipe.evaluate_candidate(candidate("https://a.com/1"), PM_PROFILE))
    assert verdict.accepted is True
    assert verdict.rationale == "Matches PM seniority."

    with pytest.raises(ExternalServiceError):
        asyncio.run(pipe.evaluate_candidate(candidate("https://a.com/2"), PM_PROFILE))


def test_create_pipeline_requires_api_key(monkeypatch):
    monkeypatch.setattr(settings, "deepseek_api_key", "")
    with pytest.raises(ValueError):
        create_pipeline()


# Prompt helpers

def test_build_search_query_targets_ats_pages():
    query = build_search_query("stripe.com", "Backend Engineer", 3)
    assert query.startswith("site:stripe.com (inurl:careers OR inurl:jobs")
    assert query.endswith('"Backend Engineer" after:3d')


def test_truncate_resume():
    assert truncate_resume("short") == "short"
    long_text = "x" * 5000
    truncated = truncate_resume(long_text, max_chars=100)
    assert truncated.startswith("x" * 100)
    assert len(truncated) < len(long_text)


# Search provider selection

def test_time_range_for():
    assert web_search.time_range_for(1) == "day"
    assert web_search.time_range_for(7) == "week"
    assert web_search.time_range_for(30) == "month"
    assert web_search.time_range_for(90) == "year"


def test_search_without_provider_fails(monkeypatch):
    monkeypatch.setattr(settings, "tavily_api_key", "")
    monkeypatch.setattr(settings, "brave_api_key", "")
    with pytest.raises(ExternalServiceError, match="No search provider"):
        web_search.search_postings("site:openai.com")


def test_search_falls_back_to_brave(monkeypatch):
    monkeypatch.setattr(settings, "tavily_api_key", "tvly-test")
    monkeypatch.setattr(settings, "brave_api_key", "brave-test")

    def failing_tavily(query, max_results=5, time_range="week"):
        raise RuntimeError("tavily down")

    def brave(query, max_results=5, time_range="week"):
        return [{"title": "t", "url": "https://a.com/1", "snippet": "", "published": None, "range": time_range}]

    monkeypatch.setattr(web_search, "tavily_search", failing_tavily)
    monkeypatch.setattr(web_search, "brave_search", brave)

    hits = web_search.search_postings("site:a.com", days=1)
    assert hits[0]["url"] == "https://a.com/1"
    assert hits[0]["range"] == "day"


def test_search_raises_when_every_provider_fails(monkeypatch):
    monkeypatch.setattr(settings, "tavily_api_key", "tvly-test")
    monkeypatch.setattr(settings, "brave_api_key", "")

    def failing_tavily(query, max_results=5, time_range="week"):
        raise RuntimeError("tavily down")

    monkeypatch.setattr(web_search, "tavily_search", failing_tavily)
    with pytest.raises(ExternalServiceError, match="tavily down"):
        web_search.search_postings("site:a.com")


def test_format_results():
    text = web_search.format_results(HITS + [{"url": "https://b.com/2"}])
    assert "**Senior PM, Platform**" in text
    assert "URL: https://b.com/2" in text
    assert "Published: Unknown" in text
    assert text.count("---") == 1
