"""
In-process stand-ins for the external pipeline and storage, shared by the test scripts.
"""

import asyncio
from collections.abc import Awaitable, Callable

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sentinel.agents.pipeline import ClassificationPipeline
from sentinel.core.context import SentinelContext
from sentinel.core.models import Candidate, Profile, Verdict, WatchEntry
from sentinel.core.profile_store import ProfileStore
from sentinel.core.watchlist import Watchlist
from sentinel.db import SnapshotStore, init_db
from sentinel.errors import ExternalServiceError

PM_PROFILE = Profile(
    source_text="Senior PM with 8 years of SaaS delivery.",
    skills=["Agile", "Jira", "Roadmapping"],
    target_roles=["Senior PM", "Program Manager"],
    summary="Senior product/project manager for SaaS platforms.",
)


class FakePipeline(ClassificationPipeline):
    """Scripted pipeline: candidates per company, fixed verdicts, injectable failures."""

    def __init__(
        self,
        candidates: dict[str, list[Candidate]] | None = None,
        accept: bool = True,
        rationale: str = "Matches PM seniority.",
        fail_orgs: set[str] | None = None,
        fail_links: set[str] | None = None,
        profile: Profile | None = None,
        profile_error: Exception | None = None,
    ):
        self.candidates = candidates or {}
        self.accept = accept
        self.rationale = rationale
        self.fail_orgs = fail_orgs or set()
        self.fail_links = fail_links or set()
        self.profile = profile
        self.profile_error = profile_error
        self.calls: list[tuple[str, str]] = []
        self.on_scout: Callable[[str], Awaitable[None]] | None = None
        self.on_profile: Callable[[], Awaitable[None]] | None = None

    async def synthesize_profile(self, raw_text: str) -> Profile:
        self.calls.append(("profile", raw_text))
        if self.on_profile is not None:
            await self.on_profile()
        if self.profile_error is not None:
            raise self.profile_error
        base = self.profile or PM_PROFILE
        return base.model_copy(update={"source_text": raw_text})

    async def find_candidates(self, org_name: str, domain: str, primary_role: str) -> list[Candidate]:
        self.calls.append(("scout", org_name))
        if self.on_scout is not None:
            await self.on_scout(org_name)
        if org_name in self.fail_orgs:
            raise ExternalServiceError(f"search index unavailable for {domain}")
        return list(self.candidates.get(org_name, []))

    async def evaluate_candidate(self, candidate: Candidate, profile: Profile) -> Verdict:
        self.calls.append(("critic", candidate.link))
        await asyncio.sleep(0)
        if candidate.link in self.fail_links:
            raise ExternalServiceError("critic timed out")
        return Verdict(accepted=self.accept, rationale=self.rationale)

    def scouted(self) -> list[str]:
        return [name for kind, name in self.calls if kind == "scout"]


def candidate(link: str, title: str = "Senior PM") -> Candidate:
    return Candidate(title=title, link=link, snippet="Lead roadmap for platform team.")


def memory_store(key: str = "test_state") -> SnapshotStore:
    """Snapshot store on a private in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    init_db(engine)
    return SnapshotStore(sessionmaker(bind=engine), key=key)


def make_context(
    companies: list[tuple[str, str]] | None = None,
    profile: Profile | None = PM_PROFILE,
    store: SnapshotStore | None = None,
) -> SentinelContext:
    """Hydrated context with a locked profile and the given watchlist."""
    context = SentinelContext(store=store)
    context.hydrate()
    if profile is not None:
        context.profiles = ProfileStore(profile.source_text, profile)
    context.watchlist = Watchlist(
        [WatchEntry(name=name, domain=domain) for name, domain in (companies or [("OpenAI", "openai.com")])]
    )
    return context
