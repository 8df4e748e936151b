"""Domain models for the sentinel state and pipeline payloads."""

import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


def generate_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


class ScanStatus(str, Enum):
    """Transient scan status of a watched company."""

    IDLE = "idle"
    SCANNING = "scanning"
    FOUND = "found"
    ERROR = "error"


class AgentType(str, Enum):
    PROFILER = "PROFILER"
    SCOUT = "SCOUT"
    CRITIC = "CRITIC"
    REPORTER = "REPORTER"


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"


class Partition(str, Enum):
    """Alert ledger views."""

    ACTIVE = "active"
    ARCHIVED = "archived"


class Profile(BaseModel):
    """Candidate identity synthesized from resume text."""

    source_text: str
    skills: list[str] = Field(default_factory=list)
    target_roles: list[str] = Field(default_factory=list)
    summary: str = ""

    @property
    def primary_role(self) -> str:
        return self.target_roles[0] if self.target_roles else ""


class WatchEntry(BaseModel):
    """A monitored company."""

    id: str = Field(default_factory=generate_id)
    name: str
    domain: str
    scan_status: ScanStatus = ScanStatus.IDLE
    last_checked: datetime | None = None


class Alert(BaseModel):
    """A matched job posting. Only `archived` changes after creation."""

    id: str = Field(default_factory=generate_id)
    company_name: str
    title: str
    link: str
    rationale: str
    detected_at: datetime = Field(default_factory=utcnow)
    archived: bool = False


class Counters(BaseModel):
    total_scans: int = 0
    total_matches: int = 0


class Stats(BaseModel):
    """Counters plus derived dashboard figures."""

    total_scans: int
    total_matches: int
    active_watchlist: int
    uptime: str


class LogEntry(BaseModel):
    """Diagnostic activity feed entry (not persisted)."""

    id: str = Field(default_factory=generate_id)
    timestamp: datetime = Field(default_factory=utcnow)
    agent: AgentType
    message: str
    severity: Severity = Severity.INFO


class AgentStatus(BaseModel):
    agent: AgentType
    is_active: bool = False
    message: str = "Idle"


class Candidate(BaseModel):
    """Job posting returned by the scout."""

    title: str
    link: str
    snippet: str = ""
    posted_date: str | None = None


class Verdict(BaseModel):
    """Critic decision for one candidate."""

    accepted: bool
    rationale: str = ""


class SentinelSnapshot(BaseModel):
    """Everything that survives a restart, stored under a single key."""

    source_text: str = ""
    profile: Profile | None = None
    watchlist: list[WatchEntry] = Field(default_factory=list)
    alerts: list[Alert] = Field(default_factory=list)
    counters: Counters = Field(default_factory=Counters)


DEFAULT_COMPANIES: list[tuple[str, str]] = [
    ("OpenAI", "openai.com"),
    ("Anthropic", "anthropic.com"),
    ("NVIDIA", "nvidia.com"),
    ("Google", "google.com"),
    ("Meta", "meta.com"),
    ("Stripe", "stripe.com"),
    ("Microsoft", "microsoft.com"),
    ("Apple", "apple.com"),
    ("Netflix", "netflix.com"),
    ("Tesla", "tesla.com"),
]


def default_watchlist() -> list[WatchEntry]:
    return [WatchEntry(name=name, domain=domain) for name, domain in DEFAULT_COMPANIES]


SAMPLE_RESUME = """
PMP-certified project manager with 8 years steering cross-industry portfolios.
Expertise in Agile/Scrum, strategic resource allocation, and delivering $10M+ initiatives on time.
Proficient in Jira, Asana, and stakeholder management.
Seeking: Senior Project Manager or Program Manager roles in Tech/SaaS.
"""
