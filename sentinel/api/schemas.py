"""API request/response schemas."""

from pydantic import BaseModel, Field

from sentinel.core.models import (
    AgentStatus,
    Alert,
    LogEntry,
    Partition,
    Profile,
    Stats,
    WatchEntry,
)
from sentinel.core.monitor import MonitorState


# Profile schemas
class SourceTextUpdate(BaseModel):
    text: str = Field(description="Raw resume text; replacing it unlocks the profile")


class ProfileResponse(BaseModel):
    source_text: str
    profile: Profile | None
    locked: bool
    is_locking: bool


# Watchlist schemas
class CompanyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    domain: str = Field(min_length=1, max_length=255, description="e.g. openai.com")


class WatchlistResponse(BaseModel):
    entries: list[WatchEntry]


# Alert schemas
class AlertListResponse(BaseModel):
    view: Partition
    alerts: list[Alert]


# Monitor schemas
class MonitorResponse(BaseModel):
    state: MonitorState
    stopping: bool = Field(default=False, description="Stop requested, current step still finishing")
    stats: Stats


# Activity schemas
class ActivityResponse(BaseModel):
    entries: list[LogEntry]


class DashboardResponse(BaseModel):
    state: MonitorState
    stats: Stats
    profile: Profile | None
    watchlist: list[WatchEntry]
    alerts: list[Alert]
    agents: list[AgentStatus]
    activity: list[LogEntry]
