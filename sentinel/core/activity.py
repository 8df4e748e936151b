"""
Diagnostic activity feed and agent status board.

Both are in-memory only and start empty on every run.
"""

import logging
from collections import deque

from sentinel.core.models import AgentStatus, AgentType, LogEntry, Severity

logger = logging.getLogger(__name__)

_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.WARNING: logging.WARNING,
}


class ActivityLog:
    """Fixed-capacity feed, newest first. The oldest entry drops on overflow."""

    def __init__(self, capacity: int = 50):
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    def add(self, agent: AgentType, message: str, severity: Severity = Severity.INFO) -> LogEntry:
        entry = LogEntry(agent=agent, message=message, severity=severity)
        self._entries.appendleft(entry)
        logger.log(_LEVELS[severity], f"[{agent.value}] {message}")
        return entry

    def recent(self, limit: int | None = None) -> list[LogEntry]:
        entries = list(self._entries)
        return entries[:limit] if limit is not None else entries

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class AgentBoard:
    """Live activity flag and message for each agent role."""

    def __init__(self):
        self._statuses = {agent: AgentStatus(agent=agent) for agent in AgentType}

    def update(self, agent: AgentType, active: bool, message: str) -> None:
        self._statuses[agent] = AgentStatus(agent=agent, is_active=active, message=message)

    def get(self, agent: AgentType) -> AgentStatus:
        return self._statuses[agent]

    def statuses(self) -> list[AgentStatus]:
        return [self._statuses[agent] for agent in AgentType]

    def reset(self) -> None:
        for agent in AgentType:
            self.update(agent, False, "Idle")
