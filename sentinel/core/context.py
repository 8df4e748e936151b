"""
Orchestration context.

Single owner of the profile, watchlist, alert ledger and counters.
Every observable change is flushed to the snapshot store, but only after
the initial restore has completed.
"""

import logging
import time
from typing import TYPE_CHECKING

from sentinel.config import settings
from sentinel.core.activity import ActivityLog, AgentBoard
from sentinel.core.ledger import AlertLedger
from sentinel.core.models import (
    Alert,
    AgentType,
    Candidate,
    Counters,
    Profile,
    ScanStatus,
    SentinelSnapshot,
    Severity,
    Stats,
    WatchEntry,
    default_watchlist,
    utcnow,
)
from sentinel.core.profile_store import ProfileStore
from sentinel.core.watchlist import Watchlist
from sentinel.errors import ExternalServiceError, PersistenceError

if TYPE_CHECKING:
    from sentinel.agents.pipeline import ClassificationPipeline
    from sentinel.db.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


class SentinelContext:
    """In-memory source of truth for one sentinel instance."""

    def __init__(
        self,
        store: "SnapshotStore | None" = None,
        activity_size: int | None = None,
    ):
        self.store = store
        self.profiles = ProfileStore()
        self.watchlist = Watchlist(default_watchlist())
        self.ledger = AlertLedger()
        self.counters = Counters()
        self.activity = ActivityLog(activity_size or settings.activity_log_size)
        self.board = AgentBoard()
        self._started = time.monotonic()
        self._hydrated = False

    # Persistence

    @property
    def hydrated(self) -> bool:
        return self._hydrated

    def hydrate(self) -> bool:
        """
        Restore durable state once at startup.

        Returns:
            True if a stored snapshot was applied, False if defaults are kept
        """
        snapshot = self.store.restore() if self.store else None
        if snapshot is not None:
            self.apply(snapshot)
        self._hydrated = True
        return snapshot is not None

    def apply(self, snapshot: SentinelSnapshot) -> None:
        entries = [
            e.model_copy(update={"scan_status": ScanStatus.IDLE}) for e in snapshot.watchlist
        ]
        self.profiles = ProfileStore(snapshot.source_text, snapshot.profile)
        self.watchlist = Watchlist(entries)
        self.ledger = AlertLedger(snapshot.alerts)
        self.counters = snapshot.counters.model_copy()

    def snapshot(self) -> SentinelSnapshot:
        return SentinelSnapshot(
            source_text=self.profiles.source_text,
            profile=self.profiles.profile,
            watchlist=[e.model_copy() for e in self.watchlist],
            alerts=self.ledger.all(),
            counters=self.counters.model_copy(),
        )

    def commit(self) -> None:
        """Flush the current state. Save failures are logged, never raised."""
        if not self._hydrated or self.store is None:
            return
        try:
            self.store.save(self.snapshot())
        except PersistenceError as e:
            logger.error(f"Snapshot save failed: {e}")

    # Profile

    @property
    def profile(self) -> Profile | None:
        return self.profiles.profile

    @property
    def source_text(self) -> str:
        return self.profiles.source_text

    def replace_source_text(self, text: str, origin: str | None = None) -> None:
        invalidated = self.profiles.replace_source_text(text)
        if origin:
            self.activity.add(AgentType.REPORTER, f"Imported raw document: {origin}")
        if invalidated:
            self.activity.add(AgentType.PROFILER, "Source text changed. Profile unlocked.", Severity.WARNING)
        self.commit()

    async def lock_profile(self, pipeline: "ClassificationPipeline") -> Profile:
        self.board.update(AgentType.PROFILER, True, "Synthesizing identity...")
        self.activity.add(AgentType.PROFILER, "Engaging Profiler agent for profile synthesis...")
        try:
            profile = await self.profiles.lock(pipeline)
        except ExternalServiceError as e:
            self.activity.add(AgentType.PROFILER, f"Synthesis error: {e}", Severity.WARNING)
            raise
        finally:
            self.board.update(
                AgentType.PROFILER, False, "Identity locked" if self.profile else "Idle"
            )

        self.activity.add(
            AgentType.PROFILER,
            f"PROFILE LOCKED: primary role '{profile.primary_role}', {len(profile.skills)} skills.",
            Severity.SUCCESS,
        )
        self.commit()
        return profile

    # Watchlist

    def add_company(self, name: str, domain: str) -> WatchEntry:
        entry = self.watchlist.add(name, domain)
        self.activity.add(AgentType.REPORTER, f"Added {entry.name} ({entry.domain}) to watchlist.")
        self.commit()
        return entry

    def remove_company(self, entry_id: str) -> WatchEntry:
        entry = self.watchlist.remove(entry_id)
        self.activity.add(AgentType.REPORTER, f"Removed {entry.name} from watchlist.")
        self.commit()
        return entry

    def set_scan_status(self, entry: WatchEntry, status: ScanStatus) -> None:
        entry.scan_status = status
        if status == ScanStatus.IDLE:
            entry.last_checked = utcnow()
        self.commit()

    # Alerts and counters

    def record_scan(self) -> None:
        self.counters.total_scans += 1
        self.commit()

    def record_match(self, company_name: str, candidate: Candidate, rationale: str) -> Alert | None:
        """Insert an alert for an accepted candidate unless its link is known."""
        alert = self.ledger.insert_if_new(company_name, candidate, rationale)
        if alert is None:
            return None
        self.counters.total_matches += 1
        self.commit()
        return alert

    def toggle_archive(self, alert_id: str) -> Alert:
        alert = self.ledger.toggle_archive(alert_id)
        self.commit()
        return alert

    # Projections

    def stats(self) -> Stats:
        elapsed = int(time.monotonic() - self._started)
        hours, rest = divmod(elapsed, 3600)
        minutes, seconds = divmod(rest, 60)
        return Stats(
            total_scans=self.counters.total_scans,
            total_matches=self.counters.total_matches,
            active_watchlist=len(self.watchlist),
            uptime=f"{hours:02d}:{minutes:02d}:{seconds:02d}",
        )

    def reset(self) -> None:
        """
        Wipe durable and in-memory state back to defaults.

        Raises:
            PersistenceError: The stored snapshot could not be cleared (memory untouched)
        """
        if self.store is not None:
            self.store.clear()
        self.apply(SentinelSnapshot(watchlist=default_watchlist()))
        self.activity.clear()
        self.board.reset()
        logger.info("Sentinel state reset to defaults")
