"""
Monitor Loop.

Drives the classification pipeline over the watchlist, one company at a
time, folding accepted postings into the alert ledger.

Stopping is cooperative: an in-flight pipeline call finishes and its result
is processed, but no further company or cycle starts once the stop is seen.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

from sentinel.agents.pipeline import ClassificationPipeline
from sentinel.config import settings
from sentinel.core.context import SentinelContext
from sentinel.core.models import AgentType, Profile, ScanStatus, Severity, WatchEntry
from sentinel.errors import ExternalServiceError

logger = logging.getLogger(__name__)


class MonitorState(str, Enum):
    STOPPED = "STOPPED"
    RUNNING = "RUNNING"


@dataclass
class CycleReport:
    """Outcome of one pass over the watchlist."""

    scanned: int = 0
    new_alerts: int = 0
    failures: int = 0
    interrupted: bool = False


class MonitorLoop:
    """Sequential, fixed-delay polling of the watchlist."""

    def __init__(
        self,
        context: SentinelContext,
        pipeline: ClassificationPipeline,
        scan_pause: float | None = None,
        cycle_interval: float | None = None,
    ):
        self.context = context
        self.pipeline = pipeline
        self.scan_pause = settings.scan_pause_seconds if scan_pause is None else scan_pause
        self.cycle_interval = settings.cycle_interval_seconds if cycle_interval is None else cycle_interval
        self._stop_event: asyncio.Event | None = None
        self._task: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()
        self.cycles_completed = 0

    @property
    def state(self) -> MonitorState:
        if self._stop_event is not None and not self._stop_event.is_set():
            return MonitorState.RUNNING
        return MonitorState.STOPPED

    @property
    def is_running(self) -> bool:
        return self.state == MonitorState.RUNNING

    @property
    def task(self) -> asyncio.Task | None:
        return self._task

    @property
    def stopping(self) -> bool:
        """A stop was requested but a loop task is still finishing its step."""
        return not self.is_running and any(not t.done() for t in self._tasks)

    def start(self) -> bool:
        """
        Start monitoring. Must be called from within a running event loop.

        Returns:
            True if the loop is running afterwards, False if no profile is locked
        """
        if self.is_running:
            return True
        if self.context.profile is None:
            return False

        previous = self._task
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run(previous, self._stop_event))
        self._tasks.add(self._task)
        self._task.add_done_callback(self._tasks.discard)
        self.context.activity.add(AgentType.REPORTER, "Monitoring engaged.")
        return True

    def stop(self) -> None:
        """Request a stop. Takes effect at the next company or pause boundary."""
        if not self.is_running:
            return
        self._stop_event.set()
        self.context.activity.add(AgentType.REPORTER, "Halt requested. Finishing current step.")

    async def wait_stopped(self) -> None:
        if self._tasks:
            await asyncio.wait(list(self._tasks))

    async def cancel(self) -> None:
        """Hard stop for shutdown and reset: the in-flight call is abandoned."""
        if self._stop_event is not None:
            self._stop_event.set()
        # Includes a stopped task still finishing the call a restart is waiting on
        pending = [t for t in self._tasks if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.wait(pending)

    async def _run(self, previous: asyncio.Task | None, stop_event: asyncio.Event) -> None:
        # A stopped task may still be finishing its in-flight call
        if previous is not None and not previous.done():
            await asyncio.wait([previous])

        try:
            while not stop_event.is_set():
                report = await self.run_cycle(stop_event)
                if report.interrupted or stop_event.is_set():
                    break

                self.context.activity.add(
                    AgentType.REPORTER,
                    f"Full cycle completed. Monitoring next batch in {self.cycle_interval:g}s.",
                )
                if await self._pause(self.cycle_interval, stop_event):
                    break
        except Exception as e:
            logger.exception("Monitor loop crashed")
            self.context.activity.add(AgentType.REPORTER, f"Monitor halted by error: {e}", Severity.WARNING)
        finally:
            stop_event.set()
            self.context.board.reset()
            logger.info("Monitor loop stopped")

    async def run_cycle(self, stop_event: asyncio.Event | None = None) -> CycleReport:
        """One sequential pass over the watchlist in list order."""
        stop_event = stop_event or asyncio.Event()
        report = CycleReport()

        for entry in self.context.watchlist.entries():
            if stop_event.is_set():
                report.interrupted = True
                break

            profile = self.context.profile
            if profile is None:
                self.context.activity.add(
                    AgentType.REPORTER, "Profile unlocked. Halting monitor.", Severity.WARNING
                )
                stop_event.set()
                report.interrupted = True
                break

            await self.scan_entry(entry, profile, report)

            if stop_event.is_set() or await self._pause(self.scan_pause, stop_event):
                report.interrupted = True
                break

        self.cycles_completed += 1
        return report

    async def scan_entry(self, entry: WatchEntry, profile: Profile, report: CycleReport) -> None:
        """Scout one company and vet its candidates. Failures stay local to this company."""
        context = self.context
        context.set_scan_status(entry, ScanStatus.SCANNING)
        context.board.update(AgentType.SCOUT, True, f"Scanning {entry.name}")
        context.activity.add(AgentType.SCOUT, f"Scanning recent postings for {entry.name}...")

        try:
            try:
                candidates = await self.pipeline.find_candidates(
                    entry.name, entry.domain, profile.primary_role
                )
            finally:
                context.record_scan()
                report.scanned += 1

            if not candidates:
                context.activity.add(
                    AgentType.SCOUT, f"Zero recent postings for {entry.name} found.", Severity.WARNING
                )
                return

            context.activity.add(
                AgentType.SCOUT,
                f"Found {len(candidates)} candidate links. Vetting initiated.",
                Severity.SUCCESS,
            )
            context.board.update(AgentType.CRITIC, True, "Vetting leads...")

            for candidate in candidates:
                verdict = await self.pipeline.evaluate_candidate(candidate, profile)
                if not verdict.accepted:
                    logger.debug(f"Critic rejected {candidate.link}: {verdict.rationale}")
                    continue

                alert = context.record_match(entry.name, candidate, verdict.rationale)
                if alert is None:
                    continue

                report.new_alerts += 1
                context.activity.add(
                    AgentType.REPORTER, f"HIGH-PRIORITY ALERT: {alert.title}", Severity.SUCCESS
                )

        except ExternalServiceError as e:
            report.failures += 1
            context.activity.add(
                AgentType.SCOUT, f"Pipeline error for {entry.name}: {e}", Severity.WARNING
            )
        except Exception:
            report.failures += 1
            logger.exception(f"Unexpected error while scanning {entry.name}")
            context.activity.add(
                AgentType.SCOUT, f"Unexpected error for {entry.name}.", Severity.WARNING
            )
        finally:
            context.board.update(AgentType.SCOUT, False, "Idle")
            context.board.update(AgentType.CRITIC, False, "Idle")
            context.set_scan_status(entry, ScanStatus.IDLE)

    @staticmethod
    async def _pause(seconds: float, stop_event: asyncio.Event) -> bool:
        """
        Wait unless stopped first.

        Returns:
            True if a stop was requested during the wait
        """
        if seconds <= 0:
            await asyncio.sleep(0)
            return stop_event.is_set()
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        return True
