"""
FastAPI dependencies.

The runtime bundles the sentinel context with the monitor loop and a lazily
created classification pipeline.
"""

from collections.abc import Callable

from fastapi import HTTPException, Request

from sentinel.agents.pipeline import ClassificationPipeline, create_pipeline
from sentinel.core.context import SentinelContext
from sentinel.core.monitor import MonitorLoop, MonitorState


class Runtime:
    """Everything the API needs for one sentinel instance."""

    def __init__(
        self,
        context: SentinelContext,
        pipeline_factory: Callable[[], ClassificationPipeline] = create_pipeline,
        scan_pause: float | None = None,
        cycle_interval: float | None = None,
    ):
        self.context = context
        self._pipeline_factory = pipeline_factory
        self._pipeline: ClassificationPipeline | None = None
        self._monitor: MonitorLoop | None = None
        self._scan_pause = scan_pause
        self._cycle_interval = cycle_interval

    @property
    def pipeline(self) -> ClassificationPipeline:
        """Raises ValueError when the model is not configured."""
        if self._pipeline is None:
            self._pipeline = self._pipeline_factory()
        return self._pipeline

    @property
    def monitor(self) -> MonitorLoop:
        if self._monitor is None:
            self._monitor = MonitorLoop(
                self.context,
                self.pipeline,
                scan_pause=self._scan_pause,
                cycle_interval=self._cycle_interval,
            )
        return self._monitor

    @property
    def monitor_state(self) -> MonitorState:
        return self._monitor.state if self._monitor else MonitorState.STOPPED

    @property
    def monitor_stopping(self) -> bool:
        return self._monitor.stopping if self._monitor else False

    async def halt(self) -> None:
        if self._monitor is not None:
            await self._monitor.cancel()


def get_runtime(request: Request) -> Runtime:
    """FastAPI dependency for the application runtime."""
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(status_code=503, detail="Sentinel not initialized")
    return runtime


def require_pipeline(runtime: Runtime) -> ClassificationPipeline:
    try:
        return runtime.pipeline
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))
