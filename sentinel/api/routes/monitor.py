"""Monitor loop endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from sentinel.api.deps import Runtime, get_runtime, require_pipeline
from sentinel.api.schemas import MonitorResponse
from sentinel.core.monitor import MonitorState

router = APIRouter()


def _monitor_response(runtime: Runtime) -> MonitorResponse:
    return MonitorResponse(
        state=runtime.monitor_state,
        stopping=runtime.monitor_stopping,
        stats=runtime.context.stats(),
    )


@router.get("", response_model=MonitorResponse)
async def get_monitor(runtime: Runtime = Depends(get_runtime)):
    """Current loop state and counters."""
    return _monitor_response(runtime)


@router.post("/start", response_model=MonitorResponse)
async def start_monitor(runtime: Runtime = Depends(get_runtime)):
    """Start monitoring. Requires a locked profile."""
    if runtime.context.profile is None:
        raise HTTPException(status_code=409, detail="Lock a profile before starting the monitor")

    require_pipeline(runtime)
    runtime.monitor.start()
    return _monitor_response(runtime)


@router.post("/stop", response_model=MonitorResponse)
async def stop_monitor(runtime: Runtime = Depends(get_runtime)):
    """Request a stop at the next company or pause boundary."""
    if runtime.monitor_state == MonitorState.RUNNING:
        runtime.monitor.stop()
    return _monitor_response(runtime)
