"""Activity feed and dashboard endpoints."""

from fastapi import APIRouter, Depends, Query

from sentinel.api.deps import Runtime, get_runtime
from sentinel.api.schemas import ActivityResponse, DashboardResponse
from sentinel.config import settings
from sentinel.core.models import Partition

router = APIRouter()


@router.get("/activity", response_model=ActivityResponse)
async def get_activity(
    limit: int | None = Query(None, ge=1, le=settings.activity_log_size),
    runtime: Runtime = Depends(get_runtime),
):
    """Recent diagnostic entries, newest first."""
    return ActivityResponse(entries=runtime.context.activity.recent(limit))


@router.delete("/activity")
async def flush_activity(runtime: Runtime = Depends(get_runtime)):
    """Clear the diagnostic feed."""
    runtime.context.activity.clear()
    return {"message": "Activity log cleared"}


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(runtime: Runtime = Depends(get_runtime)):
    """Everything the dashboard renders in one call."""
    context = runtime.context
    return DashboardResponse(
        state=runtime.monitor_state,
        stats=context.stats(),
        profile=context.profile,
        watchlist=context.watchlist.entries(),
        alerts=context.ledger.view(Partition.ACTIVE),
        agents=context.board.statuses(),
        activity=context.activity.recent(),
    )


@router.post("/reset")
async def reset_state(runtime: Runtime = Depends(get_runtime)):
    """Stop monitoring and wipe all stored state back to defaults."""
    await runtime.halt()
    runtime.context.reset()
    return {"message": "State reset"}
