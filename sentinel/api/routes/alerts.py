"""Alert endpoints."""

from fastapi import APIRouter, Depends

from sentinel.api.deps import Runtime, get_runtime
from sentinel.api.schemas import AlertListResponse
from sentinel.core.models import Alert, Partition

router = APIRouter()


@router.get("", response_model=AlertListResponse)
async def list_alerts(view: Partition = Partition.ACTIVE, runtime: Runtime = Depends(get_runtime)):
    """List alerts of one partition, newest first."""
    return AlertListResponse(view=view, alerts=runtime.context.ledger.view(view))


@router.post("/{alert_id}/archive", response_model=Alert)
async def toggle_archive(alert_id: str, runtime: Runtime = Depends(get_runtime)):
    """Move an alert between the active and archived views."""
    return runtime.context.toggle_archive(alert_id)
