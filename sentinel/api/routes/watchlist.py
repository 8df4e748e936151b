"""Watchlist endpoints."""

from fastapi import APIRouter, Depends

from sentinel.api.deps import Runtime, get_runtime
from sentinel.api.schemas import CompanyCreate, WatchlistResponse
from sentinel.core.models import WatchEntry

router = APIRouter()


@router.get("", response_model=WatchlistResponse)
async def list_watchlist(runtime: Runtime = Depends(get_runtime)):
    """Watched companies in scan order with live scan status."""
    return WatchlistResponse(entries=runtime.context.watchlist.entries())


@router.post("", response_model=WatchEntry, status_code=201)
async def add_company(data: CompanyCreate, runtime: Runtime = Depends(get_runtime)):
    """Append a company to the watchlist."""
    return runtime.context.add_company(data.name, data.domain)


@router.delete("/{entry_id}")
async def remove_company(entry_id: str, runtime: Runtime = Depends(get_runtime)):
    """Remove a company from the watchlist."""
    entry = runtime.context.remove_company(entry_id)
    return {"message": f"Removed {entry.name}"}
