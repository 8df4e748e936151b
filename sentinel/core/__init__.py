"""Core state, ledger and monitor loop."""

from .models import (
    Alert,
    Candidate,
    Counters,
    Profile,
    SentinelSnapshot,
    Verdict,
    WatchEntry,
)

__all__ = [
    "Alert",
    "Candidate",
    "Counters",
    "Profile",
    "SentinelSnapshot",
    "Verdict",
    "WatchEntry",
]
