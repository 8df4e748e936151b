"""Ordered list of watched companies."""

from collections.abc import Iterator

from sentinel.core.models import WatchEntry
from sentinel.errors import NotFoundError, ValidationError


class Watchlist:
    """List order is both display order and scan order."""

    def __init__(self, entries: list[WatchEntry] | None = None):
        self._entries: list[WatchEntry] = list(entries or [])

    def __iter__(self) -> Iterator[WatchEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> list[WatchEntry]:
        """Snapshot of the current order. Entries are live objects."""
        return list(self._entries)

    def get(self, entry_id: str) -> WatchEntry:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        raise NotFoundError(f"Watchlist entry not found: {entry_id}")

    def add(self, name: str, domain: str) -> WatchEntry:
        name = name.strip()
        domain = _normalize_domain(domain)
        if not name or not domain:
            raise ValidationError("Company name and domain are required")
        if any(e.domain == domain for e in self._entries):
            raise ValidationError(f"Domain already watched: {domain}")

        entry = WatchEntry(name=name, domain=domain)
        self._entries.append(entry)
        return entry

    def remove(self, entry_id: str) -> WatchEntry:
        entry = self.get(entry_id)
        self._entries.remove(entry)
        return entry


def _normalize_domain(domain: str) -> str:
    """Strip scheme, path and 'www.' so site: queries stay valid."""
    domain = domain.strip().lower()
    for prefix in ("https://", "http://"):
        if domain.startswith(prefix):
            domain = domain[len(prefix):]
    domain = domain.split("/")[0]
    if domain.startswith("www."):
        domain = domain[4:]
    return domain
