"""
Alert Ledger.

Deduplicated, append-only collection of matched postings.
A posting link is unique across both the active and archived partitions.
"""

from sentinel.core.models import Alert, Candidate, Partition
from sentinel.errors import NotFoundError


class AlertLedger:
    """Holds alerts newest first, keyed by posting link."""

    def __init__(self, alerts: list[Alert] | None = None):
        self._alerts: list[Alert] = list(alerts or [])
        self._links: set[str] = {a.link for a in self._alerts}

    def __len__(self) -> int:
        return len(self._alerts)

    def contains(self, link: str) -> bool:
        return link in self._links

    def insert_if_new(self, company_name: str, candidate: Candidate, rationale: str) -> Alert | None:
        """
        Record a matched candidate unless its link is already known.

        Returns:
            The new alert, or None if the link exists in either partition
        """
        if candidate.link in self._links:
            return None

        alert = Alert(
            company_name=company_name,
            title=candidate.title,
            link=candidate.link,
            rationale=rationale,
        )
        self._alerts.insert(0, alert)
        self._links.add(alert.link)
        return alert

    def toggle_archive(self, alert_id: str) -> Alert:
        for alert in self._alerts:
            if alert.id == alert_id:
                alert.archived = not alert.archived
                return alert.model_copy()
        raise NotFoundError(f"Alert not found: {alert_id}")

    def view(self, partition: Partition = Partition.ACTIVE) -> list[Alert]:
        """Alerts of one partition, newest first by detection time."""
        archived = partition == Partition.ARCHIVED
        matching = [a.model_copy() for a in self._alerts if a.archived == archived]
        # sorted() is stable, so same-instant alerts keep discovery order
        return sorted(matching, key=lambda a: a.detected_at, reverse=True)

    def all(self) -> list[Alert]:
        return [a.model_copy() for a in self._alerts]
