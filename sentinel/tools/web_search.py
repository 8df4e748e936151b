"""
Search provider selection.

Tavily is used when configured; Brave is tried when Tavily is missing or fails.
"""

import logging

from sentinel.config import settings
from sentinel.errors import ExternalServiceError
from sentinel.tools.brave_search import brave_search
from sentinel.tools.tavily_search import tavily_search

logger = logging.getLogger(__name__)


def time_range_for(days: int) -> str:
    """Smallest provider window that covers `days`."""
    if days <= 1:
        return "day"
    if days <= 7:
        return "week"
    if days <= 31:
        return "month"
    return "year"


def search_postings(query: str, max_results: int = 8, days: int | None = None) -> list[dict]:
    """
    Run a web search through the first available provider.

    Raises:
        ExternalServiceError: No provider configured, or every provider failed
    """
    time_range = time_range_for(days or settings.freshness_days)
    providers = []
    if settings.tavily_api_key:
        providers.append(("tavily", tavily_search))
    if settings.brave_api_key:
        providers.append(("brave", brave_search))
    if not providers:
        raise ExternalServiceError("No search provider configured (set TAVILY_API_KEY or BRAVE_API_KEY)")

    last_error: Exception | None = None
    for name, search in providers:
        try:
            return search(query, max_results=max_results, time_range=time_range)
        except Exception as e:
            logger.warning(f"{name} search failed: {e}")
            last_error = e

    raise ExternalServiceError(f"Search failed: {last_error}") from last_error


def format_results(hits: list[dict]) -> str:
    """Render hits as text for the extraction prompt."""
    formatted = []
    for r in hits:
        formatted.append(
            f"**{r.get('title') or 'No title'}**\n"
            f"URL: {r.get('url', '')}\n"
            f"Published: {r.get('published') or 'Unknown'}\n"
            f"{r.get('snippet') or 'No description'}\n"
        )
    return "\n---\n".join(formatted)
