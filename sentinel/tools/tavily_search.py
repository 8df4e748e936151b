"""
Tavily search tool for job discovery.

Uses Tavily API to search the web for recent job postings.
"""

from typing import Literal

from tavily import TavilyClient

from sentinel.config import settings

TimeRange = Literal["day", "week", "month", "year"]

# Initialize client (lazy - only when API key is set)
_client: TavilyClient | None = None


def _get_client() -> TavilyClient:
    """Get or create Tavily client."""
    global _client
    if _client is None:
        if not settings.tavily_api_key:
            raise ValueError("TAVILY_API_KEY not set")
        _client = TavilyClient(api_key=settings.tavily_api_key)
    return _client


def tavily_search(
    query: str,
    max_results: int = 5,
    time_range: TimeRange = "week",
) -> list[dict]:
    """
    Search the web for job postings using Tavily.

    Args:
        query: Search query (e.g., 'site:openai.com "Senior PM"')
        max_results: Maximum number of results to return
        time_range: Only return pages published within this window

    Returns:
        List of hits with title, url, snippet and published date
    """
    client = _get_client()
    results = client.search(
        query=query,
        max_results=max_results,
        time_range=time_range,
    )

    return [
        {
            "title": r.get("title", ""),
            "url": r.get("url", ""),
            "snippet": r.get("content", ""),
            "published": r.get("published_date"),
        }
        for r in results.get("results", [])
    ]
