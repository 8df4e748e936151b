"""
Brave search tool for job discovery.

Uses Brave Search API as a fallback to find job postings.
"""

import httpx

from sentinel.config import settings

BRAVE_API_URL = "https://api.search.brave.com/res/v1/web/search"

FRESHNESS = {"day": "pd", "week": "pw", "month": "pm", "year": "py"}


def brave_search(
    query: str,
    max_results: int = 5,
    time_range: str = "week",
) -> list[dict]:
    """
    Search the web for job postings using Brave Search.

    Args:
        query: Search query (e.g., 'site:stripe.com "Backend Engineer"')
        max_results: Maximum number of results to return
        time_range: Freshness window (day, week, month, year)

    Returns:
        List of hits with title, url, snippet and age

    Raises:
        ValueError: BRAVE_API_KEY not set
        httpx.HTTPError: Request failed
    """
    if not settings.brave_api_key:
        raise ValueError("BRAVE_API_KEY not set")

    headers = {
        "Accept": "application/json",
        "X-Subscription-Token": settings.brave_api_key,
    }
    params = {
        "q": query,
        "count": max_results,
        "freshness": FRESHNESS.get(time_range, "pw"),
    }

    with httpx.Client(timeout=settings.search_timeout) as client:
        response = client.get(BRAVE_API_URL, headers=headers, params=params)
        response.raise_for_status()
        data = response.json()

    return [
        {
            "title": r.get("title", ""),
            "url": r.get("url", ""),
            "snippet": r.get("description", ""),
            "published": r.get("age"),
        }
        for r in data.get("web", {}).get("results", [])
    ]
