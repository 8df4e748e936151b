"""
Scout agent.

Finds the freshest postings at one company for the primary target role:
a grounded web search followed by a structured extraction pass.
"""

ATS_HINTS = ("careers", "jobs", "greenhouse", "lever", "workday")

SCOUT_EXTRACT_PROMPT = """You extract job postings from web search results.

Keep only results that are:
- Specific job postings at {company} (deep links such as /jobs/12345 or boards.greenhouse.io/...)
- For roles close to "{role}"
- Published within the last {days} days (or undated)

Discard root career homepages, listing pages and news articles.

Return ONLY this JSON array (no markdown, no explanation), at most {limit} items, most recent first:
[{{"title": "Job Title", "link": "https://...", "snippet": "one-sentence summary", "postedDate": "YYYY-MM-DD or null"}}]

Return [] if nothing qualifies.
"""


def build_search_query(domain: str, role: str, days: int = 7) -> str:
    """ATS-oriented site: query for one company and role."""
    inurl = " OR ".join(f"inurl:{hint}" for hint in ATS_HINTS)
    return f'site:{domain} ({inurl}) "{role}" after:{days}d'


def build_extract_prompt(company: str, role: str, days: int, limit: int) -> str:
    return SCOUT_EXTRACT_PROMPT.format(company=company, role=role, days=days, limit=limit)
