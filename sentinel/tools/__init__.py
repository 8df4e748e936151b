"""
Tools for Job Sentinel.

- resume_import: Turn uploaded resume files into source text
- tavily_search: Web search via Tavily API
- brave_search: Web search via Brave API
- web_search: Provider selection with fallback
"""

from sentinel.tools.resume_import import parse_pdf, read_resume_upload
from sentinel.tools.web_search import format_results, search_postings

__all__ = ["parse_pdf", "read_resume_upload", "search_postings", "format_results"]
