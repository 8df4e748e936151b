"""
Robust JSON parser for model output.

Handles the usual LLM answer shapes:
- Clean JSON
- JSON in ``` fences (with or without a language tag)
- JSON embedded in prose
"""

import json
import re
from typing import Any

from sentinel.core.models import Candidate, Verdict

FENCE_PATTERN = re.compile(r"```(?:json|\w*)\s*([\s\S]*?)\s*```", re.IGNORECASE)


def extract_json(text: str, expect_array: bool = False) -> dict | list | None:
    """
    Extract JSON from a model response using several strategies.

    Args:
        text: Raw model response text
        expect_array: Prefer a JSON array over an object

    Returns:
        Parsed JSON (dict or list) or None if extraction fails
    """
    if not text or not text.strip():
        return None

    for strategy in (_try_clean_json, _try_fenced, _try_find_json_bounds):
        result = strategy(text, expect_array)
        if result is not None:
            return result

    return None


def _loads(candidate: str) -> Any:
    try:
        return json.loads(candidate.strip())
    except json.JSONDecodeError:
        return None


def _try_clean_json(text: str, expect_array: bool) -> dict | list | None:
    result = _loads(text)
    return result if isinstance(result, (dict, list)) else None


def _try_fenced(text: str, expect_array: bool) -> dict | list | None:
    for match in FENCE_PATTERN.findall(text):
        result = _loads(match)
        if isinstance(result, (dict, list)):
            return result
    return None


def _try_find_json_bounds(text: str, expect_array: bool) -> dict | list | None:
    """Find JSON by matching brackets/braces, preferred shape first."""
    order = [("[", "]"), ("{", "}")] if expect_array else [("{", "}"), ("[", "]")]
    for open_char, close_char in order:
        start = text.find(open_char)
        if start == -1:
            continue
        block = _extract_balanced(text, start, open_char, close_char)
        if block:
            result = _loads(block)
            if result is not None:
                return result
    return None


def _extract_balanced(text: str, start: int, open_char: str, close_char: str) -> str | None:
    """Extract balanced brackets/braces starting from position, skipping string literals."""
    depth = 0
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return text[start:i + 1]

    return None


def _string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = re.split(r"[,;]", value)
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if str(v).strip()]


def parse_profile_response(text: str) -> dict:
    """
    Parse a synthesized profile from a model response.

    Returns dict with: skills, target_roles, summary
    """
    data = extract_json(text, expect_array=False)
    if not isinstance(data, dict):
        return {"skills": [], "target_roles": [], "summary": ""}

    return {
        "skills": _string_list(data.get("skills")),
        "target_roles": _string_list(
            data.get("targetRoles") or data.get("target_roles") or data.get("titles") or data.get("roles")
        ),
        "summary": str(
            data.get("vectorSummary") or data.get("summary") or data.get("vector_summary") or ""
        ).strip(),
    }


def parse_candidates_response(text: str, limit: int | None = None) -> list[Candidate]:
    """
    Parse extracted job postings from a model response.

    Entries without a http(s) link are dropped, as are repeated links.
    """
    data = extract_json(text, expect_array=True)
    if isinstance(data, dict):
        data = data.get("jobs") or data.get("results") or []
    if not isinstance(data, list):
        return []

    candidates: list[Candidate] = []
    seen: set[str] = set()
    for item in data:
        if not isinstance(item, dict):
            continue
        link = str(item.get("link") or item.get("url") or "").strip()
        if not link.startswith(("http://", "https://")) or link in seen:
            continue
        seen.add(link)
        posted = item.get("postedDate") or item.get("posted_date")
        candidates.append(
            Candidate(
                title=str(item.get("title") or "Untitled role").strip(),
                link=link,
                snippet=str(item.get("snippet") or item.get("description") or "").strip(),
                posted_date=str(posted).strip() if posted else None,
            )
        )

    return candidates[:limit] if limit is not None else candidates


def parse_verdict_response(text: str) -> Verdict | None:
    """
    Parse a critic decision from a model response.

    Returns None when no decision can be found.
    """
    data = extract_json(text, expect_array=False)
    if not isinstance(data, dict):
        return None

    accepted = data.get("isValid", data.get("accepted", data.get("is_valid")))
    if isinstance(accepted, str):
        accepted = accepted.strip().lower() in ("true", "yes", "1")
    if not isinstance(accepted, bool):
        return None

    rationale = data.get("reason") or data.get("rationale") or ""
    return Verdict(accepted=accepted, rationale=str(rationale).strip())
