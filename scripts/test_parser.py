"""
Test the model-output parser with the response shapes DeepSeek produces.

Usage: python scripts/test_parser.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sentinel.utils.parser import (
    extract_json,
    parse_candidates_response,
    parse_profile_response,
    parse_verdict_response,
)


def test_extract_json_strategies():
    assert extract_json('{"a": 1}') == {"a": 1}
    assert extract_json('```json\n{"a": 2}\n```') == {"a": 2}
    assert extract_json('Here you go:\n```\n[1, 2]\n```') == [1, 2]
    assert extract_json('Sure! {"a": {"b": "}"}} hope that helps') == {"a": {"b": "}"}}
    assert extract_json("") is None
    assert extract_json("no json here") is None
    print("[OK] extract_json strategies")


def test_extract_json_prefers_requested_shape():
    text = 'Found {"count": 1} results: [{"link": "https://a.com/1"}]'
    assert extract_json(text, expect_array=True) == [{"link": "https://a.com/1"}]
    assert extract_json(text, expect_array=False) == {"count": 1}


def test_parse_profile_response_key_variants():
    camel = parse_profile_response(
        '{"skills": ["Agile", "Jira"], "targetRoles": ["Senior PM"], "vectorSummary": "PM lead"}'
    )
    assert camel == {"skills": ["Agile", "Jira"], "target_roles": ["Senior PM"], "summary": "PM lead"}

    snake = parse_profile_response('{"skills": "Agile, Jira", "titles": ["Program Manager"], "summary": " x "}')
    assert snake["skills"] == ["Agile", "Jira"]
    assert snake["target_roles"] == ["Program Manager"]
    assert snake["summary"] == "x"

    assert parse_profile_response("I cannot help with that") == {
        "skills": [],
        "target_roles": [],
        "summary": "",
    }


def test_parse_candidates_filters_bad_links_and_duplicates():
    text = """```json
    [
        {"title": "Senior PM", "link": "https://openai.com/jobs/55", "snippet": "Lead", "postedDate": "2 days ago"},
        {"title": "Duplicate", "link": "https://openai.com/jobs/55"},
        {"title": "No link"},
        {"title": "Relative", "link": "/careers/1"},
        {"title": "Via url key", "url": "https://jobs.lever.co/openai/9"},
        "not a dict"
    ]
    ```"""
    candidates = parse_candidates_response(text)

    assert [c.link for c in candidates] == ["https://openai.com/jobs/55", "https://jobs.lever.co/openai/9"]
    assert candidates[0].posted_date == "2 days ago"
    assert candidates[0].snippet == "Lead"
    assert candidates[1].posted_date is None
    print("[OK] Candidate filtering")


def test_parse_candidates_limit_and_wrapped_object():
    text = '{"jobs": [{"link": "https://a.com/1"}, {"link": "https://a.com/2"}, {"link": "https://a.com/3"}]}'
    candidates = parse_candidates_response(text, limit=2)
    assert [c.link for c in candidates] == ["https://a.com/1", "https://a.com/2"]
    assert candidates[0].title == "Untitled role"

    assert parse_candidates_response("[]") == []
    assert parse_candidates_response("nothing found") == []


def test_parse_verdict_response():
    verdict = parse_verdict_response('{"isValid": true, "reason": "Matches PM seniority."}')
    assert verdict.accepted is True
    assert verdict.rationale == "Matches PM seniority."

    rejected = parse_verdict_response('Decision: {"accepted": "no", "rationale": "Too junior"}')
    assert rejected.accepted is False
    assert rejected.rationale == "Too junior"

    assert parse_verdict_response('{"reason": "undecided"}') is None
    assert parse_verdict_response("maybe") is None
    print("[OK] Verdict parsing")


if __name__ == "__main__":
    test_extract_json_strategies()
    test_parse_candidates_filters_bad_links_and_duplicates()
    test_parse_verdict_response()
    print("\nAll tests passed!")
