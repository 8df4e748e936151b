"""Utility modules."""

from .parser import extract_json, parse_candidates_response, parse_profile_response, parse_verdict_response

__all__ = ["extract_json", "parse_profile_response", "parse_candidates_response", "parse_verdict_response"]
