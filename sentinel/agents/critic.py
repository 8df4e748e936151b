"""
Critic agent.

Binary gatekeeper: accepts a posting only if it is recent, a direct
application link, and a match for the candidate's profile.
"""

from sentinel.core.models import Candidate, Profile

CRITIC_PROMPT = """You are a strict job match evaluator. Decide TRUE or FALSE.

VERIFICATION RULES:
1. RECENCY: If the posting is explicitly older than {days} days, REJECT.
2. VIABILITY: If the link is a generic homepage (e.g. apple.com/careers) and NOT a specific job, REJECT.
3. RELEVANCE: Does the role match the candidate's identity and seniority?

Return ONLY this JSON (no markdown):
{{"isValid": true, "reason": "one short sentence"}}
"""


def build_critic_prompt(days: int) -> str:
    return CRITIC_PROMPT.format(days=days)


def build_match_message(candidate: Candidate, profile: Profile) -> str:
    """Compact evaluation context for one candidate."""
    return (
        f"Candidate summary: {profile.summary}\n"
        f"Target roles: {', '.join(profile.target_roles)}\n"
        f"Skills: {', '.join(profile.skills)}\n\n"
        f"Potential match: {candidate.title}\n"
        f"Details: {candidate.snippet}\n"
        f"Source link: {candidate.link}\n"
        f"Date evidence: {candidate.posted_date or 'Unknown'}"
    )
