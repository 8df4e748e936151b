"""
Profiler agent.

Synthesizes a compact candidate identity from resume text.
"""

PROFILER_PROMPT = """You are a resume profiler. Synthesize the candidate's identity.

Extract:
1. Core technical skills
2. Expected seniority level (Junior/Mid/Senior/Staff/Lead), folded into the role titles
3. Target role titles, most likely first
4. A one-sentence summary that defines the candidate's niche exactly

## Output Format (JSON only, no explanation)
{"skills": ["Agile", "Jira"], "targetRoles": ["Senior Project Manager", "Program Manager"], "vectorSummary": "..."}

## Rules
- List TOP 10 skills only
- targetRoles: MAX 3, include the seniority ("Senior PM", not "PM")
- vectorSummary: ONE sentence, MAX 30 words
- Return ONLY the JSON, no other text
"""


def truncate_resume(text: str, max_chars: int = 4000) -> str:
    """
    Trim a resume to its essential sections for token efficiency.

    Keeps: Summary, Skills, Experience, Education, Projects
    Drops: References, declarations, certificate lists
    """
    if len(text) <= max_chars:
        return text

    kept: list[str] = []
    size = 0
    in_section = False
    skip_sections = ("reference", "declaration", "certif")
    keep_sections = ("skill", "experience", "education", "objective", "summary", "project")

    for line in text.split("\n"):
        lowered = line.lower().strip()
        if any(skip in lowered for skip in skip_sections):
            in_section = False
            continue
        if any(kw in lowered for kw in keep_sections):
            in_section = True

        if in_section or len(kept) < 50:
            kept.append(line)
            size += len(line) + 1
        if size > max_chars:
            break

    result = "\n".join(kept)
    if len(result) > max_chars:
        result = result[:max_chars] + "\n[truncated]"
    return result
