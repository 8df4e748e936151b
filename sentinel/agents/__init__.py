"""
Agents for Job Sentinel.

- profiler: Synthesizes a profile from resume text
- scout: Finds recent postings at one company
- critic: Accepts or rejects each posting
- pipeline: Wires the three into the classification pipeline
"""

from sentinel.agents.pipeline import ClassificationPipeline, LLMPipeline, create_pipeline

__all__ = ["ClassificationPipeline", "LLMPipeline", "create_pipeline"]
