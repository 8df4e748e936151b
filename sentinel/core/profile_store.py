"""
Profile Store.

Holds the resume source text and the profile synthesized from it.
A profile is only ever valid for the exact text that produced it.
"""

from typing import TYPE_CHECKING

from sentinel.core.models import Profile
from sentinel.errors import ValidationError

if TYPE_CHECKING:
    from sentinel.agents.pipeline import ClassificationPipeline


class ProfileStore:
    """Source text plus at most one locked profile."""

    def __init__(self, source_text: str = "", profile: Profile | None = None):
        self._source_text = source_text
        self._profile = profile if profile and profile.source_text == source_text else None
        self._locking = False

    @property
    def source_text(self) -> str:
        return self._source_text

    @property
    def profile(self) -> Profile | None:
        return self._profile

    @property
    def is_locking(self) -> bool:
        return self._locking

    def replace_source_text(self, text: str) -> bool:
        """
        Replace the resume text.

        Returns:
            True if a locked profile was invalidated by the change
        """
        if text == self._source_text:
            return False
        self._source_text = text
        had_profile = self._profile is not None
        self.invalidate()
        return had_profile

    def invalidate(self) -> None:
        self._profile = None

    async def lock(self, pipeline: "ClassificationPipeline") -> Profile:
        """
        Synthesize and store a profile for the current source text.

        Raises:
            ValidationError: Text is blank, a lock is already running, or the
                text changed while the pipeline was working
            ExternalServiceError: The profiler call failed (prior profile kept)
        """
        text = self._source_text
        if not text.strip():
            raise ValidationError("Resume text is empty")
        if self._locking:
            raise ValidationError("Profile lock already in progress")

        self._locking = True
        try:
            profile = await pipeline.synthesize_profile(text)
        finally:
            self._locking = False

        if self._source_text != text:
            raise ValidationError("Resume text changed during profiling; result discarded")

        self._profile = profile.model_copy(update={"source_text": text})
        return self._profile
