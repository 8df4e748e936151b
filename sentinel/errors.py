"""Error taxonomy shared by the core, pipeline and API layers."""


class SentinelError(Exception):
    """Base class for all Job Sentinel errors."""


class ExternalServiceError(SentinelError):
    """Any failure of the classification pipeline (network, auth, bad output)."""


class PersistenceError(SentinelError):
    """Snapshot could not be saved or restored."""


class ValidationError(SentinelError):
    """A command was issued in a state that does not allow it."""


class NotFoundError(SentinelError):
    """Referenced entity does not exist."""
