"""Error taxonomy for the screening pipeline."""


class ScreenerError(Exception):
    """Base class for all screening errors."""


class InputError(ScreenerError):
    """The batch itself is invalid (empty job description or no files)."""


class FileSkipped(ScreenerError):
    """A single file could not be processed. Never aborts the batch."""


class InvalidResumeFile(FileSkipped):
    """Upload failed validation (missing, not a PDF, too large)."""


class ExternalServiceFailure(ScreenerError):
    """The language model or another remote service failed or was unreachable."""


class PersistenceError(ScreenerError):
    """The candidate store is unavailable."""
