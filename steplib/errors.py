"""Error taxonomy for step extraction runs."""

from __future__ import annotations


class StepLibError(Exception):
    """Base class for errors raised by steplib."""


class NotFoundError(StepLibError, FileNotFoundError):
    """Raised when a source path does not exist."""


class NotAFileError(StepLibError, OSError):
    """Raised when a path expected to be a regular file is something else."""


class WriteError(StepLibError, OSError):
    """Raised when the generated step library cannot be persisted."""


__all__ = ["NotAFileError", "NotFoundError", "StepLibError", "WriteError"]
