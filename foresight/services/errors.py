"""Failure taxonomy for the structured-generation pipeline."""
from __future__ import annotations

from typing import Optional


class PipelineError(RuntimeError):
    """Base class for failures raised by catalog operations."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationFailure(PipelineError, ValueError):
    """Caller input is missing or malformed. Raised before any model call."""


class UpstreamFailure(PipelineError):
    """The generative provider was unreachable, errored, or returned nothing."""


class MalformedOutputFailure(PipelineError):
    """The provider answered but its text could not be turned into the expected shape."""


__all__ = [
    "MalformedOutputFailure",
    "PipelineError",
    "UpstreamFailure",
    "ValidationFailure",
]
