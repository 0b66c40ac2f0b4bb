"""Exceptions raised by the modelling pipeline."""
from __future__ import annotations


class SarimaEngineError(Exception):
    """Base class for all pipeline errors."""


class InsufficientDataError(SarimaEngineError, ValueError):
    """Raised when a stage receives an empty or too-short series."""


class NoCandidateError(SarimaEngineError, RuntimeError):
    """Raised when every candidate of the grid search failed to estimate."""


class FatalFitFailure(SarimaEngineError, RuntimeError):
    """Raised when the refit used for forecasting fails."""


class PipelineError(SarimaEngineError):
    """Wrap a stage failure with the name of the stage that raised it."""

    def __init__(self, stage: str, cause: BaseException) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage} failed: {cause}")


__all__ = [
    "SarimaEngineError",
    "InsufficientDataError",
    "NoCandidateError",
    "FatalFitFailure",
    "PipelineError",
]
