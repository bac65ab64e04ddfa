"""Where guard evaluation failures are reported.

The decision engine never raises on a failing guard; it reports the failure
here instead. The default sink writes to standard logging, tests can inject
their own.
"""

from __future__ import annotations

import logging
from typing import Literal, Protocol

from .errors import GuardEvaluationError

logger = logging.getLogger(__name__)

Stage = Literal["initializer", "finalizer"]


class DiagnosticSink(Protocol):
    def report(self, *, stage: Stage, step: str, error: GuardEvaluationError) -> None: ...


class LoggingDiagnosticSink:
    """Log each failure at ERROR with the step label and stage as extra fields."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def report(self, *, stage: Stage, step: str, error: GuardEvaluationError) -> None:
        self._log.error(
            "Failed to run %s: %s",
            stage,
            error,
            extra={"step": step, "stage": stage},
        )
