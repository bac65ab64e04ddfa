"""Errors raised while evaluating step guards."""

from __future__ import annotations


class GuardEvaluationError(Exception):
    """Raised when a guard cannot determine whether its condition holds.

    The decision engine never lets this escape to its callers: it is reported
    to the diagnostic sink and counted as a vote against running the step.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return self.message

    @classmethod
    def wrap(cls, exc: Exception) -> GuardEvaluationError:
        """Return `exc` as a GuardEvaluationError, keeping the original as the cause."""

        if isinstance(exc, cls):
            return exc
        return cls(str(exc) or exc.__class__.__name__, cause=exc)
