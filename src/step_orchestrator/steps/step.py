"""The step: one atom plus the guards deciding whether and how it ran.

`Step.may_run` folds the initializers into a single run decision. Every
initializer is evaluated exactly once per call, in order, even after an
earlier one already excluded the step. Exclusion is sticky: a later passing
initializer never re-allows the step.

Failing guards are fail-safe. An initializer that raises counts as a vote to
skip, and the failure goes to the diagnostic sink rather than to the caller.
`Step.finalizers_succeeded` applies the same protocol to the finalizers.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .atoms import Atom
from .diagnostics import DiagnosticSink, LoggingDiagnosticSink
from .errors import GuardEvaluationError
from .finalizers import FlowControl as FinalizerFlowControl
from .finalizers import fails, finalizer_of
from .initializers import FlowControl as InitializerFlowControl
from .initializers import excludes, initializer_of

logger = logging.getLogger(__name__)


def _checked(outcome: object, source: object) -> bool:
    if not isinstance(outcome, bool):
        raise GuardEvaluationError(
            f"{type(source).__name__} returned {type(outcome).__name__}, expected bool"
        )
    return outcome


@dataclass(frozen=True, slots=True)
class Step:
    atom: Atom
    initializers: Sequence[InitializerFlowControl] = ()
    finalizers: Sequence[FinalizerFlowControl] = ()
    diagnostics: DiagnosticSink = field(default_factory=LoggingDiagnosticSink, compare=False)

    def __post_init__(self) -> None:
        # Guard lists are fixed once the step exists.
        object.__setattr__(self, "initializers", tuple(self.initializers))
        object.__setattr__(self, "finalizers", tuple(self.finalizers))

    def __str__(self) -> str:
        return f"Step: {self.atom} (Not printing initializers and finalizers yet)"

    def may_run(self) -> bool:
        """Return True when no initializer votes to skip this step."""

        allowed = True
        for flow_control in self.initializers:
            if not self._initializer_allows(flow_control):
                allowed = False

        logger.debug("Initializers evaluated", extra={"step": str(self), "allowed": allowed})
        return allowed

    def finalizers_succeeded(self) -> bool:
        """Return True when every finalizer is satisfied with the atom."""

        succeeded = True
        for flow_control in self.finalizers:
            if not self._finalizer_passes(flow_control):
                succeeded = False

        logger.debug(
            "Finalizers evaluated", extra={"step": str(self), "succeeded": succeeded}
        )
        return succeeded

    def _initializer_allows(self, flow_control: InitializerFlowControl) -> bool:
        initializer = initializer_of(flow_control)
        try:
            outcome = _checked(initializer.initialize(), initializer)
        except Exception as e:
            self.diagnostics.report(
                stage="initializer", step=str(self), error=GuardEvaluationError.wrap(e)
            )
            return False
        return not excludes(flow_control, outcome)

    def _finalizer_passes(self, flow_control: FinalizerFlowControl) -> bool:
        finalizer = finalizer_of(flow_control)
        try:
            outcome = _checked(finalizer.finalize(self.atom), finalizer)
        except Exception as e:
            self.diagnostics.report(
                stage="finalizer", step=str(self), error=GuardEvaluationError.wrap(e)
            )
            return False
        return not fails(flow_control, outcome)
