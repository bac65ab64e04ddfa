"""Steps and the guards that gate them.

This package introduces first-class types for:
- Atoms (the action a step wraps, rendered only by label)
- Initializers (pre-execution guards) and their flow controls
- Finalizers (post-execution checks) and their flow controls
- The step itself, which folds its guards into a single decision

Guard failures are never raised to the caller; they are reported to an
injectable diagnostic sink and treated as a reason not to run.
"""

from step_orchestrator.steps.diagnostics import DiagnosticSink, LoggingDiagnosticSink
from step_orchestrator.steps.errors import GuardEvaluationError
from step_orchestrator.steps.step import Step

__all__ = ["DiagnosticSink", "GuardEvaluationError", "LoggingDiagnosticSink", "Step"]
