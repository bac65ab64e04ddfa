"""Step Orchestrator.

Decides whether each step of an automation plan may run:
- initializer guards folded into a fail-safe run decision
- finalizer checks folded into a success decision
- JSON plan loading, `.env` settings and structured logging for the CLI
"""

__version__ = "0.1.0"

from step_orchestrator.orchestrator.config import OrchestratorSettings
from step_orchestrator.steps import Step

__all__ = ["__version__", "OrchestratorSettings", "Step"]
