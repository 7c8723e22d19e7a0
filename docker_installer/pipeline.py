from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .context import InstallCtx
from .errors import InstallerError

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single step; raises to abort the run."""

    step_id: str

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    failed_step: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.failed_step is None


def run_pipeline(
    *,
    ctx: InstallCtx,
    state: Dict[str, Any],
    steps: Sequence[Step],
) -> PipelineResult:
    """Run steps in order; the first failure stops the run. Nothing is rolled back."""

    ran: List[str] = []
    exe = state.setdefault("execution", {})

    for step in steps:
        exe["current_step"] = step.step_id
        logger.info("Running step %s", step.step_id)
        try:
            state = step.run(ctx, state)
        except InstallerError as e:
            logger.error("Step %s failed: %s", step.step_id, e)
            return _failed(state, ran, step.step_id, e)
        except Exception as e:
            logger.exception("Step %s failed unexpectedly", step.step_id)
            return _failed(state, ran, step.step_id, e)
        ran.append(step.step_id)
        exe = state.setdefault("execution", {})
        exe["ran_steps"] = list(ran)

    exe["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran)


def _failed(state: Dict[str, Any], ran: List[str], step_id: str, error: Exception) -> PipelineResult:
    exe = state.setdefault("execution", {})
    exe["ran_steps"] = list(ran)
    exe["failed_step"] = step_id
    exe.setdefault("errors", []).append({"step": step_id, "error": str(error), "type": type(error).__name__})
    return PipelineResult(state=state, ran_steps=ran, failed_step=step_id, error=error)
