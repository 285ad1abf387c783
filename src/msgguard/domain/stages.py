"""Arrangement stages and the pipeline state machine.

NotStarted -> Authenticating -> Validating -> Serving -> Completed, with
Failed reachable from every non-terminal state. Stages always run in this
order; an absent stage function passes straight through its state.
"""

from __future__ import annotations

from enum import StrEnum


class Stage(StrEnum):
    """Named phases of an arrangement."""

    AUTH = "auth"
    VALIDATE = "validate"
    SERVE = "serve"


class PipelineState(StrEnum):
    """Execution state of one arrangement run."""

    NOT_STARTED = "not_started"
    AUTHENTICATING = "authenticating"
    VALIDATING = "validating"
    SERVING = "serving"
    COMPLETED = "completed"
    FAILED = "failed"


PIPELINE_TRANSITIONS: dict[str, list[str]] = {
    "not_started": ["authenticating", "failed"],
    "authenticating": ["validating", "failed"],
    "validating": ["serving", "failed"],
    "serving": ["completed", "failed"],
    "completed": [],
    "failed": [],
}

STAGE_STATES: dict[Stage, PipelineState] = {
    Stage.AUTH: PipelineState.AUTHENTICATING,
    Stage.VALIDATE: PipelineState.VALIDATING,
    Stage.SERVE: PipelineState.SERVING,
}

def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]] = PIPELINE_TRANSITIONS,
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed
