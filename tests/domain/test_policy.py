"""Tests for policy, condition, and stage enums."""

import pytest

from msgguard.domain.policy import Condition, Policy
from msgguard.domain.stages import (
    PIPELINE_TRANSITIONS,
    STAGE_STATES,
    PipelineState,
    Stage,
    is_valid_transition,
)


class TestPolicy:
    def test_rendered_names(self) -> None:
        assert str(Policy.NON_ZERO) == "non-zero"
        assert str(Policy.MUST_EQUAL) == "must equal"
        assert str(Policy.NOT_EQUAL_TO) == "must not equal"
        assert str(Policy.CUSTOM) == "custom evaluation"


class TestCondition:
    def test_members(self) -> None:
        assert {c.value for c in Condition} == {"always", "in-mask"}


class TestPipelineTransitions:
    def test_happy_path(self) -> None:
        assert is_valid_transition("not_started", "authenticating")
        assert is_valid_transition("authenticating", "validating")
        assert is_valid_transition("validating", "serving")
        assert is_valid_transition("serving", "completed")

    @pytest.mark.parametrize("state", ["not_started", "authenticating", "validating", "serving"])
    def test_failed_reachable_from_non_terminal(self, state: str) -> None:
        assert is_valid_transition(state, "failed")

    @pytest.mark.parametrize("state", ["completed", "failed"])
    def test_terminal_states(self, state: str) -> None:
        assert PIPELINE_TRANSITIONS[state] == []
        assert not is_valid_transition(state, "failed")

    def test_no_skipping_stages(self) -> None:
        assert not is_valid_transition("authenticating", "serving")
        assert not is_valid_transition("not_started", "completed")

    def test_every_stage_has_a_state(self) -> None:
        assert set(STAGE_STATES) == set(Stage)
        assert STAGE_STATES[Stage.VALIDATE] is PipelineState.VALIDATING
