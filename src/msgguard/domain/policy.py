"""Policy and condition enums.

A policy is the kind of check applied to a field; a condition is when the
policy applies.
"""

from __future__ import annotations

from enum import StrEnum


class Policy(StrEnum):
    """Checks a declared field can be held to."""

    NON_ZERO = "non-zero"
    NOT_EQUAL_TO = "must not equal"
    MUST_EQUAL = "must equal"
    CUSTOM = "custom evaluation"


class Condition(StrEnum):
    """When a policy is evaluated."""

    ALWAYS = "always"
    IN_MASK = "in-mask"


class FaultLevel(StrEnum):
    """Classification of a recorded fault for reporting."""

    FIELD = "field"
    CUSTOM = "custom"
    CONFIG = "config"
