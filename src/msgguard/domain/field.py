"""Declared field assertions and their evaluation.

A :class:`Field` captures everything needed to judge one assertion at
declaration time: the value, whether it is zero, and whether its path is in
the active mask. Evaluation is a pure read of those attributes.

Zero-ness uses a closed set of per-kind checks: ``None``, ``False``,
numeric zero, empty string/bytes, and empty containers. Any other object
(a nested message, a model instance) is non-zero.
"""

from __future__ import annotations

from collections.abc import Sized
from dataclasses import dataclass
from numbers import Number
from typing import Any, Final, NamedTuple

from msgguard.domain.errors import (
    FieldMustEqualError,
    FieldMustNotBeZeroError,
    FieldMustNotEqualError,
    FieldsNotComparableError,
)
from msgguard.domain.paths import is_path_in_mask, normalize_path
from msgguard.domain.policy import Condition, Policy


class _Unset:
    """Sentinel for declarations that read their value through presence resolution."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


class Resolved(NamedTuple):
    """A value read from a message along with whether the field is set."""

    value: Any
    is_set: bool


def is_zero(value: Any) -> bool:
    """Return True if *value* is its kind's zero value."""
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, Number):
        return value == 0
    if isinstance(value, (str, bytes, bytearray)):
        return len(value) == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


@dataclass(frozen=True, slots=True)
class Field:
    """One declared assertion against a message field.

    Build with :meth:`declare` so ``normalized_path``, ``in_mask`` and
    ``zero`` are computed once against the active mask.
    """

    path: str
    policy: Policy
    condition: Condition = Condition.ALWAYS
    value: Any = UNSET
    target: Any = None
    normalized_path: str = ""
    in_mask: bool = False
    zero: bool | None = None

    @classmethod
    def declare(
        cls,
        path: str,
        value: Any,
        policy: Policy,
        condition: Condition,
        target: Any = None,
        mask: frozenset[str] | None = None,
        *,
        resource_relative: bool = True,
    ) -> Field:
        normalized = normalize_path(path)
        return cls(
            path=path,
            policy=policy,
            condition=condition,
            value=value,
            target=target,
            normalized_path=normalized,
            in_mask=is_path_in_mask(normalized, mask, resource_relative=resource_relative),
            zero=None if value is UNSET else is_zero(value),
        )

    @property
    def presence_resolved(self) -> bool:
        """True when the value must be read from the message at execution time."""
        return self.value is UNSET

    @property
    def applies(self) -> bool:
        return self.condition is Condition.ALWAYS or self.in_mask

    def validate(self, resolved: Resolved | None = None) -> None:
        """Evaluate the policy, raising on failure.

        Raises:
            FieldPolicyError: The field's value breaks the policy.
            FieldsNotComparableError: An equality policy compares different types.
            ValueError: A presence-resolved field was evaluated without *resolved*.
        """
        if not self.applies:
            return

        value = self.value
        zero = bool(self.zero)
        if self.presence_resolved:
            if resolved is None:
                msg = f"field {self.path!r} reads its value from the message; pass a resolved value"
                raise ValueError(msg)
            value = resolved.value
            zero = not resolved.is_set or is_zero(value)

        if self.policy is Policy.NON_ZERO:
            if zero:
                raise FieldMustNotBeZeroError(self.path, value)
            return

        if self.policy is Policy.CUSTOM:
            return

        if resolved is not None and self.presence_resolved and not resolved.is_set:
            # an unset default still has a type to compare; an unreachable field has none
            if value is not None:
                self._check_comparable(value)
            # an unset field never equals a target
            if self.policy is Policy.MUST_EQUAL:
                raise FieldMustEqualError(self.path, value, self.target)
            return

        self._check_comparable(value)
        equal = value == self.target
        if self.policy is Policy.NOT_EQUAL_TO and equal:
            raise FieldMustNotEqualError(self.path, value, self.target)
        if self.policy is Policy.MUST_EQUAL and not equal:
            raise FieldMustEqualError(self.path, value, self.target)

    def _check_comparable(self, value: Any) -> None:
        if type(value) is not type(self.target):
            raise FieldsNotComparableError(self.path, type(value), type(self.target))
