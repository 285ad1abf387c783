"""Tests for zero detection and field policy evaluation."""

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from msgguard.domain.errors import (
    FieldMustEqualError,
    FieldMustNotBeZeroError,
    FieldMustNotEqualError,
    FieldsNotComparableError,
)
from msgguard.domain.field import UNSET, Field, Resolved, is_zero
from msgguard.domain.paths import paths_from_mask
from msgguard.domain.policy import Condition, Policy
from tests.messages import Address


class TestIsZero:
    @pytest.mark.parametrize("value", [None, False, 0, 0.0, Decimal(0), "", b"", [], {}, set(), ()])
    def test_zero_values(self, value: object) -> None:
        assert is_zero(value)

    @pytest.mark.parametrize("value", [True, 1, -1, 0.5, "a", b"a", [0], {"a": 1}, (None,)])
    def test_non_zero_values(self, value: object) -> None:
        assert not is_zero(value)

    def test_message_instances_are_non_zero(self) -> None:
        assert not is_zero(Address())


def _declare(
    path: str,
    value: object,
    policy: Policy,
    condition: Condition = Condition.ALWAYS,
    target: object = None,
    mask: list[str] | None = None,
) -> Field:
    return Field.declare(path, value, policy, condition, target, paths_from_mask(mask))


class TestFieldDeclare:
    def test_computes_attributes_once(self) -> None:
        field = _declare("user.first_name", "", Policy.NON_ZERO, mask=["user.first_name"])
        assert field.normalized_path == "user.firstName"
        assert field.in_mask
        assert field.zero is True

    def test_presence_resolved_has_undetermined_zero(self) -> None:
        field = _declare("user.id", UNSET, Policy.NON_ZERO)
        assert field.presence_resolved
        assert field.zero is None

    def test_immutable(self) -> None:
        field = _declare("user.id", "abc", Policy.NON_ZERO)
        with pytest.raises(FrozenInstanceError):
            field.value = "other"  # type: ignore[misc]


class TestFieldValidate:
    def test_non_zero_fails_on_zero(self) -> None:
        field = _declare("user.first_name", "", Policy.NON_ZERO)
        with pytest.raises(FieldMustNotBeZeroError) as exc_info:
            field.validate()
        assert exc_info.value.path == "user.first_name"
        assert str(exc_info.value) == "field: user.first_name, value: '': field set to zero value"

    def test_non_zero_passes(self) -> None:
        _declare("user.first_name", "bob", Policy.NON_ZERO).validate()

    def test_in_mask_condition_skipped_when_not_in_mask(self) -> None:
        field = _declare("user.last_name", "", Policy.NON_ZERO, Condition.IN_MASK, mask=["first_name"])
        assert not field.applies
        field.validate()

    def test_in_mask_condition_skipped_without_mask(self) -> None:
        _declare("user.last_name", "", Policy.NON_ZERO, Condition.IN_MASK).validate()

    def test_in_mask_condition_applies_when_in_mask(self) -> None:
        field = _declare("user.last_name", "", Policy.NON_ZERO, Condition.IN_MASK, mask=["last_name"])
        with pytest.raises(FieldMustNotBeZeroError):
            field.validate()

    def test_not_equal_fails_when_equal(self) -> None:
        field = _declare("user.first_name", "bob", Policy.NOT_EQUAL_TO, target="bob")
        with pytest.raises(FieldMustNotEqualError):
            field.validate()

    def test_not_equal_passes_when_different(self) -> None:
        _declare("user.first_name", "Bob", Policy.NOT_EQUAL_TO, target="bob").validate()

    def test_must_equal_fails_when_different(self) -> None:
        field = _declare("user.first_name", "Bob", Policy.MUST_EQUAL, target="bob")
        with pytest.raises(FieldMustEqualError) as exc_info:
            field.validate()
        assert exc_info.value.expected == "bob"
        assert exc_info.value.value == "Bob"

    def test_equality_is_structural(self) -> None:
        field = _declare(
            "user.primary_address", Address(line1="a"), Policy.MUST_EQUAL, target=Address(line1="a")
        )
        field.validate()

    @pytest.mark.parametrize("policy", [Policy.NOT_EQUAL_TO, Policy.MUST_EQUAL])
    def test_incomparable_types_are_configuration_faults(self, policy: Policy) -> None:
        field = _declare("user.first_name", "1", policy, target=1)
        with pytest.raises(FieldsNotComparableError) as exc_info:
            field.validate()
        assert exc_info.value.value_type is str
        assert exc_info.value.target_type is int

    def test_bool_and_int_are_not_comparable(self) -> None:
        field = _declare("user.active", True, Policy.MUST_EQUAL, target=1)
        with pytest.raises(FieldsNotComparableError):
            field.validate()

    def test_presence_resolved_requires_resolution(self) -> None:
        field = _declare("user.id", UNSET, Policy.NON_ZERO)
        with pytest.raises(ValueError):
            field.validate()

    def test_presence_resolved_unset_fails_non_zero(self) -> None:
        field = _declare("user.id", UNSET, Policy.NON_ZERO)
        with pytest.raises(FieldMustNotBeZeroError):
            field.validate(Resolved(value="", is_set=False))

    def test_presence_resolved_set_zero_fails_non_zero(self) -> None:
        field = _declare("user.id", UNSET, Policy.NON_ZERO)
        with pytest.raises(FieldMustNotBeZeroError):
            field.validate(Resolved(value="", is_set=True))

    def test_presence_resolved_set_value_passes(self) -> None:
        _declare("user.id", UNSET, Policy.NON_ZERO).validate(Resolved(value="abc", is_set=True))

    def test_presence_resolved_unset_never_equals(self) -> None:
        must = _declare("user.id", UNSET, Policy.MUST_EQUAL, target="abc")
        with pytest.raises(FieldMustEqualError):
            must.validate(Resolved(value=None, is_set=False))
        _declare("user.id", UNSET, Policy.NOT_EQUAL_TO, target="abc").validate(
            Resolved(value=None, is_set=False)
        )

    def test_presence_resolved_unset_default_checks_type(self) -> None:
        for policy in (Policy.NOT_EQUAL_TO, Policy.MUST_EQUAL):
            field = _declare("user.first_name", UNSET, policy, target=5)
            with pytest.raises(FieldsNotComparableError):
                field.validate(Resolved(value="", is_set=False))

    def test_presence_resolved_compares_resolved_value(self) -> None:
        field = _declare("user.id", UNSET, Policy.NOT_EQUAL_TO, target="abc")
        with pytest.raises(FieldMustNotEqualError):
            field.validate(Resolved(value="abc", is_set=True))
