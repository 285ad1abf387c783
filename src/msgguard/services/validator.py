"""MessageValidator — declarative field assertions for one message type.

Declarations are collected through a fluent builder and run by
:meth:`MessageValidator.execute`, which runs in this order:

1. The custom validation function, if set.
2. Every declared field, in declaration order.

A non-field error raised by the custom function is recorded and field
declarations still run, so one execution reports every problem. Each
execution allocates its own :class:`ValidationErrors` and
:class:`PresenceResolver`, so a built validator can be executed
concurrently.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Protocol

from msgguard.config.settings import GuardSettings, get_settings
from msgguard.domain.errors import (
    ConfigurationError,
    FieldError,
    FieldPolicyError,
    PresenceUnavailableError,
    ValidationErrors,
)
from msgguard.domain.field import UNSET, Field
from msgguard.domain.paths import paths_from_mask
from msgguard.domain.policy import Condition, Policy
from msgguard.services.presence import PresenceResolver

logger = logging.getLogger(__name__)

# fn(ctx, message, errs): add path-scoped faults to errs, raise for a message-scoped fault
type CustomValidator[T] = Callable[[Any, T, ValidationErrors], None]


class Validates[T](Protocol):
    """Anything an arrangement can use as its validate stage."""

    def execute(self, ctx: Any, message: T) -> ValidationErrors | None: ...


class MessageValidator[T]:
    """Fluent builder of field assertions against messages of type ``T``.

    Usage::

        errs = (
            for_message(*update_mask.paths)
            .assert_non_zero("user.id", req.user.id)
            .assert_non_zero_when_in_mask("user.last_name", req.user.last_name)
            .execute(ctx, req)
        )
    """

    def __init__(
        self,
        mask_paths: Iterable[str] | None = None,
        *,
        settings: GuardSettings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._mask = paths_from_mask(mask_paths)
        self._fields: list[Field] = []
        # one per validator; a second call replaces the first
        self._custom_validation: CustomValidator[T] | None = None

    @property
    def mask(self) -> frozenset[str] | None:
        return self._mask

    @property
    def fields(self) -> tuple[Field, ...]:
        return tuple(self._fields)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def assert_non_zero(self, path: str, value: Any = UNSET) -> MessageValidator[T]:
        """Assert that the field at *path* is not its zero value.

        When *value* is omitted, the field is read from the message and
        must also be set.
        """
        return self._declare(path, value, Policy.NON_ZERO, Condition.ALWAYS)

    def assert_not_equal_to(self, path: str, value: Any, target: Any) -> MessageValidator[T]:
        """Assert that the field at *path* does not equal *target*."""
        return self._declare(path, value, Policy.NOT_EQUAL_TO, Condition.ALWAYS, target)

    def assert_equal_to(self, path: str, value: Any, target: Any) -> MessageValidator[T]:
        """Assert that the field at *path* equals *target*."""
        return self._declare(path, value, Policy.MUST_EQUAL, Condition.ALWAYS, target)

    def assert_non_zero_when_in_mask(self, path: str, value: Any = UNSET) -> MessageValidator[T]:
        """Same as :meth:`assert_non_zero`, only when *path* is in the field mask."""
        return self._declare(path, value, Policy.NON_ZERO, Condition.IN_MASK)

    def assert_not_equal_to_when_in_mask(
        self, path: str, value: Any, target: Any
    ) -> MessageValidator[T]:
        """Same as :meth:`assert_not_equal_to`, only when *path* is in the field mask."""
        return self._declare(path, value, Policy.NOT_EQUAL_TO, Condition.IN_MASK, target)

    def assert_equal_to_when_in_mask(
        self, path: str, value: Any, target: Any
    ) -> MessageValidator[T]:
        """Same as :meth:`assert_equal_to`, only when *path* is in the field mask."""
        return self._declare(path, value, Policy.MUST_EQUAL, Condition.IN_MASK, target)

    def custom_validation(self, fn: CustomValidator[T]) -> MessageValidator[T]:
        """Set the custom validation function, replacing any previous one.

        To add field-level faults alongside the ``assert_*`` declarations,
        call ``errs.add_field_error(path, exc)`` and return normally. For a
        failure that belongs to no single path, raise.
        """
        self._custom_validation = fn
        return self

    def _declare(
        self,
        path: str,
        value: Any,
        policy: Policy,
        condition: Condition,
        target: Any = None,
    ) -> MessageValidator[T]:
        self._fields.append(
            Field.declare(
                path,
                value,
                policy,
                condition,
                target,
                self._mask,
                resource_relative=self._settings.mask.resource_relative,
            )
        )
        return self

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, ctx: Any, message: T) -> ValidationErrors | None:
        """Run the custom function and every declaration against *message*.

        Returns None when nothing failed; otherwise the aggregate of every
        field, configuration, and custom fault.
        """
        errs = ValidationErrors()
        if self._custom_validation is not None:
            self._run_custom(ctx, message, errs)

        resolver: PresenceResolver | None = None
        for field in self._fields:
            if not field.applies:
                continue
            resolved = None
            if field.presence_resolved:
                if resolver is None:
                    resolver = PresenceResolver(
                        message,
                        alternate_names=self._settings.presence.alternate_names,
                    )
                if resolver.schema is None and message is not None:
                    exc = PresenceUnavailableError(field.path, type(message))
                    self._record(errs, field, exc, value=None)
                    continue
                resolved = resolver.resolve(field.path)
            try:
                field.validate(resolved)
            except (FieldPolicyError, ConfigurationError) as exc:
                value = resolved.value if resolved is not None else field.value
                self._record(errs, field, exc, value=value)

        logger.debug(
            "Validated %s: %d declarations, %d field errors, custom error: %s",
            type(message).__name__,
            len(self._fields),
            len(errs.field_errors),
            errs.custom_validation_error is not None,
        )
        if errs.has_errors():
            return errs
        return None

    def _run_custom(self, ctx: Any, message: T, errs: ValidationErrors) -> None:
        assert self._custom_validation is not None
        try:
            self._custom_validation(ctx, message, errs)
        except ValidationErrors as exc:
            if exc is not errs:
                errs.set_custom_validation_error(exc)
        except Exception as exc:
            errs.set_custom_validation_error(exc)

    @staticmethod
    def _record(
        errs: ValidationErrors,
        field: Field,
        exc: Exception,
        *,
        value: Any,
    ) -> None:
        if isinstance(exc, ConfigurationError):
            logger.warning("Configuration fault on %s: %s", field.path, exc)
        errs.add(FieldError(field.path, field.policy, exc, value=value, expected=field.target))


def for_message[T](
    *mask_paths: str,
    settings: GuardSettings | None = None,
) -> MessageValidator[T]:
    """Start a validator, scoped by the paths of a field mask if one was sent."""
    return MessageValidator(mask_paths, settings=settings)
