"""Error taxonomy — configuration, field, custom, and stage faults.

Configuration and field faults are collected into :class:`ValidationErrors`
so a caller sees every field problem in one pass. Stage faults wrap the
caller's own exception and always end an arrangement run.

INVARIANT: A :class:`ValidationErrors` holds at most one entry per path.
A second fault on the same path joins the existing entry's causes.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from msgguard.domain.policy import FaultLevel, Policy
from msgguard.domain.stages import Stage

CAUSE_SEPARATOR = "; "


class MsgGuardError(Exception):
    """Base class for every error raised or returned by msgguard."""


class SettingsError(MsgGuardError):
    """Settings could not be loaded (for example, malformed TOML)."""


# --- Configuration faults ---


class ConfigurationError(MsgGuardError):
    """A declared assertion cannot be evaluated as written."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"field: {path}, {message}")


class FieldsNotComparableError(ConfigurationError):
    """An equality policy was declared between values of different types."""

    def __init__(self, path: str, value_type: type, target_type: type) -> None:
        self.value_type = value_type
        self.target_type = target_type
        super().__init__(
            path,
            f"value: {value_type.__name__}, compareTo: {target_type.__name__}: "
            "equality check failed, types not comparable",
        )


class PresenceUnavailableError(ConfigurationError):
    """A value-less declaration was made against a message with no schema adapter."""

    def __init__(self, path: str, message_type: type) -> None:
        self.message_type = message_type
        super().__init__(
            path,
            f"message: {message_type.__name__}: presence cannot be resolved for message type",
        )


# --- Field faults ---


class FieldPolicyError(MsgGuardError):
    """A declared policy failed against the field's value."""

    reason = "field policy failed"

    def __init__(self, path: str, value: Any, expected: Any = None) -> None:
        self.path = path
        self.value = value
        self.expected = expected
        super().__init__(self._render())

    def _render(self) -> str:
        return f"field: {self.path}, value: {self.value!r}: {self.reason}"


class FieldMustNotBeZeroError(FieldPolicyError):
    reason = "field set to zero value"


class FieldMustNotEqualError(FieldPolicyError):
    reason = "field set to forbidden value"


class FieldMustEqualError(FieldPolicyError):
    reason = "expected values to be equal"

    def _render(self) -> str:
        return (
            f"field: {self.path}, value: {self.value!r}, "
            f"compareTo: {self.expected!r}: {self.reason}"
        )


class CustomValidationError(MsgGuardError):
    """A message-scoped failure raised by a custom validation function."""

    def __init__(self, err: Exception) -> None:
        self.err = err
        super().__init__(f"an error occurred during custom message validation: {err}")
        self.__cause__ = err


class FieldError(MsgGuardError):
    """All faults recorded against one path.

    Attributes:
        path: Declared path; the identity of the entry.
        policy: Policy of the first fault recorded on the path.
        value: Offending value, if known.
        expected: Comparison target, if any.
        causes: Every underlying error, in the order recorded.
    """

    def __init__(
        self,
        path: str,
        policy: Policy,
        err: Exception,
        *,
        value: Any = None,
        expected: Any = None,
    ) -> None:
        self.path = path
        self.policy = policy
        self.value = value
        self.expected = expected
        self.causes: list[Exception] = [err]
        super().__init__(path)

    def add_cause(self, err: Exception) -> None:
        self.causes.append(err)

    @property
    def err(self) -> Exception:
        """The first recorded cause."""
        return self.causes[0]

    @property
    def level(self) -> FaultLevel:
        if any(isinstance(c, ConfigurationError) for c in self.causes):
            return FaultLevel.CONFIG
        if self.policy is Policy.CUSTOM:
            return FaultLevel.CUSTOM
        return FaultLevel.FIELD

    def cause_message(self) -> str:
        return CAUSE_SEPARATOR.join(str(c) for c in self.causes)

    def __str__(self) -> str:
        return f"{self.path} failed {self.policy} policy: {self.cause_message()}"

    def __repr__(self) -> str:
        return f"FieldError(path={self.path!r}, policy={self.policy.value!r}, causes={len(self.causes)})"


class ValidationErrors(MsgGuardError):
    """Aggregate of every fault from one validator execution.

    Field errors keep declaration order. A custom validation error is kept
    apart from field errors because it cannot be attributed to one path.
    Created empty per execution and never reused across executions.
    """

    def __init__(self) -> None:
        super().__init__()
        self.field_errors: list[FieldError] = []
        self.custom_validation_error: CustomValidationError | None = None
        self._index: dict[str, int] = {}

    def add_field_error(
        self,
        path: str,
        err: Exception,
        *,
        value: Any = None,
        expected: Any = None,
    ) -> None:
        """Record a fault from a custom validation function against *path*."""
        self.add(FieldError(path, Policy.CUSTOM, err, value=value, expected=expected))

    def add(self, field_error: FieldError) -> None:
        """Append *field_error*, or join its causes into an existing entry for the path."""
        idx = self._index.get(field_error.path)
        if idx is None:
            self.field_errors.append(field_error)
            self._index[field_error.path] = len(self.field_errors) - 1
            return
        existing = self.field_errors[idx]
        for cause in field_error.causes:
            existing.add_cause(cause)

    def set_custom_validation_error(self, err: Exception) -> None:
        self.custom_validation_error = CustomValidationError(err)

    def paths(self) -> list[str]:
        return [fe.path for fe in self.field_errors]

    def has_errors(self) -> bool:
        return bool(self.field_errors) or self.custom_validation_error is not None

    def as_map(self) -> dict[str, FieldError]:
        return {fe.path: fe for fe in self.field_errors}

    def config_errors(self) -> list[FieldError]:
        """Field entries carrying at least one configuration fault."""
        return [fe for fe in self.field_errors if fe.level is FaultLevel.CONFIG]

    def __iter__(self) -> Iterator[FieldError]:
        return iter(self.field_errors)

    def __len__(self) -> int:
        return len(self.field_errors)

    def __bool__(self) -> bool:
        return self.has_errors()

    def __str__(self) -> str:
        lines: list[str] = []
        if self.custom_validation_error is not None:
            lines.append(str(self.custom_validation_error))
        lines.extend(str(fe) for fe in self.field_errors)
        return "".join(f"{line}\n" for line in lines)

    def __repr__(self) -> str:
        return (
            f"ValidationErrors(paths={self.paths()!r}, "
            f"custom={self.custom_validation_error is not None})"
        )


# --- Stage faults ---


class StageError(MsgGuardError):
    """Caller error raised inside a stage function, tagged with its stage."""

    stage: Stage

    def __init__(self, err: Exception) -> None:
        self.err = err
        super().__init__(str(err))
        self.__cause__ = err


class AuthError(StageError):
    stage = Stage.AUTH


class ServeError(StageError):
    stage = Stage.SERVE


class ArrangementError(MsgGuardError):
    """Error envelope for an arrangement run.

    Exactly one of ``auth_error``, ``validation_errors`` and ``serve_error``
    is populated.
    """

    def __init__(
        self,
        *,
        auth_error: AuthError | None = None,
        validation_errors: ValidationErrors | None = None,
        serve_error: ServeError | None = None,
    ) -> None:
        populated = [e for e in (auth_error, validation_errors, serve_error) if e is not None]
        if len(populated) != 1:
            msg = f"ArrangementError requires exactly one stage error, got {len(populated)}"
            raise ValueError(msg)
        self.auth_error = auth_error
        self.validation_errors = validation_errors
        self.serve_error = serve_error
        super().__init__(str(populated[0]))
        self.__cause__ = populated[0]

    @classmethod
    def from_auth(cls, err: Exception) -> ArrangementError:
        return cls(auth_error=AuthError(err))

    @classmethod
    def from_validation(cls, errs: ValidationErrors) -> ArrangementError:
        return cls(validation_errors=errs)

    @classmethod
    def from_serve(cls, err: Exception) -> ArrangementError:
        return cls(serve_error=ServeError(err))

    @property
    def stage(self) -> Stage:
        if self.auth_error is not None:
            return Stage.AUTH
        if self.validation_errors is not None:
            return Stage.VALIDATE
        return Stage.SERVE

    @property
    def error(self) -> MsgGuardError:
        """The populated stage error."""
        if self.auth_error is not None:
            return self.auth_error
        if self.validation_errors is not None:
            return self.validation_errors
        assert self.serve_error is not None
        return self.serve_error

    def __str__(self) -> str:
        return str(self.error)
