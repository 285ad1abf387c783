"""Arrangement — the staged Auth → Validate → Serve execution unit.

Pipeline: AUTH → VALIDATE → SERVE → RESPOND

Each stage runs only if the previous one passed. The first failing stage
writes a stage-tagged error into the :class:`Response` and every later stage
is skipped. Absent stages pass. An arrangement holds no per-call state, so
one built arrangement can serve many concurrent calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from msgguard.domain.errors import ArrangementError
from msgguard.domain.stages import (
    STAGE_STATES,
    PipelineState,
    Stage,
    is_valid_transition,
)
from msgguard.services.validator import Validates

logger = logging.getLogger(__name__)

type Auther[T] = Callable[[Any, T], None]
type Server[T, U] = Callable[[Any, T], U]


class StatusCode(StrEnum):
    """Transport-neutral status for a finished run."""

    OK = "ok"
    UNAUTHENTICATED = "unauthenticated"
    INVALID_ARGUMENT = "invalid_argument"
    INTERNAL = "internal"


STAGE_STATUS: dict[Stage, StatusCode] = {
    Stage.AUTH: StatusCode.UNAUTHENTICATED,
    Stage.VALIDATE: StatusCode.INVALID_ARGUMENT,
    Stage.SERVE: StatusCode.INTERNAL,
}


@dataclass
class Response[U]:
    """Result envelope for one arrangement run.

    Carries either ``data`` (success) or ``error`` (one stage error),
    never both.
    """

    data: U | None = None
    error: ArrangementError | None = None
    state: PipelineState = PipelineState.NOT_STARTED
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None and self.state is PipelineState.COMPLETED

    @property
    def stage(self) -> Stage | None:
        """The stage that failed, if any."""
        if self.error is None:
            return None
        return self.error.stage

    @property
    def status(self) -> StatusCode:
        if self.error is None:
            return StatusCode.OK
        return STAGE_STATUS[self.error.stage]

    def raise_for_error(self) -> None:
        """Raise the stage error if the run failed."""
        if self.error is not None:
            raise self.error

    def _advance(self, target: PipelineState) -> None:
        if not is_valid_transition(self.state, target):
            msg = f"Invalid pipeline transition: {self.state} -> {target}"
            raise RuntimeError(msg)
        logger.debug("Pipeline transition: %s -> %s", self.state, target)
        self.state = target

    def _fail(self, error: ArrangementError) -> Response[U]:
        self._advance(PipelineState.FAILED)
        self.error = error
        self.data = None
        return self


class Arrangement[T, U]:
    """Builder and runner for an Auth → Validate → Serve pipeline.

    Usage::

        response = (
            arrange()
            .with_auth(require_caller)
            .with_validate(for_message(*mask).assert_non_zero("user.id", req.user.id))
            .with_serve(update_user)
            .exec(ctx, req)
        )
    """

    def __init__(
        self,
        auth: Auther[T] | None = None,
        validate: Validates[T] | None = None,
        serve: Server[T, U] | None = None,
    ) -> None:
        self.auth = auth
        self.validate = validate
        self.serve = serve

    def with_auth(self, fn: Auther[T]) -> Arrangement[T, U]:
        """Set the auth stage. ``fn(ctx, message)`` raises to reject the call."""
        self.auth = fn
        return self

    def with_validate(self, validator: Validates[T]) -> Arrangement[T, U]:
        """Set the validate stage, typically a :class:`MessageValidator`."""
        self.validate = validator
        return self

    def with_serve(self, fn: Server[T, U]) -> Arrangement[T, U]:
        """Set the serve stage. ``fn(ctx, message)`` returns the response payload."""
        self.serve = fn
        return self

    def exec(self, ctx: Any, message: T) -> Response[U]:
        """Run the stages in order, stopping at the first failure."""
        response: Response[U] = Response()
        message_type = type(message).__name__

        response._advance(STAGE_STATES[Stage.AUTH])
        if self.auth is not None:
            try:
                self.auth(ctx, message)
            except Exception as exc:
                logger.info("%s %s stage failed: %s", message_type, Stage.AUTH, exc)
                return response._fail(ArrangementError.from_auth(exc))

        response._advance(STAGE_STATES[Stage.VALIDATE])
        if self.validate is not None:
            errs = self.validate.execute(ctx, message)
            if errs is not None and errs.has_errors():
                logger.info(
                    "%s %s stage failed: paths=%s custom=%s",
                    message_type,
                    Stage.VALIDATE,
                    errs.paths(),
                    errs.custom_validation_error is not None,
                )
                return response._fail(ArrangementError.from_validation(errs))

        response._advance(STAGE_STATES[Stage.SERVE])
        data: U | None = None
        if self.serve is not None:
            try:
                data = self.serve(ctx, message)
            except Exception as exc:
                logger.info("%s %s stage failed: %s", message_type, Stage.SERVE, exc)
                return response._fail(ArrangementError.from_serve(exc))

        response._advance(PipelineState.COMPLETED)
        response.data = data
        logger.debug("%s arrangement completed", message_type)
        return response


def arrange[T, U]() -> Arrangement[T, U]:
    """Start building an arrangement."""
    return Arrangement()
