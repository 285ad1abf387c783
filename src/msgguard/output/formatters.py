"""Render validation errors and arrangement responses.

Text rendering is the deterministic ``str(ValidationErrors)``; JSON
rendering goes through the :mod:`msgguard.output.contracts` models.
"""

from __future__ import annotations

from typing import Any, Literal

from msgguard.config.settings import get_settings
from msgguard.domain.errors import FieldError, ValidationErrors
from msgguard.output.contracts import FieldIssue, ReportError, ResponseReport, ValidationReport
from msgguard.services.arrangement import Response


def _render_value(value: Any) -> str | None:
    if value is None:
        return None
    return repr(value)


def field_issue(field_error: FieldError) -> FieldIssue:
    return FieldIssue(
        path=field_error.path,
        policy=str(field_error.policy),
        level=field_error.level.value,
        message=str(field_error),
        causes=[str(c) for c in field_error.causes],
        value=_render_value(field_error.value),
        expected=_render_value(field_error.expected),
    )


def validation_report(errs: ValidationErrors) -> ValidationReport:
    """Build the report contract for *errs*, keeping declaration order."""
    custom = errs.custom_validation_error
    return ValidationReport(
        custom_error=str(custom) if custom is not None else None,
        count=len(errs.field_errors),
        issues=[field_issue(fe) for fe in errs.field_errors],
    )


def format_validation_errors(
    errs: ValidationErrors,
    fmt: Literal["text", "json"] | None = None,
) -> str:
    """Render *errs* as text or JSON (default from settings ``[output] format``)."""
    fmt = fmt or get_settings().output.format
    if fmt == "json":
        return validation_report(errs).model_dump_json(indent=2)
    return str(errs)


def to_report(response: Response[Any]) -> ResponseReport:
    """Build the transport-neutral report for an arrangement response."""
    if response.error is None:
        return ResponseReport(ok=response.ok, status=str(response.status), data=response.data)

    stage_error = response.error.error
    detail: dict[str, Any]
    if isinstance(stage_error, ValidationErrors):
        detail = validation_report(stage_error).model_dump(mode="python")
    else:
        detail = {"type": type(stage_error.__cause__).__name__}

    return ResponseReport(
        ok=False,
        status=str(response.status),
        stage=str(response.stage),
        error=ReportError(
            code=str(response.status),
            message=str(stage_error),
            detail=detail,
        ),
    )
