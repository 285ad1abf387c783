"""Typed report contracts for transport and logging boundaries.

Values from the message are rendered with ``repr`` so reports stay
serializable whatever the message technology.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class FieldIssue(BaseModel):
    """One path's faults."""

    model_config = {"frozen": True}

    path: str
    policy: str
    level: Literal["field", "custom", "config"]
    message: str
    causes: list[str] = Field(default_factory=list)
    value: str | None = None
    expected: str | None = None


class ValidationReport(BaseModel):
    """Payload contract for a failed validator execution."""

    model_config = {"frozen": True}

    custom_error: str | None = None
    count: int
    issues: list[FieldIssue] = Field(default_factory=list)


class ReportError(BaseModel):
    """Structured error payload within a :class:`ResponseReport`."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ResponseReport(BaseModel):
    """Transport-neutral rendering of an arrangement response.

    Attributes:
        ok: Whether every stage passed.
        status: Status code a transport maps to its own codes.
        stage: Failed stage, if any.
        data: Serve payload on success.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    status: str
    stage: str | None = None
    data: Any = None
    error: ReportError | None = None
