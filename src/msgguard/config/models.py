"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, msgguard.toml only contains
overrides. A host service needs no config file at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class MaskConfig(BaseModel):
    """[mask] section."""

    model_config = {"frozen": True}

    # also match declared paths with their first segment removed
    resource_relative: bool = True


class PresenceConfig(BaseModel):
    """[presence] section."""

    model_config = {"frozen": True}

    alternate_names: bool = True


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    format: Literal["text", "json"] = "text"
