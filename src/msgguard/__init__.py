"""msgguard — declarative validation and request staging for RPC messages."""

from msgguard.domain.errors import (
    ArrangementError,
    AuthError,
    ConfigurationError,
    CustomValidationError,
    FieldError,
    FieldMustEqualError,
    FieldMustNotBeZeroError,
    FieldMustNotEqualError,
    FieldPolicyError,
    FieldsNotComparableError,
    MsgGuardError,
    PresenceUnavailableError,
    ServeError,
    SettingsError,
    StageError,
    ValidationErrors,
)
from msgguard.domain.field import UNSET, Field, is_zero
from msgguard.domain.paths import normalize_path, paths_from_mask
from msgguard.domain.policy import Condition, FaultLevel, Policy
from msgguard.domain.stages import PipelineState, Stage
from msgguard.services.arrangement import Arrangement, Response, StatusCode, arrange
from msgguard.services.presence import PresenceResolver
from msgguard.services.validator import MessageValidator, for_message

__version__ = "0.1.0"

__all__ = [
    "UNSET",
    "Arrangement",
    "ArrangementError",
    "AuthError",
    "Condition",
    "ConfigurationError",
    "CustomValidationError",
    "FaultLevel",
    "Field",
    "FieldError",
    "FieldMustEqualError",
    "FieldMustNotBeZeroError",
    "FieldMustNotEqualError",
    "FieldPolicyError",
    "FieldsNotComparableError",
    "MessageValidator",
    "MsgGuardError",
    "PipelineState",
    "Policy",
    "PresenceResolver",
    "PresenceUnavailableError",
    "Response",
    "ServeError",
    "SettingsError",
    "Stage",
    "StageError",
    "StatusCode",
    "ValidationErrors",
    "arrange",
    "for_message",
    "is_zero",
    "normalize_path",
    "paths_from_mask",
]
