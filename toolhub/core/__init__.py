from __future__ import annotations

from toolhub.core.errors import (
    ConfigurationError,
    RegistryConflictError,
    ResourceNotFoundError,
    ToolHubError,
    UpstreamError,
)
from toolhub.core.schema import (
    ErrorKind,
    FieldError,
    FieldKind,
    FieldSpec,
    ValidationResult,
    build_model,
    describe_model,
    validate,
)

__all__ = [
    "ConfigurationError",
    "ErrorKind",
    "FieldError",
    "FieldKind",
    "FieldSpec",
    "RegistryConflictError",
    "ResourceNotFoundError",
    "ToolHubError",
    "UpstreamError",
    "ValidationResult",
    "build_model",
    "describe_model",
    "validate",
]
