"""Exception hierarchy for configuration errors.

Every error carries a machine-readable error code and a structured context
dict so callers can log failures consistently. File-system failures are not
part of this hierarchy: ``OSError`` and its subclasses propagate unchanged
from property-file loading.

Example:
    >>> from hoodie.foundation.domain.exceptions import ConfigKeyNotFoundError
    >>> raise ConfigKeyNotFoundError("hoodie.memory.merge.fraction")
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "BuilderFinalizedError",
    "ConfigKeyNotFoundError",
    "DomainError",
    "InvalidStateTransitionError",
    "NotFoundError",
    "PropertiesFormatError",
    "ValidationError",
]


class DomainError(Exception):
    """Base class for all configuration errors.

    Attributes:
        error_code: Machine-readable error code.
        message: Human-readable error description.
        context: Structured debugging information (keys, paths, line numbers).

    Example:
        >>> raise DomainError("Operation failed", context={"key": "a.b"})
        DomainError: Operation failed (key=a.b)
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize error with message and optional context.

        Args:
            message: Human-readable error description.
            context: Structured debugging information. Keys should be snake_case.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """String representation including context for logging."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist.

    Attributes:
        error_code: "RESOURCE_NOT_FOUND" (class constant).
        resource_type: Type of missing resource.
        resource_id: Identifier of missing resource.
    """

    error_code: str = "RESOURCE_NOT_FOUND"

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        **extra_context: Any,
    ) -> None:
        """Initialize not found error.

        Args:
            resource_type: Type of resource (e.g., "ConfigKey").
            resource_id: Identifier of missing resource.
            **extra_context: Additional debugging context.
        """
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type} not found: {resource_id}"
        context = {
            "resource_type": resource_type,
            "resource_id": str(resource_id),
            **extra_context,
        }
        super().__init__(message, context)


class ConfigKeyNotFoundError(NotFoundError):
    """Raised when a key is neither set nor defaulted in a built configuration.

    Example:
        >>> raise ConfigKeyNotFoundError("hoodie.memory.merge.fraction")
        ConfigKeyNotFoundError: ConfigKey not found: hoodie.memory.merge.fraction
    """

    error_code: str = "CONFIG_KEY_NOT_FOUND"

    def __init__(self, key: str, **extra_context: Any) -> None:
        self.key = key
        super().__init__("ConfigKey", key, **extra_context)


class ValidationError(DomainError):
    """Raised when a stored value cannot be read as the requested type.

    Attributes:
        error_code: "VALIDATION_ERROR" (class constant).
        field: Configuration key that failed to parse.
        reason: Human-readable failure reason.

    Example:
        >>> raise ValidationError("hoodie.memory.merge.max.size", "not an integer: 'abc'")
        ValidationError: Validation failed for 'hoodie.memory.merge.max.size': ...
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        field: str,
        reason: str,
        **extra_context: Any,
    ) -> None:
        """Initialize validation error.

        Args:
            field: Configuration key that failed validation.
            reason: Human-readable validation failure reason.
            **extra_context: Additional debugging context.
        """
        self.field = field
        self.reason = reason
        message = f"Validation failed for '{field}': {reason}"
        context = {
            "field": field,
            "reason": reason,
            **extra_context,
        }
        super().__init__(message, context)


class InvalidStateTransitionError(DomainError):
    """Raised when an object is used outside its allowed lifecycle.

    Attributes:
        error_code: "INVALID_STATE_TRANSITION" (class constant).
    """

    error_code: str = "INVALID_STATE_TRANSITION"

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize invalid state transition error.

        Args:
            message: Description of the invalid transition attempt.
            **context: Additional debugging context (e.g., current_state).
        """
        super().__init__(message, context)


class BuilderFinalizedError(InvalidStateTransitionError):
    """Raised when a builder is mutated or built again after ``build()``.

    Example:
        >>> raise BuilderFinalizedError("with_write_status_failure_fraction")
        BuilderFinalizedError: Builder already finalized; cannot call ...
    """

    error_code: str = "BUILDER_FINALIZED"

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            f"Builder already finalized; cannot call {operation}()",
            operation=operation,
        )


class PropertiesFormatError(DomainError):
    """Raised when property-file content cannot be decoded.

    Attributes:
        error_code: "PROPERTIES_FORMAT_ERROR" (class constant).
        line_number: 1-based line where the malformed entry starts.
        source: File path, or ``None`` when parsing an in-memory string.
    """

    error_code: str = "PROPERTIES_FORMAT_ERROR"

    def __init__(
        self,
        reason: str,
        line_number: int,
        source: str | None = None,
    ) -> None:
        self.reason = reason
        self.line_number = line_number
        self.source = source
        context: dict[str, Any] = {"line_number": line_number}
        if source is not None:
            context["source"] = source
        super().__init__(f"Malformed properties: {reason}", context)
