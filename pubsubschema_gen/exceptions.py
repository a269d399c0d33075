"""
Exception hierarchy for pubsubschema-gen.

Every failure a generation run can hit is raised as a subclass of
PubSubSchemaGenError so the command line can report it uniformly. All of them
are terminal for the run; none are retried.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class PubSubSchemaGenError(Exception):
    """
    Base exception class for all pubsubschema-gen errors.

    Carries structured context alongside the human-readable message so log
    records can include it, while the command line only prints the message.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
        recovery_suggestion: Optional[str] = None,
    ) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with error context
            cause: Optional underlying exception that caused this error
            recovery_suggestion: Optional suggestion for error recovery
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause
        self.recovery_suggestion = recovery_suggestion

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        result = self.message
        if self.error_code:
            result = f"[{self.error_code}] {result}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            result += f" (context: {context_str})"
        if self.cause:
            result += f" (caused by: {self.cause})"
        if self.recovery_suggestion:
            result += f" (suggestion: {self.recovery_suggestion})"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
            "recovery_suggestion": self.recovery_suggestion,
        }


class ConfigurationError(PubSubSchemaGenError):
    """Raised when a required setting is missing or configuration is invalid."""

    def __init__(
        self, message: str, setting: Optional[str] = None, **kwargs: Any
    ) -> None:
        context = kwargs.get("context", {})
        if setting:
            context["setting"] = setting
        kwargs["context"] = context
        kwargs.setdefault("error_code", "CONFIGURATION_ERROR")
        super().__init__(message, **kwargs)


class PatternError(PubSubSchemaGenError):
    """Raised when the input glob pattern is malformed."""

    def __init__(self, message: str, pattern: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.get("context", {})
        if pattern is not None:
            context["pattern"] = pattern
        kwargs["context"] = context
        kwargs.setdefault("error_code", "BAD_PATTERN")
        super().__init__(message, **kwargs)


class EmptyInputError(PubSubSchemaGenError):
    """Raised when no input files matched."""

    def __init__(self, message: str = "no pubsub proto files found", **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "NO_INPUTS")
        kwargs.setdefault(
            "recovery_suggestion",
            "Check --pubsub-dir and --glob, and that the proto compiler ran first",
        )
        super().__init__(message, **kwargs)


class GeneratorIOError(PubSubSchemaGenError):
    """Raised when reading, writing, creating or removing a file fails."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        operation: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if path is not None:
            context["path"] = str(path)
        if operation:
            context["operation"] = operation
        kwargs["context"] = context
        kwargs.setdefault("error_code", "IO_ERROR")
        super().__init__(message, **kwargs)


class DuplicateNameError(PubSubSchemaGenError):
    """Raised when two inputs derive the same schema name and collisions are fatal."""

    def __init__(
        self,
        message: str,
        schema_name: Optional[str] = None,
        inputs: Optional[List[Union[str, Path]]] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if schema_name:
            context["schema_name"] = schema_name
        if inputs:
            context["inputs"] = [str(p) for p in inputs]
        kwargs["context"] = context
        kwargs.setdefault("error_code", "DUPLICATE_SCHEMA_NAME")
        kwargs.setdefault(
            "recovery_suggestion",
            "Rename one of the inputs so their derived names differ",
        )
        super().__init__(message, **kwargs)


def wrap_os_error(
    exc: OSError, path: Union[str, Path], operation: str
) -> GeneratorIOError:
    """
    Wrap an OSError raised by a filesystem call in our exception hierarchy.

    Args:
        exc: The original exception
        path: Path the operation was acting on
        operation: Short verb describing the operation (read, write, ...)

    Returns:
        GeneratorIOError: Wrapped exception carrying the original as cause
    """
    reason = exc.strerror or str(exc)
    return GeneratorIOError(
        f"{operation} {path}: {reason}", path=path, operation=operation, cause=exc
    )
