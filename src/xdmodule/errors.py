"""Error hierarchy for the xdmodule package."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "ModuleDefinitionError",
    "InvalidArgumentError",
    "ConfigNotFoundError",
    "ConfigError",
    "PropertiesParseError",
    "TypeNotFoundError",
    "ClassResolutionError",
    "TypeResolutionError",
    "ErrorCodes",
]


class ModuleDefinitionError(Exception):
    """Base error for all xdmodule errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class InvalidArgumentError(ModuleDefinitionError):
    """Raised when a module descriptor is constructed with invalid arguments."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="INVALID_ARGUMENT", message=message, **kwargs)


class ConfigNotFoundError(ModuleDefinitionError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(ModuleDefinitionError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class PropertiesParseError(ModuleDefinitionError):
    """Raised when properties text contains a malformed escape sequence."""

    def __init__(self, message: str, line: int | None = None, **kwargs: Any) -> None:
        super().__init__(
            code="PROPERTIES_PARSE_ERROR",
            message=message,
            details={"line": line},
            **kwargs,
        )


class TypeNotFoundError(ModuleDefinitionError):
    """Raised by the type loaders when a qualified name does not resolve to a class."""

    def __init__(self, type_name: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="TYPE_NOT_FOUND",
            message=f"Cannot load type '{type_name}': {reason}",
            details={"type_name": type_name, "reason": reason},
            **kwargs,
        )

    @property
    def type_name(self) -> str:
        """The qualified name that failed to resolve."""
        return self.details["type_name"]


class ClassResolutionError(ModuleDefinitionError):
    """Raised when the class named by ``options_class`` cannot be loaded."""

    def __init__(self, class_name: str, **kwargs: Any) -> None:
        super().__init__(
            code="CLASS_RESOLUTION_ERROR",
            message=f"Unable to load class used by module options metadata: {class_name}",
            details={"class_name": class_name},
            **kwargs,
        )

    @property
    def class_name(self) -> str:
        """The options class name that could not be loaded."""
        return self.details["class_name"]


class TypeResolutionError(ModuleDefinitionError):
    """Raised when the declared type of a single option cannot be loaded."""

    def __init__(self, option_name: str, type_name: str, **kwargs: Any) -> None:
        super().__init__(
            code="TYPE_RESOLUTION_ERROR",
            message=f"Can't find class used for type of option '{option_name}': {type_name}",
            details={"option_name": option_name, "type_name": type_name},
            **kwargs,
        )

    @property
    def option_name(self) -> str:
        """The option whose type could not be loaded."""
        return self.details["option_name"]

    @property
    def type_name(self) -> str:
        """The declared type name."""
        return self.details["type_name"]


class ErrorCodes:
    """All xdmodule error codes as constants.

    Example:
        if error.code == ErrorCodes.CLASS_RESOLUTION_ERROR:
            report_misconfigured_module()
    """

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    PROPERTIES_PARSE_ERROR = "PROPERTIES_PARSE_ERROR"
    TYPE_NOT_FOUND = "TYPE_NOT_FOUND"
    CLASS_RESOLUTION_ERROR = "CLASS_RESOLUTION_ERROR"
    TYPE_RESOLUTION_ERROR = "TYPE_RESOLUTION_ERROR"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
