"""Custom exceptions for budautoconf."""

from __future__ import annotations

from typing import Any


class AutoConfigurationError(Exception):
    """Base exception for all auto-configuration errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(AutoConfigurationError):
    """A property has an invalid value or names an unknown component."""

    def __init__(self, message: str, key: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.key = key
        if key:
            self.details["key"] = key


class PluginLoadError(AutoConfigurationError):
    """An entry point could not be loaded or instantiated."""

    def __init__(self, group: str, name: str, cause: BaseException) -> None:
        super().__init__(
            f"Failed to load plugin {name!r} from group {group!r}: {cause}",
            details={"group": group, "name": name},
        )
        self.group = group
        self.name = name
