"""Error taxonomy for loading and resolving command templates."""
from typing import Any


class RegistryError(Exception):
    """Base class for every registry failure."""


class SourceUnavailable(RegistryError):
    def __init__(self, source: Any, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Template source {source} unavailable: {reason}")


class DuplicateName(RegistryError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate template name: {name}")


class InvalidTemplate(RegistryError):
    def __init__(self, name: Any, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid template {name!r}: {reason}")


class TemplateNotFound(RegistryError, KeyError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the argument
        return f"Unknown command: {self.name}"


__all__ = [
    "RegistryError",
    "SourceUnavailable",
    "DuplicateName",
    "InvalidTemplate",
    "TemplateNotFound",
]
