"""Exceptions raised by org-graph."""

from dataclasses import dataclass
from enum import Enum


class OrgGraphError(Exception):
    """Base class for org-graph errors."""


class OrganizationError(OrgGraphError):
    """Raised when organization data cannot be loaded or is inconsistent."""


class ConfigError(OrgGraphError):
    """Raised when a configuration file cannot be read or validated."""


class StorageError(OrgGraphError):
    """Raised when a storage backend fails to save, load or delete a key."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        self.message = message
        super().__init__(f"Storage failure for {key!r}: {message}")


class ErrorLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ErrorInfo:
    """One diagnostic reported by a DOT renderer."""

    level: ErrorLevel
    message: str
    line: int | None = None


class RenderError(OrgGraphError):
    """Raised when a renderer rejects a DOT document."""

    def __init__(self, errors: list[ErrorInfo]) -> None:
        self.errors = list(errors)
        super().__init__(self._format())

    def _format(self) -> str:
        if not self.errors:
            return "Render failed: unknown error"

        if len(self.errors) == 1:
            error = self.errors[0]
            if error.line is not None:
                return f"Render failed at line {error.line}: {error.message}"
            return f"Render failed: {error.message}"

        lines = [f"Render failed with {len(self.errors)} error(s):"]
        for i, error in enumerate(self.errors, 1):
            level = error.level.value.upper()
            if error.line is not None:
                lines.append(f"  {i}. [{level}] Line {error.line}: {error.message}")
            else:
                lines.append(f"  {i}. [{level}] {error.message}")
        return "\n".join(lines)
