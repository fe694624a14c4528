from __future__ import annotations

from typing import Any, Dict, Mapping


class PsstError(Exception):
    """Base exception for psst."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class RuleContractError(PsstError, ValueError):
    """Raised when a Rule is constructed with invalid data (a programming error)."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        PsstError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ConfigError(PsstError):
    """Raised when configuration cannot be loaded or fails schema validation."""


class InjectionTargetError(PsstError, FileNotFoundError):
    """Raised when the sentinel injection target file does not exist."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        PsstError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


__all__ = [
    "PsstError",
    "RuleContractError",
    "ConfigError",
    "InjectionTargetError",
]
