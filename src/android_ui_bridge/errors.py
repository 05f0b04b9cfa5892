"""Error model - Actionable errors with remediation hints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class BridgeError(Exception):
    """
    Base error with context and remediation guidance.

    Raised for malformed client input and bad configuration. Device action
    outcomes are never reported through exceptions; they are plain booleans.
    """

    code: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)
    remediation: str = ""

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "remediation": self.remediation,
        }


def missing_param_error(message: str, params: list[str]) -> BridgeError:
    """Create error for a missing or non-integer query parameter."""
    return BridgeError(
        code="ERR_MISSING_PARAM",
        message=message,
        context={"params": params},
        remediation=f"Pass {', '.join(params)} as query parameters",
    )


def invalid_config_error(name: str, value: str, expected: str) -> BridgeError:
    """Create error for an unusable configuration value."""
    return BridgeError(
        code="ERR_INVALID_CONFIG",
        message=f"Invalid value for {name}: {value!r}",
        context={"name": name, "value": value},
        remediation=f"Set {name} to {expected}",
    )
