from __future__ import annotations

from typing import Optional


class TaqvimError(Exception):
    """Base error."""

class _LookupError(TaqvimError, KeyError):
    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""

class EngineUnavailableError(_LookupError):
    """Raised when a named engine is not in the registry."""

class UnsupportedField(_LookupError):
    """Field access or arithmetic on a field the operation does not support."""

class InvalidDate(TaqvimError, ValueError):
    """Year/month/day (or a time field) out of range for the calendar system."""

class ParseError(TaqvimError, ValueError):
    """Input text does not match a pattern, or the matched values are invalid."""

    def __init__(self, text: str, pattern: str, reason: Optional[str] = None) -> None:
        self.text = text
        self.pattern = pattern
        self.reason = reason
        msg = f"Cannot parse {text!r} with pattern {pattern!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
