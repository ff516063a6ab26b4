"""Exceptions raised while building run entities from tracking payloads."""

from __future__ import annotations

from typing import Any, Iterable, Optional


class RunEntityError(Exception):
    """Base class for run entity construction errors."""

    pass


class InvalidStatusError(RunEntityError, ValueError):
    """Raised when a run status is not one of the accepted literals."""

    def __init__(self, status: Any, accepted: Iterable[str]):
        self.status = status
        self.accepted = tuple(accepted)
        super().__init__(
            f"Invalid status {status!r} - choose one of {list(self.accepted)}"
        )


class FieldParseError(RunEntityError, ValueError):
    """Raised when a numeric field cannot be parsed from its payload value."""

    def __init__(self, field: str, value: Any, expected: str = "64-bit integer"):
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(f"Cannot parse field '{field}' as {expected}: {value!r}")


class MissingFieldError(RunEntityError, KeyError):
    """Raised when a required key is absent from a payload mapping."""

    def __init__(self, field: str, record: Optional[str] = None):
        self.field = field
        self.record = record
        self.message = (
            f"Missing required field '{field}' in {record}"
            if record
            else f"Missing required field '{field}'"
        )
        super().__init__(self.message)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.message


class MissingRunSectionError(RunEntityError, AttributeError):
    """Raised when a Run accessor needs an info/data section that is unset."""

    def __init__(self, section: str):
        self.section = section
        super().__init__(f"Run has no '{section}' section")
