"""Run status as reported by the tracking server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidStatusError

RUN_STATUSES: Tuple[str, ...] = ("RUNNING", "SCHEDULED", "FINISHED", "FAILED", "KILLED")


@dataclass(frozen=True)
class RunStatus:
    """
    Validated run status.

    Read-only mirror of the server-side status; transitions are owned by
    the server.
    """

    status: str

    def __post_init__(self):
        """Validate status against the accepted literals."""
        if not isinstance(self.status, str) or self.status not in RUN_STATUSES:
            raise InvalidStatusError(self.status, RUN_STATUSES)

    def __str__(self) -> str:
        return self.status
