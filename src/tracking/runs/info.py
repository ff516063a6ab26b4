"""Run metadata record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .coercion import parse_int64, parse_str
from .status import RunStatus


def _optional_text(info: Mapping[str, Any], field: str) -> Optional[str]:
    value = info.get(field)
    return None if value is None else parse_str(value, field)


def _text_or_empty(info: Mapping[str, Any], field: str) -> str:
    value = info.get(field)
    return "" if value is None else parse_str(value, field)


@dataclass(frozen=True)
class RunInfo:
    """
    Run metadata.

    Fields the server omitted stay ``None`` so callers can tell "not sent"
    apart from a zero value. ``artifact_uri`` and ``lifecycle_stage`` are the
    exception and default to an empty string.

    Attributes:
        run_id: Run identifier.
        experiment_id: Experiment identifier.
        status: Run status.
        run_name: Run name.
        start_time: Start time, UNIX epoch in milliseconds.
        end_time: End time, UNIX epoch in milliseconds.
        artifact_uri: Root artifact location of the run.
        lifecycle_stage: ``active`` or ``deleted``.
    """

    run_id: Optional[str] = None
    experiment_id: Optional[int] = None
    status: Optional[RunStatus] = None
    run_name: Optional[str] = None
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    artifact_uri: str = ""
    lifecycle_stage: str = ""

    @classmethod
    def from_dict(cls, info: Mapping[str, Any]) -> "RunInfo":
        """
        Build RunInfo from a decoded ``run-info`` object.

        Args:
            info: Mapping with any of ``run_id``, ``experiment_id``, ``status``,
                ``run_name``, ``start_time``, ``end_time``, ``artifact_uri``,
                ``lifecycle_stage``. ``None`` values count as absent.

        Returns:
            Parsed RunInfo.

        Raises:
            FieldParseError: If experiment_id, start_time or end_time is not
                integer-like, or a text field is not a string.
            InvalidStatusError: If status is not an accepted literal.
        """
        experiment_id = info.get("experiment_id")
        status = info.get("status")
        start_time = info.get("start_time")
        end_time = info.get("end_time")

        return cls(
            run_id=_optional_text(info, "run_id"),
            experiment_id=(
                None if experiment_id is None
                else parse_int64(experiment_id, "experiment_id")
            ),
            status=None if status is None else RunStatus(status),
            run_name=_optional_text(info, "run_name"),
            start_time=None if start_time is None else parse_int64(start_time, "start_time"),
            end_time=None if end_time is None else parse_int64(end_time, "end_time"),
            artifact_uri=_text_or_empty(info, "artifact_uri"),
            lifecycle_stage=_text_or_empty(info, "lifecycle_stage"),
        )

    def get_run_id(self) -> Optional[str]:
        """Return the run identifier."""
        return self.run_id
