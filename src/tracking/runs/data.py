"""Run data records: metrics, params and the RunData aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional

from .coercion import parse_float64, parse_int64, parse_str, require


@dataclass(frozen=True)
class RunMetric:
    """
    Single metric observation.

    Attributes:
        key: Metric name.
        value: Metric value.
        step: Training step the value was logged at.
        timestamp: UNIX epoch in milliseconds.
    """

    key: str
    value: float
    step: int
    timestamp: int

    @classmethod
    def from_dict(cls, metric: Mapping[str, Any]) -> "RunMetric":
        """
        Build a metric from a ``{key, value, step, timestamp}`` mapping.

        Raises:
            MissingFieldError: If any of the four keys is absent.
            FieldParseError: If key is not a string, step/timestamp are not
                integer-like or value is not numeric.
        """
        key = require(metric, "key", "metric")
        value = require(metric, "value", "metric")
        step = require(metric, "step", "metric")
        timestamp = require(metric, "timestamp", "metric")
        return cls(
            key=parse_str(key, "key"),
            value=parse_float64(value, "value"),
            step=parse_int64(step, "step"),
            timestamp=parse_int64(timestamp, "timestamp"),
        )


@dataclass(frozen=True)
class RunParam:
    """Single run parameter. Key and value must both be strings."""

    key: str
    value: str

    def __post_init__(self):
        """Reject non-string keys/values (FieldParseError)."""
        parse_str(self.key, "key")
        parse_str(self.value, "value")

    @classmethod
    def from_dict(cls, param: Mapping[str, Any]) -> "RunParam":
        """Build a param from a ``{key, value}`` mapping (MissingFieldError if incomplete)."""
        key = require(param, "key", "param")
        value = require(param, "value", "param")
        return cls(key=key, value=value)


def _index_by_key(records: Iterable[Any]) -> Dict[str, Any]:
    # Later entries overwrite earlier ones with the same key
    indexed: Dict[str, Any] = {}
    for record in records:
        indexed[record.key] = record
    return indexed


@dataclass(frozen=True)
class RunData:
    """
    Metrics, params and tags of a run.

    ``params`` is ``None`` when the payload carried no ``params`` entry and
    ``{}`` when it carried an empty list. ``tags`` is kept exactly as received.
    """

    metrics: Dict[str, RunMetric] = field(default_factory=dict)
    params: Optional[Dict[str, RunParam]] = None
    tags: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RunData":
        """
        Build RunData from a decoded ``run-data`` object.

        Args:
            data: Mapping with optional ``metrics`` (list of metric objects),
                ``params`` (list of param objects) and ``tags`` (opaque).

        Returns:
            Parsed RunData.
        """
        raw_metrics = data.get("metrics")
        metrics = _index_by_key(
            RunMetric.from_dict(metric) for metric in (raw_metrics or [])
        )

        raw_params = data.get("params")
        params = None
        if raw_params is not None:
            params = _index_by_key(RunParam.from_dict(param) for param in raw_params)

        return cls(metrics=metrics, params=params, tags=data.get("tags"))

    def get_params(self) -> Optional[Dict[str, RunParam]]:
        """Return params by key, or None if the payload had none."""
        return self.params
