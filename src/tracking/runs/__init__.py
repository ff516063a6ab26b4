"""Typed run entities for MLflow tracking payloads.

Records are built from decoded REST payloads and are immutable:
- RunStatus, RunInfo (metadata)
- RunMetric, RunParam, RunData (observed data)
- Run (composite)

The MLflow adapter lives in ``tracking.runs.mlflow_adapter`` and is not
imported here, so the record model does not need mlflow at import time.
"""

from .data import RunData, RunMetric, RunParam
from .errors import (
    FieldParseError,
    InvalidStatusError,
    MissingFieldError,
    MissingRunSectionError,
    RunEntityError,
)
from .info import RunInfo
from .run import Run
from .status import RUN_STATUSES, RunStatus

__all__ = [
    # Records
    "RUN_STATUSES",
    "RunStatus",
    "RunInfo",
    "RunMetric",
    "RunParam",
    "RunData",
    "Run",
    # Errors
    "RunEntityError",
    "InvalidStatusError",
    "FieldParseError",
    "MissingFieldError",
    "MissingRunSectionError",
]
