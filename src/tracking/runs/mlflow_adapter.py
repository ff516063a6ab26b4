from __future__ import annotations

"""
@meta
name: tracking_runs_mlflow_adapter
type: utility
domain: tracking
responsibility:
  - Parse MLflow REST run payloads into Run records
  - Convert mlflow.entities.Run objects into Run records
  - Fetch runs through MlflowClient with retry
inputs:
  - Decoded runs/get and runs/search responses
  - mlflow.entities.Run objects
  - Run IDs
outputs:
  - Run records
tags:
  - utility
  - tracking
  - mlflow
ci:
  runnable: false
  needs_gpu: false
  needs_cloud: true
lifecycle:
  status: active
"""

"""Adapters between MLflow payloads/entities and run records."""
import json
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

from mlflow.tracking import MlflowClient
from mlflow.utils.proto_json_utils import message_to_json

from common.shared.logging_utils import get_logger
from tracking.runs.config_loader import get_client_config
from tracking.runs.data import RunData
from tracking.runs.run import Run
from tracking.runs.utils import retry_with_backoff

logger = get_logger(__name__)


def run_from_dict(run_dict: Mapping[str, Any]) -> Run:
    """
    Parse a decoded ``run`` object with optional ``info`` and ``data`` sections.

    Args:
        run_dict: Mapping shaped like ``{"info": {...}, "data": {...}}``.

    Returns:
        Run with whichever sections were present.
    """
    info = run_dict.get("info")
    data = run_dict.get("data")

    if info is not None and data is not None:
        return Run.from_dicts(info, data)
    if info is not None:
        return Run.from_info_dict(info)
    if data is not None:
        return Run.from_data(RunData.from_dict(data))
    return Run()


def run_from_response(response: Mapping[str, Any]) -> Run:
    """
    Parse a ``runs/get`` response (``{"run": {...}}``) into a Run.

    A bare run object (without the ``run`` wrapper) is accepted as well.
    """
    if "run" in response:
        return run_from_dict(response["run"])
    return run_from_dict(response)


def runs_from_search_response(response: Mapping[str, Any]) -> Tuple[List[Run], Optional[str]]:
    """
    Parse a ``runs/search`` response.

    Returns:
        Tuple of (runs, next_page_token). The token is None on the last page.
    """
    runs = [run_from_dict(run) for run in (response.get("runs") or [])]
    next_page_token = response.get("next_page_token") or None
    return runs, next_page_token


def run_from_mlflow(entity: Any) -> Run:
    """
    Convert an ``mlflow.entities.Run`` into a Run record.

    The entity is rendered through its protobuf JSON form, which is the same
    shape the REST API returns.
    """
    payload = json.loads(message_to_json(entity.to_proto()))
    return run_from_dict(payload)


def fetch_run(
    run_id: str,
    config_dir: Optional[Path] = None,
    client: Optional[MlflowClient] = None,
) -> Run:
    """
    Fetch a run from the tracking server and convert it.

    Args:
        run_id: Run identifier.
        config_dir: Directory holding mlflow.yaml (defaults to ./config).
        client: Optional pre-built MlflowClient. When omitted one is created
            for the configured tracking URI.

    Returns:
        Parsed Run.

    Raises:
        mlflow.exceptions.MlflowException: If the server rejects the request.
        RunEntityError: If the returned payload is malformed.
    """
    client_config = get_client_config(config_dir)
    if client is None:
        client = MlflowClient(tracking_uri=client_config["tracking_uri"])

    retry = client_config["retry"]
    entity = retry_with_backoff(
        lambda: client.get_run(run_id),
        max_retries=retry["max_retries"],
        base_delay=retry["base_delay"],
        max_delay=retry["max_delay"],
        operation_name=f"get_run({run_id[:12]})",
    )
    logger.debug(f"Fetched run {run_id[:12]}...")
    return run_from_mlflow(entity)
