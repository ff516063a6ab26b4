"""Shared pytest fixtures for all tests."""

from pathlib import Path
from typing import Any, Dict

import pytest
import yaml


@pytest.fixture
def run_info_dict() -> Dict[str, Any]:
    """A run-info object as returned by runs/get."""
    return {
        "run_id": "5f3c9a1e2b7d4e0fa1b2c3d4e5f60718",
        "experiment_id": "7",
        "status": "FINISHED",
        "run_name": "distilbert_trial_3",
        "start_time": 1700000000000,
        "end_time": 1700000360000,
        "artifact_uri": "mlflow-artifacts:/7/5f3c9a1e2b7d4e0fa1b2c3d4e5f60718/artifacts",
        "lifecycle_stage": "active",
    }


@pytest.fixture
def run_data_dict() -> Dict[str, Any]:
    """A run-data object with metrics, params and tags."""
    return {
        "metrics": [
            {"key": "loss", "value": 0.5, "step": 1, "timestamp": 1000},
            {"key": "loss", "value": 0.4, "step": 2, "timestamp": 2000},
            {"key": "f1", "value": 0.81, "step": "2", "timestamp": "2000"},
        ],
        "params": [
            {"key": "learning_rate", "value": "2e-05"},
            {"key": "batch_size", "value": "16"},
        ],
        "tags": [
            {"key": "mlflow.runName", "value": "distilbert_trial_3"},
            {"key": "code.stage", "value": "hpo"},
        ],
    }


@pytest.fixture
def write_mlflow_config(tmp_path: Path):
    """Write a config/mlflow.yaml under tmp_path and return the config dir."""

    def _write(content: Any) -> Path:
        config_dir = tmp_path / "config"
        config_dir.mkdir(exist_ok=True)
        path = config_dir / "mlflow.yaml"
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            with path.open("w", encoding="utf-8") as handle:
                yaml.safe_dump(content, handle)
        return config_dir

    return _write


@pytest.fixture(autouse=True)
def _clear_tracking_config_cache():
    """Config loader caches per directory; keep tests independent."""
    from tracking.runs.config_loader import clear_config_cache

    clear_config_cache()
    yield
    clear_config_cache()
