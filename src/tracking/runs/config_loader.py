from __future__ import annotations

"""
@meta
name: tracking_runs_config_loader
type: utility
domain: tracking
responsibility:
  - Load tracking client configuration from config/mlflow.yaml with caching
  - Validate client settings and apply defaults
inputs:
  - Configuration directories
  - MLFLOW_TRACKING_URI environment variable
outputs:
  - Client configuration dictionaries
tags:
  - utility
  - tracking
  - mlflow
  - config
ci:
  runnable: false
  needs_gpu: false
  needs_cloud: false
lifecycle:
  status: active
"""

"""Tracking client configuration loader."""
import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from common.shared.logging_utils import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAME = "mlflow.yaml"
TRACKING_URI_ENV_VAR = "MLFLOW_TRACKING_URI"

DEFAULT_CLIENT_CONFIG: Dict[str, Any] = {
    "tracking_uri": None,
    "retry": {
        "max_retries": 5,
        "base_delay": 1.0,
        "max_delay": 60.0,
    },
}

# (config_dir) -> (mtime, config)
_config_cache: Dict[str, tuple] = {}


def _get_config_mtime(config_path: Path) -> float:
    """Get modification time of config file, or 0 if it doesn't exist."""
    try:
        return config_path.stat().st_mtime
    except OSError:
        return 0.0


def load_yaml(path: Path) -> Dict[str, Any]:
    """
    Load a YAML mapping from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the document is not a mapping.
    """
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        content = yaml.safe_load(handle)
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Expected a mapping at top level of {path}, got {type(content).__name__}")
    return content


def load_mlflow_config(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the full config from ``config/mlflow.yaml`` with caching.

    The cache entry is dropped when the file modification time changes.

    Args:
        config_dir: Path to config directory (defaults to current directory / "config").

    Returns:
        A copy of the config dictionary, or empty dict if the file is missing
        or unreadable.
    """
    if config_dir is None:
        config_dir = Path.cwd() / "config"

    config_path = Path(config_dir) / CONFIG_FILE_NAME
    mtime = _get_config_mtime(config_path)
    cache_key = str(config_dir)

    if cache_key in _config_cache:
        cached_mtime, cached_config = _config_cache[cache_key]
        if cached_mtime == mtime:
            return copy.deepcopy(cached_config)
        del _config_cache[cache_key]

    if not config_path.exists():
        _config_cache[cache_key] = (mtime, {})
        return {}

    try:
        config = load_yaml(config_path)
    except (yaml.YAMLError, ValueError, OSError) as e:
        logger.warning(f"[Tracking Config] Failed to load config from {config_path}: {e}")
        config = {}

    _config_cache[cache_key] = (mtime, config)
    return copy.deepcopy(config)


def clear_config_cache() -> None:
    """Drop all cached configs."""
    _config_cache.clear()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_retry_config(config: Any, defaults: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(defaults)
    if not isinstance(config, dict):
        if config is not None:
            logger.warning("Invalid client.retry in config (must be a mapping), using defaults")
        return result

    if "max_retries" in config:
        max_retries = config["max_retries"]
        if isinstance(max_retries, int) and not isinstance(max_retries, bool) and max_retries > 0:
            result["max_retries"] = max_retries
        else:
            logger.warning(
                f"Invalid client.retry.max_retries in config (must be > 0), "
                f"using default: {defaults['max_retries']}"
            )

    for name in ("base_delay", "max_delay"):
        if name in config:
            value = config[name]
            if _is_number(value) and value >= 0:
                result[name] = float(value)
            else:
                logger.warning(
                    f"Invalid client.retry.{name} in config (must be >= 0), "
                    f"using default: {defaults[name]}"
                )

    if result["max_delay"] < result["base_delay"]:
        logger.warning("client.retry.max_delay is below base_delay, clamping to base_delay")
        result["max_delay"] = result["base_delay"]

    return result


def _validate_client_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and apply defaults for the client section."""
    result = copy.deepcopy(DEFAULT_CLIENT_CONFIG)

    tracking_uri = config.get("tracking_uri")
    if tracking_uri is not None:
        if isinstance(tracking_uri, str) and tracking_uri.strip():
            result["tracking_uri"] = tracking_uri.strip()
        else:
            logger.warning("Invalid client.tracking_uri in config (must be a non-empty string), ignoring")

    result["retry"] = _validate_retry_config(config.get("retry"), DEFAULT_CLIENT_CONFIG["retry"])
    return result


def get_client_config(
    config_dir: Optional[Path] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Get tracking client configuration with defaults.

    ``MLFLOW_TRACKING_URI`` is used when the config leaves ``tracking_uri``
    unset.

    Args:
        config_dir: Path to config directory (defaults to current directory / "config").
        config: Optional pre-loaded config dict (avoids re-reading file).

    Returns:
        Dictionary with:
        - tracking_uri: Optional[str]
        - retry: {"max_retries": int, "base_delay": float, "max_delay": float}
    """
    if config is None:
        config = load_mlflow_config(config_dir)

    client_section = config.get("client") or {}
    if not isinstance(client_section, dict):
        logger.warning("Invalid client section in config (must be a mapping), using defaults")
        client_section = {}

    result = _validate_client_config(client_section)
    if result["tracking_uri"] is None:
        env_uri = os.environ.get(TRACKING_URI_ENV_VAR)
        if env_uri:
            result["tracking_uri"] = env_uri
    return result
