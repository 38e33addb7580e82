"""
Global Configuration and Safe Defaults.

Module constants cover limits shared by the builder, the remote client and
the processing service. User settings live in ``.mdgraph/config.yaml`` and
can be overridden through environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Set

import yaml
from pydantic import BaseModel, ValidationError

from .core.types import BackendKind

logger = logging.getLogger(__name__)

# --- Safety Limits ---
# Content larger than this is rejected before it is sent to the service
MAX_CONTENT_BYTES = 10 * 1024 * 1024  # 10MB

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_BACKEND = BackendKind.PLANAR
DEFAULT_OUTPUT = "mdgraph.html"

CONFIG_DIR_NAME = ".mdgraph"
CONFIG_FILE_NAME = "config.yaml"

# Extensions accepted when loading a local document
ACCEPTED_EXTENSIONS: Set[str] = {".md", ".markdown"}

SERVICE_NAME = "Markdown Processing API"
SERVICE_VERSION = "1.0.0"
UPLOAD_PATH = "/api/markdown/upload"


class Settings(BaseModel):
    """
    Effective user settings.
    """
    api_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    backend: BackendKind = DEFAULT_BACKEND
    output: str = DEFAULT_OUTPUT


def default_config_path(root_dir: Optional[Path] = None) -> Path:
    return (root_dir or Path.cwd()) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring unreadable config {config_path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring malformed config {config_path}")
        return {}
    return data


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if os.getenv("MDGRAPH_API_URL"):
        overrides["api_url"] = os.getenv("MDGRAPH_API_URL")
    if os.getenv("MDGRAPH_TIMEOUT"):
        overrides["timeout"] = os.getenv("MDGRAPH_TIMEOUT")
    if os.getenv("MDGRAPH_BACKEND"):
        overrides["backend"] = os.getenv("MDGRAPH_BACKEND")
    return overrides


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Load settings from YAML, then apply environment overrides.

    Invalid values fall back to defaults rather than failing the command.
    """
    config_path = config_path or default_config_path()
    data = _read_config_file(config_path)

    file_values = {
        "api_url": data.get("remote", {}).get("api_url") if isinstance(data.get("remote"), dict) else None,
        "timeout": data.get("remote", {}).get("timeout") if isinstance(data.get("remote"), dict) else None,
        "backend": data.get("view", {}).get("backend") if isinstance(data.get("view"), dict) else None,
        "output": data.get("view", {}).get("output") if isinstance(data.get("view"), dict) else None,
    }
    values = {k: v for k, v in file_values.items() if v is not None}
    values.update(_env_overrides())

    try:
        return Settings(**values)
    except ValidationError as e:
        logger.warning(f"Invalid settings, using defaults: {e}")
        return Settings()
