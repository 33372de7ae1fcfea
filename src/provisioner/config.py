"""Configuration file loading."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError
from ruamel.yaml import YAML

from provisioner.models.config import ProvisionerConfig


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PROVISIONER_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/provisioner/config.yaml")


def default_config_path() -> Path:
    """Config path from the environment, or the per-user default."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def _read_yaml(file_path: Path) -> Dict[str, Any]:
    """Read and parse YAML file."""
    yaml = YAML(typ="safe")
    data = yaml.load(file_path.read_text())
    return data or {}


def load_config(path: Optional[Path] = None) -> ProvisionerConfig:
    """Load configuration.

    An explicit path must exist. When no path is given, a missing default
    file yields the built-in defaults.
    """
    explicit = path is not None
    config_file = Path(path).expanduser() if explicit else default_config_path()

    if not config_file.exists():
        if explicit or os.environ.get(CONFIG_ENV_VAR):
            raise FileNotFoundError(f"Config not found: {config_file}")
        logger.debug(f"No config file at {config_file}, using defaults")
        return ProvisionerConfig()

    try:
        config = ProvisionerConfig(**_read_yaml(config_file))
    except ValidationError as e:
        logger.error(f"Invalid config {config_file}: {e}")
        raise
    logger.debug(f"Loaded config: {config_file}")
    return config
