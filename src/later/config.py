"""
Configuration for later.

Settings are read from a YAML file (``~/.config/later/config.yml`` unless
``LATER_CONFIG`` points elsewhere) and from a few environment variables.
Every key is optional; a missing file yields the defaults.
"""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from later.recovery import ConfigError
from later.logs import get_logger

log = get_logger("config")

DEFAULT_CONFIG_FILE = Path.home() / ".config" / "later" / "config.yml"
DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "later"

class Settings(BaseModel):
    """User settings for storage, display and logging."""

    data_dir: Path = Field(default=DEFAULT_DATA_DIR, description="Directory holding the to-do document and logs")
    data_file_name: str = Field(default="later.json", description="Document file name; .yml/.yaml selects YAML")
    indent: int = Field(default=3, ge=0, description="Spaces per nesting level when rendering")
    log_to_file: bool = Field(default=True, description="Write a detailed log file under data_dir/logs")

    @property
    def data_file(self) -> Path:
        return self.data_dir.expanduser() / self.data_file_name

    @property
    def log_dir(self) -> Optional[Path]:
        if not self.log_to_file:
            return None
        return self.data_dir.expanduser() / "logs"

def load_settings(config_path: Union[Path, str, None] = None) -> Settings:
    """
    Load settings from the YAML config file and the environment.

    Args:
        config_path: Explicit config file; defaults to $LATER_CONFIG or the user config file

    Returns:
        The validated Settings
    """
    if config_path is None:
        config_path = os.getenv('LATER_CONFIG') or DEFAULT_CONFIG_FILE
    config_path = Path(config_path).expanduser()

    raw = {}
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                raw = yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError) as e:
            raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")
        log.debug(f"Configuration loaded from {config_path}")

    env_data_dir = os.getenv('LATER_DATA_DIR')
    if env_data_dir:
        raw['data_dir'] = env_data_dir

    try:
        return Settings.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e
