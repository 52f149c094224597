"""Configuration management for tasklist."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .adapters.file_blob_store import is_valid_key
from .core.display import DEFAULT_DATE_FORMAT
from .core.sorting import SortMode

logger = logging.getLogger(__name__)

TASKLIST_HOME = Path(os.environ.get("TASKLIST_HOME", Path.home() / "tasklist"))
CONFIG_FILE = TASKLIST_HOME / "config" / "tasklist.conf"
DATA_DIR = TASKLIST_HOME / "data"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Config:
    """tasklist configuration."""

    data_dir: str = ""
    storage_key: str = "tasks"
    default_sort: str = SortMode.CREATED.value
    show_completed: bool = True
    date_format: str = DEFAULT_DATE_FORMAT

    @property
    def data_path(self) -> Path:
        """Resolved data directory (DATA_DIR when unset)."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from unquoted values."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def _parse_bool(key: str, value: str, default: bool) -> bool:
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    logger.warning(f"Invalid boolean for {key.upper()}: {value!r}, using {default}")
    return default


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from tasklist.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "data_dir":
                config.data_dir = value
            case "storage_key":
                if is_valid_key(value):
                    config.storage_key = value
                else:
                    logger.warning(f"Invalid STORAGE_KEY {value!r}, using {config.storage_key}")
            case "default_sort":
                if value in {m.value for m in SortMode}:
                    config.default_sort = value
                else:
                    logger.warning(f"Unknown DEFAULT_SORT {value!r}, using {config.default_sort}")
            case "show_completed":
                config.show_completed = _parse_bool(key, value, config.show_completed)
            case "date_format":
                if value:
                    config.date_format = value

    return config
