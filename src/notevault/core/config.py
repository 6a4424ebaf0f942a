"""Configuration management for notevault core."""

import logging
import os
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from notevault.core.errors import ConfigError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


def default_data_dir() -> Path:
    """
    Resolve the per-OS application data directory.

    Linux uses ~/.notevault, macOS ~/Library/Application Support/notevault
    and Windows %APPDATA%/notevault. Anything else falls back to
    $XDG_DATA_HOME/notevault, then ~/.local/share/notevault.
    """
    home = Path(os.path.expanduser("~"))
    if sys.platform.startswith("linux"):
        return home / ".notevault"
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "notevault"
    if sys.platform == "win32" and os.getenv("APPDATA"):
        return Path(os.environ["APPDATA"]) / "notevault"

    xdg = os.getenv("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "notevault"
    return home / ".local" / "share" / "notevault"


# Application data directory (vault registry, app-managed trees, contents)
NOTEVAULT_DATA_DIR = Path(
    get_env("NOTEVAULT_DATA_DIR") or default_data_dir()
).expanduser()

# Optional settings file inside the data directory
SETTINGS_FILENAME = "notevault.yaml"

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO")


class StorageSettings(BaseModel):
    """Tunable naming rules for vault scanning and metadata.

    Frozen so a single instance can be shared by every component.
    Extra fields are forbidden to catch typos in notevault.yaml.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Entries starting with this prefix are invisible to the tree
    hidden_prefix: str = "."
    # Per-vault metadata directory (tree snapshot, legacy contents)
    metadata_dir: str = ".notevault"
    canvas_extension: str = ".canvas"
    json_indent: int = 2

    def is_hidden(self, name: str) -> bool:
        return bool(self.hidden_prefix) and name.startswith(self.hidden_prefix)

    def hides(self, relative_path: str) -> bool:
        """True if any segment of a vault-relative posix path is hidden."""
        return any(self.is_hidden(part) for part in relative_path.split("/") if part)


DEFAULT_SETTINGS = StorageSettings()


def load_settings(data_dir: Path | str | None = None) -> StorageSettings:
    """Load StorageSettings from notevault.yaml in the data directory.

    NOTEVAULT_JSON_INDENT, when set, overrides `json_indent` from the file.

    Returns:
        Settings from the file, or defaults when the file is missing or empty.

    Raises:
        ConfigError: If the file exists but is invalid YAML or not a mapping.
    """
    base = Path(data_dir) if data_dir else NOTEVAULT_DATA_DIR
    settings = _read_settings_file(base / SETTINGS_FILENAME)

    indent = get_env_int("NOTEVAULT_JSON_INDENT", settings.json_indent)
    if indent != settings.json_indent:
        settings = settings.model_copy(update={"json_indent": indent})
    return settings


def _read_settings_file(config_file: Path) -> StorageSettings:
    if not config_file.exists():
        logger.debug("No settings file at %s", config_file)
        return DEFAULT_SETTINGS

    try:
        with open(config_file, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {config_file}: {e}") from e

    if raw is None:
        return DEFAULT_SETTINGS

    if not isinstance(raw, dict):
        raise ConfigError(
            f"{SETTINGS_FILENAME} must be a mapping, got {type(raw).__name__}"
        )

    settings = StorageSettings.model_validate(raw)
    logger.info("Storage settings loaded from %s", config_file)
    return settings


def setup_logging() -> logging.Logger:
    """Configure and return logger.

    NOTEVAULT_DEBUG=true forces DEBUG regardless of LOG_LEVEL.
    """
    level = getattr(logging, (LOG_LEVEL or "INFO").upper(), logging.INFO)
    if get_env_bool("NOTEVAULT_DEBUG"):
        level = logging.DEBUG
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=level,
    )
    return logging.getLogger(__name__)
