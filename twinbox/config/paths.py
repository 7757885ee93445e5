"""Path constants and directory utilities for twinbox config.

Follows the XDG Base Directory specification:
- Config: ~/.config/twinbox/config.toml
- Engine sync state: ~/.config/twinbox/sync/

TWINBOX_CONFIG overrides the config file location.
"""

import os
from pathlib import Path


CONFIG_ENV = "TWINBOX_CONFIG"

# XDG-compliant config directory
CONFIG_DIR = Path.home() / ".config" / "twinbox"
CONFIG_FILE = CONFIG_DIR / "config.toml"


def config_file() -> Path:
    """Return the config file path, honoring TWINBOX_CONFIG."""
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return CONFIG_FILE


def ensure_config_dir(path: Path | None = None) -> Path:
    """Create the directory holding the config file if it doesn't exist.

    Returns the directory path.
    """
    directory = (path or config_file()).parent
    directory.mkdir(parents=True, exist_ok=True)
    return directory
