"""Configuration management module.

Handles loading, saving and accessing the twinbox configuration.
Config is stored at ~/.config/twinbox/config.toml

Usage:
    from twinbox.config import load_config, get_account, prepare_account

    config = load_config()
    name, account = get_account(config, "work")
    pair = prepare_account(config, "work")
"""

import logging
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import ValidationError

from twinbox.errors import (
    AccountNotFoundError,
    BackendDisabledError,
    ConfigError,
    ConfigParseError,
    ConfigValidationError,
)
from twinbox.sync.config import SyncPair

from .paths import CONFIG_FILE, config_file, ensure_config_dir
from .schema import AccountConfig, TwinboxConfig
from .template import CONFIG_TEMPLATE

__all__ = [
    "load_config",
    "parse_config",
    "save_config",
    "init_config",
    "get_account",
    "get_account_names",
    "prepare_account",
    "CONFIG_FILE",
]

logger = logging.getLogger(__name__)

# Module-level cache for loaded config, keyed by file path.
# Avoids repeated disk reads during a single CLI invocation.
_cached_config: tuple[Path, TwinboxConfig] | None = None


def parse_config(data: dict[str, Any]) -> TwinboxConfig:
    """Validate a raw configuration document.

    Accounts are validated one by one so that errors name their account.

    Args:
        data: Parsed TOML document.

    Returns:
        The validated configuration.

    Raises:
        ConfigValidationError: If the document does not match the schema.
        BackendDisabledError: If an account uses a disabled backend kind.
    """
    unknown = [key for key in data if key != "accounts"]
    if unknown:
        raise ConfigValidationError(
            None, [(key, "Extra inputs are not permitted") for key in unknown]
        )

    accounts_data = data.get("accounts", {})
    if not isinstance(accounts_data, dict):
        raise ConfigValidationError(None, [("accounts", "Input should be a table")])

    accounts: dict[str, AccountConfig] = {}
    for name, account_data in accounts_data.items():
        try:
            accounts[name] = AccountConfig.model_validate(account_data)
        except ValidationError as e:
            raise _account_error(name, account_data, e) from e

    return TwinboxConfig(accounts=accounts)


def _document_path(data: Any, loc: tuple[int | str, ...]) -> list[str]:
    """Map a pydantic error location onto the keys of the raw document.

    Tagged unions insert the selected tag (e.g. "imap") into the location,
    right after the union field. That segment is not a document key: it is
    recognized as the "type" value of the table being walked, once per table.
    """
    parts = []
    node = data
    tag_skipped = False

    for segment in loc:
        if (
            not tag_skipped
            and isinstance(node, dict)
            and node.get("type") == segment
        ):
            tag_skipped = True
            continue

        parts.append(str(segment))
        tag_skipped = False

        if isinstance(node, dict):
            node = node.get(segment)
        elif isinstance(node, list) and isinstance(segment, int) and segment < len(node):
            node = node[segment]
        else:
            node = None

    return parts


def _account_error(name: str, data: Any, error: ValidationError) -> ConfigError:
    """Convert a pydantic validation error into a config error for one account."""
    issues = []

    for detail in error.errors():
        path = ".".join(["accounts", name, *_document_path(data, detail["loc"])])

        # A disabled backend makes every other issue of the side irrelevant
        if detail["type"] == "backend_disabled":
            return BackendDisabledError(name, path, detail["ctx"]["kind"])

        issues.append((path, detail["msg"]))

    return ConfigValidationError(name, issues)


def load_config(
    path: Path | None = None, *, force_reload: bool = False
) -> TwinboxConfig:
    """Load configuration from disk.

    Returns an empty configuration if the file doesn't exist.
    Uses module-level caching to avoid repeated disk reads.

    Args:
        path: Config file to read. Defaults to config_file().
        force_reload: Bypass cache and read from disk (useful after saving).

    Returns:
        The validated configuration.

    Raises:
        ConfigParseError: If the file is not valid TOML.
        ConfigValidationError: If the file does not match the schema.
        BackendDisabledError: If an account uses a disabled backend kind.
    """
    global _cached_config

    path = path or config_file()

    if _cached_config is not None and not force_reload:
        cached_path, cached = _cached_config
        if cached_path == path:
            return cached

    if not path.exists():
        logger.debug("No config file at %s", path)
        config = TwinboxConfig()
    else:
        logger.debug("Loading config from %s", path)
        with open(path, "rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigParseError(path, str(e)) from e
        config = parse_config(data)

    _cached_config = (path, config)
    return config


def save_config(config: TwinboxConfig, path: Path | None = None) -> None:
    """Save configuration to disk.

    Creates config directory if needed. Updates the module cache.

    Args:
        config: The configuration to save.
        path: Config file to write. Defaults to config_file().
    """
    global _cached_config

    path = path or config_file()
    ensure_config_dir(path)

    with open(path, "wb") as f:
        tomli_w.dump(config.to_document(), f)

    # Keep cache in sync with disk
    _cached_config = (path, config)


def init_config(path: Path | None = None, *, overwrite: bool = False) -> bool:
    """Initialize config directory and create template config file.

    Args:
        path: Config file to create. Defaults to config_file().
        overwrite: If True, overwrite existing config file.

    Returns:
        True if config was created, False if it already existed.
    """
    path = path or config_file()
    ensure_config_dir(path)

    if path.exists() and not overwrite:
        return False

    path.write_text(CONFIG_TEMPLATE)
    return True


def get_account(
    config: TwinboxConfig, name: str | None = None
) -> tuple[str, AccountConfig]:
    """Get account configuration by name.

    Without a name, the first account flagged ``default = true`` is used,
    falling back to the first declared account.

    Args:
        config: The loaded configuration.
        name: Account name to retrieve.

    Returns:
        The account name and its configuration.

    Raises:
        AccountNotFoundError: If no account matches.
    """
    accounts = config.accounts

    if name is not None:
        if name not in accounts:
            raise AccountNotFoundError(name)
        return name, accounts[name]

    if not accounts:
        raise AccountNotFoundError(None)

    defaults = [n for n, account in accounts.items() if account.is_default()]
    if len(defaults) > 1:
        logger.warning(
            "Several accounts are marked as default (%s), using '%s'",
            ", ".join(defaults),
            defaults[0],
        )
    if defaults:
        return defaults[0], accounts[defaults[0]]

    first = next(iter(accounts))
    logger.debug("No default account, using first account '%s'", first)
    return first, accounts[first]


def get_account_names(config: TwinboxConfig) -> list[str]:
    """Get list of configured account names.

    Args:
        config: The loaded configuration.

    Returns:
        List of account names, may be empty.
    """
    return list(config.accounts.keys())


def prepare_account(config: TwinboxConfig, name: str | None = None) -> SyncPair:
    """Select an account and compile it for a sync run.

    The selected account is copied before its credentials are configured,
    so the loaded configuration stays as the user wrote it.

    Raises:
        AccountNotFoundError: If no account matches.
        CredentialError: If default keyring entries cannot be built.
    """
    name, account = get_account(config, name)

    account = account.model_copy(deep=True)
    account.configure(name)

    return account.into_sync_pair(name)
