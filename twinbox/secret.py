"""Secret references used by backend authentication.

A secret is never stored resolved in the configuration, only a reference
to where it lives:

    password.raw = "hunter2"          # inline, discouraged
    password.cmd = "pass show mail"   # first line of the command output
    password.keyring = "work-imap"    # entry in the system keyring

When no reference is given the secret is undefined. Before an account is
used, undefined secrets are replaced by keyring references derived from the
account name (see replace_undefined_keyring_entries), so users never have to
author keyring entry names themselves.
"""

import logging
import subprocess
from typing import Any

import keyring
import keyring.errors
from pydantic import ConfigDict, Field, model_validator

from twinbox.errors import SecretError
from twinbox.model import ConfigModel

logger = logging.getLogger(__name__)

# Keyring service under which every twinbox entry is stored
KEYRING_SERVICE = "twinbox"


class Secret(ConfigModel):
    """Reference to a secret value. At most one source may be set."""

    model_config = ConfigDict(frozen=True)

    raw: str | None = Field(default=None, repr=False)
    cmd: str | None = None
    keyring: str | None = None

    @model_validator(mode="after")
    def _check_single_source(self):
        sources = [
            name
            for name in ("raw", "cmd", "keyring")
            if getattr(self, name) is not None
        ]
        if len(sources) > 1:
            raise ValueError(
                f"a secret takes a single source, got {', '.join(sources)}"
            )
        return self

    @classmethod
    def from_keyring(cls, entry: str) -> "Secret":
        return cls(keyring=entry)

    @property
    def is_undefined(self) -> bool:
        return self.raw is None and self.cmd is None and self.keyring is None

    def get(self) -> str:
        """Resolve the secret value.

        Raises:
            SecretError: If the secret is undefined, the command fails or
                         the keyring entry is missing.
        """
        if self.raw is not None:
            return self.raw

        if self.cmd is not None:
            return _run_secret_command(self.cmd)

        if self.keyring is not None:
            try:
                value = keyring.get_password(KEYRING_SERVICE, self.keyring)
            except keyring.errors.KeyringError as e:
                raise SecretError(
                    f"Cannot read keyring entry '{self.keyring}': {e}"
                ) from e
            if value is None:
                raise SecretError(f"Keyring entry '{self.keyring}' not found")
            return value

        raise SecretError("Secret is undefined")


def _run_secret_command(cmd: str) -> str:
    """Run a shell command and return the first line of its output."""
    logger.debug("Reading secret from command: %s", cmd)

    result = subprocess.run(cmd, shell=True, capture_output=True, text=True)

    if result.returncode != 0:
        raise SecretError(
            f"Secret command exited with status {result.returncode}: "
            f"{result.stderr.strip()}"
        )

    lines = result.stdout.splitlines()
    if not lines:
        raise SecretError("Secret command produced no output")

    return lines[0]


def keyring_entry_name(account_name: str, suffix: str) -> str:
    """Build the keyring entry name for one secret of an account.

    Args:
        account_name: Account name from the config file.
        suffix: Secret identifier within the account (e.g., "imap-passwd").

    Returns:
        Entry name of the form "<account>-<suffix>".

    Raises:
        ValueError: If the account name cannot form an entry name.
    """
    if not account_name.strip():
        raise ValueError("account name is empty")

    if not account_name.isprintable():
        raise ValueError(
            f"account name {account_name!r} contains non-printable characters"
        )

    return f"{account_name}-{suffix}"


def default_secret(account_name: str, suffix: str, secret: Secret) -> Secret:
    """Return secret unchanged if defined, else the account's default keyring reference."""
    if not secret.is_undefined:
        return secret

    return Secret.from_keyring(keyring_entry_name(account_name, suffix))


def replace_undefined_keyring_entries(auth: Any, account_name: str) -> None:
    """Fill every undefined secret of an authentication config, in place.

    The fields to fill are those listed in the KEYRING_ENTRIES class
    attribute of the config, mapping field name to entry suffix.

    Raises:
        ValueError: If a keyring entry name cannot be built.
    """
    for field_name, suffix in auth.KEYRING_ENTRIES.items():
        current = getattr(auth, field_name)
        resolved = default_secret(account_name, suffix, current)
        if resolved is not current:
            logger.debug(
                "Using keyring entry '%s' for %s", resolved.keyring, field_name
            )
            setattr(auth, field_name, resolved)
