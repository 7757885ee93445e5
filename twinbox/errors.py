"""Errors raised while loading and preparing account configuration.

Every error carries enough structure (account name, dotted document path)
for the caller to point the user at the offending entry. Presentation is
left to the CLI.
"""

from pathlib import Path

# (dotted document path, message)
Issue = tuple[str, str]


class ConfigError(Exception):
    """Base class for configuration errors."""


class ConfigParseError(ConfigError):
    """The configuration file is not a valid TOML document."""

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Cannot parse {path}: {message}")


class ConfigValidationError(ConfigError):
    """An account does not match the configuration schema.

    Covers unknown keys, type mismatches and unknown backend types.
    """

    def __init__(self, account: str | None, issues: list[Issue]):
        self.account = account
        self.issues = issues
        lines = [f"{path}: {message}" for path, message in issues]
        where = f"account '{account}'" if account else "configuration"
        super().__init__(f"Invalid {where}:\n  " + "\n  ".join(lines))


class BackendDisabledError(ConfigError):
    """A known backend type is named, but it is not enabled in this installation."""

    def __init__(self, account: str | None, path: str, kind: str):
        self.account = account
        self.path = path
        self.kind = kind
        super().__init__(
            f"{path}: backend '{kind}' is not enabled in this installation"
        )


class AccountNotFoundError(ConfigError):
    """No account matches the requested name, or no account is configured."""

    def __init__(self, name: str | None):
        self.name = name
        if name is None:
            super().__init__("No account configured")
        else:
            super().__init__(f"Account '{name}' not found")


class CredentialError(ConfigError):
    """Default secret references could not be built for an account."""

    def __init__(self, account: str, failures: list[Issue]):
        self.account = account
        self.failures = failures
        lines = [f"{path}: {message}" for path, message in failures]
        super().__init__(
            f"Cannot configure credentials of account '{account}':\n  "
            + "\n  ".join(lines)
        )


class SecretError(Exception):
    """A secret reference could not be resolved to a value."""
