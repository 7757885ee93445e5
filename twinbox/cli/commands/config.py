"""Config command implementation.

Creates, displays and checks twinbox account configuration.
"""

import tomli_w
import typer
from pydantic import BaseModel
from typing_extensions import Annotated

from twinbox.config import init_config, load_config, prepare_account
from twinbox.config.paths import config_file
from twinbox.config.schema import AccountConfig, TwinboxConfig
from twinbox.errors import ConfigError
from twinbox.sync.config import SyncSide

app = typer.Typer(help="Manage account configuration")


def _load_or_exit() -> TwinboxConfig:
    """Load the configuration, exiting with status 1 on error."""
    try:
        return load_config()
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def init(
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite existing config")
    ] = False,
):
    """Initialize configuration directory and template config file."""
    path = config_file()
    created = init_config(path, overwrite=force)

    if created:
        typer.echo(f"Created config file: {path}")
        typer.echo()
        typer.echo("Edit the config file to add your accounts.")
    else:
        typer.echo(f"Config already exists at {path}")
        typer.echo("Use --force to overwrite.")


@app.command()
def show(
    account: Annotated[
        str | None, typer.Option("--account", "-a", help="Show specific account")
    ] = None,
):
    """Display current configuration.

    Inline secrets (raw) are redacted in output.
    """
    config = _load_or_exit()

    if not config.accounts:
        typer.echo("No accounts configured.")
        typer.echo(f"Run 'twinbox config init' to create {config_file()}")
        return

    if account:
        # Show specific account
        if account in config.accounts:
            _display_account(account, config.accounts[account])
        else:
            typer.echo(f"Account '{account}' not found.", err=True)
            raise typer.Exit(1)
    else:
        # Show all accounts
        for name, acct in config.accounts.items():
            _display_account(name, acct)


def _display_account(name: str, account: AccountConfig) -> None:
    """Display a single account configuration with redacted secrets."""
    document = {"accounts": {name: _redact(account.to_document())}}
    typer.echo(tomli_w.dumps(document))


def _redact(value):
    """Replace every inline secret value, indicating that it is set."""
    if isinstance(value, dict):
        return {
            key: "***REDACTED***" if key == "raw" else _redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_redact(item) for item in value]
    return value


@app.command()
def check(
    account: Annotated[
        str | None, typer.Option("--account", "-a", help="Account to check")
    ] = None,
):
    """Validate an account and show how it will be synchronized.

    Without --account, the default account is checked.
    """
    config = _load_or_exit()

    try:
        pair = prepare_account(config, account)
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)

    # Filters are shared by both sides
    typer.echo(f"Account: {pair.name}")
    typer.echo(f"  folder filter: {pair.left.account.folder.filter}")
    typer.echo(f"  envelope filter: {pair.left.account.envelope.filter}")

    _display_side("left", pair.left)
    _display_side("right", pair.right)


def _display_side(label: str, side: SyncSide) -> None:
    backend, account = side
    typer.echo(f"  {label}: {backend.kind}")
    typer.echo(f"    folder: {_allowed(account.folder.permissions)}")
    typer.echo(f"    flag: {_allowed(account.flag.permissions)}")
    typer.echo(f"    message: {_allowed(account.message.permissions)}")


def _allowed(permissions: BaseModel) -> str:
    """List the allowed mutations of a permission set, e.g. "create, delete"."""
    allowed = [name for name, value in permissions.model_dump().items() if value]
    return ", ".join(allowed) if allowed else "read-only"
