"""Notmuch backend configuration.

Every field is optional: notmuch falls back to its own configuration file
(and NOTMUCH_* environment variables) for anything left unset.
"""

from pathlib import Path
from typing import Literal

from .base import BackendModel


class NotmuchConfig(BackendModel):
    """Local notmuch index.

    Attributes:
        database_path: Path to the notmuch database.
        maildir_path: Root of the mail store indexed by the database.
        config_path: Notmuch configuration file.
        profile: Notmuch profile name.
    """

    type: Literal["notmuch"] = "notmuch"
    database_path: Path | None = None
    maildir_path: Path | None = None
    config_path: Path | None = None
    profile: str | None = None
