"""Maildir backend configuration.

Maildir folders live under a single root directory. With maildirpp set,
subfolders follow the Maildir++ layout (".Sent", ".Archive.2024") instead
of nested directories.
"""

from pathlib import Path
from typing import Literal

from .base import BackendModel


class MaildirConfig(BackendModel):
    """Local Maildir tree."""

    type: Literal["maildir"] = "maildir"
    root_dir: Path
    maildirpp: bool = False

    def root_path(self) -> Path:
        """Root directory with ~ expanded."""
        return self.root_dir.expanduser()
