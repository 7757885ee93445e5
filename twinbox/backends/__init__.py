"""Backend configurations.

One side of an account is backed by exactly one backend, selected by the
``type`` key of its backend table:

    imap     remote IMAP server
    maildir  local Maildir tree
    notmuch  local notmuch index

Which kinds are usable depends on the installation. TWINBOX_BACKENDS holds
a comma-separated list of enabled kinds and defaults to all of them. Tags
are the same whether or not a kind is enabled, so a document naming a
disabled kind is reported as such rather than as an unknown type.
"""

import logging
import os
from typing import Annotated, Any, Union

from pydantic import Field
from pydantic_core import PydanticCustomError

from .imap import ImapConfig, OAuth2AuthConfig, PasswordAuthConfig
from .maildir import MaildirConfig
from .notmuch import NotmuchConfig

__all__ = [
    "BACKEND_KINDS",
    "BackendConfig",
    "ImapConfig",
    "MaildirConfig",
    "NotmuchConfig",
    "OAuth2AuthConfig",
    "PasswordAuthConfig",
    "check_backend_enabled",
    "enabled_backend_kinds",
]

logger = logging.getLogger(__name__)

BACKENDS_ENV = "TWINBOX_BACKENDS"

BACKEND_KINDS = ("imap", "maildir", "notmuch")

BackendConfig = Annotated[
    Union[ImapConfig, MaildirConfig, NotmuchConfig],
    Field(discriminator="type"),
]


def enabled_backend_kinds() -> frozenset[str]:
    """Backend kinds enabled in this installation."""
    value = os.environ.get(BACKENDS_ENV)

    if value is None:
        return frozenset(BACKEND_KINDS)

    kinds = {kind.strip() for kind in value.split(",") if kind.strip()}

    unknown = kinds.difference(BACKEND_KINDS)
    if unknown:
        logger.warning(
            "Ignoring unknown backend kinds in %s: %s",
            BACKENDS_ENV,
            ", ".join(sorted(unknown)),
        )

    return frozenset(kinds.intersection(BACKEND_KINDS))


def check_backend_enabled(data: Any) -> Any:
    """Reject a raw backend table naming a known but disabled kind.

    Unknown kinds pass through untouched; the discriminated union reports
    them as invalid tags.
    """
    if isinstance(data, dict):
        kind = data.get("type")
    else:
        kind = getattr(data, "type", None)

    if kind in BACKEND_KINDS and kind not in enabled_backend_kinds():
        raise PydanticCustomError(
            "backend_disabled",
            "backend '{kind}' is not enabled in this installation",
            {"kind": kind},
        )

    return data
