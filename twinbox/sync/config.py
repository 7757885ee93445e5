"""Synchronization policy types and engine-facing configuration.

Two families of types live here:

- Policy values authored by the user (filters and permissions). Each one
  owns a canonical default, so an omitted policy always means "default"
  and never "unset".
- Engine-facing configuration, built fresh for every sync run from the
  user-facing account configuration. These are plain frozen dataclasses;
  every field is fully resolved.

Serialized filter forms:
    filter = "all"
    filter.include = ["INBOX", "Sent"]
    filter.exclude = ["Spam"]
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, NamedTuple

from pydantic import ConfigDict, model_serializer, model_validator

from twinbox.model import ConfigModel

if TYPE_CHECKING:
    from twinbox.backends import BackendConfig


class _NameFilter(ConfigModel):
    """Selects names by inclusion or exclusion; selects everything by default.

    Names are kept as a set, so ordering and duplicates in the source
    document do not matter. Serialized lists are sorted.
    """

    model_config = ConfigDict(frozen=True)

    include: frozenset[str] | None = None
    exclude: frozenset[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _parse_all(cls, data: Any) -> Any:
        if isinstance(data, str):
            if data == "all":
                return {}
            raise ValueError(
                f"expected \"all\" or a table with \"include\" or \"exclude\", got {data!r}"
            )
        return data

    @model_validator(mode="after")
    def _check_exclusive(self):
        if self.include is not None and self.exclude is not None:
            raise ValueError("\"include\" and \"exclude\" cannot be set together")
        return self

    @model_serializer
    def _serialize(self) -> str | dict[str, list[str]]:
        if self.include is not None:
            return {"include": sorted(self.include)}
        if self.exclude is not None:
            return {"exclude": sorted(self.exclude)}
        return "all"

    @classmethod
    def including(cls, names: Iterable[str]):
        return cls(include=frozenset(names))

    @classmethod
    def excluding(cls, names: Iterable[str]):
        return cls(exclude=frozenset(names))

    @property
    def kind(self) -> str:
        """One of "all", "include" or "exclude"."""
        if self.include is not None:
            return "include"
        if self.exclude is not None:
            return "exclude"
        return "all"

    def __str__(self) -> str:
        if self.include is not None:
            return f"include {', '.join(sorted(self.include))}"
        if self.exclude is not None:
            return f"exclude {', '.join(sorted(self.exclude))}"
        return "all"


class FolderSyncStrategy(_NameFilter):
    """Which folders take part in synchronization."""


class EnvelopeSyncFilters(_NameFilter):
    """Which envelopes take part in synchronization."""


class FolderSyncPermissions(ConfigModel):
    """Mutations allowed on folders of one side."""

    model_config = ConfigDict(frozen=True)

    create: bool = True
    delete: bool = True


class FlagSyncPermissions(ConfigModel):
    """Mutations allowed on flags of one side."""

    model_config = ConfigDict(frozen=True)

    update: bool = True


class MessageSyncPermissions(ConfigModel):
    """Mutations allowed on messages of one side."""

    model_config = ConfigDict(frozen=True)

    create: bool = True
    delete: bool = True


# Engine-facing configuration


@dataclass(frozen=True)
class FolderSyncConfig:
    filter: FolderSyncStrategy = field(default_factory=FolderSyncStrategy)
    permissions: FolderSyncPermissions = field(default_factory=FolderSyncPermissions)


@dataclass(frozen=True)
class EnvelopeSyncConfig:
    # Envelopes carry no permission dimension, only a filter.
    filter: EnvelopeSyncFilters = field(default_factory=EnvelopeSyncFilters)


@dataclass(frozen=True)
class FlagSyncConfig:
    permissions: FlagSyncPermissions = field(default_factory=FlagSyncPermissions)


@dataclass(frozen=True)
class MessageSyncConfig:
    permissions: MessageSyncPermissions = field(default_factory=MessageSyncPermissions)


@dataclass(frozen=True)
class SyncAccountConfig:
    """Fully resolved account configuration consumed by the sync engine.

    Attributes:
        name: Account name.
        folder: Folder filter and permissions of this side.
        envelope: Envelope filter, shared by both sides of an account.
        flag: Flag permissions of this side.
        message: Message permissions of this side.
        sync_dir: Directory for the engine's own cache. None lets the
                  engine pick its default location.
    """

    name: str = ""
    folder: FolderSyncConfig = field(default_factory=FolderSyncConfig)
    envelope: EnvelopeSyncConfig = field(default_factory=EnvelopeSyncConfig)
    flag: FlagSyncConfig = field(default_factory=FlagSyncConfig)
    message: MessageSyncConfig = field(default_factory=MessageSyncConfig)
    sync_dir: Path | None = None


class SyncSide(NamedTuple):
    """Backend configuration and engine configuration for one side."""

    backend: BackendConfig
    account: SyncAccountConfig


@dataclass(frozen=True)
class SyncPair:
    """Both resolved sides of one account, ready for a sync run."""

    name: str
    left: SyncSide
    right: SyncSide
