"""Synchronization policy types and engine-facing configuration.

Usage:
    from twinbox.sync import FolderSyncStrategy, SyncAccountConfig

    strategy = FolderSyncStrategy.including(["INBOX", "Sent"])
"""

from .config import (
    EnvelopeSyncConfig,
    EnvelopeSyncFilters,
    FlagSyncConfig,
    FlagSyncPermissions,
    FolderSyncConfig,
    FolderSyncPermissions,
    FolderSyncStrategy,
    MessageSyncConfig,
    MessageSyncPermissions,
    SyncAccountConfig,
    SyncPair,
    SyncSide,
)

__all__ = [
    "EnvelopeSyncConfig",
    "EnvelopeSyncFilters",
    "FlagSyncConfig",
    "FlagSyncPermissions",
    "FolderSyncConfig",
    "FolderSyncPermissions",
    "FolderSyncStrategy",
    "MessageSyncConfig",
    "MessageSyncPermissions",
    "SyncAccountConfig",
    "SyncPair",
    "SyncSide",
]
