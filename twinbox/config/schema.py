"""Configuration schema definitions.

Pydantic models matching the structure of config.toml. Keys are kebab-case
and unknown keys are rejected at every level, so a typo is an error rather
than a silently ignored setting.

Example account:

    [accounts.work]
    default = true
    folder.filter.include = ["INBOX", "Sent"]

    left.backend.type = "maildir"
    left.backend.root-dir = "~/Mail/work"

    right.backend.type = "imap"
    right.backend.host = "imap.example.com"
    right.backend.login = "me@example.com"
    right.folder.permissions.delete = false
"""

import logging

from pydantic import Field, field_validator

from twinbox.backends import BackendConfig, check_backend_enabled
from twinbox.errors import CredentialError, Issue
from twinbox.model import ConfigModel
from twinbox.secret import replace_undefined_keyring_entries
from twinbox.sync.config import (
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

logger = logging.getLogger(__name__)


class FolderConfig(ConfigModel):
    filter: FolderSyncStrategy = Field(default_factory=FolderSyncStrategy)


class EnvelopeConfig(ConfigModel):
    filter: EnvelopeSyncFilters = Field(default_factory=EnvelopeSyncFilters)


class FolderBackendConfig(ConfigModel):
    permissions: FolderSyncPermissions = Field(default_factory=FolderSyncPermissions)


class FlagBackendConfig(ConfigModel):
    permissions: FlagSyncPermissions = Field(default_factory=FlagSyncPermissions)


class MessageBackendConfig(ConfigModel):
    permissions: MessageSyncPermissions = Field(default_factory=MessageSyncPermissions)


class BackendGlobalConfig(ConfigModel):
    """One side (left or right) of an account.

    Attributes:
        backend: Backend-specific configuration, tagged by its "type" key.
        folder: Folder permissions of this side.
        flag: Flag permissions of this side.
        message: Message permissions of this side.
    """

    backend: BackendConfig
    folder: FolderBackendConfig | None = None
    flag: FlagBackendConfig | None = None
    message: MessageBackendConfig | None = None

    @field_validator("backend", mode="before")
    @classmethod
    def _backend_enabled(cls, value):
        return check_backend_enabled(value)

    def folder_permissions(self) -> FolderSyncPermissions:
        return self.folder.permissions if self.folder else FolderSyncPermissions()

    def flag_permissions(self) -> FlagSyncPermissions:
        return self.flag.permissions if self.flag else FlagSyncPermissions()

    def message_permissions(self) -> MessageSyncPermissions:
        return self.message.permissions if self.message else MessageSyncPermissions()

    def into_account_config(
        self,
        name: str,
        folder_filter: FolderSyncStrategy,
        envelope_filter: EnvelopeSyncFilters,
    ) -> SyncSide:
        """Compile this side into the configuration consumed by the sync engine.

        Does not modify self. Both sides of an account must be given the
        same filters; see AccountConfig.into_sync_pair.

        Args:
            name: Account name.
            folder_filter: Folders taking part in the sync.
            envelope_filter: Envelopes taking part in the sync.

        Returns:
            The backend configuration (this side's own object) and the
            engine account configuration.
        """
        account = SyncAccountConfig(
            name=name,
            folder=FolderSyncConfig(
                filter=folder_filter,
                permissions=self.folder_permissions(),
            ),
            envelope=EnvelopeSyncConfig(filter=envelope_filter),
            flag=FlagSyncConfig(permissions=self.flag_permissions()),
            message=MessageSyncConfig(permissions=self.message_permissions()),
        )

        return SyncSide(self.backend, account)


class AccountConfig(ConfigModel):
    """Single account configuration.

    Left and right are symmetric: neither is a source nor a target.

    Attributes:
        default: Use this account when no account name is given.
        folder: Folder filter shared by both sides.
        envelope: Envelope filter shared by both sides.
        left: Configuration of the left side.
        right: Configuration of the right side.
    """

    default: bool | None = None
    folder: FolderConfig | None = None
    envelope: EnvelopeConfig | None = None
    left: BackendGlobalConfig
    right: BackendGlobalConfig

    def is_default(self) -> bool:
        return bool(self.default)

    def folder_filter(self) -> FolderSyncStrategy:
        return self.folder.filter if self.folder else FolderSyncStrategy()

    def envelope_filter(self) -> EnvelopeSyncFilters:
        return self.envelope.filter if self.envelope else EnvelopeSyncFilters()

    def configure(self, account_name: str) -> None:
        """Replace undefined secrets with keyring references named after the account.

        Left is processed before right. Both sides are always attempted,
        then every failure is reported at once. Secrets that are already
        defined are kept, so configuring twice changes nothing.

        Args:
            account_name: Account name, used to derive keyring entry names.

        Raises:
            CredentialError: If a keyring entry name cannot be built.
        """
        failures: list[Issue] = []

        for side_name, side in (("left", self.left), ("right", self.right)):
            for auth in side.backend.auth_configs():
                try:
                    replace_undefined_keyring_entries(auth, account_name)
                except ValueError as e:
                    failures.append((f"{side_name}.backend.auth", str(e)))

        if failures:
            raise CredentialError(account_name, failures)

        logger.debug("Configured credentials of account '%s'", account_name)

    def into_sync_pair(self, name: str) -> SyncPair:
        """Compile both sides with the filters of this account.

        The folder and envelope filters are resolved once and given to both
        sides, so left and right always agree on the sync scope.
        """
        folder_filter = self.folder_filter()
        envelope_filter = self.envelope_filter()

        return SyncPair(
            name=name,
            left=self.left.into_account_config(name, folder_filter, envelope_filter),
            right=self.right.into_account_config(name, folder_filter, envelope_filter),
        )


class TwinboxConfig(ConfigModel):
    """Root configuration structure.

    Attributes:
        accounts: Dict mapping account names to their configurations.
    """

    accounts: dict[str, AccountConfig] = Field(default_factory=dict)
