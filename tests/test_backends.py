"""Tests for backend configurations and backend kind selection."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from twinbox.backends import (
    BACKEND_KINDS,
    ImapConfig,
    MaildirConfig,
    NotmuchConfig,
    OAuth2AuthConfig,
    PasswordAuthConfig,
    enabled_backend_kinds,
)
from twinbox.backends.imap import ImapEncryption, OAuth2Method
from twinbox.config.schema import BackendGlobalConfig


class TestEnabledBackendKinds:
    """Tests for TWINBOX_BACKENDS handling."""

    def test_all_enabled_by_default(self):
        """Every known kind is enabled without TWINBOX_BACKENDS."""
        assert enabled_backend_kinds() == frozenset(BACKEND_KINDS)

    def test_reads_comma_separated_list(self, monkeypatch):
        """TWINBOX_BACKENDS restricts the enabled kinds."""
        monkeypatch.setenv("TWINBOX_BACKENDS", " imap , maildir ")

        assert enabled_backend_kinds() == frozenset({"imap", "maildir"})

    def test_ignores_unknown_kinds(self, monkeypatch):
        """Unknown kinds in TWINBOX_BACKENDS are ignored."""
        monkeypatch.setenv("TWINBOX_BACKENDS", "maildir,pop3")

        assert enabled_backend_kinds() == frozenset({"maildir"})


class TestBackendUnion:
    """Tests for the type-tagged backend union."""

    def test_selects_variant_by_type(self):
        """The type key selects the backend variant."""
        side = BackendGlobalConfig.model_validate(
            {"backend": {"type": "notmuch", "database-path": "~/.mail"}}
        )

        assert isinstance(side.backend, NotmuchConfig)
        assert side.backend.kind == "notmuch"
        assert side.backend.database_path == Path("~/.mail")

    def test_rejects_unknown_type(self):
        """A type outside the known kinds fails."""
        with pytest.raises(ValidationError) as exc_info:
            BackendGlobalConfig.model_validate({"backend": {"type": "pop3"}})

        assert exc_info.value.errors()[0]["type"] == "union_tag_invalid"

    def test_rejects_missing_type(self):
        """A backend without type fails."""
        with pytest.raises(ValidationError):
            BackendGlobalConfig.model_validate({"backend": {"root-dir": "/mail"}})

    def test_rejects_disabled_type(self, monkeypatch):
        """A known but disabled kind fails with a dedicated error."""
        monkeypatch.setenv("TWINBOX_BACKENDS", "imap,maildir")

        with pytest.raises(ValidationError) as exc_info:
            BackendGlobalConfig.model_validate(
                {"backend": {"type": "notmuch"}}
            )

        error = exc_info.value.errors()[0]
        assert error["type"] == "backend_disabled"
        assert error["loc"] == ("backend",)
        assert error["ctx"] == {"kind": "notmuch"}

    def test_rejects_fields_of_another_variant(self):
        """Keys of another backend kind are unknown keys."""
        with pytest.raises(ValidationError):
            BackendGlobalConfig.model_validate(
                {"backend": {"type": "maildir", "root-dir": "/mail", "host": "x"}}
            )


class TestImapConfig:
    """Tests for IMAP configuration."""

    def test_defaults(self):
        """Port, encryption and auth have defaults."""
        config = ImapConfig.model_validate(
            {"type": "imap", "host": "imap.example.com", "login": "me"}
        )

        assert config.port == 993
        assert config.encryption is ImapEncryption.TLS
        assert isinstance(config.auth, PasswordAuthConfig)
        assert config.auth.password.is_undefined
        assert config.auth_configs() == [config.auth]

    def test_parses_oauth2(self):
        """OAuth 2.0 auth is selected by its type."""
        config = ImapConfig.model_validate(
            {
                "type": "imap",
                "host": "imap.example.com",
                "login": "me",
                "encryption": "start-tls",
                "port": 143,
                "auth": {
                    "type": "oauth2",
                    "method": "oauthbearer",
                    "client-id": "client",
                    "auth-url": "https://auth.example.com",
                    "token-url": "https://token.example.com",
                    "access-token": {"keyring": "token"},
                    "scopes": ["mail"],
                },
            }
        )

        assert config.encryption is ImapEncryption.START_TLS
        assert isinstance(config.auth, OAuth2AuthConfig)
        assert config.auth.method is OAuth2Method.OAUTHBEARER
        assert config.auth.access_token.keyring == "token"
        assert config.auth.client_secret.is_undefined
        assert config.auth.pkce is False

    def test_rejects_invalid_port(self):
        """Ports outside 1-65535 fail."""
        with pytest.raises(ValidationError):
            ImapConfig(host="imap.example.com", login="me", port=0)

    def test_rejects_unknown_auth_type(self):
        """Unknown auth types fail."""
        with pytest.raises(ValidationError):
            ImapConfig.model_validate(
                {
                    "type": "imap",
                    "host": "imap.example.com",
                    "login": "me",
                    "auth": {"type": "kerberos"},
                }
            )


class TestLocalBackends:
    """Tests for local backends, which have no authentication."""

    def test_maildir(self):
        """Maildir needs a root directory."""
        config = MaildirConfig.model_validate({"type": "maildir", "root-dir": "~/Mail"})

        assert config.root_path() == Path.home() / "Mail"
        assert config.maildirpp is False
        assert config.auth_configs() == []

    def test_maildir_requires_root_dir(self):
        """A Maildir backend without root-dir fails."""
        with pytest.raises(ValidationError):
            MaildirConfig.model_validate({"type": "maildir"})

    def test_notmuch_all_optional(self):
        """Notmuch falls back to its own configuration."""
        config = NotmuchConfig.model_validate({"type": "notmuch"})

        assert config.database_path is None
        assert config.profile is None
        assert config.auth_configs() == []
