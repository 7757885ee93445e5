"""Shared fixtures for twinbox tests."""

import pytest


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests independent from the user's environment.

    Every backend kind is enabled and the config file points into tmp_path.
    """
    monkeypatch.delenv("TWINBOX_BACKENDS", raising=False)
    monkeypatch.setenv("TWINBOX_CONFIG", str(tmp_path / "config.toml"))


@pytest.fixture
def account_data() -> dict:
    """Raw document of an account syncing a Maildir tree with IMAP."""
    return {
        "default": True,
        "envelope": {"filter": {"include": ["INBOX"]}},
        "left": {
            "backend": {"type": "maildir", "root-dir": "/mail/a"},
        },
        "right": {
            "backend": {
                "type": "imap",
                "host": "imap.example.com",
                "login": "me@example.com",
                "auth": {"type": "password"},
            },
            "folder": {"permissions": {"delete": False}},
        },
    }
