"""Default configuration template.

This template is written to ~/.config/twinbox/config.toml
when running `twinbox config init`.
"""

CONFIG_TEMPLATE = """\
# Twinbox Configuration
#
# Each account pairs two mail stores, "left" and "right", and keeps them
# in sync. Neither side is a source or a target.
#
# Example account syncing a Maildir tree with an IMAP server:
#
# [accounts.work]
# default = true
#
# # Folders and envelopes taking part in the sync (both sides):
# # "all", or a table with include = [...] or exclude = [...]
# folder.filter = "all"
# envelope.filter = "all"
#
# left.backend.type = "maildir"
# left.backend.root-dir = "~/Mail/work"
#
# right.backend.type = "imap"
# right.backend.host = "imap.example.com"
# right.backend.port = 993
# right.backend.encryption = "tls"
# right.backend.login = "me@example.com"
# right.backend.auth.type = "password"
# right.backend.auth.password.cmd = "pass show example"
#
# # Without a password entry, the keyring entry "work-imap-passwd" is used.
#
# # What each side is allowed to change (all true by default):
# right.folder.permissions.create = true
# right.folder.permissions.delete = false
# right.flag.permissions.update = true
# right.message.permissions.create = true
# right.message.permissions.delete = false
#
# Other backend types: "notmuch" (database-path, maildir-path,
# config-path, profile).
"""
