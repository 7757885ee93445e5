"""IMAP backend configuration.

The only remote backend, hence the only one with authentication:

    right.backend.type = "imap"
    right.backend.host = "imap.example.com"
    right.backend.login = "me@example.com"
    right.backend.auth.type = "password"
    right.backend.auth.password.cmd = "pass show example"

Secrets left undefined are filled with keyring references named after the
account (e.g., "work-imap-passwd") when the account is configured.
"""

from enum import Enum
from typing import Annotated, ClassVar, Literal, Union

from pydantic import Field

from twinbox.model import ConfigModel
from twinbox.secret import Secret

from .base import BackendModel


class ImapEncryption(str, Enum):
    TLS = "tls"
    START_TLS = "start-tls"
    NONE = "none"


class OAuth2Method(str, Enum):
    XOAUTH2 = "xoauth2"
    OAUTHBEARER = "oauthbearer"


class PasswordAuthConfig(ConfigModel):
    """Login/password authentication."""

    # field name -> keyring entry suffix
    KEYRING_ENTRIES: ClassVar[dict[str, str]] = {"password": "imap-passwd"}

    type: Literal["password"] = "password"
    password: Secret = Field(default_factory=Secret)


class OAuth2AuthConfig(ConfigModel):
    """OAuth 2.0 authentication.

    Attributes:
        method: SASL mechanism used to present the token.
        client_id: OAuth client ID of the registered application.
        client_secret: OAuth client secret (absent for public clients using PKCE).
        auth_url: Authorization endpoint.
        token_url: Token endpoint.
        access_token: Cached access token.
        refresh_token: Cached refresh token.
        pkce: Use Proof Key for Code Exchange during authorization.
        scopes: Scopes requested during authorization.
        redirect_host: Host of the local redirect server.
        redirect_port: Port of the local redirect server, random if unset.
    """

    KEYRING_ENTRIES: ClassVar[dict[str, str]] = {
        "client_secret": "imap-oauth2-client-secret",
        "access_token": "imap-oauth2-access-token",
        "refresh_token": "imap-oauth2-refresh-token",
    }

    type: Literal["oauth2"] = "oauth2"
    method: OAuth2Method = OAuth2Method.XOAUTH2
    client_id: str
    client_secret: Secret = Field(default_factory=Secret)
    auth_url: str
    token_url: str
    access_token: Secret = Field(default_factory=Secret)
    refresh_token: Secret = Field(default_factory=Secret)
    pkce: bool = False
    scopes: list[str] = Field(default_factory=list)
    redirect_host: str = "localhost"
    redirect_port: int | None = Field(default=None, ge=1, le=65535)


ImapAuthConfig = Annotated[
    Union[PasswordAuthConfig, OAuth2AuthConfig],
    Field(discriminator="type"),
]


class ImapConfig(BackendModel):
    """Connection to a remote IMAP server."""

    type: Literal["imap"] = "imap"
    host: str
    port: int = Field(default=993, ge=1, le=65535)
    encryption: ImapEncryption = ImapEncryption.TLS
    login: str
    auth: ImapAuthConfig = Field(default_factory=PasswordAuthConfig)

    def auth_configs(self) -> list[PasswordAuthConfig | OAuth2AuthConfig]:
        return [self.auth]
