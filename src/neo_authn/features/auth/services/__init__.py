"""Auth feature services."""

from .id_token_verifier import IDTokenVerifier
from .oauth_authenticator import OAuthAuthenticator
from .noauthn_authenticator import NoAuthnAuthenticator

__all__ = [
    "IDTokenVerifier",
    "OAuthAuthenticator",
    "NoAuthnAuthenticator",
]
