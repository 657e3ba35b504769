"""No-authentication strategy."""

import logging
from datetime import datetime, timezone
from typing import Union

from ....core.value_objects import TokenId, TokenSecret
from ..entities.token import Token

logger = logging.getLogger(__name__)

# Far enough ahead that the fixed identity never expires
NO_AUTHN_TOKEN_EXPIRY = datetime(9999, 12, 31, tzinfo=timezone.utc)


class NoAuthnAuthenticator:
    """Authentication strategy that always resolves to one configured user.
    
    For development, test and single-tenant deployments without an identity
    provider. Inputs are ignored; no network or repository access happens.
    """
    
    def __init__(self, sub: str, email: str, name: str):
        """Initialize no-authn authenticator.
        
        Args:
            sub: Subject (Slack user ID) of the fixed identity
            email: Email of the fixed identity
            name: Display name of the fixed identity
        """
        self._token = Token(
            id=TokenId(sub),
            secret=TokenSecret.generate(),
            email=email,
            name=name,
            expires_at=NO_AUTHN_TOKEN_EXPIRY,
        )
        logger.info(f"No-authn mode active for user {sub}")
    
    @property
    def token(self) -> Token:
        """The fixed identity."""
        return self._token
    
    def get_auth_url(self, state: str) -> str:
        """Skip the provider: login lands on the root path."""
        return "/"
    
    async def handle_callback(self, code: str) -> Token:
        """Return the fixed identity."""
        return self._token
    
    async def validate_token(
        self,
        token_id: Union[TokenId, str],
        token_secret: Union[TokenSecret, str],
    ) -> Token:
        """Return the fixed identity regardless of the credential."""
        return self._token
    
    async def logout(self, token_id: Union[TokenId, str]) -> None:
        """Nothing to invalidate."""
        return None
    
    def is_no_authn(self) -> bool:
        """No-authn strategy performs no authentication."""
        return True
