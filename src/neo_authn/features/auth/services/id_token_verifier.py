"""OpenID Connect ID token verification."""

import logging
from typing import Any, Dict, Set

import jwt
from jwt.exceptions import (
    DecodeError,
    InvalidSignatureError,
    InvalidTokenError,
    PyJWKError,
    PyJWKSetError,
)
from pydantic import ValidationError

from ....core.exceptions import ClaimError, ParseError, VerificationError
from ..adapters.slack_openid import SlackOpenIDAdapter
from ..entities.auth_config import OAuthConfig
from ..entities.oidc import IdentityClaims, OpenIDConfiguration

logger = logging.getLogger(__name__)

# Asymmetric algorithms only; "none" and HMAC are never accepted for ID tokens
SUPPORTED_ALGORITHMS: Set[str] = {
    'RS256', 'RS384', 'RS512',
    'ES256', 'ES384', 'ES512',
    'PS256', 'PS384', 'PS512',
    'EdDSA',
}

REQUIRED_TOKEN_CLAIMS = ["exp", "iat", "aud"]


class IDTokenVerifier:
    """Verifies identity tokens against the provider's published keys.
    
    Each verification resolves the key set through discovery, checks the
    signature, audience and time claims (with the configured clock skew) and
    decodes the identity claims. Any failure aborts the whole verification.
    """
    
    def __init__(self, adapter: SlackOpenIDAdapter, config: OAuthConfig):
        """Initialize ID token verifier.
        
        Args:
            adapter: HTTP adapter for discovery and key set fetches
            config: OAuth configuration (audience and clock skew)
        """
        self.adapter = adapter
        self.config = config
    
    async def verify(self, raw_token: str) -> IdentityClaims:
        """Verify an ID token and return its identity claims.
        
        Raises:
            NetworkError: If discovery or key set fetch fails in transport
            ProviderError: If discovery or key set fetch is rejected
            ParseError: If a payload or the token itself is malformed
            VerificationError: If signature, audience, issuer or time checks fail
            ClaimError: If sub, email or name is missing or not a string
        """
        if not raw_token:
            raise ParseError("ID token is empty")
        
        configuration = await self.adapter.get_openid_configuration()
        jwks = await self.adapter.fetch_jwks(configuration.jwks_uri)
        
        signing_key = self._select_signing_key(raw_token, jwks, configuration)
        claims = self._decode(raw_token, signing_key, configuration)
        identity = self.extract_identity(claims)
        
        logger.debug(f"ID token verified for subject {identity.sub}")
        return identity
    
    def _select_signing_key(
        self,
        raw_token: str,
        jwks: Dict[str, Any],
        configuration: OpenIDConfiguration,
    ) -> jwt.PyJWK:
        try:
            header = jwt.get_unverified_header(raw_token)
        except InvalidTokenError as e:
            raise ParseError("ID token is not a valid compact JWT", details={"error": str(e)}) from e

        try:
            key_set = jwt.PyJWKSet.from_dict(jwks)
        except (PyJWKSetError, PyJWKError) as e:
            raise VerificationError(
                "Signing key set has no usable keys",
                details={"jwks_uri": configuration.jwks_uri, "error": str(e)},
            ) from e
        
        kid = header.get("kid")
        if kid is None:
            if len(key_set.keys) != 1:
                raise VerificationError("ID token has no key id and the key set is ambiguous")
            signing_key = key_set.keys[0]
        else:
            matches = [key for key in key_set.keys if key.key_id == kid]
            if not matches:
                raise VerificationError("No signing key matches the ID token", details={"kid": kid})
            signing_key = matches[0]
        
        allowed = set(configuration.id_token_signing_alg_values_supported or ["RS256"])
        allowed &= SUPPORTED_ALGORITHMS
        
        algorithm = header.get("alg")
        if (
            not isinstance(algorithm, str)
            or algorithm not in allowed
            or algorithm != signing_key.algorithm_name
        ):
            raise VerificationError(
                "ID token algorithm is not accepted",
                details={"alg": algorithm, "key_alg": signing_key.algorithm_name},
            )
        
        return signing_key
    
    def _decode(
        self,
        raw_token: str,
        signing_key: jwt.PyJWK,
        configuration: OpenIDConfiguration,
    ) -> Dict[str, Any]:
        issuer = configuration.issuer if self.config.verify_issuer else None
        
        try:
            return jwt.decode(
                raw_token,
                key=signing_key.key,
                algorithms=[signing_key.algorithm_name],
                audience=self.config.client_id,
                issuer=issuer or None,
                leeway=self.config.clock_skew_seconds,
                # Claim typing is checked by IdentityClaims
                options={"require": REQUIRED_TOKEN_CLAIMS, "verify_sub": False, "verify_jti": False},
            )
        except InvalidSignatureError as e:
            logger.warning("ID token signature is invalid")
            raise VerificationError("ID token signature is invalid", details={"kid": signing_key.key_id}) from e
        except DecodeError as e:
            raise ParseError("ID token cannot be decoded", details={"error": str(e)}) from e
        except InvalidTokenError as e:
            logger.warning(f"ID token rejected: {e}")
            raise VerificationError(
                "ID token failed verification",
                details={"reason": e.__class__.__name__, "error": str(e)},
            ) from e
    
    @staticmethod
    def extract_identity(claims: Dict[str, Any]) -> IdentityClaims:
        """Decode the required identity claims, failing closed.
        
        Raises:
            ClaimError: On the first missing or wrongly typed claim
        """
        try:
            return IdentityClaims.model_validate(claims)
        except ValidationError as e:
            first = e.errors()[0]
            claim = ".".join(str(part) for part in first["loc"]) or "unknown"
            raise ClaimError(
                f"Invalid '{claim}' claim in ID token",
                details={"claim": claim, "reason": first["type"]},
            ) from e
