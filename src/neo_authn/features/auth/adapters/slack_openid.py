"""Slack OpenID Connect adapter."""

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from ....core.exceptions import NetworkError, ParseError, ProviderError
from ..entities.auth_config import ProviderEndpoints
from ..entities.oidc import (
    OpenIDConfiguration,
    SlackUserInfo,
    TokenExchangeResponse,
    UserInfoResponse,
)

logger = logging.getLogger(__name__)


class SlackOpenIDAdapter:
    """Adapter for the HTTP side of Slack's OpenID Connect flow.
    
    Every call makes exactly one request and never retries. The configured
    timeout bounds each request, and cancelling the awaiting task cancels
    the request in flight.
    """
    
    def __init__(
        self,
        endpoints: Optional[ProviderEndpoints] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize Slack OpenID adapter.
        
        Args:
            endpoints: Provider endpoints; Slack defaults when omitted
            client: Shared HTTP client; one is created and owned when omitted
        """
        self.endpoints = endpoints or ProviderEndpoints()
        self._client = client
        self._owns_client = client is None
    
    async def __aenter__(self):
        """Async context manager entry."""
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
    
    async def aclose(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
    
    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.endpoints.http_timeout_seconds)
        return self._client
    
    async def exchange_code(
        self,
        code: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
    ) -> TokenExchangeResponse:
        """Exchange an authorization code for tokens.
        
        The response is returned as decoded; judging ok/error is left to
        the caller.
        """
        form = {
            "client_id": client_id,
            "client_secret": client_secret,
            "code": code,
            "redirect_uri": redirect_uri,
        }
        
        response = await self._request("POST", self.endpoints.token_url, data=form)
        payload = self._decode_json(response, "token exchange response")
        
        try:
            return TokenExchangeResponse.model_validate(payload)
        except ValidationError as e:
            raise ParseError(
                "Malformed token exchange response",
                details={"url": self.endpoints.token_url, "validation_error": str(e)},
            ) from e
    
    async def get_openid_configuration(self) -> OpenIDConfiguration:
        """Fetch the provider's OpenID discovery document."""
        url = self.endpoints.discovery_url
        response = await self._request("GET", url)
        self._ensure_ok_status(response, "OpenID configuration")
        payload = self._decode_json(response, "OpenID configuration")
        
        try:
            configuration = OpenIDConfiguration.model_validate(payload)
        except ValidationError as e:
            raise ParseError(
                "Malformed OpenID configuration",
                details={"url": url, "validation_error": str(e)},
            ) from e
        
        logger.debug(f"Fetched OpenID configuration, jwks_uri={configuration.jwks_uri}")
        return configuration
    
    async def fetch_jwks(self, jwks_uri: str) -> Dict[str, Any]:
        """Fetch the provider's signing key set."""
        response = await self._request("GET", jwks_uri)
        self._ensure_ok_status(response, "signing key set")
        payload = self._decode_json(response, "signing key set")
        
        if not isinstance(payload.get("keys"), list):
            raise ParseError("Signing key set has no 'keys' list", details={"jwks_uri": jwks_uri})
        
        logger.debug(f"Fetched {len(payload['keys'])} signing keys from {jwks_uri}")
        return payload
    
    async def get_user_info(self, user_id: str, bot_token: str) -> SlackUserInfo:
        """Look up a Slack user with the bot credential."""
        url = self.endpoints.user_info_url
        response = await self._request(
            "GET",
            url,
            params={"user": user_id},
            headers={"Authorization": f"Bearer {bot_token}"},
        )
        self._ensure_ok_status(response, "users.info")
        payload = self._decode_json(response, "users.info response")
        
        try:
            result = UserInfoResponse.model_validate(payload)
        except ValidationError as e:
            raise ParseError(
                "Malformed users.info response",
                details={"user_id": user_id, "validation_error": str(e)},
            ) from e
        
        if not result.ok:
            raise ProviderError("Slack API error", details={"user_id": user_id, "error": result.error})
        
        if result.user is None:
            raise ProviderError("Slack API returned no user", details={"user_id": user_id})
        
        return result.user
    
    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return await self._get_client().request(
                method,
                url,
                timeout=self.endpoints.http_timeout_seconds,
                **kwargs,
            )
        except httpx.TimeoutException as e:
            logger.warning(f"Request to {url} timed out after {self.endpoints.http_timeout_seconds}s")
            raise NetworkError(
                "Request to identity provider timed out",
                details={"method": method, "url": url},
            ) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise NetworkError(
                "Request to identity provider failed",
                details={"method": method, "url": url, "error": str(e)},
            ) from e
    
    @staticmethod
    def _ensure_ok_status(response: httpx.Response, what: str) -> None:
        if response.status_code != 200:
            raise ProviderError(
                f"Failed to fetch {what}",
                details={"url": str(response.request.url), "status": response.status_code},
            )
    
    @staticmethod
    def _decode_json(response: httpx.Response, what: str) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as e:
            raise ParseError(
                f"Failed to parse {what}",
                details={"url": str(response.request.url), "status": response.status_code},
            ) from e
        
        if not isinstance(payload, dict):
            raise ParseError(f"Unexpected {what} shape", details={"url": str(response.request.url)})
        
        return payload
