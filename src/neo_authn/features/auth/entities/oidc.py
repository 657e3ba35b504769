"""Provider payload models for the Slack OpenID Connect flow."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class OpenIDConfiguration(BaseModel):
    """OpenID Connect discovery document."""
    
    model_config = ConfigDict(extra="ignore")
    
    issuer: Optional[str] = None
    authorization_endpoint: Optional[str] = None
    token_endpoint: Optional[str] = None
    userinfo_endpoint: Optional[str] = None
    jwks_uri: str = Field(min_length=1)
    scopes_supported: List[str] = Field(default_factory=list)
    response_types_supported: List[str] = Field(default_factory=list)
    id_token_signing_alg_values_supported: List[str] = Field(default_factory=list)
    claims_supported: List[str] = Field(default_factory=list)
    token_endpoint_auth_methods_supported: List[str] = Field(default_factory=list)


class TeamInfo(BaseModel):
    """Workspace the user authenticated against."""
    
    model_config = ConfigDict(extra="ignore")
    
    id: Optional[str] = None
    name: Optional[str] = None


class AuthedUser(BaseModel):
    """User section of the token exchange response."""
    
    model_config = ConfigDict(extra="ignore")
    
    id: Optional[str] = None
    scope: Optional[str] = None
    access_token: Optional[str] = None
    token_type: Optional[str] = None


class TokenExchangeResponse(BaseModel):
    """Response of the authorization code exchange."""
    
    model_config = ConfigDict(extra="ignore")
    
    ok: bool = False
    access_token: Optional[str] = None
    token_type: Optional[str] = None
    scope: Optional[str] = None
    bot_user_id: Optional[str] = None
    app_id: Optional[str] = None
    team: Optional[TeamInfo] = None
    authed_user: Optional[AuthedUser] = None
    id_token: Optional[str] = None
    error: Optional[str] = None
    
    @property
    def is_success(self) -> bool:
        """True when the provider reported success without an error."""
        return self.ok and not self.error


class IdentityClaims(BaseModel):
    """Required identity claims extracted from a verified ID token.
    
    Strict strings: a claim of any other type is rejected, never coerced.
    """
    
    model_config = ConfigDict(extra="ignore")
    
    sub: StrictStr = Field(min_length=1)
    email: StrictStr
    name: StrictStr


class SlackUserProfile(BaseModel):
    """Profile section of a Slack user."""
    
    model_config = ConfigDict(extra="ignore")
    
    email: Optional[str] = None
    display_name: Optional[str] = None
    image_24: Optional[str] = None
    image_32: Optional[str] = None
    image_48: Optional[str] = None
    image_72: Optional[str] = None
    image_192: Optional[str] = None
    image_512: Optional[str] = None


class SlackUserInfo(BaseModel):
    """Slack user returned by users.info."""
    
    model_config = ConfigDict(extra="ignore")
    
    id: str
    name: Optional[str] = None
    real_name: Optional[str] = None
    profile: SlackUserProfile = Field(default_factory=SlackUserProfile)


class UserInfoResponse(BaseModel):
    """Envelope of the users.info API."""
    
    model_config = ConfigDict(extra="ignore")
    
    ok: bool = False
    user: Optional[SlackUserInfo] = None
    error: Optional[str] = None
