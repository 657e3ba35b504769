"""Token entity."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from ....core.value_objects import TokenId, TokenSecret

DEFAULT_TOKEN_LIFETIME = timedelta(days=7)


@dataclass(frozen=True)
class Token:
    """Verified identity issued after a successful login.
    
    The id is the provider's subject claim; the secret is issued here and must
    be presented alongside the id on every validation.
    """
    
    id: TokenId
    secret: TokenSecret
    email: str
    name: str
    expires_at: datetime
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    
    def __post_init__(self):
        """Validate token after initialization."""
        if not isinstance(self.id, TokenId):
            raise ValueError("Token id must be a TokenId")
        if not isinstance(self.secret, TokenSecret):
            raise ValueError("Token secret must be a TokenSecret")
        if not isinstance(self.email, str) or not isinstance(self.name, str):
            raise ValueError("Token email and name must be strings")
        if self.expires_at.tzinfo is None:
            raise ValueError("expires_at must be timezone-aware")
    
    @classmethod
    def new(
        cls,
        sub: str,
        email: str,
        name: str,
        lifetime: Optional[timedelta] = None,
    ) -> 'Token':
        """Issue a fresh token with a new secret for a verified subject."""
        now = datetime.now(timezone.utc)
        return cls(
            id=TokenId(sub),
            secret=TokenSecret.generate(),
            email=email,
            name=name,
            expires_at=now + (lifetime or DEFAULT_TOKEN_LIFETIME),
            created_at=now,
        )
    
    @property
    def sub(self) -> str:
        """Provider subject identifier."""
        return self.id.value
    
    @property
    def is_expired(self) -> bool:
        """Check if token is expired."""
        return datetime.now(timezone.utc) >= self.expires_at
    
    def to_dict(self) -> Dict[str, Any]:
        """Serialise token for persistence."""
        return {
            "id": self.id.value,
            "secret": self.secret.value,
            "email": self.email,
            "name": self.name,
            "expires_at": self.expires_at.isoformat(),
            "created_at": self.created_at.isoformat(),
        }
    
    def to_safe_dict(self) -> Dict[str, Any]:
        """Serialise token for logs with the secret masked."""
        data = self.to_dict()
        data["secret"] = self.secret.masked()
        return data
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Token':
        """Rebuild a token from its persisted form."""
        return cls(
            id=TokenId(data["id"]),
            secret=TokenSecret(data["secret"]),
            email=data["email"],
            name=data["name"],
            expires_at=datetime.fromisoformat(data["expires_at"]),
            created_at=datetime.fromisoformat(data["created_at"]),
        )
