"""Value objects for token credentials.

A caller proves possession of a previously issued token by presenting the
credential pair (TokenId, TokenSecret).
"""

import hmac
import secrets
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TokenId:
    """Token identifier value object with basic validation.
    
    The identifier is the provider's subject claim, stable per user.
    """
    value: str
    
    def __post_init__(self):
        if not self.value or not isinstance(self.value, str):
            raise ValueError("Token ID must be a non-empty string")
    
    @classmethod
    def of(cls, value: Union['TokenId', str]) -> 'TokenId':
        """Coerce a raw string or an existing TokenId."""
        if isinstance(value, TokenId):
            return value
        return cls(value)
    
    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TokenSecret:
    """Token secret value object.
    
    The secret never appears in repr() so it cannot leak through logging of
    containing objects.
    """
    value: str
    
    def __post_init__(self):
        if not self.value or not isinstance(self.value, str):
            raise ValueError("Token secret must be a non-empty string")
    
    @classmethod
    def generate(cls) -> 'TokenSecret':
        """Generate a new random URL-safe secret."""
        return cls(secrets.token_urlsafe(32))
    
    @classmethod
    def of(cls, value: Union['TokenSecret', str]) -> 'TokenSecret':
        """Coerce a raw string or an existing TokenSecret."""
        if isinstance(value, TokenSecret):
            return value
        return cls(value)
    
    def matches(self, other: Union['TokenSecret', str]) -> bool:
        """Compare with another secret in constant time."""
        other_value = other.value if isinstance(other, TokenSecret) else other
        if not isinstance(other_value, str):
            return False
        return hmac.compare_digest(self.value.encode("utf-8"), other_value.encode("utf-8"))
    
    def masked(self) -> str:
        """Masked form safe for logs."""
        if len(self.value) <= 8:
            return "***"
        return f"{self.value[:4]}...{self.value[-4:]}"
    
    def __str__(self) -> str:
        return self.value
    
    def __repr__(self) -> str:
        return "TokenSecret(value='***')"
