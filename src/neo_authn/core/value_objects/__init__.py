"""Value objects for neo-authn."""

from .identifiers import TokenId, TokenSecret

__all__ = [
    "TokenId",
    "TokenSecret",
]
