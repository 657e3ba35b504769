"""Features module for neo-authn."""

from .auth import create_auth_strategy

__all__ = ["create_auth_strategy"]
