"""Auth adapters for external identity providers."""

from .slack_openid import SlackOpenIDAdapter

__all__ = [
    "SlackOpenIDAdapter",
]
