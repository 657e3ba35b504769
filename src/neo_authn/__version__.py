"""Version information for neo-authn."""

__version__ = "0.1.0"
