"""Base exceptions for neo-authn.

All exceptions raised by the library inherit from NeoAuthnError and carry an
error code plus a details dictionary for structured logging and API responses.
"""

from typing import Any, Dict, Optional


class NeoAuthnError(Exception):
    """Base exception for all neo-authn errors."""
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
    
    def __str__(self) -> str:
        """String representation with context."""
        if not self.details:
            return self.message
        
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.
    
    Args:
        exception: The exception instance
        
    Returns:
        HTTP status code
    """
    from .http_mapping import get_http_status_code as get_mapped_status_code
    return get_mapped_status_code(exception)


def create_error_response(exception: NeoAuthnError) -> Dict[str, Any]:
    """Create standardized error response from exception.
    
    Args:
        exception: The neo-authn exception
        
    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
