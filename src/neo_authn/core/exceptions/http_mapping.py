"""HTTP status code mapping for exceptions.

The HTTP layer decides what a failure looks like to the user; this mapping
gives it a default per error kind.
"""

from typing import Dict, Type

from .base import NeoAuthnError
from .auth import (
    AuthenticationError,
    ClaimError,
    ConfigError,
    NetworkError,
    ParseError,
    ProviderError,
    StorageError,
    TokenNotFoundError,
    Unauthorized,
    VerificationError,
)


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 401 Unauthorized
    AuthenticationError: 401,
    Unauthorized: 401,
    VerificationError: 401,
    ClaimError: 401,
    
    # 404 Not Found
    TokenNotFoundError: 404,
    
    # 500 Internal Server Error
    ConfigError: 500,
    StorageError: 500,
    
    # 502 Bad Gateway
    ProviderError: 502,
    ParseError: 502,
    
    # 503 Service Unavailable
    NetworkError: 503,
    
    # Default for NeoAuthnError
    NeoAuthnError: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception, walking the class hierarchy.
    
    Args:
        exception: The exception instance
        
    Returns:
        HTTP status code, 500 when nothing in the hierarchy is mapped
    """
    for exception_type in type(exception).__mro__:
        if exception_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exception_type]
        if exception_type is Exception:
            break
    return 500
