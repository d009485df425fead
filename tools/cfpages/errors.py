# cfpages/errors.py

from typing import Optional

class CFPagesError(Exception):
    """Base class for all cfpages errors."""
    pass
    
class NetworkError(CFPagesError):
    """Error related to network operations."""
    pass
    
class AuthenticationError(NetworkError):
    """Error related to authentication or authorization (401/403)."""
    pass

class CloudFoundryError(NetworkError):
    """Non-success response from the Cloud Controller, with its v2 error body."""

    def __init__(
        self,
        status_code: int,
        code: Optional[int] = None,
        description: Optional[str] = None,
        error_code: Optional[str] = None
    ):
        self.status_code = status_code
        self.code = code
        self.description = description
        self.error_code = error_code
        message = f"{status_code}"
        if error_code:
            message += f" {error_code}"
        if code is not None:
            message += f" ({code})"
        if description:
            message += f": {description}"
        super().__init__(message)

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500
    
class ParseError(CFPagesError):
    """Error related to parsing responses."""
    pass

class ProtocolError(ParseError):
    """Pagination metadata is unusable or the page cap was exceeded."""
    pass

class CardinalityError(CFPagesError):
    """A sequence expected to hold exactly one (or at most one) entry did not."""

    def __init__(self, message: str, count: int):
        # count is a lower bound when more than one entry was seen
        self.count = count
        super().__init__(message)

class EnumerationTimeout(CFPagesError):
    """Enumeration was still pending when its deadline passed."""
    pass
    
class ConfigError(CFPagesError):
    """Error related to configuration."""
    pass
