"""
Exception classes for the ENS resolver.

All exceptions inherit from ENSResolverError and provide structured
error information with codes, messages, and optional details.
"""

from typing import Optional


class ENSResolverError(Exception):
    """Base exception for all ENS resolver errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class InvalidExpressionError(ENSResolverError):
    """Raised when text is not a valid ENS expression."""

    pass


class TransportError(ENSResolverError):
    """Raised when the resolver cannot be reached (network, timeout, HTTP status)."""

    pass


class DecodeError(ENSResolverError):
    """Raised when the resolver response body is not the expected JSON shape."""

    pass


class NotFoundError(ENSResolverError):
    """Raised when the resolver answered but carried no usable value."""

    pass


class ConfigurationError(ENSResolverError):
    """Raised when resolver configuration is unusable."""

    pass
