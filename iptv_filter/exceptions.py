"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class IptvFilterError(Exception):
    """Base exception for all application-specific errors."""


class MasterPlaylistError(IptvFilterError):
    """Raised when the master playlist cannot be retrieved. Aborts the run."""


class ConfigurationError(IptvFilterError):
    """Raised for issues related to configuration loading or validation."""


class OutputWriteError(IptvFilterError):
    """Raised when the filtered playlist cannot be written to disk."""
