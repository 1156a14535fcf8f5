"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

import logging
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator

from iptv_filter import __version__

log = logging.getLogger(__name__)

DEFAULT_MASTER_URL = "https://iptv-org.github.io/iptv/index.m3u"
DEFAULT_OUTPUT_PATH = "playlist/index.m3u"
DEFAULT_USER_AGENT = f"iptv-filter/{__version__} (+stream reachability check)"

# Hard ceiling on simultaneous probes, regardless of what is requested.
MAX_CONCURRENT_CEILING = 12


class FilterConfig(BaseModel):
    """A validated configuration model for a filtering run."""

    # Source & destination
    master_url: str = DEFAULT_MASTER_URL
    output_path: str = DEFAULT_OUTPUT_PATH

    # Probe budget
    max_concurrent: int = MAX_CONCURRENT_CEILING
    timeout: float = 9.0
    range_bytes: int = 8191
    master_timeout: float = 60.0
    user_agent: str = DEFAULT_USER_AGENT

    # Output
    preserve_completion_order: bool = False

    # Internal field not loaded from INI file
    config_path: str = Field("", repr=False)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("master_url")
    @classmethod
    def validate_master_url(cls, v: str) -> str:
        """The master playlist must be reachable over HTTP(S)."""
        parts = urlsplit(v)
        if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Master URL must be an http(s) URL, got: '{v}'")
        return v

    @field_validator("output_path")
    @classmethod
    def validate_output_path(cls, v: str) -> str:
        if not v:
            raise ValueError("Output path cannot be empty.")
        return v

    @field_validator("max_concurrent")
    @classmethod
    def validate_concurrency(cls, v: int) -> int:
        """Requires at least one worker and clamps to the hard ceiling."""
        if v < 1:
            raise ValueError("Max concurrent probes must be at least 1.")
        if v > MAX_CONCURRENT_CEILING:
            log.debug(
                f"Clamping max_concurrent from {v} to {MAX_CONCURRENT_CEILING}."
            )
            return MAX_CONCURRENT_CEILING
        return v

    @field_validator("timeout", "master_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeouts must be greater than zero seconds.")
        return v

    @field_validator("range_bytes")
    @classmethod
    def validate_range(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Range size must be at least 1 byte.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
