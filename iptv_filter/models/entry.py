"""
Immutable records passed between the pipeline stages.
"""

from dataclasses import dataclass
from enum import Enum


class VerdictReason(str, Enum):
    """Why a stream URL was kept or dropped."""

    CONTENT_TYPE = "content-type match"
    BODY_MARKER = "body marker match"
    EXTENSION = "extension fallback"
    BAD_STATUS = "bad status"
    NO_SIGNAL = "no signal"
    NETWORK_ERROR = "network error"
    INVALID_URL = "invalid url"


class GateDecision(str, Enum):
    """Outcome of the cheap pre-network URL check."""

    ACCEPTED = "accepted"
    EMPTY = "empty url"
    DUPLICATE = "duplicate"
    UNSUPPORTED_SCHEME = "unsupported scheme"


@dataclass(frozen=True)
class PlaylistEntry:
    """One #EXTINF directive and the stream URL that follows it."""

    index: int
    meta_line: str
    name: str
    stream_url: str
    tvg_logo: str = ""
    tvg_id: str = ""


@dataclass(frozen=True)
class ValidationVerdict:
    """The keep/drop decision for a single probed stream URL."""

    entry: PlaylistEntry
    keep: bool
    reason: VerdictReason
    status: int | None = None
    detail: str = ""

    @property
    def url(self) -> str:
        return self.entry.stream_url
