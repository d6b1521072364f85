"""Domain entities for stream resolution.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Media kind reported when no candidate could be found.
EMBED_MEDIA_KIND = "embed"

DEFAULT_QUALITY = "HD"


class MediaKind(str, Enum):
    """How a player should treat a stream link."""

    M3U8 = "m3u8"  # manifest playlist (HLS)
    MP4 = "mp4"  # progressive video
    MKV = "mkv"  # container video / unknown download


class Server(str, Enum):
    """Service that produced a stream candidate."""

    PIXELDRAIN = "Pixeldrain"
    STREAMTAPE = "Streamtape"
    DOODSTREAM = "Doodstream"
    FILEMOON = "Filemoon"
    MIXDROP = "Mixdrop"
    CF_WORKER = "CfWorker"
    CF_STORAGE = "CfStorage"
    R2_STORAGE = "R2Storage"
    HUB_CDN = "HubCdn"
    FAST_DL = "FastDL"
    DIRECT = "Direct"


class HostId(str, Enum):
    """Known host types an input URL can be classified as."""

    PIXELDRAIN = "pixeldrain"
    STREAMTAPE = "streamtape"
    DOODSTREAM = "doodstream"
    FILEMOON = "filemoon"
    MIXDROP = "mixdrop"
    GDFLIX = "gdflix"
    HUBCLOUD = "hubcloud"


# Embed hosts whose candidates may need one more extraction pass.
EMBED_HOSTS: dict[Server, HostId] = {
    Server.STREAMTAPE: HostId.STREAMTAPE,
    Server.DOODSTREAM: HostId.DOODSTREAM,
    Server.FILEMOON: HostId.FILEMOON,
    Server.MIXDROP: HostId.MIXDROP,
}


@dataclass(frozen=True)
class StreamCandidate:
    """A playable or semi-playable link discovered during resolution.

    ``link`` is always an absolute http(s) URL; extractors resolve
    scheme- and path-relative links before constructing a candidate.
    """

    server: Server
    link: str
    media_kind: MediaKind
    quality: str = DEFAULT_QUALITY
    headers: dict[str, str] = field(default_factory=dict)  # Required request headers

    def __post_init__(self) -> None:
        if not self.link:
            raise ValueError("StreamCandidate.link must not be empty")
        if not self.link.lower().startswith(("http://", "https://")):
            raise ValueError(f"StreamCandidate.link must be absolute: {self.link!r}")

    @property
    def is_embed(self) -> bool:
        return self.server in EMBED_HOSTS

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "server": self.server.value,
            "link": self.link,
            "type": self.media_kind.value,
            "quality": self.quality,
        }
        if self.headers:
            data["headers"] = dict(self.headers)
        return data


@dataclass(frozen=True)
class StreamResolution:
    """Answer to a single resolve request."""

    original: str
    streams: list[StreamCandidate] = field(default_factory=list)
    cached: bool = False

    @property
    def resolved(self) -> str | None:
        return self.streams[0].link if self.streams else None

    @property
    def media_kind(self) -> str:
        return self.streams[0].media_kind.value if self.streams else EMBED_MEDIA_KIND

    def to_dict(self) -> dict[str, Any]:
        return {
            "streams": [s.to_dict() for s in self.streams],
            "resolved": self.resolved,
            "type": self.media_kind,
            "original": self.original,
        }


@dataclass(frozen=True)
class ProviderEntry:
    """One site in the remote provider directory."""

    key: str
    name: str
    url: str
