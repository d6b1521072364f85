from .streams import (
    DEFAULT_QUALITY,
    EMBED_HOSTS,
    EMBED_MEDIA_KIND,
    HostId,
    MediaKind,
    ProviderEntry,
    Server,
    StreamCandidate,
    StreamResolution,
)

__all__ = [
    "DEFAULT_QUALITY",
    "EMBED_HOSTS",
    "EMBED_MEDIA_KIND",
    "HostId",
    "MediaKind",
    "ProviderEntry",
    "Server",
    "StreamCandidate",
    "StreamResolution",
]
