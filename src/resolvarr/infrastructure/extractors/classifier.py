"""Host classification by ordered substring markers.

Host deployments rotate subdomains and TLDs constantly, so matching is
done on lower-cased substrings of the whole URL rather than on parsed
hostnames.  Order matters: the first marker found wins.
"""

from __future__ import annotations

from resolvarr.domain.entities.streams import EMBED_HOSTS, HostId, Server

HOST_MARKERS: tuple[tuple[str, HostId], ...] = (
    ("pixeldrain", HostId.PIXELDRAIN),
    ("streamtape", HostId.STREAMTAPE),
    ("dood", HostId.DOODSTREAM),
    ("filemoon", HostId.FILEMOON),
    ("mixdrop", HostId.MIXDROP),
    ("gdflix", HostId.GDFLIX),
    ("nexdrive", HostId.GDFLIX),
    ("hubcloud", HostId.HUBCLOUD),
    ("vcloud", HostId.HUBCLOUD),
)

_EMBED_SERVER_BY_HOST: dict[HostId, Server] = {
    host: server for server, host in EMBED_HOSTS.items()
}


class HostClassifier:
    """Maps a URL onto one of the known host types."""

    def __init__(
        self, markers: tuple[tuple[str, HostId], ...] = HOST_MARKERS
    ) -> None:
        self._markers = markers

    def classify(self, url: str) -> HostId | None:
        """Return the host of the first matching marker, or None."""
        lowered = url.lower()
        for marker, host in self._markers:
            if marker in lowered:
                return host
        return None

    def embed_server(self, url: str) -> Server | None:
        """Return the embed-host server for *url*, or None for other hosts."""
        host = self.classify(url)
        if host is None:
            return None
        return _EMBED_SERVER_BY_HOST.get(host)
