"""URL helpers shared by the extractors."""

from __future__ import annotations

import base64
import binascii
import re
from urllib.parse import urljoin, urlparse

from resolvarr.domain.entities.streams import MediaKind

# Bare media-file URLs anywhere in a document
DIRECT_MEDIA_RE = re.compile(
    r"https?://[^\s\"'<>]+\.(?:mp4|mkv|m3u8)[^\s\"'<>]*", re.IGNORECASE
)

# Links that never lead anywhere
_PLACEHOLDER_HREFS = frozenset({"#", "javascript:void(0)", "javascript:void(0);"})


def media_kind_for_url(url: str) -> MediaKind:
    """Infer the media kind from the URL suffix."""
    lowered = url.lower()
    if ".m3u8" in lowered:
        return MediaKind.M3U8
    if ".mp4" in lowered:
        return MediaKind.MP4
    return MediaKind.MKV


def origin_of(url: str) -> str:
    """Return ``scheme://host[:port]`` for *url* (empty when unparsable)."""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        return ""
    return f"{parsed.scheme}://{parsed.netloc}"


def absolutize(href: str, base_url: str) -> str:
    """Resolve scheme-relative and path-relative *href* against *base_url*.

    Returns ``""`` when the result is not an http(s) URL.
    """
    href = href.strip()
    if not href:
        return ""
    if href.startswith("//"):
        return f"https:{href}"
    resolved = urljoin(base_url, href) if base_url else href
    if not resolved.lower().startswith(("http://", "https://")):
        return ""
    return resolved


def is_placeholder(href: str | None) -> bool:
    return not href or href.strip().lower() in _PLACEHOLDER_HREFS


def decode_base64(value: str | None) -> str:
    """Decode a base64 string to text, returning ``""`` when invalid."""
    if not value:
        return ""
    padded = value + "=" * (-len(value) % 4)
    try:
        return base64.b64decode(padded, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return ""


def pixeldrain_direct_url(href: str) -> str:
    """Rewrite a pixeldrain share link into its direct-download form."""
    if "/api/file/" in href:
        return href
    token = href.rstrip("/").split("/")[-1].split("?")[0]
    if not token:
        return href
    return f"https://pixeldrain.com/api/file/{token}?download"
