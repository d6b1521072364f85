"""Per-host extractor implementations for finding playable stream URLs."""

from __future__ import annotations

from resolvarr.domain.entities.streams import HostId
from resolvarr.domain.ports.extractor import StreamExtractorPort
from resolvarr.domain.ports.fetcher import PageFetcherPort

from .classifier import HostClassifier
from .doodstream import DoodStreamExtractor
from .filemoon import FilemoonExtractor
from .gdflix import GDFlixExtractor
from .hubcloud import HubCloudExtractor
from .mixdrop import MixdropExtractor
from .pixeldrain import PixeldrainExtractor
from .streamtape import StreamtapeExtractor


def create_extractors(
    fetcher: PageFetcherPort,
    classifier: HostClassifier | None = None,
) -> dict[HostId, StreamExtractorPort]:
    """Build one extractor per known host, all sharing *fetcher*."""
    hubcloud = HubCloudExtractor(fetcher)
    extractors: list[StreamExtractorPort] = [
        PixeldrainExtractor(fetcher),
        StreamtapeExtractor(fetcher),
        DoodStreamExtractor(fetcher),
        FilemoonExtractor(fetcher),
        MixdropExtractor(fetcher),
        GDFlixExtractor(fetcher, hubcloud=hubcloud, classifier=classifier),
        hubcloud,
    ]
    return {extractor.host: extractor for extractor in extractors}


__all__ = [
    "DoodStreamExtractor",
    "FilemoonExtractor",
    "GDFlixExtractor",
    "HostClassifier",
    "HubCloudExtractor",
    "MixdropExtractor",
    "PixeldrainExtractor",
    "StreamtapeExtractor",
    "create_extractors",
]
