from .cache import CacheStorePort
from .extractor import StreamExtractorPort
from .fetcher import PageFetcherPort

__all__ = [
    "CacheStorePort",
    "PageFetcherPort",
    "StreamExtractorPort",
]
