from .resolve_stream import FALLBACK_HOSTS, StreamResolver

__all__ = ["FALLBACK_HOSTS", "StreamResolver"]
