from .directory import DEFAULT_SOURCE_URL, ProviderDirectory

__all__ = ["DEFAULT_SOURCE_URL", "ProviderDirectory"]
