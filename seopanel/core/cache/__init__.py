"""Metadata caching."""

from seopanel.core.cache.metadata_cache import MetadataCache

__all__ = ['MetadataCache']
