"""Heuristic fallback content."""

from seopanel.core.fallback.classifier import ContentType, classify
from seopanel.core.fallback.generator import FallbackGenerator, add_engagement, has_engagement

__all__ = ['ContentType', 'FallbackGenerator', 'add_engagement', 'classify', 'has_engagement']
