"""Selector cascade resolution."""

from seopanel.core.resolution.resolver import (
    RESOLUTION_ORDER,
    Resolution,
    SelectorCascadeResolver,
    default_cascades,
)
from seopanel.core.resolution.tiers import AttributeTier, ContextTier, PositionalTier, Tier, UnclaimedEmptyTier

__all__ = [
    'AttributeTier',
    'ContextTier',
    'PositionalTier',
    'RESOLUTION_ORDER',
    'Resolution',
    'SelectorCascadeResolver',
    'Tier',
    'UnclaimedEmptyTier',
    'default_cascades',
]
