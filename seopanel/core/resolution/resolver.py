"""Selector cascade resolver.

Finds the element backing each metadata field by walking an ordered list
of strategy tiers, stopping at the first tier that yields a usable element.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from bs4 import Tag

from seopanel.config import DEFAULT_FIELD_PATTERNS
from seopanel.core.resolution.tiers import AttributeTier, ContextTier, PositionalTier, Tier, UnclaimedEmptyTier
from seopanel.models.metadata import FieldRole

logger = logging.getLogger(__name__)

RESOLUTION_ORDER = (FieldRole.PRIMARY_TEXT, FieldRole.LONG_TEXT, FieldRole.KEYWORD_LIST)


@dataclass(frozen=True)
class Resolution:
    """An element found for a role and the tier that found it."""

    role: FieldRole
    element: Tag
    tier: str


def default_cascades(
    field_patterns: Mapping[FieldRole, Iterable[str]] | None = None,
) -> dict[FieldRole, list[Tier]]:
    """Build the standard tier lists for every role.

    Title and description use attribute hints then position/length.
    Tags use attribute hints, then surrounding context, then the first
    unclaimed empty input.

    Args:
        field_patterns: Attribute-hint selectors per role. Defaults to DEFAULT_FIELD_PATTERNS.

    Returns:
        Mapping of role to its ordered tiers.

    """
    attribute = AttributeTier(field_patterns if field_patterns is not None else DEFAULT_FIELD_PATTERNS)
    positional = PositionalTier()
    return {
        FieldRole.PRIMARY_TEXT: [attribute, positional],
        FieldRole.LONG_TEXT: [attribute, positional],
        FieldRole.KEYWORD_LIST: [attribute, ContextTier(), UnclaimedEmptyTier()],
    }


class SelectorCascadeResolver:
    """Resolves field roles to elements through ordered tiers.

    Resolution is pure: it only reads the tree. Absence is returned as
    None, never raised.

    Attributes:
        cascades: Ordered tiers per role

    """

    def __init__(
        self,
        cascades: Mapping[FieldRole, Sequence[Tier]] | None = None,
        field_patterns: Mapping[FieldRole, Iterable[str]] | None = None,
    ):
        """Initialize the resolver.

        Args:
            cascades: Explicit tier lists per role. Roles left out have no tiers.
            field_patterns: Attribute-hint selectors used when building default cascades.

        """
        if cascades is None:
            cascades = default_cascades(field_patterns)
        self.cascades = {role: list(tiers) for role, tiers in cascades.items()}

    def resolve(self, role: FieldRole, search_root: Tag, claimed: Iterable[Tag] = ()) -> Tag | None:
        """Return the element for ``role`` or None.

        Args:
            role: Field role to resolve
            search_root: Parsed tree (or subtree) to search
            claimed: Elements already taken by other roles

        Returns:
            The first usable element found, or None.

        """
        resolution = self.resolve_with_tier(role, search_root, claimed)
        return resolution.element if resolution else None

    def resolve_with_tier(self, role: FieldRole, search_root: Tag, claimed: Iterable[Tag] = ()) -> Resolution | None:
        """Like ``resolve`` but also report which tier matched."""
        claims = frozenset(id(tag) for tag in claimed)
        for tier in self.cascades.get(role, ()):
            element = tier.find(role, search_root, claims)
            if element is not None:
                logger.debug(f'{role.field_name}: matched by {tier.name} tier <{element.name}>')
                return Resolution(role=role, element=element, tier=tier.name)
        logger.debug(f'{role.field_name}: not found by any tier')
        return None

    def resolve_all(self, search_root: Tag) -> dict[FieldRole, Resolution | None]:
        """Resolve title, description and tags, in that order.

        Each found element is claimed so later roles cannot reuse it.

        Args:
            search_root: Parsed tree to search

        Returns:
            Mapping of every role to its resolution or None.

        """
        claimed: list[Tag] = []
        results: dict[FieldRole, Resolution | None] = {}
        for role in RESOLUTION_ORDER:
            resolution = self.resolve_with_tier(role, search_root, claimed)
            results[role] = resolution
            if resolution is not None:
                claimed.append(resolution.element)
        return results
