"""Strategy tiers used by the selector cascade.

Each tier looks for one field role in a parsed tree and returns the first
usable element or None. Tiers never modify the tree.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import ClassVar

from bs4 import Tag

from seopanel.core.page.base import first_editable, is_contenteditable, is_text_input, read_value
from seopanel.models.metadata import FieldRole

logger = logging.getLogger(__name__)

# ids of elements already taken by another role
Claims = frozenset[int]


def _unclaimed(tag: Tag | None, claimed: Claims) -> Tag | None:
    if tag is None or id(tag) in claimed:
        return None
    return tag


def _text_inputs(root: Tag) -> Iterable[Tag]:
    return (tag for tag in root.find_all('input') if is_text_input(tag))


class Tier(ABC):
    """One level of the cascade.

    Class Attributes:
        name: Identifier reported alongside a resolution

    """

    name: ClassVar[str] = 'tier'

    @abstractmethod
    def find(self, role: FieldRole, root: Tag, claimed: Claims) -> Tag | None:
        """Return the first usable element for ``role`` under ``root``."""

    def __repr__(self) -> str:
        return f'{type(self).__name__}()'


class AttributeTier(Tier):
    """Matches explicit role, label, placeholder and test-id hints.

    Patterns run in order and matches in document order. A pattern that
    hits a wrapper yields the wrapper's first editable descendant.
    """

    name = 'attribute'

    def __init__(self, patterns: Mapping[FieldRole, Iterable[str]]):
        self.patterns = {role: tuple(selectors) for role, selectors in patterns.items()}

    def find(self, role: FieldRole, root: Tag, claimed: Claims) -> Tag | None:
        for pattern in self.patterns.get(role, ()):
            try:
                matches = root.select(pattern)
            except Exception as e:
                logger.warning(f'Skipping invalid selector {pattern!r} for {role.field_name}: {e}')
                continue
            for match in matches:
                element = _unclaimed(first_editable(match), claimed)
                if element is not None:
                    return element
        return None


class PositionalTier(Tier):
    """Assigns title and description by position and length among editable regions.

    With exactly two regions the first is the title and the second the
    description. With exactly one, text shorter than ``threshold`` makes
    it the title, otherwise the description. Any other count is ambiguous.
    """

    name = 'positional'

    def __init__(self, threshold: int = 150):
        self.threshold = threshold

    def find(self, role: FieldRole, root: Tag, claimed: Claims) -> Tag | None:
        if role not in (FieldRole.PRIMARY_TEXT, FieldRole.LONG_TEXT):
            return None

        regions = self._regions(root)
        if len(regions) == 2:
            return _unclaimed(regions[0] if role is FieldRole.PRIMARY_TEXT else regions[1], claimed)
        if len(regions) == 1:
            is_short = len(read_value(regions[0])) < self.threshold
            if is_short == (role is FieldRole.PRIMARY_TEXT):
                return _unclaimed(regions[0], claimed)
        return None

    @staticmethod
    def _regions(root: Tag) -> list[Tag]:
        # Outermost editable regions only; nested ones belong to their host.
        editable = [tag for tag in root.find_all(attrs={'contenteditable': True}) if is_contenteditable(tag)]
        return [
            tag for tag in editable if not any(is_contenteditable(parent) for parent in tag.parents if parent.name)
        ]


class ContextTier(Tier):
    """Finds a keyword-list input by the words around it.

    Looks at the nearest enclosing container (its text, class and id) and
    at the input's own placeholder, aria-label, id and name for any word
    from ``vocabulary``, case-insensitively.
    """

    name = 'context'

    CONTAINER_TAGS: ClassVar[frozenset[str]] = frozenset({'div', 'section', 'form'})
    OWN_ATTRIBUTES: ClassVar[tuple[str, ...]] = ('placeholder', 'aria-label', 'id', 'name')

    def __init__(self, vocabulary: Iterable[str] = ('tag', 'keyword', 'chip')):
        self.vocabulary = tuple(word.lower() for word in vocabulary)

    def find(self, role: FieldRole, root: Tag, claimed: Claims) -> Tag | None:
        if role is not FieldRole.KEYWORD_LIST:
            return None

        for candidate in _text_inputs(root):
            if id(candidate) in claimed:
                continue
            container = candidate.find_parent(self._is_container)
            if container is not None and self._mentions(self._container_text(container)):
                return candidate
            own = ' '.join(_attr_text(candidate, attr) for attr in self.OWN_ATTRIBUTES)
            if self._mentions(own):
                return candidate
        return None

    def _is_container(self, tag: Tag) -> bool:
        return tag.name in self.CONTAINER_TAGS or self._mentions(_attr_text(tag, 'class'))

    @staticmethod
    def _container_text(container: Tag) -> str:
        return ' '.join([container.get_text(' '), _attr_text(container, 'class'), _attr_text(container, 'id')])

    def _mentions(self, text: str) -> bool:
        text = text.lower()
        return any(word in text for word in self.vocabulary)


class UnclaimedEmptyTier(Tier):
    """Last resort: the first text input that no other role claimed and that is empty."""

    name = 'unclaimed-empty'

    def find(self, role: FieldRole, root: Tag, claimed: Claims) -> Tag | None:
        for candidate in _text_inputs(root):
            if id(candidate) not in claimed and not read_value(candidate):
                return candidate
        return None


def _attr_text(tag: Tag, attr: str) -> str:
    value = tag.get(attr)
    if value is None:
        return ''
    if isinstance(value, list):
        return ' '.join(value)
    return str(value)
