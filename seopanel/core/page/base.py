"""Page abstraction and helpers for working with editable elements."""

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from bs4 import Tag

EditCallback = Callable[[], None]

TEXT_INPUT_TYPES = frozenset({'', 'text', 'search'})
EDITABLE_SELECTOR = 'input, textarea, [contenteditable]'

_SIMPLE_ID = re.compile(r'^[A-Za-z][\w-]*$')


class PageSource(ABC):
    """A page the panel can read from and write to.

    Implementations wrap a static document or a live browser page. Reads
    return serialized HTML in which live input values are reflected as
    ``value`` attributes (inputs) or text (textareas), so the resolver
    can work on a parsed tree without touching the page.
    """

    @property
    @abstractmethod
    def url(self) -> str:
        """Current URL of the page."""

    @abstractmethod
    async def content(self) -> str:
        """Return a serialized snapshot of the page."""

    @abstractmethod
    async def query(self, selector: str) -> Any | None:
        """Return the first element matching ``selector`` or None.

        Invalid selectors yield None.
        """

    @abstractmethod
    async def write_field(self, selector: str, value: str) -> None:
        """Replace the content of the editable element at ``selector``.

        Raises:
            FieldWriteError: If the element is missing or not editable.

        """

    @abstractmethod
    async def subscribe_edits(self, callback: EditCallback) -> None:
        """Register ``callback`` to run on every edit of an editable element."""


def is_contenteditable(tag: Tag) -> bool:
    """Return True for elements whose content the user can edit in place."""
    value = tag.get('contenteditable')
    if value is None:
        return False
    return str(value).lower() in ('', 'true', 'plaintext-only')


def is_text_input(tag: Tag) -> bool:
    """Return True for single-line text inputs."""
    if tag.name != 'input':
        return False
    return str(tag.get('type', '')).lower() in TEXT_INPUT_TYPES


def is_editable(tag: Tag) -> bool:
    """Return True for text inputs, textareas and contenteditable regions."""
    return tag.name == 'textarea' or is_text_input(tag) or is_contenteditable(tag)


def first_editable(tag: Tag) -> Tag | None:
    """Return ``tag`` if editable, else its first editable descendant."""
    if is_editable(tag):
        return tag
    for candidate in tag.select(EDITABLE_SELECTOR):
        if is_editable(candidate):
            return candidate
    return None


def read_value(tag: Tag) -> str:
    """Return the current text held by an editable element."""
    if tag.name == 'input':
        return str(tag.get('value', '')).strip()
    return tag.get_text().strip()


def css_path(tag: Tag) -> str:
    """Build a selector that locates ``tag`` in the same document.

    Anchors on the nearest ancestor with a unique, simple id, otherwise
    spells out the ``nth-of-type`` chain from the root.
    """
    root = _document_root(tag)
    parts: list[str] = []
    node: Tag | None = tag
    while node is not None and node.name not in ('[document]', None):
        node_id = node.get('id')
        if isinstance(node_id, str) and _SIMPLE_ID.match(node_id) and len(root.select(f'#{node_id}')) == 1:
            parts.append(f'#{node_id}')
            break
        parent = node.parent
        if parent is None or parent.name == '[document]':
            parts.append(node.name)
            break
        siblings = parent.find_all(node.name, recursive=False)
        index = next(i for i, s in enumerate(siblings, start=1) if s is node)
        parts.append(f'{node.name}:nth-of-type({index})')
        node = parent
    return ' > '.join(reversed(parts))


def _document_root(tag: Tag) -> Tag:
    node = tag
    while node.parent is not None:
        node = node.parent
    return node
