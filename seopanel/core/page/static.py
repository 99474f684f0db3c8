"""In-memory page backed by a parsed HTML document."""

import logging
from pathlib import Path

import requests
from bs4 import BeautifulSoup

from seopanel.core.page.base import EditCallback, PageSource, is_editable
from seopanel.exceptions import FieldWriteError

DEFAULT_USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'


class StaticPage(PageSource):
    """A page held entirely in memory.

    Used for scoring saved documents from the CLI and as the page in tests.
    Writes modify the held document and notify edit subscribers, the same
    way typing into a live page does.

    Attributes:
        soup: The parsed document

    """

    def __init__(self, html: str, url: str = ''):
        """Initialize the page.

        Args:
            html: Document markup
            url: URL the document represents

        """
        self._url = url
        self.soup = BeautifulSoup(html, 'lxml')
        self._subscribers: list[EditCallback] = []
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_file(cls, path: str | Path, url: str = '') -> 'StaticPage':
        """Load a page from a saved HTML file."""
        path = Path(path)
        return cls(path.read_text(encoding='utf-8'), url=url or path.resolve().as_uri())

    @classmethod
    def from_url(cls, url: str, timeout: int = 30) -> 'StaticPage':
        """Fetch a page over HTTP.

        Raises:
            requests.HTTPError: If the server answers with an error status.

        """
        response = requests.get(url, headers={'User-Agent': DEFAULT_USER_AGENT}, timeout=timeout)
        response.raise_for_status()
        return cls(response.text, url=response.url)

    @property
    def url(self) -> str:
        return self._url

    def navigate(self, url: str, html: str | None = None) -> None:
        """Move to a new URL, optionally replacing the document."""
        self._url = url
        if html is not None:
            self.soup = BeautifulSoup(html, 'lxml')

    async def content(self) -> str:
        return str(self.soup)

    async def query(self, selector: str):
        try:
            return self.soup.select_one(selector)
        except Exception as e:
            self.logger.debug(f'Invalid selector {selector!r}: {e}')
            return None

    async def write_field(self, selector: str, value: str) -> None:
        element = await self.query(selector)
        if element is None or not is_editable(element):
            raise FieldWriteError(f'No editable element at {selector!r}')

        if element.name == 'input':
            element['value'] = value
        else:
            element.clear()
            element.append(value)
        self.logger.debug(f'Wrote {len(value)} chars into {selector!r}')

        self.fire_edit()

    async def subscribe_edits(self, callback: EditCallback) -> None:
        self._subscribers.append(callback)

    def fire_edit(self) -> None:
        """Notify subscribers that an editable element changed."""
        for callback in list(self._subscribers):
            callback()
