"""Short-lived cache of the three-field metadata read."""

import logging
import time
from collections.abc import Callable

import logfire
from bs4 import BeautifulSoup

from seopanel.core.page.base import PageSource, css_path, read_value
from seopanel.core.resolution.resolver import SelectorCascadeResolver
from seopanel.models.metadata import CacheEntry, ExtractedMetadata, FieldRole, FieldsFound

logger = logging.getLogger(__name__)


class MetadataCache:
    """Memoizes a full metadata scan for ``ttl`` seconds.

    Edits call ``invalidate`` so the next ``get`` rescans. A scan that was
    running when ``invalidate`` happened returns its snapshot to its caller
    but does not store it.

    Attributes:
        page: Page to scan
        resolver: Resolver used for each scan
        ttl: Lifetime of a snapshot in seconds
        scan_count: Number of scans performed

    """

    def __init__(
        self,
        page: PageSource,
        resolver: SelectorCascadeResolver | None = None,
        ttl: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the cache.

        Args:
            page: Page to scan
            resolver: Resolver used for each scan. Defaults to the standard cascades.
            ttl: Lifetime of a snapshot in seconds. Defaults to 5.0.
            clock: Monotonic clock, injectable for tests.

        """
        self.page = page
        self.resolver = resolver or SelectorCascadeResolver()
        self.ttl = ttl
        self._clock = clock
        self._entry: CacheEntry | None = None
        self._generation = 0
        self.scan_count = 0

    @property
    def entry(self) -> CacheEntry | None:
        """Current entry, or None when empty or expired."""
        if self._entry is not None and self._entry.is_expired(self._clock()):
            self._entry = None
        return self._entry

    async def get(self) -> ExtractedMetadata:
        """Return the cached snapshot or scan the page for a new one."""
        entry = self.entry
        if entry is not None:
            return entry.value

        generation = self._generation
        metadata = await self._scan()
        if generation == self._generation:
            self._entry = CacheEntry(value=metadata, captured_at=self._clock(), ttl=self.ttl)
        else:
            logger.debug('Cache invalidated during scan; snapshot not stored')
        return metadata

    def invalidate(self) -> None:
        """Drop the current snapshot unconditionally."""
        self._entry = None
        self._generation += 1

    async def _scan(self) -> ExtractedMetadata:
        self.scan_count += 1
        url = self.page.url
        with logfire.span('metadata scan', url=url):
            html = await self.page.content()
            soup = BeautifulSoup(html, 'lxml')
            resolutions = self.resolver.resolve_all(soup)

            values: dict[str, str] = {}
            found: dict[str, bool] = {}
            locators: dict[str, str] = {}
            for role in FieldRole:
                resolution = resolutions.get(role)
                name = role.field_name
                found[name] = resolution is not None
                values[name] = read_value(resolution.element) if resolution else ''
                if resolution is not None:
                    locators[name] = css_path(resolution.element)

            metadata = ExtractedMetadata(
                **values,
                fields_found=FieldsFound(**found),
                source_url=url,
                locators=locators,
            )
            logfire.info('Metadata scanned', fields_found=found)
        return metadata
