"""Live page driven through an async Playwright browser.

Requires the ``browser`` extra. Import this module lazily.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

from seopanel.core.page.base import EditCallback, PageSource
from seopanel.exceptions import FieldWriteError

# Serializes the document without mutating it; live input values are
# copied into the clone so the parsed snapshot sees what the user typed.
_SNAPSHOT_JS = """
() => {
  const live = document.querySelectorAll('input, textarea');
  const clone = document.documentElement.cloneNode(true);
  const copies = clone.querySelectorAll('input, textarea');
  live.forEach((el, i) => {
    const copy = copies[i];
    if (!copy) return;
    if (el.tagName === 'TEXTAREA') {
      copy.textContent = el.value;
    } else {
      copy.setAttribute('value', el.value);
    }
  });
  return '<!DOCTYPE html>' + clone.outerHTML;
}
"""

_EDIT_BINDING = '__seopanelEdit'

_EDIT_LISTENER_JS = f"""
(() => {{
  if (window.__seopanelListening) return;
  window.__seopanelListening = true;
  document.addEventListener('input', (e) => {{
    const t = e.target;
    if (t && t.closest && t.closest('input, textarea, [contenteditable]')) {{
      window.{_EDIT_BINDING}();
    }}
  }}, true);
}})()
"""


class PlaywrightPage(PageSource):
    """PageSource over a Playwright ``Page``.

    Attributes:
        page: The wrapped Playwright page
        write_timeout: Milliseconds allowed for filling a field

    """

    def __init__(self, page: Page, write_timeout: int = 5000):
        self.page = page
        self.write_timeout = write_timeout
        self._subscribers: list[EditCallback] = []
        self._bound = False
        self.logger = logging.getLogger(__name__)

    @property
    def url(self) -> str:
        return self.page.url

    async def content(self) -> str:
        return await self.page.evaluate(_SNAPSHOT_JS)

    async def query(self, selector: str):
        try:
            return await self.page.query_selector(selector)
        except PlaywrightError as e:
            self.logger.debug(f'Query failed for {selector!r}: {e}')
            return None

    async def write_field(self, selector: str, value: str) -> None:
        try:
            await self.page.locator(selector).first.fill(value, timeout=self.write_timeout)
        except PlaywrightError as e:
            raise FieldWriteError(f'Could not write to {selector!r}: {e}') from e

    async def subscribe_edits(self, callback: EditCallback) -> None:
        self._subscribers.append(callback)
        if self._bound:
            return
        await self.page.expose_function(_EDIT_BINDING, self._on_edit)
        # Survives navigations for new documents; evaluate covers the current one.
        await self.page.add_init_script(_EDIT_LISTENER_JS)
        await self.page.evaluate(_EDIT_LISTENER_JS)
        self._bound = True

    def _on_edit(self) -> None:
        for callback in list(self._subscribers):
            callback()


@asynccontextmanager
async def open_page(url: str, headless: bool = True, timeout: int = 60000) -> AsyncIterator[PlaywrightPage]:
    """Launch Chromium, open ``url`` and yield it as a PlaywrightPage.

    Args:
        url: Page to open
        headless: Run the browser without a window
        timeout: Navigation timeout in milliseconds

    Yields:
        PlaywrightPage wrapping the opened page.

    """
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=headless, args=['--no-sandbox'])
        try:
            context = await browser.new_context(viewport={'width': 1920, 'height': 1080}, locale='en-US')
            page = await context.new_page()
            await page.goto(url, wait_until='domcontentloaded', timeout=timeout)
            yield PlaywrightPage(page)
        finally:
            await browser.close()
