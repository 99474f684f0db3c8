"""Page adapters.

``PlaywrightPage`` lives in ``seopanel.core.page.playwright`` and needs the
``browser`` extra, so it is not imported here.
"""

from seopanel.core.page.base import (
    PageSource,
    css_path,
    first_editable,
    is_contenteditable,
    is_editable,
    is_text_input,
    read_value,
)
from seopanel.core.page.static import StaticPage

__all__ = [
    'PageSource',
    'StaticPage',
    'css_path',
    'first_editable',
    'is_contenteditable',
    'is_editable',
    'is_text_input',
    'read_value',
]
