"""Audit report formatters."""

from seopanel.outputs.json_output import format_json, save_json
from seopanel.outputs.markdown_output import format_markdown, save_markdown

FORMATTERS = {'json': save_json, 'markdown': save_markdown, 'md': save_markdown}

__all__ = ['FORMATTERS', 'format_json', 'format_markdown', 'save_json', 'save_markdown']
