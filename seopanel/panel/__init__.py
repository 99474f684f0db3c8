"""Panel presentation layer."""

from seopanel.panel.base import Panel
from seopanel.panel.console import THEME, ConsolePanel, make_console

__all__ = ['ConsolePanel', 'Panel', 'THEME', 'make_console']
