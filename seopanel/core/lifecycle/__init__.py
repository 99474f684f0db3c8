"""Injection lifecycle."""

from seopanel.core.lifecycle.actions import PanelActions, merge_tags
from seopanel.core.lifecycle.controller import ACTIONS, InjectionController
from seopanel.core.lifecycle.session import PageSession, detect_page_type
from seopanel.core.lifecycle.waiting import wait_for_element

__all__ = [
    'ACTIONS',
    'InjectionController',
    'PageSession',
    'PanelActions',
    'detect_page_type',
    'merge_tags',
    'wait_for_element',
]
