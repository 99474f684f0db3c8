"""Enums describing the injection lifecycle."""

from enum import Enum


class InjectionState(str, Enum):
    """State of the panel on the current page session."""

    IDLE = 'idle'
    DETECTING_PAGE = 'detecting_page'
    AWAITING_CONTAINER = 'awaiting_container'
    INJECTED = 'injected'
    FAILED = 'failed'


# Legal moves; anything else is a programming error.
TRANSITIONS: dict[InjectionState, frozenset[InjectionState]] = {
    InjectionState.IDLE: frozenset({InjectionState.DETECTING_PAGE}),
    InjectionState.DETECTING_PAGE: frozenset({InjectionState.AWAITING_CONTAINER, InjectionState.IDLE}),
    InjectionState.AWAITING_CONTAINER: frozenset({InjectionState.INJECTED, InjectionState.FAILED}),
    InjectionState.INJECTED: frozenset({InjectionState.IDLE}),
    InjectionState.FAILED: frozenset({InjectionState.DETECTING_PAGE, InjectionState.IDLE}),
}


class PageType(str, Enum):
    """Kind of page, derived from the URL."""

    VIDEO_EDIT = 'video-edit'
    UPLOAD = 'upload'
    ANALYTICS = 'analytics'
    DASHBOARD = 'dashboard'
    OTHER = 'other'

    @property
    def supports_panel(self) -> bool:
        """Whether the panel is injected on this kind of page."""
        return self in (PageType.VIDEO_EDIT, PageType.UPLOAD)


class NotificationLevel(str, Enum):
    """Severity of a panel notification."""

    SUCCESS = 'success'
    INFO = 'info'
    WARNING = 'warning'
    ERROR = 'error'
