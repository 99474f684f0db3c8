"""Per-page session state owned by the injection controller."""

from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from seopanel.core.cache.metadata_cache import MetadataCache
from seopanel.exceptions import InvalidTransitionError
from seopanel.models.lifecycle import TRANSITIONS, InjectionState, PageType


def detect_page_type(url: str) -> PageType:
    """Classify a page from its URL."""
    if '/video/' in url and '/edit' in url:
        return PageType.VIDEO_EDIT
    if '/create/upload' in url:
        return PageType.UPLOAD
    if '/analytics' in url:
        return PageType.ANALYTICS
    if '/dashboard' in url:
        return PageType.DASHBOARD
    return PageType.OTHER


@dataclass
class PageSession:
    """Everything tied to one visit of one URL.

    Created on load or navigation and discarded on the next navigation.
    ``token`` identifies the visit; results produced under an older token
    are stale.

    Attributes:
        url: URL the session was created for
        page_type: Kind of page at that URL
        cache: Metadata cache for this visit
        token: Unique identity of the visit
        state: Current injection state
        history: Every state entered, in order
        panel_target: Element the panel was attached to

    """

    url: str
    page_type: PageType
    cache: MetadataCache
    token: str = field(default_factory=lambda: uuid4().hex)
    state: InjectionState = InjectionState.IDLE
    history: list[InjectionState] = field(default_factory=lambda: [InjectionState.IDLE])
    panel_target: Any = None

    def can_transition(self, target: InjectionState) -> bool:
        return target in TRANSITIONS[self.state]

    def transition(self, target: InjectionState) -> None:
        """Move to ``target``.

        Raises:
            InvalidTransitionError: If the move is not allowed from the current state.

        """
        if not self.can_transition(target):
            raise InvalidTransitionError(self.state.value, target.value)
        self.state = target
        self.history.append(target)
