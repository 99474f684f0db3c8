"""Presentation boundary for the panel."""

from abc import ABC, abstractmethod
from typing import Any

from seopanel.models.lifecycle import InjectionState, NotificationLevel
from seopanel.models.payloads import ActionOutcome
from seopanel.models.scoring import ScoreResult


class Panel(ABC):
    """Receives everything the pipeline wants to show.

    The pipeline never renders on its own; it hands results to a Panel.
    """

    @abstractmethod
    async def attach(self, target: Any) -> None:
        """Attach the panel to ``target`` (an element returned by the page)."""

    @abstractmethod
    async def detach(self) -> None:
        """Remove the panel from the page."""

    @abstractmethod
    def render_state(self, state: InjectionState) -> None:
        """Show a lifecycle state change."""

    @abstractmethod
    def render_score(self, result: ScoreResult) -> None:
        """Show a score."""

    @abstractmethod
    def render_outcome(self, outcome: ActionOutcome) -> None:
        """Show the result of a panel action."""

    @abstractmethod
    def notify(self, message: str, level: NotificationLevel) -> None:
        """Show a transient notification."""
