"""Terminal rendering of the panel with rich."""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel as RichPanel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from seopanel.models.lifecycle import InjectionState, NotificationLevel
from seopanel.models.payloads import ActionOutcome
from seopanel.models.scoring import ScoreResult
from seopanel.panel.base import Panel

THEME = Theme(
    {
        'info': 'dim cyan',
        'warning': 'magenta',
        'danger': 'bold red',
        'success': 'bold green',
        'step': 'bold blue',
    }
)

_LEVEL_STYLES = {
    NotificationLevel.SUCCESS: ('success', '✓'),
    NotificationLevel.INFO: ('info', 'ℹ'),
    NotificationLevel.WARNING: ('warning', '⚠'),
    NotificationLevel.ERROR: ('danger', '✗'),
}


def make_console() -> Console:
    """Return a Console using the seopanel theme."""
    return Console(theme=THEME)


def score_style(score: int) -> str:
    """Style name for a 0-100 score."""
    if score >= 80:
        return 'success'
    if score >= 50:
        return 'warning'
    return 'danger'


class ConsolePanel(Panel):
    """Panel that prints to a rich Console.

    Attributes:
        console: Rich console used for output
        notifications_enabled: When False, notify() is silent
        target: What the panel is currently attached to, if anything

    """

    def __init__(self, console: Console | None = None, notifications_enabled: bool = True, max_suggestions: int = 5):
        self.console = console or make_console()
        self.notifications_enabled = notifications_enabled
        self.max_suggestions = max_suggestions
        self.target: Any | None = None

    @property
    def attached(self) -> bool:
        return self.target is not None

    async def attach(self, target: Any) -> None:
        self.target = target
        self.console.print('[step]SEO panel attached[/step]')

    async def detach(self) -> None:
        if self.target is not None:
            self.console.print('[info]SEO panel detached[/info]')
        self.target = None

    def render_state(self, state: InjectionState) -> None:
        self.console.print(f'[info]  → {state.value.replace("_", " ")}[/info]')

    def render_score(self, result: ScoreResult) -> None:
        style = score_style(result.overall_score)
        table = Table(show_header=True, header_style='bold')
        table.add_column('Field')
        table.add_column('Score', justify='right')
        table.add_column('Found', justify='center')
        table.add_column('Issues')
        for name, analysis in result.components.items():
            table.add_row(
                name.capitalize(),
                f'[{score_style(analysis.score)}]{analysis.score}[/{score_style(analysis.score)}]',
                '✓' if analysis.found else '✗',
                Text('\n'.join(analysis.issues) or '-'),
            )

        self.console.print(
            RichPanel(
                f'[{style}]{result.overall_score}/100  grade {result.grade}[/{style}]',
                title='SEO Score',
                style='bold blue',
            )
        )
        self.console.print(table)

        suggestions = result.top_suggestions(self.max_suggestions)
        if suggestions:
            self.console.print('[step]Top suggestions:[/step]')
            for suggestion in suggestions:
                self.console.print(f'  • {escape(suggestion)}')
        for strength in result.strengths:
            self.console.print(f'[success]  + {escape(strength)}[/success]')
        for weakness in result.weaknesses:
            self.console.print(f'[danger]  - {escape(weakness)}[/danger]')

    def render_outcome(self, outcome: ActionOutcome) -> None:
        source = 'AI' if outcome.source == 'ai' else 'heuristic'
        self.console.print(
            RichPanel(Text(outcome.value or '(empty)'), title=f'{outcome.role.field_name.capitalize()} ({source})')
        )

    def notify(self, message: str, level: NotificationLevel) -> None:
        if not self.notifications_enabled:
            return
        style, icon = _LEVEL_STYLES[level]
        self.console.print(f'[{style}]{icon} {escape(message)}[/{style}]')
