"""Custom exceptions for seopanel."""


class SeoPanelError(Exception):
    """Base class for all seopanel exceptions."""

    pass


class ContainerNotFoundError(SeoPanelError):
    """Raised when the panel's host container never appears on the page."""

    def __init__(self, selector: str, attempts: int):
        """Initialize container lookup error.

        Args:
            selector: Selector that was polled for the container
            attempts: Number of polling attempts made before giving up

        """
        self.selector = selector
        self.attempts = attempts
        super().__init__(f'Container {selector!r} not found after {attempts} attempts')


class GenerationError(SeoPanelError):
    """Raised when the generative service cannot produce a usable result.

    Covers network failures, timeouts, missing credentials and responses
    that do not validate against the expected payload.
    """

    def __init__(self, role: str, reason: str):
        """Initialize generation error.

        Args:
            role: Field name the generation was requested for
            reason: Human-readable failure cause

        """
        self.role = role
        self.reason = reason
        super().__init__(f'Generation failed for {role}: {reason}')


class InvalidTransitionError(SeoPanelError):
    """Raised when the injection state machine is asked for an illegal move."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f'Illegal injection transition {current} -> {target}')


class FieldWriteError(SeoPanelError):
    """Raised when a value cannot be written back into a page field."""

    pass
