"""Timing and selector configuration for seopanel.

All durations are in seconds. Every wait in the pipeline takes its
interval, attempt limit and hard timeout from these objects rather than
from module-level constants.
"""

import os
from dataclasses import dataclass, field, fields
from typing import ClassVar

from seopanel.models.metadata import FieldRole


@dataclass(frozen=True)
class TimingConfig:
    """Timing settings for waits, retries and caching.

    Attributes:
        element_timeout: Hard timeout for a single element wait
        retry_interval: Delay between element polling attempts
        max_retries: Polling attempts after the first one
        injection_attempts: Whole-sequence injection attempts before settling in FAILED
        injection_retry_delay: Delay between whole-sequence attempts
        sidebar_timeout: Hard timeout for each sidebar candidate
        sidebar_interval: Polling interval for sidebar candidates
        sidebar_retries: Polling attempts for sidebar candidates
        page_change_delay: Pause after navigation before re-injecting
        analysis_delay: Pause before the first analysis after injection
        url_poll_interval: Interval of the navigation monitor
        cache_ttl: Lifetime of a cached metadata snapshot
        generation_timeout: Timeout for one generative call

    """

    ENV_PREFIX: ClassVar[str] = 'SEOPANEL_'

    element_timeout: float = 10.0
    retry_interval: float = 0.5
    max_retries: int = 20
    injection_attempts: int = 3
    injection_retry_delay: float = 1.0
    sidebar_timeout: float = 3.0
    sidebar_interval: float = 0.2
    sidebar_retries: int = 5
    page_change_delay: float = 1.0
    analysis_delay: float = 0.5
    url_poll_interval: float = 0.5
    cache_ttl: float = 5.0
    generation_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> 'TimingConfig':
        """Build a config with overrides from ``SEOPANEL_*`` environment variables.

        ``SEOPANEL_CACHE_TTL=2.5`` overrides ``cache_ttl`` and so on.
        Unparseable values raise ValueError.

        Returns:
            TimingConfig with environment overrides applied.

        """
        overrides: dict[str, float | int] = {}
        for f in fields(cls):
            raw = os.getenv(f'{cls.ENV_PREFIX}{f.name.upper()}')
            if raw is None or raw == '':
                continue
            caster = int if f.type in (int, 'int') else float
            try:
                overrides[f.name] = caster(raw)
            except ValueError as e:
                raise ValueError(f'Invalid value for {cls.ENV_PREFIX}{f.name.upper()}: {raw!r}') from e
        return cls(**overrides)


# Attribute-hint patterns per role, host-specific first.
DEFAULT_FIELD_PATTERNS: dict[FieldRole, tuple[str, ...]] = {
    FieldRole.PRIMARY_TEXT: (
        'ytcp-social-suggestion-input input',
        'textarea[aria-label*="title" i]',
        '#video-title',
        'input[placeholder*="title" i]',
        'textarea[placeholder*="title" i]',
        '[data-testid*="title"] input',
        '[data-testid*="title"] textarea',
        '.ytcp-video-title input',
        '.ytcp-video-title textarea',
    ),
    FieldRole.LONG_TEXT: (
        'ytcp-mention-textbox textarea',
        'textarea[aria-label*="description" i]',
        '#video-description',
        'textarea[placeholder*="description" i]',
        '[data-testid*="description"] textarea',
        '.ytcp-video-description textarea',
    ),
    FieldRole.KEYWORD_LIST: (
        'input[aria-describedby*="tags"]',
        'input[data-testid*="tags"]',
        'input[placeholder*="tag" i]',
        'input[placeholder*="keyword" i]',
        'input[aria-label*="tag" i]',
        'input[aria-label*="keyword" i]',
        'ytcp-form-input-container[internalname="keywords"] input',
        '#video-tags',
        '[data-testid*="tags"] input',
        '.ytcp-video-tags input',
        'ytcp-chip-bar input',
        'ytcp-form-tags input',
        '[role="textbox"][aria-label*="tag" i]',
        'input[name*="tag" i]',
        'input[id*="tag" i]',
    ),
}


@dataclass(frozen=True)
class SelectorConfig:
    """Selectors for locating the panel's host container and fields.

    Attributes:
        main_content: Selector of the page region the panel lives in
        sidebar_targets: Preferred attachment points, tried in order
        field_patterns: Attribute-hint patterns per field role

    """

    main_content: str = '.ytcp-main-content, .main-content, main, [role="main"]'
    sidebar_targets: tuple[str, ...] = (
        '.ytcp-video-metadata-editor-sidebar',
        '.ytcp-video-edit-basics-sidebar',
        '.ytcp-video-edit-sidebar, .video-edit-sidebar, .sidebar, [data-testid*="sidebar"]',
        '.metadata-editor-sidebar',
        '.video-edit-right-panel',
        '.ytcp-sidebar',
    )
    field_patterns: dict[FieldRole, tuple[str, ...]] = field(default_factory=lambda: dict(DEFAULT_FIELD_PATTERNS))
