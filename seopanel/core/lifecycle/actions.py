"""Panel actions: generate tags, optimize the title, enhance the description."""

import logging
from collections.abc import Callable
from typing import cast

import logfire

from seopanel.core.fallback.generator import FallbackGenerator
from seopanel.core.generation.service import GenerativeService
from seopanel.core.lifecycle.session import PageSession
from seopanel.core.page.base import PageSource
from seopanel.exceptions import GenerationError
from seopanel.models.lifecycle import NotificationLevel
from seopanel.models.metadata import ExtractedMetadata, FieldRole
from seopanel.models.payloads import (
    ActionOutcome,
    GeneratedDescription,
    GeneratedPayload,
    GeneratedTags,
    GeneratedTitle,
    GenerationRequest,
)
from seopanel.panel.base import Panel
from seopanel.storage.settings import SettingsStorage

logger = logging.getLogger(__name__)

_SUCCESS_MESSAGES = {
    FieldRole.KEYWORD_LIST: 'Tags generated successfully',
    FieldRole.PRIMARY_TEXT: 'Title optimized successfully',
    FieldRole.LONG_TEXT: 'Description enhanced successfully',
}


def merge_tags(existing: list[str], new: list[str]) -> list[str]:
    """Append ``new`` tags to ``existing``, skipping case-insensitive duplicates."""
    seen = {tag.lower() for tag in existing}
    merged = list(existing)
    for tag in new:
        if tag.lower() not in seen:
            seen.add(tag.lower())
            merged.append(tag)
    return merged


class PanelActions:
    """Runs the three rewrite actions against the current page session.

    Each action reads metadata through the session cache, tries the
    generative service when credentials are configured, falls back to
    heuristics otherwise, and writes the result back unless the page
    changed in the meantime.

    Attributes:
        page: Page to write to
        panel: Panel receiving notifications
        settings: Settings storage, asked once per action for credentials
        fallback: Heuristic generator

    """

    def __init__(
        self,
        page: PageSource,
        panel: Panel,
        settings: SettingsStorage,
        service_provider: Callable[[], GenerativeService | None],
        current_token: Callable[[], str | None],
        fallback: FallbackGenerator | None = None,
    ):
        """Initialize the actions.

        Args:
            page: Page to write to
            panel: Panel receiving notifications
            settings: Settings storage
            service_provider: Returns the generative service, or None if it cannot be built
            current_token: Returns the token of the live session, or None
            fallback: Heuristic generator. Defaults to FallbackGenerator().

        """
        self.page = page
        self.panel = panel
        self.settings = settings
        self.fallback = fallback or FallbackGenerator()
        self._service_provider = service_provider
        self._current_token = current_token

    async def generate_tags(self, session: PageSession) -> ActionOutcome:
        role = FieldRole.KEYWORD_LIST
        metadata = await session.cache.get()
        if not metadata.title.strip() and not metadata.description.strip():
            return self._precondition_failed(role, 'No video title or description found. Enter content first.')

        payload, source = await self._generate(
            GenerationRequest(role=role, current_title=metadata.title, current_description=metadata.description),
            lambda: GeneratedTags(tags=self.fallback.tags(metadata.title, metadata.description)),
        )
        value = ', '.join(merge_tags(metadata.tag_list, cast(GeneratedTags, payload).tags))
        return await self._apply(session, metadata, role, value, source)

    async def optimize_title(self, session: PageSession) -> ActionOutcome:
        role = FieldRole.PRIMARY_TEXT
        metadata = await session.cache.get()
        if not metadata.title.strip():
            return self._precondition_failed(role, 'No video title found. Enter a title first.')

        payload, source = await self._generate(
            GenerationRequest(role=role, current_title=metadata.title, current_description=metadata.description),
            lambda: GeneratedTitle(title=self.fallback.title(metadata.title)),
        )
        return await self._apply(session, metadata, role, cast(GeneratedTitle, payload).title, source)

    async def enhance_description(self, session: PageSession) -> ActionOutcome:
        role = FieldRole.LONG_TEXT
        metadata = await session.cache.get()
        if not metadata.title.strip() and not metadata.description.strip():
            return self._precondition_failed(role, 'No video content found. Enter content first.')

        payload, source = await self._generate(
            GenerationRequest(role=role, current_title=metadata.title, current_description=metadata.description),
            lambda: GeneratedDescription(
                description=self.fallback.description(metadata.title, metadata.description)
            ),
        )
        return await self._apply(session, metadata, role, cast(GeneratedDescription, payload).description, source)

    async def _generate(
        self,
        request: GenerationRequest,
        fallback: Callable[[], GeneratedPayload],
    ) -> tuple[GeneratedPayload, str]:
        if self.settings.has_generation_credentials():
            try:
                service = self._build_service(request.role)
                if service is not None:
                    return await service.generate(request), 'ai'
            except GenerationError as e:
                logfire.warn('Using heuristic fallback', role=request.role.field_name, reason=e.reason)
        else:
            logfire.info('No generation credentials; using heuristic fallback', role=request.role.field_name)
        return fallback(), 'fallback'

    def _build_service(self, role: FieldRole) -> GenerativeService | None:
        try:
            return self._service_provider()
        except Exception as e:
            raise GenerationError(role.field_name, f'generative service unavailable: {e}') from e

    async def _apply(
        self,
        session: PageSession,
        metadata: ExtractedMetadata,
        role: FieldRole,
        value: str,
        source: str,
    ) -> ActionOutcome:
        name = role.field_name
        if self._current_token() != session.token:
            logfire.info('Discarding stale result', role=name, token=session.token)
            return ActionOutcome(
                role=role, source=source, value=value, discarded=True, message='Page changed; result discarded'
            )

        locator = metadata.locators.get(name)
        if locator is None:
            message = f'{name.capitalize()} field not found on the page'
            self.panel.notify(message, NotificationLevel.WARNING)
            return ActionOutcome(role=role, source=source, value=value, message=message)

        await self.page.write_field(locator, value)
        session.cache.invalidate()

        message = _SUCCESS_MESSAGES[role]
        if source == 'ai':
            self.panel.notify(message, NotificationLevel.SUCCESS)
        else:
            message = f'{message} (smart heuristics)'
            self.panel.notify(message, NotificationLevel.INFO)
        logger.info(f'Applied {source} {name} ({len(value)} chars)')
        return ActionOutcome(role=role, source=source, value=value, applied=True, message=message)

    def _precondition_failed(self, role: FieldRole, message: str) -> ActionOutcome:
        self.panel.notify(message, NotificationLevel.WARNING)
        return ActionOutcome(role=role, source='fallback', message=message)
