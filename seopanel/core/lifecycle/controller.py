"""Injection lifecycle controller.

Owns the page session, waits for the host container, attaches the panel,
keeps the panel in step with navigation and routes panel actions.
"""

import asyncio
import logging
from typing import Any

import logfire

from seopanel.config import SelectorConfig, TimingConfig
from seopanel.core.cache.metadata_cache import MetadataCache
from seopanel.core.fallback.generator import FallbackGenerator
from seopanel.core.generation.service import GenerativeService
from seopanel.core.lifecycle.actions import PanelActions
from seopanel.core.lifecycle.session import PageSession, detect_page_type
from seopanel.core.lifecycle.waiting import wait_for_element
from seopanel.core.page.base import PageSource
from seopanel.core.resolution.resolver import SelectorCascadeResolver
from seopanel.core.scoring.scorer import SEOScorer
from seopanel.exceptions import ContainerNotFoundError
from seopanel.models.lifecycle import InjectionState, NotificationLevel
from seopanel.models.payloads import ActionOutcome
from seopanel.models.scoring import ScoreResult
from seopanel.panel.base import Panel
from seopanel.retry import get_fixed_retryer, log_retry
from seopanel.storage.settings import SettingsStorage

logger = logging.getLogger(__name__)

ACTIONS = ('analyze', 'generate_tags', 'optimize_title', 'enhance_description')


class InjectionController:
    """State machine that keeps the panel attached to the right page.

    Only one PageSession is live at a time. Navigation tears it down and
    starts a fresh one after ``timing.page_change_delay``. Exceptions from
    startup and from panel actions are logged and turned into error
    notifications; they never escape ``run`` or ``perform``.

    Attributes:
        page: Page being augmented
        panel: Presentation layer
        settings: Persisted settings and credentials
        timing: Wait and retry settings
        selectors: Container and field selectors
        session: The live session, if any
        actions: Handlers for the rewrite actions

    """

    def __init__(
        self,
        page: PageSource,
        panel: Panel,
        settings: SettingsStorage,
        service: GenerativeService | None = None,
        fallback: FallbackGenerator | None = None,
        scorer: SEOScorer | None = None,
        timing: TimingConfig | None = None,
        selectors: SelectorConfig | None = None,
    ):
        """Initialize the controller.

        Args:
            page: Page being augmented
            panel: Presentation layer
            settings: Persisted settings and credentials
            service: Generative service. Built from settings on first use when omitted.
            fallback: Heuristic generator
            scorer: SEO scorer
            timing: Wait and retry settings. Defaults to TimingConfig().
            selectors: Container and field selectors. Defaults to SelectorConfig().

        """
        self.page = page
        self.panel = panel
        self.settings = settings
        self.scorer = scorer or SEOScorer()
        self.timing = timing or TimingConfig()
        self.selectors = selectors or SelectorConfig()
        self.resolver = SelectorCascadeResolver(field_patterns=self.selectors.field_patterns)
        self.session: PageSession | None = None
        self._service = service
        self._start_task: asyncio.Task | None = None
        self._stop_event: asyncio.Event | None = None
        self.actions = PanelActions(
            page=page,
            panel=panel,
            settings=settings,
            service_provider=self._get_service,
            current_token=lambda: self.session.token if self.session else None,
            fallback=fallback,
        )

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def new_session(self) -> PageSession:
        """Replace the live session with a fresh IDLE one for the current URL."""
        url = self.page.url
        cache = MetadataCache(self.page, self.resolver, ttl=self.timing.cache_ttl)
        self.session = PageSession(url=url, page_type=detect_page_type(url), cache=cache)
        return self.session

    async def start(self) -> PageSession:
        """Run detection and injection for the current URL.

        Returns:
            The session, in INJECTED, FAILED or IDLE (page without a panel).

        """
        session = self.new_session()
        with logfire.span('inject panel', url=session.url, page_type=session.page_type.value):
            self._transition(session, InjectionState.DETECTING_PAGE)
            if not session.page_type.supports_panel:
                logfire.info('No panel for page type', page_type=session.page_type.value)
                self._transition(session, InjectionState.IDLE)
                return session

            try:
                async for attempt in get_fixed_retryer(
                    max_attempts=self.timing.injection_attempts,
                    delay=self.timing.injection_retry_delay,
                    exceptions=(ContainerNotFoundError,),
                    log_callback=log_retry,
                ):
                    with attempt:
                        container = await self._await_container(session)
            except ContainerNotFoundError as e:
                logfire.error('Panel injection failed', url=session.url, selector=e.selector, attempts=e.attempts)
                self.panel.notify('Failed to inject SEO Assistant panel', NotificationLevel.ERROR)
                return session

            target = await self._find_target(container)
            await self.panel.attach(target)
            session.panel_target = target
            self._transition(session, InjectionState.INJECTED)
            self.panel.notify('SEO Assistant panel injected successfully', NotificationLevel.SUCCESS)

        await asyncio.sleep(self.timing.analysis_delay)
        await self.refresh_analysis()
        return session

    async def _await_container(self, session: PageSession) -> Any:
        if session.state is InjectionState.FAILED:
            self._transition(session, InjectionState.DETECTING_PAGE)
        self._transition(session, InjectionState.AWAITING_CONTAINER)

        selector = self.selectors.main_content
        container = await wait_for_element(
            self.page,
            selector,
            retry_interval=self.timing.retry_interval,
            max_retries=self.timing.max_retries,
            timeout=self.timing.element_timeout,
        )
        if container is None:
            self._transition(session, InjectionState.FAILED)
            raise ContainerNotFoundError(selector, self.timing.max_retries + 1)
        return container

    async def _find_target(self, container: Any) -> Any:
        for selector in self.selectors.sidebar_targets:
            sidebar = await wait_for_element(
                self.page,
                selector,
                retry_interval=self.timing.sidebar_interval,
                max_retries=self.timing.sidebar_retries,
                timeout=self.timing.sidebar_timeout,
            )
            if sidebar is not None:
                logger.debug(f'Attaching panel to sidebar {selector!r}')
                return sidebar
        logger.debug('No sidebar found; attaching panel to main container')
        return container

    def _transition(self, session: PageSession, target: InjectionState) -> None:
        session.transition(target)
        logger.debug(f'Injection state -> {target.value}')
        self.panel.render_state(target)

    # ------------------------------------------------------------------
    # Teardown and navigation
    # ------------------------------------------------------------------

    async def teardown(self) -> PageSession | None:
        """Detach the panel and drop the live session.

        Returns:
            The session that was torn down, or None if there was none.

        """
        session = self.session
        if session is None:
            return None
        self.session = None
        await self.panel.detach()
        session.cache.invalidate()
        if session.can_transition(InjectionState.IDLE):
            self._transition(session, InjectionState.IDLE)
        logfire.info('Panel torn down', url=session.url)
        return session

    async def handle_navigation(self) -> None:
        """Tear down the current session and schedule a delayed restart."""
        logfire.info('Page navigation detected', url=self.page.url)
        await self._cancel_start()
        try:
            await self.teardown()
        finally:
            self._start_task = asyncio.create_task(self._guarded_start(delay=self.timing.page_change_delay))

    async def run(self) -> None:
        """Inject, then follow navigation until ``stop`` is called."""
        self._stop_event = asyncio.Event()
        await self.page.subscribe_edits(self.on_edit)

        last_url = self.page.url
        self._start_task = asyncio.create_task(self._guarded_start())
        try:
            while not self._stop_event.is_set():
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self.timing.url_poll_interval)
                except TimeoutError:
                    pass
                current = self.page.url
                if current != last_url:
                    last_url = current
                    try:
                        await self.handle_navigation()
                    except Exception as e:
                        self._report_unexpected('navigation', e)
        finally:
            await self._cancel_start()

    def stop(self) -> None:
        """Ask ``run`` to return after its current poll."""
        if self._stop_event is not None:
            self._stop_event.set()

    async def wait_started(self) -> None:
        """Wait for the pending startup, if any, to finish."""
        if self._start_task is not None:
            await asyncio.gather(self._start_task, return_exceptions=True)

    def on_edit(self) -> None:
        """Edit hook: drop cached metadata so the next read rescans."""
        if self.session is not None:
            self.session.cache.invalidate()

    async def _guarded_start(self, delay: float = 0.0) -> None:
        try:
            if delay:
                await asyncio.sleep(delay)
            await self.start()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._report_unexpected('startup', e)

    async def _cancel_start(self) -> None:
        task = self._start_task
        self._start_task = None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    # ------------------------------------------------------------------
    # Analysis and actions
    # ------------------------------------------------------------------

    async def refresh_analysis(self) -> ScoreResult | None:
        """Score the current metadata and render it.

        Returns:
            The score, or None when the panel is not injected or scoring is disabled.

        """
        session = self.session
        if session is None or session.state is not InjectionState.INJECTED:
            return None
        if not self.settings.load_settings().seo_enabled:
            return None
        metadata = await session.cache.get()
        result = self.scorer.score(metadata)
        logfire.info('SEO score', overall=result.overall_score, grade=result.grade, missing=metadata.missing_fields)
        self.panel.render_score(result)
        return result

    async def perform(self, action: str) -> ActionOutcome | ScoreResult | None:
        """Run a panel action.

        Args:
            action: One of 'analyze', 'generate_tags', 'optimize_title', 'enhance_description'

        Returns:
            The action's outcome, the score for 'analyze', or None if the action could not run.

        """
        try:
            if action not in ACTIONS:
                raise ValueError(f'Unknown action: {action}. Available: {", ".join(ACTIONS)}')

            session = self.session
            if session is None or session.state is not InjectionState.INJECTED:
                self.panel.notify('SEO Assistant not available on this page', NotificationLevel.WARNING)
                return None

            if action == 'analyze':
                return await self.refresh_analysis()

            with logfire.span('panel action', action=action, url=session.url):
                outcome: ActionOutcome = await getattr(self.actions, action)(session)
            if not outcome.discarded:
                self.panel.render_outcome(outcome)
            if outcome.applied:
                await self.refresh_analysis()
            return outcome
        except Exception as e:
            self._report_unexpected(action, e)
            return None

    def _get_service(self) -> GenerativeService | None:
        if self._service is None:
            llm_config = self.settings.llm_config()
            if llm_config is None:
                return None
            self._service = GenerativeService(llm_config, timeout=self.timing.generation_timeout)
        return self._service

    def _report_unexpected(self, where: str, error: Exception) -> None:
        logger.exception(f'Unexpected error during {where}')
        logfire.error('Unexpected error', where=where, error=str(error))
        self.panel.notify(f'Operation failed: {error}', NotificationLevel.ERROR)
