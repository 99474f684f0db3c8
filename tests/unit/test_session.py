import time

import pytest

from seopanel.core.cache.metadata_cache import MetadataCache
from seopanel.core.lifecycle.actions import merge_tags
from seopanel.core.lifecycle.session import PageSession, detect_page_type
from seopanel.core.lifecycle.waiting import wait_for_element
from seopanel.core.page.static import StaticPage
from seopanel.exceptions import FieldWriteError, InvalidTransitionError
from seopanel.models.lifecycle import InjectionState, PageType


class CountingPage(StaticPage):
    """Static page whose element appears after a number of queries."""

    def __init__(self, appear_after=None):
        super().__init__('<html><body><main id="content"></main></body></html>')
        self.appear_after = appear_after
        self.queries = 0

    async def query(self, selector):
        self.queries += 1
        if self.appear_after is None or self.queries <= self.appear_after:
            return None
        return await super().query(selector)


async def test_wait_returns_immediately_when_present():
    page = CountingPage(appear_after=0)

    element = await wait_for_element(page, 'main', retry_interval=0.5, max_retries=3, timeout=5)

    assert element is not None
    assert page.queries == 1


async def test_wait_gives_up_after_retries():
    page = CountingPage()
    started = time.monotonic()

    element = await wait_for_element(page, 'main', retry_interval=0.5, max_retries=3, timeout=10)

    elapsed = time.monotonic() - started
    assert element is None
    assert page.queries == 4
    assert 1.4 <= elapsed < 2.5


async def test_wait_finds_late_element():
    page = CountingPage(appear_after=2)

    element = await wait_for_element(page, 'main', retry_interval=0.01, max_retries=5, timeout=5)

    assert element is not None
    assert page.queries == 3


async def test_wait_respects_hard_timeout():
    page = CountingPage()
    started = time.monotonic()

    element = await wait_for_element(page, 'main', retry_interval=0.1, max_retries=1000, timeout=0.3)

    assert element is None
    assert time.monotonic() - started < 1.0


async def test_wait_with_invalid_selector_returns_none():
    page = StaticPage('<main></main>')

    assert await wait_for_element(page, '[[[', retry_interval=0.01, max_retries=2, timeout=1) is None


@pytest.mark.parametrize(
    'url, page_type',
    [
        ('https://studio.youtube.com/video/abc123/edit', PageType.VIDEO_EDIT),
        ('https://studio.youtube.com/channel/UC1/create/upload', PageType.UPLOAD),
        ('https://studio.youtube.com/video/abc123/analytics/tab-overview', PageType.ANALYTICS),
        ('https://studio.youtube.com/channel/UC1/dashboard', PageType.DASHBOARD),
        ('https://www.youtube.com/watch?v=abc', PageType.OTHER),
    ],
)
def test_detect_page_type(url, page_type):
    assert detect_page_type(url) is page_type


def make_session():
    page = StaticPage('<html></html>', url='https://studio.youtube.com/video/x/edit')
    return PageSession(url=page.url, page_type=PageType.VIDEO_EDIT, cache=MetadataCache(page))


def test_session_follows_legal_transitions():
    session = make_session()

    for state in (
        InjectionState.DETECTING_PAGE,
        InjectionState.AWAITING_CONTAINER,
        InjectionState.FAILED,
        InjectionState.DETECTING_PAGE,
        InjectionState.AWAITING_CONTAINER,
        InjectionState.INJECTED,
        InjectionState.IDLE,
    ):
        session.transition(state)

    assert session.state is InjectionState.IDLE
    assert len(session.history) == 8


def test_session_rejects_illegal_transition():
    session = make_session()

    with pytest.raises(InvalidTransitionError):
        session.transition(InjectionState.INJECTED)
    assert session.state is InjectionState.IDLE


def test_sessions_have_distinct_tokens():
    assert make_session().token != make_session().token


def test_merge_tags_skips_duplicates():
    assert merge_tags(['Bread', 'baking'], ['bread', 'sourdough', 'Baking', 'starter']) == [
        'Bread',
        'baking',
        'sourdough',
        'starter',
    ]


async def test_static_page_edit_subscribers_fire_on_write():
    page = StaticPage('<input type="text" id="t">')
    calls = []
    await page.subscribe_edits(lambda: calls.append(1))

    await page.write_field('#t', 'hello')

    assert calls == [1]
    assert (await page.query('#t'))['value'] == 'hello'


async def test_static_page_rejects_write_to_non_editable():
    page = StaticPage('<div id="d">text</div><input type="checkbox" id="c">')

    with pytest.raises(FieldWriteError):
        await page.write_field('#d', 'x')
    with pytest.raises(FieldWriteError):
        await page.write_field('#missing', 'x')
    with pytest.raises(FieldWriteError):
        await page.write_field('#c', 'x')
