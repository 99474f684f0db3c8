import asyncio

import pytest
from pydantic_ai import Agent
from pydantic_ai.models.test import TestModel

from seopanel.core.generation.service import GenerativeService
from seopanel.core.lifecycle.controller import InjectionController
from seopanel.core.page.static import StaticPage
from seopanel.models.lifecycle import InjectionState, NotificationLevel
from seopanel.models.metadata import FieldRole
from seopanel.models.payloads import GeneratedTags, PanelSettings

EDIT_URL = 'https://studio.youtube.com/video/abc123/edit'
OTHER_EDIT_URL = 'https://studio.youtube.com/video/def456/edit'
DASHBOARD_URL = 'https://studio.youtube.com/channel/UC1/dashboard'


async def eventually(predicate, timeout=2.0):
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError('condition not met in time')
        await asyncio.sleep(0.01)


@pytest.fixture
def make_controller(edit_page, panel, settings_storage, fallback, fast_timing):
    def factory(page=None, service=None):
        return InjectionController(
            page or edit_page,
            panel,
            settings_storage,
            service=service,
            fallback=fallback,
            timing=fast_timing,
        )

    return factory


def tags_service(tags):
    agent = Agent(TestModel(custom_output_args={'tags': tags}), output_type=GeneratedTags)
    return GenerativeService(agents={FieldRole.KEYWORD_LIST: agent}, max_attempts=1)


async def test_injects_into_sidebar_and_scores(make_controller, panel):
    controller = make_controller()

    session = await controller.start()

    assert session.state is InjectionState.INJECTED
    assert session.history == [
        InjectionState.IDLE,
        InjectionState.DETECTING_PAGE,
        InjectionState.AWAITING_CONTAINER,
        InjectionState.INJECTED,
    ]
    assert 'ytcp-video-metadata-editor-sidebar' in panel.target['class']
    assert panel.messages(NotificationLevel.SUCCESS) == ['SEO Assistant panel injected successfully']
    assert len(panel.scores) == 1


async def test_falls_back_to_main_container_without_sidebar(make_controller, panel):
    page = StaticPage('<main><textarea id="video-title">Hello</textarea></main>', url=EDIT_URL)

    session = await make_controller(page).start()

    assert session.state is InjectionState.INJECTED
    assert panel.target.name == 'main'


async def test_missing_container_fails_with_single_error(make_controller, panel):
    page = StaticPage('<div class="loading">Loading</div>', url=EDIT_URL)

    session = await make_controller(page).start()

    assert session.state is InjectionState.FAILED
    assert session.history.count(InjectionState.AWAITING_CONTAINER) == 3
    assert panel.messages(NotificationLevel.ERROR) == ['Failed to inject SEO Assistant panel']
    assert panel.attach_count == 0
    assert panel.scores == []


async def test_unsupported_page_is_left_alone(make_controller, panel):
    page = StaticPage('<main></main>', url=DASHBOARD_URL)

    session = await make_controller(page).start()

    assert session.state is InjectionState.IDLE
    assert panel.attach_count == 0
    assert panel.notifications == []


async def test_scoring_disabled_skips_analysis(make_controller, panel, settings_storage):
    settings_storage.save_settings(PanelSettings(seo_enabled=False))

    controller = make_controller()
    await controller.start()

    assert panel.scores == []
    assert await controller.perform('analyze') is None


async def test_navigation_reinjects_with_new_session(make_controller, panel, edit_page):
    controller = make_controller()
    runner = asyncio.create_task(controller.run())
    await eventually(lambda: panel.attach_count == 1)
    first = controller.session

    edit_page.navigate(OTHER_EDIT_URL)
    await eventually(lambda: panel.attach_count == 2)

    controller.stop()
    await runner
    second = controller.session
    assert panel.detach_count == 1
    assert second.token != first.token
    assert second.url == OTHER_EDIT_URL
    assert second.state is InjectionState.INJECTED
    assert first.state is InjectionState.IDLE


async def test_navigation_away_tears_down(make_controller, panel, edit_page):
    controller = make_controller()
    runner = asyncio.create_task(controller.run())
    await eventually(lambda: panel.attach_count == 1)

    edit_page.navigate(DASHBOARD_URL)
    await eventually(lambda: controller.session is not None and controller.session.url == DASHBOARD_URL)
    await controller.wait_started()

    controller.stop()
    await runner
    assert panel.detach_count == 1
    assert panel.attach_count == 1
    assert controller.session.state is InjectionState.IDLE


async def test_edits_invalidate_cached_metadata(make_controller, edit_page):
    controller = make_controller()
    runner = asyncio.create_task(controller.run())
    await eventually(lambda: controller.session is not None and controller.session.cache.entry is not None)

    await edit_page.write_field('#video-title', 'Edited by hand')

    assert controller.session.cache.entry is None
    assert (await controller.session.cache.get()).title == 'Edited by hand'
    controller.stop()
    await runner


async def test_optimize_title_with_heuristics(make_controller, panel, edit_page):
    controller = make_controller()
    await controller.start()

    outcome = await controller.perform('optimize_title')

    expected = 'Complete How to Bake Sourdough Bread at Home (2025) - Step by Step Guide'
    assert outcome.source == 'fallback'
    assert outcome.applied
    assert outcome.value == expected
    assert (await edit_page.query('#video-title')).get_text() == expected
    assert panel.messages(NotificationLevel.INFO) == ['Title optimized successfully (smart heuristics)']
    assert panel.outcomes == [outcome]
    assert len(panel.scores) == 2
    assert panel.scores[-1].components['title'].length == len(expected)


async def test_enhance_description_with_heuristics(make_controller, edit_page):
    controller = make_controller()
    await controller.start()

    outcome = await controller.perform('enhance_description')

    written = (await edit_page.query('#video-description')).get_text()
    assert outcome.applied
    assert written == outcome.value
    assert 'Learn to bake bread.' in written
    assert 'SUBSCRIBE' in written


async def test_generate_tags_with_ai_merges_existing(make_controller, panel, edit_page, settings_storage):
    settings_storage.save_api_key('gemini', 'test-key')
    controller = make_controller(service=tags_service(['sourdough', 'Bread', 'starter']))
    await controller.start()

    outcome = await controller.perform('generate_tags')

    assert outcome.source == 'ai'
    assert outcome.value == 'bread, baking, sourdough, starter'
    assert (await edit_page.query('#video-tags'))['value'] == 'bread, baking, sourdough, starter'
    assert panel.messages(NotificationLevel.SUCCESS)[-1] == 'Tags generated successfully'


async def test_ai_failure_falls_back_to_heuristics(make_controller, settings_storage, mocker):
    settings_storage.save_api_key('gemini', 'test-key')
    agent = mocker.Mock()
    agent.run = mocker.AsyncMock(side_effect=RuntimeError('quota exceeded'))
    service = GenerativeService(agents={FieldRole.KEYWORD_LIST: agent}, max_attempts=1)
    controller = make_controller(service=service)
    await controller.start()

    outcome = await controller.perform('generate_tags')

    assert outcome.source == 'fallback'
    assert outcome.applied
    assert '2025' in outcome.value


async def test_result_for_torn_down_page_is_discarded(make_controller, panel, edit_page, settings_storage, mocker):
    settings_storage.save_api_key('gemini', 'test-key')

    async def navigate_during_generation(prompt):
        await controller.teardown()
        return mocker.Mock(output=GeneratedTags(tags=['late']))

    agent = mocker.Mock()
    agent.run = navigate_during_generation
    controller = make_controller(service=GenerativeService(agents={FieldRole.KEYWORD_LIST: agent}, max_attempts=1))
    await controller.start()

    outcome = await controller.perform('generate_tags')

    assert outcome.discarded
    assert not outcome.applied
    assert (await edit_page.query('#video-tags'))['value'] == 'bread, baking'
    assert panel.outcomes == []


async def test_action_needs_content(make_controller, panel):
    page = StaticPage('<main><textarea id="video-title"></textarea></main>', url=EDIT_URL)
    controller = make_controller(page)
    await controller.start()

    outcome = await controller.perform('optimize_title')

    assert not outcome.applied
    assert panel.messages(NotificationLevel.WARNING) == ['No video title found. Enter a title first.']


async def test_missing_field_is_reported(make_controller, panel):
    page = StaticPage('<main><textarea id="video-title">Bread Baking Basics</textarea></main>', url=EDIT_URL)
    controller = make_controller(page)
    await controller.start()

    outcome = await controller.perform('generate_tags')

    assert not outcome.applied
    assert panel.messages(NotificationLevel.WARNING) == ['Tags field not found on the page']


async def test_action_before_injection_warns(make_controller, panel):
    controller = make_controller()

    assert await controller.perform('generate_tags') is None
    assert panel.messages(NotificationLevel.WARNING) == ['SEO Assistant not available on this page']


async def test_unknown_action_is_reported_not_raised(make_controller, panel):
    controller = make_controller()
    await controller.start()

    assert await controller.perform('delete_video') is None
    assert panel.messages(NotificationLevel.ERROR)[0].startswith('Operation failed: Unknown action')


async def test_write_failure_is_reported(make_controller, panel, edit_page, mocker):
    controller = make_controller()
    await controller.start()
    mocker.patch.object(edit_page, 'write_field', side_effect=RuntimeError('page crashed'))

    assert await controller.perform('optimize_title') is None
    assert panel.messages(NotificationLevel.ERROR) == ['Operation failed: page crashed']


async def test_near_limit_description_still_falls_back(make_controller, panel):
    description = '\n\n'.join(['Bread is great to bake at home.'] * 150)
    page = StaticPage(
        '<main><textarea id="video-title">Bread Baking Basics</textarea>'
        f'<textarea id="video-description">{description}</textarea></main>',
        url=EDIT_URL,
    )
    controller = make_controller(page)
    await controller.start()

    outcome = await controller.perform('enhance_description')

    assert outcome.applied
    assert outcome.source == 'fallback'
    assert len(outcome.value) <= 5000
    assert (await page.query('#video-description')).get_text() == outcome.value
    assert panel.messages(NotificationLevel.ERROR) == []


async def test_unknown_provider_falls_back_to_heuristics(make_controller, panel, settings_storage):
    settings_storage.save_settings(PanelSettings(provider='bogus'))
    settings_storage.save_api_key('bogus', 'test-key')
    controller = make_controller()
    await controller.start()

    outcome = await controller.perform('optimize_title')

    assert outcome.source == 'fallback'
    assert outcome.applied
    assert panel.messages(NotificationLevel.ERROR) == []


async def test_navigation_survives_detach_failure(make_controller, panel, edit_page, mocker):
    controller = make_controller()
    runner = asyncio.create_task(controller.run())
    await eventually(lambda: panel.attach_count == 1)
    mocker.patch.object(panel, 'detach', side_effect=RuntimeError('panel gone'))

    edit_page.navigate(OTHER_EDIT_URL)
    await eventually(lambda: panel.attach_count == 2)

    controller.stop()
    await runner
    assert panel.messages(NotificationLevel.ERROR) == ['Operation failed: panel gone']
    assert controller.session.url == OTHER_EDIT_URL
    assert controller.session.state is InjectionState.INJECTED
