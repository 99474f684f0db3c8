from datetime import date

import pytest

from seopanel.config import TimingConfig
from seopanel.core.fallback.generator import FallbackGenerator
from seopanel.core.generation.config import LLMConfig
from seopanel.core.page.static import StaticPage
from seopanel.panel.base import Panel
from seopanel.storage.settings import SettingsStorage

EDIT_URL = 'https://studio.youtube.com/video/abc123/edit'


class RecordingPanel(Panel):
    """Panel that records every call instead of rendering."""

    def __init__(self):
        self.target = None
        self.attach_count = 0
        self.detach_count = 0
        self.states = []
        self.scores = []
        self.outcomes = []
        self.notifications = []

    async def attach(self, target):
        self.target = target
        self.attach_count += 1

    async def detach(self):
        self.target = None
        self.detach_count += 1

    def render_state(self, state):
        self.states.append(state)

    def render_score(self, result):
        self.scores.append(result)

    def render_outcome(self, outcome):
        self.outcomes.append(outcome)

    def notify(self, message, level):
        self.notifications.append((message, level))

    def messages(self, level=None):
        return [m for m, lvl in self.notifications if level is None or lvl is level]


@pytest.fixture
def mock_llm_config():
    return LLMConfig(provider='groq', model_name='llama-3.3-70b-versatile', api_key='test-key', temperature=0.0)


@pytest.fixture
def edit_page_html():
    return """
    <!DOCTYPE html>
    <html>
    <head><title>Video details</title></head>
    <body>
        <div class="ytcp-main-content">
            <div class="ytcp-video-metadata-editor-sidebar"></div>
            <textarea id="video-title" aria-label="Add a title that describes your video">How to Bake Sourdough Bread at Home</textarea>
            <textarea id="video-description" aria-label="Tell viewers about your video">Learn to bake bread.</textarea>
            <div class="tags-section">
                <span>Tags</span>
                <input type="text" id="video-tags" value="bread, baking">
            </div>
        </div>
    </body>
    </html>
    """


@pytest.fixture
def edit_page(edit_page_html):
    return StaticPage(edit_page_html, url=EDIT_URL)


@pytest.fixture
def panel():
    return RecordingPanel()


@pytest.fixture
def settings_storage(tmp_path, monkeypatch):
    for name in ('GEMINI_KEY', 'GROQ_KEY', 'OPENAI_API_KEY'):
        monkeypatch.delenv(name, raising=False)
    return SettingsStorage(tmp_path / 'settings.json')


@pytest.fixture
def fallback():
    return FallbackGenerator(today=lambda: date(2025, 3, 14))


@pytest.fixture
def fast_timing():
    return TimingConfig(
        element_timeout=0.5,
        retry_interval=0.01,
        max_retries=3,
        injection_attempts=3,
        injection_retry_delay=0.01,
        sidebar_timeout=0.1,
        sidebar_interval=0.01,
        sidebar_retries=1,
        page_change_delay=0.01,
        analysis_delay=0.0,
        url_poll_interval=0.01,
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line('markers', 'integration: marks tests as integration tests')
    config.addinivalue_line('markers', 'unit: marks tests as unit tests')


def pytest_collection_modifyitems(config, items):
    """Apply directory-based marks to collected test items."""

    for item in items:
        if hasattr(item, 'fspath'):
            file_path = str(item.fspath)

            # Add marks based on directory
            if '/tests/integration/' in file_path:
                item.add_marker(pytest.mark.integration)
            elif '/tests/unit/' in file_path:
                item.add_marker(pytest.mark.unit)
