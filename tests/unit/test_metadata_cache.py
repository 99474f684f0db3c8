import asyncio

from seopanel.core.cache.metadata_cache import MetadataCache
from seopanel.core.page.static import StaticPage
from seopanel.models.metadata import CacheEntry, ExtractedMetadata


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


async def test_scan_reads_all_fields(edit_page):
    metadata = await MetadataCache(edit_page).get()

    assert metadata.title == 'How to Bake Sourdough Bread at Home'
    assert metadata.description == 'Learn to bake bread.'
    assert metadata.tags == 'bread, baking'
    assert metadata.tag_list == ['bread', 'baking']
    assert metadata.fields_found.title and metadata.fields_found.description and metadata.fields_found.tags
    assert metadata.locators == {
        'title': '#video-title',
        'description': '#video-description',
        'tags': '#video-tags',
    }
    assert metadata.source_url == edit_page.url


async def test_missing_fields_are_flagged():
    page = StaticPage('<html><body><textarea id="video-title">Only a title</textarea></body></html>')

    metadata = await MetadataCache(page).get()

    assert metadata.title == 'Only a title'
    assert metadata.description == ''
    assert metadata.missing_fields == ['description', 'tags']
    assert 'description' not in metadata.locators


async def test_hit_within_ttl_returns_same_instance(edit_page):
    clock = FakeClock()
    cache = MetadataCache(edit_page, ttl=5.0, clock=clock)

    first = await cache.get()
    clock.now += 4.9
    second = await cache.get()

    assert second is first
    assert cache.scan_count == 1


async def test_entry_expires_after_ttl(edit_page):
    clock = FakeClock()
    cache = MetadataCache(edit_page, ttl=5.0, clock=clock)

    first = await cache.get()
    clock.now += 5.0
    assert cache.entry is None

    second = await cache.get()
    assert second is not first
    assert cache.scan_count == 2


async def test_invalidate_forces_rescan(edit_page):
    cache = MetadataCache(edit_page, clock=FakeClock())

    first = await cache.get()
    await edit_page.write_field('#video-title', 'A Better Title')
    stale = await cache.get()
    cache.invalidate()
    fresh = await cache.get()

    assert stale is first
    assert fresh.title == 'A Better Title'
    assert cache.scan_count == 2


async def test_invalidate_on_empty_cache_is_harmless(edit_page):
    cache = MetadataCache(edit_page)
    cache.invalidate()
    cache.invalidate()

    assert (await cache.get()).title
    assert cache.scan_count == 1


async def test_invalidate_during_scan_does_not_store(edit_page, mocker):
    cache = MetadataCache(edit_page, clock=FakeClock())
    original_content = edit_page.content

    async def slow_content():
        html = await original_content()
        cache.invalidate()
        return html

    mocker.patch.object(edit_page, 'content', side_effect=slow_content)

    metadata = await cache.get()

    assert metadata.title
    assert cache.entry is None


async def test_concurrent_misses_each_scan(edit_page, mocker):
    cache = MetadataCache(edit_page, clock=FakeClock())
    original_content = edit_page.content

    async def yielding_content():
        await asyncio.sleep(0)
        return await original_content()

    mocker.patch.object(edit_page, 'content', side_effect=yielding_content)

    results = await asyncio.gather(cache.get(), cache.get())

    assert results[0].title == results[1].title
    assert cache.scan_count == 2


def test_cache_entry_expiry_boundary():
    entry = CacheEntry(value=ExtractedMetadata.empty(), captured_at=10.0, ttl=5.0)

    assert not entry.is_expired(14.999)
    assert entry.is_expired(15.0)
