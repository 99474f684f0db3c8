import pytest
from bs4 import BeautifulSoup

from seopanel.core.page.base import css_path
from seopanel.core.resolution.resolver import SelectorCascadeResolver, default_cascades
from seopanel.core.resolution.tiers import AttributeTier, ContextTier, PositionalTier, Tier, UnclaimedEmptyTier
from seopanel.models.metadata import FieldRole


def parse(html):
    return BeautifulSoup(html, 'lxml')


class RecordingTier(Tier):
    name = 'recording'

    def __init__(self, result=None):
        self.result = result
        self.calls = 0

    def find(self, role, root, claimed):
        self.calls += 1
        return self.result


def test_attribute_tier_finds_title_by_aria_label(edit_page_html):
    soup = parse(edit_page_html)
    element = SelectorCascadeResolver().resolve(FieldRole.PRIMARY_TEXT, soup)

    assert element is not None
    assert element['id'] == 'video-title'


def test_resolve_all_finds_every_field(edit_page_html):
    soup = parse(edit_page_html)
    results = SelectorCascadeResolver().resolve_all(soup)

    assert results[FieldRole.PRIMARY_TEXT].element['id'] == 'video-title'
    assert results[FieldRole.LONG_TEXT].element['id'] == 'video-description'
    assert results[FieldRole.KEYWORD_LIST].element['id'] == 'video-tags'
    assert {r.tier for r in results.values()} == {'attribute'}


def test_wrapper_match_yields_editable_descendant():
    soup = parse('<div class="title-box"><label>Title</label><input type="checkbox"><input type="text" value="x"></div>')
    tier = AttributeTier({FieldRole.PRIMARY_TEXT: ['.title-box']})

    element = tier.find(FieldRole.PRIMARY_TEXT, soup, frozenset())

    assert element.name == 'input'
    assert element['type'] == 'text'


def test_first_tier_match_stops_the_cascade():
    soup = parse('<input id="a">')
    first = RecordingTier(result=soup.find('input'))
    second = RecordingTier()
    resolver = SelectorCascadeResolver(cascades={FieldRole.PRIMARY_TEXT: [first, second]})

    resolution = resolver.resolve_with_tier(FieldRole.PRIMARY_TEXT, soup)

    assert resolution.tier == 'recording'
    assert first.calls == 1
    assert second.calls == 0


def test_tiers_run_in_order_until_one_matches():
    soup = parse('<input id="a">')
    tiers = [RecordingTier(), RecordingTier(), RecordingTier(result=soup.find('input'))]
    resolver = SelectorCascadeResolver(cascades={FieldRole.KEYWORD_LIST: tiers})

    assert resolver.resolve(FieldRole.KEYWORD_LIST, soup) is soup.find('input')
    assert [t.calls for t in tiers] == [1, 1, 1]


def test_no_match_returns_none():
    soup = parse('<div><p>No fields here</p></div>')
    resolver = SelectorCascadeResolver()

    for role in FieldRole:
        assert resolver.resolve(role, soup) is None


def test_role_without_tiers_returns_none():
    resolver = SelectorCascadeResolver(cascades={})
    assert resolver.resolve(FieldRole.PRIMARY_TEXT, parse('<input>')) is None


def test_invalid_selector_is_skipped():
    soup = parse('<textarea id="video-title">Hello</textarea>')
    tier = AttributeTier({FieldRole.PRIMARY_TEXT: ['[[[not a selector', '#video-title']})

    element = tier.find(FieldRole.PRIMARY_TEXT, soup, frozenset())

    assert element['id'] == 'video-title'


def test_positional_tier_two_regions():
    soup = parse(
        '<div contenteditable="true">My title</div>'
        '<div contenteditable="true">A long description of the video</div>'
    )
    tier = PositionalTier()

    assert tier.find(FieldRole.PRIMARY_TEXT, soup, frozenset()).get_text() == 'My title'
    assert tier.find(FieldRole.LONG_TEXT, soup, frozenset()).get_text() == 'A long description of the video'


def test_positional_tier_single_region_split_by_length():
    tier = PositionalTier(threshold=150)
    short = parse('<div contenteditable="true">Short text</div>')
    long = parse(f'<div contenteditable="true">{"word " * 40}</div>')

    assert tier.find(FieldRole.PRIMARY_TEXT, short, frozenset()) is not None
    assert tier.find(FieldRole.LONG_TEXT, short, frozenset()) is None
    assert tier.find(FieldRole.PRIMARY_TEXT, long, frozenset()) is None
    assert tier.find(FieldRole.LONG_TEXT, long, frozenset()) is not None


def test_positional_tier_ignores_nested_regions_and_ambiguous_counts():
    nested = parse('<div contenteditable="true">Outer<span contenteditable="true">inner</span></div>')
    three = parse('<div contenteditable="true">a</div>' * 3)
    tier = PositionalTier()

    assert tier.find(FieldRole.PRIMARY_TEXT, nested, frozenset()).name == 'div'
    assert tier.find(FieldRole.PRIMARY_TEXT, three, frozenset()) is None
    assert tier.find(FieldRole.KEYWORD_LIST, nested, frozenset()) is None


def test_context_tier_uses_container_text():
    soup = parse(
        '<div class="row"><span>Name</span><input type="text"></div>'
        '<div class="row"><span>Keywords</span><input type="text" id="kw"></div>'
    )

    element = ContextTier().find(FieldRole.KEYWORD_LIST, soup, frozenset())

    assert element['id'] == 'kw'


def test_context_tier_uses_own_attributes():
    soup = parse('<input type="text" id="first"><input type="text" name="video_tags" id="second">')

    element = ContextTier().find(FieldRole.KEYWORD_LIST, soup, frozenset())

    assert element['id'] == 'second'


def test_context_tier_skips_non_text_inputs():
    soup = parse('<div>Tags <input type="checkbox" id="box"></div>')
    assert ContextTier().find(FieldRole.KEYWORD_LIST, soup, frozenset()) is None


def test_unclaimed_empty_tier_skips_filled_and_claimed_inputs():
    soup = parse('<input type="text" id="a"><input type="text" id="b" value="x"><input type="text" id="c">')
    a = soup.find(id='a')

    element = UnclaimedEmptyTier().find(FieldRole.KEYWORD_LIST, soup, frozenset({id(a)}))

    assert element['id'] == 'c'


def test_claimed_element_is_not_reused():
    soup = parse('<p>Details</p><input type="text" id="title-input"><input type="text" id="spare">')
    resolver = SelectorCascadeResolver(
        cascades={
            FieldRole.PRIMARY_TEXT: [AttributeTier({FieldRole.PRIMARY_TEXT: ['#title-input']})],
            FieldRole.KEYWORD_LIST: [UnclaimedEmptyTier()],
        }
    )

    results = resolver.resolve_all(soup)

    assert results[FieldRole.PRIMARY_TEXT].element['id'] == 'title-input'
    assert results[FieldRole.KEYWORD_LIST].element['id'] == 'spare'
    assert results[FieldRole.LONG_TEXT] is None


def test_default_cascades_shape():
    cascades = default_cascades()

    assert [t.name for t in cascades[FieldRole.PRIMARY_TEXT]] == ['attribute', 'positional']
    assert [t.name for t in cascades[FieldRole.LONG_TEXT]] == ['attribute', 'positional']
    assert [t.name for t in cascades[FieldRole.KEYWORD_LIST]] == ['attribute', 'context', 'unclaimed-empty']


@pytest.mark.parametrize(
    'html, expected',
    [
        ('<div><input id="video-tags"></div>', '#video-tags'),
        ('<div><p>a</p><p>b</p></div>', 'html > body:nth-of-type(1) > div:nth-of-type(1) > p:nth-of-type(2)'),
    ],
)
def test_css_path_locates_element(html, expected):
    soup = parse(html)
    target = soup.find(id='video-tags') or soup.find_all('p')[1]

    path = css_path(target)

    assert path == expected
    assert soup.select_one(path) is target
