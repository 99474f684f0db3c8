"""Keyword-driven content-type classification."""

from enum import Enum


class ContentType(str, Enum):
    """Template family used by the fallback generator."""

    TUTORIAL = 'tutorial'
    REVIEW = 'review'
    TIPS = 'tips'
    GAMING = 'gaming'
    GENERIC = 'generic'


KeywordTable = tuple[tuple[ContentType, tuple[str, ...]], ...]

# First match wins. Titles have no gaming template and only 'tips' selects the tips one.
TITLE_KEYWORDS: KeywordTable = (
    (ContentType.TUTORIAL, ('how to', 'tutorial')),
    (ContentType.REVIEW, ('review',)),
    (ContentType.TIPS, ('tips',)),
)

DESCRIPTION_KEYWORDS: KeywordTable = (
    (ContentType.TUTORIAL, ('how to', 'tutorial')),
    (ContentType.REVIEW, ('review',)),
    (ContentType.TIPS, ('tips', 'advice')),
    (ContentType.GAMING, ('gaming', 'gameplay')),
)


def classify(text: str, table: KeywordTable = DESCRIPTION_KEYWORDS) -> ContentType:
    """Classify ``text`` (usually a title) into a content type.

    Args:
        text: Text to classify
        table: Ordered (content type, trigger words) pairs to match against

    Returns:
        The first content type whose triggers occur in ``text``, or GENERIC.

    """
    lowered = text.lower()
    for content_type, keywords in table:
        if any(keyword in lowered for keyword in keywords):
            return content_type
    return ContentType.GENERIC
