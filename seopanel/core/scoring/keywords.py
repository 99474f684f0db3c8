"""Curated ranking vocabulary and lexical patterns used by the scorer."""

import re

SEO_KEYWORDS: dict[str, tuple[str, ...]] = {
    'engagement': ('how to', 'tutorial', 'guide', 'tips', 'tricks', 'secrets', 'best', 'top'),
    'temporal': ('2024', '2025', '2026', 'new', 'latest', 'updated', 'recent'),
    'emotional': ('amazing', 'incredible', 'shocking', 'surprising', 'must see', 'unbelievable'),
    'actionable': ('learn', 'discover', 'find out', 'reveal', 'show', 'explain', 'teach'),
}

YEAR_PATTERN = re.compile(r'\b20\d{2}\b')
LINK_PATTERN = re.compile(r'https?://')
TIMESTAMP_PATTERN = re.compile(r'\d{1,2}:\d{2}')
CTA_PATTERN = re.compile(r'subscribe|like|comment|share|bell|notification', re.IGNORECASE)
HASHTAG_PATTERN = re.compile(r'#\w+')
SENTENCE_SPLIT = re.compile(r'[.!?]+')
PARAGRAPH_SPLIT = re.compile(r'\n\s*\n')


def find_keywords(text: str) -> list[str]:
    """Return the distinct vocabulary entries contained in ``text``, in vocabulary order.

    Matching is case-insensitive substring containment.
    """
    lowered = text.lower()
    found: list[str] = []
    for words in SEO_KEYWORDS.values():
        for word in words:
            if word in lowered and word not in found:
                found.append(word)
    return found
