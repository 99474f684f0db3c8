"""Heuristic replacements for title, description and tags.

Used when the generative service is unconfigured or fails. Output depends
only on the input and the current year, so equal inputs on the same day
give equal results.
"""

import re
from collections.abc import Callable
from datetime import date
from typing import ClassVar

from seopanel.core.fallback.classifier import TITLE_KEYWORDS, ContentType, classify
from seopanel.core.scoring.keywords import YEAR_PATTERN

STOPWORDS = frozenset(
    {
        'the', 'and', 'for', 'are', 'but', 'not', 'you', 'all', 'can', 'had',
        'her', 'was', 'one', 'our', 'out', 'day', 'get', 'has', 'him', 'his',
        'how', 'man', 'new', 'now', 'old', 'see', 'two', 'way', 'who', 'boy',
        'did', 'its', 'let', 'put', 'say', 'she', 'too', 'use', 'with', 'have',
        'this', 'will', 'your', 'from', 'they', 'know', 'want', 'been', 'good',
        'much', 'some', 'time', 'very', 'when', 'come', 'here', 'just', 'like',
        'long', 'make', 'many', 'over', 'such', 'take', 'than', 'them', 'well',
    }
)  # fmt: skip

CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    'tutorial': ('tutorial', 'guide', 'how-to', 'step-by-step', 'learn', 'beginner', 'complete'),
    'review': ('review', 'analysis', 'honest', 'pros', 'cons', 'comparison', 'worth-it'),
    'tips': ('tips', 'tricks', 'hacks', 'secrets', 'pro-tips', 'advice', 'best-practices'),
    'gaming': ('gameplay', 'walkthrough', 'strategy', 'guide', 'boss-fight', 'speedrun'),
    'tech': ('technology', 'gadget', 'device', 'software', 'app', 'tech-review'),
    'lifestyle': ('lifestyle', 'daily', 'routine', 'vlog', 'personal', 'experience'),
    'business': ('business', 'entrepreneur', 'marketing', 'strategy', 'growth', 'success'),
}

# (trigger words, tags added)
CONTENT_TYPE_TAGS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (('tutorial', 'how to'), ('tutorial', 'howto', 'guide', 'learning')),
    (('review',), ('review', 'analysis', 'opinion')),
    (('tips', 'advice'), ('tips', 'advice', 'helpful')),
    (('gaming', 'game'), ('gaming', 'gameplay', 'videogames')),
)

ENGAGEMENT_PATTERN = re.compile(r'\b(subscribe[sd]?|likes?|comments?)\b', re.IGNORECASE)

ENGAGEMENT_BLOCK = (
    "\n\n🔔 Don't forget to LIKE this video if it helped you!\n"
    '📺 SUBSCRIBE for more helpful content\n'
    '💬 Share your thoughts in the COMMENTS below\n'
    '🔗 Follow us for more updates\n'
    '\n'
    '#tutorial #tips #guide #helpful'
)

OPENINGS: dict[ContentType, tuple[str, str]] = {
    ContentType.TUTORIAL: (
        "🎯 In this comprehensive tutorial, we'll walk you through {title} step by step.",
        "Whether you're a beginner or looking to improve your skills, this guide covers everything you need to know.",
    ),
    ContentType.REVIEW: (
        '📝 In this detailed review, we take an honest look at {title}.',
        "We'll cover the pros, cons, and everything you need to know before making a decision.",
    ),
    ContentType.TIPS: (
        '💡 These proven {title} have helped countless people achieve better results.',
        'Learn the strategies that actually work and start seeing improvements today.',
    ),
    ContentType.GAMING: (
        '🎮 Join us for this exciting {title} experience!',
        'Watch as we tackle challenges, discover strategies, and have fun along the way.',
    ),
    ContentType.GENERIC: (
        '🔥 Welcome to our video about {title}!',
        'In this comprehensive guide, we explore everything you need to know about this topic.',
    ),
}

VALUE_PROPOSITIONS: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ('tutorial', 'guide'),
        "\n\n⭐ What you'll learn:\n• Step-by-step instructions\n• Common mistakes to avoid\n• Pro tips and best practices",
    ),
    (
        ('review',),
        '\n\n⭐ In this review:\n• Detailed feature breakdown\n• Real-world testing results\n• Our honest recommendation',
    ),
)


def has_engagement(text: str) -> bool:
    """Return True if ``text`` already asks viewers to like, subscribe or comment."""
    return bool(ENGAGEMENT_PATTERN.search(text))


def add_engagement(text: str) -> str:
    """Append the engagement block unless an equivalent one is present."""
    if has_engagement(text):
        return text
    return text + ENGAGEMENT_BLOCK


class FallbackGenerator:
    """Builds replacement metadata from templates and keyword tables.

    Class Attributes:
        MAX_TAGS: Upper bound on generated tags
        MAX_TITLE_LENGTH: Titles longer than this are truncated with '...'
        MAX_DESCRIPTION_LENGTH: Upper bound on generated descriptions
        ENHANCERS: Prefixes for short generic titles

    """

    MAX_TAGS: ClassVar[int] = 12
    MAX_WORD_TAGS: ClassVar[int] = 15
    MAX_TITLE_LENGTH: ClassVar[int] = 100
    MAX_DESCRIPTION_LENGTH: ClassVar[int] = 5000
    OPTIMAL_TITLE: ClassVar[tuple[int, int]] = (40, 70)
    ENHANCERS: ClassVar[tuple[str, ...]] = ('Ultimate', 'Complete', 'Comprehensive', 'Definitive')
    PLACEHOLDER_TITLE: ClassVar[str] = 'Untitled Video - Please Add a Title'

    def __init__(self, today: Callable[[], date] = date.today):
        """Initialize the generator.

        Args:
            today: Returns the current date; only its year is used.

        """
        self._today = today

    @property
    def year(self) -> str:
        return str(self._today().year)

    def tags(self, title: str = '', description: str = '') -> list[str]:
        """Derive tags from the words in the title and description.

        Args:
            title: Current title
            description: Current description

        Returns:
            At most MAX_TAGS distinct (case-insensitive) tags.

        """
        content = f'{title} {description}'.lower()
        words = [
            word
            for word in re.sub(r'[^\w\s]', ' ', content).split()
            if len(word) > 2 and word not in STOPWORDS
        ][: self.MAX_WORD_TAGS]

        candidates = [word for word in words if len(word) < 20]

        for category, keywords in CATEGORY_KEYWORDS.items():
            if any(keyword in content for keyword in keywords):
                candidates.append(category)
                candidates.extend(kw.replace('-', '') for kw in keywords[:3] if kw in content)

        for triggers, extra in CONTENT_TYPE_TAGS:
            if any(trigger in content for trigger in triggers):
                candidates.extend(extra)

        candidates.append(self.year)

        seen: set[str] = set()
        tags: list[str] = []
        for tag in candidates:
            if tag.lower() not in seen:
                seen.add(tag.lower())
                tags.append(tag)
        return tags[: self.MAX_TAGS]

    def title(self, current_title: str = '') -> str:
        """Rework a title with a year token and a content-type template.

        Args:
            current_title: Title to improve

        Returns:
            The improved title, at most MAX_TITLE_LENGTH characters.

        """
        original = current_title.strip()
        if not original:
            return self.PLACEHOLDER_TITLE

        low, high = self.OPTIMAL_TITLE
        if low <= len(original) <= high and self.year in original:
            return original

        lowered = original.lower()
        optimized = original if YEAR_PATTERN.search(original) else f'{original} ({self.year})'

        content_type = classify(original, TITLE_KEYWORDS)
        if content_type is ContentType.TUTORIAL:
            if 'complete' not in lowered and 'guide' not in lowered:
                optimized = f'Complete {optimized} - Step by Step Guide'
        elif content_type is ContentType.REVIEW:
            if 'honest' not in lowered and 'detailed' not in lowered:
                optimized = f'Honest {optimized} - Detailed Analysis'
        elif content_type is ContentType.TIPS:
            if 'pro' not in lowered and 'best' not in lowered:
                optimized = f'Pro {optimized} That Actually Work'
        elif len(original) < low:
            enhancer = self.ENHANCERS[len(original) % len(self.ENHANCERS)]
            optimized = f'{enhancer} {optimized} Guide'

        if len(optimized) > self.MAX_TITLE_LENGTH:
            optimized = optimized[: self.MAX_TITLE_LENGTH - 3] + '...'
        return optimized

    def description(self, title: str = '', current_description: str = '') -> str:
        """Expand a description with an opening, structure and an engagement block.

        Args:
            title: Current title, used to pick and fill the template
            current_description: Description to improve

        Returns:
            The improved description, at most MAX_DESCRIPTION_LENGTH characters.

        """
        original = current_description.strip()
        if len(original) > 200 and '\n' in original:
            return self._bounded(original)

        content_type = classify(title)
        opening, default_body = OPENINGS[content_type]
        subject = title.strip().lower() or 'this video'
        body = original or default_body

        if len(original) > 100 and '\n' not in original:
            sentences = original.split('. ')
            if len(sentences) > 2:
                body = '. '.join(sentences[:2]) + '.\n\n' + '. '.join(sentences[2:])

        enhanced = f'{opening.format(title=subject)}\n\n{body}'

        lowered_title = title.lower()
        for triggers, proposition in VALUE_PROPOSITIONS:
            if any(trigger in lowered_title for trigger in triggers):
                enhanced += proposition
                break

        enhanced = add_engagement(enhanced)
        if len(enhanced) <= self.MAX_DESCRIPTION_LENGTH:
            return enhanced
        return self._bounded(body)

    def _bounded(self, text: str) -> str:
        """Add the engagement block if it fits, otherwise cut ``text`` to the length limit."""
        limit = self.MAX_DESCRIPTION_LENGTH
        engaged = add_engagement(text)
        if len(engaged) <= limit:
            return engaged
        return text[:limit].rstrip()
