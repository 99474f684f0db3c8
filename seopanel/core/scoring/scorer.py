"""Rule-based SEO scoring for title, description and tags."""

import math
from dataclasses import dataclass, field
from typing import ClassVar

from seopanel.core.scoring.keywords import (
    CTA_PATTERN,
    HASHTAG_PATTERN,
    LINK_PATTERN,
    PARAGRAPH_SPLIT,
    SENTENCE_SPLIT,
    TIMESTAMP_PATTERN,
    YEAR_PATTERN,
    find_keywords,
)
from seopanel.models.metadata import ExtractedMetadata
from seopanel.models.scoring import ComponentScores, FieldAnalysis, Priority, ScoreResult

GRADE_BREAKPOINTS: tuple[tuple[int, str], ...] = (
    (90, 'A+'),
    (85, 'A'),
    (80, 'A-'),
    (75, 'B+'),
    (70, 'B'),
    (65, 'B-'),
    (60, 'C+'),
    (55, 'C'),
    (50, 'C-'),
    (45, 'D+'),
    (40, 'D'),
)


def round_half_up(value: float) -> int:
    """Round a non-negative value to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def grade_for(score: int) -> str:
    """Map a 0-100 score to its letter grade."""
    for threshold, grade in GRADE_BREAKPOINTS:
        if score >= threshold:
            return grade
    return 'F'


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


@dataclass
class _Findings:
    """Mutable accumulator used while scoring one field."""

    score: float = 0.0
    length: int = 0
    word_count: int = 0
    keywords: list[str] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    flags: dict[str, bool] = field(default_factory=dict)

    def analysis(self, found: bool) -> FieldAnalysis:
        return FieldAnalysis(
            score=round_half_up(_clamp(self.score)),
            found=found,
            length=self.length,
            word_count=self.word_count,
            keywords=self.keywords,
            issues=self.issues,
            suggestions=self.suggestions,
        )


class SEOScorer:
    """Scores a metadata snapshot.

    Stateless: the same snapshot always yields an equal ScoreResult.

    Class Attributes:
        WEIGHTS: Contribution of each field to the overall score
        TITLE_RANGE: Acceptable title length in characters
        DESCRIPTION_RANGE: Acceptable description length in characters
        TAG_COUNT_RANGE: Acceptable number of tags
        TAG_LENGTH_RANGE: Acceptable average tag length

    """

    WEIGHTS: ClassVar[dict[str, float]] = {'title': 0.40, 'description': 0.35, 'tags': 0.25}
    TITLE_RANGE: ClassVar[tuple[int, int]] = (30, 100)
    TITLE_OPTIMAL: ClassVar[tuple[int, int]] = (50, 70)
    DESCRIPTION_RANGE: ClassVar[tuple[int, int]] = (125, 5000)
    DESCRIPTION_OPTIMAL: ClassVar[int] = 250
    TAG_COUNT_RANGE: ClassVar[tuple[int, int]] = (5, 15)
    TAG_COUNT_OPTIMAL: ClassVar[tuple[int, int]] = (8, 12)
    TAG_LENGTH_RANGE: ClassVar[tuple[int, int]] = (3, 15)
    MAX_HASHTAGS: ClassVar[int] = 15

    def score(self, metadata: ExtractedMetadata) -> ScoreResult:
        """Score a snapshot.

        Args:
            metadata: Snapshot to score

        Returns:
            ScoreResult with the composite score, per-field analyses and suggestions.

        """
        found = metadata.fields_found
        title = self.analyze_title(metadata.title)
        description = self.analyze_description(metadata.description)
        tags = self.analyze_tags(metadata.tag_list)

        for name, findings in (('title', title), ('description', description), ('tags', tags)):
            if not getattr(found, name):
                findings.issues.append(f'{name.capitalize()} field was not found on the page')

        overall = round_half_up(
            _clamp(title.score) * self.WEIGHTS['title']
            + _clamp(description.score) * self.WEIGHTS['description']
            + _clamp(tags.score) * self.WEIGHTS['tags']
        )

        components = {
            'title': title.analysis(found.title),
            'description': description.analysis(found.description),
            'tags': tags.analysis(found.tags),
        }
        suggestions = self._suggestions(components, title)

        return ScoreResult(
            overall_score=overall,
            grade=grade_for(overall),
            component_scores=ComponentScores(**{name: a.score for name, a in components.items()}),
            components=components,
            issues=_dedupe(issue for a in components.values() for issue in a.issues),
            suggestions=suggestions,
            strengths=self._strengths(components, description),
            weaknesses=self._weaknesses(components),
            priority=self._prioritize(suggestions),
            fields_found=found,
        )

    def analyze_title(self, title: str) -> _Findings:
        """Score the title on length, keywords, casing, year and question form."""
        f = _Findings()
        if not title or not title.strip():
            f.issues.append('Title is missing or invalid')
            f.suggestions.append('Add a compelling title')
            return f

        minimum, maximum = self.TITLE_RANGE
        f.length = len(title)
        f.word_count = len(title.split())

        if f.length < minimum:
            f.issues.append('Title is too short')
            f.suggestions.append(f'Add more descriptive words (current: {f.length}, minimum: {minimum})')
            f.score += f.length / minimum * 30
        elif f.length > maximum:
            f.issues.append('Title is too long and may be truncated')
            f.suggestions.append(f'Shorten title to under {maximum} characters')
            f.score += 25
        else:
            f.score += 35
            low, high = self.TITLE_OPTIMAL
            if low <= f.length <= high:
                f.score += 5

        f.keywords = find_keywords(title)
        if f.keywords:
            f.score += min(len(f.keywords) * 10, 30)
        else:
            f.suggestions.append('Consider adding engaging keywords like "how to", "best", or "guide"')

        if f.word_count < 4:
            f.issues.append('Title has too few words')
            f.suggestions.append('Add more descriptive words to improve searchability')

        if title == title.upper() or title == title.lower():
            f.issues.append('Improve title capitalization')
            f.suggestions.append('Use proper title case for better readability')
            f.score -= 5
        else:
            f.score += 5

        if YEAR_PATTERN.search(title):
            f.score += 5
        else:
            f.suggestions.append('Consider adding current year for relevancy')

        if '?' in title:
            f.score += 5

        f.flags = {'has_numbers': any(c.isdigit() for c in title), 'has_question': '?' in title}
        return f

    def analyze_description(self, description: str) -> _Findings:
        """Score the description on length, structure, keywords, links and calls to action."""
        f = _Findings()
        if not description or not description.strip():
            f.issues.append('Description is missing')
            f.suggestions.append('Add a detailed description')
            return f

        minimum, maximum = self.DESCRIPTION_RANGE
        f.length = len(description)
        f.word_count = len(description.split())
        sentences = [s for s in SENTENCE_SPLIT.split(description) if s.strip()]
        paragraphs = [p for p in PARAGRAPH_SPLIT.split(description) if p.strip()]

        if f.length < minimum:
            f.issues.append('Description is too short')
            f.suggestions.append(f'Expand description (current: {f.length}, minimum: {minimum})')
            f.score += f.length / minimum * 25
        elif f.length > maximum:
            f.issues.append('Description is extremely long')
            f.suggestions.append('Consider condensing key information')
            f.score += 20
        else:
            f.score += 30
            if f.length >= self.DESCRIPTION_OPTIMAL:
                f.score += 10

        if len(paragraphs) >= 2:
            f.score += 10
        else:
            f.suggestions.append('Break description into paragraphs for better readability')

        if len(sentences) >= 3:
            f.score += 10
        else:
            f.suggestions.append('Add more detailed sentences to improve context')

        f.keywords = find_keywords(description)
        if f.keywords:
            f.score += min(len(f.keywords) * 5, 20)
        else:
            f.suggestions.append('Include relevant keywords naturally in the description')

        if LINK_PATTERN.search(description):
            f.score += 5
        else:
            f.suggestions.append('Consider adding relevant links (social media, website)')

        if TIMESTAMP_PATTERN.search(description):
            f.score += 5

        has_cta = bool(CTA_PATTERN.search(description))
        if has_cta:
            f.score += 5
        else:
            f.suggestions.append('Add call-to-action phrases (subscribe, like, comment)')

        hashtags = HASHTAG_PATTERN.findall(description)
        if 0 < len(hashtags) <= self.MAX_HASHTAGS:
            f.score += 5
        elif len(hashtags) > self.MAX_HASHTAGS:
            f.issues.append('Too many hashtags')
            f.suggestions.append(f'Reduce number of hashtags (maximum {self.MAX_HASHTAGS} recommended)')
            f.score -= 5

        f.flags = {'has_cta': has_cta}
        return f

    def analyze_tags(self, tags: list[str]) -> _Findings:
        """Score the tag list on count, duplicates, length and keywords."""
        f = _Findings()
        if not tags:
            f.issues.append('Tags are missing')
            f.suggestions.append('Add relevant tags')
            return f

        minimum, maximum = self.TAG_COUNT_RANGE
        count = len(tags)
        f.length = count
        f.word_count = sum(len(tag.split()) for tag in tags)

        if count < minimum:
            f.issues.append('Too few tags')
            f.suggestions.append(f'Add more tags (current: {count}, minimum: {minimum})')
            f.score += count / minimum * 40
        elif count > maximum:
            f.issues.append('Too many tags may dilute relevance')
            f.suggestions.append(f'Reduce to {maximum} most relevant tags')
            f.score += 35
        else:
            f.score += 50
            low, high = self.TAG_COUNT_OPTIMAL
            if low <= count <= high:
                f.score += 10

        if len({tag.lower() for tag in tags}) < count:
            f.issues.append('Duplicate tags detected')
            f.suggestions.append('Remove duplicate tags')
            f.score -= 10
        else:
            f.score += 10

        average = sum(len(tag) for tag in tags) / count
        shortest, longest = self.TAG_LENGTH_RANGE
        if average < shortest:
            f.suggestions.append('Use more descriptive tags')
            f.score -= 5
        elif average > longest:
            f.suggestions.append('Consider shorter, more focused tags')
            f.score -= 5
        else:
            f.score += 10

        keyword_tags = [tag for tag in tags if find_keywords(tag)]
        f.keywords = _dedupe(word for tag in keyword_tags for word in find_keywords(tag))
        if keyword_tags:
            f.score += min(len(keyword_tags) * 5, 20)
        else:
            f.suggestions.append('Include tags with relevant keywords')

        return f

    def _suggestions(self, components: dict[str, FieldAnalysis], title: _Findings) -> list[str]:
        suggestions = [s for a in components.values() for s in a.suggestions]
        if components['title'].score < 70 and components['description'].score < 70:
            suggestions.append('Focus on improving both title and description for maximum impact')
        if not title.flags.get('has_numbers') and not title.flags.get('has_question'):
            suggestions.append('Consider using numbers or questions in title for better engagement')
        return _dedupe(suggestions)

    @staticmethod
    def _strengths(components: dict[str, FieldAnalysis], description: _Findings) -> list[str]:
        strengths = []
        if components['title'].score >= 80:
            strengths.append('Excellent title optimization')
        if components['description'].score >= 80:
            strengths.append('Well-optimized description')
        if components['tags'].score >= 80:
            strengths.append('Good tag selection')
        if components['title'].keywords:
            strengths.append('Title includes SEO keywords')
        if description.flags.get('has_cta'):
            strengths.append('Description includes call-to-action')
        return strengths

    @staticmethod
    def _weaknesses(components: dict[str, FieldAnalysis]) -> list[str]:
        weaknesses = []
        if components['title'].score < 50:
            weaknesses.append('Title needs significant improvement')
        if components['description'].score < 50:
            weaknesses.append('Description requires optimization')
        if components['tags'].score < 50:
            weaknesses.append('Tag strategy needs work')
        return weaknesses

    @staticmethod
    def _prioritize(suggestions: list[str]) -> Priority:
        high, medium, low = [], [], []
        for suggestion in suggestions:
            lowered = suggestion.lower()
            if 'title' in lowered or 'missing' in lowered or 'too short' in lowered:
                high.append(suggestion)
            elif 'description' in lowered or 'tags' in lowered:
                medium.append(suggestion)
            else:
                low.append(suggestion)
        return Priority(high=high, medium=medium, low=low)


def _dedupe(items) -> list[str]:
    return list(dict.fromkeys(items))


_default_scorer = SEOScorer()


def score(metadata: ExtractedMetadata) -> ScoreResult:
    """Score a snapshot with the default scorer."""
    return _default_scorer.score(metadata)
