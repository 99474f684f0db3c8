"""SEO scoring."""

from seopanel.core.scoring.keywords import SEO_KEYWORDS, find_keywords
from seopanel.core.scoring.scorer import SEOScorer, grade_for, round_half_up, score

__all__ = ['SEOScorer', 'SEO_KEYWORDS', 'find_keywords', 'grade_for', 'round_half_up', 'score']
