"""Pydantic models for SEO scoring results."""

from pydantic import BaseModel, ConfigDict, Field

from seopanel.models.metadata import FieldsFound


class FieldAnalysis(BaseModel):
    """Score and findings for a single field.

    Attributes:
        score: Sub-score, 0-100
        found: Whether the field was located on the page
        length: Character length (title/description) or tag count (tags)
        word_count: Number of words, where meaningful
        keywords: Matched ranking keywords
        issues: Problems detected in the field
        suggestions: Field-level improvement hints

    """

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    found: bool = True
    length: int = 0
    word_count: int = 0
    keywords: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class ComponentScores(BaseModel):
    """Rounded per-field sub-scores."""

    model_config = ConfigDict(frozen=True)

    title: int = Field(ge=0, le=100)
    description: int = Field(ge=0, le=100)
    tags: int = Field(ge=0, le=100)


class Priority(BaseModel):
    """Suggestions bucketed by urgency."""

    model_config = ConfigDict(frozen=True)

    high: list[str] = Field(default_factory=list)
    medium: list[str] = Field(default_factory=list)
    low: list[str] = Field(default_factory=list)

    def ordered(self) -> list[str]:
        """Return all suggestions, most urgent first."""
        return [*self.high, *self.medium, *self.low]


class ScoreResult(BaseModel):
    """Composite SEO score for a metadata snapshot.

    Derived and stateless; carries no timestamp so equal inputs give equal results.
    """

    model_config = ConfigDict(frozen=True)

    overall_score: int = Field(ge=0, le=100)
    grade: str
    component_scores: ComponentScores
    components: dict[str, FieldAnalysis]
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    priority: Priority = Field(default_factory=Priority)
    fields_found: FieldsFound = Field(default_factory=FieldsFound)

    def top_suggestions(self, limit: int = 5) -> list[str]:
        """Return at most ``limit`` suggestions, most urgent first (capped at 5)."""
        return self.priority.ordered()[: max(0, min(limit, 5))]
