"""Typed payloads exchanged with the generative service, storage and panel.

Everything crossing the pipeline boundary is validated here before it
reaches the rest of the code.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from seopanel.models.metadata import FieldRole

MAX_TAGS = 15


class GenerationRequest(BaseModel):
    """Input for a single generative call."""

    model_config = ConfigDict(frozen=True)

    role: FieldRole
    current_title: str = ''
    current_description: str = ''

    def render(self) -> str:
        """Render the request as the user prompt sent to the model."""
        description = self.current_description.strip() or '(empty)'
        return f'Title: {self.current_title.strip() or "(empty)"}\n\nDescription:\n{description}'


class GeneratedTags(BaseModel):
    """Tags returned by the generative service."""

    tags: list[str] = Field(min_length=1, description='Search tags, most relevant first')

    @field_validator('tags')
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        """Strip, drop empties, de-duplicate case-insensitively and cap the list."""
        seen: set[str] = set()
        cleaned: list[str] = []
        for tag in v:
            tag = tag.strip().strip('#').strip()
            if not tag or tag.lower() in seen:
                continue
            seen.add(tag.lower())
            cleaned.append(tag)
        if not cleaned:
            raise ValueError('no usable tags in response')
        return cleaned[:MAX_TAGS]


class GeneratedTitle(BaseModel):
    """Title returned by the generative service."""

    title: str = Field(min_length=1, max_length=100, description='Optimized title, at most 100 characters')

    @field_validator('title', mode='before')
    @classmethod
    def strip_title(cls, v: str) -> str:
        """Strip whitespace and surrounding quotes."""
        if isinstance(v, str):
            return v.strip().strip('"').strip()
        return v


class GeneratedDescription(BaseModel):
    """Description returned by the generative service."""

    description: str = Field(min_length=1, max_length=5000, description='Optimized description')

    @field_validator('description', mode='before')
    @classmethod
    def strip_description(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v


GeneratedPayload = GeneratedTags | GeneratedTitle | GeneratedDescription


class ActionOutcome(BaseModel):
    """Result of a panel action.

    Attributes:
        role: Field the action targeted
        source: 'ai' when the generative service answered, 'fallback' otherwise
        value: Text written (or that would have been written) to the field
        applied: Whether the value was written to the page
        discarded: Whether the result was dropped because the page changed
        message: User-facing summary

    """

    model_config = ConfigDict(frozen=True)

    role: FieldRole
    source: Literal['ai', 'fallback']
    value: str = ''
    applied: bool = False
    discarded: bool = False
    message: str = ''


class PanelSettings(BaseModel):
    """User settings persisted between runs."""

    seo_enabled: bool = True
    notifications_enabled: bool = True
    provider: str = 'gemini'
    model_name: str = 'gemini-2.0-flash'
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
