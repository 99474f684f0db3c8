"""Pydantic models for metadata extracted from an editing page."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FieldRole(str, Enum):
    """Semantic role of an editable field on the page."""

    PRIMARY_TEXT = 'primary_text'
    LONG_TEXT = 'long_text'
    KEYWORD_LIST = 'keyword_list'

    @property
    def field_name(self) -> str:
        """Name of the metadata field this role fills."""
        return _FIELD_NAMES[self]

    @classmethod
    def from_field_name(cls, name: str) -> 'FieldRole':
        """Look up a role by its metadata field name ('title', 'description', 'tags').

        Raises:
            ValueError: If the name is not a known field.

        """
        for role, field_name in _FIELD_NAMES.items():
            if field_name == name:
                return role
        raise ValueError(f'Unknown field: {name}. Available: {", ".join(_FIELD_NAMES.values())}')


_FIELD_NAMES = {
    FieldRole.PRIMARY_TEXT: 'title',
    FieldRole.LONG_TEXT: 'description',
    FieldRole.KEYWORD_LIST: 'tags',
}


class FieldsFound(BaseModel):
    """Which fields were located on the page.

    A False flag means the field's content is unknown, not that it is empty.
    """

    model_config = ConfigDict(frozen=True)

    title: bool = False
    description: bool = False
    tags: bool = False


class ExtractedMetadata(BaseModel):
    """Immutable snapshot of the three editable fields.

    Attributes:
        title: Current title text
        description: Current description text
        tags: Current tags as a comma-separated string
        fields_found: Which fields were resolved on the page
        source_url: URL of the page the snapshot was taken from
        captured_at: When the snapshot was taken
        locators: CSS paths of the resolved elements, keyed by field name

    """

    model_config = ConfigDict(frozen=True)

    title: str = ''
    description: str = ''
    tags: str = ''
    fields_found: FieldsFound = Field(default_factory=FieldsFound)
    source_url: str = ''
    captured_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    locators: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def empty(cls, source_url: str = '') -> 'ExtractedMetadata':
        """Snapshot of a page where no field was found."""
        return cls(source_url=source_url)

    @property
    def tag_list(self) -> list[str]:
        """Tags split on commas, stripped, empties removed."""
        return [t.strip() for t in self.tags.split(',') if t.strip()]

    @property
    def missing_fields(self) -> list[str]:
        """Names of fields that were not located."""
        return [name for name, found in self.fields_found.model_dump().items() if not found]

    def value_for(self, role: FieldRole) -> str:
        """Return the text held for a role."""
        return str(getattr(self, role.field_name))


@dataclass(frozen=True)
class CacheEntry:
    """A cached snapshot with its capture time on the cache's clock.

    Attributes:
        value: The cached metadata
        captured_at: Clock reading when the snapshot was stored
        ttl: Lifetime in seconds

    """

    value: ExtractedMetadata
    captured_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        """Return True once ``ttl`` seconds have elapsed since capture."""
        return now - self.captured_at >= self.ttl
