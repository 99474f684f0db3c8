"""Pydantic models for seopanel."""

from seopanel.models.lifecycle import TRANSITIONS, InjectionState, NotificationLevel, PageType
from seopanel.models.metadata import CacheEntry, ExtractedMetadata, FieldRole, FieldsFound
from seopanel.models.payloads import (
    MAX_TAGS,
    ActionOutcome,
    GeneratedDescription,
    GeneratedPayload,
    GeneratedTags,
    GeneratedTitle,
    GenerationRequest,
    PanelSettings,
)
from seopanel.models.scoring import ComponentScores, FieldAnalysis, Priority, ScoreResult

__all__ = [
    'ActionOutcome',
    'CacheEntry',
    'ComponentScores',
    'ExtractedMetadata',
    'FieldAnalysis',
    'FieldRole',
    'FieldsFound',
    'GeneratedDescription',
    'GeneratedPayload',
    'GeneratedTags',
    'GeneratedTitle',
    'GenerationRequest',
    'InjectionState',
    'MAX_TAGS',
    'NotificationLevel',
    'PageType',
    'PanelSettings',
    'Priority',
    'ScoreResult',
    'TRANSITIONS',
]
