"""
seopanel - SEO Assistant for video editing pages
================================================

Reads the title, description and tags of a video editing page, scores
them for search visibility and rewrites them with an LLM, or with
heuristics when no LLM is available.

Main Components:
    - SelectorCascadeResolver: Locate the editable fields on a page
    - MetadataCache: Short-lived snapshot of the three fields
    - SEOScorer: Rule-based 0-100 scoring with suggestions
    - FallbackGenerator: Heuristic rewrites without an LLM
    - GenerativeService: LLM rewrites through pydantic-ai
    - InjectionController: Attach the panel and follow navigation

Example:
    >>> from seopanel import MetadataCache, SEOScorer, StaticPage
    >>> page = StaticPage.from_file('edit_page.html')
    >>> metadata = await MetadataCache(page).get()
    >>> result = SEOScorer().score(metadata)
    >>> print(result.overall_score, result.grade)
"""

__version__ = '0.1.0'

from seopanel.config import SelectorConfig, TimingConfig
from seopanel.core.cache.metadata_cache import MetadataCache
from seopanel.core.fallback.generator import FallbackGenerator
from seopanel.core.generation.config import LLMConfig, create_model
from seopanel.core.generation.service import GenerativeService
from seopanel.core.lifecycle.controller import InjectionController
from seopanel.core.page.base import PageSource
from seopanel.core.page.static import StaticPage
from seopanel.core.resolution.resolver import SelectorCascadeResolver
from seopanel.core.scoring.scorer import SEOScorer, score
from seopanel.exceptions import (
    ContainerNotFoundError,
    FieldWriteError,
    GenerationError,
    InvalidTransitionError,
    SeoPanelError,
)
from seopanel.models import ExtractedMetadata, FieldRole, InjectionState, ScoreResult
from seopanel.panel.console import ConsolePanel
from seopanel.storage.settings import SettingsStorage

__all__ = [
    'ConsolePanel',
    'ContainerNotFoundError',
    'ExtractedMetadata',
    'FallbackGenerator',
    'FieldRole',
    'FieldWriteError',
    'GenerationError',
    'GenerativeService',
    'InjectionController',
    'InjectionState',
    'InvalidTransitionError',
    'LLMConfig',
    'MetadataCache',
    'PageSource',
    'ScoreResult',
    'SEOScorer',
    'SelectorCascadeResolver',
    'SelectorConfig',
    'SeoPanelError',
    'SettingsStorage',
    'StaticPage',
    'TimingConfig',
    'create_model',
    'score',
]
