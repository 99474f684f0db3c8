"""Generative service and LLM configuration."""

from seopanel.core.generation.config import (
    PROVIDER_ENV_KEYS,
    PROVIDER_FACTORIES,
    LLMConfig,
    create_model,
)
from seopanel.core.generation.service import OUTPUT_TYPES, GenerativeService

__all__ = [
    'GenerativeService',
    'LLMConfig',
    'OUTPUT_TYPES',
    'PROVIDER_ENV_KEYS',
    'PROVIDER_FACTORIES',
    'create_model',
]
