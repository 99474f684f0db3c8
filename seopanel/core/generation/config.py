"""
LLM configuration for the generative service.

Maps a provider name to a pydantic-ai model instance.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic_ai.models.google import GoogleModel
from pydantic_ai.models.groq import GroqModel
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.groq import GroqProvider
from pydantic_ai.providers.openai import OpenAIProvider
from pydantic_ai.settings import ModelSettings


@dataclass
class LLMConfig:
    """Configuration for one LLM provider.

    Attributes:
        provider: Provider name ('gemini', 'groq', 'openai')
        model_name: Model identifier string
        api_key: API key for authentication
        temperature: Sampling temperature (0.0-2.0). Defaults to 0.7.
        max_tokens: Maximum tokens for generation. Defaults to None.
        extra_params: Additional provider-specific settings. Defaults to empty.
    """

    provider: str
    model_name: str
    api_key: str
    temperature: float = 0.7
    max_tokens: int | None = None
    extra_params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration after initialization.

        Raises:
            ValueError: If API key or model name is missing, or temperature is out of range.
        """
        if not self.api_key:
            raise ValueError(f'API key required for {self.provider}')
        if not self.model_name:
            raise ValueError(f'Model name required for {self.provider}')
        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError(f'Temperature must be between 0.0 and 2.0, got {self.temperature}')

    def model_settings(self) -> ModelSettings:
        """Return run settings for agents built from this config."""
        settings: ModelSettings = {'temperature': self.temperature}
        if self.max_tokens:
            settings['max_tokens'] = self.max_tokens
        settings.update(self.extra_params)  # type: ignore[typeddict-item]
        return settings


def create_groq_model(config: LLMConfig) -> GroqModel:
    """Create a Groq model from configuration.

    Args:
        config: LLM configuration with Groq settings

    Returns:
        Configured GroqModel instance.
    """
    return GroqModel(config.model_name, provider=GroqProvider(api_key=config.api_key))


def create_gemini_model(config: LLMConfig) -> GoogleModel:
    """Create a Gemini (Google) model from configuration.

    Args:
        config: LLM configuration with Gemini settings

    Returns:
        Configured GoogleModel instance.
    """
    return GoogleModel(config.model_name, provider=GoogleProvider(api_key=config.api_key))


def create_openai_model(config: LLMConfig) -> OpenAIChatModel:
    """Create an OpenAI model from configuration.

    Args:
        config: LLM configuration with OpenAI settings

    Returns:
        Configured OpenAIChatModel instance.
    """
    return OpenAIChatModel(config.model_name, provider=OpenAIProvider(api_key=config.api_key))


PROVIDER_FACTORIES: dict[str, Callable[[LLMConfig], Any]] = {
    'groq': create_groq_model,
    'gemini': create_gemini_model,
    'google': create_gemini_model,  # Alias
    'openai': create_openai_model,
}

# Environment variable holding each provider's key
PROVIDER_ENV_KEYS: dict[str, str] = {
    'gemini': 'GEMINI_KEY',
    'google': 'GEMINI_KEY',
    'groq': 'GROQ_KEY',
    'openai': 'OPENAI_API_KEY',
}


def create_model(config: LLMConfig) -> Any:
    """
    Create a model from configuration.

    Args:
        config: LLMConfig specifying the provider and parameters

    Returns:
        Model instance (GroqModel, GoogleModel or OpenAIChatModel)

    Raises:
        ValueError: If provider is not supported

    Example:
        >>> config = LLMConfig(provider='groq', model_name='llama-3.3-70b-versatile', api_key='your-key')
        >>> model = create_model(config)
    """
    provider_name = config.provider.lower()

    if provider_name not in PROVIDER_FACTORIES:
        available = ', '.join(PROVIDER_FACTORIES.keys())
        raise ValueError(f'Unknown provider: {provider_name}. Available: {available}')

    return PROVIDER_FACTORIES[provider_name](config)
