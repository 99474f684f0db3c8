"""Handles saving and loading panel settings and API keys to/from a JSON file."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from seopanel.core.generation.config import PROVIDER_ENV_KEYS, LLMConfig
from seopanel.models.payloads import PanelSettings
from seopanel.utils.files import init_seopanel

logger = logging.getLogger(__name__)


class SettingsStorage:
    """Manages persisted settings in ``.seopanel/settings.json``.

    Keys saved here take precedence over the provider's environment
    variable (``GEMINI_KEY``, ``GROQ_KEY``, ``OPENAI_API_KEY``).

    Attributes:
        path: Location of the settings file

    """

    def __init__(self, path: str | Path | None = None):
        """Initialize the storage.

        Args:
            path: Settings file location. Defaults to .seopanel/settings.json in the project root.

        """
        self.path = Path(path) if path is not None else init_seopanel() / 'settings.json'

    def load_settings(self) -> PanelSettings:
        """Load settings, falling back to defaults for a missing or invalid file."""
        raw = self._read().get('settings', {})
        try:
            return PanelSettings.model_validate(raw)
        except ValidationError as e:
            logger.warning(f'Ignoring invalid settings in {self.path}: {e}')
            return PanelSettings()

    def save_settings(self, settings: PanelSettings) -> Path:
        """Persist settings and return the file path."""
        data = self._read()
        data['settings'] = settings.model_dump()
        return self._write(data)

    def save_api_key(self, provider: str, api_key: str) -> Path:
        """Store an API key for ``provider``; an empty key removes it."""
        data = self._read()
        keys = data.setdefault('api_keys', {})
        if api_key:
            keys[provider.lower()] = api_key
        else:
            keys.pop(provider.lower(), None)
        return self._write(data)

    def get_api_keys(self) -> dict[str, str]:
        """Return stored API keys by provider."""
        return dict(self._read().get('api_keys', {}))

    def get_api_key(self, provider: str) -> str | None:
        """Return the key for ``provider`` from the file or its environment variable."""
        provider = provider.lower()
        stored = self.get_api_keys().get(provider)
        if stored:
            return stored
        env_name = PROVIDER_ENV_KEYS.get(provider)
        return os.getenv(env_name) if env_name else None

    def has_generation_credentials(self) -> bool:
        """Whether the configured provider has an API key available."""
        return bool(self.get_api_key(self.load_settings().provider))

    def llm_config(self) -> LLMConfig | None:
        """Build an LLMConfig for the configured provider, or None without a key."""
        settings = self.load_settings()
        api_key = self.get_api_key(settings.provider)
        if not api_key:
            return None
        return LLMConfig(
            provider=settings.provider,
            model_name=settings.model_name,
            api_key=api_key,
            temperature=settings.temperature,
        )

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f'Error loading settings from {self.path}: {e}')
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        return self.path
