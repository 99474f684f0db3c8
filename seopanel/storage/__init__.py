"""Persistent settings storage."""

from seopanel.storage.settings import SettingsStorage

__all__ = ['SettingsStorage']
