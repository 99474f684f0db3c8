"""Utility functions for seopanel."""

from seopanel.utils.files import (
    get_logs_path,
    get_project_root,
    get_reports_path,
    get_settings_path,
    get_state_dir,
    init_seopanel,
)
from seopanel.utils.logging import setup_local_logging
from seopanel.utils.prompts import load_prompt

__all__ = [
    'get_logs_path',
    'get_project_root',
    'get_reports_path',
    'get_settings_path',
    'get_state_dir',
    'init_seopanel',
    'load_prompt',
    'setup_local_logging',
]
