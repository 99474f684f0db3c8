"""Utility functions for file and directory management in seopanel."""

from pathlib import Path

STATE_DIR = '.seopanel'


def get_project_root() -> Path:
    """Find the project root by searching upwards from the Current Working Directory.

    Stops at the first directory containing a marker file.
    """
    current_path = Path.cwd()
    markers = {'.git', 'pyproject.toml', STATE_DIR, 'requirements.txt'}

    for parent in [current_path] + list(current_path.parents):
        if any((parent / marker).exists() for marker in markers):
            return parent

    # No marker found (e.g. running in /tmp)
    return current_path


def get_state_dir() -> Path:
    """Return the path to the .seopanel directory."""
    return get_project_root() / STATE_DIR


def get_logs_path() -> Path:
    """Return the path to the logs directory in .seopanel."""
    return get_state_dir() / 'logs'


def get_settings_path() -> Path:
    """Return the path to the settings file in .seopanel."""
    return get_state_dir() / 'settings.json'


def get_reports_path() -> Path:
    """Return the path to the reports directory in .seopanel."""
    return get_state_dir() / 'reports'


def init_seopanel() -> Path:
    """Create the .seopanel directory structure and return its path."""
    state_dir = get_state_dir()
    for directory in (state_dir, get_logs_path(), get_reports_path()):
        directory.mkdir(parents=True, exist_ok=True)

    # Keep generated files out of source control
    gitignore = state_dir / '.gitignore'
    if not gitignore.exists():
        gitignore.write_text('# Automatically created by seopanel\n*\n')

    return state_dir
