import logging

import pytest
from rich.console import Console

from seopanel.utils.logging import CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME, parse_level, setup_local_logging


@pytest.fixture
def logs_dir(mocker, tmp_path):
    mocker.patch('seopanel.utils.logging.get_logs_path', return_value=tmp_path)
    root = logging.getLogger()
    previous_level = root.level
    yield tmp_path
    for handler in list(root.handlers):
        if handler.get_name() in (FILE_HANDLER_NAME, CONSOLE_HANDLER_NAME):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(previous_level)


def ours():
    return [h for h in logging.getLogger().handlers if h.get_name() in (FILE_HANDLER_NAME, CONSOLE_HANDLER_NAME)]


def test_records_go_to_run_file(logs_dir):
    log_file = setup_local_logging('INFO')

    logging.getLogger('seopanel.sample').info('cache rescanned')

    assert log_file.parent == logs_dir
    assert 'seopanel.sample - INFO - cache rescanned' in log_file.read_text(encoding='utf-8')


def test_repeated_setup_replaces_handlers(logs_dir):
    console = Console(record=True, width=120)

    setup_local_logging('DEBUG', console=console)
    setup_local_logging('DEBUG', console=console)

    assert sorted(h.get_name() for h in ours()) == [CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME]


def test_console_shows_warnings_only(logs_dir):
    console = Console(record=True, width=120)
    setup_local_logging('DEBUG', console=console)
    logger = logging.getLogger('seopanel.sample')

    logger.info('routine detail')
    logger.warning('settings file [/b] ignored')

    output = console.export_text()
    assert 'settings file [/b] ignored' in output
    assert 'routine detail' not in output


@pytest.mark.parametrize(
    'name, expected',
    [
        ('info', logging.INFO),
        ('WARNING', logging.WARNING),
        ('ALL', logging.NOTSET),
        ('chatty', logging.DEBUG),
    ],
)
def test_parse_level(name, expected):
    assert parse_level(name) == expected
