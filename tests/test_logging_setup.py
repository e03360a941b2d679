# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

from __future__ import annotations

import json
import logging
import pathlib

import pytest

from memoizer import constants, logging_setup


@pytest.fixture
def fresh_logging(tmp_path: pathlib.Path, monkeypatch):
    monkeypatch.setattr(constants, 'memoizer_folder', tmp_path / '.memoizer')
    monkeypatch.setattr(constants, 'config_path', tmp_path / '.memoizer' / 'config.json')
    monkeypatch.setattr(logging_setup, 'log_file_path', None)
    monkeypatch.setattr(logging_setup, 'did_logging_setup', False)
    monkeypatch.setattr(logging_setup, 'is_verbose', None)
    constants.read_config.cache_clear()
    root_logger = logging.getLogger()
    old_handlers = root_logger.handlers[:]
    old_level = root_logger.level
    yield tmp_path
    for handler in tuple(root_logger.handlers):
        # Only the handlers made by `dictConfig`, not pytest's own:
        if type(handler) in (logging.StreamHandler, logging.FileHandler) and \
                                                                 handler not in old_handlers:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(old_level)
    constants.read_config.cache_clear()


def test_read_config(fresh_logging):
    assert constants.read_config() == {}
    assert constants.get_logs_folder() == fresh_logging / '.memoizer' / 'logs'

    constants.config_path.parent.mkdir(parents=True)
    constants.config_path.write_text(json.dumps({'logs_path': str(fresh_logging / 'elsewhere')}))
    constants.read_config.cache_clear()
    assert constants.get_logs_folder() == fresh_logging / 'elsewhere'


def test_setup_without_file(fresh_logging):
    logging_setup.setup(verbose=True, log_to_file=False)
    assert logging_setup.did_logging_setup
    assert logging_setup.get_logging_kwargs() == {
        'verbose': True,
        'log_to_file': False,
        'existing_log_file_path': None,
    }
    (console_handler,) = logging.getLogger().handlers
    assert console_handler.level == logging.DEBUG


def test_setup_with_file(fresh_logging):
    logging_setup.setup(log_to_file=True)
    log_file_path = logging_setup.log_file_path
    assert log_file_path.parent == fresh_logging / '.memoizer' / 'logs'
    assert logging_setup.get_logging_kwargs()['verbose'] is False

    logging.getLogger('memoizer.memoizing').debug('Hello there')
    for handler in logging.getLogger().handlers:
        handler.flush()
    content = log_file_path.read_text()
    assert 'Log file:' in content
    assert 'memoizer.memoizing' in content
    assert 'Hello there' in content

    # A second call does nothing:
    logging_setup.setup(log_to_file=True)
    assert logging_setup.log_file_path == log_file_path


def test_verbose_from_config(fresh_logging):
    constants.config_path.parent.mkdir(parents=True)
    constants.config_path.write_text(json.dumps({'verbose': True}))
    logging_setup.setup(log_to_file=False)
    assert logging_setup.is_verbose is True


def test_clean_logs_folder(tmp_path: pathlib.Path):
    for i in range(logging_setup.MAX_LOG_FILES_TO_KEEP + 5):
        (tmp_path / f'{i:04d}.log').write_text('')
    logging_setup.clean_logs_folder(tmp_path)
    assert len(tuple(tmp_path.iterdir())) == logging_setup.MAX_LOG_FILES_TO_KEEP - 1
