# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

import pathlib
import logging.config
import datetime as datetime_module
import re
import shlex
from typing import Optional


from . import constants


MAX_LOG_FILES_TO_KEEP = 100


def clean_logs_folder(logs_folder: pathlib.Path) -> None:
    logs = tuple(logs_folder.iterdir())
    if len(logs) >= MAX_LOG_FILES_TO_KEEP - 1:
        logs_to_delete = sorted(logs, key=lambda path: path.stat().st_ctime)[
                                                                 : -(MAX_LOG_FILES_TO_KEEP - 1)]
        for log_to_delete in logs_to_delete:
            log_to_delete.unlink()

def make_log_file_path(logs_folder: pathlib.Path) -> pathlib.Path:
    now = datetime_module.datetime.now()
    log_file_stem = re.sub('[^0-9]+', '-', now.isoformat(timespec='milliseconds'))
    assert re.fullmatch('[0-9-]+', log_file_stem)
    return logs_folder / f'{log_file_stem}.log'


log_file_path: Optional[pathlib.Path] = None
did_logging_setup: bool = False
is_verbose: Optional[bool] = None

def setup(*, verbose: Optional[bool] = None, log_to_file: bool = True,
          existing_log_file_path: Optional[pathlib.Path] = None) -> None:
    '''
    Configure logging for programs that use `memoizer`.

    Logs go to the console, and unless `log_to_file=False`, to a new log file in
    the logs folder. If `verbose` isn't given, it's taken from the `verbose` key
    of the config file. Calling this more than once does nothing.
    '''
    global log_file_path, did_logging_setup, is_verbose
    if did_logging_setup:
        return
    if verbose is None:
        verbose = bool(constants.read_config().get('verbose', False))
    is_verbose = verbose
    if log_to_file:
        if existing_log_file_path is not None:
            assert log_file_path is None
            log_file_path = existing_log_file_path
        else: # existing_log_file_path is None
            logs_folder = constants.get_logs_folder()
            logs_folder.mkdir(parents=True, exist_ok=True)
            clean_logs_folder(logs_folder)
            log_file_path = make_log_file_path(logs_folder)
            assert not log_file_path.exists()

        file_logging_setup = {
            'file': {
                'level': 'DEBUG',
                'class': 'logging.FileHandler',
                'filename': log_file_path,
                'mode': 'a',
                'formatter': 'verbose',
            },
        }

    else:
        assert existing_log_file_path is None
        file_logging_setup = {}


    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'verbose': {
                    'format': '{levelname} {asctime} {name} p{process:d} t{thread:d} | {message}',
                    'style': '{',
                },
                'simple': {
                    'format': '{message}',
                    'style': '{',
                },
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': 'DEBUG' if verbose else 'INFO',
                    'formatter': 'simple',
                },
                **file_logging_setup,
            },
            'root': {
                'handlers': ('console', *(('file',) if log_to_file else ())),
                'level': 'DEBUG',
            },
        }
    )

    logger = logging.getLogger(__name__)
    if log_to_file and not existing_log_file_path:
        logger.info(f'Log file: {shlex.quote(str(log_file_path))}')
    did_logging_setup = True


def get_logging_kwargs() -> dict:
    assert did_logging_setup
    return {
        'verbose': is_verbose,
        'log_to_file': (log_file_path is not None),
        'existing_log_file_path': log_file_path
    }
