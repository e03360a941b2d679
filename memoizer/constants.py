# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

import pathlib
import functools
import json


memoizer_folder: pathlib.Path = pathlib.Path.home() / '.memoizer'
config_path: pathlib.Path = memoizer_folder / 'config.json'


@functools.cache
def read_config() -> dict:
    try:
        content = config_path.read_text()
    except FileNotFoundError:
        return {}
    return json.loads(content)


def get_logs_folder() -> pathlib.Path:
    config = read_config()
    if 'logs_path' in config:
        return pathlib.Path(config['logs_path'])
    else:
        return memoizer_folder / 'logs'
