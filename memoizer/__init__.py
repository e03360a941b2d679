# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''Memoizer - Cache the results of expensive single-argument functions.'''

import collections

from . import constants
from . import freezing
from .exceptions import MemoizerException, UnfreezableKey
from .freezing import freeze, Frozen
from .memoizing import Memoizer, CacheInfo, memoize

__VersionInfo = collections.namedtuple('VersionInfo',
                                       ('major', 'minor', 'micro'))

__version__ = '0.1.0'
__version_info__ = __VersionInfo(*(map(int, __version__.split('.'))))


del collections, __VersionInfo # Avoid polluting the namespace
