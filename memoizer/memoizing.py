# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''
Defines the `Memoizer` class and the `memoize` decorator.

See their documentation for more details.
'''

from __future__ import annotations

import copy
import logging
import functools
from typing import (Any, Callable, Dict, Generic, Hashable, NamedTuple, Optional,
                    TypeVar)

from . import freezing
from .exceptions import UnfreezableKey

logger = logging.getLogger(__name__)

U = TypeVar('U')
V = TypeVar('V')

_missing = object()


class CacheInfo(NamedTuple):
    hits: int
    misses: int
    size: int


class Memoizer(Generic[U, V]):
    '''
    Cache for the results of a single-argument function.

    Wrap an expensive function and call `value` instead of calling the function
    directly:

        add_two = Memoizer(lambda n: n + 2)
        add_two.value(2) # Computes 4
        add_two.value(2) # Returns 4 again without calling the lambda

    The function must be pure: the first result computed for an argument is
    kept forever, so a function that could return different results for equal
    arguments would have its first result frozen. This isn't checked.

    If you need more than one argument, pack them into a tuple, a dict or a
    dataclass of your own and pass that in.

    The cache never shares mutable state with its callers. Keys are frozen
    copies of the arguments (see `freezing.freeze`), and every result is passed
    through `copier` (`copy.deepcopy` by default) both when it's stored and when
    it's returned, so mutating an argument or a result can't corrupt the cache
    even if the function returns (part of) its argument. If your results
    are immutable you can pass a cheaper `copier`.

    There's no eviction, the cache grows for as long as the `Memoizer` lives.
    There's no locking either, so don't share one between threads without
    synchronizing access yourself.
    '''

    def __init__(self, function: Callable[[U], V], *,
                 copier: Callable[[V], V] = copy.deepcopy) -> None:
        if not callable(function):
            raise TypeError(f"Can't memoize {function!r}, it's not callable.")
        self.function = function
        self.copier = copier
        self.cache: Dict[Hashable, V] = {}
        self.hits = 0
        self.misses = 0


    def value(self, arg: U) -> V:
        '''
        Get `function(arg)`, computing it only if it wasn't computed before.

        Exceptions raised by the function propagate as they are, and nothing gets
        cached for that argument.
        '''
        key = freezing.freeze(arg)
        result = self.cache.get(key, _missing)
        if result is _missing:
            # The result might share objects with `arg`, so we store a copy.
            result = self.copier(self.function(arg))
            # The function might have called back into us with the same argument,
            # in which case the first stored result wins.
            result = self.cache.setdefault(key, result)
            self.misses += 1
            logger.debug(f'Cache miss for {self!r} with argument {arg!r}.')
        else:
            self.hits += 1
        return self.copier(result)

    __call__ = value


    def cache_info(self) -> CacheInfo:
        return CacheInfo(hits=self.hits, misses=self.misses, size=len(self.cache))

    def __len__(self) -> int:
        return len(self.cache)

    def __contains__(self, arg: Any) -> bool:
        try:
            key = freezing.freeze(arg)
        except UnfreezableKey:
            return False
        return key in self.cache

    def __repr__(self) -> str:
        function_name = getattr(self.function, '__qualname__', None) or repr(self.function)
        return f'<{type(self).__name__}: {function_name}, {len(self.cache)} cached>'


def memoize(function: Optional[Callable[[U], V]] = None, *,
            copier: Callable[[V], V] = copy.deepcopy) -> Callable[[U], V]:
    '''
    Decorator that memoizes a single-argument function.

    Example:

        @memoize
        def count_vowels(word: str) -> int:
            return sum(map(word.count, 'aeiou'))

    The underlying `Memoizer` is available as `count_vowels.memoizer`. To pass a
    custom copier, use `@memoize(copier=copy.copy)`.
    '''
    if function is None:
        return functools.partial(memoize, copier=copier)
    memoizer = Memoizer(function, copier=copier)

    @functools.wraps(function)
    def wrapper(arg: U) -> V:
        return memoizer.value(arg)

    wrapper.memoizer = memoizer
    return wrapper
