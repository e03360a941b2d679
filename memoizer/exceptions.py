# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

from __future__ import annotations

from typing import Any


class MemoizerException(Exception):
    pass

class UnfreezableKey(MemoizerException, TypeError):
    '''The argument can't be turned into a cache key.'''
    def __init__(self, thing: Any) -> None:
        self.thing = thing
        MemoizerException.__init__(
            self, f"Can't use {thing!r} of type {type(thing).__name__} as a cache key, it's "
                  f"neither hashable nor a container we know how to freeze."
        )
