# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''
Turning arbitrary arguments into independent, hashable cache keys.

See the documentation of `freeze` for more details.
'''

from __future__ import annotations

import copy
import enum
import numbers
import dataclasses
import collections
import collections.abc
from typing import Any, Hashable

import numpy as np
from immutabledict import immutabledict as ImmutableDict

from .exceptions import UnfreezableKey


__all__ = ['Frozen', 'freeze']


_atomic_types = (type(None), bool, numbers.Number, str, bytes, enum.Enum, type)


@dataclasses.dataclass(frozen=True)
class Frozen:
    '''
    A frozen stand-in for an unhashable container.

    `kind` says what the container was, `content` holds its frozen items. A
    `Frozen` is only ever equal to another `Frozen`, so the frozen list `[1, 2]`
    won't collide with the tuple `(1, 2)`.
    '''
    kind: Hashable
    content: Hashable


def freeze(thing: Any) -> Hashable:
    '''
    Get a hashable key for `thing` that doesn't share any mutable state with it.

    Equal arguments give equal keys, so the result can be used as a dict key in
    place of `thing`. Mutating `thing` after freezing it doesn't affect the key.

    Example:

        freeze([1, {2: [3]}]) == freeze([1, {2: [3]}])
        freeze([1, 2]) != freeze((1, 2))

    Equality is Python's own, so arguments that Python considers equal share a key
    even when their types differ. `1`, `1.0` and `True` all give the same key, as
    do `{1}` and `frozenset({1})`.

    Raises `UnfreezableKey` for objects that are unhashable and aren't one of the
    containers we know about.
    '''
    if isinstance(thing, _atomic_types):
        return thing
    elif isinstance(thing, tuple):
        return tuple(map(freeze, thing))
    elif isinstance(thing, bytearray):
        return bytes(thing)
    elif isinstance(thing, collections.abc.Set):
        return frozenset(map(freeze, thing))
    elif isinstance(thing, collections.abc.Mapping):
        return Frozen('dict', ImmutableDict((freeze(key), freeze(value))
                                            for key, value in thing.items()))
    elif isinstance(thing, (list, collections.UserList)):
        return Frozen('list', tuple(map(freeze, thing)))
    elif isinstance(thing, collections.abc.MutableSequence):
        return Frozen(type(thing), tuple(map(freeze, thing)))
    elif isinstance(thing, np.ndarray):
        return _freeze_array(thing)

    try:
        hash(thing)
    except TypeError:
        if dataclasses.is_dataclass(thing):
            return Frozen(type(thing), tuple((field.name, freeze(getattr(thing, field.name)))
                                             for field in dataclasses.fields(thing)
                                             if field.compare))
        raise UnfreezableKey(thing) from None

    if type(thing).__eq__ is object.__eq__:
        # Compared by identity, so a copy would never be equal to the original.
        return thing
    return copy.deepcopy(thing)


def _freeze_array(array: np.ndarray) -> Frozen:
    if array.dtype.hasobject:
        content = tuple(map(freeze, array.ravel().tolist()))
    else:
        content = array.tobytes()
    return Frozen('ndarray', (repr(array.dtype), array.shape, content))
