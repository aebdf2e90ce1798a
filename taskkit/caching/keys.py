"""
Cache keys
==========

Order-stable, type-tagged encoding of call arguments.

Rules:
- scalars are tagged with their type: 1, 1.0, True and "1" never collide
- lists and tuples stay distinct, their items encoded in order
- mappings and sets become frozensets, so insertion order does not matter
- keyword arguments are a mapping: their order does not matter either
- other hashable objects are used as themselves (their __eq__ decides)
- unhashable objects fall back to (type, repr)

Two argument sets that encode to equal keys share one cache entry. That is
the contract, not an accident: e.g. two unhashable objects of the same type
with the same repr are the same key.
"""

from __future__ import annotations

import typing
from collections.abc import Hashable, Mapping, Set

type CacheKey = tuple[Hashable, Hashable]

_SCALARS = (type(None), bool, int, float, complex, str, bytes)


def freeze(value: typing.Any) -> Hashable:
    """Encode one value as a hashable, type-tagged structure."""
    if isinstance(value, _SCALARS):
        return (type(value).__name__, value)
    if isinstance(value, Mapping):
        return ("mapping", frozenset((freeze(k), freeze(v)) for k, v in value.items()))
    if isinstance(value, (list, tuple)):
        return (type(value).__name__, tuple(freeze(item) for item in value))
    if isinstance(value, Set):
        return ("set", frozenset(freeze(item) for item in value))
    try:
        hash(value)
    except TypeError:
        return (type(value).__qualname__, repr(value))
    return (type(value).__qualname__, value)


def cache_key(args: tuple[typing.Any, ...], kwargs: Mapping[str, typing.Any]) -> CacheKey:
    """Key for one call. f(1) and f(x=1) are different keys."""
    return (freeze(tuple(args)), freeze(dict(kwargs)))


__all__ = ("CacheKey", "cache_key", "freeze")
