"""
Lift helpers with semantic namespaces.

    from taskkit import lift as L

    # Exception-raising code -> Result
    sale = L.attempt(lambda: client.fetch_sale(42))

    # Values
    ok = L.up.pure(42)
    err = L.up.fail(NotFound())

    # Functions already returning Result
    sale = L.call(fetch_sale_impl, 42)

    # Back out
    value = await L.down.unsafe(sale)     # raises the carried exception
    result = await L.down.to_result(sale)
"""

from __future__ import annotations

from . import down, up
from .call import call, lifted, lifted_attempt, wrap_async
from .down import or_else, to_result, unsafe
from .up import attempt, attempt_sync, catching_async, fail, from_result, pure

__all__ = (
    # Namespaces
    "up",
    "down",
    # Up
    "attempt",
    "attempt_sync",
    "catching_async",
    "fail",
    "from_result",
    "pure",
    # Call
    "call",
    "lifted",
    "lifted_attempt",
    "wrap_async",
    # Down
    "or_else",
    "to_result",
    "unsafe",
)
