"""Runtime values for the Lox interpreter.

Lox values map directly onto Python objects:

* ``nil``      -> ``None``
* booleans     -> ``bool``
* numbers      -> ``float`` (always double precision, never ``int``)
* strings      -> ``str``
* callables    -> :class:`LoxCallable` (reserved; the core never calls them)

The helpers here implement the language-level view of those values:
their canonical text form, truthiness and equality.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LoxCallable:
    """Placeholder for callable values. Declared so that every runtime
    variant has a text form and a type name, but nothing produces or calls
    one yet."""
    name: str
    arity: int = 0

    def __repr__(self) -> str:
        return f"<fn {self.name}>"


def type_name(value: Any) -> str:
    """Return the Lox name of a value's runtime type."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, LoxCallable):
        return 'callable'
    return type(value).__name__


def format_number(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return '-0'
        return str(int(value))
    return repr(value)


def to_string(value: Any) -> str:
    """Convert a runtime value to the text written by ``print``."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    return repr(value)


def is_truthy(value: Any) -> bool:
    # only nil and false are falsy
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def values_equal(a: Any, b: Any) -> bool:
    """Equality without implicit conversions: same variant and same payload."""
    if a is None or b is None:
        return a is None and b is None
    if type(a) is not type(b):
        return False
    return a == b
