# Copyright © 2009/2023 Andrey Vlasovskikh
#
# Permission is hereby granted, free of charge, to any person obtaining a copy of this
# software and associated documentation files (the "Software"), to deal in the Software
# without restriction, including without limitation the rights to use, copy, modify,
# merge, publish, distribute, sublicense, and/or sell copies of the Software, and to
# permit persons to whom the Software is furnished to do so, subject to the following
# conditions:
#
# The above copyright notice and this permission notice shall be included in all copies
# or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A
# PARTICULAR PURPOSE AND NON-INFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT
# HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF
# CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE
# OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.

"""The value tree.

A parsed document is a tree of `Value` objects. The set of variants is closed:

* `Null`
* `Bool`
* `Number`, which is either an `Int` or a `Float`
* `String`
* `Array` of values
* `Object` mapping string keys to values

Values are immutable and compare structurally. The variant is part of the value:
`Int(1)` is not equal to `Float(1.0)`, and `Bool(True)` is not equal to `Int(1)`.
"""

__all__ = [
    "Value",
    "Null",
    "Bool",
    "Number",
    "Int",
    "Float",
    "String",
    "Array",
    "Object",
    "make_number",
    "pformat",
]

import math
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Tuple, Union

from jsonlike.errors import InvalidNumericLiteral
from jsonlike.util import pretty_tree

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1
INT_DIGITS = len(str(INT_MAX))


class Value:
    """The base class of the value tree nodes."""

    __slots__ = ()

    def _payload(self) -> Any:
        raise NotImplementedError

    def to_python(self) -> Any:
        """Convert the tree rooted at this value to plain Python objects."""
        raise NotImplementedError

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("%s is immutable" % type(self).__name__)

    def __delattr__(self, name: str) -> None:
        raise AttributeError("%s is immutable" % type(self).__name__)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self._payload() == other._payload()  # type: ignore

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._payload()))

    def __repr__(self) -> str:
        return "%s(%r)" % (type(self).__name__, self._payload())


class Null(Value):
    __slots__ = ()

    def _payload(self) -> None:
        return None

    def to_python(self) -> None:
        return None

    def __repr__(self) -> str:
        return "Null()"


class Bool(Value):
    __slots__ = ("value",)

    def __init__(self, value: bool) -> None:
        object.__setattr__(self, "value", bool(value))

    def _payload(self) -> bool:
        return self.value

    def to_python(self) -> bool:
        return self.value


class Number(Value):
    """A numeric value, either an `Int` or a `Float`."""

    __slots__ = ("value",)

    def _payload(self) -> Union[int, float]:
        return self.value

    def to_python(self) -> Union[int, float]:
        return self.value


class Int(Number):
    __slots__ = ()

    def __init__(self, value: int) -> None:
        object.__setattr__(self, "value", int(value))


class Float(Number):
    __slots__ = ()

    def __init__(self, value: float) -> None:
        object.__setattr__(self, "value", float(value))


class String(Value):
    __slots__ = ("value",)

    def __init__(self, value: str) -> None:
        object.__setattr__(self, "value", value)

    def _payload(self) -> str:
        return self.value

    def to_python(self) -> str:
        return self.value


class Array(Value):
    """An ordered sequence of values.

    The elements are available as the `items` tuple. An `Array` also supports
    `len()`, indexing and iteration.
    """

    __slots__ = ("items",)

    def __init__(self, items: Iterable[Value] = ()) -> None:
        object.__setattr__(self, "items", tuple(items))

    def _payload(self) -> Tuple[Value, ...]:
        return self.items

    def to_python(self) -> List[Any]:
        return [x.to_python() for x in self.items]

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def __iter__(self):  # type: ignore[no-untyped-def]
        return iter(self.items)


class Object(Value):
    """A mapping from string keys to values.

    It is built from a mapping or from an iterable of (_key_, _value_) pairs. When a
    key occurs more than once, the last value wins. The members are available as the
    read-only `members` mapping. An `Object` also supports `len()`, `in`, lookup by
    key and iteration over keys.

    Objects are not hashable.
    """

    __slots__ = ("members",)

    def __init__(
        self, members: Union[Mapping[str, Value], Iterable[Tuple[str, Value]]] = ()
    ) -> None:
        object.__setattr__(self, "members", MappingProxyType(dict(members)))

    def _payload(self) -> Mapping[str, Value]:
        return self.members

    def to_python(self) -> dict:
        return {k: v.to_python() for k, v in self.members.items()}

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Object) and dict(self.members) == dict(other.members)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return "Object(%r)" % (dict(self.members),)

    def __len__(self) -> int:
        return len(self.members)

    def __contains__(self, key: object) -> bool:
        return key in self.members

    def __getitem__(self, key: str) -> Value:
        return self.members[key]

    def __iter__(self):  # type: ignore[no-untyped-def]
        return iter(self.members)


def make_number(literal: str, pos: int = 0) -> Number:
    """Convert a numeric literal into an `Int` or a `Float`.

    Type: `(str, int) -> Number`

    The literal is a `Float` if and only if it has a fractional part. It raises
    `InvalidNumericLiteral` at the offset `pos` if the value doesn't fit into a signed
    64-bit integer or a finite float.

    Examples:

    ```pycon
    >>> make_number("-12")
    Int(-12)
    >>> make_number("-12.50")
    Float(-12.5)
    >>> make_number("9223372036854775808")
    Traceback (most recent call last):
        ...
    jsonlike.errors.InvalidNumericLiteral: integer literal out of range: '9223372036854775808'

    ```
    """
    if "." in literal:
        f = float(literal)
        if not math.isfinite(f):
            raise InvalidNumericLiteral(
                "float literal out of range: %r" % (literal,), pos
            )
        return Float(f)
    # int() refuses very long digit strings, and no literal this long is in range
    if len(literal.lstrip("-").lstrip("0")) > INT_DIGITS:
        raise InvalidNumericLiteral("integer literal out of range: %r" % (literal,), pos)
    i = int(literal)
    if not INT_MIN <= i <= INT_MAX:
        raise InvalidNumericLiteral("integer literal out of range: %r" % (literal,), pos)
    return Int(i)


def _kids(v: Value) -> List[Tuple[str, Value]]:
    if isinstance(v, Array):
        return [("", x) for x in v.items]
    elif isinstance(v, Object):
        return list(v.members.items())
    else:
        return []


def pformat(value: Value) -> str:
    """Return a pseudographic tree representation of the value tree.

    Examples:

    ```pycon
    >>> print(pformat(Object({"marks": Array([Int(90), Float(85.1)])})))
    Object
    `-- marks: Array
        |-- Int(90)
        `-- Float(85.1)

    ```
    """

    def show(member: Tuple[str, Value]) -> str:
        key, v = member
        label = type(v).__name__ if isinstance(v, (Array, Object)) else repr(v)
        return "%s: %s" % (key, label) if key else label

    return pretty_tree(("", value), lambda m: _kids(m[1]), show)
