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

"""A parser for JSON-like documents built from parsing combinators.

The grammar:

    document = spaces, value, spaces, end of input;
    value    = null | boolean | number | string | array | object;
    null     = "null";
    boolean  = "true" | "false";
    number   = ["-"], digits, [".", digits];
    string   = '"', { any character except '"' }, '"';
    array    = "[", [value, { ",", value }], "]";
    object   = "{", pair, { ",", pair }, "}";
    pair     = string, ":", value;

Whitespace is allowed around the delimiters of arrays and objects and around the
document. The grammar is deliberately narrower than JSON: strings have no escape
sequences (a backslash is an ordinary character and `\\"` ends the string), numbers
have no exponent part, and an object needs at least one pair.

Numbers without a fractional part become `Int`, numbers with one become `Float`.

Nested values are parsed by recursive calls, several Python frames per level. Under
the default recursion limit of 1000 arrays nest up to about 61 levels deep; 40 levels
are safe. Deeper documents raise `RecursionError`.
"""

__all__ = [
    "null",
    "boolean",
    "number",
    "string",
    "spaces",
    "spaced",
    "json_array",
    "json_object",
    "value",
    "document",
    "loads",
]

from typing import List, Optional, Tuple, Union

from jsonlike.errors import ParseError, UnterminatedLiteral
from jsonlike.parser import (
    Parser,
    State,
    a,
    alt,
    finished,
    forward_decl,
    literal,
    many,
    maybe,
    regex,
)
from jsonlike.util import decode
from jsonlike.value import (
    Array,
    Bool,
    Null,
    Number,
    Object,
    String,
    Value,
    make_number,
)

Member = Tuple[str, Value]


def _terminated(p: Parser[Value]) -> Parser[Value]:
    """Report running out of input inside `p` as an unterminated literal."""

    @Parser
    def _p(text: str, s: State) -> Tuple[Value, State]:
        try:
            return p.run(text, s)
        except ParseError as e:
            if e.pos >= len(text) and e.pos > s.pos:
                if isinstance(e, UnterminatedLiteral):
                    raise
                raise UnterminatedLiteral(e.msg, e.pos) from e
            raise

    return _p.named(p.name)


def make_bool(s: str) -> Bool:
    return Bool(s == "true")


def make_array(values: Optional[Tuple[Value, List[Value]]]) -> Array:
    if values is None:
        return Array()
    else:
        first, rest = values
        return Array([first] + rest)


def make_member(values: Tuple[String, Value]) -> Member:
    k, v = values
    return k.value, v


def make_object(values: Tuple[Member, List[Member]]) -> Object:
    first, rest = values
    return Object([first] + rest)


def join(values: Tuple[str, Optional[Tuple[str, str]]]) -> str:
    integer, fraction = values
    return integer if fraction is None else integer + "".join(fraction)


spaces = regex(r"[ \t\r\n]*").named("spaces")


def spaced(delimiter: str) -> Parser[str]:
    """Return a parser of the `delimiter` character surrounded by optional
    whitespace."""
    return (-spaces + a(delimiter) + -spaces).named(repr(delimiter))


digits = regex(r"[0-9]+").named("digits")
number_literal = (regex(r"-?[0-9]+") + maybe(a(".") + digits) >> join).named("number")


@Parser
def number(text: str, s: State) -> Tuple[Number, State]:
    lit, s2 = number_literal.run(text, s)
    return make_number(lit, s.pos), s2


number.name = "number"
null = (literal("null") >> (lambda _: Null())).named("null")
boolean = ((literal("true") | literal("false")) >> make_bool).named("bool")
string = _terminated(-a('"') + regex(r'[^"]*') + -a('"') >> String).named("string")

value: Parser[Value] = forward_decl().named("value")
comma = spaced(",")
member = string + -spaced(":") + value >> make_member
json_array = _terminated(
    -spaced("[") + maybe(value + many(-comma + value)) + -spaced("]") >> make_array
).named("array")
json_object = _terminated(
    -spaced("{") + member + many(-comma + member) + -spaced("}") >> make_object
).named("object")
value.define(alt(null, boolean, number, string, json_array, json_object))
document = -spaces + value + -spaces + -finished


def loads(s: Union[str, bytes]) -> Value:
    """Parse a whole document into a value tree.

    Type: `(Union[str, bytes]) -> Value`

    Bytes are decoded as UTF-8, see `jsonlike.util.decode()`. Leading and trailing
    whitespace is allowed, anything else after the value is an error.

    If the document is malformed, it raises a `ParseError` subclass with its
    (_line_, _column_) place filled in.

    Examples:

    ```pycon
    >>> loads('{"name": "John Doe", "age": 30}').to_python()
    {'name': 'John Doe', 'age': 30}
    >>> loads("[1, 2.5, null]")
    Array((Int(1), Float(2.5), Null()))

    ```
    """
    return document.parse(decode(s))
