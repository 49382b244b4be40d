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

"""Recursive descent parsers for JSON-like documents.

The same grammar is implemented twice:

* `jsonlike.document`, parsers assembled by hand from the parsing combinators of
  `jsonlike.parser`
* `jsonlike.peg`, a parser generated from a declarative PEG grammar, whose concrete
  parse tree is converted into values by a tree walker

Both produce the same value tree, see `jsonlike.value`, and raise the same errors, see
`jsonlike.errors`.
"""

__all__ = [
    "loads",
    "METHODS",
    "Value",
    "Null",
    "Bool",
    "Number",
    "Int",
    "Float",
    "String",
    "Array",
    "Object",
    "ParseError",
    "UnexpectedToken",
    "UnterminatedLiteral",
    "InvalidNumericLiteral",
    "ExhaustedAlternatives",
]

from typing import Callable, Dict, Union

from jsonlike import document, peg
from jsonlike.errors import (
    ExhaustedAlternatives,
    InvalidNumericLiteral,
    ParseError,
    UnexpectedToken,
    UnterminatedLiteral,
)
from jsonlike.value import Array, Bool, Float, Int, Null, Number, Object, String, Value

METHODS: Dict[str, Callable[[Union[str, bytes]], Value]] = {
    "combinators": document.loads,
    "grammar": peg.loads,
}


def loads(s: Union[str, bytes], method: str = "combinators") -> Value:
    """Parse a JSON-like document into a value tree.

    Type: `(Union[str, bytes], str) -> Value`

    The `method` is one of the keys of `METHODS`: `"combinators"` or `"grammar"`.
    Both methods accept the same documents and return equal value trees.

    Examples:

    ```pycon
    >>> loads('["a", null, 1]')
    Array((String('a'), Null(), Int(1)))
    >>> loads('["a", null, 1]', method="grammar") == loads('["a", null, 1]')
    True

    ```
    """
    try:
        f = METHODS[method]
    except KeyError:
        raise ValueError(
            "unknown parsing method %r, expected one of: %s"
            % (method, ", ".join(sorted(METHODS)))
        )
    return f(s)
