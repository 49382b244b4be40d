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

from typing import Callable, Sequence, TypeVar, Union

from jsonlike.errors import UnexpectedToken

ENCODING = "UTF-8"

_T = TypeVar("_T")


def decode(s: Union[str, bytes]) -> str:
    """Return the text of a document given as `str` or as bytes in `ENCODING`.

    Type: `(Union[str, bytes]) -> str`

    Bytes that cannot be decoded are reported as an `UnexpectedToken` at the offset
    of the first character that could not be decoded.

    Examples:

    ```pycon
    >>> decode(b'["\\xd1\\x84"]')
    '["ф"]'
    >>> decode(b'[1,\\n "\\xff"]')
    Traceback (most recent call last):
        ...
    jsonlike.errors.UnexpectedToken: 2,3: cannot decode input as UTF-8: invalid start byte

    ```
    """
    if isinstance(s, str):
        return s
    try:
        return s.decode(ENCODING)
    except UnicodeDecodeError as e:
        prefix = s[: e.start].decode(ENCODING)
        msg = "cannot decode input as %s: %s" % (ENCODING, e.reason)
        raise UnexpectedToken(msg, len(prefix)).locate(prefix) from e


def pretty_tree(
    x: _T, kids: Callable[[_T], Sequence[_T]], show: Callable[[_T], str]
) -> str:
    """Return a pseudographic tree representation of `x` similar to the `tree`
    command in Unix.

    Type: `(A, Callable[[A], Sequence[A]], Callable[[A], str]) -> str`

    Examples:

    ```pycon
    >>> tree = ("array", [("1", []), ("object", [("2", [])])])
    >>> print(pretty_tree(tree, lambda t: t[1], lambda t: t[0]))
    array
    |-- 1
    `-- object
        `-- 2

    ```
    """
    (MID, END, CONT, LAST, ROOT) = ("|-- ", "`-- ", "|   ", "    ", "")

    def rec(x: _T, indent: str, sym: str) -> str:
        line = indent + sym + show(x)
        xs = kids(x)
        if len(xs) == 0:
            return line
        if sym == MID:
            next_indent = indent + CONT
        elif sym == ROOT:
            next_indent = indent + ROOT
        else:
            next_indent = indent + LAST
        syms = [MID] * (len(xs) - 1) + [END]
        lines = [rec(x, next_indent, sym) for x, sym in zip(xs, syms)]
        return "\n".join([line] + lines)

    return rec(x, "", ROOT)
