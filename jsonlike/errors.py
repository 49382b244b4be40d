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

"""Parsing errors.

Every failure to turn a document into a value tree is reported as a subclass of
`ParseError`. Both parsing techniques raise the same classes, so callers can handle
failures without knowing which technique produced them.
"""

__all__ = [
    "ParseError",
    "UnexpectedToken",
    "UnterminatedLiteral",
    "InvalidNumericLiteral",
    "ExhaustedAlternatives",
    "place_of",
    "unexpected",
]

from typing import Optional, Sequence, Tuple

Place = Tuple[int, int]


class ParseError(Exception):
    """The base class for document parsing errors.

    Attributes:
        msg (str): Human-readable description of the failure
        pos (int): Offset of the failure in the document
        place (Optional[Tuple[int, int]]): Position (_line_, _column_) of the failure,
            set by the top-level entry points
    """

    def __init__(self, msg: str, pos: int, place: Optional[Place] = None) -> None:
        super().__init__(msg, pos)
        self.msg = msg
        self.pos = pos
        self.place = place

    def locate(self, text: str) -> "ParseError":
        """Fill in the (_line_, _column_) place of the error within `text`."""
        self.place = place_of(text, self.pos)
        return self

    def __str__(self) -> str:
        if self.place is None:
            return self.msg
        line, column = self.place
        return "%d,%d: %s" % (line, column, self.msg)

    def __repr__(self) -> str:
        return "%s(%r, %r)" % (type(self).__name__, self.msg, self.pos)


class UnexpectedToken(ParseError):
    """The input does not begin with anything the current production accepts."""


class UnterminatedLiteral(ParseError):
    """The input ended before a string or a bracketed construct was closed."""


class InvalidNumericLiteral(ParseError):
    """A numeric literal cannot be represented as a 64-bit integer or float."""


class ExhaustedAlternatives(ParseError):
    """None of the value productions matched at the position.

    Attributes:
        alternatives (Tuple[str, ...]): Names of the productions that were tried
        cause (Optional[ParseError]): The most specific underlying failure
    """

    def __init__(
        self,
        msg: str,
        pos: int,
        alternatives: Sequence[str] = (),
        cause: Optional[ParseError] = None,
    ) -> None:
        super().__init__(msg, pos)
        self.alternatives = tuple(alternatives)
        self.cause = cause


def place_of(text: str, pos: int) -> Place:
    """Return the 1-based (_line_, _column_) of the offset `pos` in `text`.

    Examples:

    ```pycon
    >>> place_of("[1,\\n 2]", 5)
    (2, 2)

    ```
    """
    line = text.count("\n", 0, pos) + 1
    column = pos - (text.rfind("\n", 0, pos) + 1) + 1
    return line, column


def unexpected(text: str, pos: int, expected: str) -> str:
    """Format the message for an unexpected character or end of input at `pos`."""
    if pos >= len(text):
        return "got unexpected end of input, expected: %s" % expected
    return "got unexpected token: %r, expected: %s" % (text[pos], expected)
