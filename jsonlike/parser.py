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

"""Functional parsing combinators over text.

Parsing combinators define an internal domain-specific language (DSL) for describing
the parsing rules of a grammar. You start with a few primitive parsers, combine them
into more complex ones, and finally cover the whole grammar you want to parse.

The parsers run directly on a `str`. The current position in the text is kept in an
immutable `State`: a parser that succeeds returns a new state, a parser that fails
raises a `ParseError` and leaves the state of its caller untouched. This is what makes
backtracking in `p1 | p2`, `alt()`, `maybe()` and `many()` free.

The structure of the language:

* Class `Parser`
    * All the primitives and combinators of the language return `Parser` objects
    * It defines the main `Parser.parse(text)` method
* Primitive parsers
    * `some(pred)`, `a(char)`, `literal(text)`, `regex(pattern)`, `pure(x)`,
      `forward_decl()`, `finished`
* Parser combinators
    * `p1 + p2`, `p1 | p2`, `p >> f`, `-p`, `maybe(p)`, `many(p)`, `skip(p)`,
      `alt(p1, ..., pN)`

Failures are reported for the rightmost position the parser has reached, so the error
describes the most specific problem instead of the last alternative tried.
"""

__all__ = [
    "some",
    "a",
    "literal",
    "regex",
    "many",
    "pure",
    "finished",
    "maybe",
    "skip",
    "alt",
    "forward_decl",
    "Parser",
    "State",
]

import logging
import re
from typing import (
    Any,
    Callable,
    Generic,
    List,
    Optional,
    Tuple,
    TypeVar,
    Union,
    cast,
    overload,
)

from jsonlike.errors import (
    ExhaustedAlternatives,
    ParseError,
    UnexpectedToken,
    unexpected,
)

log = logging.getLogger("jsonlike")

debug = False

_A = TypeVar("_A")
_B = TypeVar("_B")

_Run = Callable[[str, "State"], Tuple[Any, "State"]]


class Parser(Generic[_A]):
    """A parser object that can parse a text or can be combined with other parsers
    using `+`, `|`, `>>`, `many()`, and other parsing combinators.

    Type: `Parser[A]`, where `A` is the type of the parsed value.

    !!! Note

        The constructor `Parser.__init__()` is considered **internal**. Use primitive
        parsers and parsing combinators to construct new parsers.
    """

    def __init__(self, p: Union["Parser[_A]", _Run]) -> None:
        """Wrap the parser function `p` into a `Parser` object."""
        self.name = ""
        self.define(p)

    def named(self, name: str) -> "Parser[_A]":
        """Specify the name of the parser for easier debugging.

        Type: `(str) -> Parser[A]`

        The name is used in error messages and in the debug-level parsing log.

        Examples:

        ```pycon
        >>> expr = (a("x") + a("y")).named("expr")
        >>> expr.name
        'expr'
        >>> (a("x") + a("y")).name
        "('x', 'y')"

        ```

        !!! Note

            You can enable the parsing log this way:

            ```python
            import logging
            logging.basicConfig(level=logging.DEBUG)
            import jsonlike.parser
            jsonlike.parser.debug = True
            ```
        """
        self.name = name
        return self

    def define(self, p: Union["Parser[_A]", _Run]) -> None:
        """Define the parser created earlier as a forward declaration.

        Type: `(Parser[A]) -> None`

        Use `p = forward_decl()` in combination with `p.define(...)` to define
        recursive parsers.
        """
        f = getattr(p, "run", p)
        setattr(self, "_run", f)
        name = getattr(p, "name", p.__doc__)
        if name is not None:
            self.named(name)

    def run(self, text: str, s: "State") -> Tuple[_A, "State"]:
        """Run the parser against the text starting from the parsing state `s`.

        Type: `(str, State) -> Tuple[A, State]`

        If the parser fails to parse the text, it raises a `ParseError`.

        !!! Warning

            This method is **internal**. Use `Parser.parse(text)` instead and let the
            parser object take care of the parsing state.
        """
        if debug:
            log.debug("trying %s at %d" % (self.name, s.pos))
        return self._run(text, s)

    def _run(self, text: str, s: "State") -> Tuple[_A, "State"]:
        raise NotImplementedError("you must define() a parser")

    def parse(self, text: str) -> _A:
        """Parse the text and return the parsed value.

        Type: `(str) -> A`

        It doesn't require the whole text to be consumed, add `+ -finished` to your
        parser for that.

        If the parser fails, it raises a `ParseError` with the (_line_, _column_) place
        of the failure filled in.

        Examples:

        ```pycon
        >>> expr = a("x") + a("y")
        >>> expr.parse("xz")
        Traceback (most recent call last):
            ...
        jsonlike.errors.UnexpectedToken: 1,2: got unexpected token: 'z', expected: 'y'

        ```
        """
        try:
            (tree, _) = self.run(text, State(0, 0, None))
            return tree
        except ParseError as e:
            e.locate(text)
            raise

    @overload
    def __add__(self, other: "_IgnoredParser") -> "Parser[_A]":
        pass

    @overload
    def __add__(self, other: "Parser[_B]") -> "_TupleParser[Tuple[_A, _B]]":
        pass

    def __add__(
        self, other: Union["_IgnoredParser", "Parser[_B]"]
    ) -> Union["Parser[_A]", "_TupleParser[Tuple[_A, _B]]"]:
        """Sequential combination of parsers. It runs this parser, then the other
        parser.

        The parsed values of `p1 + p2 + ... + pN` are merged into a single tuple.
        Results of the parsers marked with `-p` are left out of the tuple; if only one
        value remains, it is returned as is.

        Examples:

        ```pycon
        >>> expr = a("x") + a("y") + a("z")
        >>> expr.parse("xyz")
        ('x', 'y', 'z')
        >>> expr = -a("[") + a("x") + -a("]")
        >>> expr.parse("[x]")
        'x'

        ```
        """

        def magic(v1: Any, v2: Any) -> _Tuple:
            if isinstance(v1, _Tuple):
                return _Tuple(v1 + (v2,))
            else:
                return _Tuple((v1, v2))

        @_TupleParser
        def _add(text: str, s: State) -> Tuple[Tuple[_A, _B], State]:
            (v1, s2) = self.run(text, s)
            (v2, s3) = other.run(text, s2)
            return cast(Tuple[_A, _B], magic(v1, v2)), s3

        @Parser
        def ignored_right(text: str, s: State) -> Tuple[_A, State]:
            v, s2 = self.run(text, s)
            _, s3 = other.run(text, s2)
            return v, s3

        name = "(%s, %s)" % (self.name, other.name)
        if isinstance(other, _IgnoredParser):
            return ignored_right.named(name)
        else:
            _add.name = name
            return _add

    def __or__(self, other: "Parser[_B]") -> "Parser[Union[_A, _B]]":
        """Choice combination of parsers.

        It runs this parser and returns its result. If the parser fails, it runs the
        other parser starting from the same position.

        Examples:

        ```pycon
        >>> expr = a("x") | a("y")
        >>> expr.parse("y")
        'y'
        >>> expr.parse("z")
        Traceback (most recent call last):
            ...
        jsonlike.errors.UnexpectedToken: 1,1: got unexpected token: 'z', expected: 'x' or 'y'

        ```
        """

        @Parser
        def _or(text: str, s: State) -> Tuple[Union[_A, _B], State]:
            try:
                return self.run(text, s)
            except ParseError as e:
                first = e
            try:
                return other.run(text, State(s.pos, first.pos, first))
            except UnexpectedToken as e:
                if e.pos == s.pos:
                    msg = unexpected(text, s.pos, _or.name)
                    raise _fail(UnexpectedToken(msg, s.pos), s)
                raise

        _or.name = "%s or %s" % (self.name, other.name)
        return _or

    def __rshift__(self, f: Callable[[_A], _B]) -> "Parser[_B]":
        """Transform the parsing result by applying the specified function.

        Type: `(Callable[[A], B]) -> Parser[B]`

        Examples:

        ```pycon
        >>> expr = regex(r"[0-9]+") >> int
        >>> expr.parse("42")
        42

        ```
        """

        @Parser
        def _shift(text: str, s: State) -> Tuple[_B, State]:
            (v, s2) = self.run(text, s)
            return f(v), s2

        return _shift.named(self.name)

    def __neg__(self) -> "_IgnoredParser":
        """Return a parser that parses the same text, but its parsing result is
        ignored by the sequential `+` combinator.

        Type: `(Parser[A]) -> _IgnoredParser`

        You can use it for throwing away elements of concrete syntax (e.g. `","`,
        `":"`).

        !!! Note

            You **should not** pass the resulting parser to any combinators other than
            `+`. You **should** have at least one non-skipped value in your
            `p1 + p2 + ... + pN`.
        """
        return _IgnoredParser(self)


class State:
    """Parsing state, the cursor over the text being parsed.

    It consists of the current position `pos` in the text, and the rightmost failure
    `error` (at the position `max`) that has been recovered from while parsing. The
    recorded failure is used for reporting the most specific error.

    States are never modified, parsers return new ones.
    """

    def __init__(self, pos: int, max: int, error: Optional[ParseError] = None) -> None:
        self.pos = pos
        self.max = max
        self.error = error

    def __str__(self) -> str:
        return str((self.pos, self.max))

    def __repr__(self) -> str:
        return "State(%r, %r)" % (self.pos, self.max)


def _fail(error: ParseError, s: State) -> ParseError:
    """Return the rightmost of `error` and the failure recorded in `s`."""
    if s.error is not None and s.max >= error.pos:
        return s.error
    return error


class _Tuple(tuple):
    pass


class _TupleParser(Parser[_A], Generic[_A]):
    @overload  # type: ignore[override]
    def __add__(self, other: "_IgnoredParser") -> "_TupleParser[_A]":
        pass

    @overload
    def __add__(self, other: Parser[Any]) -> Parser[Any]:
        pass

    def __add__(
        self, other: Union["_IgnoredParser", Parser[Any]]
    ) -> Union["_TupleParser[_A]", Parser[Any]]:
        return super().__add__(other)


class _Ignored:
    def __init__(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return "_Ignored(%s)" % repr(self.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _Ignored) and self.value == other.value


@Parser
def finished(text: str, s: State) -> Tuple[None, State]:
    """A parser that fails if there is any unparsed text left."""
    if s.pos >= len(text):
        return None, s
    else:
        msg = unexpected(text, s.pos, finished.name)
        raise _fail(UnexpectedToken(msg, s.pos), s)


finished.name = "end of input"


def many(p: Parser[_A]) -> Parser[List[_A]]:
    """Return a parser that applies the parser `p` as many times as it succeeds at
    parsing the text.

    The parsed value is a list of the sequentially parsed values.

    Examples:

    ```pycon
    >>> expr = many(a("x"))
    >>> expr.parse("xxxy")
    ['x', 'x', 'x']
    >>> expr.parse("y")
    []

    ```
    """

    @Parser
    def _many(text: str, s: State) -> Tuple[List[_A], State]:
        res = []
        try:
            while True:
                (v, s) = p.run(text, s)
                res.append(v)
        except ParseError as e:
            s2 = State(s.pos, e.pos, e)
            if debug:
                log.debug(
                    "*matched* %d instances of %s, new state = %s"
                    % (len(res), _many.name, s2)
                )
            return res, s2

    _many.name = "{ %s }" % p.name
    return _many


def some(pred: Callable[[str], bool]) -> Parser[str]:
    """Return a parser that parses a character if it satisfies the predicate `pred`.

    Type: `(Callable[[str], bool]) -> Parser[str]`

    Examples:

    ```pycon
    >>> expr = some(lambda c: c.isalpha()).named("alpha")
    >>> expr.parse("x")
    'x'
    >>> expr.parse("1")
    Traceback (most recent call last):
        ...
    jsonlike.errors.UnexpectedToken: 1,1: got unexpected token: '1', expected: alpha

    ```
    """

    @Parser
    def _some(text: str, s: State) -> Tuple[str, State]:
        if s.pos >= len(text):
            msg = unexpected(text, s.pos, _some.name)
            raise _fail(UnexpectedToken(msg, s.pos), s)
        c = text[s.pos]
        if pred(c):
            s2 = State(s.pos + 1, s.max, s.error)
            if debug:
                log.debug("*matched* %r, new state = %s" % (c, s2))
            return c, s2
        else:
            if debug:
                log.debug("failed %r, state = %s, expected = %s" % (c, s, _some.name))
            msg = unexpected(text, s.pos, _some.name)
            raise _fail(UnexpectedToken(msg, s.pos), s)

    _some.name = "some(...)"
    return _some


def a(value: str) -> Parser[str]:
    """Return a parser that parses a character if it's equal to `value`.

    Type: `(str) -> Parser[str]`

    Examples:

    ```pycon
    >>> expr = a("x")
    >>> expr.parse("x")
    'x'

    ```
    """

    def eq_value(c: str) -> bool:
        return c == value

    return some(eq_value).named(repr(value))


def literal(value: str) -> Parser[str]:
    """Return a parser that parses the exact text `value`.

    Type: `(str) -> Parser[str]`

    Unlike `a()`, the value may be longer than one character. The literal is matched as
    a whole: on failure no part of it is consumed.

    Examples:

    ```pycon
    >>> expr = literal("null")
    >>> expr.parse("null")
    'null'
    >>> expr.parse("nil")
    Traceback (most recent call last):
        ...
    jsonlike.errors.UnexpectedToken: 1,1: got unexpected token: 'n', expected: 'null'

    ```
    """

    @Parser
    def _literal(text: str, s: State) -> Tuple[str, State]:
        if text.startswith(value, s.pos):
            s2 = State(s.pos + len(value), s.max, s.error)
            if debug:
                log.debug("*matched* %r, new state = %s" % (value, s2))
            return value, s2
        msg = unexpected(text, s.pos, _literal.name)
        raise _fail(UnexpectedToken(msg, s.pos), s)

    _literal.name = repr(value)
    return _literal


def regex(pattern: str, flags: int = 0) -> Parser[str]:
    """Return a parser that parses the text matched by the regexp `pattern`.

    Type: `(str, int) -> Parser[str]`

    The regexp is matched at the current position. The parsed value is the matched
    text.

    Examples:

    ```pycon
    >>> expr = regex(r"-?[0-9]+")
    >>> expr.parse("-12x")
    '-12'

    ```
    """
    compiled = re.compile(pattern, flags)

    @Parser
    def _regex(text: str, s: State) -> Tuple[str, State]:
        m = compiled.match(text, s.pos)
        if m is None:
            msg = unexpected(text, s.pos, _regex.name)
            raise _fail(UnexpectedToken(msg, s.pos), s)
        value = m.group()
        s2 = State(m.end(), s.max, s.error)
        if debug:
            log.debug("*matched* %r, new state = %s" % (value, s2))
        return value, s2

    _regex.name = "/%s/" % pattern
    return _regex


def pure(x: _A) -> Parser[_A]:
    """Wrap any object into a parser.

    Type: `(A) -> Parser[A]`

    A pure parser doesn't touch the text, it just returns its pure `x` value.
    """

    @Parser
    def _pure(_: str, s: State) -> Tuple[_A, State]:
        return x, s

    _pure.name = "(pure %r)" % (x,)
    return _pure


def maybe(p: Parser[_A]) -> Parser[Optional[_A]]:
    """Return a parser that returns `None` if the parser `p` fails.

    Examples:

    ```pycon
    >>> expr = maybe(a("x"))
    >>> expr.parse("x")
    'x'
    >>> expr.parse("y") is None
    True

    ```
    """
    return (p | pure(None)).named("[ %s ]" % (p.name,))


def skip(p: Parser[Any]) -> "_IgnoredParser":
    """An alias for `-p`.

    See also the docs for `Parser.__neg__()`.
    """
    return -p


def alt(*ps: Parser[Any]) -> Parser[Any]:
    """Return a parser that tries the parsers `ps` in order and returns the result of
    the first one that succeeds.

    Type: `(Parser[A], ..., Parser[A]) -> Parser[A]`

    Every alternative starts from the same position. If none of the alternatives made
    any progress, it raises `ExhaustedAlternatives` with the most specific underlying
    failure as its `cause`. If an alternative failed after consuming some text, or
    failed with an error other than `UnexpectedToken`, that failure is raised as is.

    Examples:

    ```pycon
    >>> expr = alt(literal("true"), literal("false"), a("[") + a("]"))
    >>> expr.parse("false")
    'false'
    >>> expr.parse("x")
    Traceback (most recent call last):
        ...
    jsonlike.errors.ExhaustedAlternatives: 1,1: got unexpected token: 'x', expected: 'true' or 'false' or ('[', ']')
    >>> expr.parse("[x")
    Traceback (most recent call last):
        ...
    jsonlike.errors.UnexpectedToken: 1,2: got unexpected token: 'x', expected: ']'

    ```
    """

    @Parser
    def _alt(text: str, s: State) -> Tuple[Any, State]:
        errors = []
        for p in ps:
            try:
                return p.run(text, s)
            except ParseError as e:
                errors.append(e)
        committed = [
            e for e in errors if e.pos > s.pos or not isinstance(e, UnexpectedToken)
        ]
        if committed:
            raise max(committed, key=lambda e: e.pos)
        msg = unexpected(text, s.pos, _alt.name)
        names = [p.name for p in ps]
        raise _fail(ExhaustedAlternatives(msg, s.pos, names, errors[0]), s)

    _alt.name = " or ".join(p.name for p in ps)
    return _alt


class _IgnoredParser(Parser[Any]):
    def __init__(self, p: Union[Parser[Any], _Run]) -> None:
        super(_IgnoredParser, self).__init__(p)
        run = self._run

        def ignored(text: str, s: State) -> Tuple[Any, State]:
            v, s2 = run(text, s)
            return v if isinstance(v, _Ignored) else _Ignored(v), s2

        self.define(ignored)
        name = getattr(p, "name", p.__doc__)
        if name is not None:
            self.name = name

    @overload  # type: ignore[override]
    def __add__(self, other: "_IgnoredParser") -> "_IgnoredParser":
        pass

    @overload
    def __add__(self, other: Parser[_B]) -> Parser[_B]:
        pass

    def __add__(
        self, other: Union["_IgnoredParser", Parser[_B]]
    ) -> Union["_IgnoredParser", Parser[_B]]:
        if isinstance(other, _IgnoredParser):

            @_IgnoredParser
            def ip(text: str, s: State) -> Tuple[Any, State]:
                _, s2 = self.run(text, s)
                v, s3 = other.run(text, s2)
                return v, s3

            ip.name = "(%s, %s)" % (self.name, other.name)
            return ip
        else:

            @Parser
            def p(text: str, s: State) -> Tuple[_B, State]:
                _, s2 = self.run(text, s)
                v, s3 = other.run(text, s2)
                return v, s3

            p.name = "(%s, %s)" % (self.name, other.name)
            return p


def forward_decl() -> Parser[Any]:
    """Return an undefined parser that can be used as a forward declaration.

    Type: `Parser[Any]`

    Use `p = forward_decl()` in combination with `p.define(...)` to define recursive
    parsers.

    Examples:

    ```pycon
    >>> expr = forward_decl()
    >>> expr.define(a("x") + maybe(expr) + a("y"))
    >>> expr.parse("xxyy")
    ('x', ('x', None, 'y'), 'y')
    >>> expr.parse("xxy")
    Traceback (most recent call last):
        ...
    jsonlike.errors.UnexpectedToken: 1,4: got unexpected end of input, expected: 'y'

    ```
    """

    @Parser
    def f(_text: Any, _s: Any) -> Any:
        raise NotImplementedError("you must define() a forward_decl somewhere")

    f.name = "forward_decl()"
    return f


if __name__ == "__main__":
    import doctest

    doctest.testmod()
