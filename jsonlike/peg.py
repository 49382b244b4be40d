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

"""A parser for JSON-like documents generated from a declarative PEG grammar.

The rules in `GRAMMAR` describe the same language as `jsonlike.document`. Parsing
with them produces a concrete parse tree: a `parsimonious.nodes.Node` for every rule
that matched, with its `start` and `end` offsets. `ValueBuilder` walks that tree and
builds the value tree.

All syntax errors are detected by the generated parser. The tree walker only
interprets a tree that is already known to be well-formed; the only thing it can
reject is a number that doesn't fit into its numeric type.

Both the generated parser and the tree walker recurse once per rule. Under the
default recursion limit of 1000 arrays nest up to about 118 levels deep; 40 levels
are safe. Deeper documents raise `RecursionError`.
"""

__all__ = [
    "GRAMMAR",
    "ValueBuilder",
    "parse_tree",
    "format_tree",
    "loads",
]

import logging
from typing import Any, List, Union

from parsimonious.exceptions import IncompleteParseError
from parsimonious.exceptions import ParseError as PegParseError
from parsimonious.grammar import Grammar
from parsimonious.nodes import Node, NodeVisitor

from jsonlike.errors import (
    ExhaustedAlternatives,
    ParseError,
    UnexpectedToken,
    UnterminatedLiteral,
    unexpected,
)
from jsonlike.util import decode, pretty_tree
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

log = logging.getLogger("jsonlike.peg")

GRAMMAR = Grammar(
    r"""
    document      = ws value ws
    value         = null / bool / number / string / array / object
    null          = "null"
    bool          = "true" / "false"
    number        = ~"-?[0-9]+" (fraction / !".")
    fraction      = "." digits
    digits        = ~"[0-9]+"
    string        = quote chars quote
    chars         = ~"[^\"]*"
    array         = open_bracket ws elements? ws "]"
    elements      = value (ws comma ws value)*
    object        = open_brace ws members ws "}"
    members       = pair (ws comma ws pair)*
    pair          = string ws colon ws value
    open_bracket  = "["
    open_brace    = "{"
    comma         = ","
    colon         = ":"
    quote         = "\""
    ws            = ~"[ \t\r\n]*"
    """
)

VALUES = ("null", "bool", "number", "string", "array", "object")

# What each rule expects to see first, for error messages
EXPECTED = {
    "document": " or ".join(VALUES),
    "value": " or ".join(VALUES),
    "null": "'null'",
    "bool": "'true' or 'false'",
    "number": "number",
    "fraction": "'.'",
    "digits": "digits",
    "array": "'['",
    "elements": " or ".join(VALUES),
    "object": "'{'",
    "members": "'\"'",
    "pair": "'\"'",
    "string": "'\"'",
    "quote": "'\"'",
    "open_bracket": "'['",
    "open_brace": "'{'",
    "comma": "','",
    "colon": "':'",
}

# Running out of input is reported as unterminated only inside these
_OPENING = ("[", "{", '"')

# Rules that span a whole value, as opposed to its punctuation
_NAMED = set(VALUES) | {"document", "value", "chars", "elements", "members", "pair"}


class ValueBuilder(NodeVisitor):
    """Convert a concrete parse tree of `GRAMMAR` into a value tree.

    There is a `visit_<rule>()` method for every rule that contributes to the value
    tree. The children of a node are visited first, their results are passed as
    `visited_children`.
    """

    grammar = GRAMMAR
    unwrapped_exceptions = (ParseError,)

    def visit_document(self, node: Node, visited_children: List[Any]) -> Value:
        _, v, _ = visited_children
        return v

    def visit_value(self, node: Node, visited_children: List[Any]) -> Value:
        return visited_children[0]

    def visit_null(self, node: Node, visited_children: List[Any]) -> Null:
        return Null()

    def visit_bool(self, node: Node, visited_children: List[Any]) -> Bool:
        return Bool(node.text == "true")

    def visit_number(self, node: Node, visited_children: List[Any]) -> Number:
        return make_number(node.text, node.start)

    def visit_string(self, node: Node, visited_children: List[Any]) -> String:
        _, chars, _ = node.children
        return String(chars.text)

    def visit_array(self, node: Node, visited_children: List[Any]) -> Array:
        _, _, elements, _, _ = visited_children
        # An optional that didn't match is visited as the bare node
        if isinstance(elements, list):
            return Array(elements[0])
        return Array()

    def visit_elements(self, node: Node, visited_children: List[Any]) -> List[Value]:
        first, rest = visited_children
        return [first] + [v for _, _, _, v in _repeated(rest)]

    def visit_object(self, node: Node, visited_children: List[Any]) -> Object:
        _, _, members, _, _ = visited_children
        return Object(members)

    def visit_members(self, node: Node, visited_children: List[Any]) -> List[Any]:
        first, rest = visited_children
        return [first] + [pair for _, _, _, pair in _repeated(rest)]

    def visit_pair(self, node: Node, visited_children: List[Any]) -> Any:
        key, _, _, _, v = visited_children
        return key.value, v

    def generic_visit(self, node: Node, visited_children: List[Any]) -> Any:
        return visited_children or node


def _repeated(visited: Any) -> List[Any]:
    """Return the visited matches of a `*` expression, which is visited as the bare
    node when there are none."""
    return visited if isinstance(visited, list) else []


def _translate(e: PegParseError, text: str) -> ParseError:
    """Translate a parsimonious error into a `ParseError`."""
    pos = max(e.pos, 0)
    if isinstance(e, IncompleteParseError):
        return UnexpectedToken(unexpected(text, pos, "end of input"), pos)
    name = getattr(e.expr, "name", "") or "value"
    msg = unexpected(text, pos, EXPECTED.get(name, name))
    if pos >= len(text) and text.lstrip(" \t\r\n")[:1] in _OPENING:
        return UnterminatedLiteral(msg, pos)
    elif name in ("document", "value", "elements"):
        return ExhaustedAlternatives(msg, pos, VALUES)
    else:
        return UnexpectedToken(msg, pos)


def parse_tree(s: str, rule: str = "document") -> Node:
    """Parse the text and return its concrete parse tree.

    Type: `(str, str) -> Node`

    Any rule of `GRAMMAR` can be used as the start symbol. The whole text must match
    the rule.

    Examples:

    ```pycon
    >>> tree = parse_tree('[1, "a"]', rule="array")
    >>> tree.expr_name, tree.start, tree.end
    ('array', 0, 8)

    ```
    """
    try:
        return GRAMMAR[rule].parse(s)
    except PegParseError as e:
        raise _translate(e, s).locate(s) from e


def _named_kids(node: Node) -> List[Node]:
    kids = []
    for child in node.children:
        if child.expr_name in _NAMED:
            kids.append(child)
        else:
            kids.extend(_named_kids(child))
    return kids


def format_tree(node: Node) -> str:
    """Return a pseudographic representation of the rules that make up a concrete
    parse tree, together with their spans.

    Examples:

    ```pycon
    >>> print(format_tree(parse_tree('{"hello" : "world"}', rule="object")))
    object(0, 19)
    `-- members(1, 18)
        `-- pair(1, 18)
            |-- string(1, 8)
            |   `-- chars(2, 7)
            `-- value(11, 18)
                `-- string(11, 18)
                    `-- chars(12, 17)

    ```
    """

    def show(n: Node) -> str:
        return "%s(%d, %d)" % (n.expr_name, n.start, n.end)

    return pretty_tree(node, _named_kids, show)


def loads(s: Union[str, bytes]) -> Value:
    """Parse a whole document into a value tree using the generated parser.

    Type: `(Union[str, bytes]) -> Value`

    It accepts the same documents and returns the same value trees as
    `jsonlike.document.loads()`. If the document is malformed, it raises a
    `ParseError` subclass with its (_line_, _column_) place filled in.

    Examples:

    ```pycon
    >>> loads('{"marks": [90, -80, 85.1]}').to_python()
    {'marks': [90, -80, 85.1]}

    ```
    """
    s = decode(s)
    tree = parse_tree(s)
    if log.isEnabledFor(logging.DEBUG):
        log.debug("concrete parse tree:\n%s" % format_tree(tree))
    try:
        return ValueBuilder().visit(tree)
    except ParseError as e:
        e.locate(s)
        raise
