# -*- coding: utf-8 -*-

import unittest
from typing import Any, Optional

from jsonlike import document
from jsonlike.errors import (
    ExhaustedAlternatives,
    InvalidNumericLiteral,
    ParseError,
    UnexpectedToken,
    UnterminatedLiteral,
)
from jsonlike.parser import Parser, State
from jsonlike.value import Array, Bool, Float, Int, Null, Object, String


class PrimitivesTest(unittest.TestCase):
    def run_at(self, p: Parser[Any], text: str, pos: int = 0) -> Any:
        v, s = p.run(text, State(pos, 0))
        self.consumed = s.pos - pos
        return v

    def test_null(self) -> None:
        self.assertEqual(self.run_at(document.null, "null,"), Null())
        self.assertEqual(self.consumed, 4)

    def test_bool(self) -> None:
        self.assertEqual(self.run_at(document.boolean, "true]"), Bool(True))
        self.assertEqual(self.consumed, 4)
        self.assertEqual(self.run_at(document.boolean, "false}"), Bool(False))
        self.assertEqual(self.consumed, 5)

    def test_bool_failure(self) -> None:
        with self.assertRaises(UnexpectedToken) as ctx:
            self.run_at(document.boolean, "nope")
        self.assertEqual(ctx.exception.pos, 0)

    def test_number(self) -> None:
        self.assertEqual(self.run_at(document.number, "123.45 "), Float(123.45))
        self.assertEqual(self.consumed, 6)
        self.assertEqual(self.run_at(document.number, "-12,"), Int(-12))
        self.assertEqual(self.consumed, 3)

    def test_number_without_exponent(self) -> None:
        self.assertEqual(self.run_at(document.number, "1e5"), Int(1))
        self.assertEqual(self.consumed, 1)

    def test_number_needs_fraction_digits(self) -> None:
        with self.assertRaises(UnexpectedToken) as ctx:
            document.loads("1.")
        self.assertEqual(ctx.exception.pos, 2)
        self.assertEqual(
            ctx.exception.msg, "got unexpected end of input, expected: digits"
        )
        with self.assertRaises(ParseError):
            document.loads("-")

    def test_string(self) -> None:
        self.assertEqual(self.run_at(document.string, '"a b" x'), String("a b"))
        self.assertEqual(self.consumed, 5)
        self.assertEqual(self.run_at(document.string, '""'), String(""))

    def test_string_has_no_escapes(self) -> None:
        self.assertEqual(self.run_at(document.string, r'"a\"'), String("a\\"))

    def test_string_at_offset(self) -> None:
        self.assertEqual(self.run_at(document.string, 'x "y"', 2), String("y"))
        self.assertEqual(self.consumed, 3)

    def test_unterminated_string(self) -> None:
        with self.assertRaises(UnterminatedLiteral) as ctx:
            self.run_at(document.string, '"abc')
        self.assertEqual(ctx.exception.pos, 4)

    def test_spaces(self) -> None:
        self.assertEqual(self.run_at(document.spaces, " \t\r\n x"), " \t\r\n ")
        self.assertEqual(self.run_at(document.spaces, "x"), "")
        self.assertEqual(self.consumed, 0)

    def test_spaced(self) -> None:
        self.run_at(document.spaced(","), " ,\n 1")
        self.assertEqual(self.consumed, 4)


class DocumentTest(unittest.TestCase):
    def t(self, data: str, expected: Optional[object] = None) -> None:
        self.assertEqual(document.loads(data).to_python(), expected)

    def test_null(self) -> None:
        self.assertEqual(document.loads("null"), Null())

    def test_float(self) -> None:
        self.assertEqual(document.loads("123.45"), Float(123.45))
        self.assertEqual(document.loads("-123.45"), Float(-123.45))

    def test_array_of_ints(self) -> None:
        self.assertEqual(
            document.loads("[1, 2, 3]"), Array([Int(1), Int(2), Int(3)])
        )

    def test_mixed_array(self) -> None:
        self.assertEqual(
            document.loads('["a", null, 1]'), Array([String("a"), Null(), Int(1)])
        )

    def test_object(self) -> None:
        self.assertEqual(
            document.loads('{"name": "John Doe", "age": 30}'),
            Object({"name": String("John Doe"), "age": Int(30)}),
        )

    def test_invalid_object(self) -> None:
        with self.assertRaises(UnexpectedToken) as ctx:
            document.loads("{invalid}")
        self.assertEqual(ctx.exception.pos, 1)
        self.assertEqual(
            str(ctx.exception), "1,2: got unexpected token: 'i', expected: '\"'"
        )

    def test_empty_array(self) -> None:
        self.t("[]", [])
        self.t("[ \n ]", [])

    def test_empty_object_is_rejected(self) -> None:
        with self.assertRaises(UnexpectedToken):
            document.loads("{}")

    def test_nested(self) -> None:
        self.t("[1, 2, [3, 4, 5], 6]", [1, 2, [3, 4, 5], 6])
        self.t("[[[]]]", [[[]]])

    def test_whitespace(self) -> None:
        self.t(' \n{ "a" :[ 1 ,2 ] , "b":\tnull }\r\n', {"a": [1, 2], "b": None})

    def test_duplicate_keys(self) -> None:
        self.t('{"a": 1, "a": 2}', {"a": 2})

    def test_sample_document(self) -> None:
        self.t(
            """
            {
                "name": "John Doe",
                "age": 30,
                "is_student": false,
                "marks": [90, -80, 85.1],
                "address": {
                    "city": "New York",
                    "zip": 10001
                }
            }
        """,
            {
                "name": "John Doe",
                "age": 30,
                "is_student": False,
                "marks": [90, -80, 85.1],
                "address": {"city": "New York", "zip": 10001},
            },
        )

    def test_bytes(self) -> None:
        self.t('["ф"]'.encode("utf-8"), ["ф"])  # type: ignore

    def test_unknown_value(self) -> None:
        with self.assertRaises(ExhaustedAlternatives) as ctx:
            document.loads("[1, x]")
        self.assertEqual(ctx.exception.pos, 4)
        self.assertEqual(
            ctx.exception.alternatives,
            ("null", "bool", "number", "string", "array", "object"),
        )
        self.assertEqual(
            ctx.exception.msg,
            "got unexpected token: 'x', "
            "expected: null or bool or number or string or array or object",
        )

    def test_empty_document(self) -> None:
        with self.assertRaises(ExhaustedAlternatives) as ctx:
            document.loads("  ")
        self.assertEqual(ctx.exception.pos, 2)

    def test_missing_separator(self) -> None:
        with self.assertRaises(UnexpectedToken) as ctx:
            document.loads("[1 2]")
        self.assertEqual(ctx.exception.pos, 3)
        self.assertEqual(ctx.exception.msg, "got unexpected token: '2', expected: ','")

    def test_missing_colon(self) -> None:
        with self.assertRaises(UnexpectedToken) as ctx:
            document.loads('{"a" 1}')
        self.assertEqual(ctx.exception.msg, "got unexpected token: '1', expected: ':'")

    def test_unterminated(self) -> None:
        for data in ['"abc', "[1, 2", "[1,", "[", '{"a": 1', '{"a": [1, {"b": "c']:
            with self.subTest(data=data):
                with self.assertRaises(UnterminatedLiteral) as ctx:
                    document.loads(data)
                self.assertEqual(ctx.exception.pos, len(data))

    def test_trailing_content(self) -> None:
        with self.assertRaises(UnexpectedToken) as ctx:
            document.loads("[1]\n]")
        self.assertEqual(ctx.exception.place, (2, 1))
        self.assertEqual(
            ctx.exception.msg, "got unexpected token: ']', expected: end of input"
        )

    def test_exponent_is_trailing_content(self) -> None:
        with self.assertRaises(UnexpectedToken) as ctx:
            document.loads("1.5e10")
        self.assertEqual(ctx.exception.pos, 3)

    def test_integer_overflow(self) -> None:
        with self.assertRaises(InvalidNumericLiteral) as ctx:
            document.loads("[1,\n 99999999999999999999]")
        self.assertEqual(ctx.exception.pos, 5)
        self.assertEqual(ctx.exception.place, (2, 2))

    def test_very_long_integer(self) -> None:
        with self.assertRaises(InvalidNumericLiteral) as ctx:
            document.loads("1" * 5000)
        self.assertEqual(ctx.exception.pos, 0)
        with self.assertRaises(InvalidNumericLiteral) as ctx:
            document.loads("[" + "1" * 5000 + "]")
        self.assertEqual(ctx.exception.pos, 1)

    def test_float_overflow_in_array(self) -> None:
        with self.assertRaises(InvalidNumericLiteral) as ctx:
            document.loads("[1,\n " + "1" * 400 + ".0]")
        self.assertEqual(ctx.exception.place, (2, 2))

    def test_invalid_utf8(self) -> None:
        with self.assertRaises(UnexpectedToken) as ctx:
            document.loads(b'[1,\n "\xff"]')  # type: ignore
        self.assertEqual(ctx.exception.pos, 6)
        self.assertEqual(ctx.exception.place, (2, 3))
        self.assertEqual(
            str(ctx.exception), "2,3: cannot decode input as UTF-8: invalid start byte"
        )

    def test_nesting_depth(self) -> None:
        expected: Any = []
        for _ in range(39):
            expected = [expected]
        self.t("[" * 40 + "]" * 40, expected)

    def test_error_place(self) -> None:
        with self.assertRaises(ParseError) as ctx:
            document.loads('{\n  "a": tru\n}')
        self.assertEqual(ctx.exception.place, (2, 8))
