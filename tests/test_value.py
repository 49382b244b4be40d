# -*- coding: utf-8 -*-

import unittest

from jsonlike.errors import InvalidNumericLiteral
from jsonlike.value import (
    Array,
    Bool,
    Float,
    Int,
    Null,
    Number,
    Object,
    String,
    make_number,
    pformat,
)


class ValueTest(unittest.TestCase):
    def test_variants_are_part_of_equality(self) -> None:
        self.assertEqual(Int(1), Int(1))
        self.assertNotEqual(Int(1), Float(1.0))
        self.assertNotEqual(Bool(True), Int(1))
        self.assertNotEqual(String("null"), Null())
        self.assertEqual(Null(), Null())

    def test_numbers(self) -> None:
        self.assertIsInstance(Int(1), Number)
        self.assertIsInstance(Float(1.5), Number)
        self.assertEqual(Float(2.5).value, 2.5)

    def test_immutable(self) -> None:
        s = String("x")
        with self.assertRaises(AttributeError):
            s.value = "y"  # type: ignore
        arr = Array([Int(1)])
        with self.assertRaises(AttributeError):
            arr.items = ()  # type: ignore
        obj = Object({"a": Null()})
        with self.assertRaises(TypeError):
            obj.members["b"] = Null()  # type: ignore

    def test_array(self) -> None:
        arr = Array([Int(1), Null()])
        self.assertEqual(arr.items, (Int(1), Null()))
        self.assertEqual(len(arr), 2)
        self.assertEqual(arr[1], Null())
        self.assertEqual(list(arr), [Int(1), Null()])
        self.assertEqual(repr(arr), "Array((Int(1), Null()))")
        self.assertEqual(hash(arr), hash(Array([Int(1), Null()])))

    def test_object_last_duplicate_wins(self) -> None:
        obj = Object([("a", Int(1)), ("b", Null()), ("a", Int(2))])
        self.assertEqual(len(obj), 2)
        self.assertEqual(obj["a"], Int(2))
        self.assertIn("b", obj)
        self.assertEqual(sorted(obj), ["a", "b"])

    def test_object_order_is_not_significant(self) -> None:
        self.assertEqual(
            Object([("a", Int(1)), ("b", Int(2))]),
            Object([("b", Int(2)), ("a", Int(1))]),
        )

    def test_object_is_not_hashable(self) -> None:
        with self.assertRaises(TypeError):
            hash(Object())

    def test_to_python(self) -> None:
        tree = Object(
            {
                "name": String("John Doe"),
                "age": Int(43),
                "phones": Array([String("+44 1234567"), Null()]),
                "ok": Bool(False),
                "ratio": Float(0.5),
            }
        )
        self.assertEqual(
            tree.to_python(),
            {
                "name": "John Doe",
                "age": 43,
                "phones": ["+44 1234567", None],
                "ok": False,
                "ratio": 0.5,
            },
        )

    def test_make_number(self) -> None:
        self.assertEqual(make_number("123"), Int(123))
        self.assertEqual(make_number("-0"), Int(0))
        self.assertEqual(make_number("123.45"), Float(123.45))
        self.assertEqual(make_number("-123.45"), Float(-123.45))
        self.assertEqual(make_number("1.0"), Float(1.0))

    def test_make_number_range(self) -> None:
        self.assertEqual(make_number("9223372036854775807"), Int(2**63 - 1))
        self.assertEqual(make_number("-9223372036854775808"), Int(-(2**63)))
        with self.assertRaises(InvalidNumericLiteral) as ctx:
            make_number("-9223372036854775809", 5)
        self.assertEqual(ctx.exception.pos, 5)

    def test_make_number_too_many_digits(self) -> None:
        for literal in ["1" * 5000, "-" + "9" * 5000, "1" + "0" * 19]:
            with self.subTest(literal=literal[:20]):
                with self.assertRaises(InvalidNumericLiteral) as ctx:
                    make_number(literal, 3)
                self.assertEqual(ctx.exception.pos, 3)
        self.assertEqual(make_number("-" + "0" * 5000 + "42"), Int(-42))

    def test_make_number_float_overflow(self) -> None:
        with self.assertRaises(InvalidNumericLiteral):
            make_number("1" * 400 + ".0")

    def test_pformat(self) -> None:
        tree = Array([Int(1), Object({"a": Array([])}), String("x")])
        self.assertEqual(
            pformat(tree),
            """\
Array
|-- Int(1)
|-- Object
|   `-- a: Array
`-- String('x')""",
        )
