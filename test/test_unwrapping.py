"""
Value extraction tests (resolve, extract, required, describe).

Scope
- Validate string-like, integer and floating extraction rules (end-to-end
  parsing, hexadecimal rejection, range checks).
- Validate fixed-size aggregates (lists, numpy arrays) and heterogeneous tuples.
- Validate rejection of unsupported type specifications.

Conventions
- Test method names follow CamelCase per project convention.
"""
import math
import unittest
from unittest import TestCase

import numpy

from argot import (
    extract,
    resolve,
    required,
    describe,
    Required,
    ConversionError,
    ArityMismatchError,
    HexadecimalLiteralError,
    NumericOverflowError,
    FaultCode,
)


class TestTextExtraction(TestCase):
    """Behavioral tests for string-like specifications."""

    def testTokenIsReturnedVerbatim(self):
        self.assertEqual(extract(str, ["hello"]), "hello")
        self.assertEqual(extract(str, ["-x"]), "-x")

    def testPrototypeValueSelectsString(self):
        self.assertEqual(extract("default", [" spaced "]), " spaced ")

    def testNumpyStringType(self):
        value = extract(numpy.str_, ["abc"])
        self.assertIsInstance(value, numpy.str_)
        self.assertEqual(value, "abc")

    def testRequiresExactlyOneToken(self):
        with self.assertRaises(ArityMismatchError):
            extract(str, [])
        with self.assertRaises(ArityMismatchError):
            extract(str, ["a", "b"])


class TestIntegerExtraction(TestCase):
    """Behavioral tests for integer specifications."""

    def testPlainInt(self):
        self.assertEqual(extract(int, ["300"]), 300)
        self.assertEqual(extract(int, ["-42"]), -42)
        self.assertEqual(extract(int, ["+7"]), 7)

    def testPythonIntIsUnbounded(self):
        self.assertEqual(extract(int, ["123456789012345678901234567890"]), 123456789012345678901234567890)

    def testOverflowForEightBitSigned(self):
        with self.assertRaises(NumericOverflowError) as context:
            extract(numpy.int8, ["300"])
        self.assertEqual(context.exception.code, FaultCode.NUMERIC_OVERFLOW)

    def testSameTokenFitsThirtyTwoBits(self):
        value = extract(numpy.int32, ["300"])
        self.assertIsInstance(value, numpy.int32)
        self.assertEqual(value, 300)

    def testRangeBoundaries(self):
        self.assertEqual(extract(numpy.int8, ["127"]), 127)
        self.assertEqual(extract(numpy.int8, ["-128"]), -128)
        with self.assertRaises(NumericOverflowError):
            extract(numpy.int8, ["128"])
        with self.assertRaises(NumericOverflowError):
            extract(numpy.int8, ["-129"])

    def testUnsignedRejectsNegatives(self):
        with self.assertRaises(NumericOverflowError):
            extract(numpy.uint8, ["-1"])
        self.assertEqual(extract(numpy.uint64, ["18446744073709551615"]), numpy.iinfo(numpy.uint64).max)

    def testOverflowIsConversionAndOverflowError(self):
        with self.assertRaises(ConversionError):
            extract(numpy.int16, ["40000"])
        with self.assertRaises(OverflowError):
            extract(numpy.int16, ["40000"])

    def testHexadecimalRejected(self):
        for spec in (int, numpy.uint32, numpy.int64):
            with self.subTest(spec=spec):
                with self.assertRaises(HexadecimalLiteralError):
                    extract(spec, ["0x1"])
        with self.assertRaises(HexadecimalLiteralError):
            extract(int, ["0X1F"])
        with self.assertRaises(HexadecimalLiteralError):
            extract(int, ["-0x10"])

    def testTrailingCharactersRejected(self):
        for token in ("12abc", "12 ", " 12", "1_000", "", "1.0", "--1", "١٢"):
            with self.subTest(token=token):
                with self.assertRaises(ConversionError):
                    extract(int, [token])

    def testOverlongTokenIsConversionFault(self):
        with self.assertRaises(ConversionError):
            extract(int, ["1" * 5000])
        with self.assertRaises(NumericOverflowError):
            extract(numpy.int64, ["1" * 5000])
        with self.assertRaises(NumericOverflowError):
            extract([numpy.int8], ["-" + "9" * 5000])

    def testPrototypeValueSelectsType(self):
        self.assertIsInstance(extract(numpy.int16(0), ["5"]), numpy.int16)
        self.assertEqual(extract(0, ["5"]), 5)

    def testRoundTripWithinRange(self):
        for spec in (numpy.int8, numpy.uint8, numpy.int16, numpy.uint16, numpy.int32, numpy.uint32, numpy.int64):
            info = numpy.iinfo(spec)
            for value in (info.min, 0, info.max):
                with self.subTest(spec=spec, value=value):
                    self.assertEqual(extract(spec, [str(value)]), value)


class TestFloatingExtraction(TestCase):
    """Behavioral tests for floating specifications."""

    def testPlainFloat(self):
        self.assertEqual(extract(float, ["2.5"]), 2.5)
        self.assertEqual(extract(float, ["-.5"]), -0.5)
        self.assertEqual(extract(float, ["1e3"]), 1000.0)
        self.assertEqual(extract(float, ["7"]), 7.0)
        self.assertEqual(extract(1.3, ["3."]), 3.0)

    def testSpecialValues(self):
        self.assertEqual(extract(float, ["inf"]), math.inf)
        self.assertEqual(extract(float, ["-Infinity"]), -math.inf)
        self.assertTrue(math.isnan(extract(float, ["nan"])))

    def testOverflowForDouble(self):
        with self.assertRaises(NumericOverflowError):
            extract(float, ["1e400"])

    def testOverflowForSingle(self):
        with self.assertRaises(NumericOverflowError):
            extract(numpy.float32, ["1e39"])
        value = extract(numpy.float32, ["3.5"])
        self.assertIsInstance(value, numpy.float32)
        self.assertEqual(value, numpy.float32(3.5))

    def testMalformedRejected(self):
        for token in ("1e", "abc", "1.5x", " 1.5", "1,5", "1_0.0", "", "e5", "."):
            with self.subTest(token=token):
                with self.assertRaises(ConversionError):
                    extract(float, [token])

    def testHexadecimalRejected(self):
        with self.assertRaises(HexadecimalLiteralError):
            extract(float, ["0x1p3"])


class TestAggregateExtraction(TestCase):
    """Behavioral tests for lists, arrays and tuples."""

    def testListOfIntegers(self):
        self.assertEqual(extract([int, int], ["1", "2"]), [1, 2])
        self.assertEqual(extract([0, 0], ["3", "4"]), [3, 4])

    def testListOfStrings(self):
        self.assertEqual(extract(["tiger", "auroch"], ["a", "b"]), ["a", "b"])

    def testExactCountRequired(self):
        with self.assertRaises(ArityMismatchError):
            extract([int, int], ["1"])
        with self.assertRaises(ArityMismatchError):
            extract([int, int], ["1", "2", "3"])

    def testElementFailureFailsAggregate(self):
        with self.assertRaises(ConversionError) as context:
            extract([int, int], ["1", "x"])
        self.assertTrue(context.exception.message.startswith("second value"))
        self.assertEqual(context.exception.options["index"], 2)

    def testElementFaultFamilyIsKept(self):
        with self.assertRaises(NumericOverflowError):
            extract([numpy.int8], ["300"])

    def testNumpyArray(self):
        value = extract(numpy.zeros(2, dtype=numpy.int16), ["1", "2"])
        self.assertIsInstance(value, numpy.ndarray)
        self.assertEqual(value.dtype, numpy.int16)
        self.assertEqual(value.tolist(), [1, 2])

    def testNumpyArrayRangeChecked(self):
        with self.assertRaises(NumericOverflowError):
            extract(numpy.zeros(2, dtype=numpy.int16), ["1", "70000"])

    def testNumpyArrayOfStrings(self):
        value = extract(numpy.array(["tiger", "auroch"]), ["elephant", "ox"])
        self.assertEqual(value.tolist(), ["elephant", "ox"])

    def testHeterogeneousTuple(self):
        self.assertEqual(extract(("gasket", 4, 1.3), ["a", "5", "2.5"]), ("a", 5, 2.5))
        self.assertEqual(extract((str, int, float), ["a", "5", "2.5"]), ("a", 5, 2.5))

    def testTupleArity(self):
        with self.assertRaises(ArityMismatchError):
            extract((str, int), ["a"])

    def testTupleElementFailure(self):
        with self.assertRaises(ConversionError):
            extract((str, int, float), ["a", "five", "2.5"])

    def testNestedRequiredIsUnwrapped(self):
        self.assertEqual(extract(required((int, int)), ["1", "2"]), (1, 2))


class TestSpecifications(TestCase):
    """Behavioral tests for resolve/required/describe."""

    def testUnsupportedSpecificationsRaise(self):
        for spec in (bool, True, None, {}, object, numpy.zeros((2, 2)), numpy.bool_):
            with self.subTest(spec=spec):
                with self.assertRaises(TypeError):
                    resolve(spec)

    def testResolveReturnsCallable(self):
        self.assertEqual(resolve(int)(("9",)), 9)

    def testDtypeSpecification(self):
        self.assertIsInstance(extract(numpy.dtype(numpy.uint16), ["9"]), numpy.uint16)

    def testRequiredSentinel(self):
        sentinel = required(int)
        self.assertIsInstance(sentinel, Required)
        self.assertIs(sentinel.spec, int)
        self.assertFalse(sentinel)
        self.assertEqual(repr(sentinel), "required(int)")

    def testRequiredRejectsUnsupported(self):
        with self.assertRaises(TypeError):
            required(None)

    def testRequiredIsFinal(self):
        with self.assertRaises(TypeError):
            type("Sub", (Required,), {})

    def testDescribe(self):
        self.assertEqual(describe(int), "int")
        self.assertEqual(describe((str, 0)), "(str, int)")
        self.assertEqual(describe([numpy.int8]), "[int8]")
        self.assertEqual(describe(numpy.zeros(3, dtype=numpy.float32)), "float32[3]")


if __name__ == '__main__':
    unittest.main()
