import pytest

from arithmetic import Arithmetic
from arbitrary_number import InvalidLiteralError, LiteralSplit, Number
from bitfield import BitField
from display_format import NumberLocale
from partition import PartitionKind

class TestEndToEnd:

	def test_zero(self):
		n = Number("0")
		assert n.is_zero
		assert str(n) == "0"

	def test_signed_binary_suffix(self):
		split = Number.parse("-1:B")
		assert split.is_valid
		assert split.canonical_text == "-1:B"
		assert split.value == -1
		assert Number("-1:B") == -1

	def test_real_with_exponent(self):
		split = Number.parse("1.0e10")
		assert split.is_valid
		assert split.significand_part == "1.0e"
		assert split.exponent_part == "10"
		assert split.value == 10**10

	def test_suffix_without_digits(self):
		with pytest.raises(InvalidLiteralError):
			Number(":H")
		split = Number.parse(":H")
		assert not split.is_valid
		assert split.value is None
		assert split.invalid_text == ":H"
		assert split.kind is None

	def test_hexadecimal_prefix(self):
		n = Number("0x1F")
		assert n == 31
		assert str(n) == "31"

class TestLiteralSplit:

	def test_discarded_prolog(self):
		split = Number.parse("01.2e3")
		assert split.discarded_prolog == "0"
		assert split.canonical_text == "1.2e3"
		assert split.value == Number("1.2e3")

	def test_trailing_garbage_keeps_value(self):
		split = Number.parse("0x1Fx")
		assert not split.is_valid
		assert split.kind is PartitionKind.RADIX_PREFIX
		assert split.canonical_text == "0x1F"
		assert split.invalid_text == "x"
		assert split.value == 31

	def test_strict_failure_carries_split(self):
		with pytest.raises(InvalidLiteralError) as excinfo:
			Number("123abc")
		assert excinfo.value.split.value == 123
		assert excinfo.value.split.invalid_text == "abc"
		assert "'abc'" in str(excinfo.value)

	def test_parts(self):
		split = Number.parse("  -007.50e-3")
		assert split.discarded_prolog == "  00"
		assert split.sign == "-"
		assert split.integer_text == "7"
		assert split.separator == "."
		assert split.fractional_text == "50"
		assert split.exponent_character == "e"
		assert split.exponent_sign == "-"
		assert split.exponent_text == "3"
		assert split.significand_part == "-7.50e"
		assert split.exponent_part == "-3"

	@pytest.mark.parametrize("text, diagnostic", [
		("0", "/0//"),
		("01.2e3", "0/1.2e/3/"),
		("123abc", "/123//abc"),
		("0x1Fx", "/0x1F//x"),
		(":H", "///:H"),
		(" NaN", " /NaN//"),
	])
	def test_diagnostic(self, text, diagnostic):
		assert Number.parse(text).diagnostic == diagnostic

	@pytest.mark.parametrize("text, whitespace, zeroes, source", [
		(" 0x001F", " ", "00", "0x001F"),
		("01.2e3", "", "0", "01.2e3"),
		("  -007.50e-3", "  ", "00", "-007.50e-3"),
		("-001:B", "", "00", "-001:B"),
		(" NaN", " ", "", "NaN"),
		("0x1Fx", "", "", "0x1F"),
		("1e+x", "", "", "1"),
		(":H", "", "", ""),
	])
	def test_source_text_rebuilds_input(self, text, whitespace, zeroes, source):
		split = Number.parse(text)
		assert split.leading_whitespace == whitespace
		assert split.discarded_zeroes == zeroes
		assert split.discarded_prolog == whitespace + zeroes
		assert split.source_text == source
		assert split.leading_whitespace + split.source_text + split.invalid_text == text

	def test_repr(self):
		assert repr(Number.parse("0")) == "LiteralSplit('0', valid=True, diagnostic='/0//')"
		assert isinstance(Number.parse("1"), LiteralSplit)

class TestValues:

	@pytest.mark.parametrize("text, value", [
		("0b101", 5),
		("17:O", 15),
		("ff:H", 255),
		("1B:H", 27),
		("  42", 42),
		("+7", 7),
		("1e5", 100000),
		("1E+2", 100),
		("2.5", 2.5),
		("-0.25", -0.25),
		(".5", 0.5),
		("5.", 5),
		("0x001F", 31),
	])
	def test_literal_values(self, text, value):
		assert Number(text) == value

	def test_specials(self):
		assert Number("NaN").is_nan
		assert Number("+Infinity").is_positive_infinity
		assert Number("-Infinity").is_negative_infinity
		for text in ["NaN", "Infinity", "-Infinity"]:
			n = Number(text)
			assert n.integer_field is BitField.Empty
			assert n.fractional_field is BitField.Empty
			assert n.exponent_field is BitField.Empty

	def test_fields(self):
		n = Number("5.25")
		assert n.integer_field == BitField.from_int(5)
		assert n.fractional_field == BitField([0, 1])
		assert int(n.exponent_field) == 0
		assert not n.is_significand_negative
		assert not n.is_exponent_negative

	def test_field_accessors_copy(self):
		n = Number("5")
		field = n.integer_field
		field.set_bit(10)
		assert n == 5

	def test_negative_exponent(self):
		n = Number("1e-3")
		assert n.is_exponent_negative
		assert int(n.exponent_field) == 3
		assert str(n) == "0.001"

	def test_zero_exponent_has_no_sign(self):
		assert not Number("1e-0").is_exponent_negative

	def test_negative_zero(self):
		n = Number("-0")
		assert n.is_zero
		assert n.is_significand_negative
		assert str(n) == "0"

	def test_rejects_trailing_whitespace(self):
		with pytest.raises(InvalidLiteralError):
			Number("42 ")

	def test_locale(self):
		comma = NumberLocale(decimal_separator=",")
		assert Number("1,5", locale=comma) == 1.5
		with pytest.raises(InvalidLiteralError):
			Number("1,5")

	def test_precision_recorded(self):
		n = Number("1", significand_precision=24, exponent_precision=8)
		assert n.significand_precision == 24
		assert n.exponent_precision == 8

	def test_bad_precision(self):
		with pytest.raises(ValueError):
			Number("1", significand_precision=0)

class TestTruncation:

	def test_integer_bits_dropped(self):
		n = Number("4294967297", significand_precision=8)
		field = n.integer_field
		assert field.significant_bits == 8
		assert field.shift_bits == 25
		assert int(n) == 2**32
		assert Arithmetic.flags.inexact

	def test_long_integer_literal(self):
		n = Number("1" + "0" * 2000)
		assert n.integer_field.significant_bits == 53
		assert Arithmetic.flags.inexact
		assert Number("9.99e1999") < n < Number("1e2000")

	def test_long_radix_literal(self):
		n = Number("0x" + "F" * 500, significand_precision=8)
		assert n.integer_field.significant_bits == 8
		assert n.integer_field.shift_bits == 4 * 500 - 8
		assert n == 255 * 2**(4 * 500 - 8)

	def test_exact_literal_is_not_inexact(self):
		Number("0.5")
		Number("123456789")
		assert not Arithmetic.flags.inexact

	def test_fraction_stops_at_budget(self):
		assert Number("0.1", significand_precision=4) == Number("0.09375")
		assert Arithmetic.flags.inexact

	def test_leading_zero_bits_are_free(self):
		# 0.1 and 0.001 both keep 53 significant bits
		n = Number("0.001")
		assert len(n.fractional_field) == 9 + 53

	def test_infinite_precision(self):
		big = 123456789012345678901234567890
		assert Number(str(big)) != big
		Arithmetic.enable_infinite_precision = True
		assert Number(str(big)) == big
		assert int(Number(str(big))) == big

	def test_infinite_precision_fraction(self):
		assert Number("0.3125", significand_precision=2) == 0.25
		Arithmetic.reset()
		Arithmetic.enable_infinite_precision = True
		assert Number("0.3125", significand_precision=2) == 0.3125
		assert not Arithmetic.flags.inexact

class TestOtherSources:

	def test_int(self):
		assert Number(31) == 31
		assert Number(-7).is_significand_negative
		assert Number(0).is_zero

	def test_float(self):
		assert Number(2.5) == 2.5
		assert Number(float("nan")).is_nan
		assert Number(float("inf")).is_positive_infinity
		assert Number(float("-inf")).is_negative_infinity
		n = Number(-0.0)
		assert n.is_zero and n.is_significand_negative

	def test_copy(self):
		n = Number("2.5")
		assert Number(n) == n
		assert Number(n, significand_precision=1) == 2

	def test_unsupported(self):
		with pytest.raises(TypeError):
			Number([1])

	def test_singletons(self):
		assert Number.NaN.is_nan
		assert Number.PositiveInfinity.is_positive_infinity
		assert Number.NegativeInfinity.is_negative_infinity
		assert Number.Zero.is_zero
		assert Number.NegativeZero.is_significand_negative
