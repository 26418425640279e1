import pytest

from arbitrary_number import Number
from display_format import InvalidFormatError, NumberLocale

class TestGeneral:

	@pytest.mark.parametrize("text, expected", [
		("0", "0"),
		("31", "31"),
		("-2.5", "-2.5"),
		("0x1F", "31"),
		("1e-5", "0.00001"),
		("1e-6", "1E-006"),
		("1e16", "10000000000000000"),
		("1e17", "1E+017"),
		("1e20", "1E+020"),
		("-0", "0"),
	])
	def test_default(self, text, expected):
		assert str(Number(text)) == expected

	def test_single_precision_padding(self):
		assert str(Number("1e20", significand_precision=24)) == "1E+20"
		assert str(Number("1e-6", significand_precision=24)) == "1E-06"

	def test_precision(self):
		assert format(Number("0.1"), "G15") == "0.1"
		assert format(Number("9.99999"), "G3") == "10"
		assert format(Number("0.1"), "G0") == format(Number("0.1"), "G17")

	def test_lowercase(self):
		assert format(Number("1e20"), "g") == "1e+020"

	def test_rounded_digits(self):
		assert str(Number(1).divide(3, 4)) == "0.325"

class TestExponential:

	def test_default_precision(self):
		assert format(Number("1234.5"), "E") == "1.234500E+003"

	def test_precision(self):
		assert format(Number("1234.5"), "e2") == "1.23e+003"
		assert format(Number("9.9996"), "e2") == "1.00e+001"
		assert format(Number("-0.5"), "e0") == "-5e-001"

	def test_zero(self):
		assert format(Number(0), "E") == "0.000000E+000"
		assert format(Number.NegativeZero, "e1") == "0.0e+000"

	def test_single_precision(self):
		assert format(Number("1e-6", significand_precision=24), "e") == "1.000000e-06"

class TestFixedPoint:

	@pytest.mark.parametrize("text, format_string, expected", [
		("1234.5", "F1", "1234.5"),
		("1234.5", "F", "1234.50"),
		("1234.5", "F0", "1234"),
		("0.125", "F2", "0.12"),
		("0.99609375", "F2", "1.00"),
		("-0.006", "F2", "-0.01"),
		("-0.001", "F2", "0.00"),
		("0", "F", "0.00"),
		("1e20", "F0", "100000000000000000000"),
	])
	def test_fixed(self, text, format_string, expected):
		assert format(Number(text), format_string) == expected

	def test_locale_digits(self):
		locale = NumberLocale(fixed_point_digits=3)
		assert Number("2.5").to_string("F", locale) == "2.500"

class TestLocale:

	def test_separator(self):
		comma = NumberLocale(decimal_separator=",")
		assert Number("2.5").to_string(locale=comma) == "2,5"
		assert Number("1234.5").to_string("E1", comma) == "1,2E+003"

	def test_specials(self):
		assert str(Number.NaN) == "NaN"
		assert str(Number.PositiveInfinity) == "Infinity"
		assert str(Number.NegativeInfinity) == "-Infinity"
		locale = NumberLocale(nan_symbol="nan", positive_infinity_symbol="inf", negative_infinity_symbol="-inf")
		assert Number.NaN.to_string(locale=locale) == "nan"
		assert Number.NegativeInfinity.to_string("F", locale) == "-inf"

	def test_special_round_trip(self):
		locale = NumberLocale(nan_symbol="nan", positive_infinity_symbol="inf", negative_infinity_symbol="-inf")
		assert Number("inf", locale=locale).is_positive_infinity
		assert Number("-inf", locale=locale).is_negative_infinity

class TestErrors:

	@pytest.mark.parametrize("format_string", ["X", "G100", "E-1", "Fx"])
	def test_bad_format(self, format_string):
		with pytest.raises(InvalidFormatError):
			Number(1).to_string(format_string)

	def test_bad_format_on_special(self):
		with pytest.raises(InvalidFormatError):
			format(Number.NaN, "X")

	def test_repr(self):
		assert repr(Number("2.5")) == "Number('2.5')"
		assert repr(Number.NaN) == "Number('NaN')"
