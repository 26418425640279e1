"""
Format specifiers for rendering numbers: [GgEeFf][0-9]{0,2}
	G: general, shortest form (precision 8 for significands of at most 24 bits, 17 otherwise)
	E: scientific with N fractional digits (6 by default)
	F: fixed-point with N fractional digits (the locale's digit count by default)
The letter's case is the case of the exponent letter in the output
"""
import enum

class InvalidFormatError(ValueError):
	pass

class FormatKind(enum.Enum):
	DEFAULT = "G"
	EXPONENTIAL = "E"
	FIXED_POINT = "F"

class NumberLocale:
	"The culture-dependent parts of a literal"
	def __init__(self, decimal_separator=".", nan_symbol="NaN", positive_infinity_symbol="Infinity",
				negative_infinity_symbol="-Infinity", fixed_point_digits=2):
		if len(decimal_separator) != 1:
			raise ValueError("decimal_separator must be a single character, not %r" % decimal_separator)
		self.decimal_separator = decimal_separator
		self.nan_symbol = nan_symbol
		self.positive_infinity_symbol = positive_infinity_symbol
		self.negative_infinity_symbol = negative_infinity_symbol
		self.fixed_point_digits = fixed_point_digits
	def __repr__(self):
		return "NumberLocale(%r, %r, %r, %r, %d)" % (self.decimal_separator, self.nan_symbol,
			self.positive_infinity_symbol, self.negative_infinity_symbol, self.fixed_point_digits)

InvariantLocale = NumberLocale()

def default_precision(significand_precision):
	"Significant digits of the G format for a significand of that many bits"
	return 8 if significand_precision <= 24 else 17

class DisplayFormat:
	def __init__(self, kind, uppercase, precision, locale=None):
		if not isinstance(kind, FormatKind):
			raise TypeError("kind must be FormatKind, not %r" % type(kind))
		if not 0 <= precision <= 99:
			raise InvalidFormatError("Precision %d is out of range [0, 99]" % precision)
		self._kind = kind
		self._uppercase = bool(uppercase)
		self._precision = precision
		self._locale = locale or InvariantLocale
	@property
	def kind(self):
		return self._kind
	@property
	def uppercase(self):
		return self._uppercase
	@property
	def precision(self):
		return self._precision
	@property
	def locale(self):
		return self._locale
	@property
	def exponent_character(self):
		return "E" if self._uppercase else "e"
	def __eq__(self, other):
		if not isinstance(other, DisplayFormat):
			return NotImplemented
		return (self._kind, self._uppercase, self._precision, self._locale) == \
			(other._kind, other._uppercase, other._precision, other._locale)
	def __hash__(self):
		return hash((self._kind, self._uppercase, self._precision))
	def __repr__(self):
		letter = self._kind.value if self._uppercase else self._kind.value.lower()
		return "DisplayFormat(%r)" % ("%s%d" % (letter, self._precision))

def parse_format(format_string=None, locale=None, significand_precision=53):
	if locale is None:
		locale = InvariantLocale
	if not format_string:
		format_string = FormatKind.DEFAULT.value
	letter, rest = format_string[0], format_string[1:]
	try:
		kind = FormatKind(letter.upper())
	except ValueError:
		raise InvalidFormatError("Invalid format specifier %r" % format_string) from None
	
	if kind is FormatKind.EXPONENTIAL:
		precision = 6
	elif kind is FormatKind.FIXED_POINT:
		precision = locale.fixed_point_digits
	else:
		precision = default_precision(significand_precision)
	
	if rest:
		if len(rest) > 2 or not all(c in "0123456789" for c in rest):
			raise InvalidFormatError("Invalid precision %r in format specifier %r" % (rest, format_string))
		if int(rest) or kind is not FormatKind.DEFAULT: # G0 is the default precision
			precision = int(rest)
	return DisplayFormat(kind, letter.isupper(), precision, locale)
