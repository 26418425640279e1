"""
Arbitrary precision numbers read from text literals
A finite number is (-1)**sign * (I + F) * 10**(+-E), where
	I is the integer field (bit k weighs 2**k)
	F is the fractional field (bit k weighs 2**-(k+1))
	E is the exponent field, a decimal exponent
"""
import logging
import math
import sys
from fractions import Fraction

from arithmetic import Arithmetic, Rounding, DEFAULT_SIGNIFICAND_PRECISION, DEFAULT_EXPONENT_PRECISION, DEFAULT_ROUNDING
from bitfield import BitField
from display_format import FormatKind, InvariantLocale, parse_format
from partition import PartitionKind, SpecialValue, select_partition
from radix import Decimal, double_with_carry, halve, round_to_nearest, from_positional_base, to_positional_base

logger = logging.getLogger(__name__)

class InvalidLiteralError(ValueError):
	def __init__(self, split):
		self.split = split
		if split.invalid_text and split.invalid_text != split.text:
			msg = "Invalid number literal %r: unexpected %r" % (split.text, split.invalid_text)
		else:
			msg = "Invalid number literal %r" % split.text
		super().__init__(msg)

class UnorderedComparisonError(ArithmeticError):
	pass

def _precision(value, default):
	if value is None:
		return default
	if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
		raise ValueError("Precision must be a positive integer, not %r" % (value,))
	return value

def _integer_to_field(text, radix, precision, unbounded):
	"""
	Digits of an integer to a field holding its highest precision bits
	The bits below them are dropped into shift_bits, as repeated decrease_precision would
	Returns (field, whether a set bit was dropped)
	"""
	value = from_positional_base(text, radix.radix)
	shift = 0 if unbounded else max(0, value.bit_length() - precision)
	return BitField.from_int(value >> shift, shift), bool(value & ((1 << shift) - 1))

def _fraction_to_field(text, budget, integer_bits, unbounded):
	"""
	Decimal digits after the point to bits, 1/2 first, by doubling: a carry out is the next bit
	Stops when the fraction runs out or the significand holds budget significant bits
	(the leading zero bits of a number below 1 do not count)
	"""
	field = BitField()
	text = text.rstrip("0")
	if unbounded:
		budget = max(budget, integer_bits + 4 * len(text))
	used = integer_bits
	bit_index = 0
	while text and used < budget:
		doubled = double_with_carry(text, 10)
		carry = len(doubled) > len(text)
		if carry:
			doubled = doubled[1:]
		field.set_bit(bit_index, carry)
		bit_index += 1
		if carry or used:
			used += 1
		text = doubled.rstrip("0")
	if not field.significant_bits:
		field.set_zero()
	return field, bool(text)

def _fraction_bits_to_field(value, length):
	"The length-bit fraction value / 2**length as a fractional field"
	if not length:
		ret = BitField()
		ret.set_zero()
		return ret
	# reversed twice: the first character of the binary string is bit 0
	return BitField(format(value, "0%db" % length)[::-1])

def _round_quotient(value, rounding, negative):
	"""
	Round a non-negative Fraction to an integer
	negative is the sign of the number value is the magnitude of, for the directed modes
	Returns (integer, inexact)
	"""
	floor = value.numerator // value.denominator
	rest = value - floor
	if not rest:
		return floor, False
	if rounding is Rounding.TO_NEAREST:
		up = rest > Fraction(1, 2) or rest == Fraction(1, 2) and floor % 2 == 1 # ties to even
	elif rounding is Rounding.TOWARD_ZERO:
		up = False
	elif rounding is Rounding.AWAY_FROM_ZERO:
		up = True
	elif rounding is Rounding.TOWARD_POSITIVE_INFINITY:
		up = not negative
	else:
		up = negative
	return floor + int(up), True

def _round_digits(digits, count):
	"""
	The first count digits of 0.digits, rounded with round_to_nearest
	Returns (digits, carried), where carried means rounding produced a new leading 1 (count+1 digits)
	"""
	if len(digits) <= count:
		return digits, False
	tail = digits[count]
	if tail == "5" and digits[count+1:].strip("0"): # more than half: not a tie
		tail = "6"
	rounded = round_to_nearest("0" + digits[:count] + tail, 10)
	if rounded[0] == "1":
		return rounded, True
	return rounded[1:], False

_HASH_MODULUS = sys.hash_info.modulus

def _decimal_order(value):
	"floor(log10(value)) of a positive Fraction"
	# from the bit lengths, within one of the answer
	ret = math.floor((value.numerator.bit_length() - value.denominator.bit_length()) * 0.30103)
	while value < Fraction(10)**ret:
		ret -= 1
	while value >= Fraction(10)**(ret + 1):
		ret += 1
	return ret

def _order_estimate(significand, exponent):
	"log10 of a nonzero significand * 10**exponent, to within one"
	bits = abs(significand.numerator).bit_length() - significand.denominator.bit_length()
	return exponent + bits * 0.30103

def _guard_digits(significand, p):
	"""
	Decimal orders below significand past which an addend cannot move it across a rounding boundary at p bits
	Only the addend's sign then matters
	"""
	bits = abs(significand.numerator).bit_length() + significand.denominator.bit_length()
	return int((2 * (p + bits) + 64) * 0.30103) + 1

def _compare_digits(a, b):
	"Compare two positive 0.digits * 10**exponent values, as (digits, exponent) pairs"
	a_digits, a_exponent = a
	b_digits, b_exponent = b
	if a_exponent != b_exponent:
		return 1 if a_exponent > b_exponent else -1
	length = max(len(a_digits), len(b_digits))
	a_digits, b_digits = a_digits.ljust(length, "0"), b_digits.ljust(length, "0")
	if a_digits == b_digits:
		return 0
	return 1 if a_digits > b_digits else -1

def _scientific(first, rest, exponent, display, padding):
	ret = first
	if rest:
		ret += display.locale.decimal_separator + rest
	return ret + display.exponent_character + ("-" if exponent < 0 else "+") + str(abs(exponent)).zfill(padding)

def _format_general(digits, exponent, precision, display, padding):
	if not digits:
		return "0", True
	digits, carried = _round_digits(digits, precision)
	if carried:
		exponent += 1
	digits = digits.rstrip("0")
	separator = display.locale.decimal_separator
	if -5 < exponent <= precision:
		if exponent <= 0:
			return "0" + separator + "0" * -exponent + digits, False
		integer, fraction = digits[:exponent].ljust(exponent, "0"), digits[exponent:]
		if fraction:
			return integer + separator + fraction, False
		return integer, False
	return _scientific(digits[0], digits[1:], exponent - 1, display, padding), False

def _format_exponential(digits, exponent, precision, display, padding):
	if not digits:
		return _scientific("0", "0" * precision, 0, display, padding), True
	digits, carried = _round_digits(digits, precision + 1)
	if carried:
		exponent += 1
	digits = digits.ljust(precision + 1, "0")[:precision + 1]
	return _scientific(digits[0], digits[1:], exponent - 1, display, padding), False

def _format_fixed(digits, exponent, precision, display):
	count = exponent + precision
	if digits and count >= 0:
		digits, carried = _round_digits(digits, count)
		if carried:
			exponent += 1
			count += 1
		digits = digits.ljust(count, "0")[:count]
	else:
		digits = ""
	if exponent > 0:
		integer, fraction = digits[:exponent], digits[exponent:]
	else:
		integer, fraction = "0", ("0" * -exponent + digits)[:precision]
	fraction = fraction.ljust(precision, "0")
	ret = integer or "0"
	if precision:
		ret += display.locale.decimal_separator + fraction
	return ret, not digits.strip("0")

def _coerce(value):
	"value as a Number, NotImplemented for types numbers do not mix with"
	if isinstance(value, Number):
		return value
	if isinstance(value, int):
		return Number(value, significand_precision=max(1, abs(value).bit_length()))
	if isinstance(value, float):
		return Number(value, significand_precision=53)
	return NotImplemented

def _operand(value):
	ret = _coerce(value)
	if ret is NotImplemented:
		raise TypeError("Unsupported operand type %r" % type(value).__name__)
	return ret

class LiteralSplit:
	"""
	What reading a literal found, without failing on bad text:
		discarded_prolog: leading whitespace and zeroes left out of the literal
		significand_part, exponent_part: the recognized literal ("1.0e" and "10" for "1.0e10")
		invalid_text: the rest, which no grammar accepts
		value: the number the recognized part stands for (None if nothing was recognized)
	The zeroes follow any sign or radix prefix, so the text itself splits as
	leading_whitespace + source_text + invalid_text, source_text holding the literal with its zeroes
	"""
	def __init__(self, partitions, value):
		self.text = partitions.text
		self.is_valid = partitions.is_valid
		self.value = value
		partition = partitions.preferred
		if partition is None:
			self.kind = None
			self.discarded_prolog = self.leading_whitespace = self.discarded_zeroes = self.source_text = ""
			self.sign = self.prefix = self.integer_text = self.separator = self.fractional_text = ""
			self.exponent_character = self.exponent_sign = self.exponent_text = self.suffix = ""
			self.significand_part = self.exponent_part = ""
			self.invalid_text = self.text
			return
		self.kind = partition.kind
		self.discarded_prolog = partition.discarded_prolog
		self.leading_whitespace = partition.leading_whitespace
		self.discarded_zeroes = partition.discarded_zeroes
		self.source_text = partition.source_text
		self.sign = partition.sign_text
		self.prefix = partition.prefix_text
		self.integer_text = partition.integer_text
		self.separator = partition.separator_text
		self.fractional_text = partition.fractional_text
		self.exponent_character = partition.exponent_character
		self.exponent_sign = partition.exponent_sign
		self.exponent_text = partition.exponent_text
		self.suffix = partition.suffix_text
		self.significand_part = partition.significand_text
		self.exponent_part = partition.exponent_part
		self.invalid_text = partition.invalid_text
	@property
	def canonical_text(self):
		return self.significand_part + self.exponent_part
	@property
	def diagnostic(self):
		return "%s/%s/%s/%s" % (self.discarded_prolog, self.significand_part, self.exponent_part, self.invalid_text)
	def __repr__(self):
		return "LiteralSplit(%r, valid=%s, diagnostic=%r)" % (self.text, self.is_valid, self.diagnostic)

class Number:
	def __init__(self, value=0, significand_precision=None, exponent_precision=None, rounding=None, locale=None):
		p = _precision(significand_precision, Arithmetic.significand_precision)
		q = _precision(exponent_precision, Arithmetic.exponent_precision)
		rounding = rounding or Arithmetic.rounding
		if isinstance(value, Number):
			if value.is_finite and not value.is_zero and significand_precision is not None and p != value._significand_precision:
				significand, exponent = value._parts()
				value = Number._from_exact(significand, p, q, rounding, exponent=exponent)
			self._assign(value)
		elif isinstance(value, str):
			split = Number.parse(value, p, q, rounding, locale)
			if not split.is_valid:
				raise InvalidLiteralError(split)
			self._assign(split.value)
		elif isinstance(value, int):
			self._assign(Number._from_exact(Fraction(value), p, q, rounding))
		elif isinstance(value, float):
			if math.isnan(value):
				self._assign(Number._special(SpecialValue.NAN, p, q, rounding))
			elif math.isinf(value):
				self._assign(Number._special(SpecialValue.POSITIVE_INFINITY if value > 0 else SpecialValue.NEGATIVE_INFINITY, p, q, rounding))
			else:
				self._assign(Number._from_exact(Fraction(value), p, q, rounding, math.copysign(1, value) < 0))
		else:
			raise TypeError("Cannot make a Number from %r" % type(value).__name__)
	def _assign(self, other):
		self._nan = other._nan
		self._positive_infinity = other._positive_infinity
		self._negative_infinity = other._negative_infinity
		self._negative = other._negative
		self._exponent_negative = other._exponent_negative
		self._integer = other._integer.clone()
		self._fraction = other._fraction.clone()
		self._exponent = other._exponent.clone()
		self._significand_precision = other._significand_precision
		self._exponent_precision = other._exponent_precision
		self._rounding = other._rounding
	
	@classmethod
	def _from_fields(cls, negative, integer, fraction, exponent_negative, exponent, p, q, rounding):
		ret = cls.__new__(cls)
		ret._nan = ret._positive_infinity = ret._negative_infinity = False
		ret._negative = negative
		ret._integer = integer
		ret._fraction = fraction
		# no sign on a zero exponent
		ret._exponent_negative = exponent_negative and exponent.highest_bit() >= 0
		ret._exponent = exponent
		ret._significand_precision = p
		ret._exponent_precision = q
		ret._rounding = rounding
		return ret
	@classmethod
	def _special(cls, special, p=DEFAULT_SIGNIFICAND_PRECISION, q=DEFAULT_EXPONENT_PRECISION, rounding=DEFAULT_ROUNDING):
		ret = cls.__new__(cls)
		ret._nan = special is SpecialValue.NAN
		ret._positive_infinity = special is SpecialValue.POSITIVE_INFINITY
		ret._negative_infinity = special is SpecialValue.NEGATIVE_INFINITY
		ret._negative = ret._negative_infinity
		ret._exponent_negative = False
		ret._integer = ret._fraction = ret._exponent = BitField.Empty
		ret._significand_precision = p
		ret._exponent_precision = q
		ret._rounding = rounding
		return ret
	@classmethod
	def _zero(cls, negative=False, p=DEFAULT_SIGNIFICAND_PRECISION, q=DEFAULT_EXPONENT_PRECISION, rounding=DEFAULT_ROUNDING):
		integer, fraction, exponent = BitField(), BitField(), BitField()
		integer.set_zero()
		fraction.set_zero()
		exponent.set_zero()
		return cls._from_fields(negative, integer, fraction, False, exponent, p, q, rounding)
	@classmethod
	def _from_exact(cls, value, p, q, rounding, negative=None, exponent=0, exact=True):
		"""
		The number nearest to value * 10**exponent with p significand bits, value being a Fraction
		negative gives the sign of a zero value
		Below 1 the exponent is the smallest bringing the significand to 1 or more;
		above, the given exponent is kept while the significand stays at 1 or more
		exact=False marks value as a stand-in that must be rounded even with infinite precision
		"""
		if value == 0:
			return cls._zero(bool(negative), p, q, rounding)
		negative = value < 0
		magnitude = abs(value)
		order = _decimal_order(magnitude) + exponent
		if order < 0:
			target = order
		else:
			target = max(0, min(exponent, order))
		if target < 0 and (-target).bit_length() > q:
			logger.debug("%s * 10**%d underflows a %d-bit exponent", value, exponent, q)
			Arithmetic.raise_flag("inexact")
			return cls._zero(negative, p, q, rounding)
		if target.bit_length() > q:
			logger.debug("%s * 10**%d overflows a %d-bit exponent", value, exponent, q)
			Arithmetic.raise_flag("inexact")
			special = SpecialValue.NEGATIVE_INFINITY if negative else SpecialValue.POSITIVE_INFINITY
			return cls._special(special, p, q, rounding)
		scaled = magnitude * Fraction(10)**(exponent - target)

		precision = p
		denominator = scaled.denominator
		if exact and Arithmetic.enable_infinite_precision and not denominator & (denominator - 1):
			precision = max(p, scaled.numerator.bit_length())
		length = (scaled.numerator // scaled.denominator).bit_length()
		if length >= precision:
			shift, fraction_bits = length - precision, 0
			mantissa, inexact = _round_quotient(scaled / 2**shift, rounding, negative)
		else:
			shift, fraction_bits = 0, precision - length
			mantissa, inexact = _round_quotient(scaled * 2**fraction_bits, rounding, negative)
		if mantissa.bit_length() > precision: # rounded up to the next power of two
			mantissa >>= 1
			if fraction_bits:
				fraction_bits -= 1
			else:
				shift += 1
		if inexact:
			Arithmetic.raise_flag("inexact")
		integer = BitField.from_int(mantissa >> fraction_bits, shift)
		fraction = _fraction_bits_to_field(mantissa & ((1 << fraction_bits) - 1), fraction_bits)
		return cls._from_fields(negative, integer, fraction, target < 0, BitField.from_int(abs(target)), p, q, rounding)
	@classmethod
	def _from_partition(cls, partition, p, q, rounding):
		if partition.kind is PartitionKind.SPECIAL:
			return cls._special(partition.special, p, q, rounding)
		unbounded = Arithmetic.enable_infinite_precision
		radix = Decimal if partition.kind is PartitionKind.REAL else partition.radix
		integer, lost = _integer_to_field(partition.integer_text or "0", radix, p, unbounded)
		integer_bits = integer.significant_bits if integer.highest_bit() >= 0 else 0
		fraction, lost_fraction = _fraction_to_field(partition.fractional_text, p, integer_bits, unbounded)
		exponent, lost_exponent = _integer_to_field(partition.exponent_text or "0", Decimal, q, unbounded)
		if lost or lost_fraction or lost_exponent:
			logger.debug("Literal %r truncated to %d significand bits and %d exponent bits", partition.text, p, q)
			Arithmetic.raise_flag("inexact")
		return cls._from_fields(partition.sign_text == "-", integer, fraction, partition.exponent_sign == "-", exponent, p, q, rounding)
	
	@classmethod
	def parse(cls, text, significand_precision=None, exponent_precision=None, rounding=None, locale=None):
		"Read text as far as any grammar accepts it, and report the split instead of failing"
		p = _precision(significand_precision, Arithmetic.significand_precision)
		q = _precision(exponent_precision, Arithmetic.exponent_precision)
		rounding = rounding or Arithmetic.rounding
		partitions = select_partition(text, locale)
		value = None
		if partitions.preferred is not None:
			value = cls._from_partition(partitions.preferred, p, q, rounding)
		return LiteralSplit(partitions, value)
	
	@property
	def is_nan(self):
		return self._nan
	@property
	def is_positive_infinity(self):
		return self._positive_infinity
	@property
	def is_negative_infinity(self):
		return self._negative_infinity
	@property
	def is_infinity(self):
		return self._positive_infinity or self._negative_infinity
	@property
	def is_finite(self):
		return not (self._nan or self._positive_infinity or self._negative_infinity)
	@property
	def is_zero(self):
		return self.is_finite and self._integer.highest_bit() < 0 and self._fraction.highest_bit() < 0
	@property
	def is_integer(self):
		if not self.is_finite:
			return False
		significand, exponent = self._parts()
		if exponent >= 0:
			# the denominator is a power of two, 10**exponent brings that many twos
			return significand.denominator.bit_length() - 1 <= exponent
		if -exponent > abs(significand.numerator).bit_length():
			return not significand
		return (significand * Fraction(10)**exponent).denominator == 1
	@property
	def is_significand_negative(self):
		return self._negative
	@property
	def is_exponent_negative(self):
		return self._exponent_negative
	@property
	def significand_precision(self):
		return self._significand_precision
	@property
	def exponent_precision(self):
		return self._exponent_precision
	@property
	def rounding(self):
		return self._rounding
	@property
	def integer_field(self):
		return self._integer.clone()
	@property
	def fractional_field(self):
		return self._fraction.clone()
	@property
	def exponent_field(self):
		return self._exponent.clone()
	
	def _significand(self):
		"I + F"
		ret = Fraction(int(self._integer))
		bits = "".join("1" if self._fraction.get_bit(i) else "0" for i in range(self._fraction.shift_bits + len(self._fraction)))
		if bits:
			ret += Fraction(int(bits, 2), 2**len(bits))
		return ret
	def _exponent_value(self):
		ret = int(self._exponent)
		return -ret if self._exponent_negative else ret
	def _parts(self):
		"(signed I + F, decimal exponent): the value without ever raising 10 to the exponent"
		if not self.is_finite:
			raise ValueError("%r has no exact value" % self)
		ret = self._significand()
		return (-ret if self._negative else ret), self._exponent_value()
	def _integral_value(self):
		"""
		Exact value for rounding to an integer, or +-1/4 for magnitudes far below 1/2
		(every rounding mode takes those to the same integer as 1/4)
		"""
		significand, exponent = self._parts()
		if significand and -exponent > abs(significand.numerator).bit_length() + 1:
			return Fraction(-1 if significand < 0 else 1, 4)
		return significand * Fraction(10)**exponent
	def _decimal_digits(self):
		"""
		The exact magnitude as (digits, exponent), meaning 0.digits * 10**exponent
		digits has no leading or trailing zeroes, and is empty for zero
		"""
		integer_digits = ""
		if self._integer.highest_bit() >= 0:
			integer_digits = to_positional_base(int(self._integer), 10)
		fraction_digits = ""
		for position in range(self._fraction.shift_bits + len(self._fraction) - 1, -1, -1):
			# (bit + 0.digits) / 2, one more digit each time
			quotient, _ = halve(("1" if self._fraction.get_bit(position) else "0") + fraction_digits + "0", 10)
			fraction_digits = quotient.zfill(len(fraction_digits) + 1)
		digits = integer_digits + fraction_digits
		stripped = digits.lstrip("0")
		exponent = len(integer_digits) + self._exponent_value() - (len(digits) - len(stripped))
		digits = stripped.rstrip("0")
		if not digits:
			return "", 0
		return digits, exponent
	
	def compare(self, other):
		"-1, 0 or 1 as self is less than, equal to or greater than other"
		other = _operand(other)
		if self._nan or other._nan:
			raise UnorderedComparisonError("NaN is not ordered")
		return self._compare(other)
	def _compare(self, other):
		if self._positive_infinity:
			return 0 if other._positive_infinity else 1
		if self._negative_infinity:
			return 0 if other._negative_infinity else -1
		if other._positive_infinity:
			return -1
		if other._negative_infinity:
			return 1
		if self.is_zero:
			if other.is_zero:
				return 0
			return 1 if other._negative else -1
		if other.is_zero:
			return -1 if self._negative else 1
		if self._negative != other._negative:
			return -1 if self._negative else 1
		if self._exponent_negative == other._exponent_negative and self._exponent.compare(other._exponent) == 0:
			ret = self._integer.compare(other._integer) or self._fraction.compare_from_lowest(other._fraction)
		else:
			ret = _compare_digits(self._decimal_digits(), other._decimal_digits())
		return -ret if self._negative else ret
	def __eq__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return other
		if self._nan or other._nan:
			return False
		return self._compare(other) == 0
	def __ne__(self, other):
		ret = self.__eq__(other)
		if ret is NotImplemented:
			return ret
		return not ret
	def __lt__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return other
		return not (self._nan or other._nan) and self._compare(other) < 0
	def __le__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return other
		return not (self._nan or other._nan) and self._compare(other) <= 0
	def __gt__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return other
		return not (self._nan or other._nan) and self._compare(other) > 0
	def __ge__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return other
		return not (self._nan or other._nan) and self._compare(other) >= 0
	def __hash__(self):
		if self._nan:
			return object.__hash__(self)
		if self.is_infinity:
			return hash(float("-inf") if self._negative_infinity else float("inf"))
		# hash(Fraction) computed modulo the hash modulus, with 10**exponent taken there too
		significand, exponent = self._parts()
		numerator, denominator = abs(significand.numerator), significand.denominator
		if exponent >= 0:
			numerator *= pow(10, exponent, _HASH_MODULUS)
		else:
			denominator *= pow(10, -exponent, _HASH_MODULUS)
		ret = numerator % _HASH_MODULUS * pow(denominator, -1, _HASH_MODULUS) % _HASH_MODULUS
		if significand < 0:
			ret = -ret
		return -2 if ret == -1 else ret
	
	def _target(self, significand_precision, rounding, default=None):
		p = _precision(significand_precision, default or Arithmetic.significand_precision)
		return p, rounding or Arithmetic.rounding
	def _result(self, value, p, rounding, negative=None, exponent=0, exact=True):
		return Number._from_exact(value, p, Arithmetic.exponent_precision, rounding, negative, exponent, exact)
	def _nan_result(self, p, rounding):
		return Number._special(SpecialValue.NAN, p, Arithmetic.exponent_precision, rounding)
	def _infinity_result(self, negative, p, rounding):
		special = SpecialValue.NEGATIVE_INFINITY if negative else SpecialValue.POSITIVE_INFINITY
		return Number._special(special, p, Arithmetic.exponent_precision, rounding)
	def _with_sign(self, negative):
		if self._nan:
			return self
		if self.is_infinity:
			special = SpecialValue.NEGATIVE_INFINITY if negative else SpecialValue.POSITIVE_INFINITY
			return Number._special(special, self._significand_precision, self._exponent_precision, self._rounding)
		ret = Number.__new__(Number)
		ret._assign(self)
		ret._negative = negative
		return ret
	
	def negate(self, significand_precision=None, rounding=None):
		ret = self._with_sign(not self._negative)
		if significand_precision is None or not ret.is_finite or ret.is_zero:
			return ret
		p, rounding = self._target(significand_precision, rounding)
		significand, exponent = ret._parts()
		return self._result(significand, p, rounding, exponent=exponent)
	def abs(self, significand_precision=None, rounding=None):
		ret = self._with_sign(False)
		if significand_precision is None or not ret.is_finite or ret.is_zero:
			return ret
		p, rounding = self._target(significand_precision, rounding)
		significand, exponent = ret._parts()
		return self._result(significand, p, rounding, exponent=exponent)
	
	def __add_helper__(self, other, p, rounding):
		if self._nan or other._nan or \
			(self.is_infinity and other.is_infinity and self._negative != other._negative):
			return self._nan_result(p, rounding)
		elif self.is_infinity:
			return self._infinity_result(self._negative, p, rounding)
		elif other.is_infinity:
			return self._infinity_result(other._negative, p, rounding)
		else: # both finite
			return None
	def add(self, other, significand_precision=None, rounding=None):
		other = _operand(other)
		p, rounding = self._target(significand_precision, rounding)
		ret = self.__add_helper__(other, p, rounding)
		if ret is not None: # Special case happened
			return ret
		x, x_exponent = self._parts()
		y, y_exponent = other._parts()
		if not x or not y:
			value, exponent = (y, y_exponent) if not x else (x, x_exponent)
		else:
			if _order_estimate(x, x_exponent) < _order_estimate(y, y_exponent):
				x, x_exponent, y, y_exponent = y, y_exponent, x, x_exponent
			guard = _guard_digits(x, p)
			if _order_estimate(x, x_exponent) - _order_estimate(y, y_exponent) > guard + 2:
				# y is too small to count, except for the direction it rounds x in
				value, exponent = x + abs(x) * Fraction(1 if y > 0 else -1, 10**guard), x_exponent
			else:
				exponent = min(x_exponent, y_exponent)
				value = x * 10**(x_exponent - exponent) + y * 10**(y_exponent - exponent)
		if value == 0:
			# -0 + -0 is -0, x + -x is +0 unless rounding toward -inf
			negative = self._negative and other._negative or \
				rounding is Rounding.TOWARD_NEGATIVE_INFINITY and self._negative != other._negative
			return Number._zero(negative, p, Arithmetic.exponent_precision, rounding)
		return self._result(value, p, rounding, exponent=exponent)
	def subtract(self, other, significand_precision=None, rounding=None):
		return self.add(_operand(other).negate(), significand_precision, rounding)
	
	def __mul_helper__(self, other, p, rounding):
		if self._nan or other._nan or \
			(self.is_infinity and other.is_zero) or \
			(self.is_zero and other.is_infinity):
			return self._nan_result(p, rounding)
		elif self.is_infinity or other.is_infinity:
			return self._infinity_result(self._negative ^ other._negative, p, rounding)
		elif self.is_zero or other.is_zero:
			return Number._zero(self._negative ^ other._negative, p, Arithmetic.exponent_precision, rounding)
		else: # both finite
			return None
	def multiply(self, other, significand_precision=None, rounding=None):
		other = _operand(other)
		p, rounding = self._target(significand_precision, rounding)
		ret = self.__mul_helper__(other, p, rounding)
		if ret is not None:
			return ret
		x, x_exponent = self._parts()
		y, y_exponent = other._parts()
		return self._result(x * y, p, rounding, exponent=x_exponent + y_exponent)
	
	def __div_helper__(self, other, p, rounding):
		negative = self._negative ^ other._negative
		if self._nan or other._nan or \
			(self.is_infinity and other.is_infinity) or \
			(self.is_zero and other.is_zero):
			return self._nan_result(p, rounding)
		elif self.is_infinity:
			return self._infinity_result(negative, p, rounding)
		elif other.is_infinity or self.is_zero:
			return Number._zero(negative, p, Arithmetic.exponent_precision, rounding)
		elif other.is_zero:
			Arithmetic.raise_flag("divide_by_zero")
			return self._infinity_result(negative, p, rounding)
		else: # both finite
			return None
	def divide(self, other, significand_precision=None, rounding=None):
		other = _operand(other)
		p, rounding = self._target(significand_precision, rounding)
		ret = self.__div_helper__(other, p, rounding)
		if ret is not None:
			return ret
		x, x_exponent = self._parts()
		y, y_exponent = other._parts()
		return self._result(x / y, p, rounding, exponent=x_exponent - y_exponent)
	
	def remainder(self, other, significand_precision=None, rounding=None):
		"self - n*other, n being self/other rounded to the nearest integer, ties to even"
		other = _operand(other)
		p, rounding = self._target(significand_precision, rounding)
		if self._nan or other._nan or self.is_infinity or other.is_zero:
			return self._nan_result(p, rounding)
		x, x_exponent = self._parts()
		if other.is_infinity or self.is_zero:
			return self._result(x, p, rounding, self._negative, x_exponent)
		y, y_exponent = other._parts()
		shift = x_exponent - y_exponent
		if shift < 0 and _order_estimate(x, x_exponent) < _order_estimate(y, y_exponent) - 1:
			# |x| < |y|/2, n is 0
			return self._result(x, p, rounding, self._negative, x_exponent)
		# |x/y| is numerator/modulus, only its residue modulo 2*modulus matters
		numerator = abs(x.numerator) * y.denominator
		modulus = x.denominator * abs(y.numerator)
		if shift >= 0:
			residue = numerator * pow(10, shift, 2 * modulus) % (2 * modulus)
		else:
			modulus *= 10**-shift
			residue = numerator % (2 * modulus)
		odd, rest = divmod(residue, modulus)
		if 2 * rest > modulus or 2 * rest == modulus and odd: # ties to even
			rest -= modulus
		value = Fraction(rest, modulus) * abs(y)
		return self._result(-value if self._negative else value, p, rounding, self._negative, y_exponent)

	def sqrt(self, significand_precision=None, rounding=None):
		"Square root, rounded once; NaN below zero, and -0 for -0"
		p, rounding = self._target(significand_precision, rounding)
		if self._nan or self._negative_infinity or self._negative and not self.is_zero:
			return self._nan_result(p, rounding)
		if self.is_zero:
			return Number._zero(self._negative, p, Arithmetic.exponent_precision, rounding)
		if self.is_infinity:
			return self._infinity_result(False, p, rounding)
		significand, exponent = self._parts()
		if exponent % 2:
			significand, exponent = significand * 10, exponent - 1
		# significand is numerator / 2**twos, its root is found scaled by 2**k with p+3 bits or more
		twos = significand.denominator.bit_length() - 1
		numerator = significand.numerator
		k = max((twos + 1) // 2, (2 * p + 6 + twos - numerator.bit_length() + 1) // 2, 0)
		scaled = numerator << (2 * k - twos)
		root = math.isqrt(scaled)
		if root * root == scaled:
			return self._result(Fraction(root, 2**k), p, rounding, exponent=exponent // 2)
		# the root lies strictly between root and root+1, which round alike at p bits
		return self._result(Fraction(2 * root + 1, 2**(k + 1)), p, rounding, exponent=exponent // 2, exact=False)

	def shift_left(self, shift, significand_precision=None, rounding=None):
		"self * 2**shift"
		if not isinstance(shift, int):
			raise TypeError("Shift must be int, not %r" % type(shift).__name__)
		p, rounding = self._target(significand_precision, rounding, self._significand_precision)
		if self._nan:
			return self._nan_result(p, rounding)
		if self.is_infinity or self.is_zero:
			return self._with_sign(self._negative)
		significand, exponent = self._parts()
		return self._result(significand * Fraction(2)**shift, p, rounding, exponent=exponent)
	def shift_right(self, shift, significand_precision=None, rounding=None):
		if not isinstance(shift, int):
			raise TypeError("Shift must be int, not %r" % type(shift).__name__)
		return self.shift_left(-shift, significand_precision, rounding)
	
	def __bitwise_helper__(self, other, p, rounding):
		if not (self.is_integer and other.is_integer):
			return self._nan_result(p, rounding)
		return None
	def bitwise_and(self, other, significand_precision=None, rounding=None):
		"Two's complement AND of integer values, NaN for anything else"
		other = _operand(other)
		p, rounding = self._target(significand_precision, rounding)
		ret = self.__bitwise_helper__(other, p, rounding)
		if ret is not None:
			return ret
		return self._result(Fraction(int(self) & int(other)), p, rounding)
	def bitwise_or(self, other, significand_precision=None, rounding=None):
		other = _operand(other)
		p, rounding = self._target(significand_precision, rounding)
		ret = self.__bitwise_helper__(other, p, rounding)
		if ret is not None:
			return ret
		return self._result(Fraction(int(self) | int(other)), p, rounding)
	def bitwise_xor(self, other, significand_precision=None, rounding=None):
		other = _operand(other)
		p, rounding = self._target(significand_precision, rounding)
		ret = self.__bitwise_helper__(other, p, rounding)
		if ret is not None:
			return ret
		return self._result(Fraction(int(self) ^ int(other)), p, rounding)
	
	def round_to_integer(self, rounding=None):
		"Nearest integer in the direction of rounding, as a Number"
		rounding = rounding or Arithmetic.rounding
		if not self.is_finite or self.is_zero or self.is_integer:
			return self
		value = self._integral_value()
		n, _ = _round_quotient(abs(value), rounding, value < 0)
		return self._result(Fraction(-n if value < 0 else n), self._significand_precision, rounding, self._negative)
	def __int__(self):
		if self._nan:
			raise ValueError("Cannot convert NaN to integer")
		if self.is_infinity:
			raise OverflowError("Cannot convert infinity to integer")
		return math.trunc(self._integral_value())
	def __float__(self):
		if self._nan:
			return float("nan")
		if self.is_infinity:
			return float("-inf") if self._negative_infinity else float("inf")
		significand, exponent = self._parts()
		order = _order_estimate(significand, exponent) if significand else 0
		if order > 400:
			ret = math.inf
		elif order < -400:
			ret = 0.0
		else:
			try:
				ret = abs(float(significand * Fraction(10)**exponent))
			except OverflowError:
				ret = math.inf
		return -ret if self._negative else ret
	def __trunc__(self):
		return int(self)
	def __floor__(self):
		if not self.is_finite:
			return int(self)
		return math.floor(self._integral_value())
	def __ceil__(self):
		if not self.is_finite:
			return int(self)
		return math.ceil(self._integral_value())
	def __round__(self, ndigits=None):
		if ndigits is None:
			if not self.is_finite:
				return int(self)
			return round(self._integral_value())
		if not self.is_finite or ndigits >= 0 and self.is_integer:
			return self
		significand, exponent = self._parts()
		if significand and _order_estimate(significand, exponent) < -(ndigits + 2):
			value = Fraction(0)
		else:
			value = round(significand * Fraction(10)**exponent, ndigits)
		return self._result(value, self._significand_precision, Arithmetic.rounding, self._negative)
	def __bool__(self):
		return not self.is_zero
	
	def __neg__(self):
		return self.negate()
	def __pos__(self):
		return self
	def __abs__(self):
		return self.abs()
	def __add__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return other
		return self.add(other)
	def __sub__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return other
		return self.subtract(other)
	def __mul__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return other
		return self.multiply(other)
	def __truediv__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return other
		return self.divide(other)
	def __rtruediv__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return other
		return other.divide(self)
	def __lshift__(self, other):
		if not isinstance(other, int):
			return NotImplemented
		return self.shift_left(other)
	def __rshift__(self, other):
		if not isinstance(other, int):
			return NotImplemented
		return self.shift_right(other)
	def __and__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return other
		return self.bitwise_and(other)
	def __or__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return other
		return self.bitwise_or(other)
	def __xor__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return other
		return self.bitwise_xor(other)
	
	# Commutative right-side operators
	__radd__ = __add__
	__rmul__ = __mul__
	__rand__ = __and__
	__ror__ = __or__
	__rxor__ = __xor__
	
	# Anticommutative right-side operators
	__rsub__ = lambda s, o: -s + o
	
	def to_string(self, format_string=None, locale=None):
		locale = locale or InvariantLocale
		display = parse_format(format_string, locale, self._significand_precision)
		if self._nan:
			return locale.nan_symbol
		if self._positive_infinity:
			return locale.positive_infinity_symbol
		if self._negative_infinity:
			return locale.negative_infinity_symbol
		digits, exponent = self._decimal_digits()
		padding = 2 if self._significand_precision <= 24 else 3
		if display.kind is FormatKind.EXPONENTIAL:
			text, is_zero = _format_exponential(digits, exponent, display.precision, display, padding)
		elif display.kind is FormatKind.FIXED_POINT:
			text, is_zero = _format_fixed(digits, exponent, display.precision, display)
		else:
			text, is_zero = _format_general(digits, exponent, display.precision, display, padding)
		if self._negative and not is_zero:
			return "-" + text
		return text
	def __format__(self, format_spec):
		return self.to_string(format_spec or None)
	def __str__(self):
		return self.to_string()
	def __repr__(self):
		return "Number(%r)" % self.to_string()

Number.NaN = Number._special(SpecialValue.NAN)
Number.PositiveInfinity = Number._special(SpecialValue.POSITIVE_INFINITY)
Number.NegativeInfinity = Number._special(SpecialValue.NEGATIVE_INFINITY)
Number.Zero = Number._zero()
Number.NegativeZero = Number._zero(True)
