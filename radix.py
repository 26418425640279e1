"""
Digit tables and digit-string arithmetic in any radix
The primitives only see text: parsing and rendering both go through them, whatever the base
"""

digits: str = "0123456789ABCDEF"

class Radix:
	"A positional base: its digit alphabet and the letters marking it in literals"
	def __init__(self, radix: int, name: str, prefix: str = None, suffix: str = None):
		if not 1 < radix <= len(digits):
			raise ValueError("Base %d not supported" % radix)
		self.radix = radix
		self.name = name
		self.prefix = prefix
		self.suffix = suffix
	@property
	def alphabet(self) -> str:
		return digits[:self.radix]
	def is_valid_digit(self, c: str) -> bool:
		return len(c) == 1 and c.upper() in self.alphabet
	def to_value(self, c: str):
		"Value of digit c, None if c is not a digit of this base"
		if not self.is_valid_digit(c):
			return None
		return digits.index(c.upper())
	def to_digit(self, value: int) -> str:
		if not 0 <= value < self.radix:
			raise ValueError("%d is not a base %d digit value" % (value, self.radix))
		return digits[value]
	def __repr__(self):
		return "Radix(%d, %r)" % (self.radix, self.name)

Binary = Radix(2, "binary", prefix="b", suffix="B")
Octal = Radix(8, "octal", suffix="O")
Decimal = Radix(10, "decimal")
Hexadecimal = Radix(16, "hexadecimal", prefix="x", suffix="H")

def _callbacks(radix, is_digit, to_digit):
	if is_digit is None or to_digit is None:
		table = Radix(radix, "base %d" % radix)
		is_digit = is_digit or table.to_value
		to_digit = to_digit or table.to_digit
	return is_digit, to_digit

def _values(text, radix, is_digit):
	ret = []
	for c in text:
		value = is_digit(c)
		if value is None:
			raise ValueError("Invalid base %d digit %r in %r" % (radix, c, text))
		ret.append(value)
	return ret

def halve(text: str, radix: int, is_digit=None, to_digit=None):
	"""
	Long division of a digit string by two, most significant digit first
	Returns (quotient, carry) where carry is the remainder bit
	The quotient has no leading zeroes, "0" at least
	"""
	is_digit, to_digit = _callbacks(radix, is_digit, to_digit)
	quotient = ""
	carry = 0
	for value in _values(text, radix, is_digit):
		value += carry
		if quotient or value >= 2:
			quotient += to_digit(value // 2)
		carry = radix if value % 2 else 0
	return quotient or to_digit(0), carry != 0

def double_with_carry(text: str, radix: int, is_digit=None, to_digit=None, carry_in=False) -> str:
	"2*text + carry_in, one digit longer when it overflows"
	is_digit, to_digit = _callbacks(radix, is_digit, to_digit)
	ret = ""
	carry = 1 if carry_in else 0
	for value in reversed(_values(text, radix, is_digit)):
		value = 2 * value + carry
		if value >= radix:
			value -= radix
			carry = 1
		else:
			carry = 0
		ret = to_digit(value) + ret
	if carry:
		ret = to_digit(carry) + ret
	return ret

def increment(text: str, radix: int, is_digit=None, to_digit=None) -> str:
	is_digit, to_digit = _callbacks(radix, is_digit, to_digit)
	values = _values(text, radix, is_digit)
	i = len(values) - 1
	while i >= 0 and values[i] == radix - 1:
		values[i] = 0
		i -= 1
	if i < 0:
		values.insert(0, 1)
	else:
		values[i] += 1
	return "".join(to_digit(value) for value in values)

def decrement(text: str, radix: int, is_digit=None, to_digit=None) -> str:
	"text - 1, losing the leading zero a borrow leaves behind"
	is_digit, to_digit = _callbacks(radix, is_digit, to_digit)
	values = _values(text, radix, is_digit)
	if not any(values):
		raise ValueError("Cannot decrement %r below zero" % text)
	i = len(values) - 1
	while values[i] == 0:
		values[i] = radix - 1
		i -= 1
	values[i] -= 1
	if len(values) > 1 and values[0] == 0:
		del values[0]
	return "".join(to_digit(value) for value in values)

def round_to_nearest(text: str, radix: int, is_digit=None, to_digit=None, keep_trailing_zeroes=True) -> str:
	"""
	Round off the last digit of text, read as digits after an implicit point
	A last digit of exactly half the radix rounds down
	Rounding up digits that are all radix-1 carries out: "999" -> "100" ("1" without trailing zeroes)
	"""
	is_digit, to_digit = _callbacks(radix, is_digit, to_digit)
	if not text:
		raise ValueError("Cannot round an empty digit string")
	last = _values(text, radix, is_digit)[-1]
	kept = text[:-1]
	if 2 * last > radix:
		ret = increment(kept, radix, is_digit, to_digit) if kept else to_digit(1)
	else:
		ret = kept or to_digit(0)
	if not keep_trailing_zeroes:
		ret = ret.rstrip(to_digit(0)) or to_digit(0)
	return ret

def to_positional_base(i: int, b: int) -> str:
	if not 1 < b <= len(digits):
		raise ValueError("Base %d not supported" % b)
	if i == 0:
		return "0"
	sign = "-" if i < 0 else ""
	i = abs(i)
	ret = ""
	while i:
		ret = digits[i % b] + ret
		i //= b
	return sign + ret

def from_positional_base(s: str, b: int) -> int:
	if not 1 < b <= len(digits):
		raise ValueError("Base %d not supported" % b)
	table = Radix(b, "base %d" % b)
	if s.startswith("-"):
		return -from_positional_base(s[1:], b)
	ret = 0
	for value in _values(s, b, table.to_value):
		ret = ret * b + value
	return ret
