"""
Literal grammars, fed one character at a time in lock-step over the same text:
	special  := ws* '+'? (NaN | +Infinity | -Infinity)
	real     := ws* sign? (digits ('.' digits?)? | '.' digits) (('e'|'E') sign? digits)?
	prefixed := ws* '0' ('b' binDigits | 'x' hexDigits)
	suffixed := ws* sign? digits ':' ('B' | 'O' | 'H')
The partition that got furthest before failing is the preferred reading of the text
"""
import enum
import logging

from display_format import InvariantLocale
from radix import Binary, Octal, Decimal, Hexadecimal

logger = logging.getLogger(__name__)

class PartitionKind(enum.Enum):
	SPECIAL = "special"
	REAL = "real"
	RADIX_PREFIX = "radix prefix"
	RADIX_SUFFIX = "radix suffix"

class SpecialValue(enum.Enum):
	NAN = "NaN"
	POSITIVE_INFINITY = "+Infinity"
	NEGATIVE_INFINITY = "-Infinity"

class State(enum.Enum):
	LEADING_WHITESPACE = 0
	SIGN = 1
	LEADING_ZEROES = 2
	INTEGER = 3
	FRACTION = 4
	EXPONENT = 5
	PREFIX_ZERO = 6
	PREFIX = 7
	COLON = 8
	SUFFIX = 9
	TOKEN = 10
	DONE = 11

class TextPartition:
	"One grammar's attempt at reading text, as index cursors into it (-1 when unset)"
	def __init__(self, text, kind, locale=None, radix=None, special=None):
		self.text = text
		self.kind = kind
		self.locale = locale or InvariantLocale
		self.radix = radix or Decimal
		self.special = special
		if kind is PartitionKind.SPECIAL:
			if special is None:
				raise ValueError("A special value partition needs the value it reads")
			self.token = {
				SpecialValue.NAN: self.locale.nan_symbol,
				SpecialValue.POSITIVE_INFINITY: self.locale.positive_infinity_symbol,
				SpecialValue.NEGATIVE_INFINITY: self.locale.negative_infinity_symbol,
			}[special]
		else:
			self.token = None
		if kind is PartitionKind.RADIX_PREFIX and not self.radix.prefix or \
			kind is PartitionKind.RADIX_SUFFIX and not self.radix.suffix:
			raise ValueError("%r has no %s" % (self.radix, kind.value))
		
		self.state = State.LEADING_WHITESPACE
		self.last_leading_space_index = -1
		self.sign_index = -1
		self.first_digit_index = -1
		self.first_integer_index = -1
		self.last_integer_index = -1
		self.separator_index = -1
		self.first_fractional_index = -1
		self.last_fractional_index = -1
		self.exponent_index = -1
		self.exponent_sign_index = -1
		self.first_exponent_index = -1
		self.last_exponent_index = -1
		self.prefix_index = -1
		self.suffix_index = -1
		self.token_index = -1
		self.token_position = 0
		self.first_invalid_index = -1
	
	def feed(self, index, c):
		if self.state is State.DONE:
			return
		if self.kind is PartitionKind.SPECIAL:
			self._feed_special(index, c)
		elif self.kind is PartitionKind.REAL:
			self._feed_real(index, c)
		elif self.kind is PartitionKind.RADIX_PREFIX:
			self._feed_prefix(index, c)
		else:
			self._feed_suffix(index, c)
	def finish(self):
		"End of text: close the open spans, or fail"
		state = self.state
		end = len(self.text)
		if state is State.DONE:
			return
		if state in (State.LEADING_ZEROES, State.INTEGER) and self.kind is not PartitionKind.RADIX_SUFFIX:
			self.last_integer_index = end
			self.state = State.DONE
		elif state is State.FRACTION:
			self.last_fractional_index = end
			if self._has_digits():
				self.state = State.DONE
			else:
				self._invalid(0)
		elif state is State.EXPONENT:
			if self.first_exponent_index < 0:
				self._drop_exponent()
			else:
				self.last_exponent_index = end
				self.state = State.DONE
		elif state is State.TOKEN and self.token_position == len(self.token):
			self.state = State.DONE
		elif state is State.SUFFIX:
			self.state = State.DONE
		else:
			self._invalid(0)
	
	def _invalid(self, index):
		self.first_invalid_index = index
		self.state = State.DONE
	def _is_separator(self, c):
		return c == "." or c == self.locale.decimal_separator
	def _has_digits(self):
		if self.first_integer_index >= 0:
			return True
		return self.separator_index >= 0 and self.last_fractional_index > self.first_fractional_index
	def _start_digits(self, index, c):
		self.first_digit_index = index
		self.first_integer_index = index
		self.state = State.LEADING_ZEROES if c == "0" else State.INTEGER
	def _drop_exponent(self):
		"An exponent marker without digits is not part of the literal"
		index = self.exponent_index
		self.exponent_index = -1
		self.exponent_sign_index = -1
		self._invalid(index)
	
	def _feed_special(self, index, c):
		if self.state is State.LEADING_WHITESPACE:
			if c.isspace():
				self.last_leading_space_index = index
				return
			if c == "+" and self.special is SpecialValue.POSITIVE_INFINITY and not self.token.startswith("+"):
				self.sign_index = index
				self.state = State.SIGN
				return
			self.state = State.SIGN
		if self.state is State.SIGN:
			if c == self.token[0]:
				self.token_index = index
				self.token_position = 1
				self.state = State.TOKEN
			else:
				self._invalid(0)
		elif self.token_position == len(self.token):
			self._invalid(index)
		elif c == self.token[self.token_position]:
			self.token_position += 1
		else:
			self._invalid(0)
	
	def _feed_real(self, index, c):
		state = self.state
		if state is State.LEADING_WHITESPACE:
			if c.isspace():
				self.last_leading_space_index = index
				return
			if c in "+-":
				self.sign_index = index
				self.state = State.SIGN
				return
			state = State.SIGN
		if state is State.SIGN:
			if self.radix.is_valid_digit(c):
				self._start_digits(index, c)
			elif self._is_separator(c):
				self.separator_index = index
				self.first_fractional_index = index + 1
				self.state = State.FRACTION
			else:
				self._invalid(0)
		elif state in (State.LEADING_ZEROES, State.INTEGER):
			if self.radix.is_valid_digit(c):
				if state is State.LEADING_ZEROES:
					# the newest zero stands in for the integer part until a nonzero digit shows up
					self.first_integer_index = index
					if c != "0":
						self.state = State.INTEGER
				return
			self.last_integer_index = index
			if self._is_separator(c):
				self.separator_index = index
				self.first_fractional_index = index + 1
				self.state = State.FRACTION
			elif c in "eE":
				self.exponent_index = index
				self.state = State.EXPONENT
			else:
				self._invalid(index)
		elif state is State.FRACTION:
			if self.radix.is_valid_digit(c):
				return
			self.last_fractional_index = index
			if not self._has_digits():
				self._invalid(0)
			elif c in "eE":
				self.exponent_index = index
				self.state = State.EXPONENT
			else:
				self._invalid(index)
		else: # exponent
			if c in "+-" and index == self.exponent_index + 1:
				self.exponent_sign_index = index
			elif self.radix.is_valid_digit(c):
				if self.first_exponent_index < 0:
					self.first_exponent_index = index
			elif self.first_exponent_index < 0:
				self._drop_exponent()
			else:
				self.last_exponent_index = index
				self._invalid(index)
	
	def _feed_prefix(self, index, c):
		state = self.state
		if state is State.LEADING_WHITESPACE:
			if c.isspace():
				self.last_leading_space_index = index
			elif c == "0":
				self.state = State.PREFIX_ZERO
			else:
				self._invalid(0)
		elif state is State.PREFIX_ZERO:
			if c == self.radix.prefix:
				self.prefix_index = index
				self.state = State.PREFIX
			else:
				self._invalid(0)
		elif state is State.PREFIX:
			if self.radix.is_valid_digit(c):
				self._start_digits(index, c)
			else:
				self._invalid(0)
		elif self.radix.is_valid_digit(c):
			if state is State.LEADING_ZEROES:
				self.first_integer_index = index
				if c != "0":
					self.state = State.INTEGER
		else:
			self.last_integer_index = index
			self._invalid(index)
	
	def _feed_suffix(self, index, c):
		state = self.state
		if state is State.LEADING_WHITESPACE:
			if c.isspace():
				self.last_leading_space_index = index
				return
			if c in "+-":
				self.sign_index = index
				self.state = State.SIGN
				return
			state = State.SIGN
		if state is State.SIGN:
			if self.radix.is_valid_digit(c):
				self._start_digits(index, c)
			else:
				self._invalid(0)
		elif state in (State.LEADING_ZEROES, State.INTEGER):
			if self.radix.is_valid_digit(c):
				if state is State.LEADING_ZEROES:
					self.first_integer_index = index
					if c != "0":
						self.state = State.INTEGER
			elif c == ":":
				self.last_integer_index = index
				self.state = State.COLON
			else:
				self._invalid(0)
		elif state is State.COLON and c == self.radix.suffix:
			self.suffix_index = index
			self.state = State.SUFFIX
		else: # no partial credit once past the digits
			self._invalid(0)
	
	@property
	def is_valid(self):
		return self.state is State.DONE and self.first_invalid_index < 0
	@property
	def is_partially_valid(self):
		return len(self.text) > 0 and self.first_invalid_index != 0
	@property
	def comparison_index(self):
		if self.first_invalid_index >= 0:
			return self.first_invalid_index
		return len(self.text)
	
	def _span(self, first, last):
		if first < 0:
			return ""
		return self.text[first:last]
	def _char(self, index):
		return self.text[index] if index >= 0 else ""
	@property
	def leading_whitespace(self):
		return self.text[:self.last_leading_space_index + 1]
	@property
	def discarded_zeroes(self):
		"Leading zeroes folded out of the canonical text, after any sign or radix prefix"
		if self.first_digit_index < 0:
			return ""
		return self.text[self.first_digit_index:self.first_integer_index]
	@property
	def discarded_prolog(self):
		return self.leading_whitespace + self.discarded_zeroes
	@property
	def source_text(self):
		"The literal as written: leading_whitespace + source_text + invalid_text is the text"
		end = self.first_invalid_index if self.first_invalid_index >= 0 else len(self.text)
		return self.text[self.last_leading_space_index + 1:end]
	@property
	def sign_text(self):
		return self._char(self.sign_index)
	@property
	def integer_text(self):
		return self._span(self.first_integer_index, self.last_integer_index)
	@property
	def separator_text(self):
		return self._char(self.separator_index)
	@property
	def fractional_text(self):
		if self.separator_index < 0:
			return ""
		return self._span(self.first_fractional_index, self.last_fractional_index)
	@property
	def exponent_character(self):
		return self._char(self.exponent_index)
	@property
	def exponent_sign(self):
		return self._char(self.exponent_sign_index)
	@property
	def exponent_text(self):
		return self._span(self.first_exponent_index, self.last_exponent_index)
	@property
	def prefix_text(self):
		if self.prefix_index < 0:
			return ""
		return self.text[self.prefix_index - 1:self.prefix_index + 1]
	@property
	def suffix_text(self):
		if self.suffix_index < 0:
			return ""
		return self.text[self.suffix_index - 1:self.suffix_index + 1]
	@property
	def token_text(self):
		if self.token_index < 0:
			return ""
		return self.text[self.token_index:self.token_index + self.token_position]
	@property
	def invalid_text(self):
		if self.first_invalid_index < 0:
			return ""
		return self.text[self.first_invalid_index:]
	@property
	def significand_text(self):
		"The recognized literal up to and including its exponent marker"
		if self.kind is PartitionKind.SPECIAL:
			return self.sign_text + self.token_text
		if self.kind is PartitionKind.RADIX_PREFIX:
			return self.prefix_text + self.integer_text
		if self.kind is PartitionKind.RADIX_SUFFIX:
			return self.sign_text + self.integer_text + self.suffix_text
		return self.sign_text + self.integer_text + self.separator_text + self.fractional_text + self.exponent_character
	@property
	def exponent_part(self):
		return self.exponent_sign + self.exponent_text
	@property
	def canonical_text(self):
		return self.significand_text + self.exponent_part
	
	def __repr__(self):
		name = self.special.name if self.special else self.radix.name
		return "<TextPartition %s %s %r valid=%s comparison_index=%d>" % (self.kind.value, name, self.text, self.is_valid, self.comparison_index)

class PartitionSet:
	"Every grammar run over the same text, in declaration order"
	def __init__(self, text, locale=None):
		self.text = text
		self.locale = locale or InvariantLocale
		self.partitions = [
			TextPartition(text, PartitionKind.SPECIAL, self.locale, special=SpecialValue.NAN),
			TextPartition(text, PartitionKind.SPECIAL, self.locale, special=SpecialValue.POSITIVE_INFINITY),
			TextPartition(text, PartitionKind.SPECIAL, self.locale, special=SpecialValue.NEGATIVE_INFINITY),
			TextPartition(text, PartitionKind.REAL, self.locale),
			TextPartition(text, PartitionKind.RADIX_PREFIX, self.locale, radix=Binary),
			TextPartition(text, PartitionKind.RADIX_PREFIX, self.locale, radix=Hexadecimal),
			TextPartition(text, PartitionKind.RADIX_SUFFIX, self.locale, radix=Binary),
			TextPartition(text, PartitionKind.RADIX_SUFFIX, self.locale, radix=Octal),
			TextPartition(text, PartitionKind.RADIX_SUFFIX, self.locale, radix=Hexadecimal),
		]
		for index, c in enumerate(text):
			for partition in self.partitions:
				partition.feed(index, c)
		for partition in self.partitions:
			partition.finish()
		
		self.preferred = None
		for partition in self.partitions:
			if not partition.is_partially_valid:
				continue
			if self.preferred is None or partition.comparison_index > self.preferred.comparison_index:
				self.preferred = partition
	@property
	def is_valid(self):
		return any(partition.is_valid for partition in self.partitions)
	def __iter__(self):
		return iter(self.partitions)

def select_partition(text, locale=None):
	if not isinstance(text, str):
		raise TypeError("Cannot parse %r as a number literal" % type(text))
	ret = PartitionSet(text, locale)
	logger.debug("Selected %r for %r (valid: %s)", ret.preferred, text, ret.is_valid)
	return ret
