from bitarray import bitarray
from bitarray.util import ba2int, int2ba, zeros

class BitField:
	"""
	Unsigned magnitude of any length, stored in a little-endian bitarray (bit 0 is the lowest retained bit)
	Once a precision budget is exceeded the lowest bits are dropped, and shift_bits counts them:
		magnitude == stored bits << shift_bits
	BitField.Empty stands for "not applicable" (the fields of NaN and the infinities)
	"""
	Empty = None
	def __init__(self, val=None, shift_bits=0):
		self._empty = False
		if isinstance(val, BitField):
			self._empty = val._empty
			self._val = bitarray(val._val, endian="little")
			self.shift_bits = val.shift_bits
			return
		if val is None:
			self._val = bitarray(endian="little")
		elif isinstance(val, str):
			# written most significant bit first, like a binary literal
			self._val = bitarray(val[::-1], endian="little")
		else:
			self._val = bitarray(list(val), endian="little")
		if shift_bits < 0:
			raise ValueError("shift_bits must be >= 0, not %d" % shift_bits)
		self.shift_bits = shift_bits
	@classmethod
	def from_int(cls, value, shift_bits=0):
		"Field holding value << shift_bits, with exactly value.bit_length() stored bits (one bit for zero)"
		if value < 0:
			raise ValueError("Cannot store %d in an unsigned bit field" % value)
		field = cls(shift_bits=shift_bits)
		if value == 0:
			field._val = zeros(1, endian="little")
		else:
			field._val = int2ba(value, endian="little")
		return field
	@property
	def significant_bits(self):
		return len(self._val)
	@property
	def is_empty(self):
		return self._empty
	def _check_mutable(self):
		if self._empty:
			raise ValueError("BitField.Empty cannot be modified")
	
	def get_bit(self, position):
		"Bit at absolute position (shift_bits + stored index); False outside the stored window"
		index = position - self.shift_bits
		if index < 0 or index >= len(self._val):
			return False
		return bool(self._val[index])
	def set_bit(self, position, value=True):
		self._check_mutable()
		index = position - self.shift_bits
		if index < 0:
			raise IndexError("Bit %d was dropped for precision, the field starts at bit %d" % (position, self.shift_bits))
		if index >= len(self._val):
			self._val.extend(zeros(index + 1 - len(self._val), endian="little"))
		self._val[index] = bool(value)
	def set_zero(self):
		self._check_mutable()
		self._val = zeros(1, endian="little")
		self.shift_bits = 0
	def set_one(self):
		self._check_mutable()
		self._val = bitarray("1", endian="little")
		self.shift_bits = 0
	def decrease_precision(self):
		"Drop the lowest stored bit and return it"
		self._check_mutable()
		if not len(self._val):
			raise IndexError("No stored bit left to drop")
		dropped = bool(self._val[0])
		del self._val[0]
		self.shift_bits += 1
		return dropped
	def clone(self):
		if self._empty:
			return self
		return BitField(self)
	__copy__ = clone
	
	def highest_bit(self):
		"Absolute position of the highest set bit, -1 if no bit is set"
		if self._empty or not self._val.any():
			return -1
		return self.shift_bits + len(self._val) - 1 - self._val[::-1].index(1)
	def lowest_bit(self):
		if self._empty or not self._val.any():
			return -1
		return self.shift_bits + self._val.index(1)
	def __int__(self):
		if self._empty:
			raise ValueError("BitField.Empty has no value")
		if not len(self._val):
			return 0
		return ba2int(self._val) << self.shift_bits
	def __iter__(self):
		"Stored bits, lowest first"
		for bit in self._val:
			yield bool(bit)
	def __len__(self):
		return len(self._val)
	
	def compare(self, other):
		"""
		Magnitude comparison: -1, 0 or 1
		Both fields are aligned at their true bit positions, and scanned from the highest set bit down
		"""
		if not isinstance(other, BitField):
			raise TypeError("Cannot compare BitField with %r" % type(other))
		if self._empty or other._empty:
			return int(not self._empty) - int(not other._empty)
		top = max(self.highest_bit(), other.highest_bit())
		bottom = min(self.shift_bits, other.shift_bits)
		for position in range(top, bottom - 1, -1):
			mine, theirs = self.get_bit(position), other.get_bit(position)
			if mine != theirs:
				return 1 if mine else -1
		return 0
	def compare_from_lowest(self, other):
		"Like compare, for fields where bit 0 weighs the most (fractional fields)"
		if not isinstance(other, BitField):
			raise TypeError("Cannot compare BitField with %r" % type(other))
		if self._empty or other._empty:
			return int(not self._empty) - int(not other._empty)
		end = max(self.shift_bits + len(self._val), other.shift_bits + len(other._val))
		for position in range(end):
			mine, theirs = self.get_bit(position), other.get_bit(position)
			if mine != theirs:
				return 1 if mine else -1
		return 0
	def __lt__(self, other):
		return self.compare(other) < 0
	def __gt__(self, other):
		return self.compare(other) > 0
	def __le__(self, other):
		return self.compare(other) <= 0
	def __ge__(self, other):
		return self.compare(other) >= 0
	def __eq__(self, other):
		"Structural: same stored bits and same shift"
		if not isinstance(other, BitField):
			return NotImplemented
		if self._empty or other._empty:
			return self._empty and other._empty
		return self.shift_bits == other.shift_bits and self._val == other._val
	def __ne__(self, other):
		ret = self.__eq__(other)
		if ret is NotImplemented:
			return ret
		return not ret
	def __hash__(self):
		if self._empty:
			return hash(None)
		return hash((self.shift_bits, self._val.to01()))
	
	def __str__(self):
		return self._val[::-1].to01()
	def __repr__(self):
		if self._empty:
			return "BitField.Empty"
		if self.shift_bits:
			return "BitField('%s', shift_bits=%d)" % (self, self.shift_bits)
		return "BitField('%s')" % self

BitField.Empty = BitField()
BitField.Empty._empty = True
