import copy

import pytest

from bitfield import BitField
from radix import halve

def field_from_digits(text):
	"Bits of a decimal digit string, the way literals are read"
	field = BitField()
	if text == "0":
		field.set_zero()
		return field
	position = 0
	while text != "0":
		text, carry = halve(text, 10)
		field.set_bit(position, carry)
		position += 1
	return field

class TestConstruction:

	def test_from_int(self):
		field = BitField.from_int(13)
		assert field.significant_bits == 4
		assert field.shift_bits == 0
		assert int(field) == 13
		assert str(field) == "1101"

	def test_from_int_zero(self):
		field = BitField.from_int(0)
		assert field.significant_bits == 1
		assert int(field) == 0

	def test_from_int_negative(self):
		with pytest.raises(ValueError):
			BitField.from_int(-1)

	def test_from_string_is_most_significant_first(self):
		field = BitField("110")
		assert not field.get_bit(0)
		assert field.get_bit(1) and field.get_bit(2)

	def test_from_list_is_lowest_first(self):
		field = BitField([1, 0, 0])
		assert field.get_bit(0)
		assert int(field) == 1

	def test_set_zero_and_one(self):
		field = BitField("1011", shift_bits=3)
		field.set_zero()
		assert (field.significant_bits, field.shift_bits, int(field)) == (1, 0, 0)
		field.set_one()
		assert (field.significant_bits, field.shift_bits, int(field)) == (1, 0, 1)

class TestBits:

	def test_set_bit_grows(self):
		field = BitField()
		field.set_bit(5)
		assert field.significant_bits == 6
		assert field.get_bit(5)
		assert not field.get_bit(4)

	def test_read_outside_window_is_false(self):
		field = BitField("111", shift_bits=2)
		assert not field.get_bit(0)
		assert not field.get_bit(1)
		assert field.get_bit(2)
		assert not field.get_bit(5)
		assert not field.get_bit(100)

	def test_clear_bit(self):
		field = BitField.from_int(7)
		field.set_bit(1, False)
		assert int(field) == 5

	def test_highest_and_lowest(self):
		field = BitField("10100", shift_bits=3)
		assert field.highest_bit() == 7
		assert field.lowest_bit() == 5
		assert BitField.from_int(0).highest_bit() == -1

class TestDecreasePrecision:

	def test_drops_lowest_bits(self):
		field = BitField.from_int(0b101101)
		dropped = [field.decrease_precision() for i in range(3)]
		assert dropped == [True, False, True]
		assert field.significant_bits == 3
		assert field.shift_bits == 3
		for position in range(3):
			assert not field.get_bit(position)
		assert int(field) == 0b101000

	@pytest.mark.parametrize("n", [1, 2, 5])
	def test_counts(self, n):
		field = BitField.from_int(2**10 - 1)
		for i in range(n):
			field.decrease_precision()
		assert field.significant_bits == 10 - n
		assert field.shift_bits == n

	def test_set_dropped_bit(self):
		field = BitField.from_int(6)
		field.decrease_precision()
		with pytest.raises(IndexError):
			field.set_bit(0)

	def test_nothing_left(self):
		field = BitField()
		with pytest.raises(IndexError):
			field.decrease_precision()

class TestComparison:

	@pytest.mark.parametrize("a, b", [
		("2", "1"),
		("10", "9"),
		("256", "255"),
		("1000000000000000000000", "999999999999999999999"),
		("1", "0"),
	])
	def test_follows_numeric_order(self, a, b):
		assert field_from_digits(a) > field_from_digits(b)
		assert field_from_digits(b) < field_from_digits(a)
		assert field_from_digits(a).compare(field_from_digits(b)) == 1

	def test_aligned_on_true_position(self):
		shifted = BitField("101", shift_bits=2)
		assert shifted.compare(BitField.from_int(20)) == 0
		assert shifted != BitField.from_int(20)
		assert shifted < BitField.from_int(21)
		assert shifted > BitField.from_int(19)
		assert shifted <= BitField.from_int(20) and shifted >= BitField.from_int(20)

	def test_after_decrease_precision(self):
		field = BitField.from_int(0b1011)
		field.decrease_precision()
		assert field < BitField.from_int(0b1011)
		assert field.compare(BitField.from_int(0b1010)) == 0

	def test_from_lowest(self):
		half, quarter = BitField([1]), BitField([0, 1])
		assert half.compare_from_lowest(quarter) == 1
		assert quarter.compare_from_lowest(half) == -1
		assert BitField([1, 0, 0]).compare_from_lowest(half) == 0

	def test_empty(self):
		assert BitField.Empty == BitField.Empty
		assert BitField.Empty != BitField.from_int(0)
		assert BitField.Empty.compare(BitField.Empty) == 0
		assert BitField.Empty < BitField.from_int(0)
		assert BitField.from_int(0) > BitField.Empty

	def test_not_a_field(self):
		with pytest.raises(TypeError):
			BitField.from_int(1).compare(1)
		assert BitField.from_int(1) != 1

class TestValueSemantics:

	def test_structural_equality_and_hash(self):
		a, b = BitField("1101", shift_bits=1), BitField("1101", shift_bits=1)
		assert a == b
		assert hash(a) == hash(b)
		assert a != BitField("1101")

	def test_clone_is_independent(self):
		field = BitField.from_int(4)
		other = field.clone()
		other.set_bit(0)
		assert int(field) == 4
		assert int(other) == 5
		assert copy.copy(field) == field

	def test_empty_is_shared_and_read_only(self):
		assert BitField.Empty.is_empty
		assert BitField.Empty.clone() is BitField.Empty
		with pytest.raises(ValueError):
			BitField.Empty.set_zero()
		with pytest.raises(ValueError):
			BitField.Empty.set_bit(0)
		with pytest.raises(ValueError):
			int(BitField.Empty)

	def test_repr(self):
		assert repr(BitField("101", shift_bits=2)) == "BitField('101', shift_bits=2)"
		assert repr(BitField("11")) == "BitField('11')"
		assert repr(BitField.Empty) == "BitField.Empty"
