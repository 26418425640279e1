"""
Arithmetic configuration: precisions, rounding mode and result flags
Each thread has its own values, set to the defaults below the first time that thread reads them
	Arithmetic.significand_precision = 113
	Arithmetic.flags.clear()
"""
import enum
import logging
import threading

logger = logging.getLogger(__name__)

DEFAULT_SIGNIFICAND_PRECISION = 53
DEFAULT_EXPONENT_PRECISION = 53

class Rounding(enum.Enum):
	TO_NEAREST = "nearest"
	TOWARD_ZERO = "zero"
	TOWARD_POSITIVE_INFINITY = "+inf"
	TOWARD_NEGATIVE_INFINITY = "-inf"
	AWAY_FROM_ZERO = "away"

DEFAULT_ROUNDING = Rounding.TO_NEAREST

class Flags:
	"Sticky flags raised by operations, cleared only on request"
	def __init__(self):
		self.divide_by_zero = False
		self.inexact = False
	def clear(self):
		self.divide_by_zero = False
		self.inexact = False
	def __bool__(self):
		return self.divide_by_zero or self.inexact
	def __repr__(self):
		return "Flags(divide_by_zero=%s, inexact=%s)" % (self.divide_by_zero, self.inexact)

_local = threading.local()

def _get(name, default):
	try:
		return getattr(_local, name)
	except AttributeError:
		value = default()
		setattr(_local, name, value)
		return value

def _check_precision(value, what):
	if isinstance(value, bool) or not isinstance(value, int):
		raise ValueError("%s precision must be a positive integer, not %r" % (what, value))
	if value <= 0:
		raise ValueError("%s precision must be > 0, not %d" % (what, value))
	return value

class ArithmeticType(type):
	@property
	def significand_precision(cls):
		"Bits of significand of parsed and computed numbers"
		return _get("significand_precision", lambda: DEFAULT_SIGNIFICAND_PRECISION)
	@significand_precision.setter
	def significand_precision(cls, value):
		_local.significand_precision = _check_precision(value, "Significand")
	@property
	def exponent_precision(cls):
		"Bits of the decimal exponent"
		return _get("exponent_precision", lambda: DEFAULT_EXPONENT_PRECISION)
	@exponent_precision.setter
	def exponent_precision(cls, value):
		_local.exponent_precision = _check_precision(value, "Exponent")
	@property
	def rounding(cls):
		return _get("rounding", lambda: DEFAULT_ROUNDING)
	@rounding.setter
	def rounding(cls, value):
		if not isinstance(value, Rounding):
			raise TypeError("rounding must be Rounding, not %r" % type(value))
		_local.rounding = value
	@property
	def enable_infinite_precision(cls):
		"Keep every bit of parsed literals and exact results"
		return _get("enable_infinite_precision", lambda: False)
	@enable_infinite_precision.setter
	def enable_infinite_precision(cls, value):
		_local.enable_infinite_precision = bool(value)
	@property
	def flags(cls):
		return _get("flags", Flags)
	
	def reset(cls):
		"Forget this thread's values, the next reads get the defaults again"
		_local.__dict__.clear()
	def raise_flag(cls, name):
		if not hasattr(Flags(), name):
			raise AttributeError("No arithmetic flag named %r" % name)
		logger.debug("Raising %s flag", name)
		setattr(cls.flags, name, True)

class Arithmetic(metaclass=ArithmeticType):
	pass
