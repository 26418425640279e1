import pytest

from arithmetic import Arithmetic

@pytest.fixture(autouse=True)
def fresh_arithmetic():
	"Every test starts from the default precisions, rounding and flags"
	Arithmetic.reset()
	yield
	Arithmetic.reset()
