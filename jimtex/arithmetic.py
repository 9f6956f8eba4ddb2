"""
Numbers and what the interpreter may do with them.

A Number is one of four Python types, each standing for one kind:
	int       INTEGER   (arbitrary precision)
	float     REAL      (64-bit floating point)
	complex   COMPLEX   (reserved)
	Fraction  RATIONAL  (reserved)

The promotion lattice is INTEGER < REAL. Mixed operations promote
the integer operand in exactly one place: promote_to_real.
Nothing here leans on Python's own mixed-type arithmetic.
"""
import math
from enum import Enum
from fractions import Fraction
from typing import Union
from .ontology import BinOp, UnOp, Relation
from .errors import TypeMismatch, DivisionByZero, NotYetSupported

Number = Union[int, float, complex, Fraction]

class NumberKind(Enum):
	INTEGER = "integer"
	REAL = "real"
	COMPLEX = "complex"
	RATIONAL = "rational"

_KINDS = {int: NumberKind.INTEGER, float: NumberKind.REAL, complex: NumberKind.COMPLEX, Fraction: NumberKind.RATIONAL}

def kind_of(n:Number) -> NumberKind:
	try: return _KINDS[type(n)]
	except KeyError: raise TypeMismatch("%r is not a number" % (n,))

_CHUNK_DIGITS = 1000
_CHUNK = 10 ** _CHUNK_DIGITS

def _decimal(n:int) -> str:
	"""
	Decimal text for an integer of any size. Python itself refuses
	to convert more than a few thousand digits in one go.
	"""
	if n < 0: return "-" + _decimal(-n)
	chunks = []
	while n >= _CHUNK:
		n, low = divmod(n, _CHUNK)
		chunks.append(str(low).zfill(_CHUNK_DIGITS))
	chunks.append(str(n))
	return "".join(reversed(chunks))

def promote_to_real(n:Number) -> float:
	kind = kind_of(n)
	if kind is NumberKind.REAL: return n
	if kind is NumberKind.INTEGER:
		# By way of decimal text; very large integers lose precision, or worse:
		real = float(_decimal(n))
		if math.isinf(real): raise TypeMismatch("An integer of %d digits is too large to treat as a real number" % len(_decimal(abs(n))))
		return real
	raise TypeMismatch("Cannot treat a %s number as real" % kind.value)

def _common_kind(a:Number, b:Number):
	""" Bring two operands to their least common kind in the lattice, or fail. """
	ka, kb = kind_of(a), kind_of(b)
	if ka is kb is NumberKind.INTEGER: return NumberKind.INTEGER, a, b
	if ka in _ARITHMETIC_KINDS and kb in _ARITHMETIC_KINDS:
		return NumberKind.REAL, promote_to_real(a), promote_to_real(b)
	unsupported = ka if ka not in _ARITHMETIC_KINDS else kb
	raise TypeMismatch("Arithmetic on %s numbers is not implemented" % unsupported.value)

_ARITHMETIC_KINDS = frozenset([NumberKind.INTEGER, NumberKind.REAL])

def _add(kind, a, b): return a + b
def _sub(kind, a, b): return a - b
def _mul(kind, a, b): return a * b

def _div(kind, a, b):
	if b == 0: raise DivisionByZero()
	if kind is NumberKind.INTEGER:
		# Truncate toward zero, so -7/2 is -3.
		quotient = abs(a) // abs(b)
		return quotient if (a < 0) == (b < 0) else -quotient
	return a / b

def _pow(kind, a, b):
	if kind is NumberKind.INTEGER:
		if b >= 0: return a ** b
		if a == 0: raise DivisionByZero()
		a, b = promote_to_real(a), promote_to_real(b)
	if a == 0 and b < 0: raise DivisionByZero()
	try: result = a ** b
	except OverflowError: raise TypeMismatch("Exponent overflows a real number")
	if isinstance(result, complex): raise TypeMismatch("%r ^ %r has no real value" % (a, b))
	return result

ARITHMETIC = {
	BinOp.ADDITION: _add,
	BinOp.SUBTRACTION: _sub,
	BinOp.MULTIPLY: _mul,
	BinOp.DIVIDE: _div,
	BinOp.EXPONENT: _pow,
}

def _approx(a, b):
	# Two integers may be too large for floating point at all.
	if isinstance(a, int) and isinstance(b, int): return int(a == b)
	return int(math.isclose(a, b))

COMPARISON = {
	Relation.EQUALS: lambda a, b: int(a == b),
	Relation.APPROX: _approx,
	Relation.LESS_EQ: lambda a, b: int(a <= b),
	Relation.GREATER_EQ: lambda a, b: int(a >= b),
	Relation.LESS: lambda a, b: int(a < b),
	Relation.GREATER: lambda a, b: int(a > b),
}

def binary(op, a:Number, b:Number) -> Number:
	if op in ARITHMETIC:
		kind, a, b = _common_kind(a, b)
		return ARITHMETIC[op](kind, a, b)
	if op in COMPARISON:
		kind, a, b = _common_kind(a, b)
		return COMPARISON[op](a, b)
	raise NotYetSupported("The %s operator is not implemented" % op)

def unary(op:UnOp, a:Number) -> Number:
	if op is UnOp.NEGATION:
		if kind_of(a) in _ARITHMETIC_KINDS: return -a
		raise TypeMismatch("Negation of %s numbers is not implemented" % kind_of(a).value)
	raise NotYetSupported("The %s operator is not implemented" % op)

def render(n:Number) -> str:
	kind = kind_of(n)
	if kind is NumberKind.COMPLEX:
		sign = "-" if n.imag < 0 else "+"
		return "%r%s%ri" % (n.real, sign, abs(n.imag))
	if kind is NumberKind.INTEGER: return _decimal(n)
	return str(n)
