import unittest
from fractions import Fraction
from jimtex import arithmetic
from jimtex.arithmetic import NumberKind, kind_of, promote_to_real, binary, unary, render
from jimtex.ontology import BinOp, UnOp, Relation
from jimtex.errors import TypeMismatch, DivisionByZero, NotYetSupported

class KindTests(unittest.TestCase):

	def test_kinds(self):
		self.assertIs(NumberKind.INTEGER, kind_of(3))
		self.assertIs(NumberKind.REAL, kind_of(3.0))
		self.assertIs(NumberKind.COMPLEX, kind_of(3j))
		self.assertIs(NumberKind.RATIONAL, kind_of(Fraction(1, 3)))
		with self.assertRaises(TypeMismatch):
			kind_of(True)

	def test_promotion(self):
		self.assertEqual(12.0, promote_to_real(12))
		self.assertIsInstance(promote_to_real(12), float)
		with self.assertRaises(TypeMismatch):
			promote_to_real(10 ** 400)
		with self.assertRaises(TypeMismatch):
			promote_to_real(10 ** 5000)
		with self.assertRaises(TypeMismatch):
			binary(BinOp.ADDITION, 10 ** 5000, 0.5)
		with self.assertRaises(TypeMismatch):
			promote_to_real(1j)


class OperatorTests(unittest.TestCase):

	def test_integer_stays_integer(self):
		self.assertEqual(7, binary(BinOp.ADDITION, 3, 4))
		self.assertIsInstance(binary(BinOp.MULTIPLY, 3, 4), int)
		self.assertEqual(2 ** 100, binary(BinOp.EXPONENT, 2, 100))

	def test_mixed_promotes(self):
		result = binary(BinOp.ADDITION, 1, 0.5)
		self.assertIsInstance(result, float)
		self.assertEqual(1.5, result)
		self.assertIsInstance(binary(BinOp.SUBTRACTION, 2.0, 2), float)

	def test_integer_division_truncates_toward_zero(self):
		for a in range(-9, 10):
			for b in (-4, -3, -2, -1, 1, 2, 3, 4):
				with self.subTest(a=a, b=b):
					quotient = binary(BinOp.DIVIDE, a, b)
					self.assertIsInstance(quotient, int)
					self.assertEqual(int(a / b), quotient)
		self.assertEqual(-3, binary(BinOp.DIVIDE, -7, 2))
		self.assertEqual(10 ** 30, binary(BinOp.DIVIDE, 10 ** 60 + 1, 10 ** 30))

	def test_real_division(self):
		self.assertEqual(3.5, binary(BinOp.DIVIDE, 7, 2.0))

	def test_division_by_zero(self):
		for a, b in [(1, 0), (1.0, 0), (1, 0.0)]:
			with self.subTest(a=a, b=b):
				with self.assertRaises(DivisionByZero):
					binary(BinOp.DIVIDE, a, b)
		with self.assertRaises(DivisionByZero):
			binary(BinOp.EXPONENT, 0, -1)

	def test_exponent(self):
		self.assertEqual(0.5, binary(BinOp.EXPONENT, 2, -1))
		self.assertEqual(4.0, binary(BinOp.EXPONENT, 16, 0.5))
		with self.assertRaises(TypeMismatch):
			binary(BinOp.EXPONENT, -8, 0.5)

	def test_comparisons_give_integers(self):
		self.assertEqual(1, binary(Relation.LESS, 1, 2))
		self.assertEqual(0, binary(Relation.GREATER, 1, 2))
		self.assertEqual(1, binary(Relation.EQUALS, 2, 2.0))
		self.assertEqual(1, binary(Relation.APPROX, 0.1 + 0.2, 0.3))
		self.assertEqual(1, binary(Relation.LESS_EQ, 2, 2))
		self.assertEqual(0, binary(Relation.GREATER_EQ, 1, 2))
		self.assertIsInstance(binary(Relation.EQUALS, 1, 1), int)

	def test_approx_on_integers_too_large_for_reals(self):
		self.assertEqual(1, binary(Relation.APPROX, 10 ** 400, 10 ** 400))
		self.assertEqual(0, binary(Relation.APPROX, 10 ** 400, 10 ** 400 + 1))

	def test_reserved_operators(self):
		for op in (BinOp.PLUS_MINUS, BinOp.UNION, BinOp.BOOL_AND, BinOp.EXTERNAL_DIRECT_PRODUCT, Relation.IN):
			with self.subTest(op=op):
				with self.assertRaises(NotYetSupported):
					binary(op, 1, 2)
		with self.assertRaises(NotYetSupported):
			unary(UnOp.BOOL_NOT, 1)

	def test_unsupported_kinds(self):
		with self.assertRaises(TypeMismatch):
			binary(BinOp.ADDITION, 1j, 1)
		with self.assertRaises(TypeMismatch):
			binary(BinOp.ADDITION, Fraction(1, 2), 1)
		with self.assertRaises(TypeMismatch):
			unary(UnOp.NEGATION, 1j)

	def test_negation(self):
		self.assertEqual(-3, unary(UnOp.NEGATION, 3))
		self.assertEqual(2.5, unary(UnOp.NEGATION, -2.5))

	def test_render(self):
		self.assertEqual("42", render(42))
		self.assertEqual("0.1", render(0.1))
		self.assertEqual("3.0", render(3.0))
		self.assertEqual("1.0+2.0i", render(complex(1, 2)))
		self.assertEqual("1.0-2.0i", render(complex(1, -2)))
		self.assertEqual("1/3", render(Fraction(1, 3)))

	def test_render_huge_integers(self):
		self.assertEqual("1" + "0" * 5000, render(10 ** 5000))
		self.assertEqual("-1" + "0" * 4999 + "7", render(-(10 ** 5000 + 7)))

	def test_dispatch_tables_cover_the_arithmetic(self):
		self.assertEqual(
			{BinOp.ADDITION, BinOp.SUBTRACTION, BinOp.MULTIPLY, BinOp.DIVIDE, BinOp.EXPONENT},
			set(arithmetic.ARITHMETIC),
		)


if __name__ == '__main__':
	unittest.main()
