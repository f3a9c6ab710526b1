import unittest

from lox.ontology import Nom, LoxRuntimeError
from lox.tree_walker.runtime import is_truthy, is_equal, stringify, binary_operation, unary_operation
from lox.tree_walker.values import NativeFunction, LoxClass, Instance

def _op(text): return Nom(text, 0)

class Truth(unittest.TestCase):

	def test_only_nil_and_false_are_falsey(self):
		for value in [None, False]:
			with self.subTest(value): self.assertFalse(is_truthy(value))
		for value in [True, 0.0, "", "false", NativeFunction("f", 0, lambda: None)]:
			with self.subTest(value): self.assertTrue(is_truthy(value))

class Equality(unittest.TestCase):

	def test_nil_equals_only_nil(self):
		self.assertTrue(is_equal(None, None))
		self.assertFalse(is_equal(None, False))
		self.assertFalse(is_equal(0.0, None))

	def test_cross_variant_is_false_not_error(self):
		self.assertFalse(is_equal(1.0, "1"))
		self.assertFalse(is_equal(True, 1.0))
		self.assertFalse(is_equal(False, 0.0))

	def test_by_value(self):
		self.assertTrue(is_equal(3.0, 3.0))
		self.assertTrue(is_equal("ab", "a" + "b"))
		self.assertTrue(is_equal(True, True))

	def test_by_identity(self):
		klass = LoxClass("A", None, {})
		a, b = Instance(klass), Instance(klass)
		self.assertTrue(is_equal(a, a))
		self.assertFalse(is_equal(a, b))

class Printing(unittest.TestCase):

	def test_stringify(self):
		klass = LoxClass("Point", None, {})
		for value, text in [
			(None, "nil"),
			(True, "true"),
			(False, "false"),
			(3.0, "3"),
			(3.5, "3.5"),
			(-0.25, "-0.25"),
			("plain", "plain"),
			(NativeFunction("clock", 0, lambda: 0.0), "<native fn>"),
			(klass, "Point"),
			(Instance(klass), "Point instance"),
		]:
			with self.subTest(text):
				self.assertEqual(text, stringify(value))

class Operators(unittest.TestCase):

	def assertFails(self, message, op, *args):
		fn = binary_operation if len(args) == 2 else unary_operation
		with self.assertRaises(LoxRuntimeError) as cm:
			fn(_op(op), *args)
		self.assertEqual(message, cm.exception.message)
		self.assertEqual(op, cm.exception.token.text)

	def test_arithmetic(self):
		self.assertEqual(5.0, binary_operation(_op("+"), 2.0, 3.0))
		self.assertEqual(-1.0, binary_operation(_op("-"), 2.0, 3.0))
		self.assertEqual(6.0, binary_operation(_op("*"), 2.0, 3.0))
		self.assertEqual(1.5, binary_operation(_op("/"), 3.0, 2.0))
		self.assertEqual(-2.0, unary_operation(_op("-"), 2.0))

	def test_division_by_zero(self):
		for numerator in [1.0, 0.0, -1.0]:
			with self.subTest(numerator):
				self.assertFails("Division by zero.", "/", numerator, 0.0)

	def test_concatenation(self):
		self.assertEqual("ab", binary_operation(_op("+"), "a", "b"))
		self.assertEqual("a1", binary_operation(_op("+"), "a", 1.0))
		self.assertEqual("2.5b", binary_operation(_op("+"), 2.5, "b"))

	def test_type_errors(self):
		self.assertFails("Operands must be two numbers or two strings.", "+", "a", True)
		self.assertFails("Operands must be two numbers or two strings.", "+", None, 1.0)
		self.assertFails("Operands must be numbers.", "*", "a", 2.0)
		self.assertFails("Operands must be numbers.", "<", "a", "b")
		self.assertFails("Operands must be numbers.", "/", "a", 0.0)
		self.assertFails("Operand must be a number.", "-", "a")

	def test_comparison(self):
		self.assertIs(True, binary_operation(_op("<"), 1.0, 2.0))
		self.assertIs(True, binary_operation(_op(">="), 2.0, 2.0))
		self.assertIs(False, binary_operation(_op(">"), 1.0, 2.0))

	def test_equality_operators_never_fail(self):
		self.assertIs(False, binary_operation(_op("=="), "a", 1.0))
		self.assertIs(True, binary_operation(_op("!="), None, False))

	def test_not(self):
		self.assertIs(True, unary_operation(_op("!"), None))
		self.assertIs(False, unary_operation(_op("!"), 0.0))

if __name__ == '__main__':
	unittest.main()
