import unittest

from lox.ontology import Nom, LoxRuntimeError
from lox.environment import Environment

def _nom(text): return Nom(text, 0)

class EnvironmentTests(unittest.TestCase):

	def setUp(self):
		self.outer = Environment()
		self.outer.define("a", 1.0)
		self.inner = Environment(self.outer)

	def test_get_searches_outward(self):
		self.assertEqual(1.0, self.inner.get(_nom("a")))

	def test_undefined_variable(self):
		with self.assertRaises(LoxRuntimeError) as cm:
			self.inner.get(_nom("b"))
		self.assertEqual("Undefined variable 'b'.", cm.exception.message)
		self.assertEqual("b", cm.exception.token.text)

	def test_assign_updates_the_defining_frame(self):
		self.inner.assign(_nom("a"), 2.0)
		self.assertEqual(2.0, self.outer.values["a"])
		self.assertNotIn("a", self.inner.values)

	def test_assign_never_creates(self):
		with self.assertRaises(LoxRuntimeError):
			self.inner.assign(_nom("b"), 2.0)
		self.assertNotIn("b", self.outer.values)

	def test_shadowing(self):
		self.inner.define("a", "inner")
		self.assertEqual("inner", self.inner.get(_nom("a")))
		self.assertEqual(1.0, self.outer.get(_nom("a")))

	def test_redefinition_in_same_frame(self):
		self.outer.define("a", "again")
		self.assertEqual("again", self.outer.get(_nom("a")))

	def test_nil_is_a_real_binding(self):
		self.outer.define("n", None)
		self.assertIsNone(self.inner.get(_nom("n")))

	def test_resolved_access(self):
		innermost = Environment(self.inner)
		self.assertIs(self.outer, innermost.ancestor(2))
		self.assertEqual(1.0, innermost.get_at(2, "a"))
		innermost.assign_at(2, "a", 3.0)
		self.assertEqual(3.0, self.outer.values["a"])

	def test_resolved_access_trusts_the_resolver(self):
		with self.assertRaises(AssertionError):
			self.inner.get_at(0, "a")
		with self.assertRaises(AssertionError):
			self.inner.ancestor(5)

if __name__ == '__main__':
	unittest.main()
