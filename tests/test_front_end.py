import unittest
from unittest import mock

from lox import syntax
from lox.diagnostics import Report
from lox.scanner import scan
from lox.front_end import parse_text
from lox.ast_printer import AstPrinter, show_program

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()
	pass

def _kinds(text):
	report = Silence()
	tokens = scan(text, report)
	report.assert_no_issues("Scanner balked at %r" % text)
	return [t.kind for t in tokens]

class ScannerTests(unittest.TestCase):

	def test_punctuation_and_words(self):
		self.assertEqual(
			["VAR", "identifier", "=", "number", ";", "EOF"],
			_kinds("var x = 12.5;"),
		)
		self.assertEqual(["!=", "==", "<=", ">=", "!", "<", "EOF"], _kinds("!= == <= >= ! <"))

	def test_literal_values(self):
		tokens = scan('3 4.25 "hi there"', Silence())
		self.assertEqual([3.0, 4.25, "hi there"], [t.value for t in tokens[:3]])
		self.assertIsInstance(tokens[0].value, float)

	def test_comments_and_lines(self):
		tokens = scan('// one\n/* two\nthree */ print\n"a\nb";', Silence())
		self.assertEqual("PRINT", tokens[0].kind)
		self.assertEqual(3, tokens[0].line)
		self.assertEqual("a\nb", tokens[1].value)

	def test_comments_and_strings_swallow_each_other(self):
		tokens = scan('/* a * b / c "not a string" */ "// not a comment" / /* x */ 1', Silence())
		self.assertEqual(["string", "/", "number", "EOF"], [t.kind for t in tokens])
		self.assertEqual("// not a comment", tokens[0].value)

	def test_unterminated_string_reports_its_own_line(self):
		report = Silence()
		tokens = scan('print 1;\n"one\ntwo', report)
		self.assertEqual(["PRINT", "number", ";", "EOF"], [t.kind for t in tokens])
		self.assertEqual(["Unterminated string."], [pic.intro for pic in report.issues])
		self.assertEqual(3, tokens[-1].line)

	def test_lexical_errors(self):
		for text, message in [
			('"open', "Unterminated string."),
			('/* open', "Unterminated comment."),
			('@', "Unexpected character."),
		]:
			with self.subTest(text):
				report = Silence()
				scan(text, report)
				self.assertEqual(1, len(report.issues))
				self.assertEqual(message, report.issues[0].intro)

def _tree(text):
	report = Silence()
	statements = parse_text(text, report)
	report.assert_no_issues("Parser balked at %r" % text)
	return show_program(statements)

class ParserTests(unittest.TestCase):

	def test_precedence(self):
		self.assertEqual("(print (+ 1 (* 2 3)))", _tree("print 1 + 2 * 3;"))
		self.assertEqual("(; (* (- 123) (group 45.67)))", _tree("-123 * (45.67);"))
		self.assertEqual("(; (or a (and b c)))", _tree("a or b and c;"))
		self.assertEqual("(; (== (< 1 2) (! false)))", _tree("1 < 2 == !false;"))

	def test_assignment_is_right_associative(self):
		self.assertEqual("(; (= a (= b 1)))", _tree("a = b = 1;"))
		self.assertEqual("(; (= (. (call p) x) 2))", _tree("p().x = 2;"))

	def test_declarations(self):
		self.assertEqual("(var x)", _tree("var x;"))
		self.assertEqual('(var s "hi")', _tree('var s = "hi";'))
		self.assertEqual("(fun add (a b) (return (+ a b)))", _tree("fun add(a, b) { return a + b; }"))
		self.assertEqual(
			"(class B < A (fun m () (return (super m))))",
			_tree("class B < A { m() { return super.m; } }"),
		)

	def test_statements(self):
		self.assertEqual("(if-else c (print 1) (print 2))", _tree("if (c) print 1; else print 2;"))
		self.assertEqual("(while true (block (break)))", _tree("while (true) { break; }"))
		self.assertEqual("(block)", _tree("{}"))

	def test_anonymous_function(self):
		self.assertEqual("(; (call f (fun (x) (return x))))", _tree("f(fun (x) { return x; });"))
		# A bare `fun` at statement level, with no name, is an expression.
		self.assertEqual("(; (fun () (print 1)))", _tree("fun () { print 1; };"))

	def test_for_loop_is_lowered_once(self):
		report = Silence()
		[loop] = parse_text("for (var i = 0; i < 3; i = i + 1) { print i; }", report)
		report.assert_no_issues("For loop did not parse")
		self.assertIsInstance(loop, syntax.For)
		lowered = loop.lowered
		self.assertIsInstance(lowered, syntax.Block)
		init, loop_proper = lowered.statements
		self.assertIsInstance(init, syntax.Var)
		self.assertIsInstance(loop_proper, syntax.While)
		# The increment shares one block with the body statements.
		self.assertEqual(
			"(block (print i) (; (= i (+ i 1))))",
			AstPrinter().show(loop_proper.body),
		)

	def test_for_loop_without_clauses(self):
		report = Silence()
		[loop] = parse_text("for (;;) break;", report)
		report.assert_no_issues("Bare for loop did not parse")
		self.assertIsInstance(loop.lowered, syntax.While)
		self.assertIs(True, loop.lowered.condition.value)

	def test_error_messages(self):
		for text, message in [
			("print 1 +;", "Error at ';': Expect expression."),
			("var x = 1", "Error at end: Expect ';' after variable declaration."),
			("1 + 2 = 3;", "Error at '=': Invalid assignment target."),
			("class { }", "Error at '{': Expect class name."),
			("f(1, 2;", "Error at ';': Expect ')' after arguments."),
		]:
			with self.subTest(text):
				report = Silence()
				parse_text(text, report)
				self.assertTrue(report.sick())
				self.assertEqual(message, report.issues[0].intro)

	def test_recovers_to_report_several_errors(self):
		report = Silence()
		statements = parse_text("var = 1;\nprint 2;\nvar y = ;\nprint 3;", report)
		self.assertEqual(2, len(report.issues))
		self.assertEqual(2, len(statements))

	def test_too_many_arguments(self):
		args = ", ".join(["1"] * 256)
		report = Silence()
		parse_text("f(%s);" % args, report)
		self.assertEqual(1, len(report.issues))
		self.assertIn("Can't have more than 255 arguments.", report.issues[0].intro)

if __name__ == '__main__':
	unittest.main()
