"""
Render a syntax tree as fully-parenthesized prefix notation, for looking at what the parser made.
For example, `-123 * (45.67)` comes out as `(* (- 123) (group 45.67))`.
"""
from typing import Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .ontology import Phrase, Stmt
from .tree_walker.runtime import stringify

class AstPrinter(Visitor):

	def show(self, node:Phrase) -> str:
		return self.visit(node)

	def _wrap(self, head:str, *parts) -> str:
		return "(%s)" % " ".join([head, *(self.visit(p) if isinstance(p, Phrase) else p for p in parts)])

	def _body(self, statements:Sequence[Stmt]) -> str:
		return " ".join(self.visit(s) for s in statements)

	def visit_Literal(self, expr:syntax.Literal):
		if isinstance(expr.value, str): return '"%s"' % expr.value
		return stringify(expr.value)

	def visit_Grouping(self, expr:syntax.Grouping): return self._wrap("group", expr.expression)
	def visit_Unary(self, expr:syntax.Unary): return self._wrap(expr.op.text, expr.right_operand)
	def visit_Binary(self, expr:syntax.Binary): return self._wrap(expr.op.text, expr.lhs, expr.rhs)
	def visit_Logical(self, expr:syntax.Logical): return self._wrap(expr.op.text, expr.lhs, expr.rhs)
	def visit_Variable(self, expr:syntax.Variable): return expr.name.text
	def visit_Assign(self, expr:syntax.Assign): return self._wrap("=", expr.name.text, expr.value)
	def visit_Call(self, expr:syntax.Call): return self._wrap("call", expr.callee, *expr.args)
	def visit_Get(self, expr:syntax.Get): return self._wrap(".", expr.obj, expr.name.text)
	def visit_Set(self, expr:syntax.Set): return self._wrap("=", self._wrap(".", expr.obj, expr.name.text), expr.value)
	def visit_This(self, expr:syntax.This): return "this"
	def visit_Super(self, expr:syntax.Super): return "(super %s)" % expr.method.text

	def visit_AnonFunction(self, expr:syntax.AnonFunction):
		params = " ".join(p.text for p in expr.params)
		return "(fun (%s) %s)" % (params, self._body(expr.body))

	def visit_Expression(self, stmt:syntax.Expression): return self._wrap(";", stmt.expression)
	def visit_Print(self, stmt:syntax.Print): return self._wrap("print", stmt.expression)
	def visit_Break(self, stmt:syntax.Break): return "(break)"

	def visit_Var(self, stmt:syntax.Var):
		if stmt.initializer is None: return "(var %s)" % stmt.name.text
		return self._wrap("var", stmt.name.text, stmt.initializer)

	def visit_Return(self, stmt:syntax.Return):
		if stmt.value is None: return "(return)"
		return self._wrap("return", stmt.value)

	def visit_Block(self, stmt:syntax.Block):
		return "(block %s)" % self._body(stmt.statements) if stmt.statements else "(block)"

	def visit_If(self, stmt:syntax.If):
		if stmt.else_branch is None: return self._wrap("if", stmt.condition, stmt.then_branch)
		return self._wrap("if-else", stmt.condition, stmt.then_branch, stmt.else_branch)

	def visit_While(self, stmt:syntax.While): return self._wrap("while", stmt.condition, stmt.body)

	def visit_For(self, stmt:syntax.For):
		parts = [
			"_" if part is None else self.visit(part)
			for part in (stmt.initializer, stmt.condition, stmt.increment)
		]
		return "(for %s %s)" % (" ".join(parts), self.visit(stmt.body))

	def visit_Function(self, stmt:syntax.Function):
		params = " ".join(p.text for p in stmt.params)
		return "(fun %s (%s) %s)" % (stmt.name.text, params, self._body(stmt.body))

	def visit_Class(self, stmt:syntax.Class):
		head = stmt.name.text if stmt.superclass is None else "%s < %s" % (stmt.name.text, stmt.superclass.name.text)
		methods = " ".join(self.visit(m) for m in stmt.methods)
		return "(class %s %s)" % (head, methods) if methods else "(class %s)" % head

def show_program(statements:Sequence[Stmt]) -> str:
	printer = AstPrinter()
	return "\n".join(printer.show(s) for s in statements)
