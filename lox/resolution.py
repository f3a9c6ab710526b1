"""
All the static resolution stuff goes here.
By the time this pass is finished, every local variable reference knows
exactly how many scopes out its definition lives. References with no
entry in the table are globals, which get found by name at run-time
because a global may legitimately be defined after the code that uses it.

This pass also rejects programs that are structurally wrong
(return at top level, break outside a loop, and so forth)
so that nothing runs at all if anything is amiss.
"""
from pathlib import Path
from typing import Optional, Sequence, TypeAlias
from boozetools.support.foundation import Visitor
from . import syntax
from .ontology import Nom, Expr, Stmt
from .diagnostics import Report
from .front_end import parse_text

DistanceTable:TypeAlias = dict[Expr, int]

class Yuck(Exception):
	"""
	The first argument will be the name of the pass fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

# What sort of function body are we in?
NO_FUNCTION, FUNCTION, METHOD, INITIALIZER = "none", "function", "method", "initializer"
# What sort of class body are we in?
NO_CLASS, CLASS, SUBCLASS = "none", "class", "subclass"

class Resolver(Visitor):
	"""
	One forward walk over the tree. Each scope maps a name to whether
	its declaration is finished: False while the initializer is still
	being resolved, True after that.
	"""
	distances: DistanceTable
	_scopes: list[dict[str, bool]]

	def __init__(self, report:Report):
		self._report = report
		self.distances = {}
		self._scopes = []
		self._function_kind = NO_FUNCTION
		self._class_kind = NO_CLASS
		self._loop_depth = 0
		self._global_initializer = None

	def resolve(self, statements:Sequence[Stmt]) -> DistanceTable:
		self.tour(statements)
		self._report.info("Resolved %d local reference(s)." % len(self.distances))
		return self.distances

	def tour(self, items):
		for i in items:
			self.visit(i)

	# Scope book-keeping:

	def _begin_scope(self): self._scopes.append({})
	def _end_scope(self): self._scopes.pop()

	def _declare(self, name:Nom):
		if self._scopes: self._scopes[-1][name.text] = False

	def _define(self, name:Nom):
		if self._scopes: self._scopes[-1][name.text] = True

	def _resolve_local(self, expr:Expr, name:str):
		for hops, scope in enumerate(reversed(self._scopes)):
			if name in scope:
				self.distances[expr] = hops
				return
		# Not found locally: leave it for the globals.

	def _resolve_function(self, params:Sequence[Nom], body:Sequence[Stmt], kind:str):
		enclosing_kind, enclosing_loops = self._function_kind, self._loop_depth
		self._function_kind, self._loop_depth = kind, 0
		self._begin_scope()
		seen = {}
		for p in params:
			if p.text in seen: self._report.duplicate_parameter(seen[p.text], p)
			else: seen[p.text] = p
			self._declare(p)
			self._define(p)
		self.tour(body)
		self._end_scope()
		self._function_kind, self._loop_depth = enclosing_kind, enclosing_loops

	# Statements:

	def visit_Block(self, block:syntax.Block):
		self._begin_scope()
		self.tour(block.statements)
		self._end_scope()

	def visit_Var(self, var:syntax.Var):
		self._declare(var.name)
		if var.initializer is not None:
			enclosing = self._global_initializer
			if not self._scopes: self._global_initializer = var.name.text
			self.visit(var.initializer)
			self._global_initializer = enclosing
		self._define(var.name)

	def visit_Function(self, fn:syntax.Function):
		# Defined before the body, so that it may call itself.
		self._declare(fn.name)
		self._define(fn.name)
		self._resolve_function(fn.params, fn.body, FUNCTION)

	def visit_Class(self, cls:syntax.Class):
		enclosing_class = self._class_kind
		self._class_kind = CLASS
		self._declare(cls.name)
		self._define(cls.name)
		if cls.superclass is not None:
			if cls.superclass.name.text == cls.name.text:
				self._report.inherits_from_itself(cls.superclass.name)
			self.visit(cls.superclass)
			self._class_kind = SUBCLASS
			self._begin_scope()
			self._scopes[-1]["super"] = True
		self._begin_scope()
		self._scopes[-1]["this"] = True
		for method in cls.methods:
			kind = INITIALIZER if method.name.text == "init" else METHOD
			self._resolve_function(method.params, method.body, kind)
		self._end_scope()
		if cls.superclass is not None:
			self._end_scope()
		self._class_kind = enclosing_class

	def visit_Expression(self, stmt:syntax.Expression):
		self.visit(stmt.expression)

	def visit_Print(self, stmt:syntax.Print):
		self.visit(stmt.expression)

	def visit_If(self, stmt:syntax.If):
		self.visit(stmt.condition)
		self.visit(stmt.then_branch)
		if stmt.else_branch is not None:
			self.visit(stmt.else_branch)

	def visit_While(self, stmt:syntax.While):
		self.visit(stmt.condition)
		self._loop_depth += 1
		self.visit(stmt.body)
		self._loop_depth -= 1

	def visit_For(self, stmt:syntax.For):
		self.visit(stmt.lowered)

	def visit_Break(self, stmt:syntax.Break):
		if not self._loop_depth:
			self._report.break_outside_loop(stmt.keyword)

	def visit_Return(self, stmt:syntax.Return):
		if self._function_kind == NO_FUNCTION:
			self._report.return_at_top_level(stmt.keyword)
		if stmt.value is not None:
			self.visit(stmt.value)

	# Expressions:

	def visit_Variable(self, expr:syntax.Variable):
		if self._scopes: pending = self._scopes[-1].get(expr.name.text) is False
		else: pending = expr.name.text == self._global_initializer
		if pending:
			self._report.self_reference_in_initializer(expr.name)
		self._resolve_local(expr, expr.name.text)

	def visit_Assign(self, expr:syntax.Assign):
		self.visit(expr.value)
		self._resolve_local(expr, expr.name.text)

	def visit_AnonFunction(self, expr:syntax.AnonFunction):
		self._resolve_function(expr.params, expr.body, FUNCTION)

	def visit_This(self, expr:syntax.This):
		if self._class_kind == NO_CLASS:
			self._report.this_outside_class(expr.keyword)
		else:
			self._resolve_local(expr, "this")

	def visit_Super(self, expr:syntax.Super):
		if self._class_kind == NO_CLASS:
			self._report.super_outside_class(expr.keyword)
		elif self._class_kind != SUBCLASS:
			self._report.super_without_superclass(expr.keyword)
		else:
			self._resolve_local(expr, "super")

	def visit_Literal(self, expr:syntax.Literal): pass

	def visit_Grouping(self, expr:syntax.Grouping):
		self.visit(expr.expression)

	def visit_Unary(self, expr:syntax.Unary):
		self.visit(expr.right_operand)

	def visit_Binary(self, expr:syntax.Binary):
		self.visit(expr.lhs)
		self.visit(expr.rhs)

	def visit_Logical(self, expr:syntax.Logical):
		self.visit(expr.lhs)
		self.visit(expr.rhs)

	def visit_Call(self, expr:syntax.Call):
		self.visit(expr.callee)
		self.tour(expr.args)

	def visit_Get(self, expr:syntax.Get):
		self.visit(expr.obj)

	def visit_Set(self, expr:syntax.Set):
		self.visit(expr.value)
		self.visit(expr.obj)

###############################################################################

class RoadMap:
	"""
	A program that has made it through every static pass:
	the statements to run and where to find each local variable.
	"""
	statements: list[Stmt]
	distances: DistanceTable

	def __init__(self, text:str, report:Report, path:Optional[Path]=None):
		self.path = path
		self.statements = parse_text(text, report, path)
		if report.sick(): raise Yuck("parse")
		self.distances = Resolver(report).resolve(self.statements)
		if report.sick(): raise Yuck("resolve")

	@staticmethod
	def from_path(path:Path, report:Report) -> "RoadMap":
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
		return RoadMap(text, report, path)

def resolve_words(statements:Sequence[Stmt], report:Report) -> DistanceTable:
	""" For callers that did their own parsing. The report says whether it worked. """
	return Resolver(report).resolve(statements)
