"""
The tree-walker proper.

Statements are executed for effect and answer with an Outcome.
Expressions are evaluated for value. Local variables are found via the
resolver's distance table; anything not in that table is a global.
"""

from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from .. import syntax
from ..ontology import Nom, Expr, Stmt, LoxRuntimeError
from ..environment import Environment
from ..primitive import install_natives
from .types import VALUE, Outcome, NORMAL, BREAK, Returning, EscapedSignal
from .values import Callable, Function, LoxClass, Instance
from .runtime import is_truthy, stringify, binary_operation, unary_operation

class Interpreter(Visitor):
	globals: Environment
	environment: Environment
	distances: dict[Expr, int]

	def __init__(self):
		self.globals = Environment()
		self.environment = self.globals
		self.distances = {}
		install_natives(self.globals)

	def interpret(self, statements:Sequence[Stmt], distances:dict[Expr, int]) -> Optional[LoxRuntimeError]:
		"""
		Run a whole program. A run-time error stops everything;
		it comes back as the result rather than being raised.
		Globals persist from one call to the next, which suits a REPL.
		Distances accumulate too: a function declared by an earlier program
		may run during a later one, and its locals are found by the old entries.
		"""
		self.distances.update(distances)
		try:
			for stmt in statements:
				outcome = self.execute(stmt)
				if outcome is not NORMAL:
					raise EscapedSignal(stmt, outcome)
		except LoxRuntimeError as ex:
			self.environment = self.globals
			return ex

	def execute(self, stmt:Stmt) -> Outcome:
		return self.visit(stmt)

	def evaluate(self, expr:Expr) -> VALUE:
		return self.visit(expr)

	def execute_block(self, statements:Sequence[Stmt], environment:Environment) -> Outcome:
		previous = self.environment
		try:
			self.environment = environment
			for stmt in statements:
				outcome = self.execute(stmt)
				if outcome is not NORMAL: return outcome
			return NORMAL
		finally:
			self.environment = previous

	def _look_up(self, name:Nom, expr:Expr) -> VALUE:
		distance = self.distances.get(expr)
		if distance is None: return self.globals.get(name)
		else: return self.environment.get_at(distance, name.text)

	###########################################################################
	#  Statements

	def visit_Expression(self, stmt:syntax.Expression) -> Outcome:
		self.evaluate(stmt.expression)
		return NORMAL

	def visit_Print(self, stmt:syntax.Print) -> Outcome:
		print(stringify(self.evaluate(stmt.expression)))
		return NORMAL

	def visit_Var(self, stmt:syntax.Var) -> Outcome:
		value = None if stmt.initializer is None else self.evaluate(stmt.initializer)
		self.environment.define(stmt.name.text, value)
		return NORMAL

	def visit_Block(self, stmt:syntax.Block) -> Outcome:
		return self.execute_block(stmt.statements, Environment(self.environment))

	def visit_If(self, stmt:syntax.If) -> Outcome:
		if is_truthy(self.evaluate(stmt.condition)):
			return self.execute(stmt.then_branch)
		elif stmt.else_branch is not None:
			return self.execute(stmt.else_branch)
		return NORMAL

	def visit_While(self, stmt:syntax.While) -> Outcome:
		while is_truthy(self.evaluate(stmt.condition)):
			outcome = self.execute(stmt.body)
			if outcome is BREAK: break
			if outcome is not NORMAL: return outcome
		return NORMAL

	def visit_For(self, stmt:syntax.For) -> Outcome:
		return self.execute(stmt.lowered)

	def visit_Break(self, stmt:syntax.Break) -> Outcome:
		return BREAK

	def visit_Return(self, stmt:syntax.Return) -> Outcome:
		value = None if stmt.value is None else self.evaluate(stmt.value)
		return Returning(value)

	def visit_Function(self, stmt:syntax.Function) -> Outcome:
		self.environment.define(stmt.name.text, Function(stmt, self.environment))
		return NORMAL

	def visit_Class(self, stmt:syntax.Class) -> Outcome:
		superclass = None
		if stmt.superclass is not None:
			superclass = self.evaluate(stmt.superclass)
			if not isinstance(superclass, LoxClass):
				raise LoxRuntimeError(stmt.superclass.name, "Superclass must be a class.")
		self.environment.define(stmt.name.text, None)
		enclosing = self.environment
		if superclass is not None:
			enclosing = Environment(enclosing)
			enclosing.define("super", superclass)
		methods = {
			m.name.text: Function(m, enclosing, m.name.text == "init")
			for m in stmt.methods
		}
		self.environment.define(stmt.name.text, LoxClass(stmt.name.text, superclass, methods))
		return NORMAL

	###########################################################################
	#  Expressions

	def visit_Literal(self, expr:syntax.Literal) -> VALUE:
		return expr.value

	def visit_Grouping(self, expr:syntax.Grouping) -> VALUE:
		return self.evaluate(expr.expression)

	def visit_Variable(self, expr:syntax.Variable) -> VALUE:
		return self._look_up(expr.name, expr)

	def visit_Assign(self, expr:syntax.Assign) -> VALUE:
		value = self.evaluate(expr.value)
		distance = self.distances.get(expr)
		if distance is None: self.globals.assign(expr.name, value)
		else: self.environment.assign_at(distance, expr.name.text, value)
		return value

	def visit_Unary(self, expr:syntax.Unary) -> VALUE:
		return unary_operation(expr.op, self.evaluate(expr.right_operand))

	def visit_Binary(self, expr:syntax.Binary) -> VALUE:
		lhs = self.evaluate(expr.lhs)
		rhs = self.evaluate(expr.rhs)
		return binary_operation(expr.op, lhs, rhs)

	def visit_Logical(self, expr:syntax.Logical) -> VALUE:
		lhs = self.evaluate(expr.lhs)
		if expr.op.text == "or":
			if is_truthy(lhs): return lhs
		elif not is_truthy(lhs):
			return lhs
		return self.evaluate(expr.rhs)

	def visit_Call(self, expr:syntax.Call) -> VALUE:
		callee = self.evaluate(expr.callee)
		args = [self.evaluate(a) for a in expr.args]
		if not isinstance(callee, Callable):
			raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")
		if len(args) != callee.arity():
			pattern = "Expected %d arguments but got %d."
			raise LoxRuntimeError(expr.paren, pattern % (callee.arity(), len(args)))
		try:
			return callee.call(self, args)
		except RecursionError:
			raise LoxRuntimeError(expr.paren, "Stack overflow.") from None

	def visit_AnonFunction(self, expr:syntax.AnonFunction) -> VALUE:
		return Function(expr, self.environment)

	def visit_Get(self, expr:syntax.Get) -> VALUE:
		obj = self.evaluate(expr.obj)
		if isinstance(obj, Instance):
			return obj.get(expr.name)
		raise LoxRuntimeError(expr.name, "Only instances have properties.")

	def visit_Set(self, expr:syntax.Set) -> VALUE:
		obj = self.evaluate(expr.obj)
		if not isinstance(obj, Instance):
			raise LoxRuntimeError(expr.name, "Only instances have fields.")
		value = self.evaluate(expr.value)
		obj.set(expr.name, value)
		return value

	def visit_This(self, expr:syntax.This) -> VALUE:
		return self._look_up(expr.keyword, expr)

	def visit_Super(self, expr:syntax.Super) -> VALUE:
		distance = self.distances[expr]
		superclass = self.environment.get_at(distance, "super")
		# The frame holding `this` is always just inside the one holding `super`.
		receiver = self.environment.get_at(distance - 1, "this")
		method = superclass.find_method(expr.method.text)
		if method is None:
			raise LoxRuntimeError(expr.method, "Undefined property '%s'." % expr.method.text)
		return method.bind(receiver)
