"""
The set of parse-nodes in simple form.
The parser calls these constructors as it descends through the grammar.
Once built, the tree is not modified: later passes keep their findings in
side-tables keyed by node identity, so the same tree may be resolved or
evaluated any number of times.
"""
from typing import Optional, Any, Sequence
from .ontology import Expr, Stmt, Nom

###############################################################################
#  Expressions

class Literal(Expr):
	def __init__(self, value:Any, token:Nom):
		self.value, self.token = value, token
	def left(self): return self.token.left()
	def right(self): return self.token.right()
	def __repr__(self): return "<lit %r>"%(self.value,)

class Grouping(Expr):
	def __init__(self, expression:Expr, _open:Nom, _close:Nom):
		self.expression = expression
		self._open, self._close = _open, _close
	def left(self): return self._open.left()
	def right(self): return self._close.right()

class Unary(Expr):
	def __init__(self, op:Nom, right:Expr):
		self.op, self.right_operand = op, right
	def left(self): return self.op.left()
	def right(self): return self.right_operand.right()

class Binary(Expr):
	def __init__(self, lhs:Expr, op:Nom, rhs:Expr):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def left(self): return self.lhs.left()
	def right(self): return self.rhs.right()

class Logical(Binary):
	""" Same shape as Binary, but the right-hand side may never be evaluated. """

class Variable(Expr):
	def __init__(self, name:Nom): self.name = name
	def left(self): return self.name.left()
	def right(self): return self.name.right()
	def __repr__(self): return "<var %s>"%self.name.text

class Assign(Expr):
	def __init__(self, name:Nom, value:Expr):
		self.name, self.value = name, value
	def left(self): return self.name.left()
	def right(self): return self.value.right()

class Call(Expr):
	def __init__(self, callee:Expr, paren:Nom, args:Sequence[Expr]):
		self.callee, self.paren, self.args = callee, paren, args
	def left(self): return self.callee.left()
	def right(self): return self.paren.right()

class Get(Expr):
	def __init__(self, obj:Expr, name:Nom):
		self.obj, self.name = obj, name
	def left(self): return self.obj.left()
	def right(self): return self.name.right()

class Set(Expr):
	def __init__(self, obj:Expr, name:Nom, value:Expr):
		self.obj, self.name, self.value = obj, name, value
	def left(self): return self.obj.left()
	def right(self): return self.value.right()

class This(Expr):
	def __init__(self, keyword:Nom): self.keyword = keyword
	def left(self): return self.keyword.left()
	def right(self): return self.keyword.right()

class Super(Expr):
	def __init__(self, keyword:Nom, method:Nom):
		self.keyword, self.method = keyword, method
	def left(self): return self.keyword.left()
	def right(self): return self.method.right()

class AnonFunction(Expr):
	""" A function expression: `fun (a, b) { ... }` """
	name = None
	def __init__(self, keyword:Nom, params:Sequence[Nom], body:Sequence[Stmt], _close:Nom):
		self.keyword, self.params, self.body = keyword, params, body
		self._close = _close
	def left(self): return self.keyword.left()
	def right(self): return self._close.right()

###############################################################################
#  Statements

class Expression(Stmt):
	def __init__(self, expression:Expr):
		self.expression = expression
	def left(self): return self.expression.left()
	def right(self): return self.expression.right()

class Print(Stmt):
	def __init__(self, keyword:Nom, expression:Expr):
		self.keyword, self.expression = keyword, expression
	def left(self): return self.keyword.left()
	def right(self): return self.expression.right()

class Var(Stmt):
	def __init__(self, name:Nom, initializer:Optional[Expr]):
		self.name, self.initializer = name, initializer
	def left(self): return self.name.left()
	def right(self): return (self.initializer or self.name).right()

class Block(Stmt):
	def __init__(self, statements:Sequence[Stmt], _open:Optional[Nom]=None, _close:Optional[Nom]=None):
		self.statements = statements
		self._open, self._close = _open, _close
	def left(self): return (self._open or self.statements[0]).left()
	def right(self): return (self._close or self.statements[-1]).right()

class If(Stmt):
	def __init__(self, keyword:Nom, condition:Expr, then_branch:Stmt, else_branch:Optional[Stmt]):
		self.keyword, self.condition = keyword, condition
		self.then_branch, self.else_branch = then_branch, else_branch
	def left(self): return self.keyword.left()
	def right(self): return (self.else_branch or self.then_branch).right()

class While(Stmt):
	def __init__(self, keyword:Nom, condition:Expr, body:Stmt):
		self.keyword, self.condition, self.body = keyword, condition, body
	def left(self): return self.keyword.left()
	def right(self): return self.body.right()

class For(Stmt):
	"""
	Kept as its own node for the sake of diagnostics and printing,
	but every other pass works on the equivalent `while` loop in `.lowered`.
	The increment goes at the end of the same block as the body,
	so a closure made in the body sees that iteration's own variables.
	"""
	lowered: Stmt
	def __init__(self, keyword:Nom, initializer:Optional[Stmt], condition:Optional[Expr], increment:Optional[Expr], body:Stmt):
		self.keyword = keyword
		self.initializer, self.condition, self.increment, self.body = initializer, condition, increment, body
		self.lowered = self._lower()

	def _lower(self) -> Stmt:
		body = self.body
		if self.increment is not None:
			tail = Expression(self.increment)
			if isinstance(body, Block):
				body = Block([*body.statements, tail], body._open, body._close)
			else:
				body = Block([body, tail])
		condition = self.condition or Literal(True, self.keyword)
		loop = While(self.keyword, condition, body)
		if self.initializer is None: return loop
		else: return Block([self.initializer, loop])

	def left(self): return self.keyword.left()
	def right(self): return self.body.right()

class Break(Stmt):
	def __init__(self, keyword:Nom): self.keyword = keyword
	def left(self): return self.keyword.left()
	def right(self): return self.keyword.right()

class Return(Stmt):
	def __init__(self, keyword:Nom, value:Optional[Expr]):
		self.keyword, self.value = keyword, value
	def left(self): return self.keyword.left()
	def right(self): return (self.value or self.keyword).right()

class Function(Stmt):
	""" Named function declarations, and also the methods of a class. """
	def __init__(self, name:Nom, params:Sequence[Nom], body:Sequence[Stmt], _close:Nom):
		self.name, self.params, self.body = name, params, body
		self._close = _close
	def left(self): return self.name.left()
	def right(self): return self._close.right()
	def __repr__(self): return "<fun %s>"%self.name.text

class Class(Stmt):
	def __init__(self, name:Nom, superclass:Optional[Variable], methods:Sequence[Function], _close:Nom):
		self.name, self.superclass, self.methods = name, superclass, methods
		self._close = _close
	def left(self): return self.name.left()
	def right(self): return self._close.right()
	def __repr__(self): return "<class %s>"%self.name.text
