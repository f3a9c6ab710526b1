"""
Recursive-descent parser: turns a token stream into the tree in `syntax`.

Syntax errors go on the report. After each one, the parser skips ahead
to a likely statement boundary and carries on, so one run can point out
several mistakes. Anything with a syntax error never reaches the resolver.
"""
from pathlib import Path
from typing import Optional
from . import syntax
from .ontology import Nom, Expr, Stmt
from .diagnostics import Report
from .scanner import Token, scan

MAX_ARGS = 255

class LoxParseError(Exception):
	""" Internal signal for panic-mode recovery; the report already knows. """

_STATEMENT_STARTERS = frozenset(["CLASS", "FUN", "VAR", "FOR", "IF", "WHILE", "PRINT", "RETURN", "BREAK"])

class Parser:
	def __init__(self, tokens:list[Token], report:Report):
		assert tokens and tokens[-1].kind == "EOF"
		self._tokens = tokens
		self._current = 0
		self._report = report

	# Utilities:

	def _peek(self) -> Token: return self._tokens[self._current]
	def _previous(self) -> Token: return self._tokens[self._current - 1]
	def _at_end(self) -> bool: return self._peek().kind == "EOF"

	def _check(self, kind:str) -> bool:
		return self._peek().kind == kind

	def _advance(self) -> Token:
		if not self._at_end(): self._current += 1
		return self._previous()

	def _match(self, *kinds:str) -> bool:
		if self._peek().kind in kinds:
			self._advance()
			return True
		return False

	def _consume(self, kind:str, message:str) -> Token:
		if self._check(kind): return self._advance()
		raise self._error(self._peek(), message)

	def _error(self, token:Token, message:str) -> LoxParseError:
		self._report.parse_error(token.nom, message)
		return LoxParseError()

	def _synchronize(self):
		self._advance()
		while not self._at_end():
			if self._previous().kind == ";": return
			if self._peek().kind in _STATEMENT_STARTERS: return
			self._advance()

	# Declarations:

	def parse(self) -> list[Stmt]:
		statements = []
		while not self._at_end():
			stmt = self._declaration()
			if stmt is not None: statements.append(stmt)
		return statements

	def _declaration(self) -> Optional[Stmt]:
		try:
			if self._match("CLASS"): return self._class_declaration()
			if self._check("FUN") and self._tokens[self._current + 1].kind == "identifier":
				self._advance()
				return self._function("function")
			if self._match("VAR"): return self._var_declaration()
			return self._statement()
		except LoxParseError:
			self._synchronize()
			return None

	def _class_declaration(self) -> syntax.Class:
		name = self._consume("identifier", "Expect class name.").nom
		superclass = None
		if self._match("<"):
			superclass = syntax.Variable(self._consume("identifier", "Expect superclass name.").nom)
		self._consume("{", "Expect '{' before class body.")
		methods = []
		while not self._check("}") and not self._at_end():
			methods.append(self._function("method"))
		close = self._consume("}", "Expect '}' after class body.").nom
		return syntax.Class(name, superclass, methods, close)

	def _function(self, kind:str) -> syntax.Function:
		name = self._consume("identifier", "Expect %s name." % kind).nom
		params, body, close = self._parameters_and_body(kind)
		return syntax.Function(name, params, body, close)

	def _parameters_and_body(self, kind:str) -> tuple[list[Nom], list[Stmt], Nom]:
		self._consume("(", "Expect '(' after %s name." % kind)
		params = []
		if not self._check(")"):
			while True:
				if len(params) >= MAX_ARGS:
					self._error(self._peek(), "Can't have more than %d parameters." % MAX_ARGS)
				params.append(self._consume("identifier", "Expect parameter name.").nom)
				if not self._match(","): break
		self._consume(")", "Expect ')' after parameters.")
		self._consume("{", "Expect '{' before %s body." % kind)
		body, close = self._block()
		return params, body, close

	def _var_declaration(self) -> syntax.Var:
		name = self._consume("identifier", "Expect variable name.").nom
		initializer = self._expression() if self._match("=") else None
		self._consume(";", "Expect ';' after variable declaration.")
		return syntax.Var(name, initializer)

	# Statements:

	def _statement(self) -> Stmt:
		if self._match("FOR"): return self._for_statement()
		if self._match("IF"): return self._if_statement()
		if self._match("PRINT"): return self._print_statement()
		if self._match("RETURN"): return self._return_statement()
		if self._match("WHILE"): return self._while_statement()
		if self._match("BREAK"): return self._break_statement()
		if self._match("{"):
			_open = self._previous().nom
			statements, close = self._block()
			return syntax.Block(statements, _open, close)
		return self._expression_statement()

	def _for_statement(self) -> syntax.For:
		keyword = self._previous().nom
		self._consume("(", "Expect '(' after 'for'.")
		if self._match(";"): initializer = None
		elif self._match("VAR"): initializer = self._var_declaration()
		else: initializer = self._expression_statement()
		condition = None if self._check(";") else self._expression()
		self._consume(";", "Expect ';' after loop condition.")
		increment = None if self._check(")") else self._expression()
		self._consume(")", "Expect ')' after for clauses.")
		body = self._statement()
		return syntax.For(keyword, initializer, condition, increment, body)

	def _if_statement(self) -> syntax.If:
		keyword = self._previous().nom
		self._consume("(", "Expect '(' after 'if'.")
		condition = self._expression()
		self._consume(")", "Expect ')' after if condition.")
		then_branch = self._statement()
		else_branch = self._statement() if self._match("ELSE") else None
		return syntax.If(keyword, condition, then_branch, else_branch)

	def _print_statement(self) -> syntax.Print:
		keyword = self._previous().nom
		value = self._expression()
		self._consume(";", "Expect ';' after value.")
		return syntax.Print(keyword, value)

	def _return_statement(self) -> syntax.Return:
		keyword = self._previous().nom
		value = None if self._check(";") else self._expression()
		self._consume(";", "Expect ';' after return value.")
		return syntax.Return(keyword, value)

	def _while_statement(self) -> syntax.While:
		keyword = self._previous().nom
		self._consume("(", "Expect '(' after 'while'.")
		condition = self._expression()
		self._consume(")", "Expect ')' after condition.")
		return syntax.While(keyword, condition, self._statement())

	def _break_statement(self) -> syntax.Break:
		keyword = self._previous().nom
		self._consume(";", "Expect ';' after 'break'.")
		return syntax.Break(keyword)

	def _block(self) -> tuple[list[Stmt], Nom]:
		statements = []
		while not self._check("}") and not self._at_end():
			stmt = self._declaration()
			if stmt is not None: statements.append(stmt)
		close = self._consume("}", "Expect '}' after block.").nom
		return statements, close

	def _expression_statement(self) -> syntax.Expression:
		expr = self._expression()
		self._consume(";", "Expect ';' after expression.")
		return syntax.Expression(expr)

	# Expressions:

	def _expression(self) -> Expr:
		return self._assignment()

	def _assignment(self) -> Expr:
		expr = self._or()
		if self._match("="):
			equals = self._previous()
			value = self._assignment()
			if isinstance(expr, syntax.Variable):
				return syntax.Assign(expr.name, value)
			if isinstance(expr, syntax.Get):
				return syntax.Set(expr.obj, expr.name, value)
			# Report, but no need to panic: the parser is not confused.
			self._error(equals, "Invalid assignment target.")
		return expr

	def _or(self) -> Expr:
		expr = self._and()
		while self._match("OR"):
			op = self._previous().nom
			expr = syntax.Logical(expr, op, self._and())
		return expr

	def _and(self) -> Expr:
		expr = self._equality()
		while self._match("AND"):
			op = self._previous().nom
			expr = syntax.Logical(expr, op, self._equality())
		return expr

	def _binary_level(self, operand, *ops) -> Expr:
		expr = operand()
		while self._match(*ops):
			op = self._previous().nom
			expr = syntax.Binary(expr, op, operand())
		return expr

	def _equality(self) -> Expr: return self._binary_level(self._comparison, "!=", "==")
	def _comparison(self) -> Expr: return self._binary_level(self._term, ">", ">=", "<", "<=")
	def _term(self) -> Expr: return self._binary_level(self._factor, "-", "+")
	def _factor(self) -> Expr: return self._binary_level(self._unary, "/", "*")

	def _unary(self) -> Expr:
		if self._match("!", "-"):
			op = self._previous().nom
			return syntax.Unary(op, self._unary())
		return self._call()

	def _call(self) -> Expr:
		expr = self._primary()
		while True:
			if self._match("("):
				expr = self._finish_call(expr)
			elif self._match("."):
				name = self._consume("identifier", "Expect property name after '.'.").nom
				expr = syntax.Get(expr, name)
			else:
				return expr

	def _finish_call(self, callee:Expr) -> syntax.Call:
		args = []
		if not self._check(")"):
			while True:
				if len(args) >= MAX_ARGS:
					self._error(self._peek(), "Can't have more than %d arguments." % MAX_ARGS)
				args.append(self._expression())
				if not self._match(","): break
		paren = self._consume(")", "Expect ')' after arguments.").nom
		return syntax.Call(callee, paren, args)

	def _primary(self) -> Expr:
		token = self._peek()
		if self._match("FALSE"): return syntax.Literal(False, token.nom)
		if self._match("TRUE"): return syntax.Literal(True, token.nom)
		if self._match("NIL"): return syntax.Literal(None, token.nom)
		if self._match("number", "string"): return syntax.Literal(token.value, token.nom)
		if self._match("THIS"): return syntax.This(token.nom)
		if self._match("SUPER"):
			self._consume(".", "Expect '.' after 'super'.")
			method = self._consume("identifier", "Expect superclass method name.").nom
			return syntax.Super(token.nom, method)
		if self._match("identifier"): return syntax.Variable(token.nom)
		if self._match("FUN"):
			params, body, close = self._parameters_and_body("function")
			return syntax.AnonFunction(token.nom, params, body, close)
		if self._match("("):
			expr = self._expression()
			close = self._consume(")", "Expect ')' after expression.").nom
			return syntax.Grouping(expr, token.nom, close)
		raise self._error(token, "Expect expression.")

###############################################################################

def parse_tokens(tokens:list[Token], report:Report) -> list[Stmt]:
	return Parser(tokens, report).parse()

def parse_text(text:str, report:Report, path:Optional[Path]=None) -> list[Stmt]:
	""" Scan and parse; any complaints land on the report. """
	tokens = scan(text, report, path)
	return parse_tokens(tokens, report)
