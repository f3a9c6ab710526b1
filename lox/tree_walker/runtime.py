"""
The meaning of the operators, and the rules for truth and for printing.
Coercions are few and explicit: the only one is that `+` will render
a number as text when the other side is a string.
"""
import operator
from ..ontology import Nom, LoxRuntimeError
from .types import VALUE

def is_truthy(value:VALUE) -> bool:
	""" Only nil and false are false. Zero and the empty string are true. """
	return not (value is None or value is False)

def is_equal(a:VALUE, b:VALUE) -> bool:
	if a is None or b is None: return a is b
	# Python thinks True == 1.0, but that's a cross-variant comparison here.
	if type(a) is not type(b): return False
	if isinstance(a, (bool, float, str)): return a == b
	return a is b

def is_number(value:VALUE) -> bool:
	return type(value) is float

def stringify(value:VALUE) -> str:
	if value is None: return "nil"
	if value is True: return "true"
	if value is False: return "false"
	if is_number(value):
		text = repr(value)
		return text[:-2] if text.endswith(".0") else text
	return str(value)

###############################################################################

def _check_number_operand(op:Nom, operand:VALUE):
	if not is_number(operand):
		raise LoxRuntimeError(op, "Operand must be a number.")

def _check_number_operands(op:Nom, a:VALUE, b:VALUE):
	if not (is_number(a) and is_number(b)):
		raise LoxRuntimeError(op, "Operands must be numbers.")

def _numeric(fn):
	def checked(op:Nom, a:VALUE, b:VALUE):
		_check_number_operands(op, a, b)
		return fn(a, b)
	return checked

def _add(op:Nom, a:VALUE, b:VALUE):
	if is_number(a) and is_number(b): return a + b
	if isinstance(a, str) and isinstance(b, str): return a + b
	if isinstance(a, str) and is_number(b): return a + stringify(b)
	if is_number(a) and isinstance(b, str): return stringify(a) + b
	raise LoxRuntimeError(op, "Operands must be two numbers or two strings.")

def _divide(op:Nom, a:VALUE, b:VALUE):
	_check_number_operands(op, a, b)
	if b == 0: raise LoxRuntimeError(op, "Division by zero.")
	return a / b

BINARY = {
	"+"  : _add,
	"/"  : _divide,
	"-"  : _numeric(operator.sub),
	"*"  : _numeric(operator.mul),
	">"  : _numeric(operator.gt),
	">=" : _numeric(operator.ge),
	"<"  : _numeric(operator.lt),
	"<=" : _numeric(operator.le),
	"==" : lambda op, a, b: is_equal(a, b),
	"!=" : lambda op, a, b: not is_equal(a, b),
}

def _negate(op:Nom, a:VALUE):
	_check_number_operand(op, a)
	return -a

UNARY = {
	"-" : _negate,
	"!" : lambda op, a: not is_truthy(a),
}

def binary_operation(op:Nom, a:VALUE, b:VALUE) -> VALUE:
	return BINARY[op.text](op, a, b)

def unary_operation(op:Nom, a:VALUE) -> VALUE:
	return UNARY[op.text](op, a)
