"""
The interface agreement between the evaluator and the data it pushes around:
what counts as a value, and what becomes of a statement once executed.
"""

from typing import Union, Sequence, TYPE_CHECKING
from ..ontology import Stmt

if TYPE_CHECKING:
	from .values import Callable, Instance

# nil is None, booleans are bool, numbers are always float.
VALUE = Union[None, bool, float, str, "Callable", "Instance"]
ARGS = Sequence[VALUE]

###############################################################################

class Outcome:
	"""
	What became of executing a statement. Most statements just finish;
	`break` and `return` are passed up the chain of statement-executing
	routines until the loop or function call that consumes them.
	"""
	def __init__(self, name:str): self._name = name
	def __repr__(self): return self._name

NORMAL = Outcome("NORMAL")
BREAK = Outcome("BREAK")

class Returning(Outcome):
	def __init__(self, value:VALUE):
		super().__init__("RETURN")
		self.value = value
	def __repr__(self): return "RETURN(%r)" % (self.value,)

class EscapedSignal(Exception):
	""" A break or return made it to the top level. The resolver should have prevented that. """
	def __init__(self, statement:Stmt, outcome:Outcome):
		super().__init__(statement, outcome)
		self.statement, self.outcome = statement, outcome
