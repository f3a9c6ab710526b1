"""
These most-fundamental classes are separate from the rest to avoid
various circular-import scenarios. The syntax tree, the environment,
and the run-time all need to agree on what a name-occurrence is and
on what a run-time fault looks like, but none of them should need
to import the others just for that.
"""

class Phrase:
	def left(self) -> int:
		""" Return the index of the leftmost token of this phrase """
		raise NotImplementedError(type(self))
	def right(self) -> int:
		""" Return the index of the rightmost token of this phrase """
		raise NotImplementedError(type(self))
	def span(self) -> tuple[int, int]: return self.left(), self.right()

class Nom(Phrase):
	""" Representing the occurrence of a name (or any other significant token) anywhere. """
	spot: int  # zero-spot means pre-defined term.
	def __init__(self, text, spot):
		assert isinstance(text, str)
		assert isinstance(spot, int) or spot is None, type(spot)
		self.text, self.spot = text, spot or 0
	def __repr__(self): return "<Name %r>" % self.text
	def key(self): return self.text
	def left(self): return self.spot
	def right(self): return self.spot

class Expr(Phrase): pass

class Stmt(Phrase): pass

class LoxRuntimeError(Exception):
	"""
	A dynamic defect in the running program. It aborts the whole program;
	the language offers no way to catch it.
	"""
	def __init__(self, token:Nom, message:str):
		super().__init__(message)
		self.token = token
		self.message = message
