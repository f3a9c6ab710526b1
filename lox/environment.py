"""
The canonical list-structured search, with a short-cut.

Each frame holds its own bindings and a link to the frame that encloses it.
Globals get looked up by searching outward. Everything else was already
located by the resolver, so those look-ups walk a known number of links
and touch exactly one frame.
"""
from typing import Any, Optional
from .ontology import Nom, LoxRuntimeError

class Environment:
	enclosing: Optional["Environment"]

	def __init__(self, enclosing:Optional["Environment"]=None):
		self.values = {}
		self.enclosing = enclosing

	def define(self, name:str, value:Any):
		""" Re-definition in the same frame is fine: the new binding wins. """
		self.values[name] = value

	def get(self, name:Nom) -> Any:
		env = self
		while env is not None:
			if name.text in env.values: return env.values[name.text]
			env = env.enclosing
		raise LoxRuntimeError(name, "Undefined variable '%s'." % name.text)

	def assign(self, name:Nom, value:Any):
		env = self
		while env is not None:
			if name.text in env.values:
				env.values[name.text] = value
				return
			env = env.enclosing
		raise LoxRuntimeError(name, "Undefined variable '%s'." % name.text)

	def ancestor(self, distance:int) -> "Environment":
		env = self
		for _ in range(distance):
			env = env.enclosing
			assert env is not None, "Resolver and run-time disagree about scope depth"
		return env

	def get_at(self, distance:int, name:str) -> Any:
		frame = self.ancestor(distance).values
		assert name in frame, (name, distance)
		return frame[name]

	def assign_at(self, distance:int, name:str, value:Any):
		frame = self.ancestor(distance).values
		assert name in frame, (name, distance)
		frame[name] = value

	def __repr__(self):
		depth = 0
		env = self.enclosing
		while env is not None:
			depth, env = depth + 1, env.enclosing
		return "<Environment depth=%d %s>" % (depth, sorted(self.values))
