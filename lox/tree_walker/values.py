"""
Run-time objects with behavior: functions, bound methods, natives, classes and instances.
Nil, booleans, numbers and strings are plain Python values and play themselves.
"""
from abc import ABC, abstractmethod
from typing import Optional, Union
from .. import syntax
from ..ontology import Nom, LoxRuntimeError
from ..environment import Environment
from .types import ARGS, VALUE, Returning

###############################################################################

class Callable(ABC):
	""" A run-time object that can be applied with arguments. """
	@abstractmethod
	def arity(self) -> int: pass

	@abstractmethod
	def call(self, interpreter, args: ARGS) -> VALUE: pass

class Function(Callable):
	""" The run-time manifestation of a function: the declaration tied to its natal environment. """
	def __init__(self, declaration:Union[syntax.Function, syntax.AnonFunction], closure:Environment, is_initializer:bool=False):
		self.declaration = declaration
		self.closure = closure
		self.is_initializer = is_initializer

	def arity(self) -> int: return len(self.declaration.params)

	def call(self, interpreter, args: ARGS) -> VALUE:
		return self.invoke(interpreter, args, self.closure)

	def invoke(self, interpreter, args: ARGS, closure:Environment) -> VALUE:
		# The new frame hangs off the closure, not the caller: lexical scope.
		frame = Environment(closure)
		for param, arg in zip(self.declaration.params, args):
			frame.define(param.text, arg)
		outcome = interpreter.execute_block(self.declaration.body, frame)
		if self.is_initializer: return closure.get_at(0, "this")
		if isinstance(outcome, Returning): return outcome.value
		return None

	def bind(self, receiver:"Instance") -> "BoundMethod":
		return BoundMethod(self, receiver)

	def name(self) -> Optional[str]:
		nom = self.declaration.name
		return None if nom is None else nom.text

	def __str__(self):
		name = self.name()
		return "<fn>" if name is None else "<fn %s>" % name

class BoundMethod(Callable):
	"""
	A method paired with its receiver. Each access makes a fresh one,
	each with its own little frame holding `this`.
	"""
	def __init__(self, method:Function, receiver:"Instance"):
		self.method = method
		self.receiver = receiver
		self.frame = Environment(method.closure)
		self.frame.define("this", receiver)

	def arity(self) -> int: return self.method.arity()

	def call(self, interpreter, args: ARGS) -> VALUE:
		return self.method.invoke(interpreter, args, self.frame)

	def __str__(self): return str(self.method)

class NativeFunction(Callable):
	""" All parameters to native functions are plain values, and so is the result. """
	def __init__(self, name:str, arity:int, fn:callable):
		self.name = name
		self._arity = arity
		self._fn = fn

	def arity(self) -> int: return self._arity

	def call(self, interpreter, args: ARGS) -> VALUE:
		return self._fn(*args)

	def __str__(self): return "<native fn>"

class LoxClass(Callable):
	def __init__(self, name:str, superclass:Optional["LoxClass"], methods:dict[str, Function]):
		self.name = name
		self.superclass = superclass
		self.methods = methods

	def find_method(self, name:str) -> Optional[Function]:
		klass = self
		while klass is not None:
			if name in klass.methods: return klass.methods[name]
			klass = klass.superclass
		return None

	def arity(self) -> int:
		initializer = self.find_method("init")
		return 0 if initializer is None else initializer.arity()

	def call(self, interpreter, args: ARGS) -> "Instance":
		instance = Instance(self)
		initializer = self.find_method("init")
		if initializer is not None:
			initializer.bind(instance).call(interpreter, args)
		return instance

	def __str__(self): return self.name

class Instance:
	def __init__(self, klass:LoxClass):
		self.klass = klass
		self.fields = {}

	def get(self, name:Nom) -> VALUE:
		""" Fields shadow methods. """
		if name.text in self.fields:
			return self.fields[name.text]
		method = self.klass.find_method(name.text)
		if method is not None:
			return method.bind(self)
		raise LoxRuntimeError(name, "Undefined property '%s'." % name.text)

	def set(self, name:Nom, value:VALUE):
		self.fields[name.text] = value

	def __str__(self): return "%s instance" % self.klass.name
