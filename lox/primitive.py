"""
Build the primitive namespace: the native functions every program can see.
This is the only way time or output gets into a program other than `print`.
"""
import time
from .environment import Environment
from .tree_walker.values import NativeFunction
from .tree_walker.runtime import stringify

def _clock():
	return time.time()

def _out(value):
	print(stringify(value))

NATIVES = [
	NativeFunction("clock", 0, _clock),
	NativeFunction("out", 1, _out),
]

def install_natives(env:Environment):
	for native in NATIVES:
		env.define(native.name, native)
