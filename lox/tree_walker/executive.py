"""
Overall control for running a program that made it through every static pass.
Operator semantics live in `runtime`; the walk itself lives in `evaluator`.
"""
from typing import Optional
from ..diagnostics import Report
from ..resolution import RoadMap
from .evaluator import Interpreter
from .types import EscapedSignal

def run_program(roadmap:RoadMap, report:Report, interpreter:Optional[Interpreter]=None) -> bool:
	"""
	Run the program to completion or to its first run-time error.
	Returns whether it got all the way through. Any error goes on the report.
	Pass in an interpreter to keep its globals from one program to the next.
	"""
	if interpreter is None: interpreter = Interpreter()
	try:
		failure = interpreter.interpret(roadmap.statements, roadmap.distances)
	except EscapedSignal as ex:
		report.escaped_signal(ex.statement, ex.outcome)  # Raises AssertionError.
	if failure is None:
		return True
	report.runtime_error(failure)
	return False
