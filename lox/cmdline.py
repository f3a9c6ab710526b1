"""
This is an interpreter for the Lox scripting language.

For example:

    lox program.lox

will run program.lox if possible, or else try to explain why not.

    lox

with no program starts an interactive session.

    lox -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

EX_DATAERR = 65   # The program has a syntax or resolution error.
EX_SOFTWARE = 70  # The program failed at run-time.

parser = argparse.ArgumentParser(
	prog="lox",
	description="Interpreter for the Lox scripting language.",
)
parser.add_argument("program", nargs="?", help="try examples/closures.lox for example.")
parser.add_argument('-c', "--check", action="count", help="Check the program (verbosely if repeated) but do not actually execute the program.")
parser.add_argument('-a', "--ast", action="store_true", help="Print the syntax tree instead of running the program.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .resolution import RoadMap, Yuck
	report = Report(verbose=args.check and args.check > 1)
	try:
		try: roadmap = RoadMap.from_path(Path.cwd() / args.program, report)
		except Yuck:
			assert report.sick()
			report.complain_to_console()
			return EX_DATAERR
		assert report.ok()
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return EX_DATAERR
	if args.ast:
		from .ast_printer import show_program
		print(show_program(roadmap.statements))
	elif args.check:
		print("Looks plausible to me.", file=sys.stderr)
	else:
		from .tree_walker.executive import run_program
		if not run_program(roadmap, report):
			report.complain_to_console()
			return EX_SOFTWARE
	return 0

def repl(stdin=sys.stdin):
	""" Read-eval-print loop. Globals persist across lines; errors do not end the session. """
	from .diagnostics import Report, TooManyIssues
	from .resolution import RoadMap, Yuck
	from .tree_walker.evaluator import Interpreter
	from .tree_walker.executive import run_program
	interpreter = Interpreter()
	while True:
		print("> ", end="", flush=True)
		line = stdin.readline()
		if not line: break
		report = Report()
		try:
			roadmap = RoadMap(line, report)
		except (Yuck, TooManyIssues):
			report.complain_to_console()
			continue
		if not run_program(roadmap, report, interpreter):
			report.complain_to_console()
	print()

def main():
	args = parser.parse_args()
	if args.program is None:
		repl()
	else:
		sys.exit(run(args))
