import io
from pathlib import Path
import unittest
from contextlib import redirect_stdout
from lox import diagnostics, resolution
from lox.tree_walker import executive

base_folder = Path(__file__).parent.parent
examples = base_folder/"examples"


def _good(folder, which) -> resolution.RoadMap:
	report = diagnostics.Report(verbose=False)
	try:
		roadmap = resolution.RoadMap.from_path(folder / (which + ".lox"), report)
	except resolution.Yuck as ex:
		assert report.sick()
		report.complain_to_console()
		assert False, "Test failed %s phase"%ex.args[0]
	else:
		report.assert_no_issues("Ostensibly-good example failed to fail properly.")
		return roadmap

def _run(which) -> list[str]:
	roadmap = _good(examples, which)
	report = diagnostics.Report(verbose=False)
	out = io.StringIO()
	with redirect_stdout(out):
		finished = executive.run_program(roadmap, report)
	report.assert_no_issues("Ostensibly-good example failed at run-time.")
	assert finished
	return out.getvalue().splitlines()

class ExampleSmokeTests(unittest.TestCase):
	""" Run all the examples; Test for no smoke. """

	def test_hello_world(self):
		self.assertEqual(["Hello, World!"], _run("hello_world"))

	def test_closures(self):
		self.assertEqual(["1", "2", "global", "global", "block"], _run("closures"))

	def test_fibonacci(self):
		output = _run("fibonacci")
		self.assertEqual(20, len(output))
		self.assertEqual(["0", "1", "1", "2", "3"], output[:5])
		self.assertEqual("4181", output[-1])

	def test_classes(self):
		self.assertEqual([
			"Fry until golden brown.",
			"Pipe full of custard.",
			"BostonCream instance",
			"BostonCream",
		], _run("classes"))

	def test_loops(self):
		self.assertEqual(["0", "10", "11", "20", "21", "22", "20"], _run("loops"))

	def test_timing(self):
		self.assertEqual(["500500", "true"], _run("timing"))


if __name__ == '__main__':
	unittest.main()
