import io
from pathlib import Path
import unittest
from contextlib import redirect_stdout
from unittest import mock

from lox.diagnostics import Report, TooManyIssues
from lox.resolution import RoadMap, Yuck
from lox.tree_walker.executive import run_program

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()
	pass

base_folder = Path(__file__).parent.parent
zoo_fail = base_folder/"zoo/fail"

def _identify_problem(specimen_path:Path):
	assert specimen_path.exists(), specimen_path
	report = Silence()
	try:
		roadmap = RoadMap.from_path(specimen_path, report)
	except Yuck as ex:
		assert 0 == report.complain_to_console.call_count
		assert report.sick()
		return ex.args[0]
	else:
		report.assert_no_issues("Specimen should not have failed before run-time.")
		with redirect_stdout(io.StringIO()):
			finished = run_program(roadmap, report)
		if finished: return "failed to fail"
		assert 1 == len(report.issues)
		return "runtime"

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about failure modes. Each folder names the phase that should catch its specimens. """

	def test_every_specimen_fails_in_the_right_phase(self):
		for folder in ["parse", "resolve", "runtime"]:
			specimens = sorted((zoo_fail / folder).glob("*.lox"))
			self.assertTrue(specimens, folder)
			for path in specimens:
				with self.subTest(path.stem):
					self.assertEqual(folder, _identify_problem(path))

	def test_parse_errors_do_not_stop_at_the_first(self):
		report = Silence()
		with self.assertRaises(Yuck):
			RoadMap("var = 1;\nprint ;\nprint 1;", report)
		self.assertEqual(2, len(report.issues))

	def test_too_many_issues(self):
		report = Report(max_issues=3)
		with self.assertRaises(TooManyIssues):
			RoadMap("@ @ @ @ @", report)


if __name__ == '__main__':
	unittest.main()
