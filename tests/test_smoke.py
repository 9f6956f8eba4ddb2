from pathlib import Path
import unittest
from jimtex import diagnostics, executive

base_folder = Path(__file__).parent.parent
zoo_ok = base_folder/"zoo/ok"

def _good(which) -> list[str]:
	report = diagnostics.Report(verbose=0)
	output = []
	executive.run_file(zoo_ok / (which + ".tex"), report, emit=output.append)
	report.assert_no_issues("Ostensibly-good example failed to run.")
	return output

class ExampleSmokeTests(unittest.TestCase):
	""" Run all the examples; Test for no smoke. """

	def test_every_example_runs(self):
		for path in sorted(zoo_ok.glob("*.tex")):
			with self.subTest(path.stem):
				_good(path.stem)

	def test_arithmetic(self):
		self.assertEqual(["14", "512", "1", "3", "-3", "3.0", "5.0", "24", "21"], _good("arithmetic"))

	def test_declarations(self):
		self.assertEqual(["11", "10"], _good("declarations"))

	def test_functions(self):
		self.assertEqual(["7", "3628800", "81", "5.0"], _good("functions"))

	def test_conditionals(self):
		self.assertEqual(["2", "1", "-1", "0", "1", "0"], _good("conditionals"))


if __name__ == '__main__':
	unittest.main()
