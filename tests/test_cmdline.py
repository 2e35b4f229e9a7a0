import io
import unittest
from unittest import mock

from tailtype.cmdline import parser, run

def _run(*argv):
	with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			status = run(parser.parse_args(argv))
	return status, out.getvalue(), err.getvalue()

class CommandLineTests(unittest.TestCase):

	def test_all_groups(self):
		status, out, _ = _run(r"(\d+) (?P<latency>\d+\.\d+) (\w+)")
		self.assertEqual(0, status)
		self.assertEqual(["$1: Int", "$2 (latency): Float", "$3: Int"], out.splitlines())

	def test_chosen_groups(self):
		status, out, _ = _run(r"(\d+) (\d+\.\d+)", "2")
		self.assertEqual(0, status)
		self.assertEqual(["$2: Float"], out.splitlines())

	def test_missing_group(self):
		status, out, err = _run(r"(\d+)", "3")
		self.assertEqual(1, status)
		self.assertIn("$3: no such capture group", err)

	def test_bad_pattern(self):
		status, _, err = _run("(oops")
		self.assertEqual(1, status)
		self.assertIn("Bad pattern", err)

	def test_builtins(self):
		status, out, _ = _run("-b")
		self.assertEqual(0, status)
		self.assertIn("len: → String Int", out.splitlines())
		self.assertIn("timestamp: → Int", out.splitlines())

	def test_verbose_shows_the_tree(self):
		status, _, err = _run("-v", r"(\d+)")
		self.assertEqual(0, status)
		self.assertIn("<cap 1", err)


if __name__ == '__main__':
	unittest.main()
