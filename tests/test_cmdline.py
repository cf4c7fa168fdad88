import io
import unittest
from contextlib import redirect_stdout, redirect_stderr
from unittest import mock

from polytype import cmdline, Constructed, Variable, Occurs, Failure, parse_type, NotationError
from polytype.diagnostics import Report, TooManyIssues

def _run(*argv):
	out, err = io.StringIO(), io.StringIO()
	with redirect_stdout(out), redirect_stderr(err):
		status = cmdline.run(cmdline.parser.parse_args(list(argv)))
	return status, out.getvalue(), err.getvalue()

class CommandLineTests(unittest.TestCase):

	def test_unifies_and_prints(self):
		status, out, err = _run("t0 -> bool", "int -> t1")
		self.assertEqual(0, status)
		self.assertEqual(["t0 -> bool : int → bool", "int -> t1 : int → bool"], out.splitlines())
		self.assertEqual("", err)

	def test_several_in_one_context(self):
		status, out, err = _run("pair(t0, t1)", "pair(int, t2)", "pair(int, bool)")
		self.assertEqual(0, status)
		self.assertEqual("pair(t0, t1) : pair(int,bool)", out.splitlines()[0])

	def test_occurs(self):
		status, out, err = _run("t1", "bool -> t1")
		self.assertEqual(1, status)
		self.assertIn("t1 would have to contain itself", err)

	def test_mismatch(self):
		status, out, err = _run("list(t0)", "pair(t0, t0)")
		self.assertEqual(1, status)
		self.assertIn("list(t0) does not fit pair(t0,t0)", err)

	def test_fast_stops_at_first_failure(self):
		status, out, err = _run("--fast", "pair(t0, int)", "pair(bool, bool)", "t0")
		self.assertEqual(1, status)
		self.assertIn("pair(t0, int) : pair(bool,int)", out.splitlines())
		self.assertEqual(1, err.count("does not fit"))

	def test_careful_keeps_going(self):
		status, out, err = _run("pair(t0, int)", "pair(bool, bool)", "pair(int, t1)")
		self.assertEqual(1, status)
		self.assertIn("pair(t0, int) : pair(int,int)", out.splitlines())

	def test_bad_notation(self):
		status, out, err = _run("list(int", "int")
		self.assertEqual(1, status)
		self.assertEqual("", out)
		self.assertIn("I could not read this as a type", err)

	def test_verbose(self):
		status, out, err = _run("-v", "t0", "int")
		self.assertEqual(0, status)
		self.assertIn("unify t0 with int", err)
		self.assertIn("t0:=int", err)

	def test_gives_up(self):
		status, out, err = _run("--max-issues", "2", "int", "bool", "list(t0)", "t0")
		self.assertEqual(1, status)
		self.assertIn("Giving up", err)
		self.assertEqual("", out)

	def test_usage_without_arguments(self):
		out = io.StringIO()
		with mock.patch("sys.argv", ["polytype"]), redirect_stdout(out):
			cmdline.main()
		self.assertIn("usage: polytype", out.getvalue())


class ReportTests(unittest.TestCase):

	def test_collects_and_limits(self):
		report = Report(max_issues=2)
		self.assertTrue(report.ok())
		report.unification_failed(Occurs(0), Variable(0), Constructed("list", [Variable(0)]))
		self.assertTrue(report.sick())
		with self.assertRaises(TooManyIssues):
			report.unification_failed(Failure(Constructed("int"), Constructed("bool")), Constructed("int"), Constructed("bool"))
		report.reset()
		self.assertTrue(report.ok())

	def test_assert_no_issues(self):
		report = Report()
		report.complain_to_console = mock.Mock()
		report.assert_no_issues("fine")
		report.unification_failed(Occurs(3), Variable(3), Constructed("list", [Variable(3)]))
		with self.assertRaises(AssertionError):
			report.assert_no_issues("not fine")
		self.assertEqual(1, report.complain_to_console.call_count)

	def test_pictures_reach_the_console(self):
		report = Report()
		try: parse_type("list(int")
		except NotationError as ex: report.bad_notation("list(int", ex)
		report.unification_failed(Occurs(3), Variable(3), Constructed("list", [Variable(3)]))
		err = io.StringIO()
		with redirect_stderr(err):
			report.complain_to_console()
		text = err.getvalue()
		self.assertIn("I could not read this as a type:", text)
		self.assertIn("list(int", text)
		self.assertIn("These types cannot be made the same:", text)
		self.assertIn("Variable t3 would have to contain itself.", text)
		self.assertLess(text.index("I could not read"), text.index("These types"))

	def test_quiet_unless_verbose(self):
		err = io.StringIO()
		with redirect_stderr(err):
			Report(verbose=0).info("hush")
			Report(verbose=1).info("hello")
		self.assertEqual("hello\n", err.getvalue())


if __name__ == '__main__':
	unittest.main()
