import sys
from typing import Any
from boozetools.support.failureprone import illustration

from .algebra import Type
from .context import UnificationError, Occurs, Failure

class TooManyIssues(Exception):
	pass

class Report:
	"""
	Collects the issues found along the way, and says something
	to the console about them when asked. With verbose set,
	it also narrates progress to stderr.
	"""
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)

	# Methods the command-line driver calls:

	def bad_notation(self, text:str, error):
		caption = "Expected %s here" % error.expected
		width = max(1, error.where.stop - error.where.start)
		picture = illustration(text, error.where.start, width, prefix='    |', caption=caption)
		self.issue(Pic("I could not read this as a type:", [picture]))

	def unification_failed(self, error:UnificationError, lhs:Type, rhs:Type):
		intro = "These types cannot be made the same:"
		lines = ["    %s" % lhs, "    %s" % rhs]
		if isinstance(error, Occurs):
			footer = ["Variable t%d would have to contain itself." % error.variable]
		elif isinstance(error, Failure):
			footer = ["In particular, %s does not fit %s." % (error.left, error.right)]
		else:
			raise TypeError(error)
		self.issue(Pic(intro, lines, footer))

class Pic:
	def __init__(self, intro:str, lines:list[str], footer=()):
		self._intro, self._lines, self._footer = intro, lines, footer
	def as_text(self):
		return '\n'.join([self._intro, *self._lines, *self._footer])

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print("Drat! Unification trouble.", file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
