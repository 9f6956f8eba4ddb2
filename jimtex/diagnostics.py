import sys, random
from pathlib import Path
from typing import Any, Optional
from boozetools.support.failureprone import SourceText, illustration
from .errors import JimTeXParseError, EvaluationError

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', 'Drat',
		'Fiddlesticks', 'Good Grief', 'Great Scott', 'Heavens',
		'Jeepers', 'Nuts', 'Rats', 'Woe is me',
	]

	resignations = [
		'I cannot continue.',
		'The proof does not go through.',
		'Something here does not add up.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	"""
	Collects the issues that come up while processing a document,
	and shows them to a person on request.
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
			raise AssertionError(_outburst()+" "+message)

	def issues(self) -> list["Pic"]:
		return list(self._issues)

	# Methods the front-end is likely to call:

	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called "+str(path), []))

	def broken_file(self, path:Path, ex:Exception):
		intro = "Something went pear-shaped while trying to read "+str(path)
		self.issue(Pic(intro, [], [str(ex)]))

	def parse_error(self, source:SourceText, ex:JimTeXParseError):
		intro = "I got confused reading this: %s" % ex.message
		kind = type(ex).__name__
		self.issue(Pic(intro, _annotate(source, ex.where, kind), []))

	# Methods the interpreter's caller invokes:

	def runtime_error(self, source:SourceText, ex:EvaluationError):
		intro = "%s: %s" % (type(ex).__name__, ex)
		self.issue(Pic(intro, _annotate(source, ex.span, "in this statement")))

class Annotation:
	def __init__(self, source:SourceText, where:slice, caption:str=""):
		self.source = source
		self.slice = where
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.slice.start)
		single_line = self.source.line_of_text(row)
		width = self.slice.stop - self.slice.start
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

def _annotate(source:SourceText, where:Optional[slice], caption:str) -> list[Annotation]:
	if where is None or not source.content: return []
	return [Annotation(source, where, caption)]

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self.intro, self._anns, self._footer = intro, anns, footer
	def as_text(self):
		lines = [self.intro, ""]
		filename = None
		for ann in self._anns:
			if ann.source.filename != filename:
				filename = ann.source.filename
				if filename: lines.append(filename)
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
