"""
From document text to a Program, or else to a report of why not.
"""
from pathlib import Path
from typing import Optional
from boozetools.support.failureprone import SourceText
from . import syntax
from .lexer import lex
from .commands import resolve
from .segmenter import into_slices
from .builder import build_statement
from .errors import JimTeXParseError
from .diagnostics import Report
from .tokens import Token

def code_tokens(text:str) -> list[Token]:
	""" The tokens that survive into code regions, with commands resolved. """
	return resolve(lex(text))

def parse_text(text:str, path:Optional[Path], report:Report) -> Optional[syntax.Program]:
	""" Submit text to the pipeline; any parse error lands in the report. """
	try:
		stream = code_tokens(text)
		report.info("Found %d code token(s) in %s" % (len(stream), path))
		slices = into_slices(stream)
		report.info("Cut into %d statement(s)" % len(slices))
		return syntax.Program(build_statement(s) for s in slices)
	except JimTeXParseError as ex:
		report.parse_error(source_text(text, path), ex)

def parse_file(path:Path, report:Report) -> Optional[syntax.Program]:
	text = read_file(path, report)
	if text is not None:
		return parse_text(text, path, report)

def read_file(path:Path, report:Report) -> Optional[str]:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			return fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
	except OSError as ex:
		report.broken_file(path, ex)

def source_text(text:str, path:Optional[Path]) -> SourceText:
	return SourceText(text, filename=None if path is None else str(path))
