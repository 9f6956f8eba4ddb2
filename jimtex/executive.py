"""
Overall control: read, parse, interpret, and report.
"""
from pathlib import Path
from typing import Callable, Optional
from .diagnostics import Report
from .errors import EvaluationError
from .interpreter import Interpreter
from . import front_end

def run_text(text:str, report:Report, *, path:Optional[Path]=None, emit:Callable[[str], None]=print, strict=False) -> Optional[Interpreter]:
	"""
	Returns the interpreter, so its environment can be examined afterward,
	or None if the document would not parse. Evaluation errors land in the
	report; output emitted before the error stands.
	"""
	program = front_end.parse_text(text, path, report)
	if program is None: return None
	report.info("Running %d statement(s)" % len(program))
	interpreter = Interpreter(emit=emit, strict=strict)
	try: interpreter.interpret_program(program)
	except EvaluationError as ex:
		report.runtime_error(front_end.source_text(text, path), ex)
	return interpreter

def run_file(path:Path, report:Report, *, emit:Callable[[str], None]=print, strict=False) -> Optional[Interpreter]:
	text = front_end.read_file(path, report)
	if text is not None:
		return run_text(text, report, path=path, emit=emit, strict=strict)
