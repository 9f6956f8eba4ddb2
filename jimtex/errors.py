"""
What can go wrong, sorted by when it goes wrong.

Parse errors come out of the front end, before any statement runs.
Each carries a message and (when known) the source slice to blame.

Evaluation errors come out of the interpreter. The interpreter fills in
which statement was running (1-based) and that statement's source slice
on the way out, so the code that raises them need not know.
"""
from typing import Optional
from boozetools.parsing.interface import ParseError

class JimTeXParseError(ParseError):
	def __init__(self, message:str, where:Optional[slice]=None):
		super().__init__(message, where)
		self.message, self.where = message, where
	def __str__(self): return self.message

class UnterminatedDelimiter(JimTeXParseError): pass
class MalformedConditional(JimTeXParseError): pass
class MalformedDeclaration(JimTeXParseError): pass
class MalformedExpression(JimTeXParseError): pass
class UnexpectedToken(JimTeXParseError): pass


class EvaluationError(Exception):
	statement_index: Optional[int] = None
	span: Optional[slice] = None

	def describe(self) -> str:
		return self.args[0] if self.args else type(self).__name__

	def __str__(self):
		if self.statement_index is None: return self.describe()
		return "%s on statement %d" % (self.describe(), self.statement_index)

class TypeMismatch(EvaluationError):
	""" An operation met a kind of number it cannot handle, or a promotion failed. """

class MissingVariable(EvaluationError):
	def __init__(self, identifier):
		super().__init__(identifier)
		self.identifier = identifier
	def describe(self): return "No value is bound to %s" % self.identifier

class MissingFunction(EvaluationError):
	def __init__(self, identifier):
		super().__init__(identifier)
		self.identifier = identifier
	def describe(self): return "No function is defined as %s" % self.identifier

class UseBeforeDefinition(EvaluationError):
	""" Reserved. """

class FunctionDefinedWithNoDeclaration(EvaluationError):
	def __init__(self, identifier):
		super().__init__(identifier)
		self.identifier = identifier
	def describe(self): return "Function %s is defined with no declaration" % self.identifier

class ConditionalsMustEvaluateToNumber(EvaluationError):
	def __init__(self, value):
		super().__init__(value)
		self.value = value
	def describe(self): return "A condition must come out to an integer, not %r" % (self.value,)

class DivisionByZero(EvaluationError):
	def describe(self): return "Division by zero"

class RecursionTooDeep(EvaluationError):
	def describe(self): return "Function calls nested too deeply"

class NotYetSupported(EvaluationError):
	""" The notation has a meaning for this, but the interpreter does not do it yet. """
