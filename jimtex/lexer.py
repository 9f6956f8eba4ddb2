"""
Raw characters to a flat list of tokens.

The scanner is a miniscan definition: maximal munch over these patterns
does the work of the two-character lookahead that resolves escapes and
code-region markers. Every character of input matches some rule,
so lexing never fails. A malformed escape is just a bare backslash.
"""
from boozetools.scanning.miniscan import Definition
from boozetools.scanning.engine import IterableScanner
from .ontology import NumberSet
from .tokens import Token
from . import tokens

_definition = Definition("JimTeX")

def _fixed(kind:str):
	def action(yy:IterableScanner): yy.token(kind, Token(kind, None, yy.slice()))
	return action

def _run(kind:str):
	def action(yy:IterableScanner): yy.token(kind, Token(kind, yy.match(), yy.slice()))
	return action

def _number_set(yy:IterableScanner):
	letter = yy.match()[1]
	yy.token(tokens.NUMBER_SET, Token(tokens.NUMBER_SET, NumberSet(letter), yy.slice()))

# Code-region markers:
_definition.on(r'\\\$\(')(_fixed(tokens.OPEN_INLINE))
_definition.on(r'\\\$\[')(_fixed(tokens.OPEN_DISPLAY))
_definition.on(r'\\\$\)')(_fixed(tokens.CLOSE_INLINE))
_definition.on(r'\\\$\]')(_fixed(tokens.CLOSE_DISPLAY))

# Escaped literals:
_definition.on(r'\\\(')(_fixed(tokens.ESC_LEFT_PAREN))
_definition.on(r'\\\)')(_fixed(tokens.ESC_RIGHT_PAREN))
_definition.on(r'\\\[')(_fixed(tokens.ESC_LEFT_BRACKET))
_definition.on(r'\\\]')(_fixed(tokens.ESC_RIGHT_BRACKET))
_definition.on(r'\\\{')(_fixed(tokens.ESC_LEFT_BRACE))
_definition.on(r'\\\}')(_fixed(tokens.ESC_RIGHT_BRACE))
_definition.on(r'\\\#')(_fixed(tokens.ESC_HASH))
_definition.on(r'\\\\')(_fixed(tokens.ESC_BACKSLASH))
_definition.on(r'\\\%')(_fixed(tokens.ESC_PERCENT))

_definition.on(r'\\[ZRQCN]')(_number_set)
_definition.on(r'\\')(_fixed(tokens.BACKSLASH))

# Structural punctuation and arithmetic. The kind is the character itself.
for _pattern, _kind in [
	(r'\(', "("), (r'\)', ")"),
	(r'\{', "{"), (r'\}', "}"),
	(r'\[', "["), (r'\]', "]"),
	(r'\,', ","), (r'\:', ":"), (r'\=', "="),
	(r'\_', "_"), (r'\^', "^"), (r'\%', "%"), (r'\.', "."),
	(r'\+', "+"), (r'\-', "-"), (r'\*', "*"), (r'\/', "/"),
]:
	_definition.on(_pattern)(_fixed(_kind))

_definition.on(r'\n')(_fixed(tokens.NEWLINE))
_definition.on(r'[\x20\t\r]')(_fixed(tokens.SPACE))

# Runs of digits and runs of anything else that is not special:
_definition.on(r'[0-9]+')(_run(tokens.NUMBER))
_definition.on(r'[^0-9\\\(\)\{\}\[\]\,\:\=\_\^\%\.\+\-\*\/\n\t\r\x20]+')(_run(tokens.TEXT))


def lex(text:str) -> list[Token]:
	return [token for _kind, token in _definition.scan(text)]
