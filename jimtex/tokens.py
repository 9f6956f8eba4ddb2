"""
A token is a 3-tuple of kind, semantic value, and source slice.

Kinds are short interned strings in the manner of the boozetools scanners.
Punctuation is its own kind (so "(" is the kind of an open-parenthesis).
Everything else uses one of the names below.
The semantic value depends on the kind:
	text, number, stub: the characters that made it
	real: a float
	greek, binop, unop, conditional, statement, loop, number_set: an ontology member
	command: a Command
	ident: a syntax identifier (built inside the expression builder)
	call: a syntax.Call (likewise)
"""
from typing import NamedTuple, Any

# Produced by the lexer:
TEXT = "text"
NUMBER = "number"
BACKSLASH = "\\"
NEWLINE = "\n"
SPACE = " "
NUMBER_SET = "number_set"
OPEN_INLINE = "open_inline"
CLOSE_INLINE = "close_inline"
OPEN_DISPLAY = "open_display"
CLOSE_DISPLAY = "close_display"
ESC_LEFT_PAREN = "\\("
ESC_RIGHT_PAREN = "\\)"
ESC_LEFT_BRACKET = "\\["
ESC_RIGHT_BRACKET = "\\]"
ESC_LEFT_BRACE = "\\{"
ESC_RIGHT_BRACE = "\\}"
ESC_HASH = "\\#"
ESC_BACKSLASH = "\\\\"
ESC_PERCENT = "\\%"

# Produced by the command resolver:
STUB = "stub"
END_OF_REGION = "end_of_region"
COMMAND = "command"
GREEK = "greek"
BINOP = "binop"
UNOP = "unop"
CONDITIONAL = "conditional"
STATEMENT = "statement"
LOOP = "loop"
ARROW = "->"
IF = "if"
THEN = "then"
ELSE = "else"

# Produced within the expression builder:
REAL = "real"
IDENT = "ident"
CALL = "call"

OPENERS = {"(": ")", "{": "}", "[": "]", ESC_LEFT_BRACE: ESC_RIGHT_BRACE}
CLOSERS = frozenset(OPENERS.values())
WHITESPACE = frozenset([SPACE, NEWLINE])
KEYWORDS = frozenset([IF, THEN, ELSE])

class Token(NamedTuple):
	kind: str
	semantic: Any
	slice: slice

	def __repr__(self):
		if self.semantic is None: return "<%r>" % self.kind
		return "<%s %s>" % (self.kind, self.semantic)

class Command(NamedTuple):
	"""
	A backslash-command with whatever argument groups followed it.
	Each group is itself a list of tokens, already run through argument capture.
	"""
	name: str
	required: list
	optional: list

	def __str__(self): return "\\" + self.name

def span_of(tokens) -> slice:
	""" The source slice covering a run of tokens, or None for an empty run. """
	if not tokens: return None
	return slice(tokens[0].slice.start, tokens[-1].slice.stop)
