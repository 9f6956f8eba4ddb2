"""
Cut the filtered token stream into statements and say what kind each one is.
"""
from enum import Enum
from typing import Iterable
from .tokens import Token
from . import tokens

class SliceType(Enum):
	EXPRESSION = "expression"
	FUNCTION_DECLARATION = "function declaration"
	VALUE_DECLARATION = "value declaration"
	FUNCTION_DEFINITION = "function definition"

_DEEPER = frozenset(tokens.OPENERS)
_SHALLOWER = tokens.CLOSERS

def normalize(stream:Iterable[Token]) -> list[Token]:
	"""
	Whitespace means nothing within code, and the words if/then/else
	mean the same as the commands of the same names.
	"""
	result = []
	for token in stream:
		if token.kind in tokens.WHITESPACE: continue
		if token.kind == tokens.TEXT and token.semantic in tokens.KEYWORDS:
			token = Token(token.semantic, None, token.slice)
		result.append(token)
	return result

def into_slices(stream:Iterable[Token]) -> list[list[Token]]:
	"""
	Split on commas, but only those outside of any grouping.
	The end of a code region splits no matter what.
	Grouping tokens stay in the slices: the builder needs them.
	Empty slices disappear.
	"""
	slices, current = [], []
	depth = 0
	for token in normalize(stream):
		if token.kind == tokens.END_OF_REGION:
			slices.append(current)
			current, depth = [], 0
			continue
		if token.kind == "," and depth == 0:
			slices.append(current)
			current = []
			continue
		if token.kind in _DEEPER: depth += 1
		elif token.kind in _SHALLOWER: depth -= 1
		current.append(token)
	slices.append(current)
	return [s for s in slices if s]

def slice_type(stream:list[Token]) -> SliceType:
	kinds = [t.kind for t in stream]
	if ":" in kinds and ("=" not in kinds or kinds.index(":") < kinds.index("=")):
		return SliceType.FUNCTION_DECLARATION
	if "=" in kinds:
		if "(" in kinds[:kinds.index("=")]: return SliceType.FUNCTION_DEFINITION
		return SliceType.VALUE_DECLARATION
	return SliceType.EXPRESSION
