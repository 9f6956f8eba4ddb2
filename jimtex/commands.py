"""
The command resolver folds backslash-escapes into semantic tokens.

It works in passes, each of which runs over the whole token list:
	1. form_stubs: a backslash followed by text becomes a command stub.
	2. resolve_names: stubs found in the command table become semantic tokens.
	3. capture_arguments: any remaining stub followed by {...} and/or [...]
	   groups becomes a single Command token carrying those groups.
Then filter_regions throws away everything that is not code.

None of these passes stop early. Unbalanced groups run to the end of input.
"""
from types import MappingProxyType
from typing import Iterable
from .ontology import GreekLetter, BinOp, UnOp, Relation, SetRelation, BigOperator
from .tokens import Token, Command
from .errors import UnterminatedDelimiter
from . import tokens

def _build_table():
	table = {}
	def enter(kind, members):
		for m in members: table[m.value] = (kind, m)
	enter(tokens.GREEK, GreekLetter)
	enter(tokens.CONDITIONAL, Relation)
	enter(tokens.STATEMENT, SetRelation)
	enter(tokens.LOOP, BigOperator)
	for name, op in [
		("pm", BinOp.PLUS_MINUS),
		("setminus", BinOp.SET_DIFFERENCE),
		("cdot", BinOp.MULTIPLY),
		("times", BinOp.MULTIPLY),
		("ast", BinOp.MULTIPLY),
		("div", BinOp.DIVIDE),
		("wedge", BinOp.BOOL_AND),
		("vee", BinOp.BOOL_OR),
		("oplus", BinOp.BOOL_XOR),
		("extprod", BinOp.EXTERNAL_DIRECT_PRODUCT),
		("intprod", BinOp.INTERNAL_DIRECT_PRODUCT),
		("cup", BinOp.UNION),
		("cap", BinOp.INTERSECTION),
	]:
		table[name] = (tokens.BINOP, op)
	table["neg"] = table["lnot"] = (tokens.UNOP, UnOp.BOOL_NOT)
	table["to"] = table["rightarrow"] = (tokens.ARROW, None)
	for keyword in tokens.KEYWORDS:
		table[keyword] = (keyword, None)
	return MappingProxyType(table)

COMMAND_TABLE = _build_table()

def _joined(first:Token, last:Token) -> slice:
	return slice(first.slice.start, last.slice.stop)

def form_stubs(stream:list[Token]) -> list[Token]:
	result = []
	index = 0
	while index < len(stream):
		token = stream[index]
		if token.kind == tokens.BACKSLASH and index + 1 < len(stream) and stream[index+1].kind == tokens.TEXT:
			name = stream[index+1]
			result.append(Token(tokens.STUB, name.semantic, _joined(token, name)))
			index += 2
		else:
			result.append(token)
			index += 1
	return result

def resolve_names(stream:Iterable[Token]) -> list[Token]:
	result = []
	for token in stream:
		if token.kind == tokens.STUB and token.semantic in COMMAND_TABLE:
			kind, semantic = COMMAND_TABLE[token.semantic]
			result.append(Token(kind, semantic, token.slice))
		else:
			result.append(token)
	return result

_GROUPS = {"{": "}", "[": "]"}

def _group_end(stream:list[Token], start:int) -> int:
	"""
	Given the index of an opening brace or bracket, return the index of its partner.
	Only the same kind of bracket counts toward the depth.
	If there is no partner, return the length of the stream.
	"""
	opener = stream[start].kind
	closer = _GROUPS[opener]
	depth = 0
	for index in range(start, len(stream)):
		kind = stream[index].kind
		if kind == opener: depth += 1
		elif kind == closer:
			depth -= 1
			if depth == 0: return index
	return len(stream)

def capture_arguments(stream:list[Token]) -> list[Token]:
	result = []
	index = 0
	while index < len(stream):
		token = stream[index]
		index += 1
		if token.kind != tokens.STUB or index >= len(stream) or stream[index].kind not in _GROUPS:
			result.append(token)
			continue
		required, optional = [], []
		last = token
		while index < len(stream) and stream[index].kind in _GROUPS:
			end = _group_end(stream, index)
			group = capture_arguments(stream[index+1:end])
			(required if stream[index].kind == "{" else optional).append(group)
			last = stream[min(end, len(stream)-1)]
			index = end + 1
		command = Command(token.semantic, required, optional)
		result.append(Token(tokens.COMMAND, command, _joined(token, last)))
	return result

_REGIONS = {
	tokens.OPEN_INLINE: tokens.CLOSE_INLINE,
	tokens.OPEN_DISPLAY: tokens.CLOSE_DISPLAY,
}

def filter_regions(stream:list[Token]) -> list[Token]:
	"""
	Keep only what lies within code regions, less any comments.
	A comment runs from an unescaped percent-sign to the end of its line,
	and hides everything on the way, region markers included.
	The end of a region also ends whatever statement was in progress,
	so it leaves a marker behind.
	"""
	result = []
	closer, opened_by = None, None
	in_comment = False
	for token in stream:
		if in_comment:
			if token.kind == tokens.NEWLINE: in_comment = False
			else: continue
		if token.kind == "%":
			in_comment = True
		elif closer is None:
			if token.kind in _REGIONS:
				closer, opened_by = _REGIONS[token.kind], token
		elif token.kind == closer:
			result.append(Token(tokens.END_OF_REGION, None, token.slice))
			closer, opened_by = None, None
		elif token.kind not in _REGIONS and token.kind not in (tokens.CLOSE_INLINE, tokens.CLOSE_DISPLAY):
			result.append(token)
	if closer is not None:
		raise UnterminatedDelimiter("This code region is never closed.", opened_by.slice)
	return result

def drop_comments(stream:Iterable[Token]) -> list[Token]:
	""" The groups captured by a command never see filter_regions, so they need this. """
	result = []
	in_comment = False
	for token in stream:
		if in_comment:
			if token.kind == tokens.NEWLINE: in_comment = False
			else: continue
		if token.kind == "%": in_comment = True
		else: result.append(token)
	return result

def resolve(stream:list[Token]) -> list[Token]:
	""" All the passes, in order. """
	return filter_regions(capture_arguments(resolve_names(form_stubs(stream))))
