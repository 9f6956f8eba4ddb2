"""
Turn one classified slice of tokens into one statement.

Expressions go through a few rewriting passes over the token list
(commands, real numbers, identifiers, function calls) and then the
shunting-yard algorithm puts them in postfix order, from which the
tree is folded up with an operand stack.
"""
from typing import NamedTuple, Optional, Union
from .ontology import BinOp, UnOp, Relation, NumberSet
from .tokens import Token, Command, span_of
from .segmenter import SliceType, slice_type, normalize
from .commands import drop_comments
from .errors import (
	UnterminatedDelimiter, MalformedConditional, MalformedDeclaration,
	MalformedExpression, UnexpectedToken,
)
from . import tokens, syntax

###############################################################################
#  Small helpers over token lists

def _partner(stream:list[Token], start:int) -> Optional[int]:
	""" Index of the token closing the group opened at `start`, counting all kinds of grouping. """
	depth = 0
	for index in range(start, len(stream)):
		kind = stream[index].kind
		if kind in tokens.OPENERS: depth += 1
		elif kind in tokens.CLOSERS:
			depth -= 1
			if depth == 0:
				if kind != tokens.OPENERS[stream[start].kind]:
					raise UnterminatedDelimiter("These brackets do not match.", span_of([stream[start], stream[index]]))
				return index
	return None

def _split_top(stream:list[Token], kind:str) -> list[list[Token]]:
	""" Split wherever `kind` appears outside of all grouping. """
	parts, current, depth = [], [], 0
	for token in stream:
		if token.kind == kind and depth == 0:
			parts.append(current)
			current = []
			continue
		if token.kind in tokens.OPENERS: depth += 1
		elif token.kind in tokens.CLOSERS: depth -= 1
		current.append(token)
	parts.append(current)
	return parts

def _split_once(stream:list[Token], kind:str):
	for index, token in enumerate(stream):
		if token.kind == kind: return stream[:index], stream[index+1:]
	return None

def _strip_braces(stream:list[Token]) -> list[Token]:
	while stream and stream[0].kind == "{" and _partner(stream, 0) == len(stream) - 1:
		stream = stream[1:-1]
	return stream

###############################################################################
#  Identifiers

def parse_identifier(stream:list[Token], subscript=False) -> syntax.Identifier:
	"""
	Base case is a lone text or Greek-letter token; subscripts split at the first
	underscore and nest to the right. A subscript may also be a plain number, as in x_1.
	"""
	stream = _strip_braces(stream)
	halves = _split_once(stream, "_")
	if halves is not None:
		first, second = halves
		return syntax.SubscriptIdent(parse_identifier(first, subscript), parse_identifier(second, True))
	if len(stream) == 1:
		token = stream[0]
		if token.kind == tokens.TEXT: return syntax.TextIdent(token.semantic)
		if token.kind == tokens.GREEK: return syntax.GreekIdent(token.semantic)
		if token.kind == tokens.NUMBER and subscript: return syntax.TextIdent(token.semantic)
	if not stream:
		raise MalformedDeclaration("Expected a name, but found nothing.")
	raise UnexpectedToken("This is not a name.", span_of(stream))

###############################################################################
#  Rewriting passes

def _synthetic(kind:str, near:Token, semantic=None) -> Token:
	return Token(kind, semantic, near.slice)

def _group(near:Token, inside:list[Token]) -> list[Token]:
	""" Captured groups may hold commands of their own. """
	return [_synthetic("(", near)] + _lower_commands(normalize(drop_comments(inside))) + [_synthetic(")", near)]

def _lower_commands(stream:list[Token]) -> list[Token]:
	""" The few commands with arithmetic meaning become plain arithmetic. """
	result = []
	for token in stream:
		if token.kind == tokens.STUB and token.semantic in ("left", "right"):
			continue
		if token.kind != tokens.COMMAND:
			result.append(token)
			continue
		command : Command = token.semantic
		if command.name == "frac":
			if len(command.required) != 2 or command.optional:
				raise MalformedExpression("\\frac takes exactly two {groups}.", token.slice)
			numerator, denominator = command.required
			result.extend(_group(token, numerator))
			result.append(_synthetic("/", token))
			result.extend(_group(token, denominator))
		elif command.name == "sqrt":
			if len(command.required) != 1 or len(command.optional) > 1:
				raise MalformedExpression("\\sqrt takes one {radicand} and at most one [index].", token.slice)
			index = command.optional[0] if command.optional else [_synthetic(tokens.NUMBER, token, "2")]
			power = [_synthetic(tokens.REAL, token, 1.0), _synthetic("/", token)] + _group(token, index)
			result.extend(_group(token, command.required[0]))
			result.append(_synthetic("^", token))
			result.extend(_group(token, power))
		else:
			raise UnexpectedToken("I do not know what \\%s means in an expression." % command.name, token.slice)
	return result

def _coalesce_reals(stream:list[Token]) -> list[Token]:
	""" Number, period, number: that is one real number. """
	result = []
	index = 0
	while index < len(stream):
		token = stream[index]
		if (
			token.kind == tokens.NUMBER and index + 2 < len(stream)
			and stream[index+1].kind == "." and stream[index+2].kind == tokens.NUMBER
		):
			fraction = stream[index+2]
			value = float(token.semantic + "." + fraction.semantic)
			result.append(Token(tokens.REAL, value, span_of([token, fraction])))
			index += 3
		else:
			result.append(token)
			index += 1
	return result

def _coalesce_identifiers(stream:list[Token]) -> list[Token]:
	""" A name and any chain of subscripts becomes a single identifier token. """
	result = []
	index = 0
	while index < len(stream):
		token = stream[index]
		if token.kind not in (tokens.TEXT, tokens.GREEK):
			result.append(token)
			index += 1
			continue
		end = index + 1
		while end < len(stream) and stream[end].kind == "_":
			if end + 1 >= len(stream):
				raise MalformedExpression("The subscript is missing.", stream[end].slice)
			if stream[end+1].kind == "{":
				close = _partner(stream, end+1)
				if close is None: raise UnterminatedDelimiter("This subscript is never closed.", stream[end+1].slice)
				end = close + 1
			else:
				end += 2
		run = stream[index:end]
		result.append(Token(tokens.IDENT, parse_identifier(run), span_of(run)))
		index = end
	return result

def _make_function_calls(stream:list[Token]) -> list[Token]:
	result = []
	index = 0
	while index < len(stream):
		token = stream[index]
		if token.kind == tokens.IDENT and index + 1 < len(stream) and stream[index+1].kind == "(":
			close = _partner(stream, index+1)
			if close is None:
				raise UnterminatedDelimiter("This argument list is never closed.", stream[index+1].slice)
			inside = stream[index+2:close]
			args = [parse_value(piece) for piece in _split_top(inside, ",")] if inside else []
			call = syntax.Call(token.semantic, args)
			result.append(Token(tokens.CALL, call, span_of(stream[index:close+1])))
			index = close + 1
		else:
			result.append(token)
			index += 1
	return result

###############################################################################
#  Operator precedence

class _Operator(NamedTuple):
	op: Union[BinOp, UnOp, Relation]
	arity: int
	precedence: int
	right: bool
	token: Token

_BANDS = {}
for _op in Relation: _BANDS[_op] = 0
for _op in (BinOp.UNION, BinOp.INTERSECTION, BinOp.BOOL_OR, BinOp.PLUS_MINUS, BinOp.SET_DIFFERENCE):
	_BANDS[_op] = 1
for _op in (BinOp.ADDITION, BinOp.SUBTRACTION):
	_BANDS[_op] = 2
for _op in (
	BinOp.MULTIPLY, BinOp.DIVIDE, BinOp.BOOL_AND, BinOp.BOOL_XOR,
	BinOp.EXTERNAL_DIRECT_PRODUCT, BinOp.INTERNAL_DIRECT_PRODUCT,
):
	_BANDS[_op] = 3
for _op in UnOp: _BANDS[_op] = 4
_BANDS[BinOp.EXPONENT] = 4

_ARITHMETIC = {"+": BinOp.ADDITION, "-": BinOp.SUBTRACTION, "*": BinOp.MULTIPLY, "/": BinOp.DIVIDE, "^": BinOp.EXPONENT}
_OPERANDS = frozenset([tokens.NUMBER, tokens.REAL, tokens.IDENT, tokens.CALL])

def _operator(token:Token, prefix:bool) -> Optional[_Operator]:
	if token.kind == "-" and prefix: op = UnOp.NEGATION
	elif token.kind in _ARITHMETIC: op = _ARITHMETIC[token.kind]
	elif token.kind in (tokens.BINOP, tokens.CONDITIONAL, tokens.UNOP): op = token.semantic
	else: return None
	arity = 1 if isinstance(op, UnOp) else 2
	return _Operator(op, arity, _BANDS[op], op is BinOp.EXPONENT, token)

def _unexpected(token:Token):
	if token.kind == tokens.LOOP:
		return UnexpectedToken("Big operators like \\%s are not supported yet." % token.semantic.value, token.slice)
	if token.kind == tokens.STATEMENT:
		return UnexpectedToken("Set relations like \\%s cannot appear in an expression yet." % token.semantic.value, token.slice)
	if token.kind == tokens.STUB:
		return UnexpectedToken("I do not know the command \\%s." % token.semantic, token.slice)
	return UnexpectedToken("I did not expect to see %r here." % ((token.semantic or token.kind),), token.slice)

def _to_postfix(stream:list[Token]) -> list:
	output, stack = [], []
	expect_operand = True
	for token in stream:
		if token.kind in _OPERANDS:
			output.append(token)
			expect_operand = False
		elif token.kind in tokens.OPENERS:
			stack.append(token)
			expect_operand = True
		elif token.kind in tokens.CLOSERS:
			while stack and isinstance(stack[-1], _Operator):
				output.append(stack.pop())
			if not stack:
				raise UnterminatedDelimiter("Nothing opens this.", token.slice)
			opener = stack.pop()
			if tokens.OPENERS[opener.kind] != token.kind:
				raise UnterminatedDelimiter("These brackets do not match.", span_of([opener, token]))
			expect_operand = False
		else:
			operator = _operator(token, expect_operand)
			if operator is None: raise _unexpected(token)
			if operator.arity == 2:
				while stack and isinstance(stack[-1], _Operator) and (
					stack[-1].precedence > operator.precedence
					or (stack[-1].precedence == operator.precedence and not operator.right)
				):
					output.append(stack.pop())
			stack.append(operator)
			expect_operand = True
	while stack:
		item = stack.pop()
		if not isinstance(item, _Operator):
			raise UnterminatedDelimiter("This is never closed.", item.slice)
		output.append(item)
	return output

def _operand(token:Token) -> syntax.ValueExpression:
	if token.kind == tokens.NUMBER: node = syntax.Literal(int(token.semantic))
	elif token.kind == tokens.REAL: node = syntax.Literal(token.semantic)
	elif token.kind == tokens.IDENT: node = syntax.Lookup(token.semantic)
	else: node = token.semantic
	node.span = token.slice
	return node

def _fold(postfix:list, where:slice) -> syntax.ValueExpression:
	values = []
	for item in postfix:
		if isinstance(item, Token):
			values.append(_operand(item))
		elif item.arity == 2:
			if len(values) < 2:
				raise MalformedExpression("The %s operator is missing an operand." % item.op, item.token.slice)
			rhs = values.pop()
			lhs = values.pop()
			values.append(syntax.BinaryOp(lhs, item.op, rhs))
		else:
			if not values:
				raise MalformedExpression("The %s operator is missing its operand." % item.op, item.token.slice)
			values.append(syntax.UnaryOp(item.op, values.pop()))
	if len(values) != 1:
		raise MalformedExpression("Two values sit side by side here with no operator between them.", where)
	return values[0]

###############################################################################
#  Values, expressions and conditionals

def _conditional_parts(stream:list[Token]):
	"""
	Find the then and else belonging to the leading if.
	Any if met along the way claims the next else for itself,
	so conditionals nest in either branch.
	"""
	then_at = None
	pending = 0
	for index in range(1, len(stream)):
		kind = stream[index].kind
		if kind == tokens.IF: pending += 1
		elif kind == tokens.THEN and pending == 0:
			if then_at is not None: break
			then_at = index
		elif kind == tokens.ELSE:
			if pending: pending -= 1
			elif then_at is None: break
			else: return stream[1:then_at], stream[then_at+1:index], stream[index+1:]
	raise MalformedConditional("A conditional must read: if ... then ... else ...", span_of(stream))

def _parse_conditional(stream:list[Token]) -> syntax.Conditional:
	condition, if_true, if_false = _conditional_parts(stream)
	if not (condition and if_true and if_false):
		raise MalformedConditional("Each part of this conditional needs something in it.", span_of(stream))
	node = syntax.Conditional(parse_value(condition), parse_expression(if_true), parse_expression(if_false))
	node.span = span_of(stream)
	return node

def parse_value(stream:list[Token]) -> syntax.ValueExpression:
	if not stream:
		raise MalformedExpression("Expected a value, but found nothing.")
	if stream[0].kind == tokens.IF:
		return _parse_conditional(stream)
	stream = _lower_commands(stream)
	stream = _coalesce_reals(stream)
	stream = _coalesce_identifiers(stream)
	stream = _make_function_calls(stream)
	node = _fold(_to_postfix(stream), span_of(stream))
	if node.span is None: node.span = span_of(stream)
	return node

def parse_expression(stream:list[Token]) -> syntax.ValueExpression:
	return parse_value(stream)

###############################################################################
#  Declarations and definitions

def _number_set(stream:list[Token], role:str, near:slice) -> NumberSet:
	if len(stream) == 1:
		token = stream[0]
		if token.kind == tokens.NUMBER_SET: return token.semantic
		if token.kind == tokens.COMMAND and token.semantic.name == "mathbb" and len(token.semantic.required) == 1:
			letters = normalize(token.semantic.required[0])
			if len(letters) == 1 and letters[0].kind == tokens.TEXT:
				try: return NumberSet(letters[0].semantic)
				except ValueError: pass
	raise MalformedDeclaration("The %s must be one number set, like \\R or \\Z." % role, span_of(stream) or near)

def parse_function_declaration(stream:list[Token]) -> syntax.FunctionDeclaration:
	name, signature = _split_once(stream, ":")
	identifier = parse_identifier(name)
	halves = _split_once(signature, tokens.ARROW)
	if halves is None:
		raise MalformedDeclaration("A function declaration reads: name : domain \\to codomain", span_of(stream))
	domain, codomain = halves
	where = span_of(stream)
	return syntax.FunctionDeclaration(identifier, _number_set(domain, "domain", where), _number_set(codomain, "codomain", where))

def parse_function_definition(stream:list[Token]) -> syntax.FunctionDefinition:
	signature, body = _split_once(stream, "=")
	for index, token in enumerate(signature):
		if token.kind == "(": break
	close = _partner(signature, index)
	if close is None:
		raise UnterminatedDelimiter("This parameter list is never closed.", signature[index].slice)
	if close != len(signature) - 1:
		raise MalformedDeclaration("Only the parameter list may come between the name and the equals sign.", span_of(signature[close+1:]))
	identifier = parse_identifier(signature[:index])
	inside = signature[index+1:close]
	params = [parse_identifier(piece) for piece in _split_top(inside, ",")] if inside else []
	if len(set(params)) != len(params):
		raise MalformedDeclaration("A parameter name appears twice.", span_of(signature))
	return syntax.FunctionDefinition(identifier, params, parse_expression(body))

def parse_value_declaration(stream:list[Token]) -> syntax.Declaration:
	name, value = _split_once(stream, "=")
	identifier = parse_identifier(name)
	if value and value[0].kind == tokens.ESC_LEFT_BRACE:
		close = _partner(value, 0)
		if close is None: raise UnterminatedDelimiter("This set is never closed.", value[0].slice)
		if close != len(value) - 1: raise MalformedDeclaration("Nothing may follow a set literal.", span_of(value[close+1:]))
		inside = value[1:close]
		members = [parse_value(piece) for piece in _split_top(inside, ",")] if inside else []
		return syntax.SetDeclaration(identifier, members)
	return syntax.ValueDeclaration(identifier, parse_value(value))

_BUILDERS = {
	SliceType.EXPRESSION: parse_expression,
	SliceType.FUNCTION_DECLARATION: parse_function_declaration,
	SliceType.FUNCTION_DEFINITION: parse_function_definition,
	SliceType.VALUE_DECLARATION: parse_value_declaration,
}

def build_statement(stream:list[Token]) -> syntax.Statement:
	statement = _BUILDERS[slice_type(stream)](stream)
	statement.span = span_of(stream)
	return statement
