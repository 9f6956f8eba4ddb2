"""
The set of parse-nodes.
The builder calls these constructors bottom-up; the interpreter walks them.
Expression nodes are plain tree-shaped objects: nothing is shared between two parents.
Identifiers are hashable because they are the keys of every environment.
"""
from collections import deque
from typing import NamedTuple, Optional, Sequence, Union
from .ontology import GreekLetter, BinOp, UnOp, Relation, NumberSet
from .arithmetic import Number, render

class TextIdent(NamedTuple):
	name: str
	def __str__(self): return self.name

class GreekIdent(NamedTuple):
	letter: GreekLetter
	def __str__(self): return str(self.letter)

class SubscriptIdent(NamedTuple):
	""" Multi-level subscripts nest to the right: a_b_c is a_{b_c}. """
	base: "Identifier"
	subscript: "Identifier"
	def __str__(self): return "%s_{%s}" % (self.base, self.subscript)

Identifier = Union[TextIdent, GreekIdent, SubscriptIdent]


class Phrase:
	span: Optional[slice] = None  # Source text this came from, if known.

class ValueExpression(Phrase):
	def __repr__(self): return "<%s %s>" % (type(self).__name__, self)

class Literal(ValueExpression):
	def __init__(self, value:Number):
		self.value = value
	def __str__(self): return render(self.value)

class Lookup(ValueExpression):
	def __init__(self, identifier:Identifier):
		self.identifier = identifier
	def __str__(self): return str(self.identifier)

class Call(ValueExpression):
	def __init__(self, function:Identifier, args:Sequence[ValueExpression]):
		self.function, self.args = function, list(args)
	def __str__(self):
		return "%s(%s)" % (self.function, ', '.join(map(str, self.args)))

class UnaryOp(ValueExpression):
	def __init__(self, op:UnOp, arg:ValueExpression):
		self.op, self.arg = op, arg
	def __str__(self): return "(%s %s)" % (self.op, self.arg)

class BinaryOp(ValueExpression):
	""" The op is a BinOp for arithmetic and friends, or a Relation for comparisons. """
	def __init__(self, lhs:ValueExpression, op:Union[BinOp, Relation], rhs:ValueExpression):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def __str__(self): return "(%s %s %s)" % (self.lhs, self.op, self.rhs)

class Conditional(ValueExpression):
	def __init__(self, condition:ValueExpression, if_true:ValueExpression, if_false:ValueExpression):
		self.condition, self.if_true, self.if_false = condition, if_true, if_false
	def __str__(self):
		return "(if %s then %s else %s)" % (self.condition, self.if_true, self.if_false)


class Declaration(Phrase): pass

class FunctionDeclaration(Declaration):
	def __init__(self, identifier:Identifier, domain:NumberSet, codomain:NumberSet):
		self.identifier, self.domain, self.codomain = identifier, domain, codomain
	def __str__(self): return "%s : %s \\to %s" % (self.identifier, self.domain, self.codomain)

class ValueDeclaration(Declaration):
	def __init__(self, identifier:Identifier, value:ValueExpression):
		self.identifier, self.value = identifier, value
	def __str__(self): return "%s = %s" % (self.identifier, self.value)

class SetDeclaration(Declaration):
	""" Reserved: these parse, but do not evaluate yet. """
	def __init__(self, identifier:Identifier, members:Sequence[ValueExpression]):
		self.identifier, self.members = identifier, list(members)
	def __str__(self):
		return "%s = \\{%s\\}" % (self.identifier, ', '.join(map(str, self.members)))

class FunctionDefinition(Phrase):
	"""
	Once the interpreter stores one of these, the body has been condensed:
	its only free identifiers are parameters. Calls to other functions that
	could not be settled at definition time refer to snapshots kept in `captures`.
	"""
	captures: dict
	def __init__(self, identifier:Identifier, params:Sequence[Identifier], body:ValueExpression, captures=None):
		self.identifier, self.params, self.body = identifier, list(params), body
		self.captures = captures or {}
	def __str__(self):
		return "%s(%s) = %s" % (self.identifier, ', '.join(map(str, self.params)), self.body)

Statement = Union[ValueExpression, Declaration, FunctionDefinition]

class Program:
	"""
	An ordered sequence of statements, consumed front-to-back exactly once.
	This is also what a code-generating back end would accept.
	"""
	def __init__(self, statements:Sequence[Statement]):
		self.statements = deque(statements)
	def __len__(self): return len(self.statements)
	def __bool__(self): return bool(self.statements)
	def take(self) -> Statement: return self.statements.popleft()
