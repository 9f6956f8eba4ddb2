"""
Run a program, one statement at a time, front to back.

Expressions print their value. Declarations bind names. Function definitions
are condensed before they are stored: every free name that is not a parameter
is replaced by what it means right now, so later assignments cannot reach
into a function already defined.

Each call gets a fresh Environment. Nothing is shared between calls except
what the call explicitly copies in.
"""
from typing import Callable, Optional
from boozetools.support.foundation import Visitor
from . import syntax, arithmetic
from .arithmetic import Number, NumberKind
from .syntax import Identifier
from .errors import (
	EvaluationError, TypeMismatch, MissingVariable, MissingFunction,
	FunctionDefinedWithNoDeclaration, ConditionalsMustEvaluateToNumber,
	NotYetSupported, RecursionTooDeep,
)

class Environment:
	"""
	Variables hold numbers; declarations hold signatures; definitions hold
	condensed functions. The statement index counts from one.
	"""
	def __init__(self):
		self.variables : dict[Identifier, Number] = {}
		self.declarations : dict[Identifier, syntax.FunctionDeclaration] = {}
		self.definitions : dict[Identifier, syntax.FunctionDefinition] = {}
		self.statement_index = 0

	def lookup_variable(self, identifier:Identifier) -> Number:
		try: return self.variables[identifier]
		except KeyError: raise MissingVariable(identifier) from None

	def lookup_function(self, identifier:Identifier) -> syntax.FunctionDefinition:
		try: return self.definitions[identifier]
		except KeyError: raise MissingFunction(identifier) from None

	def names_function(self, identifier:Identifier) -> bool:
		""" True if this name means a function here and not a number. """
		return identifier in self.definitions and identifier not in self.variables

	def snapshot(self, identifier:Identifier):
		return self.declarations.get(identifier), self.lookup_function(identifier)

	def adopt(self, identifier:Identifier, declaration:Optional[syntax.FunctionDeclaration], definition:syntax.FunctionDefinition):
		if declaration is not None: self.declarations[identifier] = declaration
		self.definitions[identifier] = definition

###############################################################################
#  Evaluation

def evaluate(expr:syntax.ValueExpression, env:Environment) -> Number:
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	return fn(expr, env)

def _eval_literal(expr:syntax.Literal, env:Environment):
	return expr.value

def _eval_lookup(expr:syntax.Lookup, env:Environment):
	return env.lookup_variable(expr.identifier)

def _eval_unary_op(expr:syntax.UnaryOp, env:Environment):
	return arithmetic.unary(expr.op, evaluate(expr.arg, env))

def _eval_binary_op(expr:syntax.BinaryOp, env:Environment):
	lhs = evaluate(expr.lhs, env)
	rhs = evaluate(expr.rhs, env)
	return arithmetic.binary(expr.op, lhs, rhs)

def _eval_conditional(expr:syntax.Conditional, env:Environment):
	condition = evaluate(expr.condition, env)
	if arithmetic.kind_of(condition) is not NumberKind.INTEGER:
		raise ConditionalsMustEvaluateToNumber(condition)
	return evaluate(expr.if_true if condition else expr.if_false, env)

def _eval_call(expr:syntax.Call, env:Environment):
	callee = env.lookup_function(expr.function)
	if len(expr.args) != len(callee.params):
		pattern = "%s takes %d argument(s) but got %d"
		raise TypeMismatch(pattern % (expr.function, len(callee.params), len(expr.args)))
	inner = Environment()
	for name, (declaration, definition) in callee.captures.items():
		inner.adopt(name, declaration, definition)
	inner.adopt(callee.identifier, env.declarations.get(expr.function), callee)
	for param, arg in zip(callee.params, expr.args):
		if isinstance(arg, syntax.Lookup) and env.names_function(arg.identifier):
			inner.adopt(param, *env.snapshot(arg.identifier))
		else:
			inner.variables[param] = evaluate(arg, env)
	return evaluate(callee.body, inner)

EVALUATE = {}

def _attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["expr"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v

_attach_evaluation_methods(globals())

###############################################################################
#  Condensation

class Condenser(Visitor):
	"""
	Rewrites a function body so that its only free names are its parameters.

	Names bound to numbers become literals. A call whose arguments are all
	settled is made right away and its result takes its place. A call that
	must wait (because an argument depends on a parameter) stays a call:
	if it names another function, a snapshot of that function goes into
	the captures so the call still works later, whatever happens to the
	name in the meantime. Calls to a parameter or to the function itself
	always wait.
	"""
	def __init__(self, env:Environment, definition:syntax.FunctionDefinition):
		self._env = env
		self._self = definition.identifier
		self._params = frozenset(definition.params)
		self.captures = {}

	def condense(self, body:syntax.ValueExpression) -> syntax.ValueExpression:
		return self.visit(body)

	def _is_local(self, identifier:Identifier) -> bool:
		return identifier in self._params or identifier == self._self

	def _capture(self, identifier:Identifier):
		if identifier not in self.captures:
			self.captures[identifier] = self._env.snapshot(identifier)

	def _settled(self, expr:syntax.ValueExpression) -> bool:
		""" Could this be evaluated now, in the outer environment? """
		if isinstance(expr, syntax.Literal): return True
		if isinstance(expr, syntax.Lookup): return not self._is_local(expr.identifier)
		return False

	def visit_Literal(self, expr:syntax.Literal):
		return expr

	def visit_Lookup(self, expr:syntax.Lookup):
		identifier = expr.identifier
		if self._is_local(identifier): return expr
		if self._env.names_function(identifier):
			# Only sensible as an argument; the call decides.
			self._capture(identifier)
			return expr
		return _literal(self._env.lookup_variable(identifier), expr)

	def visit_Call(self, expr:syntax.Call):
		args = [self.visit(a) for a in expr.args]
		call = syntax.Call(expr.function, args)
		call.span = expr.span
		if self._is_local(expr.function): return call
		if all(map(self._settled, args)):
			return _literal(evaluate(call, self._env), expr)
		self._capture(expr.function)
		return call

	def visit_UnaryOp(self, expr:syntax.UnaryOp):
		node = syntax.UnaryOp(expr.op, self.visit(expr.arg))
		node.span = expr.span
		return node

	def visit_BinaryOp(self, expr:syntax.BinaryOp):
		node = syntax.BinaryOp(self.visit(expr.lhs), expr.op, self.visit(expr.rhs))
		node.span = expr.span
		return node

	def visit_Conditional(self, expr:syntax.Conditional):
		node = syntax.Conditional(self.visit(expr.condition), self.visit(expr.if_true), self.visit(expr.if_false))
		node.span = expr.span
		return node

def _literal(value:Number, replacing:syntax.ValueExpression) -> syntax.Literal:
	node = syntax.Literal(value)
	node.span = replacing.span
	return node

###############################################################################
#  Statements

class Interpreter(Visitor):
	"""
	Feed it programs. The environment persists between calls to
	interpret_program, so a session can go on across several documents.
	The first error stops the program it happens in.
	"""
	def __init__(self, emit:Callable[[str], None]=print, strict=False):
		self.emit = emit
		self.strict = strict
		self.env = Environment()

	def interpret_program(self, program:syntax.Program):
		while program:
			self.env.statement_index += 1
			self.interpret_statement(program.take())

	def interpret_statement(self, statement:syntax.Statement):
		try:
			if isinstance(statement, syntax.ValueExpression):
				self.emit(arithmetic.render(evaluate(statement, self.env)))
			else:
				self.visit(statement)
		except RecursionError:
			ex = RecursionTooDeep()
			self._blame(ex, statement)
			raise ex from None
		except EvaluationError as ex:
			self._blame(ex, statement)
			raise

	def _blame(self, ex:EvaluationError, statement:syntax.Statement):
		ex.statement_index = self.env.statement_index
		if ex.span is None: ex.span = statement.span

	def visit_ValueDeclaration(self, statement:syntax.ValueDeclaration):
		self.env.variables[statement.identifier] = evaluate(statement.value, self.env)

	def visit_FunctionDeclaration(self, statement:syntax.FunctionDeclaration):
		self.env.declarations[statement.identifier] = statement

	def visit_SetDeclaration(self, statement:syntax.SetDeclaration):
		raise NotYetSupported("Sets are not implemented yet")

	def visit_FunctionDefinition(self, statement:syntax.FunctionDefinition):
		identifier = statement.identifier
		if self.strict and identifier not in self.env.declarations:
			raise FunctionDefinedWithNoDeclaration(identifier)
		condenser = Condenser(self.env, statement)
		body = condenser.condense(statement.body)
		condensed = syntax.FunctionDefinition(identifier, statement.params, body, condenser.captures)
		condensed.span = statement.span
		self.env.definitions[identifier] = condensed
