import unittest
from jimtex.front_end import code_tokens, parse_text
from jimtex.segmenter import SliceType, into_slices, slice_type
from jimtex.builder import build_statement, parse_identifier
from jimtex.diagnostics import Report
from jimtex.ontology import GreekLetter, NumberSet, Relation
from jimtex.errors import (
	UnterminatedDelimiter, MalformedConditional, MalformedDeclaration,
	MalformedExpression, UnexpectedToken,
)
from jimtex import syntax, tokens

def _slices(code):
	return into_slices(code_tokens("\\$(" + code + "\\$)"))

def _parse(code):
	slices = _slices(code)
	assert len(slices) == 1, slices
	return build_statement(slices[0])

class SegmenterTests(unittest.TestCase):

	def test_split_on_top_level_commas_only(self):
		slices = _slices("a = 1, f(x, y) = x + y, f(1, 2)")
		self.assertEqual(3, len(slices))
		self.assertEqual(
			[SliceType.VALUE_DECLARATION, SliceType.FUNCTION_DEFINITION, SliceType.EXPRESSION],
			[slice_type(s) for s in slices],
		)

	def test_function_declaration(self):
		self.assertEqual(SliceType.FUNCTION_DECLARATION, slice_type(_slices(r"f : \R \to \R")[0]))

	def test_empty_slices_disappear(self):
		self.assertEqual(2, len(_slices("1, , 2,")))

	def test_whitespace_is_gone(self):
		for s in _slices("1 +\n 2"):
			self.assertFalse(any(t.kind in tokens.WHITESPACE for t in s))

	def test_keyword_text(self):
		kinds = [t.kind for t in _slices("if 1 then 2 else 3")[0]]
		self.assertEqual([tokens.IF, tokens.NUMBER, tokens.THEN, tokens.NUMBER, tokens.ELSE, tokens.NUMBER], kinds)

	def test_no_region_gives_no_statements(self):
		self.assertEqual([], into_slices(code_tokens("x = 1, and then some prose.")))


class ExpressionTests(unittest.TestCase):

	def check(self, expect, code):
		self.assertEqual(expect, str(_parse(code)))

	def test_precedence(self):
		self.check("(2 + (3 * 4))", "2 + 3 * 4")
		self.check("((2 * 3) + 4)", "2 * 3 + 4")
		self.check("((1 + 2) * 3)", "(1 + 2) * 3")

	def test_associativity(self):
		self.check("(2 ^ (3 ^ 2))", "2 ^ 3 ^ 2")
		self.check("((8 / 4) / 2)", "8 / 4 / 2")
		self.check("((5 - 2) - 1)", "5 - 2 - 1")

	def test_negation(self):
		self.check("(- 7)", "-7")
		self.check("((- 7) / 2)", "-7 / 2")
		self.check("(- (2 ^ 2))", "-2^2")
		self.check("(3 - (- 1))", "3 - -1")
		self.check("(2 ^ (- 1))", "2 ^ -1")

	def test_relations_bind_loosest(self):
		node = _parse(r"1 + 1 \equals 2")
		self.assertIsInstance(node, syntax.BinaryOp)
		self.assertIs(Relation.EQUALS, node.op)
		self.check(r"((1 + 1) \equals 2)", r"1 + 1 \equals 2")

	def test_command_operators(self):
		self.check("((2 * 3) * 4)", r"2 \cdot 3 \times 4")
		self.check("(6 / 3)", r"6 \div 3")
		self.check(r"((a \cup b) \cap c)", r"a \cup b \cap c")
		self.check(r"(a \vee (b \wedge c))", r"a \vee b \wedge c")

	def test_reals(self):
		node = _parse("1.25")
		self.assertIsInstance(node, syntax.Literal)
		self.assertEqual(1.25, node.value)

	def test_identifiers(self):
		self.check("x_{1}", "x_1")
		self.check("x_{1}", "x_{1}")
		self.check(r"\alpha_{max}", r"\alpha_{max}")
		self.check("speed", "speed")

	def test_calls(self):
		node = _parse("f(1, g(2), h())")
		self.assertIsInstance(node, syntax.Call)
		self.assertEqual(syntax.TextIdent("f"), node.function)
		self.assertEqual("f(1, g(2), h())", str(node))

	def test_argument_parses_like_standalone_text(self):
		call = _parse("f(2 + 3 * 4, if 0 then 1 else 2)")
		self.assertEqual(str(_parse("2 + 3 * 4")), str(call.args[0]))
		self.assertEqual(str(_parse("if 0 then 1 else 2")), str(call.args[1]))

	def test_frac_and_sqrt(self):
		self.check("(a / b)", r"\frac{a}{b}")
		self.check("(x ^ (1.0 / 2))", r"\sqrt{x}")
		self.check("(x ^ (1.0 / 3))", r"\sqrt[3]{x}")
		self.check("((1 + a) / 2)", r"\left( \frac{1 + a}{2} \right)")
		self.check("((a / b) / c)", r"\frac{\frac{a}{b}}{c}")
		self.check("((a / b) ^ (1.0 / 2))", r"\sqrt{\frac{a}{b}}")

	def test_conditionals(self):
		self.check("(if 0 then 1 else 2)", "if 0 then 1 else 2")
		self.check("(if c then (if d then 1 else 2) else 3)", "if c then if d then 1 else 2 else 3")
		self.check("(if c then 1 else (if d then 2 else 3))", r"\if c \then 1 \else \if d \then 2 \else 3")

	def test_spans(self):
		text = "\\$( 1 + 22 \\$)"
		statement = build_statement(into_slices(code_tokens(text))[0])
		self.assertEqual("1 + 22", text[statement.span])

	def test_malformed(self):
		for code, exception in [
			("1 + (2", UnterminatedDelimiter),
			("1 + 2)", UnterminatedDelimiter),
			("(1 + 2]", UnterminatedDelimiter),
			("f(1", UnterminatedDelimiter),
			("2 3", MalformedExpression),
			("+", MalformedExpression),
			("1 +", MalformedExpression),
			("f(1, )", MalformedExpression),
			("if 1 then 2", MalformedConditional),
			("if 1 else 2 then 3", MalformedConditional),
			("if then 1 else 2", MalformedConditional),
			(r"\sum 3", UnexpectedToken),
			(r"a \subset b", UnexpectedToken),
			(r"\foo{1}", UnexpectedToken),
			(r"\frac{\foo{1}}{2}", UnexpectedToken),
			(r"\foo + 1", UnexpectedToken),
			(r"f : 2", MalformedDeclaration),
		]:
			with self.subTest(code):
				with self.assertRaises(exception):
					_parse(code)


class DeclarationTests(unittest.TestCase):

	def test_value_declaration(self):
		node = _parse("x_1 = 2 * 3")
		self.assertIsInstance(node, syntax.ValueDeclaration)
		self.assertEqual(syntax.SubscriptIdent(syntax.TextIdent("x"), syntax.TextIdent("1")), node.identifier)
		self.assertEqual("x_{1} = (2 * 3)", str(node))

	def test_function_declaration(self):
		node = _parse(r"f : \R \to \Z")
		self.assertIsInstance(node, syntax.FunctionDeclaration)
		self.assertIs(NumberSet.REALS, node.domain)
		self.assertIs(NumberSet.INTEGERS, node.codomain)
		node = _parse(r"g : \mathbb{Q} \rightarrow \mathbb{C}")
		self.assertIs(NumberSet.RATIONALS, node.domain)
		self.assertIs(NumberSet.COMPLEX, node.codomain)

	def test_function_definition(self):
		node = _parse(r"f(x, \theta) = x * \theta")
		self.assertIsInstance(node, syntax.FunctionDefinition)
		self.assertEqual([syntax.TextIdent("x"), syntax.GreekIdent(GreekLetter.THETA)], node.params)
		self.assertEqual(r"f(x, \theta) = (x * \theta)", str(node))

	def test_set_declaration(self):
		node = _parse(r"s = \{1, 2, 3\}")
		self.assertIsInstance(node, syntax.SetDeclaration)
		self.assertEqual(3, len(node.members))

	def test_malformed_declarations(self):
		for code in [
			r"f : \R",
			r"f : \R \to 3",
			r": \R \to \R",
			r"f : \mathbb{W} \to \R",
			"f(x, x) = x",
			"f(x) y = x",
			r"\{1\} = 2",
		]:
			with self.subTest(code):
				with self.assertRaises((MalformedDeclaration, UnexpectedToken)):
					_parse(code)

	def test_identifier_nesting(self):
		stream = _slices("a_b_c")[0]
		self.assertEqual("a_{b_{c}}", str(parse_identifier(stream)))


class ParseTextTests(unittest.TestCase):

	def test_program(self):
		report = Report(verbose=0)
		program = parse_text("\\$( a = 3, b = 4, a * b - 1 \\$)", None, report)
		report.assert_no_issues("This should parse.")
		self.assertEqual(3, len(program))

	def test_parse_error_lands_in_report(self):
		report = Report(verbose=0)
		self.assertIsNone(parse_text("\\$( 1 + (2 \\$)", None, report))
		self.assertTrue(report.sick())


if __name__ == '__main__':
	unittest.main()
