import unittest
from jimtex.lexer import lex
from jimtex.ontology import NumberSet
from jimtex import tokens

def _kinds(text):
	return [t.kind for t in lex(text)]

class LexerTests(unittest.TestCase):

	def test_empty_document(self):
		self.assertEqual([], lex(""))

	def test_region_markers(self):
		self.assertEqual(
			[tokens.OPEN_INLINE, tokens.TEXT, "_", tokens.NUMBER, tokens.CLOSE_INLINE],
			_kinds(r"\$(x_1\$)"),
		)
		self.assertEqual([tokens.OPEN_DISPLAY, tokens.CLOSE_DISPLAY], _kinds(r"\$[\$]"))

	def test_escapes(self):
		self.assertEqual(
			[tokens.ESC_LEFT_PAREN, " ", tokens.ESC_LEFT_BRACE, " ", tokens.ESC_PERCENT, " ", tokens.ESC_BACKSLASH, " ", tokens.ESC_HASH],
			_kinds(r"\( \{ \% \\ \#"),
		)

	def test_number_sets(self):
		stream = lex(r"\R\Z")
		self.assertEqual([tokens.NUMBER_SET]*2, [t.kind for t in stream])
		self.assertEqual([NumberSet.REALS, NumberSet.INTEGERS], [t.semantic for t in stream])

	def test_any_other_backslash_is_bare(self):
		self.assertEqual([tokens.BACKSLASH, tokens.TEXT], _kinds(r"\alpha"))
		self.assertEqual([tokens.BACKSLASH, tokens.TEXT], _kinds(r"\$x"))

	def test_digits_and_text_never_merge(self):
		stream = lex("ab12cd")
		self.assertEqual([tokens.TEXT, tokens.NUMBER, tokens.TEXT], [t.kind for t in stream])
		self.assertEqual(["ab", "12", "cd"], [t.semantic for t in stream])

	def test_punctuation_is_its_own_kind(self):
		self.assertEqual(list("(){}[],:=_^%.+-*/"), _kinds("(){}[],:=_^%.+-*/"))

	def test_whitespace(self):
		self.assertEqual([" ", " ", " ", "\n"], _kinds(" \t\r\n"))

	def test_slices(self):
		stream = lex("ab 12")
		self.assertEqual(slice(0, 2), stream[0].slice)
		self.assertEqual(slice(3, 5), stream[2].slice)

	def test_lexing_never_fails(self):
		text = "Prose with $dollars$, & ampersands, # and \\ odd \\} bits!"
		self.assertEqual(len(text), sum(t.slice.stop - t.slice.start for t in lex(text)))


if __name__ == '__main__':
	unittest.main()
