"""
The fixed vocabularies of the notation.
These are the things a backslash-command can resolve into,
along with the number sets that may serve as a function's domain or codomain.
Each member's value is the spelling that produces it, which is also how it prints.
"""
from enum import Enum

class GreekLetter(Enum):
	ALPHA = "alpha"
	BETA = "beta"
	GAMMA = "gamma"
	DELTA = "delta"
	EPSILON = "epsilon"
	ZETA = "zeta"
	ETA = "eta"
	THETA = "theta"
	IOTA = "iota"
	KAPPA = "kappa"
	LAMBDA = "lambda"
	MU = "mu"
	NU = "nu"
	XI = "xi"
	PI = "pi"
	RHO = "rho"
	SIGMA = "sigma"
	TAU = "tau"
	UPSILON = "upsilon"
	PHI = "phi"
	CHI = "chi"
	PSI = "psi"
	OMEGA = "omega"

	VAR_EPSILON = "varepsilon"
	VAR_THETA = "vartheta"
	VAR_RHO = "varrho"
	VAR_SIGMA = "varsigma"
	VAR_PHI = "varphi"

	UPPER_GAMMA = "Gamma"
	UPPER_DELTA = "Delta"
	UPPER_THETA = "Theta"
	UPPER_LAMBDA = "Lambda"
	UPPER_XI = "Xi"
	UPPER_PI = "Pi"
	UPPER_SIGMA = "Sigma"
	UPPER_UPSILON = "Upsilon"
	UPPER_PHI = "Phi"
	UPPER_PSI = "Psi"
	UPPER_OMEGA = "Omega"

	def __str__(self): return "\\" + self.value

class BinOp(Enum):
	ADDITION = "+"
	SUBTRACTION = "-"
	MULTIPLY = "*"
	DIVIDE = "/"
	EXPONENT = "^"
	PLUS_MINUS = "pm"
	SET_DIFFERENCE = "setminus"
	BOOL_AND = "wedge"
	BOOL_OR = "vee"
	BOOL_XOR = "oplus"
	EXTERNAL_DIRECT_PRODUCT = "extprod"
	INTERNAL_DIRECT_PRODUCT = "intprod"
	UNION = "cup"
	INTERSECTION = "cap"

	def __str__(self): return self.value if len(self.value) == 1 else "\\" + self.value

class UnOp(Enum):
	NEGATION = "-"
	BOOL_NOT = "neg"

	def __str__(self): return self.value if len(self.value) == 1 else "\\" + self.value

class Relation(Enum):
	""" Relational conditionals: these compare two numbers and yield a truth-value. """
	EQUALS = "equals"
	APPROX = "approx"
	LESS_EQ = "leq"
	GREATER_EQ = "geq"
	LESS = "less"
	GREATER = "greater"
	CONGRUENT = "ifcong"
	IN = "ifin"
	NOT_IN = "ifnin"

	def __str__(self): return "\\" + self.value

class SetRelation(Enum):
	""" Relations between sets. These appear in prose-like statements, and are not evaluated yet. """
	EQUIVALENT = "equiv"
	SIMILAR = "sim"
	SIMILAR_EQ = "simeq"
	SUBSET = "subset"
	SUPERSET = "supset"
	SUBSET_EQ = "subseteq"
	SUPERSET_EQ = "supseteq"
	PARALLEL = "parallel"
	PERPENDICULAR = "perp"
	MODELS = "models"
	CONGRUENT = "cong"
	IN = "in"
	NOT_IN = "ni"

class BigOperator(Enum):
	FORALL = "forall"
	SUM = "sum"
	PRODUCT = "prod"
	UNION = "bigcup"
	INTERSECTION = "bigcap"
	AND = "bigwedge"
	OR = "bigvee"

class NumberSet(Enum):
	INTEGERS = "Z"
	REALS = "R"
	RATIONALS = "Q"
	COMPLEX = "C"
	NATURALS = "N"

	def __str__(self): return "\\" + self.value
