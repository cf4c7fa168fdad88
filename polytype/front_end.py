"""
Read types and type-schemas in the same notation the renderer prints.
The grammar lives in Notation.md, next to this file.
"""
import sys
from pathlib import Path

from boozetools.macroparse.runtime import TypicalApplication, make_tables
from boozetools.parsing.interface import ParseError, END_OF_TOKENS
from . import syntax
from .algebra import Type, TypeSchema
from .manifest import TypeBuilder

_tables = make_tables(Path(__file__).parent/"Notation.md")

class NotationError(ParseError):
	def __init__(self, expected:str, found:str, where:slice):
		super().__init__(expected, found, where)
		self.expected, self.found, self.where = expected, found, where
	def __str__(self):
		return "Expected %s but found %s at position %d." % (self.expected, self.found, self.where.start)

_DESCRIPTION = {
	"variable": "a type variable",
	"name": "a type name",
	"FORALL": "a quantifier",
	"ARROW": "an arrow",
	END_OF_TOKENS: "the end of the text",
}

def _describe(terminal:str) -> str:
	return _DESCRIPTION.get(terminal) or repr(terminal)

class NotationParser(TypicalApplication):

	def scan_ignore(self, yy): pass

	@staticmethod
	def scan_punctuation(yy):
		yy.token(sys.intern(yy.match()), yy.slice())

	@staticmethod
	def scan_variable(yy):
		yy.token("variable", syntax.VariableName(int(yy.match()[1:]), yy.slice()))

	@staticmethod
	def scan_word(yy):
		yy.token("name", syntax.Name(yy.match(), yy.slice()))

	@staticmethod
	def scan_forall(yy):
		yy.token("FORALL", yy.slice())

	@staticmethod
	def scan_arrow(yy):
		yy.token("ARROW", yy.slice())

	@staticmethod
	def parse_first(item): return [item]

	@staticmethod
	def parse_more(some, another):
		some.append(another)
		return some

	@staticmethod
	def default_parse(ctor, *args):
		return getattr(syntax, ctor)(*args)

	def on_stuck(self, yy):
		raise NotationError("a type", repr(yy.match()), yy.slice())

	def unexpected_token(self, kind, semantic, pds):
		expected = " or ".join(_describe(t) for t in self.expected_tokens(pds))
		if kind == END_OF_TOKENS:
			where = slice(self.yy.right, self.yy.right)
			raise NotationError(expected, _describe(kind), where)
		raise NotationError(expected, repr(self.yy.match()), self.yy.slice())

notation_parser = NotationParser(_tables)

def parse_type(text:str) -> Type:
	return TypeBuilder().visit(notation_parser.parse(text, language="type"))

def parse_typeschema(text:str) -> TypeSchema:
	return TypeBuilder().schema(notation_parser.parse(text, language="schema"))
