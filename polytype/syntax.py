"""
Parse-nodes for the type notation.
The parser builds these bottom-up; manifest.TypeBuilder turns them into algebra.
Each node remembers the slice of text it came from, for the sake of error messages.
Constructor arguments come in the order the grammar (Notation.md) supplies them.
"""
from typing import Sequence

class Phrase:
	slice: slice
	def left(self) -> int: return self.slice.start
	def right(self) -> int: return self.slice.stop

class Name(Phrase):
	def __init__(self, text:str, where:slice):
		self.text, self.slice = text, where
	def __repr__(self): return "<name %s>" % self.text

class TypeExpression(Phrase): pass

class VariableName(TypeExpression):
	""" Spelled t0, t1, t2, ... """
	def __init__(self, nr:int, where:slice):
		self.nr, self.slice = nr, where
	def __repr__(self): return "<var t%d>" % self.nr

class TypeCall(TypeExpression):
	""" A constructor name, possibly applied to arguments. """
	def __init__(self, name:Name, args:Sequence[TypeExpression]=(), close:slice=None):
		self.name, self.args = name.text, tuple(args)
		self.slice = slice(name.left(), (close or name.slice).stop)
	def __repr__(self): return "<call %s/%d>" % (self.name, len(self.args))

class ArrowSpec(TypeExpression):
	def __init__(self, lhs:TypeExpression, rhs:TypeExpression):
		self.lhs, self.rhs = lhs, rhs
		self.slice = slice(lhs.left(), rhs.right())

class Quantified(Phrase):
	""" ∀t0. body -- where the body may be another Quantified. """
	def __init__(self, where:slice, variable:VariableName, body:Phrase):
		self.variable, self.body = variable, body
		self.slice = slice(where.start, body.right())
