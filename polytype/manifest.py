"""
Turn parse-nodes into the algebra of types.
"""
from boozetools.support.foundation import Visitor
from . import syntax
from .algebra import Type, TypeSchema, Variable, Constructed, Monotype, Polytype, arrow

class TypeBuilder(Visitor):
	""" Evaluate type-expressions into types, and quantified phrases into type-schemas. """

	def schema(self, node:syntax.Phrase) -> TypeSchema:
		if isinstance(node, syntax.Quantified):
			return self.visit(node)
		return Monotype(self.visit(node))

	def visit_VariableName(self, v:syntax.VariableName) -> Type:
		return Variable(v.nr)

	def visit_TypeCall(self, tc:syntax.TypeCall) -> Type:
		return Constructed(tc.name, [self.visit(a) for a in tc.args])

	def visit_ArrowSpec(self, spec:syntax.ArrowSpec) -> Type:
		return arrow(self.visit(spec.lhs), self.visit(spec.rhs))

	def visit_Quantified(self, q:syntax.Quantified) -> TypeSchema:
		return Polytype(q.variable.nr, self.schema(q.body))
