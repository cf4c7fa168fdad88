"""
The unification context: a substitution plus a supply of fresh variables.

Variable numbers mean something only within the context that issued them.
Two contexts built independently will generally both start counting from zero,
so combining them is a matter of relocating one into the other's number-space.
That is what `Context.merge` and the `ContextChange` it returns are for.

Unification comes in two flavors:

* `Context.unify` works on a scratch copy and commits only on success.
  If it raises, the context is exactly as it was.

* `Context.unify_fast` works in place. If it raises, some bindings from
  before the failing step may remain. Use it when you'll throw the whole
  context away on failure anyway, as in a search that clones before each try.
"""
from typing import Iterable
from .algebra import Type, TypeSchema, Variable, Constructed, Polytype, Render, Rewrite

class UnificationError(Exception):
	""" Two types could not be made the same. """

class Occurs(UnificationError):
	""" Binding the variable would make an infinite type, as in a = list(a). """
	def __init__(self, variable:int):
		super().__init__(variable)
		self.variable = variable
	def __str__(self): return "Occurs(%d)" % self.variable

class Failure(UnificationError):
	""" The constructors disagree. These are the two types at the point of disagreement. """
	def __init__(self, left:Type, right:Type):
		super().__init__(left, right)
		self.left, self.right = left, right
	def __str__(self):
		return "Failure(%s, %s)" % (self.left.visit(Render()), self.right.visit(Render()))

class Context:
	_substitution: dict[int, Type]
	_next: int

	def __init__(self):
		self._substitution = {}
		self._next = 0

	@property
	def substitution(self) -> dict[int, Type]:
		return self._substitution

	def __eq__(self, other):
		return isinstance(other, Context) and self._next == other._next and self._substitution == other._substitution
	def __repr__(self):
		bindings = ", ".join("t%d:=%s" % (v, t) for v, t in sorted(self._substitution.items()))
		return "<Context next=%d {%s}>" % (self._next, bindings)

	def copy(self) -> "Context":
		# Types are immutable, so a fresh dict is a complete copy.
		twin = Context()
		twin._substitution = dict(self._substitution)
		twin._next = self._next
		return twin

	def extend(self, v:int, t:Type):
		"""
		Bind (or re-bind) variable number `v` to `t`. No occurs-check happens here.
		The variable need not have come from this context; the watermark keeps up.
		"""
		if v >= self._next:
			self._next = v + 1
		self._substitution[v] = t

	def new_variable(self) -> Variable:
		self._next += 1
		return Variable(self._next - 1)

	def unify(self, t1:Type, t2:Type):
		""" Make t1 and t2 the same, or raise a UnificationError and change nothing. """
		t1, t2 = t1.apply(self), t2.apply(self)
		scratch = self.copy()
		scratch._unify(t1, t2)
		self._substitution, self._next = scratch._substitution, scratch._next

	def unify_fast(self, t1:Type, t2:Type):
		""" Like unify, but a failure may leave partial bindings behind. """
		self._unify(t1.apply(self), t2.apply(self))

	def _unify(self, t1:Type, t2:Type):
		# Both arguments arrive already resolved against the current substitution.
		if t1 == t2:
			return
		if isinstance(t1, Variable):
			self._bind(t1.nr, t2)
		elif isinstance(t2, Variable):
			self._bind(t2.nr, t1)
		else:
			assert isinstance(t1, Constructed) and isinstance(t2, Constructed), (t1, t2)
			if t1.name != t2.name:
				raise Failure(t1, t2)
			# Left to right. Each pair sees whatever the previous pairs bound.
			# Arity is the caller's business: zip quietly stops at the shorter list.
			for a, b in zip(t1.args, t2.args):
				self._unify(a.apply(self), b.apply(self))

	def _bind(self, v:int, t:Type):
		t = t.apply(self)
		if t.occurs(v):
			raise Occurs(v)
		self.extend(v, t)

	def confine(self, keep:Iterable[int]):
		"""
		Throw away every binding except those for the listed variables.
		Every listed variable must be bound: a KeyError here means the caller lost track.
		"""
		self._substitution = {v: self._substitution[v] for v in keep}

	def merge(self, other:"Context", sacreds:Iterable[int]=()) -> "ContextChange":
		"""
		Absorb another context's bindings into this one.

		Variables from the other context move up by this context's watermark,
		except the sacred ones, which are taken to mean the same thing in both
		contexts and keep their numbers. Anything built under the other context
		must go through the returned ContextChange before use alongside this one.
		Do not go on using the other context afterward.

		The watermark moves up by the other's whole watermark, even where sacred
		variables leave gaps in the number-space.

		Where both contexts bind the same sacred variable, the two bindings
		are unified. If they clash, the UnificationError comes out and this
		context is left as it was.
		"""
		change = ContextChange(self._next, sacreds)
		scratch = self.copy()
		clashes = []
		for v, t in other._substitution.items():
			v, t = change.reify_variable(v), change.reify_type(t)
			if v in scratch._substitution: clashes.append((scratch._substitution[v], t))
			else: scratch._substitution[v] = t
		scratch._next += other._next
		for mine, theirs in clashes:
			scratch._unify(mine.apply(scratch), theirs.apply(scratch))
		self._substitution, self._next = scratch._substitution, scratch._next
		return change

	def reduct_substitution(self):
		"""
		Short-circuit chains of variable-to-variable bindings, so that each
		binding leads directly to the (non-variable) end of its chain.
		A chain ending in an unbound variable, or running in circles,
		means the substitution is corrupt. That raises RuntimeError.
		"""
		gamma = self._substitution
		reduced = {}
		for k, t in gamma.items():
			seen = {k}
			while isinstance(t, Variable):
				if t.nr in seen:
					raise RuntimeError("Circular chain in substitution", k)
				seen.add(t.nr)
				try: t = gamma[t.nr]
				except KeyError: raise RuntimeError("Type not resolved in substitution reduction", k) from None
			reduced[k] = t
		self._substitution = reduced

###################
#

class ContextChange:
	"""
	Relocation instructions for types built under a context that has since
	been merged into another. Apply it to every such type and type-schema.
	"""
	def __init__(self, delta:int, sacreds:Iterable[int]):
		self.delta = delta
		self.sacreds = frozenset(sacreds)
		self._reify = Reify(self)

	def __repr__(self):
		return "<ContextChange +%d except %s>" % (self.delta, sorted(self.sacreds))

	def reify_variable(self, nr:int) -> int:
		return nr if nr in self.sacreds else nr + self.delta

	def reify_type(self, typ:Type) -> Type:
		return typ.visit(self._reify)

	def reify_typeschema(self, schema:TypeSchema) -> TypeSchema:
		return schema.visit(self._reify)

class Reify(Rewrite):
	# The bound variable of a polytype lives in the same number-space as free ones.
	def __init__(self, change:ContextChange):
		super().__init__({})
		self.change = change
	def on_variable(self, v: Variable):
		return Variable(self.change.reify_variable(v.nr))
	def on_polytype(self, p: Polytype):
		return Polytype(self.change.reify_variable(p.variable), p.body.visit(self))
