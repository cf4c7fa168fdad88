"""
The Algebra of Types
=====================

A type is either a variable, known only by its number,
or a named constructor applied to an ordered sequence of argument-types.
A type-schema wraps a type in zero or more universal quantifiers.

These are value objects: two of them are equal exactly when they have
the same shape, so they hash well and serve as dictionary keys.
Nothing in here ever mutates a type. Anything that "changes" a type
builds a new one, usually by way of a TypeVisitor.

Arrows get no class of their own. An arrow is a constructor named ARROW
with two arguments, and the renderer knows to print it infix.
"""
from typing import Iterable, Mapping, Optional

ARROW = "→"

class Type:
	"""Value objects: equality and hashing follow the key."""
	def visit(self, visitor:"TypeVisitor"): raise NotImplementedError(type(self))
	def poll(self, seen:dict): raise NotImplementedError(type(self))
	def occurs(self, nr:int) -> bool: raise NotImplementedError(type(self))

	def __init__(self, *key):
		self._key = key
		self._hash = hash(key)
	def __hash__(self): return self._hash
	def __eq__(self, other): return type(self) is type(other) and self._key == other._key
	def __repr__(self) -> str: return self.visit(Render())

	def vars(self) -> list[int]:
		""" Variable numbers in order of first appearance. """
		seen = {}
		self.poll(seen)
		return list(seen)

	def apply(self, ctx) -> "Type":
		""" Resolve every bound variable per the context, chasing chains of bindings. """
		return self.visit(Chase(ctx.substitution))

	def substitute(self, mapping:Mapping[int, "Type"]) -> "Type":
		""" Replace variables per the mapping, exactly once. No chasing. """
		return self.visit(Rewrite(mapping))

	def as_arrow(self) -> Optional[tuple["Type", "Type"]]: return None

	def arrow_args(self) -> tuple["Type", ...]:
		""" The argument-types along the spine of a (curried) arrow. Empty if not an arrow. """
		args, pair = [], self.as_arrow()
		while pair is not None:
			args.append(pair[0])
			pair = pair[1].as_arrow()
		return tuple(args)

	def returns(self) -> "Type":
		""" What's left after all the arguments are supplied. """
		typ, pair = self, self.as_arrow()
		while pair is not None:
			typ = pair[1]
			pair = typ.as_arrow()
		return typ

class Variable(Type):
	def __init__(self, nr:int):
		assert isinstance(nr, int) and nr >= 0, nr
		self.nr = nr
		super().__init__(nr)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_variable(self)
	def poll(self, seen:dict): seen.setdefault(self.nr)
	def occurs(self, nr:int) -> bool: return self.nr == nr

class Constructed(Type):
	def __init__(self, name:str, args:Iterable[Type]=()):
		self.name = name
		self.args = tuple(args)
		assert all(isinstance(a, Type) for a in self.args), self.args
		super().__init__(name, self.args)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_constructed(self)
	def poll(self, seen:dict):
		for a in self.args: a.poll(seen)
	def occurs(self, nr:int) -> bool:
		return any(a.occurs(nr) for a in self.args)
	def as_arrow(self):
		if self.name == ARROW and len(self.args) == 2:
			return self.args
		return None

def arrow(*types:Type) -> Type:
	"""
	arrow(a, b, c) is a → (b → c), which renders as a → b → c.
	A single type is just itself.
	"""
	assert types, "An arrow needs at least a result type."
	typ = types[-1]
	for arg in reversed(types[:-1]):
		typ = Constructed(ARROW, (arg, typ))
	return typ

#########################

class TypeSchema:
	def visit(self, visitor:"TypeVisitor"): raise NotImplementedError(type(self))
	def bound_vars(self) -> list[int]: raise NotImplementedError(type(self))
	def body_type(self) -> Type: raise NotImplementedError(type(self))

	def __init__(self, *key):
		self._key = key
		self._hash = hash(key)
	def __hash__(self): return self._hash
	def __eq__(self, other): return type(self) is type(other) and self._key == other._key
	def __repr__(self) -> str: return self.visit(Render())

	def free_vars(self) -> list[int]:
		bound = set(self.bound_vars())
		return [v for v in self.body_type().vars() if v not in bound]

	def apply(self, ctx) -> "TypeSchema":
		""" Resolve the free variables per the context. Bound variables stand for themselves. """
		bound = self.bound_vars()
		gamma = ctx.substitution
		if any(v in gamma for v in bound):
			gamma = {k:t for k,t in gamma.items() if k not in bound}
		return self.visit(Chase(gamma))

	def instantiate(self, ctx) -> Type:
		"""
		Replace each bound variable with a fresh one from the context,
		outermost quantifier first. Free variables stay as they are.
		"""
		mapping = {v: ctx.new_variable() for v in self.bound_vars()}
		return self.body_type().substitute(mapping)

class Monotype(TypeSchema):
	def __init__(self, typ:Type):
		assert isinstance(typ, Type), typ
		self.typ = typ
		super().__init__(typ)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_monotype(self)
	def bound_vars(self) -> list[int]: return []
	def body_type(self) -> Type: return self.typ

class Polytype(TypeSchema):
	""" The variable is universally quantified over the body. """
	def __init__(self, variable:int, body:TypeSchema):
		assert isinstance(body, TypeSchema), body
		self.variable = variable
		self.body = body
		super().__init__(variable, body)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_polytype(self)
	def bound_vars(self) -> list[int]: return [self.variable] + self.body.bound_vars()
	def body_type(self) -> Type: return self.body.body_type()

###################
#

class TypeVisitor:
	def on_variable(self, v:Variable): raise NotImplementedError(type(self))
	def on_constructed(self, c:Constructed): raise NotImplementedError(type(self))
	def on_monotype(self, m:Monotype): raise NotImplementedError(type(self))
	def on_polytype(self, p:Polytype): raise NotImplementedError(type(self))

class Render(TypeVisitor):
	""" Return a string representation of the term. The front-end reads this back. """
	def on_variable(self, v: Variable):
		return "t%d" % v.nr
	def on_constructed(self, c: Constructed):
		pair = c.as_arrow()
		if pair is not None:
			lhs, rhs = pair
			text = lhs.visit(self)
			if lhs.as_arrow() is not None: text = "(%s)" % text
			return "%s %s %s" % (text, ARROW, rhs.visit(self))
		if c.args:
			return "%s(%s)" % (c.name, ",".join(a.visit(self) for a in c.args))
		return c.name
	def on_monotype(self, m: Monotype):
		return m.typ.visit(self)
	def on_polytype(self, p: Polytype):
		return "∀t%d. %s" % (p.variable, p.body.visit(self))

class Rewrite(TypeVisitor):
	# Structure-preserving copy, with variables replaced per the mapping.
	def __init__(self, gamma:Mapping[int, Type]):
		self.gamma = gamma
	def on_variable(self, v: Variable):
		return self.gamma.get(v.nr, v)
	def on_constructed(self, c: Constructed):
		return c if not c.args else Constructed(c.name, [a.visit(self) for a in c.args])
	def on_monotype(self, m: Monotype):
		return Monotype(m.typ.visit(self))
	def on_polytype(self, p: Polytype):
		return Polytype(p.variable, p.body.visit(self))

class Chase(Rewrite):
	# Bindings may point at further bound variables; follow them to the end.
	def on_variable(self, v: Variable):
		end = v
		while isinstance(end, Variable) and end.nr in self.gamma:
			end = self.gamma[end.nr]
		return end if isinstance(end, Variable) else end.visit(self)
