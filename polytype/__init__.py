"""
Hindley-Milner style unification over a substitution-based context.

Types are built from variables and named constructors (see algebra);
a Context unifies them, hands out fresh variables, and can absorb
another independently-built Context (see context).
"""
from .algebra import ARROW, Type, Variable, Constructed, arrow, TypeSchema, Monotype, Polytype
from .context import Context, ContextChange, UnificationError, Occurs, Failure
from .front_end import parse_type, parse_typeschema, NotationError
