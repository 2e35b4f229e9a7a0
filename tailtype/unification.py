"""
The unification approach to type-inference.

Unification makes two types the same by binding free variables.
It works by reference: whichever side is a free variable gets bound
to the other side, and later reads through `root` see the binding.
Nothing here computes a least-upper-bound, so Int and Float do not mix.

A failed unification is not rolled back. Bindings made before the
conflict was found stay where they are.
"""
from typing import Sequence
from .types import Type, TypeVariable, TypeOperator, TypeVisitor

class UnificationFailed(Exception):
	gripe:str
	def __init__(self, prior:Type, term:Type):
		self.prior, self.term = prior, term
		self.prior_text, self.term_text = str(prior), str(term)
		super().__init__(self.gripe % (self.prior_text, self.term_text))

class TypeMismatch(UnificationFailed):
	gripe = "type mismatch: %r != %r"

class RecursiveUnification(UnificationFailed):
	gripe = "Recursive unification %s %s"

def occurs_in_type(v:TypeVariable, t:Type) -> bool:
	return t.mentions(v)

def occurs_in(v:TypeVariable, types:Sequence[Type]) -> bool:
	return any(occurs_in_type(v, t) for t in types)

def is_generic(v:TypeVariable, non_generic:Sequence[Type]) -> bool:
	return not occurs_in(v, non_generic)

def unify(a:Type, b:Type):
	a, b = a.root(), b.root()
	if isinstance(a, TypeVariable):
		if a is b:
			return
		# If A occurs in B, then reject. It would be ill-founded.
		if occurs_in_type(a, b):
			raise RecursiveUnification(a, b)
		a.bind(b)
	elif isinstance(b, TypeVariable):
		unify(b, a)
	else:
		if a.name != b.name or len(a.args) != len(b.args):
			raise TypeMismatch(a, b)
		for x, y in zip(a.args, b.args):
			unify(x, y)

class Fresh(TypeVisitor):
	"""
	Copy a type, swapping each generic variable for a brand-new one.
	The same source variable always maps to the same new variable
	within one copy, so the shape of the signature survives.
	"""
	def __init__(self, non_generic:Sequence[Type]):
		self._non_generic = non_generic
		self._gamma = {}
	def on_variable(self, v: TypeVariable):
		r = v.root()
		if r is not v:
			return r.visit(self)
		if not is_generic(v, self._non_generic):
			return v
		if v not in self._gamma:
			self._gamma[v] = TypeVariable()
		return self._gamma[v]
	def on_operator(self, op: TypeOperator):
		return op if not op.args else TypeOperator(op.name, [a.visit(self) for a in op.args])

def fresh_type(t:Type, non_generic:Sequence[Type]=()) -> Type:
	return t.visit(Fresh(non_generic))
