"""
The representation of types for the tail-language type checker.

There are just two kinds of type:

1. Type variables, which have identity and may later be bound to an instance.
2. Type operators, which have a name and a (possibly empty) list of argument types.

Function types are operators named "→" whose last argument is the result.

Binding a variable happens only during unification. Reading a binding goes
through `root`, which compresses the chain as it goes. Every variable carries
its own lock because independent inference passes may share variables that
came out of the builtin table.
"""
import threading
from typing import Sequence

ARROW = "→"

class Type:
	def root(self) -> "Type": raise NotImplementedError(type(self))
	def visit(self, visitor:"TypeVisitor"): raise NotImplementedError(type(self))
	def mentions(self, v:"TypeVariable") -> bool: raise NotImplementedError(type(self))
	def __repr__(self): return str(self)

_next_id = 0
_next_id_lock = threading.Lock()

def _allocate_id() -> int:
	global _next_id
	with _next_id_lock:
		nr = _next_id
		_next_id += 1
	return nr

def reset_variable_ids():
	""" Start numbering type variables from zero again. Handy for tests. """
	global _next_id
	with _next_id_lock:
		_next_id = 0

class TypeVariable(Type):
	""" Identity is equality: two variables are the same only if they are the same object. """
	nr: int
	instance: Type = None

	def __init__(self):
		self.nr = _allocate_id()
		self._lock = threading.Lock()

	def root(self) -> Type:
		with self._lock:
			if self.instance is None:
				return self
			r = self.instance.root()
			self.instance = r
			return r

	def bind(self, instance:Type):
		with self._lock:
			self.instance = instance

	def is_bound(self) -> bool:
		with self._lock:
			return self.instance is not None

	def visit(self, visitor): return visitor.on_variable(self)

	def mentions(self, v):
		r = self.root()
		return r is v if isinstance(r, TypeVariable) else r.mentions(v)

	def __str__(self):
		with self._lock:
			instance = self.instance
		if instance is not None:
			return str(instance)
		return "typeVar%d" % self.nr

class TypeOperator(Type):
	""" Immutable. The builtin atomic types are shared by everyone. """
	__slots__ = ("name", "args")
	name: str
	args: tuple[Type, ...]

	def __init__(self, name:str, args:Sequence[Type]=()):
		object.__setattr__(self, "name", name)
		object.__setattr__(self, "args", tuple(args))

	def __setattr__(self, key, value):
		raise AttributeError("Type operators are immutable.")

	def root(self) -> Type: return self
	def visit(self, visitor): return visitor.on_operator(self)

	def mentions(self, v):
		return any(a.mentions(v) for a in self.args)

	def arity(self) -> int: return len(self.args)

	def __str__(self):
		return " ".join([self.name, *map(str, self.args)])

def function(*args:Type) -> TypeOperator:
	""" Parameter types first, and the result type last. """
	return TypeOperator(ARROW, args)

def is_function(t:Type) -> bool:
	t = t.root()
	return isinstance(t, TypeOperator) and t.name == ARROW

def root(t:Type) -> Type:
	return t.root()

def equals(t1:Type, t2:Type) -> bool:
	""" Deep structural comparison after resolving variables on both sides. """
	r1, r2 = t1.root(), t2.root()
	if isinstance(r1, TypeVariable) or isinstance(r2, TypeVariable):
		return r1 is r2
	if r1.name != r2.name or len(r1.args) != len(r2.args):
		return False
	return all(equals(a, b) for a, b in zip(r1.args, r2.args))

#########################

class TypeVisitor:
	def on_variable(self, v:TypeVariable): pass
	def on_operator(self, op:TypeOperator): pass

class Resolve(TypeVisitor):
	""" Rebuild a type with every bound variable replaced by what it stands for. """
	def on_variable(self, v: TypeVariable):
		r = v.root()
		return r if r is v else r.visit(self)
	def on_operator(self, op: TypeOperator):
		return op if not op.args else TypeOperator(op.name, [a.visit(self) for a in op.args])

def resolve(t:Type) -> Type:
	return t.visit(Resolve())

#########################

Undef = TypeOperator("Undef")
Error = TypeOperator("Error")
None_ = TypeOperator("None")
Int = TypeOperator("Int")
Float = TypeOperator("Float")
String = TypeOperator("String")

ATOMS = {t.name: t for t in (Undef, Error, None_, Int, Float, String)}
