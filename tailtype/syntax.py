"""
The set of parse-nodes in simple form.
The (external) parser calls these constructors bottom-up.
Class-level type annotations make peace with the IDE wherever the checker adds fields.
Spans are character offsets into the program text, where the parser knows them.
"""
from typing import Optional, Sequence, Union
from .regex_syntax import Regexp
from .types import Type

class Phrase:
	span: Optional[slice] = None

class Expr(Phrase):
	typ: Type  # Filled in by the type checker.

class Literal(Expr):
	def __init__(self, value:Union[int, float, str], span=None):
		self.value, self.span = value, span
	def __repr__(self): return "<lit %r>" % (self.value,)

class Identifier(Expr):
	def __init__(self, name:str, span=None):
		self.name, self.span = name, span
	def __repr__(self): return "<ref:%s>" % self.name

class CaptureRef(Expr):
	""" Either $1 (by number) or $name (by group name). """
	def __init__(self, ref:Union[int, str], span=None):
		self.ref, self.span = ref, span
	def __repr__(self): return "<$%s>" % self.ref

class Call(Expr):
	def __init__(self, name:str, args:Sequence[Expr]=(), span=None):
		self.name, self.args, self.span = name, tuple(args), span
	def __repr__(self): return "<call %s%r>" % (self.name, self.args)

class BinaryExpr(Expr):
	def __init__(self, op:str, lhs:Expr, rhs:Expr, span=None):
		self.op, self.lhs, self.rhs, self.span = op, lhs, rhs, span
	def __repr__(self): return "(%r %s %r)" % (self.lhs, self.op, self.rhs)

class UnaryExpr(Expr):
	def __init__(self, op:str, arg:Expr, span=None):
		self.op, self.arg, self.span = op, arg, span
	def __repr__(self): return "(%s %r)" % (self.op, self.arg)

class Declaration(Phrase):
	""" A program variable, which may say its type up front. """
	typ: Type
	def __init__(self, name:str, type_name:Optional[str]=None, span=None):
		self.name, self.type_name, self.span = name, type_name, span
	def __repr__(self): return "<decl %s:%s>" % (self.name, self.type_name)

class PatternBlock(Phrase):
	""" The body runs for lines that match; capture references in it refer to this pattern. """
	def __init__(self, pattern:Regexp, body:Sequence[Phrase]=(), span=None):
		self.pattern, self.body, self.span = pattern, tuple(body), span

class Program(Phrase):
	def __init__(self, body:Sequence[Phrase]=(), text:Optional[str]=None):
		self.body = tuple(body)
		self.text = text
