"""
Signatures of the built-in functions and operators.

Both tables are built once at import and never change afterwards.
Some entries mention type variables. Those variables belong to the table,
so every use must go through `fresh_type` before unifying against it.
"""
from types import MappingProxyType
from .types import Type, TypeVariable, function, Int, Float, String, None_

class UnknownIdentifier(KeyError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def __str__(self): return "unknown identifier %r" % self.name

def _conversion(result:Type) -> Type:
	return function(TypeVariable(), result)

BUILTINS = MappingProxyType({
	"timestamp": function(Int),
	"len": function(String, Int),
	"settime": function(Int, None_),
	"strptime": function(String, None_),
	"strtol": function(String, Int),
	"tolower": function(String, String),
	"getfilename": function(String),
	"int": _conversion(Int),
	"float": _conversion(Float),
	"string": _conversion(String),
})

def lookup_builtin(name:str) -> Type:
	try: return BUILTINS[name]
	except KeyError: raise UnknownIdentifier(name) from None

def _same(result=None) -> Type:
	a = TypeVariable()
	return function(a, a, result or a)

_logical = function(Int, Int, Int)

BINARY_OPERATORS = MappingProxyType({
	**{glyph: _same() for glyph in ("+", "-", "*", "/", "%", "**")},
	**{glyph: _same(Int) for glyph in ("<", ">", "<=", ">=", "==", "!=")},
	"&&": _logical,
	"||": _logical,
	"=": _same(),
	"+=": _same(),
})

def _endo() -> Type:
	a = TypeVariable()
	return function(a, a)

UNARY_OPERATORS = MappingProxyType({
	"!": function(Int, Int),
	"-": _endo(),
	"++": _endo(),
	"--": _endo(),
})
