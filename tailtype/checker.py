"""
Type inference over the expression tree of a tail-language program.

Every expression gets a type. Literals know their own. Capture references
ask the enclosing pattern. Calls and operators look up a signature, take a
fresh copy of it, and unify that with the types actually at the call site.
Declared variables whose type is not given start out as type variables and
stay non-generic, so every use of them constrains the same variable.

The first conflict ends the pass. Whatever bindings were made before that
point are left as they are.
"""
from typing import Optional
from boozetools.support.foundation import Visitor
from . import syntax
from .builtins import lookup_builtin, UnknownIdentifier, BINARY_OPERATORS, UNARY_OPERATORS
from .capref import infer_capref_type
from .diagnostics import Report
from .regex_syntax import Regexp, capture_names
from .types import Type, TypeVariable, function, resolve, Int, Float, String
from .unification import unify, fresh_type, UnificationFailed, RecursiveUnification

DECLARABLE = {t.name: t for t in (Int, Float, String)}

class NoSuchCaptureGroup(LookupError):
	pass

class OutsidePattern(LookupError):
	pass

class BadTypeName(LookupError):
	pass

class Blame(Exception):
	""" Ties the reason a pass stopped to the phrase where it stopped. """
	def __init__(self, site:syntax.Phrase, cause:Exception):
		super().__init__(site, cause)
		self.site, self.cause = site, cause

class TypeChecker(Visitor):
	_symbols: dict[str, Type]
	_non_generic: list[Type]
	_patterns: list[Regexp]

	def __init__(self, report:Report):
		self._report = report
		self._reset()

	def _reset(self):
		self._symbols = {}
		self._non_generic = []
		self._patterns = []

	def check_program(self, program:syntax.Program) -> bool:
		""" One inference pass. Returns True if the whole program types. """
		self._reset()
		if program.text is not None:
			self._report.set_source(program.text)
		try:
			self.visit(program)
		except Blame as e:
			self._complain(e.site, e.cause)
			return False
		return True

	def _complain(self, site, cause):
		report = self._report
		if isinstance(cause, RecursiveUnification): report.recursive_type(site, cause)
		elif isinstance(cause, UnificationFailed): report.type_mismatch(site, cause)
		elif isinstance(cause, UnknownIdentifier): report.undefined_name(site, cause.name)
		elif isinstance(cause, NoSuchCaptureGroup): report.no_such_capture_group(site)
		elif isinstance(cause, OutsidePattern): report.outside_pattern(site)
		elif isinstance(cause, BadTypeName): report.bad_type_name(site)
		else: raise cause

	def type_of(self, expr:syntax.Expr) -> Type:
		""" The type of an already-checked expression, with variables resolved as far as they go. """
		return resolve(expr.typ)

	def _unify(self, site:syntax.Phrase, a:Type, b:Type):
		try: unify(a, b)
		except UnificationFailed as e: raise Blame(site, e) from e

	def _note(self, expr:syntax.Expr, typ:Type) -> Type:
		expr.typ = typ
		self._report.info(repr(expr), ":", typ)
		return typ

	def _call_site(self, expr:syntax.Expr, signature:Type, arg_exprs) -> Type:
		arg_types = [self.visit(a) for a in arg_exprs]
		res_typ = TypeVariable()
		self._unify(expr, function(*arg_types, res_typ), fresh_type(signature, self._non_generic))
		return self._note(expr, res_typ)

	def visit_Program(self, program:syntax.Program):
		for phrase in program.body:
			self.visit(phrase)

	def visit_PatternBlock(self, block:syntax.PatternBlock):
		self._patterns.append(block.pattern)
		try:
			for phrase in block.body:
				self.visit(phrase)
		finally:
			self._patterns.pop()

	def visit_Declaration(self, decl:syntax.Declaration):
		if decl.type_name is None:
			decl.typ = TypeVariable()
			self._non_generic.append(decl.typ)
		else:
			try: decl.typ = DECLARABLE[decl.type_name]
			except KeyError: raise Blame(decl, BadTypeName(decl.type_name)) from None
		self._symbols[decl.name] = decl.typ
		self._report.info("declare", decl.name, ":", decl.typ)

	def visit_Literal(self, expr:syntax.Literal):
		if isinstance(expr.value, str):
			return self._note(expr, String)
		if isinstance(expr.value, int):
			return self._note(expr, Int)
		if isinstance(expr.value, float):
			return self._note(expr, Float)
		raise TypeError(expr.value)

	def visit_Identifier(self, expr:syntax.Identifier):
		try: typ = self._symbols[expr.name]
		except KeyError: raise Blame(expr, UnknownIdentifier(expr.name)) from None
		return self._note(expr, typ)

	def visit_CaptureRef(self, expr:syntax.CaptureRef):
		if not self._patterns:
			raise Blame(expr, OutsidePattern(expr.ref))
		pattern = self._patterns[-1]
		cap = expr.ref
		if isinstance(cap, str):
			try: cap = capture_names(pattern)[cap]
			except KeyError: raise Blame(expr, NoSuchCaptureGroup(expr.ref)) from None
		typ = infer_capref_type(pattern, cap)
		if typ is None:
			# No such group, so no constraint either.
			typ = TypeVariable()
		return self._note(expr, typ)

	def visit_Call(self, expr:syntax.Call):
		try: signature = lookup_builtin(expr.name)
		except UnknownIdentifier as e: raise Blame(expr, e) from None
		return self._call_site(expr, signature, expr.args)

	def visit_BinaryExpr(self, expr:syntax.BinaryExpr):
		try: signature = BINARY_OPERATORS[expr.op]
		except KeyError: raise Blame(expr, UnknownIdentifier(expr.op)) from None
		return self._call_site(expr, signature, (expr.lhs, expr.rhs))

	def visit_UnaryExpr(self, expr:syntax.UnaryExpr):
		try: signature = UNARY_OPERATORS[expr.op]
		except KeyError: raise Blame(expr, UnknownIdentifier(expr.op)) from None
		return self._call_site(expr, signature, (expr.arg,))

def infer_types(program:syntax.Program, report:Report) -> Optional[TypeChecker]:
	"""
	Check a program, returning the checker (for `type_of`) if it types.
	Otherwise the report says why, and the result is None.
	"""
	checker = TypeChecker(report)
	return checker if checker.check_program(program) else None
