import unittest

from tailtype.types import TypeVariable, TypeOperator, function, equals, Int, Float, String
from tailtype.unification import (
	unify, fresh_type, is_generic, occurs_in, occurs_in_type,
	UnificationFailed, TypeMismatch, RecursiveUnification,
)

class UnifyTests(unittest.TestCase):

	def test_reflexive(self):
		v = TypeVariable()
		f = function(v, Int)
		for t in (Int, f, v, function(String, function(Float))):
			with self.subTest(str(t)):
				unify(t, t)
		self.assertFalse(v.is_bound())

	def test_binds_variable(self):
		v = TypeVariable()
		unify(v, Int)
		self.assertEqual(str(Int.root()), str(v.root()))
		self.assertIs(Int, v.root())

	def test_binds_variable_on_either_side(self):
		v = TypeVariable()
		unify(String, v)
		self.assertIs(String, v.root())

	def test_variables_unify_with_each_other(self):
		a, b = TypeVariable(), TypeVariable()
		unify(a, b)
		unify(b, Float)
		self.assertIs(Float, a.root())
		self.assertIs(Float, b.root())

	def test_same_variable_twice_is_no_op(self):
		v = TypeVariable()
		unify(v, v)
		self.assertFalse(v.is_bound())

	def test_structure(self):
		a, b = TypeVariable(), TypeVariable()
		unify(function(a, Int), function(String, b))
		self.assertIs(String, a.root())
		self.assertIs(Int, b.root())

	def test_name_mismatch(self):
		with self.assertRaises(TypeMismatch) as cm:
			unify(Int, Float)
		self.assertEqual("Int", cm.exception.prior_text)
		self.assertEqual("Float", cm.exception.term_text)
		self.assertEqual("type mismatch: 'Int' != 'Float'", str(cm.exception))

	def test_arity_mismatch(self):
		with self.assertRaises(TypeMismatch):
			unify(function(Int, Int), function(Int))

	def test_occurs_check(self):
		v = TypeVariable()
		with self.assertRaises(RecursiveUnification):
			unify(v, function(v))
		with self.assertRaises(RecursiveUnification):
			unify(function(Int, v), v)
		self.assertFalse(v.is_bound())

	def test_occurs_check_through_bindings(self):
		v, w = TypeVariable(), TypeVariable()
		w.bind(TypeOperator("List", [v]))
		with self.assertRaises(RecursiveUnification):
			unify(v, function(w))

	def test_both_failures_are_unification_failures(self):
		v = TypeVariable()
		for a, b in [(Int, String), (v, function(v))]:
			with self.subTest(str(a)):
				with self.assertRaises(UnificationFailed):
					unify(a, b)

	def test_no_rollback(self):
		v = TypeVariable()
		with self.assertRaises(TypeMismatch):
			unify(function(v, Int), function(String, Float))
		self.assertIs(String, v.root())

	def test_stops_at_first_failure(self):
		w = TypeVariable()
		with self.assertRaises(TypeMismatch):
			unify(function(Int, w), function(Float, String))
		self.assertFalse(w.is_bound())

class OccursTests(unittest.TestCase):

	def test_occurs_in_type(self):
		v, w = TypeVariable(), TypeVariable()
		assert occurs_in_type(v, v)
		assert occurs_in_type(v, function(Int, function(v)))
		assert not occurs_in_type(v, w)
		assert not occurs_in_type(v, Int)

	def test_occurs_in_list(self):
		v = TypeVariable()
		assert occurs_in(v, [Int, function(String, v)])
		assert not occurs_in(v, [])
		assert not is_generic(v, [v])
		assert is_generic(v, [Int, TypeVariable()])

class FreshTests(unittest.TestCase):

	def test_consistent_substitution(self):
		v = TypeVariable()
		f = fresh_type(function(v, v), [])
		self.assertIsInstance(f.args[0], TypeVariable)
		self.assertIs(f.args[0], f.args[1])
		self.assertIsNot(v, f.args[0])

	def test_independent_instances(self):
		v = TypeVariable()
		sig = function(v, v)
		f = fresh_type(sig, [])
		g = fresh_type(sig, [])
		self.assertIsNot(f.args[0], g.args[0])
		unify(f.args[0], Int)
		unify(g.args[0], String)
		self.assertIs(Int, f.args[1].root())
		self.assertIs(String, g.args[1].root())
		self.assertFalse(v.is_bound())

	def test_non_generic_preserved(self):
		v = TypeVariable()
		f = fresh_type(function(v, Int), [v])
		self.assertIs(v, f.args[0])
		self.assertIs(Int, f.args[1])

	def test_non_generic_by_reachability(self):
		v, w = TypeVariable(), TypeVariable()
		f = fresh_type(function(v, w), [function(String, w)])
		self.assertIsNot(v, f.args[0])
		self.assertIs(w, f.args[1])

	def test_follows_bindings(self):
		v = TypeVariable()
		v.bind(Float)
		f = fresh_type(function(v, String))
		self.assertIs(Float, f.args[0])

	def test_keeps_structure(self):
		v = TypeVariable()
		sig = function(function(v, Int), v)
		f = fresh_type(sig)
		assert equals(f.args[0].args[1], Int)
		self.assertEqual("→", f.args[0].name)
		self.assertIs(f.args[0].args[0], f.args[1])

	def test_atoms_come_back_as_themselves(self):
		self.assertIs(Int, fresh_type(Int))


if __name__ == '__main__':
	unittest.main()
