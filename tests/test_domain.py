import unittest

from nullcheck.domain import (
	Base, NULL, NOTHING, Product, FunctionType, Union,
	union, nullable, without_null, is_nullable, is_assignable, arrow,
)
from nullcheck.prelude import NUMBER, STRING, BOOLEAN

class UnionNormalForm(unittest.TestCase):
	def test_duplicates_collapse(self):
		self.assertEqual(nullable(NUMBER), union(NULL, NUMBER, NULL, NUMBER))
	
	def test_nesting_flattens(self):
		nested = union(union(NULL, NUMBER), union(STRING, NUMBER))
		self.assertEqual(union(NULL, NUMBER, STRING), nested)
		self.assertTrue(all(not isinstance(m, Union) for m in nested.members()))
	
	def test_order_does_not_matter(self):
		self.assertEqual(union(STRING, NULL, NUMBER), union(NUMBER, STRING, NULL))
		self.assertEqual(hash(union(STRING, NUMBER)), hash(union(NUMBER, STRING)))
	
	def test_union_of_one_is_that_one(self):
		self.assertIs(NUMBER, union(NUMBER, NUMBER))
		self.assertIs(NULL, union(NULL))
	
	def test_union_of_nothing(self):
		self.assertEqual(NOTHING, union())
		self.assertEqual(NUMBER, union(NOTHING, NUMBER))
	
	def test_rendering_is_stable(self):
		self.assertEqual("(U Null Number String)", union(STRING, NUMBER, NULL).render())
		self.assertEqual("(U Null Number String)", union(NULL, STRING, NUMBER).render())
		self.assertEqual("Nothing", NOTHING.render())
		self.assertEqual("((U Null Number), Number)", Product([nullable(NUMBER), NUMBER]).render())
	
	def test_base_types_are_values(self):
		self.assertEqual(Base("Number"), NUMBER)
		self.assertNotEqual(Base("Number"), Base("String"))
		self.assertEqual(Base("Number").number, NUMBER.number)

class NullHelpers(unittest.TestCase):
	def test_without_null(self):
		self.assertEqual(NUMBER, without_null(nullable(NUMBER)))
		self.assertEqual(union(NUMBER, STRING), without_null(union(NULL, NUMBER, STRING)))
		self.assertEqual(NUMBER, without_null(NUMBER))
		self.assertEqual(NOTHING, without_null(NULL))
	
	def test_is_nullable(self):
		self.assertTrue(is_nullable(NULL))
		self.assertTrue(is_nullable(nullable(STRING)))
		self.assertFalse(is_nullable(STRING))
		self.assertFalse(is_nullable(NOTHING))

class Assignability(unittest.TestCase):
	def test_base_into_its_nullable_but_not_back(self):
		for t in (NUMBER, STRING, BOOLEAN, Base("Widget")):
			with self.subTest(t):
				self.assertTrue(is_assignable(t, union(t, NULL)))
				self.assertFalse(is_assignable(union(t, NULL), t))
	
	def test_base_into_itself_only(self):
		self.assertTrue(is_assignable(NUMBER, NUMBER))
		self.assertFalse(is_assignable(NUMBER, STRING))
	
	def test_null_only_into_unions_with_null(self):
		self.assertTrue(is_assignable(NULL, NULL))
		self.assertTrue(is_assignable(NULL, nullable(NUMBER)))
		self.assertFalse(is_assignable(NULL, NUMBER))
		self.assertFalse(is_assignable(NULL, union(NUMBER, STRING)))
	
	def test_union_subset_rule(self):
		self.assertTrue(is_assignable(union(NUMBER, STRING), union(NULL, NUMBER, STRING)))
		self.assertFalse(is_assignable(union(NUMBER, BOOLEAN), union(NUMBER, STRING)))
	
	def test_nothing_fits_everywhere(self):
		self.assertTrue(is_assignable(NOTHING, NUMBER))
		self.assertTrue(is_assignable(NOTHING, NULL))
		self.assertFalse(is_assignable(NUMBER, NOTHING))
	
	def test_products_go_pointwise(self):
		domain = Product([NUMBER, NUMBER])
		self.assertTrue(is_assignable(Product([NUMBER, NUMBER]), domain))
		self.assertFalse(is_assignable(Product([nullable(NUMBER), NUMBER]), domain))
		self.assertFalse(is_assignable(Product([NUMBER]), domain))
		self.assertFalse(is_assignable(NUMBER, Product([NUMBER])))
	
	def test_function_types_fit_only_themselves(self):
		f = arrow([NUMBER], NUMBER)
		self.assertTrue(is_assignable(f, arrow([NUMBER], NUMBER)))
		self.assertFalse(is_assignable(f, arrow([nullable(NUMBER)], NUMBER)))
		self.assertTrue(is_assignable(f, union(NULL, f)))

class FunctionTypes(unittest.TestCase):
	def test_cases_keep_their_order(self):
		one = (Product([NUMBER]), NUMBER)
		two = (Product([STRING]), STRING)
		self.assertNotEqual(FunctionType([one, two]), FunctionType([two, one]))
		self.assertEqual([one, two], list(FunctionType([one, two]).cases))
	
	def test_rendering(self):
		f = FunctionType([(Product([NUMBER, NUMBER]), NUMBER), (Product([NUMBER]), NUMBER)])
		self.assertEqual("(Number, Number) -> Number & (Number) -> Number", f.render())

	def test_built_in_types_are_plain_base_types(self):
		for name, typ in (("Number", NUMBER), ("String", STRING), ("Boolean", BOOLEAN)):
			with self.subTest(name):
				self.assertEqual(Base(name), typ)
				self.assertEqual(name, typ.render())

if __name__ == '__main__':
	unittest.main()
