"""
The Algebra of Nullable Types
=============================

Type expressions here are value objects: two of them are equal exactly
when they are built from equal parts. Internally each one gets a number
from an equivalence classifier, which makes hashing and comparison cheap
and gives every distinct type a single exemplar.

Four kinds of thing matter to the checker:

* A base type, like Number. Never null.
* The null marker itself.
* Unions. A nullable number is the union of Null and Number.
  Unions are normalized: nesting flattens, duplicates collapse,
  and a union of one thing is just that thing. The union of nothing
  at all is NOTHING, the type of code that cannot be reached.
* Function types, which are ordered lists of (domain, range) cases.
  The first case whose domain accepts the arguments wins.

A domain is a Product: the ordered tuple of parameter types.

Assignability is the structural subset rule: each member of the
actual type must appear among the members of the expected type.
"""
from threading import Lock
from typing import Iterable, Sequence
from boozetools.support.foundation import EquivalenceClassifier

_type_numbering_subsystem = EquivalenceClassifier()
_numbering_mutex = Lock()

class TypeExpression:
	"""Value objects so they can play well with the classifier"""
	number: int

	def __init__(self, *key):
		self._key = key
		self._hash = hash(key)
		with _numbering_mutex:
			self.number = _type_numbering_subsystem.classify(self)
	def __hash__(self): return self._hash
	def __eq__(self, other): return type(self) is type(other) and self._key == other._key
	def __repr__(self): return self.render()

	def render(self) -> str: raise NotImplementedError(type(self))
	def members(self) -> frozenset["TypeExpression"]:
		""" Everything but a union is a union of one. """
		return frozenset((self,))
	def sort_key(self) -> tuple: return 1, self.render()

class Base(TypeExpression):
	def __init__(self, name:str):
		assert isinstance(name, str) and name
		self.name = name
		super().__init__(name)
	def render(self): return self.name

class _Null(TypeExpression):
	def render(self): return "Null"
	def sort_key(self): return 0, ""

NULL = _Null()

class Union(TypeExpression):
	"""
	Do not call this directly; call `union(...)` instead,
	which maintains the normal form.
	"""
	def __init__(self, members:frozenset[TypeExpression]):
		assert all(not isinstance(m, Union) for m in members)
		self._members = members
		super().__init__(members)
	def members(self): return self._members
	def ordered(self) -> list[TypeExpression]:
		return sorted(self._members, key=TypeExpression.sort_key)
	def render(self):
		if not self._members: return "Nothing"
		return "(U %s)" % " ".join(m.render() for m in self.ordered())

NOTHING = Union(frozenset())

class Product(TypeExpression):
	def __init__(self, members:Iterable[TypeExpression]):
		self.members_in_order = tuple(members)
		super().__init__(self.members_in_order)
	def __len__(self): return len(self.members_in_order)
	def __iter__(self): return iter(self.members_in_order)
	def render(self): return "(%s)" % ", ".join(m.render() for m in self.members_in_order)

class FunctionType(TypeExpression):
	""" An ordered intersection of arrows. """
	cases: tuple[tuple[Product, TypeExpression], ...]
	def __init__(self, cases:Sequence[tuple[Product, TypeExpression]]):
		self.cases = tuple((domain, range_) for domain, range_ in cases)
		assert self.cases, "A function type needs at least one case."
		assert all(isinstance(domain, Product) for domain, _ in self.cases)
		super().__init__(self.cases)
	def render(self):
		return " & ".join("%s -> %s" % (domain.render(), range_.render()) for domain, range_ in self.cases)
	def sort_key(self): return 2, self.render()

def arrow(domain:Sequence[TypeExpression], range_:TypeExpression) -> FunctionType:
	""" Convenience for the common single-case function type. """
	return FunctionType([(Product(domain), range_)])

def union(*types:TypeExpression) -> TypeExpression:
	members = frozenset(m for t in types for m in t.members())
	if len(members) == 1:
		return next(iter(members))
	return Union(members)

def without_null(t:TypeExpression) -> TypeExpression:
	return union(*(m for m in t.members() if m is not NULL))

def is_nullable(t:TypeExpression) -> bool:
	return NULL in t.members()

def nullable(t:TypeExpression) -> TypeExpression:
	return union(NULL, t)

def is_assignable(actual:TypeExpression, expected:TypeExpression) -> bool:
	"""
	May a value of the actual type be used where the expected type is wanted?
	Products go pointwise. Everything else is the subset rule over members,
	where members match only when equal. (A function type matches only itself.)
	"""
	if isinstance(actual, Product) or isinstance(expected, Product):
		return (
			isinstance(actual, Product) and isinstance(expected, Product)
			and len(actual) == len(expected)
			and all(map(is_assignable, actual, expected))
		)
	room = expected.members()
	return all(m in room for m in actual.members())
