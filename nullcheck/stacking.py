"""
Type environments for the checker.

The root frame binds each formal parameter (by name) to the type
its annotation declares. A refinement sits atop some other frame
and overrides a few bindings for the extent of one branch.
Frames never change once the branch that owns them is being checked,
so an outer frame is never disturbed by what happens in an inner one.
"""
from typing import Generic, Iterable, TypeVar

T = TypeVar('T')

class Frame(Generic[T]):
	_bindings : dict[str, T]

	def holds(self, key:str) -> bool: raise NotImplementedError(type(self))
	def fetch(self, key:str) -> T: raise NotImplementedError(type(self))
	def assign(self, key:str, value:T):
		self._bindings[key] = value
		return value

class RootFrame(Frame[T]):
	def __init__(self, pairs:Iterable[tuple[str, T]]=()):
		self._bindings = dict(pairs)
	def holds(self, key:str) -> bool: return key in self._bindings
	def fetch(self, key:str) -> T: return self._bindings[key]

class Refinement(Frame[T]):
	def __init__(self, static_link:Frame[T]):
		self._bindings = {}
		self.static_link = static_link
	def holds(self, key:str) -> bool:
		return key in self._bindings or self.static_link.holds(key)
	def fetch(self, key:str) -> T:
		if key in self._bindings: return self._bindings[key]
		return self.static_link.fetch(key)
