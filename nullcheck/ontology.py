"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid circular imports between
the syntax tree, the type domain, and the diagnostics.

Every phrase may know where it came from in some source text.
Trees built by hand (as in tests) have no spans, and that's fine:
the diagnostics fall back to the textual form of the expression.
"""
from typing import Optional
from .location import Span

class Phrase:
	def span(self) -> Optional[Span]:
		""" Return the stretch of source text this phrase came from, if any. """
		raise NotImplementedError(type(self))

class Nom(Phrase):
	""" Representing the occurrence of a name anywhere. """
	def __init__(self, text:str, span:Optional[Span]=None):
		assert isinstance(text, str), type(text)
		self.text, self._span = text, span
	def __repr__(self): return "<Name %r>" % self.text
	def key(self): return self.text
	def span(self): return self._span

class Symbol(Phrase):
	"""
	Any named-and-defined thing that may be found in some name-space.
	Thus, functions and parameters.
	"""
	nom: Nom

	def __init__(self, nom:Nom): self.nom = nom
	def __repr__(self): return "{%s:%s}" % (self.nom.text, type(self).__name__)
	def span(self): return self.nom.span()

class ValueExpression(Phrase):
	_span: Optional[Span] = None
	def span(self): return self._span

class RawText(Phrase):
	""" A stretch of source that didn't make sense as anything in particular. """
	def __init__(self, text:str, span:Optional[Span]):
		self.text, self._span = text, span
	def span(self): return self._span
