"""
The set of tree nodes the checker walks.
The front end builds these from source text, but they are
perfectly happy to be built by hand, in which case they carry no spans.

Nothing in here gets mutated after construction.
"""
from typing import Any, Iterable, Optional, Sequence
from boozetools.support.foundation import Visitor
from .location import Span
from .ontology import Nom, Symbol, ValueExpression, Phrase, RawText
from .domain import FunctionType

class AlreadyExists(KeyError): pass

class FormalParameter(Symbol):
	pass

class Reference(ValueExpression):
	""" A mention of some argument by name. """
	def __init__(self, nom:Nom):
		self.nom = nom
	def __repr__(self): return "<ref:%s>"%self.nom.text
	def span(self): return self.nom.span()

class Literal(ValueExpression):
	def __init__(self, value: Any, span:Optional[Span]=None):
		self.value, self._span = value, span
	def __repr__(self): return "<Literal %r>" % (self.value,)

class Conditional(ValueExpression):
	""" With no else-part, the missing branch means null. """
	def __init__(self, test:ValueExpression, then_part:ValueExpression, else_part:Optional[ValueExpression]=None, span:Optional[Span]=None):
		self.test, self.then_part, self.else_part = test, then_part, else_part
		self._span = span

class Operation(ValueExpression):
	def __init__(self, nom:Nom, args:Sequence[ValueExpression], span:Optional[Span]=None):
		self.nom = nom
		self.args = tuple(args)
		self._span = span
	def __repr__(self): return "<op:%s/%d>"%(self.nom.text, len(self.args))

class FunctionReturn(ValueExpression):
	""" The point where a function's body becomes its result. """
	def __init__(self, expr:ValueExpression):
		self.expr = expr
	def span(self): return self.expr.span()

class AnnotatedFunction(Symbol):
	"""
	The signature may be missing: that's how an unannotated
	definition looks, and the checker will refuse it.
	"""
	signature: Optional[FunctionType]
	params: tuple[FormalParameter, ...]

	def __init__(self, nom:Nom, params:Iterable[FormalParameter], signature:Optional[FunctionType], expr:ValueExpression):
		super().__init__(nom)
		self.params = tuple(params)
		self.signature = signature
		self.expr = expr
		self.result = FunctionReturn(expr)

class Namespace:
	""" Lightly enhanced dictionary: It remembers order and does not like duplicate keys. """
	_symbol: dict[str, AnnotatedFunction]

	def __init__(self, source_path=None):
		self.source_path = source_path
		self._symbol = {}

	@staticmethod
	def of(functions:Iterable[AnnotatedFunction]) -> "Namespace":
		namespace = Namespace()
		for fn in functions: namespace.define(fn)
		return namespace

	def __contains__(self, key:str) -> bool: return key in self._symbol
	def __len__(self): return len(self._symbol)
	def symbol(self, key:str) -> Optional[AnnotatedFunction]: return self._symbol.get(key)
	def each_symbol(self) -> Iterable[AnnotatedFunction]: return self._symbol.values()

	def define(self, fn:AnnotatedFunction) -> AnnotatedFunction:
		key = fn.nom.key()
		if key in self._symbol:
			raise AlreadyExists(key)
		self._symbol[key] = fn
		return fn

class Unparse(Visitor):
	""" Return the textual form of an expression, in the notation the front end reads. """
	@staticmethod
	def visit_Literal(lit:Literal) -> str:
		value = lit.value
		if value is None: return "null"
		if value is True: return "#t"
		if value is False: return "#f"
		if isinstance(value, str): return '"%s"' % value
		return repr(value)
	@staticmethod
	def visit_Reference(ref:Reference) -> str:
		return ref.nom.text
	def visit_Conditional(self, cond:Conditional) -> str:
		parts = [cond.test, cond.then_part]
		if cond.else_part is not None: parts.append(cond.else_part)
		return "(if %s)" % " ".join(self.visit(p) for p in parts)
	def visit_Operation(self, op:Operation) -> str:
		return "(%s)" % " ".join([op.nom.text, *(self.visit(a) for a in op.args)])
	def visit_FunctionReturn(self, ret:FunctionReturn) -> str:
		return self.visit(ret.expr)

def unparse(phrase:Phrase) -> str:
	if isinstance(phrase, Symbol):
		return phrase.nom.text
	if isinstance(phrase, (Nom, RawText)):
		return phrase.text
	return Unparse().visit(phrase)
