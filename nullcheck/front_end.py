"""
Read the cookbook's own notation: Typed-Racket-style s-expressions.

	(: f (-> (U Number Null) Number))
	(define (f a) (if a (+ a 20) 0))

The grammar only knows about lists and atoms. Deciding what the lists
mean (annotation, definition, type, expression) happens here in Python,
one form at a time, so that a mistake in one form gets reported and the
reader carries on with the next.
"""
import re
from pathlib import Path
from typing import Optional, Union as Either

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from . import syntax
from .diagnostics import Report
from .domain import TypeExpression, Base, FunctionType, Product, NULL, NOTHING, union
from .location import Span, between, remember_source
from .ontology import Nom, RawText

class Yuck(Exception):
	"""
	The first argument will be the name of the pass fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

_GRAMMAR = r"""
start: _datum*
_datum: list | ATOM | STRING
list: LPAR _datum* RPAR

LPAR: "("
RPAR: ")"
STRING: /"[^"]*"/
ATOM: /[^\s()";]+/
COMMENT: /;[^\n]*/

%import common.WS
%ignore WS
%ignore COMMENT
"""

_parser = Lark(_GRAMMAR, parser="lalr")

DATUM = Either[Tree, Token]

class _Reader:
	def __init__(self, path:Optional[Path], text:str, report:Report):
		self._path, self._text, self._report = path, text, report
		self._annotations: dict[str, tuple[Nom, FunctionType]] = {}
		self._definitions: list[tuple[Nom, list[syntax.FormalParameter], syntax.ValueExpression]] = []

	def span(self, datum:DATUM) -> Span:
		if isinstance(datum, Token):
			return Span(self._path, slice(datum.start_pos, datum.end_pos), datum.line, datum.column)
		lpar, rpar = datum.children[0], datum.children[-1]
		return between(self.span(lpar), self.span(rpar))

	def form(self, datum:DATUM) -> RawText:
		span = self.span(datum)
		return RawText(self._text[span.slice], span)

	def complain(self, datum:DATUM, hint:str):
		self._report.bad_form(self.form(datum), hint)

	@staticmethod
	def items(datum:DATUM) -> Optional[list[DATUM]]:
		""" The elements of a list, or None if this is an atom. """
		if isinstance(datum, Tree): return datum.children[1:-1]

	def symbol(self, datum:DATUM) -> Optional[Nom]:
		if isinstance(datum, Token) and datum.type == "ATOM" and _classify_atom(str(datum)) is _SYMBOL:
			return Nom(str(datum), self.span(datum))

	def head(self, datum:DATUM) -> Optional[str]:
		items = self.items(datum)
		if items:
			nom = self.symbol(items[0])
			if nom is not None: return nom.text

	# Top-level forms

	def read_module(self, tree:Tree) -> syntax.Namespace:
		for datum in tree.children:
			head = self.head(datum)
			if head == ":": self.read_annotation(datum)
			elif head == "define": self.read_definition(datum)
			else: self.complain(datum, "At the top level, I expect (: name type) or (define (name param ...) body).")
		return self.assemble()

	def read_annotation(self, datum:Tree):
		items = self.items(datum)
		if len(items) != 3 or self.symbol(items[1]) is None:
			return self.complain(datum, "An annotation looks like (: name type).")
		nom = self.symbol(items[1])
		signature = self.read_type(items[2])
		if signature is None: return
		if not isinstance(signature, FunctionType):
			return self.complain(items[2], "Annotate a function with a function type, like (-> Number Number).")
		if nom.text in self._annotations:
			return self._report.redefined(self._annotations[nom.text][0], nom)
		self._annotations[nom.text] = nom, signature

	def read_definition(self, datum:Tree):
		items = self.items(datum)
		header = self.items(items[1]) if len(items) == 3 else None
		if not header or not all(self.symbol(h) for h in header):
			return self.complain(datum, "A definition looks like (define (name param ...) body).")
		nom, *param_noms = [self.symbol(h) for h in header]
		expr = self.read_expr(items[2])
		if expr is None: return
		params = [syntax.FormalParameter(p) for p in param_noms]
		self._definitions.append((nom, params, expr))

	def assemble(self) -> syntax.Namespace:
		namespace = syntax.Namespace(self._path)
		for nom, params, expr in self._definitions:
			annotation = self._annotations.pop(nom.text, None)
			signature = annotation[1] if annotation else None
			fn = syntax.AnnotatedFunction(nom, params, signature, expr)
			try: namespace.define(fn)
			except syntax.AlreadyExists: self._report.redefined(namespace.symbol(nom.text).nom, nom)
		for nom, _ in self._annotations.values():
			self._report.annotated_nothing(nom)
		return namespace

	# Types

	def read_type(self, datum:DATUM) -> Optional[TypeExpression]:
		nom = self.symbol(datum)
		if nom is not None:
			if nom.text == "Null": return NULL
			if nom.text == "Nothing": return NOTHING
			return Base(nom.text)
		head = self.head(datum)
		items = self.items(datum)
		if head == "U":
			members = [self.read_type(i) for i in items[1:]]
			if None not in members: return union(*members)
		elif head == "->":
			case = self.read_arrow(datum)
			if case is not None: return FunctionType([case])
		elif head == "case->":
			cases = [self.read_arrow(i) for i in items[1:]]
			if not cases: self.complain(datum, "A case-> type needs at least one arrow.")
			elif None not in cases: return FunctionType(cases)
		else:
			self.complain(datum, "A type is a name, (U type ...), (-> type ... type), or (case-> arrow ...).")

	def read_arrow(self, datum:DATUM) -> Optional[tuple[Product, TypeExpression]]:
		items = self.items(datum)
		if self.head(datum) != "->" or len(items) < 2:
			return self.complain(datum, "An arrow looks like (-> argument-type ... result-type).")
		parts = [self.read_type(i) for i in items[1:]]
		if None in parts: return None
		return Product(parts[:-1]), parts[-1]

	# Expressions

	def read_expr(self, datum:DATUM) -> Optional[syntax.ValueExpression]:
		if isinstance(datum, Token):
			span = self.span(datum)
			if datum.type == "STRING": return syntax.Literal(str(datum)[1:-1], span)
			text = str(datum)
			if _classify_atom(text) is _SYMBOL: return syntax.Reference(Nom(text, span))
			return syntax.Literal(_atom_value(text), span)
		items = self.items(datum)
		span = self.span(datum)
		if not items:
			return self.complain(datum, "An empty list is not an expression. Perhaps you mean null?")
		if self.head(datum) == "if":
			if len(items) not in (3, 4):
				return self.complain(datum, "A conditional looks like (if test then else), or (if test then).")
			parts = [self.read_expr(i) for i in items[1:]]
			if None in parts: return None
			return syntax.Conditional(*parts, span=span)
		op = self.symbol(items[0])
		if op is None:
			return self.complain(items[0], "Only a named operation can be applied here.")
		args = [self.read_expr(i) for i in items[1:]]
		if None in args: return None
		return syntax.Operation(op, args, span)


_SYMBOL, _NUMBER, _CONSTANT = "symbol", "number", "constant"
_CONSTANTS = {"#t": True, "#true": True, "#f": False, "#false": False, "null": None}
_NUMERAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

def _classify_atom(text:str) -> str:
	if text in _CONSTANTS: return _CONSTANT
	if _NUMERAL.fullmatch(text): return _NUMBER
	return _SYMBOL

def _atom_value(text:str):
	if text in _CONSTANTS: return _CONSTANTS[text]
	try: return int(text)
	except ValueError: return float(text)

def parse_text(text:str, path:Optional[Path], report:Report) -> syntax.Namespace:
	""" Submit text to the reader; raise Yuck if anything was wrong with it. """
	path = remember_source(path, text)
	try:
		tree = _parser.parse(text)
	except UnexpectedInput as ex:
		report.generic_parse_error(_error_span(path, text, ex), _hint(text))
		raise Yuck("parse")
	namespace = _Reader(path, text, report).read_module(tree)
	if report.sick(): raise Yuck("parse")
	return namespace

def parse_file(path:Path, report:Report) -> syntax.Namespace:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except OSError as ex:
		report.no_such_file(path, ex.strerror or str(ex))
		raise Yuck("read")
	report.info("Reading", path)
	return parse_text(text, path, report)

def _error_span(path:Optional[Path], text:str, ex:UnexpectedInput) -> Span:
	# At end-of-input, lark has no position to offer; point at the last character.
	offset = ex.pos_in_stream
	if offset is None or offset < 0 or offset >= len(text):
		offset = max(0, len(text.rstrip()) - 1)
	line = text.count("\n", 0, offset) + 1
	column = offset - (text.rfind("\n", 0, offset) + 1) + 1
	return Span(path, slice(offset, offset+1), line, column)

def _hint(text:str) -> str:
	if text.count("(") > text.count(")"): return "I suspect a missing ')' closing parenthesis."
	if text.count("(") < text.count(")"): return "There seems to be a stray ')' somewhere."
	return "Perhaps there's an unfinished string?"
