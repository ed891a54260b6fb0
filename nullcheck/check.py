"""
The type checker proper.

Each annotated function gets checked once per case of its declared
function type. Within a case, the formal parameters take the types
that case's domain gives them, and the body gets judged bottom-up:

* A reference to an argument has whatever type is in force for it,
  which may be narrower than declared within the true branch of a test.
* A literal has the obvious concrete type.
* An operation consults its declared cases in order; the first whose
  domain accepts the argument types supplies the result type.
  If none does, that's a violation, and the first case stands in for
  the result so that one mistake makes one complaint.
* A conditional is the union of its branches, with a missing else
  standing for null.
* Finally, the result of the body must be assignable to the declared range.

Violations come out in declaration order, then case order, then pre-order
over the tree: a node's complaint precedes those of its sub-expressions.

Mismatches are recorded, never raised. A malformed declaration raises
MalformedDeclaration, which stops work on that one function only.
"""
from concurrent.futures import ThreadPoolExecutor
from typing import Mapping, Optional, Union as Either
from boozetools.support.foundation import Visitor

from .diagnostics import Report, Violation, Defect
from .domain import TypeExpression, FunctionType, Product, NULL, union, is_assignable, is_nullable
from .narrowing import narrow, TypeFrame
from .ontology import Phrase
from .prelude import OPERATIONS, literal_type_map
from .stacking import RootFrame
from .syntax import (
	Namespace, AnnotatedFunction, FunctionReturn,
	Reference, Literal, Conditional, Operation,
)

class MalformedDeclaration(Exception):
	""" args are (guilty phrase or None, message) """
	def __init__(self, site:Optional[Phrase], message:str):
		super().__init__(site, message)
		self.site, self.message = site, message

class MalformedNamespace(Exception):
	"""
	Raised by `check` after everything checkable has been checked.
	Carries the defects and also the violations found in the healthy functions.
	"""
	def __init__(self, defects:list[Defect], violations:list[Violation]):
		super().__init__("%d malformed declaration(s)" % len(defects))
		self.defects, self.violations = defects, violations

NAMESPACE = Either[Namespace, Mapping[str, AnnotatedFunction]]

def as_namespace(namespace:NAMESPACE) -> Namespace:
	if isinstance(namespace, Namespace): return namespace
	return Namespace.of(namespace.values())

class FunctionChecker(Visitor):
	"""
	Checks one function against one namespace.
	All the mutable state lives here, so separate functions
	can be checked on separate threads with separate checkers.
	"""
	_found: list[Violation]

	def __init__(self, namespace:Namespace, fn:AnnotatedFunction):
		self._namespace = namespace
		self._fn = fn
		self._found = []

	def run(self) -> list[Violation]:
		fn = self._fn
		if fn.signature is None:
			raise MalformedDeclaration(fn, "This function has no type annotation.")
		names = [p.nom.key() for p in fn.params]
		if len(set(names)) != len(names):
			raise MalformedDeclaration(fn, "Some parameter name appears more than once.")
		for domain, range_ in fn.signature.cases:
			if len(domain) != len(names):
				pattern = "The annotation has a case for %d argument(s), but the definition takes %d."
				raise MalformedDeclaration(fn, pattern % (len(domain), len(names)))
			env = RootFrame(zip(names, domain))
			self.check_return(fn.result, env, range_)
		return self._found

	def _complain(self, mark:int, site:Phrase, expected:TypeExpression, actual:TypeExpression, explanation:str):
		self._found.insert(mark, Violation(self._fn.nom.text, site, expected, actual, explanation))

	def check_return(self, ret:FunctionReturn, env:TypeFrame, declared:TypeExpression):
		mark = len(self._found)
		actual = self.visit(ret.expr, env)
		if not is_assignable(actual, declared):
			explanation = "The result of '%s' does not fit its declared range." % self._fn.nom.text
			if is_nullable(actual) and not is_nullable(declared):
				explanation += " Some path through the body produces null."
			self._complain(mark, ret, declared, actual, explanation)

	@staticmethod
	def visit_Literal(lit:Literal, env:TypeFrame) -> TypeExpression:
		try: return literal_type_map[type(lit.value)]
		except KeyError: raise MalformedDeclaration(lit, "There's no literal of type %s." % type(lit.value).__name__)

	@staticmethod
	def visit_Reference(ref:Reference, env:TypeFrame) -> TypeExpression:
		key = ref.nom.key()
		if env.holds(key): return env.fetch(key)
		raise MalformedDeclaration(ref, "I don't see what '%s' refers to." % key)

	def visit_Conditional(self, cond:Conditional, env:TypeFrame) -> TypeExpression:
		self.visit(cond.test, env)
		then_env, else_env = narrow(env, cond.test)
		then_type = self.visit(cond.then_part, then_env)
		if cond.else_part is None: else_type = NULL
		else: else_type = self.visit(cond.else_part, else_env)
		return union(then_type, else_type)

	def visit_Operation(self, op:Operation, env:TypeFrame) -> TypeExpression:
		signature = self.signature_of(op)
		mark = len(self._found)
		actual = Product(self.visit(a, env) for a in op.args)
		for domain, range_ in signature.cases:
			if is_assignable(actual, domain):
				return range_
		first_domain, first_range = signature.cases[0]
		self._complain(mark, op, first_domain, actual, _explain_operation(op, signature, actual))
		return first_range

	def signature_of(self, op:Operation) -> FunctionType:
		key = op.nom.key()
		fn = self._namespace.symbol(key)
		if fn is not None:
			if fn.signature is None:
				raise MalformedDeclaration(op, "'%s' has no type annotation, so it cannot be called here." % key)
			return fn.signature
		try: return OPERATIONS[key]
		except KeyError: raise MalformedDeclaration(op, "There's no declared operation called '%s'." % key)

def _explain_operation(op:Operation, signature:FunctionType, actual:Product) -> str:
	arities = sorted(set(len(domain) for domain, _ in signature.cases))
	if len(actual) not in arities:
		wanted = " or ".join(map(str, arities))
		return "'%s' takes %s argument(s), but got %d." % (op.nom.text, wanted, len(actual))
	text = "No case of '%s' accepts these argument types." % op.nom.text
	if any(map(is_nullable, actual)):
		text += " Some argument might be null here; test it first."
	return text

class TypeChecker:
	""" Checks a whole namespace, recording everything in a report. """
	def __init__(self, report:Report):
		self._report = report

	def check_namespace(self, namespace:NAMESPACE, jobs:int=1):
		namespace = as_namespace(namespace)
		self._report.info("Type-Check", namespace.source_path or "<namespace>")
		functions = list(namespace.each_symbol())
		judge = lambda fn: judge_function(namespace, fn)
		if jobs > 1 and len(functions) > 1:
			with ThreadPoolExecutor(max_workers=jobs) as pool:
				outcomes = list(pool.map(judge, functions))
		else:
			outcomes = list(map(judge, functions))
		for fn, (violations, defect) in zip(functions, outcomes):
			self._report.info("  %s: %d violation(s)%s" % (fn.nom.text, len(violations), ", malformed" if defect else ""))
			for v in violations: self._report.violation(v)
			if defect is not None: self._report.defect(defect)

def judge_function(namespace:Namespace, fn:AnnotatedFunction) -> tuple[list[Violation], Optional[Defect]]:
	"""
	A malformed function contributes its defect and nothing else:
	a partial list of violations from a function we could not finish
	would only confuse matters.
	"""
	try: return FunctionChecker(namespace, fn).run(), None
	except MalformedDeclaration as md:
		return [], Defect(fn.nom.text, md.site, md.message)

def check(namespace:NAMESPACE, *, jobs:int=1) -> list[Violation]:
	"""
	Check every function in the namespace and return the violations in order.
	If some function was malformed, raise MalformedNamespace instead,
	once all the rest have been checked.
	"""
	report = Report(verbose=0)
	TypeChecker(report).check_namespace(namespace, jobs=jobs)
	if report.defects:
		raise MalformedNamespace(report.defects, report.violations)
	return report.violations

