"""
Everything to do with telling the user what went wrong.

The checker produces Violations (type mismatches, which are recovered from)
and Defects (malformed declarations, which stop the checking of one function).
A Report collects both, in the order they were found, along with anything
the front end had to complain about. Nothing is ever dropped or truncated.

Rendering is pure: it reads the violation and (when there is a span)
the remembered source text, and produces lines of text.
"""
import sys
from typing import NamedTuple, Optional, Sequence
from boozetools.support.failureprone import illustration

from .domain import TypeExpression
from .location import Span, source_of
from .ontology import Phrase
from .syntax import unparse

class Violation(NamedTuple):
	function: str
	site: Phrase
	expected: TypeExpression
	actual: TypeExpression
	explanation: str

class Defect(NamedTuple):
	function: str
	site: Optional[Phrase]
	message: str

class Report:
	_issues : list["Pic"]
	_violations : list[Violation]
	_defects : list[Defect]

	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._violations = []
		self._defects = []

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def violations(self) -> list[Violation]: return list(self._violations)
	@property
	def defects(self) -> list[Defect]: return list(self._defects)

	def issue(self, it:"Pic"):
		self._issues.append(it)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def as_text(self) -> str:
		return "\n\n".join(pic.as_text() for pic in self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)

	# Methods the front end is likely to call:
	def generic_parse_error(self, span:Span, hint:str):
		intro = "The reader got confused here."
		self.issue(Pic(intro, [Annotation(span, "")], [hint]))

	def no_such_file(self, path, why:str):
		self.issue(Pic("Could not read %s: %s" % (path, why), []))

	def bad_form(self, guilty:Phrase, hint:str):
		intro = "This form does not make sense here."
		self.issue(Pic(intro, [Annotation.of(guilty, "")], [hint]))

	def redefined(self, first:Phrase, guilty:Phrase):
		intro = "This name is defined more than once."
		problem = [Annotation.of(first, "Earliest definition"), Annotation.of(guilty, "Again here")]
		self.issue(Pic(intro, problem))

	def annotated_nothing(self, guilty:Phrase):
		intro = "This annotation has no matching definition."
		self.issue(Pic(intro, [Annotation.of(guilty, "")]))

	# Methods the type checker calls:
	def violation(self, v:Violation):
		self._violations.append(v)
		self.issue(ViolationPic(v))

	def defect(self, d:Defect):
		self._defects.append(d)
		intro = "Cannot check %s: %s" % (d.function, d.message)
		anns = [] if d.site is None else [Annotation.of(d.site, "")]
		self.issue(Pic(intro, anns))

class Annotation:
	"""
	Points at a stretch of source text when there is one,
	and otherwise just shows the textual form of the phrase.
	"""
	span: Optional[Span]
	caption: str
	def __init__(self, span:Optional[Span], caption:str="", text:str=""):
		self.span = span
		self.caption = caption
		self.text = text
	@staticmethod
	def of(node:Phrase, caption:str="") -> "Annotation":
		return Annotation(node.span(), caption, unparse(node))
	def illustrate(self) -> str:
		if self.span is None:
			return "    %s    %s" % (self.text, self.caption)
		source = source_of(self.span.path)
		row, col = source.find_row_col(self.span.slice.start)
		single_line = source.line_of_text(row)
		# Multi-line phrases get underlined only as far as their first line goes.
		width = max(1, min(self.span.slice.stop - self.span.slice.start, len(single_line.rstrip()) - col))
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer:Sequence[str]=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	def as_text(self):
		lines = [self._intro, ""]
		path = None
		for ann in self._anns:
			if ann.span is not None and ann.span.path != path:
				path = ann.span.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

class ViolationPic(Pic):
	def __init__(self, v:Violation):
		super().__init__("", [])
		self._v = v
	def as_text(self):
		text = render_violation(self._v)
		span = self._v.site.span()
		if span is None: return text
		return text + "\n" + Annotation(span, "here").illustrate()

def location_of(v:Violation) -> str:
	span = v.site.span()
	where = type(v.site).__name__
	if span is None: return "in %s, at this %s" % (v.function, where)
	return "in %s, at this %s, %s" % (v.function, where, span.describe())

def render_violation(v:Violation) -> str:
	"""
	The fixed format:
		location
		Expected type
		Actual
		offending expression
		explanation
	"""
	return "\n".join([
		"Type violation %s:" % location_of(v),
		"    Expected type: %s" % v.expected.render(),
		"    Actual: %s" % v.actual.render(),
		"    In: %s" % unparse(v.site),
		"    %s" % v.explanation,
	])

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print("Found %d problem(s):" % len(issues), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
