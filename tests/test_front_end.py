from pathlib import Path
import unittest
from unittest import mock

from nullcheck.check import check
from nullcheck.diagnostics import Report
from nullcheck.domain import NULL, Product, FunctionType, nullable
from nullcheck.front_end import parse_text, parse_file, Yuck
from nullcheck.prelude import NUMBER, STRING, BOOLEAN
from nullcheck import syntax

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=0)
		self.complain_to_console = mock.Mock()

def _read(text) -> syntax.Namespace:
	report = Silence()
	namespace = parse_text(text, None, report)
	assert report.ok()
	return namespace

def _fails_to_read(text) -> Silence:
	report = Silence()
	try: parse_text(text, None, report)
	except Yuck as ex:
		assert ex.args[0] == "parse", ex.args
		assert report.sick()
		return report
	raise AssertionError("failed to fail: %r" % text)

class ReadingGoodText(unittest.TestCase):
	def test_annotation_meets_definition(self):
		namespace = _read("""
			(: f (-> (U Number Null) Number))
			(define (f a) (if a (+ a 20) 0))
		""")
		f = namespace.symbol("f")
		self.assertEqual(FunctionType([(Product([nullable(NUMBER)]), NUMBER)]), f.signature)
		self.assertEqual(["a"], [p.nom.text for p in f.params])
		self.assertIsInstance(f.expr, syntax.Conditional)
		self.assertIsInstance(f.expr.test, syntax.Reference)
		self.assertIsInstance(f.expr.then_part, syntax.Operation)
		self.assertEqual("+", f.expr.then_part.nom.text)
		self.assertEqual(0, f.expr.else_part.value)

	def test_names_in_the_body_become_references(self):
		namespace = _read("(: f (-> (U Number Null) Number))\n(define (f a) (if a (+ a 20) 0))\n")
		then_part = namespace.symbol("f").expr.then_part
		self.assertIsInstance(then_part.args[0], syntax.Reference)
		self.assertEqual("a", then_part.args[0].nom.text)
		self.assertIsInstance(then_part.args[1], syntax.Literal)
		self.assertEqual(20, then_part.args[1].value)
		self.assertEqual([], check(namespace))

	def test_atoms_that_merely_look_numeric(self):
		namespace = _read("(: f (-> (U Number Null) Number)) (define (f nan) (if nan (+ nan 1e3) -.5))")
		body = namespace.symbol("f").expr
		self.assertIsInstance(body.test, syntax.Reference)
		self.assertEqual(1000.0, body.then_part.args[1].value)
		self.assertEqual(-0.5, body.else_part.value)

	def test_annotation_may_follow_definition(self):
		namespace = _read("(define (f) 1) (: f (-> Number))")
		self.assertEqual(FunctionType([(Product([]), NUMBER)]), namespace.symbol("f").signature)

	def test_literals(self):
		namespace = _read("""
			(: f (-> Null)) (define (f) null)
			(: g (-> Boolean)) (define (g) #t)
			(: h (-> Boolean)) (define (h) #f)
			(: i (-> String)) (define (i) "a string; not a comment")
			(: j (-> Number)) (define (j) -2.5)
		""")
		values = [fn.expr.value for fn in namespace.each_symbol()]
		self.assertEqual([None, True, False, "a string; not a comment", -2.5], values)

	def test_one_armed_if(self):
		f = _read("(: f (-> (U Number Null) (U Number Null))) (define (f a) (if a a))").symbol("f")
		self.assertIsNone(f.expr.else_part)

	def test_case_arrow(self):
		f = _read("(: same (case-> (-> Number Number) (-> String String))) (define (same x) x)").symbol("same")
		self.assertEqual(
			FunctionType([(Product([NUMBER]), NUMBER), (Product([STRING]), STRING)]),
			f.signature,
		)

	def test_null_and_other_names(self):
		f = _read("(: f (-> (U Null Widget Boolean) Null)) (define (f w) null)").symbol("f")
		domain, range_ = f.signature.cases[0]
		self.assertEqual(NULL, range_)
		self.assertIn(BOOLEAN, domain.members_in_order[0].members())
		self.assertIn("Widget", domain.members_in_order[0].render())

	def test_comments_and_declaration_order(self):
		namespace = _read("""
			; first things first
			(: b (-> Number)) (define (b) 2) ; trailing remark
			(: a (-> Number)) (define (a) 1)
		""")
		self.assertEqual(["b", "a"], [fn.nom.text for fn in namespace.each_symbol()])

	def test_spans_point_into_the_text(self):
		text = "(: f (-> (U Number Null) Number))\n(define (f a) (+ a 20))\n"
		f = _read(text).symbol("f")
		span = f.expr.span()
		self.assertEqual("(+ a 20)", text[span.slice])
		self.assertEqual(2, span.line)
		self.assertEqual(15, span.column)

	def test_unannotated_definition_reads_fine_but_will_not_check(self):
		namespace = _read("(define (f a) a)")
		self.assertIsNone(namespace.symbol("f").signature)

class ReadingBadText(unittest.TestCase):
	def test_bogons(self):
		for bogon in [
			"(: f (-> Number Number)",
			"(define (f a) a))",
			"(: f (-> Number Number)) (define (f a) \"unfinished)",
			"(define f 1)",
			"(define (f 1) 1)",
			"(: f Number) (define (f) 1)",
			"(: f (-> Number)) (: f (-> Number)) (define (f) 1)",
			"(: f (-> Number)) (define (f) 1) (define (f) 2)",
			"(: g (-> Number))",
			"(: f (-> Number)) (define (f) ())",
			"(: f (-> Number)) (define (f) (if 1))",
			"(: f (-> Number)) (define (f) ((g) 1))",
			"(: f (-> Number Number)) (define (f x) x) (whatever)",
			"(: f (-> (V Number) Number)) (define (f x) x)",
			"(: f (->)) (define (f) 1)",
			"(: f (case->)) (define (f) 1)",
			"(: f (case-> Number)) (define (f) 1)",
			"42",
		]:
			with self.subTest(bogon):
				_fails_to_read(bogon)

	def test_bad_forms_do_not_hide_later_ones(self):
		report = _fails_to_read("(define f 1) (whatever) (: g Number)")
		self.assertEqual(3, len(report._issues))

	def test_missing_file(self):
		report = Silence()
		with self.assertRaises(Yuck) as caught:
			parse_file(Path(__file__).parent / "no_such_file.rkt", report)
		self.assertEqual("read", caught.exception.args[0])
		self.assertTrue(report.sick())

class ReadThenCheck(unittest.TestCase):
	def test_the_recipe(self):
		namespace = _read("""
			(: safe (-> (U Number Null) Number))
			(define (safe a) (if a (+ a 20) 0))
			(: unsafe (-> (U Number Null) Number))
			(define (unsafe a) (+ a 20))
			(: sloppy (-> (U Number Null) Number))
			(define (sloppy a) (if a (+ a 20)))
		""")
		violations = check(namespace)
		self.assertEqual(["unsafe", "sloppy"], [v.function for v in violations])
		self.assertIsInstance(violations[0].site, syntax.Operation)
		self.assertIsInstance(violations[1].site, syntax.FunctionReturn)

if __name__ == '__main__':
	unittest.main()
