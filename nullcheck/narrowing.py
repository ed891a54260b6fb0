"""
Flow-sensitive narrowing, done explicitly.

Given the environment in force at a conditional and the conditional's test,
work out the environment for each branch. If the test is a bare reference
to an argument, then within the true branch that argument cannot be null.

Nothing is mutated: the ambient frame stays exactly as it was,
and the true branch gets a fresh refinement atop it.

A compound test narrows nothing. Neither does a test on an argument whose
type could not have been null in the first place.
"""
from .domain import TypeExpression, is_nullable, without_null
from .ontology import ValueExpression
from .stacking import Frame, Refinement
from .syntax import Reference

TypeFrame = Frame[TypeExpression]

def narrow(env:TypeFrame, test:ValueExpression) -> tuple[TypeFrame, TypeFrame]:
	""" Return the pair (then-environment, else-environment). """
	if isinstance(test, Reference):
		name = test.nom.key()
		if env.holds(name):
			ambient = env.fetch(name)
			if is_nullable(ambient):
				then_env = Refinement(env)
				then_env.assign(name, without_null(ambient))
				return then_env, env
	return env, env
