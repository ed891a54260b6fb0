"""
Build the primitive namespace:
The built-in base types, the types of literal values,
and the declared signatures of the primitive operations.
"""
from .domain import Base, NULL, FunctionType, Product, TypeExpression

def _built_in_type(name:str) -> Base:
	return Base(name)

NUMBER = _built_in_type("Number")
STRING = _built_in_type("String")
BOOLEAN = _built_in_type("Boolean")

literal_type_map : dict[type, TypeExpression] = {
	bool: BOOLEAN,
	str: STRING,
	int: NUMBER,
	float: NUMBER,
	type(None): NULL,
}

def _cases(*pairs) -> FunctionType:
	return FunctionType([(Product(domain), range_) for domain, range_ in pairs])

# The order of cases matters: the first one listed is the one
# a diagnostic quotes when nothing matches.
OPERATIONS : dict[str, FunctionType] = {}

def _install(glyphs:str, signature:FunctionType):
	for glyph in glyphs.split(): OPERATIONS[glyph] = signature

_install("+ *", _cases(((NUMBER, NUMBER), NUMBER)))
_install("- /", _cases(((NUMBER, NUMBER), NUMBER), ((NUMBER,), NUMBER)))
_install("< > <= >= =", _cases(((NUMBER, NUMBER), BOOLEAN)))
_install("add1 sub1 abs", _cases(((NUMBER,), NUMBER)))
_install("zero? positive? negative?", _cases(((NUMBER,), BOOLEAN)))
_install("not", _cases(((BOOLEAN,), BOOLEAN)))
_install("string-append", _cases(((STRING, STRING), STRING)))
_install("string-length", _cases(((STRING,), NUMBER)))
_install("string=?", _cases(((STRING, STRING), BOOLEAN)))
_install("number->string", _cases(((NUMBER,), STRING)))
