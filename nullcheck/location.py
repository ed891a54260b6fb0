"""
A simple, light-weight way to pass around stretches of source text.
A span knows its file, its character offsets, and where it starts
in (line, column) terms. The text of each file gets remembered as it
is read, so diagnostics can quote it later without going back to disk.
"""
from functools import lru_cache
from pathlib import Path
from typing import NamedTuple, Optional
from boozetools.support.failureprone import SourceText

class AnonymousText:
	""" Stands in for a path when the text came from no file in particular. Each one is distinct. """
	def __str__(self): return "<text>"

class Span(NamedTuple):
	""" Aimed at whatever prints error messages """
	path: Optional[Path | AnonymousText]
	slice: slice
	line: int
	column: int

	def describe(self) -> str:
		return "%s, line %d, column %d" % (self.path or "<text>", self.line, self.column)

_sources: dict[object, SourceText] = {}

def remember_source(path:Optional[Path], text:str):
	""" Returns the key that spans into this text should carry as their path. """
	key = AnonymousText() if path is None else path
	_sources[key] = SourceText(text, filename=str(key))
	return key

def between(left:Span, right:Span) -> Span:
	assert left.path == right.path
	return Span(left.path, slice(left.slice.start, right.slice.stop), left.line, left.column)

def source_of(path:Optional[Path]) -> SourceText:
	if path in _sources: return _sources[path]
	return _fetch(path)

@lru_cache(5)
def _fetch(path) -> SourceText:
	if path is None:
		return SourceText("")
	with open(path, "r", encoding="utf-8") as fh:
		return SourceText(fh.read(), filename=str(path))
