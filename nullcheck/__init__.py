"""
Catch misuse of possibly-null values in annotated functions, before they run.
"""
from .check import check, TypeChecker, MalformedNamespace
from .diagnostics import Report, Violation, render_violation
