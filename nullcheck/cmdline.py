"""
This is a null-safety checker for annotated functions.

{0}

For example:

    nullcheck examples/cookbook.rkt

will check every annotated function in cookbook.rkt, and either say
it looks plausible or explain exactly where a null could sneak in.

    nullcheck -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="nullcheck",
	description="Check annotated functions for misuse of possibly-null values.",
)
parser.add_argument("program", help="try examples/cookbook.rkt for example.")
parser.add_argument('-v', "--verbose", action="count", help="Narrate progress to stderr.")
parser.add_argument('-j', "--jobs", type=int, default=1, help="Check up to this many functions at once.")

def run(args):
	from .diagnostics import Report
	from .front_end import parse_file, Yuck
	from .check import TypeChecker
	report = Report(verbose=args.verbose)
	try: namespace = parse_file(Path.cwd() / args.program, report)
	except Yuck:
		assert report.sick()
		report.complain_to_console()
		return 1
	TypeChecker(report).check_namespace(namespace, jobs=max(1, args.jobs))
	if report.sick():
		report.complain_to_console()
		return 1
	print("Looks plausible to me.", file=sys.stderr)
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
