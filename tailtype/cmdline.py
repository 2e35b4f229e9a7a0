r"""
This infers the types of the capture groups in a log-matching pattern.

{0}

For example:

    tailtype '(\d+) (?P<latency>\d+\.\d+) (\w+)'

will print the type of each capture group, and

    tailtype -b

will list the built-in functions and their signatures.
"""
import re, sys, argparse

parser = argparse.ArgumentParser(
	prog="tailtype",
	description="Infer the types of capture groups in a log-matching pattern.",
)
parser.add_argument("pattern", nargs="?", help="a regular expression, as a program would write it.")
parser.add_argument("groups", nargs="*", type=int, help="just these capture groups, by number.")
parser.add_argument('-b', "--builtins", action="store_true", help="List the built-in function signatures.")
parser.add_argument('-v', "--verbose", action="count", help="Trace the pattern's syntax tree.")

def run(args):
	from .builtins import BUILTINS
	from .capref import infer_capref_type, infer_all_capref_types
	from .diagnostics import Report
	from .regex_syntax import parse, capture_names
	report = Report(verbose=args.verbose)
	if args.builtins:
		for name, typ in sorted(BUILTINS.items()):
			print("%s: %s" % (name, typ))
	if args.pattern is None:
		return 0 if args.builtins else 2
	try: tree = parse(args.pattern)
	except re.error as e:
		print("Bad pattern: %s" % e, file=sys.stderr)
		return 1
	report.info(repr(tree))
	names = {nr: name for name, nr in capture_names(tree).items()}
	status = 0
	for cap in args.groups or infer_all_capref_types(tree):
		typ = infer_capref_type(tree, cap)
		label = "$%d" % cap if cap not in names else "$%d (%s)" % (cap, names[cap])
		if typ is None:
			print("%s: no such capture group" % label, file=sys.stderr)
			status = 1
		else:
			print("%s: %s" % (label, typ))
	return status

def main():
	if len(sys.argv) > 1:
		sys.exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
