"""
Unify some types from the command line, to see what comes of it.

{0}

For example:

    polytype "t0 -> list(t1)" "int -> list(bool)"

unifies the first type with each of the others in turn, all within one
context, and then prints every one of them as resolved by that context.
If something does not unify, it tries to explain why not.

    polytype -h

will explain all the arguments.
"""
import sys, argparse

parser = argparse.ArgumentParser(
	prog="polytype",
	description="Unify type expressions and show the resulting substitution.",
)
parser.add_argument("first", help="a type, such as 't0 -> list(t0)'")
parser.add_argument("others", nargs="+", help="types to unify with the first one")
parser.add_argument('-v', "--verbose", action="count", help="Show the substitution after each step.")
parser.add_argument("--fast", action="store_true", help="Unify in place; stop at the first failure.")
parser.add_argument("--max-issues", type=int, default=3, help="Give up after this many problems.")

def run(args):
	from .context import Context, UnificationError
	from .diagnostics import Report, TooManyIssues
	from .front_end import parse_type, NotationError
	report = Report(verbose=args.verbose, max_issues=args.max_issues)
	texts = [args.first, *args.others]
	try:
		types = []
		for text in texts:
			try: types.append(parse_type(text))
			except NotationError as ex: report.bad_notation(text, ex)
		if report.sick():
			report.complain_to_console()
			return 1
		ctx = Context()
		unify = ctx.unify_fast if args.fast else ctx.unify
		head = types[0]
		for other in types[1:]:
			report.info("unify", head, "with", other)
			try: unify(head, other)
			except UnificationError as ex:
				report.unification_failed(ex, head.apply(ctx), other.apply(ctx))
				if args.fast: break
			report.info("   ", ctx)
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	for text, typ in zip(texts, types):
		print("%s : %s" % (text, typ.apply(ctx)))
	if report.sick():
		report.complain_to_console()
		return 1
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
