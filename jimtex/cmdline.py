"""
This is an interpreter for the math written in LaTeX documents.

{0}

For example:

    jimtex homework.tex

will evaluate the code regions in homework.tex, printing the value of each
expression, or else try to explain why not.

    jimtex -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="jimtex",
	description="Interpreter for math written in LaTeX.",
)
parser.add_argument("program", help="a LaTeX document with code regions, such as zoo/ok/arithmetic.tex")
parser.add_argument('-c', "--check", action="count", help="Parse the document verbosely but do not evaluate anything.")
parser.add_argument('-t', "--tokens", action="store_true", help="Print the code tokens, after commands are resolved, and stop.")
parser.add_argument('-s', "--strict", action="store_true", help="Insist that every function definition have a declaration first.")
parser.add_argument('-v', "--verbose", action="count", help="Say what each stage of the pipeline found.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .errors import JimTeXParseError
	from . import front_end, executive
	report = Report(verbose=(args.check or 0) + (args.verbose or 0))
	path = Path.cwd() / args.program
	try:
		if args.tokens:
			text = front_end.read_file(path, report)
			if text is not None:
				try:
					for token in front_end.code_tokens(text): print(repr(token))
				except JimTeXParseError as ex:
					report.parse_error(front_end.source_text(text, path), ex)
		elif args.check:
			front_end.parse_file(path, report)
		else:
			executive.run_file(path, report, strict=args.strict)
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	if report.sick():
		report.complain_to_console()
		return 1
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
	return 0

def main():
	if len(sys.argv) > 1:
		sys.exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
