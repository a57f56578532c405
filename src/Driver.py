import argparse
import logging
import sys

from ast_nodes import render_ascii
from compiler import compile_file
from report import write_reports

log = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="MiniLang semantic analyzer")
    ap.add_argument("input", nargs="?", default="input.txt", help="source file (default: input.txt)")
    ap.add_argument("--out-dir", default=".", help="where tokens.txt, global_vars.txt, functions.txt and errors.txt go")
    ap.add_argument("--print-ast", action="store_true", help="print the syntax tree before the reports")
    ap.add_argument("--log-level", default="WARNING", help="logging level (DEBUG, INFO, ...)")
    return ap


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s:%(name)s:%(message)s")

    print(f"\n[INFO] Analyzing file: {args.input}")
    try:
        result = compile_file(args.input)
    except FileNotFoundError:
        print(f"[ERROR] File '{args.input}' was not found.")
        return 1

    if args.print_ast and result.program is not None:
        print("\n== AST ==")
        print(render_ascii(result.program))

    paths = write_reports(result, args.out_dir)
    for key, path in paths.items():
        log.info("%s written to %s", key, path)
    print(f"[OK] Reports written to: {', '.join(paths.values())}")

    if result.ok:
        print("\nCompilation succeeded! Check the generated files.")
        return 0

    if result.syntax_errors:
        print("\n== SYNTAX ERRORS ==")
        for e in result.syntax_errors:
            print("•", e)
    print(f"\n{result.total_errors} error(s) found. Details in errors.txt.")
    return 2


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
