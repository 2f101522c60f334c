"""
minipas CLI Entrypoint.

This module provides the command-line interface for checking minipas programs.
It reads a source file (or an inline string), runs the lexer and parser, and
reports either the syntax tree or the first syntax error.

Features:
    - Read source from a file or from an inline string.
    - Print the verdict and the indented tree, or the tree as JSON.
    - Print the diagnostic followed by the verdict when the program has a syntax error.
    - Dump the raw token stream.
    - Output to console or file.

Example usage:
    minipas input.txt
    minipas -s "program p; begin x := 1 end."
    minipas input.txt -o output.txt
    minipas input.txt --format json
    minipas input.txt --tokens

Functions:
    run_minipas(source: str, is_string: bool = False, out: Optional[str] = None,
                fmt: str = "tree") -> int:
        Runs the front end and writes the report. Returns the exit status.

    main(argv: Optional[list[str]] = None) -> int:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import json
import logging
import sys

from minipas.minipas_lexer import tokenize
from minipas.minipas_parser import parse_source

log = logging.getLogger(__name__)

CORRECT_BANNER = "The program is correct."
ERROR_BANNER = "The program has syntax errors."


def read_source(source: str, is_string: bool = False) -> str:
    if is_string:
        return source
    log.debug("Reading source from %s", source)
    # undecodable bytes become U+FFFD and lex as UNKNOWN
    with open(source, encoding="utf-8", errors="replace") as f:
        return f.read()


def emit(text: str, out: str | None = None) -> None:
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text)
        log.info("Wrote report to %s", out)
    else:
        sys.stdout.write(text)


def run_minipas(
    source: str,
    is_string: bool = False,
    out: str | None = None,
    fmt: str = "tree",
) -> int:
    """
    Run the minipas front end and write the report.

    Args:
        source (str): The source text or a path to a source file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        out (str | None): Optional path to write the report to. If None, prints to stdout.
        fmt (str): Tree output format, 'tree' (indented labels) or 'json'.

    Returns:
        int: 0 when the program parses, 1 when it has a syntax error.

    Raises:
        ValueError: If `fmt` is not a known format.
        OSError: If the source file cannot be read or the output file cannot be written.
    """
    if fmt not in ("tree", "json"):
        raise ValueError(f"Unknown output format: {fmt!r}")

    text = read_source(source, is_string)
    result = parse_source(text)

    if result.ok:
        assert result.tree is not None  # for mypy
        if fmt == "json":
            body = json.dumps(result.tree.to_dict(), indent=2, ensure_ascii=False) + "\n"
        else:
            body = result.tree.dump()
        emit(f"{CORRECT_BANNER}\n{body}", out)
        log.info("Parse succeeded")
        return 0

    emit(f"{result.error}\n{ERROR_BANNER}\n", out)
    log.info("Parse failed")
    return 1


def print_tokens(source: str, is_string: bool = False) -> int:
    for tok in tokenize(read_source(source, is_string)):
        print(f"{tok.line}:{tok.col}\t{tok.kind}\t{tok.text}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the minipas CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-o`, `--out`: Write the report to a file.
        - `-f`, `--format`: Tree output format, 'tree' (default) or 'json'.
        - `--tokens`: Print the token stream instead of parsing.
        - `-v`, `--verbose`: Enable debug logging on stderr.
    """
    parser = argparse.ArgumentParser(prog="minipas")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=("tree", "json"),
        default="tree",
        help="Tree output format (default: tree)",
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream and exit"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose (debug) logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.tokens:
            return print_tokens(args.source, args.string)
        return run_minipas(
            source=args.source,
            is_string=args.string,
            out=args.out,
            fmt=args.fmt,
        )
    except OSError as e:
        log.debug("I/O failure", exc_info=True)
        print(f"minipas: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    sys.exit(main())
