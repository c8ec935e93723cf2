"""
Alpha CLI Entrypoint.

Command-line driver for the Alpha scanner and parser.

Features:
    - Read source from a file, an inline string, or standard input.
    - Scan and parse the program, then print its AST as JSON or as an
      indented S-expression, or print the raw token stream.
    - Output to console or file.
    - Report lex and parse errors as `<file>:<line>:<col>: ...` on stderr.

Example usage:
    alpha program.alpha
    alpha -s "x = 1" -f sexp
    alpha program.alpha --tokens
    alpha program.alpha -o program.json --verbose

Functions:
    run_alpha(source, is_string=False, fmt="json", out=None, tokens=False) -> str:
        Runs the pipeline (scan → parse → serialize) and returns/writes the output.

    main(argv=None) -> None:
        Parses CLI arguments, configures logging and invokes `run_alpha`.
"""

import argparse
import json
import logging
import sys

from alpha.alpha_ast import render, to_dict
from alpha.alpha_errors import AlphaSyntaxError
from alpha.alpha_lexer import STDIN_NAME, Scanner
from alpha.alpha_parser import Parser

logger = logging.getLogger(__name__)

FORMATS = ("json", "sexp")


def run_alpha(
    source: str | None,
    is_string: bool = False,
    fmt: str = "json",
    out: str | None = None,
    tokens: bool = False,
) -> str:
    """
    Run the Alpha toolchain: scan, parse, serialize, and print or write the result.

    Args:
        source (str | None): Path to a source file, raw source text when
            `is_string` is set, or None to read standard input.
        is_string (bool): Treat `source` as program text. Defaults to False.
        fmt (str): `json` or `sexp`. Defaults to `json`.
        out (str | None): Optional path to write the output to. If None, prints to stdout.
        tokens (bool): Emit the token stream instead of the AST.

    Returns:
        str: The serialized output.

    Raises:
        ValueError: If `fmt` is not a supported format.
        AlphaSyntaxError: On the first lex or parse error.
        OSError: If the source file cannot be read or the output cannot be written.
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported output format: {fmt}")

    # 1. Scanning
    if source is None:
        scanner = Scanner(sys.stdin.read(), STDIN_NAME)
    elif is_string:
        scanner = Scanner(source, STDIN_NAME)
    else:
        scanner = Scanner.from_file(source)
    token_list = scanner.get_all_tokens()

    # 2. Parsing (or token dump)
    if tokens:
        if fmt == "json":
            output = json.dumps(
                [
                    {
                        "type": tok.kind.value,
                        "value": tok.text,
                        "line": tok.line,
                        "col": tok.column,
                    }
                    for tok in token_list
                ],
                indent=2,
            )
        else:
            output = "\n".join(repr(tok) for tok in token_list)
    else:
        program = Parser(token_list, scanner.file_name).parse_program()
        if fmt == "json":
            output = json.dumps(to_dict(program), indent=2)
        else:
            output = render(program)

    # 3. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        logger.info("wrote %s output to %s", fmt, out)
    else:
        print(output)
    return output


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the Alpha CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as program text instead of a file path.
        - `-f`, `--format`: Output format ('json' or 'sexp'), default is 'json'.
        - `-o`, `--out`: Write output to a file.
        - `--tokens`: Print the token stream instead of the AST.
        - `-v`, `--verbose`: Enable debug logging.

    Exits with status 1 on lex/parse errors or unreadable input.
    """
    parser = argparse.ArgumentParser(prog="alpha")
    parser.add_argument(
        "source", nargs="?", help="Filename or raw source (with -s); stdin if omitted"
    )
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=FORMATS,
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--tokens", action="store_true", help="Print tokens instead of the AST"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run_alpha(
            source=args.source,
            is_string=args.string,
            fmt=args.fmt,
            out=args.out,
            tokens=args.tokens,
        )
    except AlphaSyntaxError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
