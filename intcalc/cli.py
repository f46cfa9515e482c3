import argparse
import logging
import sys

from intcalc.calculator import CalculatorError
from intcalc.runtime import evaluate
from intcalc.tokenizer import TokenizerError, tokenize, untokenize
from intcalc.utils import format_error

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intcalc",
        description="Arbitrary-precision integer calculator",
        epilog="Without an expression an interactive prompt is started.",
    )
    parser.add_argument("expression", nargs="*", help="expression to evaluate, parts are joined with spaces")
    parser.add_argument("--tokens", action="store_true", help="print the token stream before the result")
    parser.add_argument("-v", "--verbose", action="store_true", help="log tokenizer and calculator steps")
    return parser


def run_once(code: str, show_tokens: bool = False) -> int:
    try:
        if show_tokens:
            print(untokenize(tokenize(code)))
        result = evaluate(code)
    except (TokenizerError, CalculatorError) as e:
        print(format_error(e, code), file=sys.stderr)
        return 1
    print(result)
    return 0


def run_repl(show_tokens: bool = False) -> None:
    while True:
        try:
            code = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            return

        if not code.strip():
            continue

        try:
            if show_tokens:
                print(untokenize(tokenize(code)))
            result = evaluate(code)
        except (TokenizerError, CalculatorError) as e:
            print(format_error(e, code))
            continue

        print(result)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if hasattr(sys, "set_int_max_str_digits"):
        # results routinely exceed the default limit on decimal conversion
        sys.set_int_max_str_digits(0)

    if not args.expression:
        logger.debug("No expression given, starting REPL")
        run_repl(show_tokens=args.tokens)
        return 0
    return run_once(" ".join(args.expression), show_tokens=args.tokens)
