#!/usr/bin/env python3
"""
Abikalkki - interactive single-line calculator with live preview.

Entry point for the application with CLI support.

Usage:
    abikalkki                       # Launch GUI
    abikalkki "2+2"                 # Evaluate in terminal
    abikalkki "\\frac{1}{2}"        # LaTeX input is converted first
    abikalkki --repl                # Terminal session with history
"""

import sys
import os
import argparse
import logging
from decimal import Decimal, InvalidOperation

# Add the project root to path for imports
sys.path.insert(0, os.path.dirname(__file__))

logger = logging.getLogger("abikalkki")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="abikalkki",
        description="Single-line calculator with live preview and history",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  abikalkki                            Launch the GUI
  abikalkki "2+2"                      Evaluate and print the result
  abikalkki "sin(30)" --angle-mode rad Evaluate in radians
  abikalkki --repl                     Start a terminal session
  abikalkki --list-functions           List available functions
        """,
    )

    # Positional: expression to evaluate
    parser.add_argument(
        "expression",
        nargs="?",
        help="Expression to evaluate (calculator syntax or LaTeX)",
    )

    # Angle mode
    parser.add_argument(
        "-a",
        "--angle-mode",
        choices=["deg", "rad"],
        default="deg",
        help="Angle unit for trigonometric functions (default: deg)",
    )

    # Precision
    parser.add_argument(
        "-p",
        "--precision",
        type=int,
        default=32,
        help="Significant digits of results (default: 32)",
    )

    # Terminal session
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Start an interactive terminal session",
    )

    # List functions
    parser.add_argument(
        "--list-functions",
        action="store_true",
        help="List available functions and constants",
    )

    # GUI mode (explicit)
    parser.add_argument(
        "--gui",
        action="store_true",
        help="Launch GUI mode (default if no expression given)",
    )

    # Version
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.4.0",
    )

    # Verbose
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    return parser


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def evaluate_cli(expression: str, settings) -> int:
    """Evaluate an expression and print the result."""
    from abikalkki.engine import calculate
    from abikalkki.input.latex import latex_to_math
    from abikalkki.output.formatting import format_answer
    from abikalkki.utils.errors import format_error_for_user

    if "\\" in expression:
        expression = latex_to_math(expression)
        logger.debug("Converted LaTeX input to %r", expression)

    result = calculate(
        expression,
        Decimal(0),
        Decimal(0),
        settings.angle_mode,
        settings.precision,
    )
    if result.is_err:
        print(f"Error: {format_error_for_user(result.error)}", file=sys.stderr)
        return 1

    print(format_answer(result.value, settings.decimal_separator))
    return 0


def list_functions() -> int:
    """List available functions and constants."""
    from abikalkki.engine import list_functions as docs
    from abikalkki.utils.constants import MATH_CONSTANTS, ANSWER_NAME, INDEX_NAME

    print("\nFUNCTIONS")
    print("---------")
    for doc in docs():
        print(f"  {doc.usage:<18} {doc.description}")

    print("\nNAMES")
    print("-----")
    for name, info in MATH_CONSTANTS.items():
        print(f"  {name:<18} {info['name']}")
    print(f"  {ANSWER_NAME:<18} Previous answer")
    print(f"  {INDEX_NAME:<18} Index accumulator")

    print(f"\nTotal: {len(docs())} functions")
    return 0


REPL_HELP = """Commands:
  :history        Show the session history, newest first
  :doc NAME       Show usage of a function
  :ind VALUE      Set the index accumulator 'ind'
  :help           Show this help
  :quit           Exit
Lines containing '\\' are converted from LaTeX."""


def run_repl(settings) -> int:
    """Interactive terminal session driving the session controller."""
    from abikalkki.engine import get_documentation
    from abikalkki.output.formatting import format_answer, format_history_line
    from abikalkki.session import SessionController, TextBuffer

    buffer = TextBuffer()
    controller = SessionController(buffer, settings=settings)
    store = controller.store
    separator = settings.decimal_separator

    print("Abikalkki. Type :help for commands.")
    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        if not line:
            continue

        if line.startswith(":"):
            command, _, argument = line[1:].partition(" ")
            argument = argument.strip()
            if command in ("quit", "q", "exit"):
                return 0
            elif command == "help":
                print(REPL_HELP)
            elif command == "history":
                for record in store.get().history:
                    marker = " [LaTeX]" if record.is_latex_origin else ""
                    print(f"  {format_history_line(record, separator)}{marker}")
            elif command == "doc":
                doc = get_documentation(argument)
                print(f"  {doc.usage}: {doc.description}" if doc else "  No such function")
            elif command == "ind":
                try:
                    store.set_index(Decimal(argument.replace(",", ".")))
                except InvalidOperation:
                    print(f"  Not a number: {argument}")
            else:
                print(f"  Unknown command: {command}")
            continue

        buffer.clear()
        if controller.paste(line):
            print(f"  = {buffer.text()}")
        else:
            buffer.setText(line)

        if controller.commit():
            print(format_answer(store.get().answer, separator))
        else:
            controller.preview()
            print(f"  {store.get().hint}")
            buffer.clear()
            store.set_pending_latex(False)


def main():
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    setup_logging(args.verbose)

    from abikalkki.config import Settings

    try:
        settings = Settings(angle_mode=args.angle_mode, precision=args.precision)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # List functions mode
    if args.list_functions:
        return list_functions()

    if args.repl:
        return run_repl(settings)

    # If no expression and not explicit GUI, launch GUI
    if args.gui or not args.expression:
        from abikalkki.gui.main_window import run_app

        return run_app(settings)

    return evaluate_cli(args.expression, settings)


if __name__ == "__main__":
    sys.exit(main() or 0)
