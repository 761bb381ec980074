"""Interactive calculator REPL.

Loop per line:
1. Write the "> " prompt and flush
2. Read one line (end of input ends the session)
3. Classify it (exit / help / clear / m0-m9 / c0-c9 / expression)
4. Dispatch to the Calculator and print the result or "Error: <message>"

A failed line never ends the session and never touches the last result.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from rich.console import Console

from treecalc.calculator import Calculator
from treecalc.errors import CalculatorError
from treecalc.models import CommandKind

PROMPT = "> "

HELP_TEXT = """\
Calculator REPL
Supported operators: +, -, *, /, %, ** (or ^)
Supported functions: sin, cos, tan, asin, acos, atan, ln, log2, log10, exp, sqrt
                    round, floor, ceil, abs
Constants: pi, e, phi, tau, sqrt2, sqrt3
Use '_' to reference the last result
Memory locations: m0 through m9
  - Use 'm0' on a line by itself to save last result to m0
  - Use 'm0' in expressions to recall value from m0
  - Use 'c0' to clear memory location m0, 'clear' to clear last result
Type 'q', 'quit', or 'exit' to exit"""


def make_console(**kwargs) -> Console:
    """Console that prints text verbatim: no markup, no highlighting."""
    kwargs.setdefault("highlight", False)
    kwargs.setdefault("markup", False)
    kwargs.setdefault("soft_wrap", True)
    kwargs.setdefault("emoji", False)
    return Console(**kwargs)


def print_help(console: Console) -> None:
    console.print(HELP_TEXT)


def _read_line(lines: Iterator[str], console: Console) -> Optional[str]:
    """Show the prompt and return the next line, or None at end of input."""
    console.print(PROMPT, end="")
    console.file.flush()
    try:
        return next(lines)
    except StopIteration:
        return None


def run_repl(
    calculator: Calculator,
    lines: Iterable[str],
    console: Console,
    banner: bool = True,
) -> int:
    """Run the REPL over `lines` until an exit command or end of input.

    Args:
        calculator: Session state; survives the call so callers can inspect it.
        lines: Input lines, e.g. sys.stdin.
        console: Where prompts, results and errors are written.
        banner: Print the help banner first.

    Returns:
        Process exit code: 0 on exit command or end of input, 1 if reading
        the input failed.
    """
    if banner:
        print_help(console)
        console.print()

    it = iter(lines)
    while True:
        try:
            line = _read_line(it, console)
        except (OSError, UnicodeDecodeError) as e:
            console.print()
            console.print(f"Error reading input: {e}")
            return 1

        if line is None:
            console.print()
            return 0

        command = calculator.classify_line(line)

        if command.kind == CommandKind.EMPTY:
            continue
        if command.kind == CommandKind.HELP:
            print_help(console)
            continue

        try:
            console.print(calculator.execute(command))
        except CalculatorError as e:
            console.print(f"Error: {e}")
            continue

        if command.kind == CommandKind.EXIT:
            return 0
