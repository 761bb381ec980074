"""CLI for treecalc.

Usage:
    python -m treecalc calc                       # Interactive calculator REPL
    python -m treecalc calc -e "2 + 3 * 4"        # Evaluate and exit
    python -m treecalc tree 5 3 8 1 --remove 3    # Build an AVL tree, show summary
    python -m treecalc demo                       # Insert/remove walkthrough
"""

from __future__ import annotations

import sys
from typing import Optional

import typer
from rich.console import Console

from treecalc.avl import AvlTree
from treecalc.calculator import Calculator, format_result
from treecalc.errors import CalculatorError
from treecalc.repl import make_console, run_repl
from treecalc.report import render_steps, render_tree_summary, run_demo_steps

app = typer.Typer(
    name="treecalc",
    help="AVL ordered set and expression calculator",
    no_args_is_help=True,
)
console = Console(stderr=True)


@app.command("calc")
def cmd_calc(
    exprs: Optional[list[str]] = typer.Option(
        None, "--expr", "-e", help="Evaluate expression(s) in order and exit",
    ),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the help banner"),
) -> None:
    """Start the calculator REPL, or evaluate expressions given with --expr."""
    out = make_console()
    calc = Calculator()

    if exprs:
        failed = False
        for expr in exprs:
            try:
                out.print(format_result(calc.evaluate(expr)))
            except CalculatorError as e:
                out.print(f"Error: {e}")
                failed = True
        raise typer.Exit(1 if failed else 0)

    code = run_repl(calc, sys.stdin, out, banner=not no_banner)
    raise typer.Exit(code)


@app.command("tree")
def cmd_tree(
    values: list[int] = typer.Argument(help="Integers to insert, in order"),
    remove: Optional[list[int]] = typer.Option(
        None, "--remove", "-r", help="Value to remove after inserting (repeatable)",
    ),
) -> None:
    """Build an AVL tree from VALUES and show its shape."""
    tree: AvlTree[int] = AvlTree()
    duplicates = [v for v in values if not tree.insert(v)]
    if duplicates:
        console.print(f"[yellow]Ignored duplicates:[/yellow] {', '.join(map(str, duplicates))}")

    for v in remove or []:
        if not tree.remove(v):
            console.print(f"[yellow]Not present:[/yellow] {v}")

    render_tree_summary(tree, console, title="AVL tree", probes=remove or [])

    if not tree.is_balanced():
        console.print("[red]Error:[/red] tree violates the AVL invariant")
        raise typer.Exit(1)


@app.command("demo")
def cmd_demo() -> None:
    """Insert 1-10, remove 1-3, insert 11-25, showing the tree after each step."""
    tree: AvlTree[int] = AvlTree()
    steps = run_demo_steps(tree)
    render_steps(steps, console)

    console.print("[bold]--- Final Verification ---[/bold]")
    render_tree_summary(tree, console, title="Final tree", probes=[3, 20])

    if not all(s.balanced for s in steps):
        console.print("[red]Error:[/red] tree lost balance during the walkthrough")
        raise typer.Exit(1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
