"""Rich tables describing AVL trees.

Used by the `tree` and `demo` CLI commands: one summary table for a finished
tree, and a step-by-step table for the insert/remove walkthrough.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table

from treecalc.avl import AvlTree
from treecalc.models import RootInfo


@dataclass
class Step:
    """Tree state after one demo operation."""

    action: str
    value: int
    size: int
    height: int
    balanced: bool
    root: Optional[RootInfo]


def _fmt_bool(b: bool) -> str:
    return "[green]yes[/green]" if b else "[red]no[/red]"


def _fmt_root(root: Optional[RootInfo]) -> str:
    if root is None:
        return "[dim]empty[/dim]"
    left = "--" if root.left is None else str(root.left)
    right = "--" if root.right is None else str(root.right)
    return f"{root.value} (h={root.height}, bf={root.balance:+d}, L={left}, R={right})"


def render_tree_summary(
    tree: AvlTree,
    console: Console,
    title: str = "AVL tree",
    probes: Iterable = (),
) -> None:
    """Render size, height, balance and root of a tree.

    `probes` are values whose membership is reported as extra rows.
    """
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Metric", style="dim", min_width=12)
    table.add_column("Value", justify="right", min_width=12)

    table.add_row("Size", str(len(tree)))
    table.add_row("Height", str(tree.height()))
    table.add_row("Balanced", _fmt_bool(tree.is_balanced()))
    table.add_row("Root", _fmt_root(tree.root_info()))
    for value in probes:
        table.add_row(f"Contains {value}", _fmt_bool(tree.contains(value)))

    console.print()
    console.print(table)
    console.print()


def run_demo_steps(tree: AvlTree) -> list[Step]:
    """Insert 1..10, remove 1..3, insert 11..25, recording every step."""
    plan = (
        [("insert", i) for i in range(1, 11)]
        + [("remove", i) for i in range(1, 4)]
        + [("insert", i) for i in range(11, 26)]
    )
    steps = []
    for action, value in plan:
        if action == "insert":
            tree.insert(value)
        else:
            tree.remove(value)
        steps.append(Step(
            action=action,
            value=value,
            size=len(tree),
            height=tree.height(),
            balanced=tree.is_balanced(),
            root=tree.root_info(),
        ))
    return steps


def render_steps(steps: list[Step], console: Console) -> None:
    """Render one row per demo step."""
    table = Table(title="AVL walkthrough", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Op", min_width=6)
    table.add_column("Size", justify="right")
    table.add_column("Height", justify="right")
    table.add_column("Balanced", justify="center")
    table.add_column("Root", min_width=30)

    action_styles = {"insert": "green", "remove": "yellow"}
    for i, s in enumerate(steps, 1):
        style = action_styles.get(s.action, "white")
        table.add_row(
            str(i),
            f"[{style}]{s.action} {s.value}[/{style}]",
            str(s.size),
            str(s.height),
            _fmt_bool(s.balanced),
            _fmt_root(s.root),
        )

    console.print()
    console.print(table)
    console.print()
