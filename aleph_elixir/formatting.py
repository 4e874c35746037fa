"""Indentation and list-joining helpers shared by backend emitters."""

from __future__ import annotations

from typing import Callable, Iterable

from aleph_elixir.ast import AlephNode


DEFAULT_INDENT_UNIT = "  "

RenderFn = Callable[[AlephNode, int], str]


def comp_indent(depth: int, unit: str = DEFAULT_INDENT_UNIT) -> str:
    """Return the whitespace prefix for a nesting depth."""
    return unit * max(depth, 0)


def gen_list_expr(nodes: Iterable[AlephNode], render: RenderFn) -> str:
    """Render each node inline and join with a comma."""
    return gen_list_expr_sep(nodes, render, ", ")


def gen_list_expr_sep(nodes: Iterable[AlephNode], render: RenderFn, sep: str) -> str:
    """Render each node inline (depth 0) and join with ``sep``."""
    return sep.join(render(node, 0) for node in nodes)
