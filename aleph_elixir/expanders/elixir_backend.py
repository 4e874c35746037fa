"""Elixir backend emitter for Aleph syntax trees.

Rendering is a single structural pass. Every node is rendered at a depth;
expressions nested on the same line as their parent are rendered at depth 0,
while statements placed on their own line inherit or increment the depth.
Variants with no Elixir counterpart (complex numbers, classes, unknown nodes)
render to the empty string.
"""

from __future__ import annotations

from aleph_elixir.ast import (
    Add,
    AlephNode,
    And,
    App,
    Array,
    Assert,
    Bool,
    Break,
    Bytes,
    Comment,
    CommentMulti,
    Continue,
    Div,
    Ellipsis,
    Eq,
    Float,
    Get,
    Ident,
    If,
    In,
    Int,
    Iprt,
    LE,
    Length,
    Let,
    LetRec,
    Match,
    MatchLine,
    Mul,
    Neg,
    Not,
    Or,
    Put,
    Remove,
    Return,
    Stmts,
    String,
    Sub,
    Tuple,
    Unit,
    Var,
    While,
)
from aleph_elixir.expanders.base import BackendEmitter, ExpansionContext
from aleph_elixir.formatting import DEFAULT_INDENT_UNIT, comp_indent, gen_list_expr, gen_list_expr_sep


_INFIX_OPERATORS: dict[type[AlephNode], tuple[str, str, str]] = {
    And: ("bool_expr1", "and", "bool_expr2"),
    Or: ("bool_expr1", "or", "bool_expr2"),
    Add: ("number_expr1", "+", "number_expr2"),
    Sub: ("number_expr1", "-", "number_expr2"),
    Mul: ("number_expr1", "*", "number_expr2"),
    Div: ("number_expr1", "/", "number_expr2"),
    Eq: ("expr1", "==", "expr2"),
    LE: ("expr1", "<=", "expr2"),
}


class ElixirRenderer:
    """Renders nodes to Elixir text with a fixed indentation unit."""

    def __init__(self, indent_unit: str = DEFAULT_INDENT_UNIT) -> None:
        self._indent_unit = indent_unit

    def indent(self, depth: int) -> str:
        return comp_indent(depth, self._indent_unit)

    def render(self, node: AlephNode, depth: int = 0) -> str:
        """Render ``node`` at ``depth``; never raises for any node variant."""
        pad = self.indent(depth)

        if isinstance(node, Unit):
            return ""
        if isinstance(node, Break):
            return f"{pad}throw(:break)"
        if isinstance(node, Continue):
            return f"{pad}throw(:continue)"
        if isinstance(node, Ellipsis):
            return "..."

        if isinstance(node, (Int, Float, String, Ident)):
            return f"{pad}{node.value}"
        if isinstance(node, Bool):
            return f"{pad}{'true' if node.value == 'true' else 'false'}"
        if isinstance(node, Bytes):
            return f"{pad}<<{', '.join(str(byte) for byte in node.elems)}>>"
        if isinstance(node, Tuple):
            return f"{pad}{{{gen_list_expr_sep(node.elems, self.render, ', ')}}}"
        if isinstance(node, Array):
            return f"{pad}[{gen_list_expr_sep(node.elems, self.render, ', ')}]"

        if isinstance(node, Neg):
            return f"{pad}-{self.render(node.expr)}"
        if isinstance(node, Not):
            return f"{pad}not {self.render(node.bool_expr)}"
        operator = _INFIX_OPERATORS.get(type(node))
        if operator is not None:
            left_field, symbol, right_field = operator
            left = self.render(getattr(node, left_field))
            right = self.render(getattr(node, right_field))
            return f"{pad}{left} {symbol} {right}"
        if isinstance(node, In):
            return f"{pad}Enum.member?({self.render(node.expr2)}, {self.render(node.expr1)})"

        if isinstance(node, If):
            return self._render_if(node, depth)
        if isinstance(node, While):
            # Lossy: init/post expressions and loop state are not carried over.
            return (
                f"{pad}Stream.iterate(nil, fn _ -> if {self.render(node.condition)}, "
                f"do: {{:cont, {self.render(node.loop_expr)}}}, else: :halt end) |> Enum.to_list()"
            )
        if isinstance(node, Let):
            binding = f"{pad}{node.var} = {self.render(node.value)}"
            if isinstance(node.expr, Unit):
                return binding
            return f"{binding}\n{self.render(node.expr, depth)}"
        if isinstance(node, LetRec):
            args = gen_list_expr(node.args, self.render)
            return f"{pad}def {node.name}({args}) do\n{self.render(node.body, depth + 1)}\n{pad}end"

        if isinstance(node, Get):
            return f"{pad}Enum.at({node.array_name}, {self.render(node.elem)})"
        if isinstance(node, Put):
            helper = "List.insert_at" if node.insert else "List.replace_at"
            return f"{pad}{helper}({node.array_name}, {self.render(node.elem)}, {self.render(node.value)})"
        if isinstance(node, Remove):
            helper = "List.delete" if node.is_value else "List.delete_at"
            return f"{pad}{helper}({node.array_name}, {self.render(node.elem)})"
        if isinstance(node, Length):
            return f"{pad}length({node.var})"

        if isinstance(node, Match):
            arms = "\n".join(self.render(case, depth + 1) for case in node.case_list)
            return f"{pad}case {self.render(node.expr)} do\n{arms}\n{pad}end"
        if isinstance(node, MatchLine):
            return f"{pad}{self.render(node.condition)} -> {self.render(node.case_expr)}"

        if isinstance(node, Var):
            return f"{pad}{node.var}"
        if isinstance(node, App):
            args = gen_list_expr(node.param_list, self.render)
            callee = self.render(node.fun)
            if node.object_name:
                return f"{pad}{node.object_name}.{callee}({args})"
            return f"{pad}{callee}({args})"

        if isinstance(node, Stmts):
            return "\n".join(self.render(stmt, depth) for stmt in _flatten_stmts(node))
        if isinstance(node, Iprt):
            return f"{pad}import {node.name}"
        if isinstance(node, Return):
            return self.render(node.value, depth)
        if isinstance(node, (Comment, CommentMulti)):
            return f"{pad}#{node.value}"
        if isinstance(node, Assert):
            return f"{pad}if !({self.render(node.condition)}), do: raise({self.render(node.message)})"

        # Complex, Clss, Opaque and anything else: no Elixir equivalent.
        return ""

    def _render_if(self, node: If, depth: int) -> str:
        pad = self.indent(depth)
        branch_pad = self.indent(depth + 1)
        then_src = self.render(node.then, depth + 1).removeprefix(branch_pad)
        if isinstance(node.els, Unit):
            else_src = "nil"
        else:
            else_src = self.render(node.els, depth + 1).removeprefix(branch_pad)
        return (
            f"{pad}case {self.render(node.condition)} do\n"
            f"{branch_pad}true -> {then_src}\n"
            f"{branch_pad}false -> {else_src}\n"
            f"{pad}end"
        )


def _flatten_stmts(node: Stmts) -> list[AlephNode]:
    """Return the leaves of a ``Stmts`` tree in source order, iteratively."""
    leaves: list[AlephNode] = []
    stack: list[AlephNode] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Stmts):
            stack.append(current.expr2)
            stack.append(current.expr1)
        else:
            leaves.append(current)
    return leaves


class ElixirBackend(BackendEmitter):
    """Expands Aleph syntax trees into Elixir source."""

    @property
    def name(self) -> str:
        return "elixir"

    @property
    def file_extension(self) -> str:
        return "ex"

    def emit_module(self, program: AlephNode, context: ExpansionContext) -> str:
        return ElixirRenderer(context.indent_unit).render(program, 0)


def generate(ast: AlephNode) -> str:
    """Render a whole tree to Elixir source at depth 0."""
    return ElixirRenderer().render(ast, 0)
