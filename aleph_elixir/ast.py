"""AST model for Aleph syntax trees.

Every variant is a dataclass whose ``tag`` matches the ``"type"`` discriminator
used by the JSON interchange format, and whose field names match that format's
keys. The tree is strict: each child belongs to exactly one parent.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Iterator


class Flag(Enum):
    """Two-valued discriminator carried as ``"true"``/``"false"`` text on the wire."""

    TRUE = "true"
    FALSE = "false"

    @classmethod
    def parse(cls, value: Any) -> Flag:
        """Only the exact text ``"true"`` (or ``True``) is truthy."""
        if isinstance(value, Flag):
            return value
        if value is True or value == "true":
            return cls.TRUE
        return cls.FALSE

    def __bool__(self) -> bool:
        return self is Flag.TRUE


@dataclass
class AlephNode:
    """Base class for all AST variants."""

    tag: ClassVar[str] = ""


@dataclass
class Unit(AlephNode):
    """Empty node; also marks an absent else-branch or trailing expression."""

    tag: ClassVar[str] = "Unit"


@dataclass
class Break(AlephNode):
    tag: ClassVar[str] = "Break"


@dataclass
class Continue(AlephNode):
    tag: ClassVar[str] = "Continue"


@dataclass
class Ellipsis(AlephNode):
    tag: ClassVar[str] = "Ellipsis"


@dataclass
class Int(AlephNode):
    """Integer literal kept as source text."""

    tag: ClassVar[str] = "Int"
    value: str


@dataclass
class Float(AlephNode):
    """Float literal kept as source text."""

    tag: ClassVar[str] = "Float"
    value: str


@dataclass
class Bool(AlephNode):
    """Boolean literal; any text other than ``"true"`` means false."""

    tag: ClassVar[str] = "Bool"
    value: str


@dataclass
class String(AlephNode):
    """String literal, quotes included in ``value``."""

    tag: ClassVar[str] = "String"
    value: str


@dataclass
class Ident(AlephNode):
    tag: ClassVar[str] = "Ident"
    value: str


@dataclass
class Bytes(AlephNode):
    tag: ClassVar[str] = "Bytes"
    elems: list[int] = field(default_factory=list)


@dataclass
class Complex(AlephNode):
    tag: ClassVar[str] = "Complex"
    real: str
    imag: str


@dataclass
class Tuple(AlephNode):
    tag: ClassVar[str] = "Tuple"
    elems: list[AlephNode] = field(default_factory=list)


@dataclass
class Array(AlephNode):
    tag: ClassVar[str] = "Array"
    elems: list[AlephNode] = field(default_factory=list)


@dataclass
class Neg(AlephNode):
    tag: ClassVar[str] = "Neg"
    expr: AlephNode


@dataclass
class Not(AlephNode):
    tag: ClassVar[str] = "Not"
    bool_expr: AlephNode


@dataclass
class And(AlephNode):
    tag: ClassVar[str] = "And"
    bool_expr1: AlephNode
    bool_expr2: AlephNode


@dataclass
class Or(AlephNode):
    tag: ClassVar[str] = "Or"
    bool_expr1: AlephNode
    bool_expr2: AlephNode


@dataclass
class Add(AlephNode):
    tag: ClassVar[str] = "Add"
    number_expr1: AlephNode
    number_expr2: AlephNode


@dataclass
class Sub(AlephNode):
    tag: ClassVar[str] = "Sub"
    number_expr1: AlephNode
    number_expr2: AlephNode


@dataclass
class Mul(AlephNode):
    tag: ClassVar[str] = "Mul"
    number_expr1: AlephNode
    number_expr2: AlephNode


@dataclass
class Div(AlephNode):
    tag: ClassVar[str] = "Div"
    number_expr1: AlephNode
    number_expr2: AlephNode


@dataclass
class Eq(AlephNode):
    tag: ClassVar[str] = "Eq"
    expr1: AlephNode
    expr2: AlephNode


@dataclass
class LE(AlephNode):
    tag: ClassVar[str] = "LE"
    expr1: AlephNode
    expr2: AlephNode


@dataclass
class In(AlephNode):
    """Membership test: ``expr1`` (needle) in ``expr2`` (haystack)."""

    tag: ClassVar[str] = "In"
    expr1: AlephNode
    expr2: AlephNode


@dataclass
class If(AlephNode):
    """Conditional with a ``Unit`` else-branch when absent."""

    tag: ClassVar[str] = "If"
    condition: AlephNode
    then: AlephNode
    els: AlephNode = field(default_factory=Unit)


@dataclass
class While(AlephNode):
    tag: ClassVar[str] = "While"
    condition: AlephNode
    loop_expr: AlephNode
    init_expr: AlephNode = field(default_factory=Unit)
    post_expr: AlephNode = field(default_factory=Unit)


@dataclass
class Let(AlephNode):
    """Binding of ``var`` to ``value``, followed by ``expr`` in the same scope."""

    tag: ClassVar[str] = "Let"
    var: str
    value: AlephNode
    expr: AlephNode = field(default_factory=Unit)
    is_pointer: Flag = Flag.FALSE

    def __post_init__(self) -> None:
        self.is_pointer = Flag.parse(self.is_pointer)


@dataclass
class LetRec(AlephNode):
    """Named function definition."""

    tag: ClassVar[str] = "LetRec"
    name: str
    args: list[AlephNode]
    body: AlephNode


@dataclass
class Get(AlephNode):
    tag: ClassVar[str] = "Get"
    array_name: str
    elem: AlephNode


@dataclass
class Put(AlephNode):
    """Indexed write; ``insert`` selects insertion over replacement."""

    tag: ClassVar[str] = "Put"
    array_name: str
    elem: AlephNode
    value: AlephNode
    insert: Flag = Flag.FALSE

    def __post_init__(self) -> None:
        self.insert = Flag.parse(self.insert)


@dataclass
class Remove(AlephNode):
    """Indexed delete; ``is_value`` deletes by value instead of by index."""

    tag: ClassVar[str] = "Remove"
    array_name: str
    elem: AlephNode
    is_value: Flag = Flag.FALSE

    def __post_init__(self) -> None:
        self.is_value = Flag.parse(self.is_value)


@dataclass
class Length(AlephNode):
    tag: ClassVar[str] = "Length"
    var: str


@dataclass
class Match(AlephNode):
    tag: ClassVar[str] = "Match"
    expr: AlephNode
    case_list: list[AlephNode] = field(default_factory=list)


@dataclass
class MatchLine(AlephNode):
    tag: ClassVar[str] = "MatchLine"
    condition: AlephNode
    case_expr: AlephNode


@dataclass
class Var(AlephNode):
    tag: ClassVar[str] = "Var"
    var: str
    is_pointer: Flag = Flag.FALSE

    def __post_init__(self) -> None:
        self.is_pointer = Flag.parse(self.is_pointer)


@dataclass
class App(AlephNode):
    """Function application, optionally on a receiver named ``object_name``."""

    tag: ClassVar[str] = "App"
    fun: AlephNode
    param_list: list[AlephNode] = field(default_factory=list)
    object_name: str = ""


@dataclass
class Stmts(AlephNode):
    tag: ClassVar[str] = "Stmts"
    expr1: AlephNode
    expr2: AlephNode


@dataclass
class Iprt(AlephNode):
    tag: ClassVar[str] = "Iprt"
    name: str


@dataclass
class Clss(AlephNode):
    tag: ClassVar[str] = "Clss"
    name: str
    attribute_list: list[str] = field(default_factory=list)
    body: AlephNode = field(default_factory=Unit)


@dataclass
class Return(AlephNode):
    tag: ClassVar[str] = "Return"
    value: AlephNode


@dataclass
class Comment(AlephNode):
    tag: ClassVar[str] = "Comment"
    value: str


@dataclass
class CommentMulti(AlephNode):
    tag: ClassVar[str] = "CommentMulti"
    value: str


@dataclass
class Assert(AlephNode):
    tag: ClassVar[str] = "Assert"
    condition: AlephNode
    message: AlephNode


@dataclass
class Opaque(AlephNode):
    """Node of a variant this package does not know; kept as raw JSON payload."""

    tag: ClassVar[str] = "Opaque"
    type_name: str
    payload: dict[str, Any] = field(default_factory=dict)


NODE_TYPES: dict[str, type[AlephNode]] = {
    cls.tag: cls
    for cls in (
        Unit, Break, Continue, Ellipsis, Int, Float, Bool, String, Ident, Bytes,
        Complex, Tuple, Array, Neg, Not, And, Or, Add, Sub, Mul, Div, Eq, LE, In,
        If, While, Let, LetRec, Get, Put, Remove, Length, Match, MatchLine, Var,
        App, Stmts, Iprt, Clss, Return, Comment, CommentMulti, Assert,
    )
}

# Variants the Elixir backend has no rendering for.
DROPPED_TYPES: tuple[type[AlephNode], ...] = (Complex, Clss, Opaque)


def iter_children(node: AlephNode) -> Iterator[AlephNode]:
    """Yield direct child nodes in field order."""
    for item in fields(node):
        value = getattr(node, item.name)
        if isinstance(value, AlephNode):
            yield value
        elif isinstance(value, list):
            for elem in value:
                if isinstance(elem, AlephNode):
                    yield elem


def walk(node: AlephNode) -> Iterator[AlephNode]:
    """Pre-order traversal over a whole tree without recursion."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_children(current))))


def dropped_nodes(node: AlephNode) -> list[AlephNode]:
    """Return nodes that no backend rendering rule covers, in pre-order."""
    return [item for item in walk(node) if isinstance(item, DROPPED_TYPES)]
