"""JSON interchange for Aleph syntax trees and emitted source.

Nodes are encoded as objects tagged with a ``"type"`` key naming the variant,
the remaining keys being the variant's fields. Unknown tags decode to
:class:`~aleph_elixir.ast.Opaque` so newer producers do not break decoding.
"""

from __future__ import annotations

from dataclasses import MISSING, fields
import json
import math
from pathlib import Path
from typing import Any

from aleph_elixir.ast import NODE_TYPES, AlephNode, Flag, Float, Opaque
from aleph_elixir.errors import AstDecodeError


def ast_from_json(payload: str, *, filename: str = "<input>") -> AlephNode:
    """Deserialize a syntax tree from JSON text."""
    try:
        return ast_from_dict(json.loads(payload))
    except json.JSONDecodeError as exc:
        raise AstDecodeError(
            code="AST001",
            message=f"Invalid JSON: {exc.msg}",
            path=f"{filename}:{exc.lineno}:{exc.colno}",
            hint="The input must be a JSON-serialized Aleph syntax tree.",
        ) from exc
    except RecursionError as exc:
        # Both json.loads and ast_from_dict recurse once per nesting level.
        raise AstDecodeError(
            code="AST006",
            message="Syntax tree is nested too deeply to decode.",
            path=filename,
            hint="Split very long statement chains, or build the tree in memory and call compile_ast.",
        ) from exc


def ast_from_dict(data: Any, path: str = "$") -> AlephNode:
    """Build a node from its decoded JSON mapping."""
    if not isinstance(data, dict):
        raise AstDecodeError(
            code="AST002",
            message=f"Expected a node object, got {type(data).__name__}.",
            path=path,
        )
    type_name = data.get("type")
    if not isinstance(type_name, str):
        raise AstDecodeError(
            code="AST002",
            message="Node object has no string 'type' tag.",
            path=path,
            hint='Tag every node, e.g. {"type": "Int", "value": "1"}.',
        )

    cls = NODE_TYPES.get(type_name)
    if cls is None:
        return Opaque(type_name=type_name, payload={k: v for k, v in data.items() if k != "type"})

    kwargs: dict[str, Any] = {}
    for item in fields(cls):
        if item.name not in data:
            if item.default is MISSING and item.default_factory is MISSING:
                raise AstDecodeError(
                    code="AST003",
                    message=f"{type_name} node is missing field '{item.name}'.",
                    path=path,
                )
            continue
        if cls is Float and item.name == "value":
            kwargs[item.name] = _decode_float_text(data[item.name], f"{path}.value")
            continue
        kwargs[item.name] = _decode_field(item.type, data[item.name], f"{path}.{item.name}")
    return cls(**kwargs)


def _decode_field(kind: str, value: Any, path: str) -> Any:
    if kind == "AlephNode":
        return ast_from_dict(value, path)
    if kind == "Flag":
        return Flag.parse(value)
    if kind == "str":
        return _decode_text(value, path)

    if not isinstance(value, list):
        raise AstDecodeError(code="AST004", message=f"Expected an array, got {type(value).__name__}.", path=path)
    if kind == "list[AlephNode]":
        return [ast_from_dict(elem, f"{path}[{index}]") for index, elem in enumerate(value)]
    if kind == "list[int]":
        return [_decode_byte(elem, f"{path}[{index}]") for index, elem in enumerate(value)]
    return [_decode_text(elem, f"{path}[{index}]") for index, elem in enumerate(value)]


def _decode_text(value: Any, path: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise AstDecodeError(code="AST004", message=f"Expected text, got {type(value).__name__}.", path=path)


def _decode_float_text(value: Any, path: str) -> str:
    """Turn a Float literal into Elixir float syntax (``1.0``, ``1.0e20``)."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise AstDecodeError(code="AST004", message=f"Expected a float, got {type(value).__name__}.", path=path)
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise AstDecodeError(
            code="AST004",
            message="Float value is not finite and has no Elixir literal.",
            path=path,
            hint="Give non-finite floats as text if the target program defines them.",
        )
    mantissa, _, exponent = repr(number).partition("e")
    if "." not in mantissa:
        mantissa += ".0"
    return f"{mantissa}e{int(exponent)}" if exponent else mantissa


def _decode_byte(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise AstDecodeError(code="AST004", message=f"Expected a byte, got {type(value).__name__}.", path=path)
    if not 0 <= value <= 255:
        raise AstDecodeError(code="AST005", message=f"Byte value {value} is out of range 0..255.", path=path)
    return value


def ast_to_dict(node: AlephNode) -> dict[str, Any]:
    """Serialize a node recursively into a JSON-compatible mapping."""
    if isinstance(node, Opaque):
        return {"type": node.type_name, **node.payload}
    payload: dict[str, Any] = {"type": node.tag}
    for item in fields(node):
        payload[item.name] = _encode_value(getattr(node, item.name))
    return payload


def _encode_value(value: Any) -> Any:
    if isinstance(value, AlephNode):
        return ast_to_dict(value)
    if isinstance(value, Flag):
        return value.value
    if isinstance(value, list):
        return [_encode_value(elem) for elem in value]
    return value


def ast_to_json(node: AlephNode, indent: int = 2) -> str:
    """Serialize a syntax tree to JSON text."""
    return json.dumps(ast_to_dict(node), indent=indent, sort_keys=True)


def read_ast(path: str | Path) -> AlephNode:
    """Read and decode a JSON syntax tree file."""
    source = Path(path)
    return ast_from_json(source.read_text(encoding="utf-8"), filename=str(source))


def write_source(code: str, path: str | Path) -> None:
    """Write emitted code to path, terminated by a newline."""
    target = Path(path)
    text = code if code.endswith("\n") else code + "\n"
    target.write_text(text, encoding="utf-8")
