"""Top-level orchestration: decode a syntax tree, pick a backend, emit code."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from aleph_elixir.ast import AlephNode, dropped_nodes, walk
from aleph_elixir.expanders.base import ExpansionContext
from aleph_elixir.formatting import DEFAULT_INDENT_UNIT
from aleph_elixir.plugin import PluginManager, load_plugins
from aleph_elixir.serialization import ast_from_json, ast_to_dict, read_ast, write_source


DEFAULT_TARGET = "elixir"


@dataclass
class CompileArtifacts:
    """Emission output plus tree statistics for debugging and tooling."""

    program: AlephNode
    target: str
    code: str
    node_count: int
    dropped: list[str] = field(default_factory=list)


def default_plugin_manager() -> PluginManager:
    """Create plugin manager with built-in backends."""
    manager = PluginManager()
    from aleph_elixir.expanders.elixir_backend import ElixirBackend

    manager.register_backend("elixir", ElixirBackend())
    return manager


def build_plugin_manager(plugin_specs: list[str] | None = None) -> PluginManager:
    """Create default plugin manager and apply plugin specs."""
    manager = default_plugin_manager()
    if plugin_specs:
        load_plugins(manager, plugin_specs)
    return manager


def compile_ast(
    program: AlephNode,
    *,
    target: str = DEFAULT_TARGET,
    plugin_manager: PluginManager | None = None,
    plugin_specs: list[str] | None = None,
    indent_unit: str = DEFAULT_INDENT_UNIT,
    debug: bool = False,
    filename: str = "<input>",
    output_path: str | Path | None = None,
) -> CompileArtifacts:
    """Emit an already-built syntax tree for one target."""
    manager = plugin_manager or build_plugin_manager(plugin_specs)
    backend = manager.get_backend(target)

    code = backend.emit_module(
        program,
        ExpansionContext(
            target=backend.name,
            debug=debug,
            indent_unit=indent_unit,
            metadata={"filename": filename},
        ),
    )

    if output_path is not None:
        write_source(code, output_path)

    return CompileArtifacts(
        program=program,
        target=target,
        code=code,
        node_count=sum(1 for _ in walk(program)),
        dropped=[_node_type_name(node) for node in dropped_nodes(program)],
    )


def compile_source(
    source: str,
    *,
    filename: str = "<input>",
    target: str = DEFAULT_TARGET,
    plugin_manager: PluginManager | None = None,
    plugin_specs: list[str] | None = None,
    indent_unit: str = DEFAULT_INDENT_UNIT,
    debug: bool = False,
    output_path: str | Path | None = None,
) -> CompileArtifacts:
    """Decode JSON syntax tree text and emit it for one target."""
    program = ast_from_json(source, filename=filename)
    return compile_ast(
        program,
        target=target,
        plugin_manager=plugin_manager,
        plugin_specs=plugin_specs,
        indent_unit=indent_unit,
        debug=debug,
        filename=filename,
        output_path=output_path,
    )


def compile_file(
    input_path: str | Path,
    *,
    target: str = DEFAULT_TARGET,
    output_path: str | Path | None = None,
    plugin_manager: PluginManager | None = None,
    plugin_specs: list[str] | None = None,
    indent_unit: str = DEFAULT_INDENT_UNIT,
    debug: bool = False,
) -> CompileArtifacts:
    """Compile a `.json` syntax tree file for one target."""
    path = Path(input_path)
    return compile_ast(
        read_ast(path),
        target=target,
        plugin_manager=plugin_manager,
        plugin_specs=plugin_specs,
        indent_unit=indent_unit,
        debug=debug,
        filename=str(path),
        output_path=output_path,
    )


def explain_source(source: str, *, filename: str = "<input>") -> dict[str, Any]:
    """Return a JSON-compatible description of a decoded syntax tree."""
    program = ast_from_json(source, filename=filename)
    return {
        "ast": ast_to_dict(program),
        "node_count": sum(1 for _ in walk(program)),
        "dropped": [_node_type_name(node) for node in dropped_nodes(program)],
    }


def _node_type_name(node: AlephNode) -> str:
    return getattr(node, "type_name", None) or node.tag


if __name__ == "__main__":
    from aleph_elixir.cli import run

    raise SystemExit(run())
