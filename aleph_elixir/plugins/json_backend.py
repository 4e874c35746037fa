"""Backend plugin that re-emits the decoded tree as normalized JSON."""

from __future__ import annotations

from aleph_elixir.ast import AlephNode
from aleph_elixir.expanders.base import BackendEmitter, ExpansionContext
from aleph_elixir.plugin import BackendPlugin, PluginManager
from aleph_elixir.serialization import ast_to_json


class JsonBackend(BackendEmitter):
    """Emits the tree with sorted keys and canonical flag text."""

    @property
    def name(self) -> str:
        return "json"

    @property
    def file_extension(self) -> str:
        return "json"

    def emit_module(self, program: AlephNode, context: ExpansionContext) -> str:
        return ast_to_json(program, indent=len(context.indent_unit))


class JsonBackendPlugin(BackendPlugin):
    @property
    def name(self) -> str:
        return "json"

    def create_emitter(self) -> BackendEmitter:
        return JsonBackend()


def register(manager: PluginManager) -> None:
    """Register the JSON backend into a plugin manager."""
    manager.register_backend_plugin(JsonBackendPlugin())
