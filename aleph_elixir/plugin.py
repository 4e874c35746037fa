"""Backend registry and plugin loading."""

from __future__ import annotations

from abc import ABC, abstractmethod
import importlib
import inspect
from typing import Any

from aleph_elixir.errors import PluginError
from aleph_elixir.expanders.base import BackendEmitter


class BackendPlugin(ABC):
    """Factory plugin that provides backend emitters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable backend identifier used by CLI selection."""

    @abstractmethod
    def create_emitter(self) -> BackendEmitter:
        """Construct backend emitter instance."""


class PluginManager:
    """Registry of target backends."""

    def __init__(self) -> None:
        self._backends: dict[str, BackendEmitter] = {}

    def register_backend(self, name: str, emitter: BackendEmitter) -> None:
        """Register target backend emitter by name."""
        self._backends[name] = emitter

    def register_backend_plugin(self, plugin: BackendPlugin) -> None:
        """Register backend from backend plugin factory."""
        self.register_backend(plugin.name, plugin.create_emitter())

    def get_backend(self, name: str) -> BackendEmitter:
        """Resolve backend emitter by target name."""
        backend = self._backends.get(name)
        if backend is None:
            raise PluginError(
                code="PLG001",
                message=f"Unknown backend target '{name}'.",
                hint=f"Available targets: {', '.join(self.available_backends())}",
            )
        return backend

    def available_backends(self) -> list[str]:
        """List available backend names."""
        return sorted(self._backends.keys())


def load_plugin_spec(manager: PluginManager, spec: str) -> None:
    """Register the backends exported by ``module[:symbol]``.

    A bare module name, or an empty symbol, means the module's ``register``
    function. The export may be a ``BackendEmitter``, a ``BackendPlugin``, a
    collection of those, or a ``register(manager)`` function that registers
    backends itself or returns them.
    """
    _register_exports(manager, _resolve_plugin_target(spec), spec)


def load_plugins(manager: PluginManager, specs: list[str]) -> None:
    """Load a list of plugin specs into a manager."""
    for spec in specs:
        load_plugin_spec(manager, spec)


def _resolve_plugin_target(spec: str) -> Any:
    module_name, _, symbol_name = spec.partition(":")
    module_name = module_name.strip()
    symbol_name = symbol_name.strip() or "register"
    if not module_name:
        raise PluginError(
            code="PLG004",
            message="Plugin spec names no module.",
            hint="Use --plugin package.module or --plugin package.module:symbol",
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise PluginError(
            code="PLG005",
            message=f"Cannot import backend module '{module_name}': {exc}",
            hint="Ensure the module is on PYTHONPATH.",
        ) from exc

    if not hasattr(module, symbol_name):
        raise PluginError(
            code="PLG003",
            message=f"Module '{module_name}' has no attribute '{symbol_name}'.",
            hint="Export a backend, a backend plugin, or register(manager).",
        )
    return getattr(module, symbol_name)


def _register_exports(manager: PluginManager, obj: Any, spec: str) -> None:
    if isinstance(obj, BackendEmitter):
        manager.register_backend(obj.name, obj)
    elif isinstance(obj, BackendPlugin):
        manager.register_backend_plugin(obj)
    elif isinstance(obj, (list, tuple)):
        for item in obj:
            _register_exports(manager, item, spec)
    elif inspect.isfunction(obj) or inspect.ismethod(obj):
        _call_register(manager, obj, spec)
    else:
        raise PluginError(
            code="PLG006",
            message=f"'{spec}' exports a {type(obj).__name__}, not a backend.",
            hint="Export a BackendEmitter, a BackendPlugin, or register(manager).",
        )


def _call_register(manager: PluginManager, fn: Any, spec: str) -> None:
    params = [
        p for p in inspect.signature(fn).parameters.values() if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    if len(params) > 1:
        raise PluginError(
            code="PLG007",
            message=f"register function in '{spec}' takes {len(params)} arguments.",
            hint="Define register(manager) or a no-argument factory returning backends.",
        )

    try:
        result = fn(manager) if params else fn()
    except PluginError:
        raise
    except Exception as exc:
        raise PluginError(
            code="PLG008",
            message=f"register function in '{spec}' failed: {exc}",
        ) from exc

    if result is not None:
        _register_exports(manager, result, spec)
