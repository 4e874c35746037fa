"""Built-in backend emitters."""

from aleph_elixir.expanders.elixir_backend import ElixirBackend, ElixirRenderer, generate

__all__ = ["ElixirBackend", "ElixirRenderer", "generate"]
