"""Aleph syntax tree to Elixir code generator."""

from __future__ import annotations

from typing import Any


__all__ = [
    "build_plugin_manager",
    "CompileArtifacts",
    "compile_ast",
    "compile_file",
    "compile_source",
    "explain_source",
    "generate",
]


def generate(*args: Any, **kwargs: Any):
    from aleph_elixir.expanders.elixir_backend import generate as _generate

    return _generate(*args, **kwargs)


def build_plugin_manager(*args: Any, **kwargs: Any):
    from aleph_elixir.main import build_plugin_manager as _build_plugin_manager

    return _build_plugin_manager(*args, **kwargs)


def compile_ast(*args: Any, **kwargs: Any):
    from aleph_elixir.main import compile_ast as _compile_ast

    return _compile_ast(*args, **kwargs)


def compile_source(*args: Any, **kwargs: Any):
    from aleph_elixir.main import compile_source as _compile_source

    return _compile_source(*args, **kwargs)


def compile_file(*args: Any, **kwargs: Any):
    from aleph_elixir.main import compile_file as _compile_file

    return _compile_file(*args, **kwargs)


def explain_source(*args: Any, **kwargs: Any):
    from aleph_elixir.main import explain_source as _explain_source

    return _explain_source(*args, **kwargs)


def __getattr__(name: str):
    if name == "CompileArtifacts":
        from aleph_elixir.main import CompileArtifacts

        return CompileArtifacts
    raise AttributeError(name)
