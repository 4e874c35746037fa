"""Base abstractions for target language expanders."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from aleph_elixir.ast import AlephNode
from aleph_elixir.formatting import DEFAULT_INDENT_UNIT


@dataclass
class ExpansionContext:
    """Emission settings passed into backend emitters."""

    target: str
    debug: bool = False
    indent_unit: str = DEFAULT_INDENT_UNIT
    metadata: dict[str, Any] | None = None


class BackendEmitter(ABC):
    """Abstract target language backend contract."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend target name."""

    @property
    def file_extension(self) -> str:
        """Extension used when writing emitted modules."""
        return "txt"

    @abstractmethod
    def emit_module(self, program: AlephNode, context: ExpansionContext) -> str:
        """Emit source text for a whole syntax tree."""
