"""Structured diagnostics and exception hierarchy for aleph-elixir."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Diagnostic:
    """Machine-readable diagnostic emitted by pipeline stages."""

    code: str
    message: str
    path: str | None = None
    hint: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize the diagnostic for JSON output."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "hint": self.hint,
        }
        if self.path is not None:
            payload["path"] = self.path
        return payload


class CompilerError(Exception):
    """Base error carrying a code and an optional location inside the AST document."""

    def __init__(self, code: str, message: str, path: str | None = None, hint: str = "") -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.path = path
        self.hint = hint

    def to_diagnostic(self) -> Diagnostic:
        """Convert exception into serializable diagnostic."""
        return Diagnostic(code=self.code, message=self.message, path=self.path, hint=self.hint)

    def __str__(self) -> str:
        if self.path is None:
            return f"[{self.code}] {self.message}"
        return f"[{self.code}] {self.message} (at {self.path})"


class AstDecodeError(CompilerError):
    """Raised when a serialized AST document cannot be turned into nodes."""


class PluginError(CompilerError):
    """Raised by backend registry and plugin loading failures."""


class CLIError(CompilerError):
    """Raised by CLI usage or orchestration failures."""


def format_diagnostic(diag: Diagnostic) -> str:
    """Format diagnostic into a stable human-readable line."""
    suffix = "" if diag.path is None else f" {diag.path}"
    hint = f" Hint: {diag.hint}" if diag.hint else ""
    return f"{diag.code}{suffix}: {diag.message}{hint}"
