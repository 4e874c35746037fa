"""Command-line interface for the aleph-elixir generator."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from aleph_elixir.errors import CLIError, CompilerError, Diagnostic, format_diagnostic
from aleph_elixir.main import DEFAULT_TARGET, build_plugin_manager, compile_source, explain_source
from aleph_elixir.serialization import write_source


def build_parser() -> argparse.ArgumentParser:
    """Build argparse command tree for the CLI."""
    parser = argparse.ArgumentParser(prog="aleph-elixir", description="Aleph syntax tree to Elixir generator")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser("compile", help="Generate target source from a JSON syntax tree")
    compile_parser.add_argument("input", nargs="?", help="Input .json syntax tree file")
    compile_parser.add_argument("--code", help="Inline JSON syntax tree")
    compile_parser.add_argument("--target", default=DEFAULT_TARGET, help="Target backend name (default: elixir)")
    compile_parser.add_argument(
        "--plugin",
        action="append",
        default=[],
        help="Plugin spec in module[:symbol] format; can be repeated.",
    )
    compile_parser.add_argument("-o", "--output", help="Output file path")
    compile_parser.add_argument("--indent", type=int, default=2, help="Spaces per indentation level")
    compile_parser.add_argument("--debug", action="store_true", help="Emit debug info to stderr")

    explain_parser = subparsers.add_parser("explain", help="Print the decoded syntax tree as JSON")
    explain_parser.add_argument("input", nargs="?", help="Input .json syntax tree file")
    explain_parser.add_argument("--code", help="Inline JSON syntax tree")

    targets_parser = subparsers.add_parser("targets", help="List available backends")
    targets_parser.add_argument(
        "--plugin",
        action="append",
        default=[],
        help="Plugin spec in module[:symbol] format; can be repeated.",
    )

    return parser


def run(argv: list[str] | None = None) -> int:
    """Run CLI and return shell exit code."""
    args = build_parser().parse_args(argv)

    try:
        if args.command == "compile":
            if args.indent < 0:
                raise argparse.ArgumentTypeError("--indent must not be negative.")
            source, filename = _resolve_source(args.input, args.code)
            manager = build_plugin_manager(args.plugin)
            artifacts = compile_source(
                source,
                filename=filename,
                target=args.target,
                plugin_manager=manager,
                indent_unit=" " * args.indent,
                debug=args.debug,
            )

            if args.debug:
                print(
                    f"debug: target={artifacts.target} nodes={artifacts.node_count} "
                    f"dropped={len(artifacts.dropped)}",
                    file=sys.stderr,
                )
                if artifacts.dropped:
                    print(f"debug: dropped_types={','.join(sorted(set(artifacts.dropped)))}", file=sys.stderr)

            if args.output:
                write_source(artifacts.code, args.output)
            else:
                sys.stdout.write(artifacts.code + "\n")
            return 0

        if args.command == "explain":
            source, filename = _resolve_source(args.input, args.code)
            payload = explain_source(source, filename=filename)
            print(json.dumps(payload, indent=2, sort_keys=True))
            return 0

        if args.command == "targets":
            manager = build_plugin_manager(args.plugin)
            for name in manager.available_backends():
                print(name)
            return 0

        raise argparse.ArgumentTypeError(f"Unsupported command '{args.command}'.")

    except CompilerError as err:
        diag = err.to_diagnostic()
        print(format_diagnostic(diag), file=sys.stderr)
        return 1
    except argparse.ArgumentTypeError as err:
        diag = Diagnostic(code="CLI001", message=str(err), hint="Run aleph-elixir --help for usage.")
        print(format_diagnostic(diag), file=sys.stderr)
        return 2
    except Exception as err:
        diag = Diagnostic(
            code="CLI999",
            message=f"Internal error ({type(err).__name__}): {err}",
            hint="Check how the input decodes with `aleph-elixir explain`, then report the input tree as a bug.",
        )
        print(format_diagnostic(diag), file=sys.stderr)
        return 3


def _resolve_source(input_path: str | None, inline_code: str | None) -> tuple[str, str]:
    if input_path and inline_code:
        raise argparse.ArgumentTypeError("Use either input file path or --code, not both.")
    if input_path:
        path = Path(input_path)
        try:
            return path.read_text(encoding="utf-8"), str(path)
        except OSError as exc:
            raise CLIError(
                code="CLI002",
                message=f"Cannot read input file: {exc.strerror or exc}",
                path=str(path),
            ) from exc
    if inline_code is not None:
        return inline_code, "<inline>"
    raise argparse.ArgumentTypeError("No source provided. Pass input file path or --code.")


if __name__ == "__main__":
    raise SystemExit(run())
