"""CLI entrypoints for htmlimport2esm commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .migrator import MigrationReport, Migrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write log output to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="htmlimport2esm",
        description="Rewrite legacy HTML-import web components into ES modules.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert every component pair under a directory (or a single file).",
    )
    _add_verbose_option(convert_parser, suppress_default=True)
    _add_log_file_option(convert_parser, suppress_default=True)
    convert_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory or component file to convert (defaults to current directory).",
    )
    convert_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the rewritten modules as diffs without touching any file.",
    )
    convert_parser.add_argument(
        "--library-segment",
        default=None,
        help="Path segment naming the shared library root (overrides config, default 'lib').",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP conversion service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_log_file_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for htmlimport2esm commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "convert":
        migrator = Migrator(library_segment=args.library_segment)
        try:
            report = migrator.run(args.path, dry_run=bool(args.dry_run))
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        _print_report(report)
        if not report.success:
            parser.exit(1)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _print_report(report: MigrationReport) -> None:
    if report.dry_run:
        for outcome in report.converted:
            print(outcome.diff or f"(no changes for {_relativize(outcome.pair.target_path)})")
    for outcome in report.failed:
        reason = outcome.result.reason.value if outcome.result.reason else "Unknown"
        print(f"FAILED {_relativize(outcome.pair.target_path)}: {reason} ({outcome.result.message})")
    suffix = " (dry-run)" if report.dry_run else ""
    print(f"Converted {len(report.converted)} of {len(report.outcomes)} component(s){suffix}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
