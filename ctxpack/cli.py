"""CLI entrypoints for ctxpack commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config, merge_options, split_patterns
from .constants import DEFAULT_OUTPUT_FILENAME
from .logging import configure_logging
from .packager import Packager

DEFAULT_RECENT_DAYS = 7


def _positive_int(value: str) -> int:
    try:
        number = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a positive number") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value!r} is not a positive number")
    return number


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Show skipped files and other diagnostics.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = None
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_log_file_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="Also write every diagnostic, verbose or not, to PATH.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ctxpack",
        description="Package a repository into a single Markdown context document.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    pack_parser = subparsers.add_parser(
        "pack",
        help="Package files and directories into one document.",
    )
    _add_verbose_option(pack_parser, suppress_default=True)
    _add_log_file_option(pack_parser)
    pack_parser.add_argument(
        "paths",
        nargs="+",
        help="Repositories, directories or files to package.",
    )
    pack_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help=f"Output file (default: {DEFAULT_OUTPUT_FILENAME}); use '-' for stdout.",
    )
    pack_parser.add_argument(
        "--include",
        default=None,
        help="Comma-separated glob patterns of files to include.",
    )
    pack_parser.add_argument(
        "--exclude",
        default=None,
        help="Comma-separated glob patterns of files to exclude.",
    )
    pack_parser.add_argument(
        "--tokens",
        action="store_true",
        default=None,
        help="Report the estimated token count.",
    )
    pack_parser.add_argument(
        "--max-file-size",
        type=_positive_int,
        default=None,
        metavar="BYTES",
        help="Skip files larger than this many bytes.",
    )
    pack_parser.add_argument(
        "--max-tokens",
        type=_positive_int,
        default=None,
        metavar="COUNT",
        help="Stop adding files once the estimated tokens would exceed COUNT.",
    )
    pack_parser.add_argument(
        "--summary",
        action="store_true",
        default=None,
        help="Show signatures and imports instead of full file contents.",
    )
    pack_parser.add_argument(
        "--recent",
        type=_positive_int,
        nargs="?",
        const=DEFAULT_RECENT_DAYS,
        default=None,
        metavar="DAYS",
        help=f"Only include files modified in the last DAYS days (default: {DEFAULT_RECENT_DAYS}).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_log_file_option(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for ctxpack commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        _configure_logging(parser, verbose=bool(args.verbose), log_file=args.log_file)
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    try:
        config = load_config(Path.cwd())
    except ConfigError as exc:
        parser.exit(1, f"Error: {exc}\n")

    options = merge_options(
        config,
        include=split_patterns(args.include),
        exclude=split_patterns(args.exclude),
        tokens=args.tokens,
        max_file_size=args.max_file_size,
        max_tokens=args.max_tokens,
        summary=args.summary,
        recent=args.recent,
        verbose=args.verbose,
    )
    log_file = args.log_file or (Path(config.log_file) if config.log_file else None)
    _configure_logging(parser, verbose=options.verbose, log_file=log_file)

    output = args.output or config.output or DEFAULT_OUTPUT_FILENAME
    to_stdout = output == "-"
    output_path = Path(output)
    if not to_stdout and not output_path.resolve().parent.is_dir():
        parser.exit(1, f"Error: Output directory '{output_path.parent}' does not exist\n")

    packager = Packager(args.paths, options)
    try:
        result = packager.analyze()
        document = packager.generate(result)
        if to_stdout:
            sys.stdout.write(document)
            return
        output_path.write_text(document, encoding="utf-8")
    except OSError as exc:
        parser.exit(1, f"Error: {exc}\n")

    stats = result.statistics
    print(f"Found {stats.total_files} files ({stats.total_lines} total lines)")
    if options.tokens:
        print(f"Estimated tokens: {stats.total_tokens}")
    print(f"Repository context packaged to {_relativize(output_path.resolve())}")


def _configure_logging(
    parser: argparse.ArgumentParser, *, verbose: bool, log_file: Path | None
) -> None:
    try:
        configure_logging(verbose=verbose, log_file=log_file)
    except OSError as exc:
        parser.exit(1, f"Error: Cannot open log file '{log_file}': {exc}\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
