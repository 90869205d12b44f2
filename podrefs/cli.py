"""CLI entrypoints for podrefs commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .builder import build_installation
from .config import ConfigError, load_config
from .headers import MissingInputError
from .logging import configure_logging
from .project import ProjectModelError


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


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="podrefs",
        description="Add pod files to the generated project and compute header search paths.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    install_parser = subparsers.add_parser(
        "install",
        help="Install the file references described by a .podrefs.yml manifest.",
    )
    _add_verbose_option(install_parser, suppress_default=True)
    install_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Manifest file or directory containing .podrefs.yml (defaults to current directory).",
    )
    install_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the resulting groups and header mappings as JSON.",
    )
    install_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Compute header mappings with this many worker threads.",
    )
    install_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records, including DEBUG details when verbose, to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for podrefs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    if args.command == "install":
        try:
            installation = build_installation(load_config(Path(args.path)))
            report = installation.installer(max_workers=args.workers).install()
        except (FileNotFoundError, ConfigError) as exc:
            parser.exit(1, f"{exc}\n")
        except (MissingInputError, ProjectModelError) as exc:
            parser.exit(1, f"podrefs install failed: {exc}\nRun with --verbose for more details.\n")

        if args.json:
            print(json.dumps(installation.layout(report), indent=2))
            return
        print(
            f"Installed {report.file_references} file reference(s), "
            f"{report.build_headers} build header link(s), "
            f"{report.public_headers} public header link(s)"
        )
        for collision in report.collisions:
            print(f"warning: {collision}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
