"""Command line entry point: ``lang missing`` and ``lang unused``."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from . import __version__
from .config import load_config
from .errors import handle_errors
from .localization import AuditMode, render
from .scanner import ScanDriver
from .ui import Console


def setup_logging(debug: bool = False) -> None:
    """Configure structured logging on stderr; stdout carries the report."""
    level = logging.DEBUG if debug else logging.WARNING

    # Clear any existing handlers to prevent duplication
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            (
                structlog.dev.ConsoleRenderer(colors=False)
                if debug
                else structlog.processors.JSONRenderer()
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def _common_options() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--skip-json", action="store_true", help="Skip the {lang}.json catalog")
    common.add_argument(
        "--lang",
        dest="locale",
        metavar="LOCALE",
        help='The language to check the translations for. Default is "en"',
    )
    common.add_argument(
        "files",
        nargs="*",
        metavar="file",
        help="Resource groups to check instead of every file in lang/{locale}/",
    )
    common.add_argument("--debug", action="store_true", help="Enable debug logging")
    common.add_argument("--config-file", type=Path, help="YAML or JSON settings file")
    common.add_argument("--base-path", type=Path, help="Project root (default: current directory)")
    common.add_argument("--lang-path", type=Path, help="Locale directory relative to the project root")
    common.add_argument(
        "--scan-path",
        dest="scan_paths",
        action="append",
        type=Path,
        metavar="DIR",
        help="Directory to scan for usages; repeat to add more (default: app, resources/views)",
    )
    common.add_argument(
        "--pattern",
        dest="usage_patterns",
        action="append",
        metavar="REGEX",
        help="Usage regex with one capture group; repeat to add more (default: __('...'))",
    )
    common.add_argument("--workers", dest="max_workers", type=int, metavar="N", help="Worker pool size")
    common.add_argument(
        "--format",
        dest="output_format",
        choices=["text", "plain", "json"],
        help="Report format (default: text)",
    )
    return common


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="lang",
        description="Scan app and views folders for missing or unused translation keys.",
        epilog=(
            "Only literal keys passed to the configured call patterns are detected; "
            "keys built at runtime are invisible to the scan."
        ),
    )
    parser.add_argument("--version", action="version", version=f"lang-audit {__version__}")

    common = _common_options()
    commands = parser.add_subparsers(dest="command", metavar="command", required=True)
    commands.add_parser(
        AuditMode.MISSING.value,
        parents=[common],
        help="Keys used in code but absent from the language files",
    )
    commands.add_parser(
        AuditMode.UNUSED.value,
        parents=[common],
        help="Keys in the language files never used in code",
    )
    return parser.parse_args(argv)


@handle_errors(operation_name="lang_audit")
def run_audit(args: argparse.Namespace) -> int:
    """Run one audit command and print its report."""
    settings = load_config(
        args.config_file,
        base_path=args.base_path,
        lang_path=args.lang_path,
        scan_paths=args.scan_paths,
        usage_patterns=args.usage_patterns,
        max_workers=args.max_workers,
        default_locale=args.locale,
        output_format=args.output_format,
        debug=args.debug or None,
    )

    console = Console(sys.stdout, enabled=settings.output_format == "text")
    driver = ScanDriver(settings, console)
    report = driver.run(
        AuditMode(args.command),
        files=args.files,
        skip_json=args.skip_json,
    )

    console.new_line()
    output = render(report, settings.output_format)
    if output:
        print(output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.debug)
    return run_audit(args)


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
