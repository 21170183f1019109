"""
Command-line interface for Europass CV.

Provides the `europass-cv` command with the following subcommands:
- build: Render CV configs to PDF (or HTML), or collect one interactively
- validate: Check CV config files against the schema
- init: Write a sample europass_cv.toml
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .assets import check_assets
from .dictionary import SUPPORTED_LANGUAGES
from .errors import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    EuropassCVError,
)
from .generator import generate_cv, generate_cvs
from .io import load_cv_config, save_cv_config
from .logging_config import get_log_level_from_name, setup_logging
from .prompts import collect_config
from .settings import DEFAULT_SETTINGS_NAME, Settings, load_settings, write_sample_settings
from .validate_schema import ValidationIssue, validate_cv_file

logger = logging.getLogger(__name__)


def build_command(args: argparse.Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code.
    """
    settings = getattr(args, "_settings", None) or Settings()
    config_files = [Path(p) for p in (args.config or [])]
    out = Path(args.out) if args.out else None
    draft = True if args.draft else None

    if len(config_files) > 1 and out is not None:
        logger.error("--out cannot be used with more than one --config; set outputPdf in each file")
        return EXIT_CONFIG_ERROR

    if args.draft:
        logger.info("Draft watermark enabled")
    if args.html_only:
        logger.info("HTML only: the PDF backend will not be started")

    if not config_files:
        try:
            config = collect_config()
            save_cv_config(config, Path(args.save_config or settings.output.config))
        except EuropassCVError as e:
            logger.error(str(e))
            return e.exit_code
        except KeyboardInterrupt:
            logger.error("Cancelled")
            return EXIT_ERROR
        results = [generate_cv(
            config=config,
            output_path=out,
            settings=settings,
            logo_path=args.logo,
            lang=args.lang,
            draft=draft,
            html_only=args.html_only,
        )]
    elif len(config_files) == 1:
        results = [generate_cv(
            config_files[0],
            output_path=out,
            settings=settings,
            logo_path=args.logo,
            lang=args.lang,
            draft=draft,
            html_only=args.html_only,
        )]
    else:
        results = generate_cvs(
            config_files,
            settings=settings,
            logo_path=args.logo,
            lang=args.lang,
            draft=draft,
            html_only=args.html_only,
        )

    for result in results:
        if result.success:
            print(f"✅ {result.pdf_path or result.html_path}")
        else:
            print(f"❌ {result.name}: {result.error}")

    failed = [r for r in results if not r.success]
    return failed[0].exit_code if failed else EXIT_SUCCESS


def validate_command(args: argparse.Namespace) -> int:
    """
    Execute the validate command.

    Schema problems and missing images are reported for every file; the
    exit code is non-zero if any file has errors.
    """
    reports = []
    for file_arg in args.files:
        file_path = Path(file_arg)
        report = validate_cv_file(file_path, strict=args.strict)
        if report.is_valid:
            config = load_cv_config(file_path)
            for asset in check_assets(config):
                report.add_issue(ValidationIssue(
                    path="$",
                    message=f"Image not found: {asset.path} ({asset.error})",
                    severity="warning",
                ))
        reports.append(report)

    if args.format == "json":
        print(json.dumps([r.to_dict() for r in reports], indent=2, ensure_ascii=False))
    else:
        for report in reports:
            print(report.format_text())
            print()

    return EXIT_SUCCESS if all(r.is_valid for r in reports) else EXIT_VALIDATION_ERROR


def init_command(args: argparse.Namespace) -> int:
    """Execute the init command."""
    try:
        path = write_sample_settings(Path(args.path), force=args.force)
    except EuropassCVError as e:
        logger.error(str(e))
        return e.exit_code
    print(f"✅ Settings written to {path}")
    return EXIT_SUCCESS


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="europass-cv",
        description="Generate Europass-style PDF CVs from JSON configs.",
        epilog="Example: europass-cv build --config configs/cv-config.json --lang EN",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"europass-cv {__version__}"
    )

    # Global options
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output (INFO level logging)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output (DEBUG level logging)"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress output except errors"
    )
    parser.add_argument(
        "--settings", "-s",
        type=str,
        dest="settings_file",
        help=f"Path to settings file (default: {DEFAULT_SETTINGS_NAME})"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands"
    )

    # Build command
    build_parser = subparsers.add_parser(
        "build",
        help="Render CV configs to PDF",
        description="Render CV configs to PDF. Without --config, asks for the CV interactively."
    )
    build_parser.add_argument(
        "--config", "-c",
        action="append",
        metavar="FILE",
        help="CV config JSON (repeat to build several CVs)"
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        help="Output PDF path (default: outputPdf from the config, then settings)"
    )
    build_parser.add_argument(
        "--save-config",
        type=str,
        help="Where to save an interactively collected config"
    )
    build_parser.add_argument(
        "--logo",
        type=str,
        help="Logo image (overrides logoPath)"
    )
    build_parser.add_argument(
        "--lang", "-l",
        type=str.upper,
        choices=SUPPORTED_LANGUAGES,
        help="Label language (default: settings, then PT)"
    )
    build_parser.add_argument(
        "--draft",
        action="store_true",
        help="Overlay a DRAFT watermark"
    )
    build_parser.add_argument(
        "--html-only",
        action="store_true",
        help="Write the HTML document instead of printing a PDF"
    )
    build_parser.set_defaults(func=build_command)

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Check CV config files",
        description="Check CV config files against the schema and look for missing images."
    )
    validate_parser.add_argument(
        "files",
        nargs="+",
        help="CV config JSON files"
    )
    validate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat every schema issue as an error"
    )
    validate_parser.add_argument(
        "--format", "-f",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )
    validate_parser.set_defaults(func=validate_command)

    # Init command
    init_parser = subparsers.add_parser(
        "init",
        help="Write a sample settings file",
        description="Write a commented europass_cv.toml."
    )
    init_parser.add_argument(
        "path",
        nargs="?",
        default=DEFAULT_SETTINGS_NAME,
        help=f"Settings file to create (default: {DEFAULT_SETTINGS_NAME})"
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing file"
    )
    init_parser.set_defaults(func=init_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv).

    Returns:
        Exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, debug=args.debug, quiet=args.quiet)

    settings_path = Path(args.settings_file) if args.settings_file else None
    try:
        settings = load_settings(settings_path)
    except EuropassCVError as e:
        logger.error(f"Settings error: {e}")
        print(f"❌ Settings error: {e}")
        return EXIT_CONFIG_ERROR

    if settings.settings_path is not None:
        log_file = Path(settings.logging.log_file) if settings.logging.log_file else None
        setup_logging(
            verbose=args.verbose,
            debug=args.debug,
            quiet=args.quiet,
            log_file=log_file,
            default_level=get_log_level_from_name(settings.logging.level),
        )

    # If no command specified, default to 'build'
    if not args.command:
        args = parser.parse_args(list(argv if argv is not None else sys.argv[1:]) + ["build"])

    args._settings = settings

    if hasattr(args, "func"):
        return args.func(args)
    parser.print_help()
    return EXIT_SUCCESS


def main_cli() -> None:
    """
    CLI entry point for console_scripts.

    Calls main() and exits with the returned code.
    """
    sys.exit(main())


if __name__ == "__main__":
    main_cli()
