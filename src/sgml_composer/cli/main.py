"""Main CLI entry point for the sgml-compose command-line tool.

Renders JSON tree descriptions into markup, either minimized or indented,
writing the result to stdout or to a file.
"""

import argparse
import json
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from sgml_composer import __version__
from sgml_composer.markup import DescriptionError, build_node
from sgml_composer.shared.config import ComposerConfig, ConfigValidationError
from sgml_composer.shared.logging import configure_logging, get_logger


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.composer_config = ComposerConfig()
        self.minimize: Optional[bool] = None  # None defers to the render config
        self.verbose = False
        self.quiet = False

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a composer configuration JSON file.

        Raises:
            ConfigValidationError: If the file cannot be read or is invalid
        """
        config = cls()
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigValidationError(f"Could not read config file: {e}") from e
        config.composer_config = ComposerConfig.from_json(text)
        return config


class DocumentRenderer:
    """Core rendering logic for CLI operations."""

    def __init__(self, config: CLIConfig):
        self.config = config

    def render_file(self, file_path: Path) -> Dict[str, Any]:
        """Render one description file and report the outcome.

        With correlation tracking enabled every file gets its own correlation
        ID, attached to the records logged for it.
        """
        render_config = self.config.composer_config.render
        correlation_id = (
            uuid.uuid4().hex
            if self.config.composer_config.global_.enable_correlation_tracking
            else None
        )
        logger = get_logger(__name__, correlation_id, "cli_renderer")
        try:
            description = json.loads(file_path.read_text(encoding="utf-8"))
            node = build_node(description, render_config)
            markup = node.render(self.config.minimize, config=render_config)
        except (OSError, json.JSONDecodeError, DescriptionError) as e:
            logger.error(
                "Failed to render description",
                extra={"file": str(file_path)},
                exc_info=False,
            )
            return {"file": str(file_path), "success": False, "error": str(e)}

        logger.info(
            "Rendered description",
            extra={"file": str(file_path), "characters": len(markup)},
        )
        return {"file": str(file_path), "success": True, "markup": markup}

    def render_files(self, paths: List[Path]) -> List[Dict[str, Any]]:
        return [self.render_file(path) for path in paths]


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="sgml-compose",
        description="Compose SGML, HTML and XML markup from JSON tree descriptions"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render JSON descriptions to markup")
    render_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="JSON description files to render"
    )
    render_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    mode = render_parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--minimize", "-m",
        dest="minimize",
        action="store_const",
        const=True,
        help="Render without whitespace and comments"
    )
    mode.add_argument(
        "--pretty", "-p",
        dest="minimize",
        action="store_const",
        const=False,
        help="Render indented, one structural line per element"
    )
    source = render_parser.add_mutually_exclusive_group()
    source.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    source.add_argument(
        "--preset",
        choices=["html", "xhtml", "pretty"],
        help="Render configuration preset"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def cmd_render(args: argparse.Namespace) -> int:
    """Handle render command."""
    try:
        config = CLIConfig.from_file(args.config) if args.config else CLIConfig()
        if args.preset:
            config.composer_config = ComposerConfig.preset(args.preset)
    except ConfigValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    config.minimize = args.minimize
    config.verbose = args.verbose
    config.quiet = args.quiet
    if not (config.verbose or config.quiet):
        configure_logging(config.composer_config.global_.logging_level)

    renderer = DocumentRenderer(config)
    results = renderer.render_files(args.paths)

    for result in results:
        if not result["success"]:
            print(f"Error: {result['error']}", file=sys.stderr)

    markup = "".join(result["markup"] for result in results if result["success"])

    if args.output:
        try:
            args.output.write_text(markup, encoding=config.composer_config.render.encoding)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Markup written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(markup)

    return 0 if all(result["success"] for result in results) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")

    try:
        if args.command == "render":
            return cmd_render(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
