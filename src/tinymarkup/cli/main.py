"""Main CLI entry point for the tinymarkup command-line tool.

Provides tokenize, parse, format, validate and profile commands over markup
files, with JSON or text output.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from tinymarkup import __version__
from tinymarkup.api import MarkupParser
from tinymarkup.shared import (
    ConfigError,
    DecodeFailedError,
    MarkupError,
    ParserConfig,
)
from tinymarkup.shared.logging import configure_logging, get_logger
from tinymarkup.tools import PerformanceProfiler


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.parser_config = ParserConfig()
        self.verbose = False
        self.quiet = False

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        The file may hold a ``preset`` name (``compatible`` or ``strict``) and a
        ``parser`` mapping in ``ParserConfig.to_dict`` form.

        Raises:
            ConfigError: If the file is unreadable or invalid
        """
        config = cls()
        try:
            data = json.loads(config_path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not load config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must hold a JSON object")

        preset = data.get("preset")
        if preset is not None:
            config.parser_config = preset_config(preset)
        if "parser" in data:
            config.parser_config = ParserConfig.from_dict(data["parser"])
        return config


def preset_config(name: str) -> ParserConfig:
    """Return the named ParserConfig preset."""
    if name == "strict":
        return ParserConfig.strict()
    if name == "compatible":
        return ParserConfig.compatible()
    raise ConfigError(f"Unknown preset: {name}")


class MarkupProcessor:
    """Core processing logic shared by the CLI commands."""

    def __init__(self, config: CLIConfig) -> None:
        self.config = config
        self.parser = MarkupParser(config.parser_config)
        self.logger = get_logger(__name__, None, "cli_processor")

    def validate_file(self, file_path: Path) -> Dict[str, Any]:
        """Parse a single file and report whether it is well-formed."""
        try:
            forest = self.parser.parse_file(file_path)
        except (MarkupError, OSError) as e:
            self.logger.debug("Validation failed", extra={"file": str(file_path)})
            return {
                "file": str(file_path),
                "valid": False,
                "error_type": type(e).__name__,
                "error": str(e),
            }
        return {
            "file": str(file_path),
            "valid": True,
            "root_count": len(forest),
            "element_count": sum(
                1 for root in forest for _ in root.iter()
            ),
        }


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="tinymarkup",
        description="Minimal strict markup tokenizer, parser and serializer"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Quiet output")
    parser.add_argument("--config", "-c", type=Path, help="Configuration file path")
    parser.add_argument(
        "--preset",
        choices=["compatible", "strict"],
        help="Parser configuration preset"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    tokenize_parser = subparsers.add_parser("tokenize", help="Print the token stream")
    tokenize_parser.add_argument("path", type=Path, help="Markup file")

    parse_parser = subparsers.add_parser("parse", help="Print the element tree as JSON")
    parse_parser.add_argument("path", type=Path, help="Markup file")

    format_parser = subparsers.add_parser("format", help="Parse and re-serialize")
    format_parser.add_argument("path", type=Path, help="Markup file")
    format_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    validate_parser = subparsers.add_parser("validate", help="Check files parse")
    validate_parser.add_argument("paths", nargs="+", type=Path, help="Markup files")
    validate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )

    profile_parser = subparsers.add_parser("profile", help="Time each pipeline stage")
    profile_parser.add_argument("path", type=Path, help="Markup file")
    profile_parser.add_argument(
        "--no-memory",
        action="store_true",
        help="Do not sample process memory"
    )

    return parser


def format_validation(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format validation results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    valid_count = sum(1 for r in results if r["valid"])
    lines = [f"Validated {len(results)} files, {valid_count} valid", "-" * 50]
    for result in results:
        status = "OK  " if result["valid"] else "FAIL"
        lines.append(f"{status} {result['file']}")
        if not result["valid"]:
            lines.append(f"     {result['error_type']}: {result['error']}")
    return "\n".join(lines)


def read_markup(path: Path) -> str:
    """Read a markup file as strict UTF-8."""
    data = path.read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeFailedError("utf-8", e) from e


def load_config(args: argparse.Namespace) -> CLIConfig:
    config = CLIConfig.from_file(args.config) if args.config else CLIConfig()
    if args.preset:
        config.parser_config = preset_config(args.preset)
    config.verbose = args.verbose
    config.quiet = args.quiet
    return config


def cmd_tokenize(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle tokenize command."""
    parser = MarkupParser(config.parser_config)
    tokens = parser.tokenize(read_markup(args.path))
    print(json.dumps([token.to_dict() for token in tokens], indent=2))
    return 0


def cmd_parse(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle parse command."""
    forest = MarkupParser(config.parser_config).parse_file(args.path)
    print(json.dumps([element.to_dict() for element in forest], indent=2))
    return 0


def cmd_format(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle format command."""
    parser = MarkupParser(config.parser_config)
    output = parser.serialize(parser.parse_file(args.path))

    if args.output:
        args.output.write_text(output)
        if not config.quiet:
            print(f"Written to {args.output}", file=sys.stderr)
    else:
        print(output)
    return 0


def cmd_validate(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle validate command."""
    processor = MarkupProcessor(config)
    results = [processor.validate_file(path) for path in args.paths]
    print(format_validation(results, args.format))
    return 0 if all(r["valid"] for r in results) else 1


def cmd_profile(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle profile command."""
    profiler = PerformanceProfiler(
        config.parser_config, enable_memory_tracking=not args.no_memory
    )
    session = profiler.profile(read_markup(args.path), session_id=str(args.path))
    print(json.dumps(session.to_dict(), indent=2))
    return 0


COMMANDS = {
    "tokenize": cmd_tokenize,
    "parse": cmd_parse,
    "format": cmd_format,
    "validate": cmd_validate,
    "profile": cmd_profile,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(config.parser_config.global_.logging_level)

    try:
        return COMMANDS[args.command](args, config)
    except (MarkupError, OSError) as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
