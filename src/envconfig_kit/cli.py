"""Command-line interface for envconfig-kit."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .config import PROJECT_FILE, ProjectConfig, ProjectConfigLoader
from .errors import EnvConfigError, EnvValidationError
from .export import generate_dotenv_example, schema_to_json, schema_to_markdown
from .logging import configure_from
from .logging_config import LoggingConfig
from .resolver import ResolveOptions, resolve
from .sources import BASE_FILE

PROG = "envconfig-kit"
EXAMPLE_FILE = ".env.example"

logger = logging.getLogger(__package__ or __name__)

INIT_PROJECT_FILE = """\
# Environment schema for this project.
# Each [variables.NAME] table declares one environment variable.

[variables.PORT]
type = "port"
default = 3000

[variables.APP_ENV]
type = "enum"
values = ["development", "staging", "production", "test"]
default = "development"

[variables.DATABASE_URL]
type = "url"

[variables.API_KEY]
type = "string"
secret = true
"""

INIT_EXAMPLE_FILE = """\
# Environment Variables

# Required
DATABASE_URL=
API_KEY=

# Optional (with defaults)
PORT=3000
APP_ENV=development
"""


def _load_project(schema_path: Optional[Path]) -> ProjectConfig:
    path = schema_path or Path.cwd() / PROJECT_FILE
    if not path.exists():
        raise EnvConfigError(f"Schema file not found: {path}", path=str(path))
    return ProjectConfigLoader().load(path)


def generate_command(args: argparse.Namespace) -> int:
    """Write .env.example (or print docs) from the schema file."""
    project = _load_project(args.schema)

    if args.format == "markdown":
        content = schema_to_markdown(project.variables)
    elif args.format == "json":
        content = json.dumps(schema_to_json(project.variables), indent=2)
    else:
        content = generate_dotenv_example(project.variables)

    output = args.output or (Path(EXAMPLE_FILE) if args.format == "dotenv" else None)
    if output is None:
        print(content)
        return 0

    output.write_text(content + "\n", encoding="utf-8")
    logger.info(f"Wrote {output}")
    print(f"✓ Generated {output}")
    return 0


def check_command(args: argparse.Namespace) -> int:
    """Validate the current environment against the schema file."""
    project = _load_project(args.schema)

    if not (Path.cwd() / BASE_FILE).exists():
        print(f"✗ Missing {BASE_FILE} file\n")
        print(f"Fix: Copy {EXAMPLE_FILE} and fill in your values")
        print(f"   cp {EXAMPLE_FILE} {BASE_FILE}\n")
        return 1

    options = ResolveOptions(
        mask_secrets=not args.no_mask,
        environment_variable=project.environment_variable,
    )

    try:
        resolve(project.variables, options)
    except EnvValidationError as e:
        print(e.message, file=sys.stderr)
        return 1

    print(f"✓ {BASE_FILE} file found")
    print(f"✓ All {len(project.variables)} environment variable(s) validated")
    return 0


def doctor_command(args: argparse.Namespace) -> int:
    """Check that the project files are in place."""
    print("Running environment health check...\n")

    checks = [
        (f"{BASE_FILE} file", Path(BASE_FILE).exists()),
        (f"{EXAMPLE_FILE} file", Path(EXAMPLE_FILE).exists()),
        (f"{PROJECT_FILE} schema", Path(PROJECT_FILE).exists()),
    ]

    all_pass = True
    for name, passed in checks:
        print(f"{'✓' if passed else '✗'} {name}")
        all_pass = all_pass and passed

    print()

    if all_pass:
        print("✓ Everything looks good!")
        return 0

    print(f"Some checks failed. Run '{PROG} init' to create missing files.")
    return 1


def init_command(args: argparse.Namespace) -> int:
    """Create a starter schema file and .env.example."""
    print(f"Initializing {PROG}...\n")

    for name, content in ((PROJECT_FILE, INIT_PROJECT_FILE), (EXAMPLE_FILE, INIT_EXAMPLE_FILE)):
        path = Path(name)
        if path.exists():
            print(f"! {name} already exists")
            continue
        path.write_text(content, encoding="utf-8")
        print(f"✓ Created {name}")

    print("\n✓ Done! Next steps:")
    print(f"  1. Copy {EXAMPLE_FILE} to {BASE_FILE}")
    print("  2. Fill in your environment variables")
    print(f"  3. Run '{PROG} check'")
    return 0


COMMANDS: Dict[str, Callable[[argparse.Namespace], int]] = {
    "generate": generate_command,
    "check": check_command,
    "doctor": doctor_command,
    "init": init_command,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=f"{PROG} - Type-safe environment variables",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (DEBUG, INFO, WARNING, ERROR; overrides config)"
    )
    parser.add_argument(
        "--log-format",
        default=None,
        help="Log format (simple, detailed, json; overrides config)"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    generate = subparsers.add_parser("generate", help=f"Generate {EXAMPLE_FILE} from the schema file")
    generate.add_argument("--schema", type=Path, help=f"Path to schema file (default: {PROJECT_FILE})")
    generate.add_argument(
        "--format",
        choices=["dotenv", "markdown", "json"],
        default="dotenv",
        help="Output format"
    )
    generate.add_argument("--output", type=Path, help="Output file (markdown/json print to stdout by default)")

    check = subparsers.add_parser("check", help=f"Validate {BASE_FILE} against the schema file")
    check.add_argument("--schema", type=Path, help=f"Path to schema file (default: {PROJECT_FILE})")
    check.add_argument("--no-mask", action="store_true", help="Show secret values in error output")

    subparsers.add_parser("doctor", help="Health check your environment setup")
    subparsers.add_parser("init", help=f"Initialize {PROG} in your project")
    subparsers.add_parser("help", help="Show this help message")

    return parser


def _setup_logging(args: argparse.Namespace) -> None:
    try:
        base = ProjectConfigLoader().load(getattr(args, "schema", None)).logging
    except EnvConfigError:
        base = LoggingConfig()
    overrides = {
        key: value
        for key, value in (("level", args.log_level), ("format", args.log_format))
        if value is not None
    }
    configure_from(LoggingConfig(**{**base.model_dump(), **overrides}))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in (None, "help"):
        parser.print_help()
        return 0

    try:
        _setup_logging(args)
    except ValueError as e:
        print(f"✗ Invalid logging option: {e}", file=sys.stderr)
        return 1

    try:
        return COMMANDS[args.command](args)
    except EnvConfigError as e:
        logger.error(e.message, extra={"extra_fields": e.context})
        return 1


if __name__ == "__main__":
    sys.exit(main())
