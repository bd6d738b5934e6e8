"""recordshape CLI: inspect shapes and project JSON payloads."""

import argparse
import json
import logging
import sys
from datetime import date, datetime
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Any, List, Optional


def _json_default(value: Any) -> Any:
    """Serialize coerced dates as ISO-8601 strings."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _configure_logging(verbose: bool) -> None:
    """Attach a stderr handler to the package logger (idempotent)."""
    package_logger = logging.getLogger("recordshape")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if any(h.get_name() == "recordshape-cli" for h in package_logger.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name("recordshape-cli")
    handler.setFormatter(logging.Formatter("%(levelname)-8s | %(name)s | %(message)s"))
    package_logger.addHandler(handler)


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point for recordshape commands."""
    try:
        recordshape_version = get_version("recordshape")
    except PackageNotFoundError:
        recordshape_version = "dev"

    parser = argparse.ArgumentParser(
        prog="recordshape",
        description="recordshape: project structured records with shape strings"
    )
    parser.add_argument("--version", action="version", version=f"recordshape {recordshape_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log cache activity and other debug output to stderr."
    )
    parent_parser.add_argument(
        "--schema",
        type=Path,
        default=None,
        help="Path to a JSON schema catalog (defaults to the built-in catalog)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a shape string and print its canonical tree",
        parents=[parent_parser]
    )
    parse_parser.add_argument("shape", help="Shape string, e.g. 'key,recipient(display_name)'")

    fields_parser = subparsers.add_parser(
        "fields",
        help="List the fields of a record type",
        parents=[parent_parser]
    )
    fields_parser.add_argument("type", help="Record type name, e.g. Contract")

    project_parser = subparsers.add_parser(
        "project",
        help="Project a JSON object or array of objects through a shape",
        parents=[parent_parser]
    )
    project_parser.add_argument("--type", dest="base_type", required=True, help="Record type name")
    project_parser.add_argument("--shape", required=True, help="Shape string")
    project_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Path to JSON payload (object or array), '-' for stdin"
    )
    project_parser.add_argument("--flat", action="store_true", help="Payload uses joined (dotted) keys")
    project_parser.add_argument("--flat-lists", action="store_true", help="Payload lists are flattened")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    _configure_logging(args.verbose)

    # Lazy import: only load the kernel when a command runs
    from recordshape.api import ShapeEngine
    from recordshape.errors import ShapeError
    from recordshape.kernel.schema import SchemaRegistry
    from recordshape._internal.canonical_json import canonical_dumps

    try:
        registry = None
        if args.schema is not None:
            registry = SchemaRegistry.from_json_bytes(args.schema.read_bytes())
        engine = ShapeEngine(registry=registry)

        if args.command == "parse":
            spec = engine.parse(args.shape)
            print(canonical_dumps(spec.canonical_payload()))
        elif args.command == "fields":
            for name in engine.registry.list_field_names(args.type):
                print(name)
        elif args.command == "project":
            if str(args.input) == "-":
                payload = json.load(sys.stdin)
            else:
                with open(args.input, 'r', encoding='utf-8') as f:
                    payload = json.load(f)
            if isinstance(payload, list):
                result = engine.shape_list(args.base_type, args.shape, payload, args.flat, args.flat_lists)
            else:
                result = engine.shape_one(args.base_type, args.shape, payload, args.flat, args.flat_lists)
            print(json.dumps(result, indent=2, ensure_ascii=False, default=_json_default))
    except ShapeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
