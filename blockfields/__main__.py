"""Entry point for previewing a schema as a form.

Usage:
    python -m blockfields schema.yaml
    python -m blockfields schema.yaml --data values.yaml
    python -m blockfields schema.json --log-level debug
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from blockfields.exceptions import BlockFieldsError
from blockfields.logging_config import parse_log_level, setup_logging
from blockfields.settings import get_settings
from blockfields.utils.schema_loader import load_schema, load_values


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockfields",
        description="Render a field schema as an interactive form.",
    )
    parser.add_argument("schema", help="YAML or JSON schema file")
    parser.add_argument("--data", help="YAML or JSON file with initial values")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the preview application."""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    setup_logging(
        level=parse_log_level(args.log_level) if args.log_level else None,
        log_file=settings.get_log_file(),
    )

    try:
        schema = load_schema(args.schema)
        data = load_values(args.data) if args.data else None
    except BlockFieldsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    from blockfields.app import FormPreviewApp

    try:
        app = FormPreviewApp(schema, data, settings=settings)
    except BlockFieldsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
