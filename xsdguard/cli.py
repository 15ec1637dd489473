#!/usr/bin/env python3
"""
Command-line XSD gate.

Loads a schema once and validates one or more XML files against it.

Exit codes:
    0 - every document conforms
    1 - at least one document does not conform
    2 - the schema (or configuration) could not be loaded
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from xsdguard.config.settings import GuardConfig, load_config, set_config, validate_config
from xsdguard.engine.runtime import engine_info, ensure_initialized
from xsdguard.errors import SchemaError
from xsdguard.logging_utils import setup_logging
from xsdguard.schema.compiler import load_schema
from xsdguard.validation.validator import validate_file


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="xsdguard",
        description="Validate XML documents against an XSD (pass/fail)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Validate one document:
    python -m xsdguard order.xsd order.xml

  Validate many documents against the same schema:
    python -m xsdguard order.xsd incoming/*.xml

  Show engine versions:
    python -m xsdguard --info

Environment Variables:
  XSDGUARD_SERIALIZE, XSDGUARD_MAX_DOCUMENT_BYTES, XSDGUARD_LOG_LEVEL, ...
        """
    )
    ap.add_argument("schema", nargs="?", help="Path to the XSD file")
    ap.add_argument("xml", nargs="*", help="XML files to validate")
    ap.add_argument("--config", default=None, help="JSON or YAML configuration file")
    ap.add_argument("--log-level", default=None, help="Logging level (default: from config, INFO)")
    ap.add_argument("--info", action="store_true", help="Print engine information and exit")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.config:
        try:
            config = load_config(Path(args.config))
        except (OSError, ValueError) as e:
            print(f"ERROR: Cannot load config: {e}", file=sys.stderr)
            return 2
    else:
        config = GuardConfig.from_env()

    problems = validate_config(config)
    if problems:
        for problem in problems:
            print(f"ERROR: {problem}", file=sys.stderr)
        return 2

    set_config(config)
    setup_logging(args.log_level or config.log_level)
    ensure_initialized(config.engine)

    if args.info:
        print(json.dumps(engine_info(), indent=2))
        return 0

    if not args.schema or not args.xml:
        ap.error("a schema and at least one XML file are required")

    try:
        schema = load_schema(args.schema)
    except SchemaError as e:
        print(f"ERROR: {e.describe()}", file=sys.stderr)
        return 2

    failures = 0
    for xml_path in args.xml:
        ok = validate_file(schema, xml_path, config=config.parser)
        print(f"{'PASS' if ok else 'FAIL'}  {xml_path}")
        if not ok:
            failures += 1

    if failures:
        print(f"{failures} of {len(args.xml)} document(s) failed", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
