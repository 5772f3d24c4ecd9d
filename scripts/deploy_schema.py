#!/usr/bin/env python
# ============================================================================
# SCHEMA DEPLOYMENT SCRIPT
# ============================================================================
# PURPOSE: Create tables for registered models, or emit generated artifacts
# USAGE:
#   python scripts/deploy_schema.py --models app.models:MODELS --dry-run
#   python scripts/deploy_schema.py --models app.models:MODELS
#   python scripts/deploy_schema.py --models app.models:MODELS --emit app/generated.py
# ============================================================================

import sys
import os
import json
import argparse

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from __version__ import __version__
from core.errors import ConfigurationError
from core.logging import configure_logging
from core.schema.codegen import CodegenError, write_module
from infrastructure import MigrationRunner, PostgreSQLRepository, load_registry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create tables for registered models",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/deploy_schema.py --models app.models:MODELS --dry-run
  python scripts/deploy_schema.py --models app.models:MODELS
  python scripts/deploy_schema.py --models app.models:MODELS --emit app/generated.py

Environment Variables:
  DATABASE_URL                   Full PostgreSQL connection string
  POSTGRES_HOST                  Database host
  POSTGRES_DB                    Database name
  POSTGRES_USER                  Database user (default: postgres)
  POSTGRES_PASSWORD              Database password
  POSTGRES_PORT                  Database port (default: 5432)
  POSTGRES_SSLMODE               SSL mode (default: require)
  MODELGEN_DEFAULT_STRING_SIZE   varchar size for unsized String fields (default: 255)
  MODELGEN_REQUIRE_PRIMARY_KEY   Reject models without a primary key (default: false)
        """
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--models",
        required=True,
        help="Model registry as module:ATTRIBUTE"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compile and print DDL without executing"
    )
    parser.add_argument(
        "--emit",
        metavar="PATH",
        help="Write a generated Python module of the compiled artifacts and exit"
    )
    parser.add_argument(
        "--connection",
        type=str,
        help="PostgreSQL connection string (overrides environment)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit structured JSON logs"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(
        level="DEBUG" if args.verbose else "INFO",
        json_output=args.json_logs,
    )

    try:
        registry = load_registry(args.models)
    except (ImportError, ValueError, TypeError, ConfigurationError) as e:
        print(f"Cannot load models from {args.models}: {e}", file=sys.stderr)
        return 1

    repository = PostgreSQLRepository(connection_string=args.connection) if args.connection else None
    runner = MigrationRunner(registry, repository=repository)

    if args.emit:
        try:
            path = write_module(runner.compile(), args.emit)
        except (ConfigurationError, CodegenError) as e:
            print(f"Generation failed: {e}", file=sys.stderr)
            return 1
        print(f"Wrote {path}")
        return 0

    if args.json_logs:
        result = runner.run(dry_run=args.dry_run)
        print(json.dumps(result.to_dict(), indent=2))
        return 0 if result.success else 1

    print("=" * 70)
    print("Schema Deployment")
    print(f"Models: {', '.join(registry.names) or '(none)'}")
    print(f"Mode: {'DRY RUN' if args.dry_run else 'EXECUTE'}")
    print("=" * 70)

    result = runner.run(dry_run=args.dry_run)

    print("\n[RESULTS]\n")
    for step in result.steps:
        marker = {
            "success": "[ok]",
            "failed": "[failed]",
            "skipped": "[skipped]"
        }.get(step.status, "[?]")

        print(f"{marker} {step.name}: {step.message}")
        if step.error:
            print(f"   Error: {step.error}")
        if step.details and args.verbose:
            for key, value in step.details.items():
                print(f"   {key}: {value}")

    if args.dry_run and result.statements:
        print("\n[DDL]\n")
        for statement in result.statements:
            print(statement)

    print("\n" + "=" * 70)
    if result.success:
        print("Deployment completed successfully")
    else:
        print("Deployment failed")
        for error in result.errors:
            print(f"   - {error}")
    print("=" * 70)
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
