# =============================================================================
# File: cli.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Command line front end for the usage report.

Examples:
    model-usage usage --sort size --direction desc
    model-usage unused --json
    model-usage delete "llama3:latest, mistral:7b"
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from model_usage.config.config_loader import ConfigLoader
from model_usage.exceptions import UsageBaseException
from model_usage.logger import configure_logging, get_logger
from model_usage.models.usage_record import UsageRecord
from model_usage.services.usage_reconciler import SORT_COLUMNS, SORT_DIRECTIONS, sort_records
from model_usage.services.usage_service import UsageService
from model_usage.utils.common_utils import format_bytes, format_last_used

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="model-usage",
        description="Report how often locally installed models are loaded.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    usage_p = sub.add_parser("usage", help="Show load counts for every model")
    usage_p.add_argument("--sort", choices=SORT_COLUMNS, default=None)
    usage_p.add_argument("--direction", choices=SORT_DIRECTIONS, default="desc")
    usage_p.add_argument("--json", action="store_true", help="Emit JSON")

    unused_p = sub.add_parser("unused", help="List installed models never loaded")
    unused_p.add_argument("--json", action="store_true", help="Emit JSON")

    delete_p = sub.add_parser("delete", help="Delete installed models")
    delete_p.add_argument("names", nargs="+", help="Model names; commas allowed")

    return parser


def format_usage_table(records: List[UsageRecord]) -> str:
    rows = [("NAME", "USES", "LAST USED", "SIZE")]
    for record in records:
        rows.append(
            (
                record.name,
                str(record.usage_count),
                format_last_used(record.last_used),
                format_bytes(record.size),
            )
        )
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    return "\n".join(
        "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip()
        for row in rows
    )


async def _run(args: argparse.Namespace, service: UsageService) -> str:
    if args.command == "usage":
        records = await service.get_model_usage()
        if args.sort:
            records = sort_records(records, args.sort, args.direction)
        if args.json:
            return json.dumps([r.model_dump(mode="json") for r in records], indent=2)
        return format_usage_table(records)

    if args.command == "unused":
        names = await service.list_unused_models()
        if args.json:
            return json.dumps(names, indent=2)
        return "\n".join(names) if names else "No unused models."

    deleted = await service.delete_models(args.names)
    return "\n".join(f"Deleted {name}" for name in deleted)


def main(argv: Optional[List[str]] = None, service: Optional[UsageService] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        if service is None:
            settings = ConfigLoader.get_app_settings()
            configure_logging(settings.logging.level)
            service = UsageService(settings)
        output = asyncio.run(_run(args, service))
    except UsageBaseException as e:
        logger.debug("Command %s failed: %s", args.command, e.error_code)
        print(e.message, file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
