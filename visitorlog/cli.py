"""CLI entrypoint for the visitor log."""

import argparse
import getpass
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from visitorlog.config import settings
from visitorlog.engine.export import encode_csv, export_filename
from visitorlog.engine.pipeline import export_csv
from visitorlog.engine.sorting import SortDirection, SortKey
from visitorlog.engine.timestamps import parse_range_bound, resolve_timezone
from visitorlog.logging_config import configure_logging
from visitorlog.schemas.view_state import ViewState
from visitorlog.store.factory import build_record_store
from visitorlog.store.sql_store import SqlRecordStore
from visitorlog.utils.exceptions import AppException, DuplicateException

logger = logging.getLogger(__name__)


def cmd_create_admin(args: argparse.Namespace) -> int:
    store = build_record_store(settings)
    if not isinstance(store, SqlRecordStore):
        print("create-admin needs RECORD_STORE=sql; hosted admins are managed in the service console",
              file=sys.stderr)
        return 2

    password = args.password or getpass.getpass("Password: ")
    if len(password) < 8:
        print("Password must be at least 8 characters", file=sys.stderr)
        return 2
    try:
        admin = store.create_admin(args.email, password)
    except DuplicateException as e:
        print(e.detail, file=sys.stderr)
        return 1
    print(f"Created admin {admin.email}")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    tz = resolve_timezone(settings.display_timezone)
    try:
        state = ViewState(
            search=args.search,
            colleges=args.college,
            date_from=parse_range_bound(args.date_from, tz=tz),
            date_to=parse_range_bound(args.date_to, end_of_day=True, tz=tz),
            sort_key=SortKey(args.sort),
            sort_direction=SortDirection(args.direction),
        )
    except ValueError as e:
        print(f"Invalid export options: {e}", file=sys.stderr)
        return 2

    store = build_record_store(settings)
    try:
        records = store.list_records()
    except AppException as e:
        logger.error("Export failed: %s", e.message)
        return 1

    now = datetime.now(tz) if tz is not None else datetime.now()
    output = Path(args.output) if args.output else Path(export_filename(now))
    output.write_bytes(encode_csv(export_csv(records, state, tz)))
    print(f"Wrote {output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="visitorlog", description="Visitor log utilities")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create_admin = subparsers.add_parser("create-admin", help="Create a dashboard admin (sql record store)")
    create_admin.add_argument("email")
    create_admin.add_argument("--password", help="Password (prompted when omitted)")
    create_admin.set_defaults(func=cmd_create_admin)

    export = subparsers.add_parser("export", help="Export visitor logs to CSV")
    export.add_argument("--search", default="", help="Name or mobile substring")
    export.add_argument("--college", action="append", default=[], help="College filter (repeatable)")
    export.add_argument("--date-from", help="Start date (YYYY-MM-DD or ISO timestamp)")
    export.add_argument("--date-to", help="End date (YYYY-MM-DD or ISO timestamp)")
    export.add_argument("--sort", choices=[k.value for k in SortKey], default=SortKey.IN_TIME.value)
    export.add_argument("--direction", choices=[d.value for d in SortDirection], default=SortDirection.DESC.value)
    export.add_argument("-o", "--output", help="Output file (default: visitor_logs_<timestamp>.csv)")
    export.set_defaults(func=cmd_export)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging(settings.log_level)
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
