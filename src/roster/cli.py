"""CLI entrypoint for the roster manager."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from roster.api.models import FilterCriteria
from roster.api.roster_api import list_records
from roster.config.loader import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_CONFIG_TEXT,
    get_logging_settings,
    get_storage_settings,
    load_config,
)
from roster.errors import NotFoundError, ValidationError
from roster.persistence import build_storage
from roster.records.record_models import Grade, Record, SchoolClass
from roster.store.record_store import RecordStore
from roster.utils.logging import get_logger, set_level

logger = get_logger(__name__)

CLASS_CHOICES = [c.value for c in SchoolClass]
GRADE_CHOICES = [g.value for g in Grade]


def _resolve_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Load the config file, falling back to defaults when it does not exist."""
    config_path = getattr(args, "config", None)
    try:
        return load_config(config_path)
    except FileNotFoundError:
        if config_path is not None:
            raise
        logger.debug(f"No config at {DEFAULT_CONFIG_PATH}, using defaults")
        return {}


def _open_store(args: argparse.Namespace) -> RecordStore:
    config = _resolve_config(args)
    set_level(get_logging_settings(config)["level"])
    settings = get_storage_settings(config)
    store = RecordStore(build_storage(settings), key=settings["key"])
    store.load()
    return store


def _form_values(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "name": args.name or "",
        "age": args.age or "",
        "class": args.school_class or "",
        "grade": args.grade or "",
    }


def _print_record(prefix: str, record: Record) -> None:
    print(
        f"{prefix} record {record.id}: {record.name}, age {record.age}, "
        f"{record.school_class.value}, grade {record.grade.value}"
    )


def _print_table(records: List[Record]) -> None:
    print(f"{'ID':<15} {'Name':<25} {'Age':<5} {'Class':<15} {'Grade':<6}")
    print("-" * 70)
    for record in records:
        print(
            f"{record.id:<15} {record.name:<25} {record.age:<5} "
            f"{record.school_class.value:<15} {record.grade.value:<6}"
        )


def _confirm(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def cmd_add(args: argparse.Namespace) -> None:
    """Add a new record."""
    store = _open_store(args)
    record = store.create(_form_values(args))
    _print_record("Added", record)


def cmd_update(args: argparse.Namespace) -> None:
    """Replace all fields of an existing record."""
    store = _open_store(args)
    record = store.update(args.record_id, _form_values(args))
    _print_record("Updated", record)


def cmd_delete(args: argparse.Namespace) -> None:
    """Delete a record after confirmation."""
    store = _open_store(args)
    if not args.yes and not _confirm(f"Are you sure you want to delete record {args.record_id}?"):
        print("Delete cancelled.")
        return
    if store.delete(args.record_id):
        print(f"Deleted record {args.record_id}")
    else:
        print(f"Record {args.record_id} not found, nothing deleted.")


def cmd_list(args: argparse.Namespace) -> None:
    """List records matching the search and filter options."""
    store = _open_store(args)
    criteria = FilterCriteria(
        search=args.search or "",
        grade=args.grade or "",
        age=str(args.age) if args.age is not None else "",
    )
    view = list_records(store, criteria)

    if args.format == "json":
        payload = {
            "visible_count": view.visible_count,
            "total_count": view.total_count,
            "records": [record.to_payload() for record in view.records],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    if criteria.is_empty():
        print(f"Records ({view.total_count})")
    else:
        print(f"Records ({view.visible_count} of {view.total_count})")
    if not view.records:
        print("No records found.")
        return
    _print_table(view.records)


def cmd_init(args: argparse.Namespace) -> None:
    """Write a default config file."""
    config_path = getattr(args, "config", None) or DEFAULT_CONFIG_PATH
    if config_path.exists() and not args.force:
        print(f"Skipped {config_path} (already exists, use --force to overwrite)")
        return
    config_path.write_text(DEFAULT_CONFIG_TEXT, encoding="utf-8")
    print(f"Created {config_path}")


def _add_record_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", type=str, help="Record name")
    parser.add_argument("--age", type=str, help="Age (whole number)")
    parser.add_argument(
        "--class",
        dest="school_class",
        type=str,
        choices=CLASS_CHOICES,
        help="Class",
    )
    parser.add_argument("--grade", type=str, choices=GRADE_CHOICES, help="Grade")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Roster record manager")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Config file path (default: {DEFAULT_CONFIG_PATH})",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    add_parser = subparsers.add_parser("add", help="Add a record")
    _add_record_fields(add_parser)
    add_parser.set_defaults(func=cmd_add)

    update_parser = subparsers.add_parser("update", help="Update a record")
    update_parser.add_argument("record_id", type=int, help="Record ID")
    _add_record_fields(update_parser)
    update_parser.set_defaults(func=cmd_update)

    delete_parser = subparsers.add_parser("delete", help="Delete a record")
    delete_parser.add_argument("record_id", type=int, help="Record ID")
    delete_parser.add_argument(
        "--yes",
        action="store_true",
        help="Skip the confirmation prompt",
    )
    delete_parser.set_defaults(func=cmd_delete)

    list_parser = subparsers.add_parser("list", help="List records")
    list_parser.add_argument("--search", type=str, help="Match name or class (case-insensitive)")
    list_parser.add_argument("--grade", type=str, choices=GRADE_CHOICES, help="Exact grade")
    list_parser.add_argument("--age", type=str, help="Exact age")
    list_parser.add_argument(
        "--format",
        type=str,
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )
    list_parser.set_defaults(func=cmd_list)

    init_parser = subparsers.add_parser("init", help="Write a default config file")
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing config file",
    )
    init_parser.set_defaults(func=cmd_init)

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except NotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
