from __future__ import annotations

import argparse
import datetime
import sys
from pathlib import Path

from taskvault.codec.coerce import format_date, parse_date
from taskvault.config import load_config
from taskvault.errors import TaskVaultError
from taskvault.models.record import Priority, Status, TaskRecord
from taskvault.store import FileTaskStore, load, save

EXIT_OK = 0
EXIT_RECOVERED = 1
EXIT_ERROR = 2


def _format_row(record: TaskRecord, today: datetime.date) -> str:
    mark = "x" if record.status is Status.COMPLETED else " "
    due = format_date(record.due_date) or "-"
    flag = ""
    if record.is_overdue(today):
        flag = "  (overdue)"
    elif record.is_due_today(today):
        flag = "  (due today)"
    return f"[{mark}] {record.id:>4}  {record.priority.value:<6}  {due:<10}  {record.title}{flag}"


def _cmd_list(store: FileTaskStore, args: argparse.Namespace) -> int:
    records = store.list_tasks()
    if args.status:
        wanted = Status[args.status.upper()]
        records = [r for r in records if r.status is wanted]
    if not records:
        print("No tasks.")
        return EXIT_OK
    today = datetime.date.today()
    for r in records:
        print(_format_row(r, today))
    return EXIT_OK


def _cmd_check(store: FileTaskStore, args: argparse.Namespace) -> int:
    report = store.load_report()
    print(f"{store.path}: {len(report.records)} task(s) loaded")
    for w in report.warnings:
        print(f"  recovered {w.describe()}")
    for d in report.dropped:
        where = f"task #{d.index + 1}" if d.index is not None else "task"
        print(f"  dropped {where}: {d.reason} ({d.raw})")
    if report.clean:
        print("  ok")
        return EXIT_OK
    return EXIT_RECOVERED


def _cmd_add(store: FileTaskStore, args: argparse.Namespace) -> int:
    title = args.title.strip()
    if not title:
        sys.stderr.write("error: title cannot be empty\n")
        return EXIT_ERROR
    due: datetime.date | None = None
    if args.due:
        try:
            due = parse_date(args.due)
        except ValueError:
            sys.stderr.write("error: invalid date format, use YYYY-MM-DD\n")
            return EXIT_ERROR
    task = store.create_task(
        title=title,
        description=(args.description or "").strip(),
        priority=Priority[args.priority.upper()],
        due_date=due,
    )
    print(f"Added task {task.id}.")
    return EXIT_OK


def _cmd_status(store: FileTaskStore, args: argparse.Namespace, status: Status) -> int:
    task = store.set_status(args.id, status)
    if task is None:
        sys.stderr.write(f"error: task id {args.id} not found\n")
        return EXIT_ERROR
    print(f"Task {task.id} is now {task.status.value.lower()}.")
    return EXIT_OK


def _cmd_rm(store: FileTaskStore, args: argparse.Namespace) -> int:
    if not store.delete_task(args.id):
        sys.stderr.write(f"error: task id {args.id} not found\n")
        return EXIT_ERROR
    print(f"Task {args.id} removed.")
    return EXIT_OK


def _cmd_import(store: FileTaskStore, args: argparse.Namespace) -> int:
    source = Path(args.source)
    if not source.exists():
        sys.stderr.write(f"error: {source} does not exist\n")
        return EXIT_ERROR
    # Imported tasks replace the current list
    records = load(source, policy=store.policy)
    store.replace_all(records)
    print(f"Imported {len(records)} task(s) from {source}.")
    return EXIT_OK


def _cmd_export(store: FileTaskStore, args: argparse.Namespace) -> int:
    records = store.list_tasks()
    if not records:
        sys.stderr.write("error: no tasks to export\n")
        return EXIT_ERROR
    dest = Path(args.dest)
    if dest.suffix.lower() != ".json":
        dest = dest.with_name(dest.name + ".json")
    save(records, dest)
    print(f"Exported {len(records)} task(s) to {dest}.")
    return EXIT_OK


def _cmd_normalize(store: FileTaskStore, args: argparse.Namespace) -> int:
    records = store.list_tasks()
    store.replace_all(records)
    print(f"Rewrote {store.path} ({len(records)} task(s)).")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("taskvault")
    parser.add_argument("--file", help="Tasks file (default: $TASKVAULT_FILE or tasks.json)")
    sub = parser.add_subparsers(dest="cmd")

    p_list = sub.add_parser("list", help="List tasks")
    p_list.add_argument("--status", choices=["pending", "completed"])

    sub.add_parser("check", help="Report recovered fields and dropped tasks")

    p_add = sub.add_parser("add", help="Add a task")
    p_add.add_argument("title")
    p_add.add_argument("--description", default="")
    p_add.add_argument("--priority", choices=["low", "medium", "high"], default="low")
    p_add.add_argument("--due", help="Due date, YYYY-MM-DD")

    p_done = sub.add_parser("done", help="Mark a task completed")
    p_done.add_argument("id", type=int)
    p_undo = sub.add_parser("undo", help="Mark a task pending again")
    p_undo.add_argument("id", type=int)
    p_rm = sub.add_parser("rm", help="Remove a task")
    p_rm.add_argument("id", type=int)

    p_import = sub.add_parser("import", help="Replace tasks with those read from a file")
    p_import.add_argument("source")
    p_export = sub.add_parser("export", help="Write tasks to another file")
    p_export.add_argument("dest")

    sub.add_parser("normalize", help="Rewrite the tasks file in canonical form")
    return parser


def run(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = load_config()
    store = FileTaskStore(args.file or cfg.path, policy=cfg.completion_policy)
    cmd = str(getattr(args, "cmd", None) or "list")

    try:
        if cmd == "list":
            if not hasattr(args, "status"):
                args.status = None
            return _cmd_list(store, args)
        if cmd == "check":
            return _cmd_check(store, args)
        if cmd == "add":
            return _cmd_add(store, args)
        if cmd == "done":
            return _cmd_status(store, args, Status.COMPLETED)
        if cmd == "undo":
            return _cmd_status(store, args, Status.PENDING)
        if cmd == "rm":
            return _cmd_rm(store, args)
        if cmd == "import":
            return _cmd_import(store, args)
        if cmd == "export":
            return _cmd_export(store, args)
        if cmd == "normalize":
            return _cmd_normalize(store, args)
    except TaskVaultError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_ERROR

    parser.print_help()
    return EXIT_ERROR


def main(argv: list[str] | None = None) -> None:
    raise SystemExit(run(argv))


if __name__ == "__main__":
    main()
