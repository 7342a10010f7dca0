"""Command-line interface for listing, creating and removing cron and at tasks."""

from __future__ import annotations

import argparse
import calendar
import dataclasses
import string
import sys
from datetime import date, datetime, timedelta

from .exceptions import TaskSchedulerError
from .models import AtTask, CronTask
from .service import AtTaskFilter, AtTaskSort, TaskSchedulerService

_PRESETS = {
    "every-minute": "* * * * *",
    "hourly": "0 * * * *",
    "daily": "0 0 * * *",
    "weekly": "0 0 * * 0",
    "monthly": "0 0 1 * *",
}

_QUICK_DATES = ("today", "tomorrow", "next-week", "next-month")
_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_cron_expression(
    minutes: str, hours: str, days: str, months: str, weekdays: str
) -> str:
    """Join the five schedule fields, using ``*`` for any left empty."""
    fields = [(value or "").strip() for value in (minutes, hours, days, months, weekdays)]
    if not any(fields):
        raise ValueError("Fill in at least one schedule field")
    return " ".join(value or "*" for value in fields)


def preset_expression(name: str) -> str:
    """Return the cron schedule for a named preset."""
    try:
        return _PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown schedule preset: {name}") from None


def _add_month(day: date) -> date:
    year, month = (day.year + 1, 1) if day.month == 12 else (day.year, day.month + 1)
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def resolve_quick_date(option: str | None, today: date) -> date:
    """Turn a quick choice (tomorrow, next week, next month) into a date."""
    if option is None or option == "today":
        return today
    if option == "tomorrow":
        return today + timedelta(days=1)
    if option == "next-week":
        return today + timedelta(days=7)
    if option == "next-month":
        return _add_month(today)
    raise ValueError(f"Unknown date option: {option}")


def parse_run_time(date_text: str | None, time_text: str, now: datetime) -> datetime:
    """Combine ``YYYY-MM-DD`` and ``HH:MM`` into a run time that lies in the future."""
    try:
        day = date.fromisoformat(date_text) if date_text else now.date()
        clock = datetime.strptime(time_text.strip(), "%H:%M").time()
    except (ValueError, AttributeError):
        raise ValueError("Enter a valid date and time") from None
    run_time = datetime.combine(day, clock)
    if run_time < now:
        raise ValueError("The run time must be in the future")
    return run_time


def _print_at_tasks(tasks: list[AtTask]) -> None:
    for task in tasks:
        description = task.description or f"At job #{task.at_job_id}"
        status = "executed" if task.is_executed else "pending"
        print(
            "\t".join(
                [
                    task.id,
                    description,
                    task.command,
                    task.scheduled_time.strftime(_DISPLAY_FORMAT),
                    status,
                    task.at_job_id,
                    task.queue,
                ]
            )
        )


def _print_cron_tasks(tasks: list[CronTask]) -> None:
    for task in tasks:
        description = task.description or f"Cron job #{task.id}"
        status = "active" if task.is_active else "stopped"
        print(
            "\t".join(
                [
                    task.id,
                    description,
                    task.command,
                    task.cron_expression,
                    task.created_at.strftime(_DISPLAY_FORMAT),
                    status,
                ]
            )
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cronat", description="Manage cron and at tasks.")
    commands = parser.add_subparsers(dest="action", required=True)

    list_at = commands.add_parser("list-at", help="list at tasks")
    list_at.add_argument("--queue", default="", choices=["", *string.ascii_lowercase])
    list_at.add_argument("--status", default="all", choices=["all", "pending", "completed"])
    list_at.add_argument("--sort", default="id", choices=["time", "queue", "status", "id"])
    list_at.add_argument("--descending", action="store_true")

    list_cron = commands.add_parser("list-cron", help="list cron tasks")
    list_cron.add_argument("--status", default="all", choices=["all", "active", "stopped"])

    add_at = commands.add_parser("add-at", help="schedule a one-off task")
    add_at.add_argument("command")
    add_at.add_argument("--time", required=True, help="HH:MM")
    when = add_at.add_mutually_exclusive_group()
    when.add_argument("--date", help="YYYY-MM-DD")
    when.add_argument("--when", choices=_QUICK_DATES)
    add_at.add_argument("--comment", default="")
    add_at.add_argument("--queue", default="a", choices=list(string.ascii_lowercase))

    add_cron = commands.add_parser("add-cron", help="add a recurring task")
    add_cron.add_argument("command")
    add_cron.add_argument("--preset", choices=sorted(_PRESETS))
    for name in ("minutes", "hours", "days", "months", "weekdays"):
        add_cron.add_argument(f"--{name}", default="")
    add_cron.add_argument("--comment", default="")

    for name, help_text in (
        ("remove-at", "cancel an at task"),
        ("remove-cron", "remove a cron task"),
        ("toggle-cron", "start or stop a cron task"),
    ):
        commands.add_parser(name, help=help_text).add_argument("task_id")

    describe_at = commands.add_parser("describe-at", help="change an at task's description")
    describe_at.add_argument("task_id")
    describe_at.add_argument("description")

    describe_cron = commands.add_parser(
        "describe-cron", help="change a cron task's description"
    )
    describe_cron.add_argument("task_id")
    describe_cron.add_argument("description")

    schedule_cron = commands.add_parser("schedule-cron", help="change a cron task's schedule")
    schedule_cron.add_argument("task_id")
    schedule_cron.add_argument("expression")

    commands.add_parser("clear-at", help="cancel every at task")
    commands.add_parser("clear-cron", help="remove every cron task")
    commands.add_parser("sync", help="synchronise with the system")
    return parser


def _validate(args: argparse.Namespace) -> None:
    if args.action == "add-at":
        if not args.command.strip():
            raise ValueError("The command is required")
        now = datetime.now()
        date_text = args.date
        if date_text is None and args.when is not None:
            date_text = resolve_quick_date(args.when, now.date()).isoformat()
        args.run_time = parse_run_time(date_text, args.time, now)
    elif args.action == "add-cron":
        if args.preset is not None:
            args.expression = preset_expression(args.preset)
        else:
            args.expression = build_cron_expression(
                args.minutes, args.hours, args.days, args.months, args.weekdays
            )
        if not args.command.strip():
            raise ValueError("The command is required")


def _run(service: TaskSchedulerService, args: argparse.Namespace) -> int:
    action = args.action
    if action == "list-at":
        task_filter = AtTaskFilter(
            queue_filter=args.queue,
            show_only_pending=args.status == "pending",
            show_only_completed=args.status == "completed",
        )
        sort = AtTaskSort(
            by_scheduled_time=args.sort == "time",
            by_queue=args.sort == "queue",
            by_status=args.sort == "status",
            by_at_id=args.sort == "id",
            ascending=not args.descending,
        )
        _print_at_tasks(service.get_at_tasks_filtered(task_filter, sort))
    elif action == "list-cron":
        show_all = args.status == "all"
        _print_cron_tasks(service.get_cron_tasks_filtered(show_all, args.status == "active"))
    elif action == "add-at":
        if not service.add_at_task(
            args.run_time, args.command.strip(), args.comment.strip(), args.queue
        ):
            print("Failed to create the task", file=sys.stderr)
            return 1
        print("Task created")
    elif action == "add-cron":
        if not service.add_cron_task(
            args.expression, args.command.strip(), args.comment.strip()
        ):
            print("Failed to create the task, check the schedule", file=sys.stderr)
            return 1
        print("Cron task created")
    elif action == "remove-at":
        service.get_at_task(args.task_id)
        service.remove_at_task(args.task_id)
    elif action == "remove-cron":
        if not service.remove_cron_task(args.task_id):
            print("Failed to remove the task", file=sys.stderr)
            return 1
    elif action == "toggle-cron":
        if not service.update_cron_task_status(args.task_id):
            print(f"No cron task with id {args.task_id}", file=sys.stderr)
            return 1
    elif action == "describe-at":
        task = dataclasses.replace(service.get_at_task(args.task_id))
        task.description = args.description
        service.update_at_task(task)
    elif action in ("describe-cron", "schedule-cron"):
        task = dataclasses.replace(service.get_cron_task(args.task_id))
        if action == "describe-cron":
            task.description = args.description
        else:
            task.cron_expression = args.expression
        if not service.update_cron_task(task):
            print("Failed to update the task, check its schedule", file=sys.stderr)
            return 1
    elif action == "clear-at":
        service.clear_at()
    elif action == "clear-cron":
        service.clear_cron()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command line; return the exit status."""
    args = _build_parser().parse_args(argv)
    try:
        _validate(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        service = TaskSchedulerService()
    except (TaskSchedulerError, RuntimeError) as exc:
        print(f"Failed to initialize scheduler: {exc}", file=sys.stderr)
        return 1
    if not service.initialize():
        print("Failed to initialize scheduler", file=sys.stderr)
        return 1

    try:
        return _run(service, args)
    except TaskSchedulerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())