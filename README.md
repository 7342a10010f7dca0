# cronat

`cronat` lets you manage scheduled jobs on a POSIX system from one place. It
handles recurring `cron` jobs and one-off `at` jobs. It does this by running
the system's `crontab`, `at` and `atq` commands. It also keeps a log of every
task it knows about, including `at` jobs that have already run.

## Requirements

- Python 3.10 or later.
- `crontab`, `at` and `atq` must be on your `PATH`.
- The `atd` service must be running, or `at` jobs will not fire.

`at` jobs are submitted with a shell here-string (`at -q QUEUE <<< 'COMMAND' TIME`).
The shell that runs commands must therefore support `<<<`. The command is
placed inside single quotes, so a command that itself contains a single quote
will not be submitted correctly.

## Installation

```
pip install .
```

## Where the task logs live

Both logs are kept in `~/.config/task-manager/`:

- `cronTasks.log` holds the cron tasks.
- `atTasks.log` holds the at tasks.

The directory is created the first time it is needed. If `HOME` is not set,
the home directory is taken from the password database. In both logs each
task is one line, with its fields separated by ` || `.

## Command line

Every run first brings the logs up to date with the system:

- Lines in the crontab are merged into the cron log. A cron task that is in
  the log but no longer in the crontab is marked stopped.
- Jobs in `atq` are merged into the at log. An active at task that has left
  the queue is marked executed.

Run `cronat --help` to see the full list of subcommands. A summary:

| Subcommand | What it does |
|---|---|
| `list-at [--queue a-z] [--status all\|pending\|completed] [--sort time\|queue\|status\|id] [--descending]` | List the at tasks. |
| `list-cron [--status all\|active\|stopped]` | List the cron tasks. |
| `add-at COMMAND --time HH:MM [--date YYYY-MM-DD \| --when today\|tomorrow\|next-week\|next-month] [--comment TEXT] [--queue a-z]` | Schedule a one-off job. |
| `add-cron COMMAND (--preset NAME \| --minutes/--hours/--days/--months/--weekdays ...) [--comment TEXT]` | Add a recurring job. |
| `remove-at TASK_ID` | Cancel an at job and remove it from the log. |
| `remove-cron TASK_ID` | Remove a cron task. |
| `toggle-cron TASK_ID` | Start or stop a cron task. |
| `describe-at TASK_ID TEXT` | Change the description of an at task. |
| `describe-cron TASK_ID TEXT` | Change the description of a cron task. |
| `schedule-cron TASK_ID EXPRESSION` | Change the schedule of a cron task. |
| `clear-at` | Cancel every active at job and empty the at log. |
| `clear-cron` | Remove every cron task and install an empty crontab. |
| `sync` | Only synchronise with the system. |

The list commands print one task per line, with tab-separated columns:

- `list-at` prints the id, description, command, run time, `pending` or
  `executed`, the at job number and the queue.
- `list-cron` prints the id, description, command, schedule, creation time and
  `active` or `stopped`.

### Options for `add-at`

- If you give neither `--date` nor `--when`, the job runs today.
- `next-month` keeps the same day of the month. If that month is shorter, the
  last day of the month is used instead.
- The run time must not be in the past.

### Options for `add-cron`

If you give no `--preset`, the five fields are joined into the schedule, and
any field you leave empty becomes `*`. At least one field must be filled in.
The presets are:

| Preset         | Expression  |
|----------------|-------------|
| `every-minute` | `* * * * *` |
| `hourly`       | `0 * * * *` |
| `daily`        | `0 0 * * *` |
| `weekly`       | `0 0 * * 0` |
| `monthly`      | `0 0 1 * *` |

A schedule is accepted only if it has five fields. Each field must be one of
the following: `*`, a number, a range `N-M`, a list `N,M,...`, a step `*/N` or
a stepped range `N-M/S`. Names such as `mon` or `jan`, and macros such as
`@daily`, are rejected.

### Exit status

| Status | Meaning |
|---|---|
| `0` | Success. |
| `1` | The scheduler failed, or the task id is unknown. |
| `2` | The arguments are invalid. |

### Task ids

- A cron task's id is `cron_` followed by a hash of its command and schedule.
- An at task's id is `at_` followed by a hash of its command and run time.

### How the crontab is rewritten

Every time the cron tasks change, the user's crontab is replaced by the
active tasks in the log. Stopped tasks stay in the log but are left out of the
crontab. Some lines in the crontab are not kept when it is rewritten:
comments, and any line that is not a five-field schedule followed by a
command (for example, variable assignments).

## Library use

```python
from datetime import datetime, timedelta

from cronat.service import TaskSchedulerService, AtTaskFilter, AtTaskSort

service = TaskSchedulerService()
service.initialize()

service.add_cron_task("0 0 * * *", "backup.sh", "nightly backup")
for task in service.get_cron_tasks_filtered(show_all=False, show_active=True):
    print(task.id, task.cron_expression, task.command)

service.add_at_task(datetime.now() + timedelta(hours=1), "echo done", "reminder", "a")
pending = service.get_at_tasks_filtered(
    AtTaskFilter(queue_filter="a", show_only_pending=True),
    AtTaskSort(by_scheduled_time=True),
)
```

The main modules are:

- `cronat.service` (described below).
- `cronat.models` holds the task records: `Task`, `CronTask` and `AtTask`.
- `cronat.cronparser` and `cronat.atparser` read `crontab -l` output, `atq`
  output and the log files.
- `cronat.cronmanager.CronManager` and `cronat.atmanager.AtManager` keep the
  tasks in step with the system. Each takes an executor, and optionally a
  `log_path`.

`TaskSchedulerService` builds its managers with a `SystemExecutor` unless you
pass `cron_manager` and `at_manager` yourself.

Executors derive from `cronat.executor.CommandExecutor`. An executor has two
parts:

- `execute(command)` returns the command's standard output.
- `last_exit_code` holds the exit status of the last command.

`SystemExecutor` runs commands through the shell.

Errors raised by the package derive from
`cronat.exceptions.TaskSchedulerError`.

## What it does not do

There is no graphical interface. All work is done through the `cronat`
command or from Python. Nothing runs in the background: the logs are brought
up to date with the system only when a command is run, or when
`initialize()` or one of the `*sync*` methods is called.