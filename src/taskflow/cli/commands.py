# src/taskflow/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from datetime import date
from typing import cast

from ..core.state import AppState
from ..tasks import task_api
from ..tasks.errors import NotFoundError, TaskFlowError, ValidationError
from ..tasks.form import FormMode
from ..tasks.task_models import Draft, Task
from ..tasks.views import due_date_label, is_overdue

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Task errors (validation, unknown id) become the reply text.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except TaskFlowError as e:
            logger.debug("Command /%s rejected: %s", name, e)
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def format_task(state: AppState, task: Task, today: date | None = None) -> str:
    box = "[x]" if task.is_completed else "[ ]"
    meta = [task.priority.value]
    category = task_api.category_for(state, task)
    if category is not None:
        meta.append(category.name)
    label = due_date_label(task.due_date, today)
    if label:
        meta.append(f"due {label}")
    if is_overdue(task, today):
        meta.append("OVERDUE")
    line = f"{box} {task.id}  {task.title}  ({', '.join(meta)})"
    if task.description:
        line += f"\n      {task.description}"
    return line


def format_draft(draft: Draft, mode: FormMode | None, error: str | None = None) -> str:
    heading = "Edit Task" if mode is FormMode.EDIT else "Create New Task"
    lines = [
        f"{heading}:",
        f"  title:    {draft.title}",
        f"  desc:     {draft.description}",
        f"  due:      {draft.due_date.isoformat() if draft.due_date else '-'}",
        f"  priority: {draft.priority}",
        f"  category: {draft.category_id}",
    ]
    if error:
        lines.append(f"  error:    {error}")
    lines.append("Use /set <field> <value>, /save or /cancel.")
    return "\n".join(lines)


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = task_api.visible_tasks(state)
    view = state.view
    header = f"Tasks (status={view.status}, category={view.category}, search={view.search!r}):"
    if not tasks:
        hint = (
            "Try adjusting your filters or search term"
            if view.has_active_filters()
            else "Create your first task to get started!"
        )
        return f"{header}\n  No tasks found. {hint}"
    today = date.today()
    return "\n".join([header, *(format_task(state, t, today) for t in tasks)])


def cmd_stats(state: AppState, args: list[str]) -> str:
    s = task_api.stats(state)
    return (
        "Stats:\n"
        f"  Total:     {s.total}\n"
        f"  Completed: {s.completed}\n"
        f"  Pending:   {s.pending}\n"
        f"  Overdue:   {s.overdue}"
    )


def cmd_cats(state: AppState, args: list[str]) -> str:
    lines = ["Categories:"]
    for c in task_api.categories(state):
        lines.append(f"  {c.id}  {c.name}  {c.color}")
    return "\n".join(lines)


def cmd_new(state: AppState, args: list[str]) -> str:
    state.form.begin()
    if args:
        state.form.set_field("title", " ".join(args))
    draft = cast(Draft, state.form.draft)
    return format_draft(draft, state.form.mode)


def cmd_edit(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /edit <id>"
    task = state.task_store.get(args[0])
    if task is None:
        raise NotFoundError(args[0])
    draft = state.form.begin(task)
    return format_draft(draft, state.form.mode)


def cmd_set(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /set <title|desc|due|priority|category> <value>"
    if not state.form.is_open:
        return "No task form is open. Use /new or /edit <id> first."
    field_name = args[0].lower()
    value = " ".join(args[1:])
    if field_name in ("category", "category_id", "categoryid"):
        field_name = "category_id"
        value = _resolve_category(state, value)
    state.form.set_field(field_name, value)
    return format_draft(cast(Draft, state.form.draft), state.form.mode)


def cmd_form(state: AppState, args: list[str]) -> str:
    f = task_api.form_state(state)
    if not f.is_open or f.draft is None:
        return "No task form is open."
    return format_draft(f.draft, f.mode, f.last_error)


def cmd_save(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not state.form.is_open:
        return "No task form is open."
    editing = state.form.mode is FormMode.EDIT
    try:
        task = state.form.commit()
    except ValidationError as e:
        return f"{e} (form is still open)"
    if emit:
        with contextlib.suppress(Exception):
            emit(format_task(state, task))
    return task_api.MSG_UPDATED if editing else task_api.MSG_CREATED


def cmd_cancel(state: AppState, args: list[str]) -> str:
    if not state.form.is_open:
        return "No task form is open."
    state.form.cancel()
    return "Form discarded."


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <id>"
    _task, notice = task_api.toggle_task(state, args[0])
    return notice


def cmd_rm(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /rm <id>"
    return task_api.delete_task(state, args[0])


def cmd_status(state: AppState, args: list[str]) -> str:
    value = args[0] if args else "all"
    task_api.set_status_filter(state, value)
    return f"Status filter: {state.view.status}"


def cmd_category(state: AppState, args: list[str]) -> str:
    value = " ".join(args) if args else "all"
    task_api.set_category_filter(state, _resolve_category(state, value))
    return f"Category filter: {state.view.category}"


def cmd_search(state: AppState, args: list[str]) -> str:
    task_api.set_search_text(state, " ".join(args))
    return f"Search: {state.view.search!r}" if state.view.search else "Search cleared."


def _resolve_category(state: AppState, value: str) -> str:
    """Accept a category id or a (case-insensitive) category name."""
    v = value.strip()
    for c in state.categories:
        if v.lower() == c.name.lower():
            return c.id
    return v


def handle_text(state: AppState, text: str) -> str:
    """
    Plain (non-command) input.

    With a form open the text becomes the draft title; otherwise it quick-adds a task.
    """
    try:
        if state.form.is_open:
            state.form.set_field("title", text)
            return format_draft(cast(Draft, state.form.draft), state.form.mode)
        task = task_api.create_task(state, {"title": text})
    except TaskFlowError as e:
        return str(e)
    return f"{task_api.MSG_CREATED}\n{format_task(state, task)}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List visible tasks (filters applied).", aliases=["ls"])
registry.register("stats", cmd_stats, help_text="Show total/completed/pending/overdue counts.")
registry.register("cats", cmd_cats, help_text="Show categories.")
registry.register("new", cmd_new, help_text="Open the create form: /new [title].", aliases=["add"])
registry.register("edit", cmd_edit, help_text="Open the edit form: /edit <id>.")
registry.register("set", cmd_set, help_text="Set a form field: /set <title|desc|due|priority|category> <value>.")
registry.register("form", cmd_form, help_text="Show the open form.")
registry.register("save", cmd_save, help_text="Commit the open form.")
registry.register("cancel", cmd_cancel, help_text="Discard the open form.")
registry.register("done", cmd_done, help_text="Toggle completed/pending: /done <id>.", aliases=["toggle"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["del"])
registry.register("status", cmd_status, help_text="Status filter: /status all|pending|completed.")
registry.register("category", cmd_category, help_text="Category filter: /category all|<id>|<name>.")
registry.register("search", cmd_search, help_text="Search title/description: /search [text].")
