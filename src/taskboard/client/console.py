"""Interactive terminal front end for the task list.

Renders a :class:`TaskListView` with rich and turns typed commands into
view actions::

    add Buy milk      create a task
    done 3            toggle completion of task 3
    edit 3 New title  rename task 3
    rm 3              delete task 3 (asks for confirmation)
    refresh | retry | dismiss | help | quit
"""

from __future__ import annotations

from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .view import TaskListView, ViewStatus

HELP_TEXT = (
    "[bold]Commands:[/bold] add <title> | done <id> | edit <id> <title> | rm <id> | "
    "refresh | retry | dismiss | help | quit"
)

_STATUS_STYLES = {
    ViewStatus.IDLE: "dim",
    ViewStatus.LOADING: "yellow",
    ViewStatus.READY: "green",
    ViewStatus.ERRORED: "red",
}


def render_tasks(view: TaskListView) -> Table:
    table = Table(title="Tasks", show_lines=False)
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Done", justify="center")
    table.add_column("Title")

    for task in view.tasks:
        title = escape(task.title)
        if view.is_editing(task.id):
            title = f"{title} [yellow](editing: {escape(view.drafts[task.id])})[/yellow]"
        mark = "[green]✔[/green]" if task.is_done else "[red]✘[/red]"
        table.add_row(str(task.id), mark, title)
    return table


class ConsoleApp:
    def __init__(
        self,
        view: TaskListView,
        console: Optional[Console] = None,
        input_func: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.view = view
        self.console = console or Console()
        self._input = input_func or self.console.input

    def render(self) -> None:
        view = self.view
        self.console.print(render_tasks(view))
        style = _STATUS_STYLES[view.status]
        self.console.print(f"[{style}]{view.status.value}[/{style}] · {len(view.tasks)} task(s)")
        if view.error:
            self.console.print(f"[bold red]Error:[/bold red] {escape(view.error)}  [dim](retry / dismiss)[/dim]")

    def _parse_id(self, raw: str) -> Optional[int]:
        try:
            return int(raw)
        except ValueError:
            self.console.print(f"[red]Not a task id: {escape(raw)}[/red]")
            return None

    def handle(self, line: str) -> bool:
        """Apply one command. Returns ``False`` when the user asked to quit."""
        command, _, rest = line.strip().partition(" ")
        rest = rest.strip()
        view = self.view

        if command in ("quit", "exit", "q"):
            return False
        if command == "":
            return True
        if command == "help":
            self.console.print(HELP_TEXT)
        elif command == "add":
            view.create(rest if rest else None)
        elif command in ("refresh", "ls"):
            view.load()
        elif command == "retry":
            view.retry()
        elif command == "dismiss":
            view.dismiss_error()
        elif command in ("done", "edit", "rm"):
            raw_id, _, text = rest.partition(" ")
            task_id = self._parse_id(raw_id)
            if task_id is None:
                return True
            if view.task(task_id) is None:
                self.console.print(f"[red]No task with id {task_id}[/red]")
                return True
            if command == "done":
                view.toggle(task_id)
            elif command == "edit":
                view.begin_edit(task_id)
                view.set_draft(task_id, text)
                if not view.commit_edit(task_id):
                    view.cancel_edit(task_id)
            else:
                view.request_delete(task_id)
                answer = self._input(f"Delete task {task_id}? [y/N] ")
                if answer.strip().lower() in ("y", "yes"):
                    view.confirm_delete()
                else:
                    view.cancel_delete()
        else:
            self.console.print(f"[red]Unknown command: {escape(command)}[/red]")
            self.console.print(HELP_TEXT)
        return True

    def run(self) -> None:
        self.view.load()
        self.console.print(HELP_TEXT)
        while True:
            self.render()
            try:
                line = self._input("> ")
            except (EOFError, KeyboardInterrupt):
                break
            if not self.handle(line):
                break
