#!/usr/bin/env python3
"""Interactive terminal console for the hospital backends."""

import asyncio
import os
import shlex
import sys
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from hms_console.clients.registry import HospitalClients
from hms_console.config import get_config
from hms_console.errors import FormValidationError, RouteNotFoundError
from hms_console.routes import HOME, open_view, resolve
from hms_console.utils.logging import LogConfig, setup_logging
from hms_console.views.badges import badge_label, badge_style
from hms_console.views.detail_view import DetailView
from hms_console.views.form_view import BookingForm, FormView
from hms_console.views.list_view import ListView
from hms_console.views.state import ErrorBanner

COMMANDS = {"help", "next", "prev", "page", "filter", "search", "clear", "do", "set", "slot", "submit", "retry"}

STATUS_COLUMNS = {"status", "active", "isActive"}


def parse_assignments(tokens: list[str]) -> dict[str, str]:
    """Turn `key=value` tokens into a dict.

    Raises:
        ValueError: If a token has no `=`
    """
    values = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got '{token}'")
        values[key] = value
    return values


def format_cell(column: str, value: Any) -> Text:
    if column in STATUS_COLUMNS:
        if isinstance(value, bool):
            value = "ACTIVE" if value else "INACTIVE"
        return Text(badge_label(value), style=badge_style(value))
    if value is None:
        return Text("-", style="dim")
    return Text(str(value))


class ConsoleCLI:
    """Interactive console driving the page views directly."""

    def __init__(self, clients: HospitalClients | None = None):
        """Initialize the console."""
        self.clients = clients or HospitalClients(get_config())
        self.console = Console()
        self.view: ListView | DetailView | FormView | None = None
        self.path: str | None = None

    async def start(self) -> None:
        """Start the interactive session."""
        self.console.print(
            Panel.fit(
                "[bold blue]🏥 Hospital Management Console[/bold blue]\n"
                f"Gateway: {self.clients.config.gateway_url}\n"
                "Type a page path (e.g. /appointments) or a command. /help for help.",
                border_style="blue",
            )
        )

        try:
            await self.open(HOME)
            while True:
                user_input = Prompt.ask("\n[bold cyan]hms[/bold cyan]")
                if not user_input.strip():
                    continue
                if user_input.strip().lower() in ["/quit", "/exit", "quit", "exit"]:
                    break
                await self.handle(user_input.strip())
        except (KeyboardInterrupt, EOFError):
            pass
        finally:
            self.console.print("\n[yellow]👋 Goodbye![/yellow]")
            await self.clients.aclose()

    async def handle(self, line: str) -> None:
        """Dispatch one line of input."""
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            self._show_error(str(e))
            return

        head = tokens[0]
        name = head.lstrip("/").lower()
        if head.startswith("/") and name in COMMANDS:
            try:
                await self._run_command(name, tokens[1:])
            except (ValueError, RouteNotFoundError) as e:
                self._show_error(str(e))
            return

        await self.open(head)

    async def open(self, path: str) -> None:
        try:
            match = resolve(path)
        except RouteNotFoundError as e:
            self._show_error(str(e))
            return

        self.path = match.path
        self.view = open_view(match, self.clients)
        await self._load()
        self.render()

    async def _load(self) -> None:
        view = self.view
        with self.console.status("[dim]Loading...[/dim]"):
            if isinstance(view, (ListView, DetailView)):
                await view.load()
            elif isinstance(view, BookingForm):
                await view.load_availability()

    async def _run_command(self, name: str, args: list[str]) -> None:
        view = self.view

        if name == "help":
            self._show_help()
            return

        if view is None:
            raise ValueError("Open a page first")

        if name == "retry":
            banner = self._retryable_error()
            if banner is None:
                raise ValueError("Nothing to retry")
            with self.console.status("[dim]Retrying...[/dim]"):
                await banner.retry()
        elif name in ("next", "prev", "page", "filter", "search", "clear"):
            if not isinstance(view, ListView):
                raise ValueError(f"/{name} only works on list pages")
            await self._list_command(view, name, args)
        elif name == "do":
            await self._action_command(view, args)
        elif name in ("set", "slot", "submit"):
            if not isinstance(view, FormView):
                raise ValueError(f"/{name} only works on form pages")
            if await self._form_command(view, name, args):
                return

        self.render()

    async def _list_command(self, view: ListView, name: str, args: list[str]) -> None:
        if name == "filter":
            for key, value in parse_assignments(args).items():
                view.set_filter(key, value)
            self.console.print(f"[dim]Filters pending: {view.filters} (use /search to apply)[/dim]")
            return

        with self.console.status("[dim]Loading...[/dim]"):
            if name == "next":
                await view.next_page()
            elif name == "prev":
                await view.prev_page()
            elif name == "page":
                if not args or not args[0].isdigit():
                    raise ValueError("Usage: /page N")
                await view.go_to(int(args[0]) - 1)
            elif name == "search":
                await view.search()
            elif name == "clear":
                await view.clear()

    async def _action_command(self, view: ListView | DetailView | FormView, args: list[str]) -> None:
        if isinstance(view, DetailView):
            if not args:
                raise ValueError("Usage: /do ACTION [key=value ...]")
            with self.console.status(f"[dim]Running {args[0]}...[/dim]"):
                await view.run_action(args[0], parse_assignments(args[1:]))
        elif isinstance(view, ListView):
            if len(args) < 2:
                raise ValueError("Usage: /do ACTION ID [key=value ...]")
            with self.console.status(f"[dim]Running {args[0]}...[/dim]"):
                await view.run_row_action(args[1], args[0], parse_assignments(args[2:]))
        else:
            raise ValueError("Form pages have no actions, use /submit")

    async def _form_command(self, view: FormView, name: str, args: list[str]) -> bool:
        """Returns True when the form redirected to another page."""
        if name == "set":
            with self.console.status("[dim]Updating...[/dim]"):
                await view.update_many(parse_assignments(args))
        elif name == "slot":
            if not isinstance(view, BookingForm):
                raise ValueError("/slot only works on the booking form")
            if not args:
                raise ValueError("Usage: /slot HH:MM")
            try:
                view.select_slot(args[0])
            except FormValidationError as e:
                raise ValueError(next(iter(e.field_errors.values()))) from e
        elif name == "submit":
            with self.console.status("[dim]Submitting...[/dim]"):
                redirect = await view.submit()
            if redirect:
                self.console.print(f"[green]✅ Created, opening {redirect}[/green]")
                await self.open(redirect)
                return True
        return False

    def _errors(self) -> list[ErrorBanner]:
        view = self.view
        if isinstance(view, (ListView, DetailView)):
            banners = [view.action_error, view.error]
        elif isinstance(view, BookingForm):
            banners = [view.error, view.slots_error]
        elif isinstance(view, FormView):
            banners = [view.error]
        else:
            banners = []
        return [b for b in banners if b is not None]

    def _current_error(self) -> ErrorBanner | None:
        errors = self._errors()
        return errors[0] if errors else None

    def _retryable_error(self) -> ErrorBanner | None:
        # A refused action has no retry, but the failed load behind it may
        return next((b for b in self._errors() if b.can_retry), None)

    def render(self) -> None:
        view = self.view
        if isinstance(view, ListView):
            self._render_list(view)
        elif isinstance(view, DetailView):
            self._render_detail(view)
        elif isinstance(view, FormView):
            self._render_form(view)

        banner = self._current_error()
        if banner is not None:
            hint = "\n[dim]/retry to try again[/dim]" if self._retryable_error() else ""
            self._show_error(banner.message + hint)

    def _render_list(self, view: ListView) -> None:
        definition = view.definition
        table = Table(title=f"{definition.title}  [dim]{self.path}[/dim]", header_style="bold")
        for column in definition.columns:
            table.add_column(column)
        if definition.row_actions:
            table.add_column("actions", style="dim")

        for item in view.items:
            if not isinstance(item, dict):
                continue
            cells = [format_cell(column, item.get(column)) for column in definition.columns]
            if definition.row_actions:
                cells.append(Text(", ".join(view.row_actions(item))))
            table.add_row(*cells)

        if view.result is not None and view.result.is_empty:
            self.console.print(f"[dim]No {definition.title.lower()} found[/dim]")
        else:
            self.console.print(table)

        pagination = view.pagination
        if pagination is not None and pagination.visible:
            buttons = " ".join(
                f"[bold reverse] {n + 1} [/bold reverse]" if n == pagination.current_page else str(n + 1)
                for n in pagination.page_buttons
            )
            prev = "[dim]‹ Prev[/dim]" if pagination.prev_disabled else "‹ Prev"
            nxt = "[dim]Next ›[/dim]" if pagination.next_disabled else "Next ›"
            self.console.print(f"{pagination.summary}   {prev} {buttons} {nxt}")

        active = {k: v for k, v in view.applied_filters.items() if v not in ("", None, "ALL")}
        if active:
            self.console.print(f"[dim]Filters: {active}[/dim]")

    def _render_detail(self, view: DetailView) -> None:
        if view.entity is None:
            return
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        for key, value in view.entity.items():
            if isinstance(value, (list, dict)):
                value = f"{len(value)} entries" if isinstance(value, list) else "{...}"
            table.add_row(key, format_cell(key, value))

        actions = view.available_actions()
        footer = (
            "Actions: " + ", ".join(f"{t.action} ({t.display_label})" for t in actions)
            if actions
            else "[dim]No actions available[/dim]"
        )
        self.console.print(
            Panel(
                table,
                title=f"[bold green]{view.definition.title}[/bold green] [dim]{self.path}[/dim]",
                subtitle=footer,
                border_style="green",
            )
        )

        for key, value in view.entity.items():
            if isinstance(value, list) and value and isinstance(value[0], dict):
                self._render_rows(key, value)

    def _render_rows(self, title: str, rows: list[dict[str, Any]]) -> None:
        table = Table(title=title, header_style="bold")
        columns = list(rows[0].keys())
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*(format_cell(column, row.get(column)) for column in columns))
        self.console.print(table)

    def _render_form(self, view: FormView) -> None:
        table = Table(title=f"{view.definition.title}  [dim]{self.path}[/dim]", header_style="bold")
        table.add_column("field")
        table.add_column("value")
        table.add_column("error", style="red")
        for name, info in view.definition.form.model_fields.items():
            alias = info.alias or name
            label = f"{alias} *" if info.is_required() else alias
            table.add_row(label, str(view.values.get(alias, "")), view.field_errors.get(alias, ""))
        self.console.print(table)

        if isinstance(view, BookingForm) and view.availability is not None:
            slots = view.available_slots
            text = ", ".join(slots) if slots else "[dim]No free slots on this day[/dim]"
            self.console.print(Panel(text, title="Available slots", border_style="cyan"))

    def _show_error(self, message: str) -> None:
        self.console.print(Panel(message, title="[red]Error[/red]", border_style="red"))

    def _show_help(self) -> None:
        """Show help information."""
        help_text = """
[bold]Navigation:[/bold]
• /patients, /appointments/APT001, /appointments/book?doctorId=DR1 - open a page
• /help - Show this help message
• /quit or /exit - Exit the console

[bold]List pages:[/bold]
• /filter key=value ... - Edit filters, then /search to apply
• /search, /clear - Apply or reset filters
• /next, /prev, /page N - Move between pages
• /do ACTION ID [key=value ...] - Run an inline row action

[bold]Detail pages:[/bold]
• /do ACTION [key=value ...] - e.g. /do cancel reason="Patient request"

[bold]Forms:[/bold]
• /set field=value ... - Fill in fields (camelCase names)
• /slot HH:MM - Pick an available slot on the booking form
• /submit - Create the record and open it

• /retry - Re-issue the request that failed
        """

        self.console.print(Panel(help_text.strip(), title="[cyan]❓ Help[/cyan]", border_style="cyan"))


def main():
    """Main entry point for the console."""
    # Only warnings reach the terminal unless LOG_LEVEL asks for more
    setup_logging(LogConfig(level=os.getenv("LOG_LEVEL", "WARNING"), rich=True))
    config = get_config()
    if len(sys.argv) > 1:
        config.gateway_url = sys.argv[1]

    cli = ConsoleCLI(HospitalClients(config))
    asyncio.run(cli.start())


if __name__ == "__main__":
    main()
