#!/usr/bin/env python3

from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from jobtracker.core.application import ApplicationStatus, JobApplication
from jobtracker.core.exceptions import InvalidStatusError, StoreError
from jobtracker.core.filters import ApplicationFilter, SortOrder
from jobtracker.notifier.ntfy import NtfyNotifier
from jobtracker.notifier.reminders import NullReminderScheduler, ReminderScheduler
from jobtracker.store import ApplicationStore
from jobtracker.utils.config import get_settings
from jobtracker.utils.database import get_db
from jobtracker.utils.formatting import format_date, header_style, interview_date_text, row_style

app = typer.Typer(name="jobtracker", add_completion=False)
console = Console()

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%d %H:%M"]


def build_scheduler() -> ReminderScheduler:
    settings = get_settings()
    if not settings.notifications.enabled or not settings.ntfy_topic:
        return NullReminderScheduler()
    return ReminderScheduler(
        NtfyNotifier(settings.ntfy_topic),
        lead_time=timedelta(hours=settings.notifications.reminder_lead_hours),
    )


def get_store() -> ApplicationStore:
    return ApplicationStore(get_db(), scheduler=build_scheduler())


@contextmanager
def store_errors():
    try:
        yield
    except StoreError as e:
        cause = f" ({e.__cause__})" if e.__cause__ else ""
        console.print(f"[red]❌ {e}{cause}[/red]")
        raise typer.Exit(1)


def _lookup(store: ApplicationStore, app_id: int) -> JobApplication:
    for cached in store.applications:
        if cached.id == app_id:
            return cached
    console.print(f"[red]No application with ID {app_id}[/red]")
    raise typer.Exit(1)


def _render(apps: list[JobApplication], title: str) -> None:
    if not apps:
        console.print("[yellow]No applications found[/yellow]")
        return

    locale = get_settings().display.locale
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("★")
    table.add_column("Company", style="cyan")
    table.add_column("Title")
    table.add_column("Applied")
    table.add_column("Status")
    table.add_column("Interview")

    for job_app in apps:
        table.add_row(
            str(job_app.id),
            "★" if job_app.is_favourite else "",
            job_app.company[:30],
            job_app.title[:40],
            format_date(job_app.date_applied, locale),
            job_app.status,
            interview_date_text(job_app, locale),
            style=row_style(job_app),
        )

    console.print(table)


@app.command()
def add(
    company: str = typer.Argument(...),
    title: str = typer.Argument(...),
    date_applied: Optional[datetime] = typer.Option(None, "--date", "-d", formats=DATE_FORMATS),
):
    with store_errors():
        store = get_store()
        job_app = store.add(company, title, date_applied or datetime.now())
    console.print(f"[green]✅ Tracking {job_app.title} at {job_app.company} (ID {job_app.id})[/green]")


@app.command(name="list")
def list_applications(
    app_filter: ApplicationFilter = typer.Option(ApplicationFilter.NONE, "--filter", "-f"),
    sort: Optional[SortOrder] = typer.Option(None, "--sort", "-s"),
):
    with store_errors():
        store = get_store()
        apps = store.query(app_filter, sort or get_settings().display.default_sort)
    _render(apps, f"Applications ({app_filter.value})")


@app.command()
def show(app_id: int = typer.Argument(...)):
    with store_errors():
        job_app = _lookup(get_store(), app_id)

    locale = get_settings().display.locale
    style = header_style(job_app)
    console.print(Panel.fit(
        f"[cyan]Title:[/cyan] {job_app.title}\n"
        f"[cyan]Applied:[/cyan] {format_date(job_app.date_applied, locale)}\n"
        f"[cyan]Status:[/cyan] {job_app.status}\n"
        f"[cyan]Interview:[/cyan] {interview_date_text(job_app, locale)}\n"
        f"[cyan]Favourite:[/cyan] {'yes' if job_app.is_favourite else 'no'}",
        title=f"[{style}]{escape(job_app.company)}[/{style}]",
        border_style=style,
    ))


@app.command()
def favourite(app_id: int = typer.Argument(...)):
    with store_errors():
        store = get_store()
        job_app = store.toggle_favourite(_lookup(store, app_id))
    state = "favourited" if job_app.is_favourite else "unfavourited"
    console.print(f"[green]✅ {job_app.company} {state}[/green]")


@app.command()
def status(
    app_id: int = typer.Argument(...),
    new_status: str = typer.Argument(..., help='"Applied", "Interview N", "Accepted" or "Rejected"'),
    date: Optional[datetime] = typer.Option(None, "--date", "-d", formats=DATE_FORMATS),
):
    try:
        parsed = ApplicationStatus.parse(new_status)
    except InvalidStatusError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    with store_errors():
        store = get_store()
        job_app = _lookup(store, app_id)

        if not store.can_transition(job_app):
            console.print(f"[red]{job_app.company} is already {job_app.status}[/red]")
            raise typer.Exit(1)
        if parsed.is_interview and not store.can_advance_to_interview(job_app, parsed.level):
            console.print(f"[red]Cannot move {job_app.company} from {job_app.status} to {parsed}[/red]")
            raise typer.Exit(1)

        job_app = store.update_status(job_app, parsed, date)

    console.print(f"[green]✅ {job_app.company}: {job_app.status}[/green]")


@app.command()
def delete(app_id: int = typer.Argument(...)):
    with store_errors():
        store = get_store()
        job_app = _lookup(store, app_id)
        store.delete(job_app)
    console.print(f"[green]🗑️ Deleted {job_app.title} at {job_app.company}[/green]")


@app.command()
def search(company: str = typer.Argument(...)):
    with store_errors():
        apps = get_store().find_by_company(company)
    _render(apps, f"Applications to {company}")


@app.command()
def stats():
    with store_errors():
        counts = get_store().stats()

    table = Table(title="Application Statistics")
    table.add_column("Stage", style="cyan")
    table.add_column("Count", style="yellow")
    for stage, count in counts.items():
        table.add_row(stage.capitalize(), str(count))
    console.print(table)


@app.command()
def remind():
    """Send push reminders for interviews coming up"""
    scheduler = build_scheduler()
    if isinstance(scheduler, NullReminderScheduler):
        console.print("[yellow]Reminders are disabled. Set NTFY_TOPIC to enable them.[/yellow]")
        return

    now = datetime.now()
    with store_errors():
        store = ApplicationStore(get_db(), scheduler=scheduler)
        for job_app in store.query(ApplicationFilter.INTERVIEW):
            if job_app.reminded_at is None and job_app.important_date and job_app.important_date >= now:
                scheduler.schedule(job_app)

        sent = scheduler.dispatch_due(now)
        for reminder in sent:
            store.mark_reminded(reminder.app, now)

    console.print(f"[green]🔔 Sent {len(sent)} reminder(s), {len(scheduler.pending())} still pending[/green]")


@app.command()
def config():
    settings = get_settings()
    console.print(Panel.fit(
        f"[cyan]Database:[/cyan] {settings.database.path}\n"
        f"[cyan]Log file:[/cyan] {settings.logging.file}\n"
        f"[cyan]Locale:[/cyan] {settings.display.locale}\n"
        f"[cyan]Default sort:[/cyan] {settings.display.default_sort.value if settings.display.default_sort else 'none'}\n"
        f"[cyan]Reminders:[/cyan] {NtfyNotifier(settings.ntfy_topic).get_subscribe_url() if settings.ntfy_topic else 'disabled'}",
        title="Configuration"
    ))


def main():
    app()


if __name__ == "__main__":
    main()
