import typer
from rich.console import Console
from rich.table import Table
from typing import Optional, List
from datetime import datetime, date

from practice import database
from practice.config import settings
from practice.crud import (
    create_problem, update_problem, delete_problem, require_problem,
    list_problems, get_attempts, count_attempts_by_problem, get_app_settings, update_app_settings
)
from practice.database import transaction, init_db, drop_db
from practice.engine import DailySelector
from practice.errors import PracticeError
from practice.logging_config import init_logging
from practice.mastery import Label, MasteryPolicy
from practice.schemas import ProblemCreate, ProblemUpdate, ProblemResponse, AttemptResponse, SettingsUpdate

app = typer.Typer(help="Daily Practice CLI - spaced review of coding-interview problems")
console = Console()

LABEL_STYLES = {
    "new": "white",
    "struggling": "red",
    "okay": "yellow",
    "mastered": "green",
}


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")):
    """Configure logging before any command runs"""
    init_logging("DEBUG" if verbose else settings.log_level, settings.log_format)


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise typer.BadParameter(f"Invalid date {value!r}, expected YYYY-MM-DD")


def _fail(error: Exception):
    console.print(f"[red]✗[/red] {error}")
    raise typer.Exit(code=1)


def _label(value) -> str:
    value = Label(value).value
    return f"[{LABEL_STYLES[value]}]{value}[/{LABEL_STYLES[value]}]"


def _selector() -> DailySelector:
    return DailySelector()


def _print_daily(rows, day: date):
    if not rows:
        console.print(f"[yellow]No eligible problems for {day}[/yellow]")
        return

    table = Table(title=f"Practice set for {day}", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Problem", style="bold")
    table.add_column("Label")
    table.add_column("Last Reviewed")
    table.add_column("Done", justify="center")

    for row in rows:
        table.add_row(
            str(row.problem_id),
            row.name,
            _label(row.label),
            str(row.last_reviewed or "-"),
            "[green]✓[/green]" if row.completed else ""
        )

    console.print(table)


@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")


@app.command()
def reset_db(yes: bool = typer.Option(False, "--yes", help="Skip confirmation")):
    """Delete all data and reinitialize database (WARNING: irreversible!)"""
    if not yes and not typer.confirm("⚠️  This will DELETE ALL DATA. Are you sure?"):
        console.print("[yellow]Cancelled.[/yellow]")
        return

    console.print("[yellow]Dropping all tables...[/yellow]")
    drop_db(database.engine)
    console.print("[yellow]Recreating tables...[/yellow]")
    init_db(database.engine)
    console.print("[green]✓[/green] Database reset complete! All data deleted.")


@app.command()
def add(
    name: str = typer.Option(..., prompt="Problem name"),
    link: str = typer.Option(..., prompt="Problem link"),
    insight: Optional[str] = typer.Option(None, help="Key insight to remember")
):
    """Add a problem to the catalogue"""
    try:
        with transaction() as db:
            problem = ProblemResponse.model_validate(
                create_problem(db, ProblemCreate(name=name, link=link, key_insight=insight))
            )
    except PracticeError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Problem added! ID: {problem.id}")


@app.command()
def edit(
    problem_id: int,
    name: Optional[str] = typer.Option(None, help="New name"),
    link: Optional[str] = typer.Option(None, help="New link"),
    insight: Optional[str] = typer.Option(None, help="New key insight (empty to clear)")
):
    """Edit a problem's name, link or key insight"""
    updates = {}
    if name is not None:
        updates["name"] = name
    if link is not None:
        updates["link"] = link
    if insight is not None:
        updates["key_insight"] = insight

    try:
        with transaction() as db:
            update_problem(db, problem_id, ProblemUpdate(**updates))
    except PracticeError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Problem {problem_id} updated!")


@app.command()
def delete(problem_id: int, yes: bool = typer.Option(False, "--yes", help="Skip confirmation")):
    """Delete a problem and its history"""
    if not yes and not typer.confirm(f"Delete problem {problem_id} and all its attempts?"):
        console.print("[yellow]Cancelled.[/yellow]")
        return

    try:
        with transaction() as db:
            delete_problem(db, problem_id)
    except PracticeError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Problem {problem_id} deleted")


@app.command()
def problems(
    label: Optional[Label] = typer.Option(None, help="Only show problems with this label"),
    search: Optional[str] = typer.Option(None, "--search", help="Only show problems whose name contains this text"),
    on: Optional[str] = typer.Option(None, "--date", help="Reference date (YYYY-MM-DD)")
):
    """List all problems"""
    day = _parse_date(on) or _selector().clock.today()
    with transaction() as db:
        rows = [ProblemResponse.model_validate(p) for p in list_problems(db, label, search)]
        attempts = count_attempts_by_problem(db)

    if not rows:
        console.print("[yellow]No problems found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Problem", style="bold")
    table.add_column("Label")
    table.add_column("Reviews", justify="right")
    table.add_column("Attempts", justify="right")
    table.add_column("Last Reviewed")
    table.add_column("Due", style="blue")

    for p in rows:
        due = MasteryPolicy.due_date(p.label, p.last_reviewed)
        if MasteryPolicy.is_eligible(p.label, p.last_reviewed, day):
            due_str = "now"
        else:
            due_str = str(due)
        table.add_row(str(p.id), p.name, _label(p.label), str(p.review_count),
                      str(attempts.get(p.id, 0)), str(p.last_reviewed or "-"), due_str)

    console.print(table)


@app.command()
def today(on: Optional[str] = typer.Option(None, "--date", help="Practice date (YYYY-MM-DD)")):
    """Show the practice set for today, creating it if needed"""
    selector = _selector()
    day = _parse_date(on) or selector.clock.today()
    try:
        rows = selector.get_or_create_today(day)
    except PracticeError as e:
        _fail(e)
    _print_daily(rows, day)


@app.command()
def refresh(on: Optional[str] = typer.Option(None, "--date", help="Practice date (YYYY-MM-DD)")):
    """Redraw every unfinished problem in today's set"""
    selector = _selector()
    day = _parse_date(on) or selector.clock.today()
    try:
        rows = selector.refresh_today(day)
    except PracticeError as e:
        _fail(e)
    console.print("[green]✓[/green] Practice set refreshed")
    _print_daily(rows, day)


@app.command()
def replace(
    problem_id: int,
    on: Optional[str] = typer.Option(None, "--date", help="Practice date (YYYY-MM-DD)")
):
    """Swap one unfinished problem for another eligible one"""
    selector = _selector()
    day = _parse_date(on) or selector.clock.today()
    try:
        row = selector.replace_one(problem_id, day)
    except PracticeError as e:
        _fail(e)
    console.print(f"[green]✓[/green] Replaced {problem_id} with {row.problem_id}: {row.name}")


@app.command()
def complete(
    problem_id: int,
    outcome: str = typer.Argument(..., help="struggling, okay or mastered"),
    on: Optional[str] = typer.Option(None, "--date", help="Practice date (YYYY-MM-DD)")
):
    """Report how a problem from today's set went"""
    selector = _selector()
    day = _parse_date(on) or selector.clock.today()
    try:
        problem = selector.complete(problem_id, outcome, day)
    except PracticeError as e:
        _fail(e)
    console.print(f"[green]✓[/green] {problem.name} is now {_label(problem.label)} "
                  f"(reviews: {problem.review_count})")


@app.command()
def review(
    problem_id: int,
    outcome: str = typer.Argument(..., help="struggling, okay or mastered"),
    insight: Optional[str] = typer.Option(None, help="Replace the key insight"),
    on: Optional[str] = typer.Option(None, "--date", help="Review date (YYYY-MM-DD)")
):
    """Record an attempt for any problem, outside the daily set"""
    selector = _selector()
    day = _parse_date(on) or selector.clock.today()
    try:
        problem = selector.review(problem_id, outcome, key_insight=insight, day=day)
    except PracticeError as e:
        _fail(e)
    console.print(f"[green]✓[/green] {problem.name} is now {_label(problem.label)} "
                  f"(reviews: {problem.review_count})")


@app.command()
def history(problem_id: int):
    """Show the attempt history of a problem"""
    try:
        with transaction() as db:
            problem = ProblemResponse.model_validate(require_problem(db, problem_id))
            attempts = [AttemptResponse.model_validate(a) for a in get_attempts(db, problem_id)]
    except PracticeError as e:
        _fail(e)

    console.print(f"\n[bold]{problem.name}[/bold] ({_label(problem.label)}, {problem.review_count} reviews)")
    if problem.key_insight:
        console.print(f"  Insight: {problem.key_insight}")

    if not attempts:
        console.print("[yellow]No attempts yet[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("When", style="cyan")
    table.add_column("Outcome")
    for attempt in attempts:
        table.add_row(attempt.attempted_at.strftime("%Y-%m-%d %H:%M"), _label(attempt.outcome))
    console.print(table)


@app.command()
def stats(on: Optional[str] = typer.Option(None, "--date", help="Reference date (YYYY-MM-DD)")):
    """Show progress statistics"""
    selector = _selector()
    day = _parse_date(on) or selector.clock.today()
    try:
        summary = selector.stats(day)
    except PracticeError as e:
        _fail(e)

    console.print(f"\n[bold]Progress as of {day}[/bold]")
    console.print(f"  Total problems: {summary.total_problems}")
    console.print(f"  Mastered: {summary.mastered_problems}")
    console.print(f"  Current streak: {summary.current_streak} days")
    console.print(f"  Ready for review: {summary.ready_for_review}")


@app.command()
def tip(
    exclude: Optional[List[int]] = typer.Option(None, "--exclude", help="Problem IDs already shown"),
    on: Optional[str] = typer.Option(None, "--date", help="Practice date (YYYY-MM-DD)")
):
    """Show a key insight from one of today's problems"""
    selector = _selector()
    day = _parse_date(on) or selector.clock.today()
    try:
        insight = selector.random_insight(exclude or [], day)
    except PracticeError as e:
        _fail(e)

    if insight is None:
        console.print("[yellow]No more tips for today[/yellow]")
        return
    console.print(f"[bold]{insight.problem_name}[/bold] (ID {insight.problem_id})")
    console.print(f"  💡 {insight.key_insight}")


@app.command()
def set_count(count: int = typer.Argument(..., help="Problems per day (3-10)")):
    """Change how many problems are drawn per day"""
    try:
        data = SettingsUpdate(daily_problem_count=count)
    except ValueError as e:
        raise typer.BadParameter(f"Daily count must be between 3 and 10 (got {count})") from e

    try:
        with transaction() as db:
            update_app_settings(db, data)
    except PracticeError as e:
        _fail(e)
    console.print(f"[green]✓[/green] Daily problem count set to {count}")


@app.command()
def show_settings():
    """Show stored preferences"""
    with transaction() as db:
        row = get_app_settings(db)
        count = row.daily_problem_count if row else settings.daily_problem_count
    console.print(f"  Daily problem count: {count}")
    console.print(f"  Database: {settings.database_url}")


if __name__ == "__main__":
    app()
