"""
PortfolioHub Command Line Interface

Provides CLI commands for project matching, database setup and
matching metrics reports.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="portfoliohub",
    help="PortfolioHub project matching CLI",
    add_completion=False,
)
console = Console()


@app.command()
def version():
    """Show application version."""
    from portfoliohub import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show configuration."""
    from portfoliohub.utils.config import get_settings
    from portfoliohub.utils.constants import APP_DISPLAY_NAME

    settings = get_settings()

    table = Table(title=f"{APP_DISPLAY_NAME} Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Skills Weight", f"{settings.matching.skills_weight:.2f}")
    table.add_row("Categories Weight", f"{settings.matching.categories_weight:.2f}")
    table.add_row("Default Top N", str(settings.matching.default_top_n))
    table.add_row("Time Goal", f"{settings.matching.time_goal_minutes:g} min")
    table.add_row("Relevance Goal", f"{settings.matching.relevance_goal:.0%}")
    table.add_row("Log Level", settings.logging.level)
    table.add_row("Metrics Directory", str(settings.logging.metrics_dir))

    console.print(table)


@app.command()
def init_db():
    """Initialize the database indexes used by matching."""
    import asyncio

    from portfoliohub.data.database import get_database_manager

    console.print("[yellow]Initializing database...[/yellow]")

    db_manager = get_database_manager()

    console.print("  Checking database connection...")
    if not db_manager.ping():
        console.print("[red]Error: Could not connect to MongoDB.[/red]")
        console.print("[dim]Make sure MongoDB is running and connection settings are correct.[/dim]")
        raise typer.Exit(1)

    console.print("  [green]✓[/green] Connected to MongoDB")

    console.print("  Creating indexes...")
    asyncio.run(db_manager.ensure_indexes())
    console.print("  [green]✓[/green] Indexes created")

    console.print("\n[green]Database initialized successfully![/green]")


@app.command()
def match(
    user_id: str = typer.Argument(..., help="User ID to recommend projects to"),
    top_n: Optional[int] = typer.Option(None, "--top", "-n", help="Number of top matches to show"),
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Search query recorded with the metrics"),
):
    """Recommend open projects to a user."""
    from portfoliohub.core.matching import (
        InvalidMatchRequestError,
        UserNotFoundError,
        get_matching_service,
    )
    from portfoliohub.data.database import get_database_manager

    console.print(f"[yellow]Matching projects for user: {user_id}[/yellow]")

    db_manager = get_database_manager()
    if not db_manager.ping():
        console.print("[red]Error: Could not connect to MongoDB. Run 'init-db' first.[/red]")
        raise typer.Exit(1)

    service = get_matching_service()
    try:
        run = service.recommend_projects(user_id, top_n=top_n, search_query=query)
    except UserNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except InvalidMatchRequestError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(2)

    console.print(
        f"  Scanned [cyan]{run.total_candidates}[/cyan] open project(s) "
        f"in [cyan]{run.duration_ms:.1f}[/cyan] ms"
    )

    if not run.results:
        console.print("[yellow]No open projects found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Top {len(run.results)} Projects")
    table.add_column("Rank", style="dim", width=4)
    table.add_column("Project", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Level", justify="center")
    table.add_column("Skills", justify="right")
    table.add_column("Categories", justify="right")
    table.add_column("Mandatory", justify="center")

    level_colors = {"excellent": "green", "good": "blue", "fair": "yellow", "poor": "red"}

    for i, result in enumerate(run.results, 1):
        level = result.score_level.value
        color = level_colors[level]
        table.add_row(
            str(i),
            result.project_name or result.project_id,
            f"{result.overall_score:.1%}",
            f"[{color}]{level.upper()}[/{color}]",
            f"{result.skills_similarity:.1%}",
            f"{result.categories_similarity:.1%}",
            "✓" if result.satisfies_mandatory_skills else "",
        )

    console.print(table)

    top = run.results[0]
    if top.matched_skill_ids:
        console.print(f"\n[bold]Matched skills (top project):[/bold] {', '.join(sorted(top.matched_skill_ids))}")


def _parse_date(value: str, option: str) -> datetime:
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got {value!r}", param_hint=option)


@app.command()
def metrics_report(
    start: str = typer.Option(..., "--start", "-s", help="Start date (YYYY-MM-DD)"),
    end: str = typer.Option(..., "--end", "-e", help="End date (YYYY-MM-DD, inclusive)"),
    logs_dir: Optional[Path] = typer.Option(None, "--logs-dir", "-d", help="Metrics log directory"),
):
    """Report project matching metrics against the time and relevance targets."""
    from portfoliohub.services.metrics_analyzer import MetricsAnalyzer

    start_date = _parse_date(start, "--start").date()
    end_date = _parse_date(end, "--end").date()
    if end_date < start_date:
        raise typer.BadParameter("End date is before start date", param_hint="--end")

    analyzer = MetricsAnalyzer(logs_dir=logs_dir)
    console.print(analyzer.generate_report(start_date, end_date), markup=False, highlight=False)


if __name__ == "__main__":
    app()
