"""CLI for nazorun.

Usage:
    python -m nazorun list                    # Show available puzzles
    python -m nazorun show 1                  # Puzzle details and stats
    python -m nazorun play 1                  # Solve a puzzle against the clock
    python -m nazorun play 1 --resume         # Continue a suspended run
    python -m nazorun ranking 1               # Leaderboard for a puzzle
    python -m nazorun results                 # List all stored runs
    python -m nazorun report                  # Generate RANKINGS.md
    python -m nazorun whoami | signin | signout
"""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from nazorun import config
from nazorun.catalog import get_puzzle, list_puzzles, load_catalog
from nazorun.errors import NazorunError
from nazorun.identity import IdentityProvider, format_display_name
from nazorun.runner import play_puzzle
from nazorun.scorer import (
    compute_rankings,
    compute_stats,
    generate_report,
    list_all_results,
    load_runs,
    render_ranking,
    render_stats,
)

app = typer.Typer(
    name="nazorun",
    help="Puzzle speedruns in the terminal",
    no_args_is_help=True,
)
console = Console(stderr=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Solve ordered image puzzles against the clock."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _identity_provider() -> IdentityProvider:
    return IdentityProvider(config.identity_path())


@app.command("list")
def cmd_list(
    search: str = typer.Option("", "--search", "-s", help="Filter by title or description"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Puzzles per page"),
) -> None:
    """Show available puzzles."""
    result = list_puzzles(search=search, page=page, limit=limit)
    if not result.items:
        console.print("[yellow]No puzzles found.[/yellow]")
        raise typer.Exit(1)

    table = Table(title="Puzzles", show_header=True, header_style="bold")
    table.add_column("ID", style="green", justify="right")
    table.add_column("Title", min_width=12)
    table.add_column("Description", min_width=30)
    table.add_column("Questions", justify="right")
    table.add_column("Created", style="dim")

    for p in result.items:
        table.add_row(p.id, p.title, p.description, str(p.total_questions), p.created_at[:10])

    console.print()
    console.print(table)
    console.print(
        f"[dim]Page {result.current_page}/{max(result.total_pages, 1)} "
        f"({result.total_count} puzzles)[/dim]"
    )
    console.print()


@app.command("show")
def cmd_show(
    puzzle_id: str = typer.Argument(help="Puzzle id (e.g., '1')"),
) -> None:
    """Show a puzzle's details and stats."""
    try:
        puzzle = get_puzzle(puzzle_id)
    except NazorunError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[bold]{puzzle.title}[/bold] [dim](#{puzzle.id})[/dim]")
    console.print(puzzle.description)
    console.print(
        f"[dim]{puzzle.total_questions} questions · by {puzzle.created_by} · "
        f"{puzzle.created_at[:10]}[/dim]\n"
    )
    render_stats(compute_stats(load_runs(puzzle.id)), console)
    console.print()


@app.command("play")
def cmd_play(
    puzzle_id: str = typer.Argument(help="Puzzle id (e.g., '1')"),
    resume: bool = typer.Option(False, "--resume", "-r", help="Continue a suspended run"),
    advance_delay: Optional[int] = typer.Option(
        None, "--advance-delay", min=0, help="Milliseconds to wait after a correct answer"
    ),
) -> None:
    """Solve a puzzle against the clock."""
    record = play_puzzle(
        puzzle_id,
        console,
        identity_provider=_identity_provider(),
        advance_delay_ms=advance_delay,
        resume=resume,
    )
    if record is None:
        raise typer.Exit(1)


@app.command("ranking")
def cmd_ranking(
    puzzle_id: str = typer.Argument(help="Puzzle id (e.g., '1')"),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Rows to show"),
    best_per_user: bool = typer.Option(False, "--best-per-user", "-b", help="Only each player's best run"),
) -> None:
    """Show the leaderboard for a puzzle."""
    titles = {p.id: p.title for p in load_catalog()}
    entries = compute_rankings(load_runs(puzzle_id), limit=limit, best_per_user=best_per_user)
    render_ranking(puzzle_id, entries, console, title=titles.get(puzzle_id, ""))


@app.command("results")
def cmd_results() -> None:
    """List all stored runs."""
    list_all_results(console)


@app.command("report")
def cmd_report() -> None:
    """Generate RANKINGS.md with a leaderboard per puzzle."""
    path = generate_report(titles={p.id: p.title for p in load_catalog()})
    console.print(f"Report written to {path}")


@app.command("whoami")
def cmd_whoami() -> None:
    """Show the current player."""
    identity = _identity_provider().current_identity()
    if identity is None:
        console.print("[yellow]Not signed in.[/yellow] Playing signs you in anonymously.")
        raise typer.Exit(1)
    kind = "anonymous" if identity.is_anonymous else "registered"
    name = format_display_name(identity.display_name, identity.is_anonymous)
    console.print(f"{name} [dim]({kind}, {identity.id})[/dim]")


@app.command("signin")
def cmd_signin() -> None:
    """Sign in with a fresh anonymous identity."""
    identity = _identity_provider().issue_anonymous_identity()
    console.print(f"Signed in as {identity.display_name}")


@app.command("signout")
def cmd_signout() -> None:
    """Forget the current identity."""
    if _identity_provider().sign_out():
        console.print("Signed out.")
    else:
        console.print("[yellow]Not signed in.[/yellow]")


if __name__ == "__main__":
    app()
