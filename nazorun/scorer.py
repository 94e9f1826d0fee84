"""nazorun scorer — stores runs, ranks them, renders Rich tables and reports.

Runs are stored as <results root>/<puzzle_id>/<timestamp>_<session_id>/run.json.
Rankings only consider completed runs, fastest first; equal times share a
rank. Also generates a persistent RANKINGS.md covering every puzzle.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from nazorun import config
from nazorun.models import PuzzleStats, RankingEntry, RunRecord
from nazorun.timing import format_compact, format_precise, format_short

_MEDALS = {1: "gold1", 2: "grey70", 3: "dark_orange3"}


def _results_root() -> Path:
    return config.results_root()


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

def run_dir_for(record: RunRecord) -> Path:
    """Directory a record is saved under."""
    return _results_root() / record.puzzle_id / f"{record.timestamp}_{record.session_id}"


def save_run(record: RunRecord) -> Path:
    """Persist a run record and return its directory."""
    run_dir = run_dir_for(record)
    record.save(run_dir)
    return run_dir


def load_runs(puzzle_id: str) -> list[RunRecord]:
    """Every saved run for a puzzle, oldest first."""
    puzzle_dir = _results_root() / puzzle_id
    if not puzzle_dir.is_dir():
        return []
    runs: list[RunRecord] = []
    for run_dir in sorted(puzzle_dir.iterdir()):
        if not run_dir.is_dir():
            continue
        record = RunRecord.load(run_dir)
        if record:
            runs.append(record)
    runs.sort(key=lambda r: r.timestamp)
    return runs


def _puzzle_ids_with_runs() -> list[str]:
    root = _results_root()
    if not root.is_dir():
        return []
    return sorted(d.name for d in root.iterdir() if d.is_dir())


def list_all_runs() -> list[RunRecord]:
    """Every saved run across all puzzles, grouped by puzzle id, oldest first."""
    runs: list[RunRecord] = []
    for puzzle_id in _puzzle_ids_with_runs():
        runs.extend(load_runs(puzzle_id))
    return runs


# ---------------------------------------------------------------------------
# Rankings and stats
# ---------------------------------------------------------------------------

def compute_rankings(
    runs: list[RunRecord],
    limit: Optional[int] = None,
    best_per_user: bool = False,
) -> list[RankingEntry]:
    """Rank completed runs by total time (ties broken by who finished first).

    Equal times share a rank (1, 2, 2, 4). With best_per_user only each
    player's fastest run is kept.
    """
    completed = [r for r in runs if r.completed]
    completed.sort(key=lambda r: (r.total_time_ms, r.timestamp))

    if best_per_user:
        seen: set[str] = set()
        best: list[RunRecord] = []
        for r in completed:
            key = r.user_id or r.session_id
            if key in seen:
                continue
            seen.add(key)
            best.append(r)
        completed = best

    entries: list[RankingEntry] = []
    for i, r in enumerate(completed):
        if entries and entries[-1].total_time_ms == r.total_time_ms:
            rank = entries[-1].rank
        else:
            rank = i + 1
        entries.append(RankingEntry(
            rank=rank,
            puzzle_id=r.puzzle_id,
            session_id=r.session_id,
            user_name=r.user_name,
            is_anonymous=r.is_anonymous,
            total_time_ms=r.total_time_ms,
            timestamp=r.timestamp,
            segment_times=list(r.segment_times),
        ))

    if limit is not None:
        entries = entries[:limit]
    return entries


def compute_stats(runs: list[RunRecord]) -> PuzzleStats:
    """Player count, completion rate and best/average completed times."""
    stats = PuzzleStats(attempts=len(runs))
    if not runs:
        return stats
    stats.total_players = len({r.user_id or r.session_id for r in runs})
    times = [r.total_time_ms for r in runs if r.completed]
    stats.completions = len(times)
    if times:
        stats.best_time_ms = min(times)
        stats.average_time_ms = sum(times) // len(times)
    return stats


# ---------------------------------------------------------------------------
# Rich rendering
# ---------------------------------------------------------------------------

def _fmt_player(name: str, is_anonymous: bool) -> str:
    if not name:
        return "[dim]unknown[/dim]"
    return f"[dim]{name}[/dim]" if is_anonymous else name


def render_ranking(puzzle_id: str, entries: list[RankingEntry], console: Console, title: str = "") -> None:
    """Render a leaderboard table with per-question splits."""
    if not entries:
        console.print(f"[yellow]No completed runs for puzzle: {puzzle_id}[/yellow]")
        return

    table = Table(
        title=f"Ranking: {title or puzzle_id}",
        show_header=True,
        header_style="bold",
    )
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Player", min_width=18)
    table.add_column("Time", justify="right", style="bold", no_wrap=True)
    table.add_column("Splits", style="dim")
    table.add_column("Date", style="dim")

    for e in entries:
        style = _MEDALS.get(e.rank)
        rank = f"[{style}]{e.rank}[/{style}]" if style else str(e.rank)
        splits = " / ".join(format_compact(t) for t in e.segment_times) or "--"
        table.add_row(
            rank,
            _fmt_player(e.user_name, e.is_anonymous),
            format_precise(e.total_time_ms),
            splits,
            e.timestamp or "--",
        )

    console.print()
    console.print(table)
    console.print()


def render_stats(stats: PuzzleStats, console: Console) -> None:
    """Two-column summary of a puzzle's stats."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="dim")
    table.add_column("Value", justify="right")
    table.add_row("Players", str(stats.total_players))
    table.add_row("Attempts", str(stats.attempts))
    table.add_row("Completion rate", f"{stats.completion_rate:.0f}%")
    table.add_row("Best time", format_short(stats.best_time_ms) if stats.completions else "--")
    table.add_row("Average time", format_short(stats.average_time_ms) if stats.completions else "--")
    console.print(table)


def list_all_results(console: Console) -> None:
    """List every saved run across all puzzles."""
    runs = list_all_runs()
    if not runs:
        console.print("[yellow]No results yet. Play a puzzle first.[/yellow]")
        return

    by_puzzle: dict[str, list[RunRecord]] = {}
    for r in runs:
        by_puzzle.setdefault(r.puzzle_id, []).append(r)

    for puzzle_id, puzzle_runs in by_puzzle.items():
        console.print(f"\n[bold]Puzzle {puzzle_id}[/bold]")
        for r in reversed(puzzle_runs):
            verdict, color = ("done", "green") if r.completed else ("quit", "red")
            progress = f"{r.correct_count}/{r.total_questions}"
            console.print(
                f"  {r.timestamp}  [{color}]{verdict:5s}[/{color}] {progress:6s} "
                f"{format_compact(r.total_time_ms):>10s}  {r.user_name}"
            )


# ---------------------------------------------------------------------------
# Markdown report generation
# ---------------------------------------------------------------------------

def generate_report(titles: Optional[dict[str, str]] = None, top: int = 10) -> Path:
    """Generate RANKINGS.md with a leaderboard and stats per puzzle.

    Returns the path to the generated file.
    """
    titles = titles or {}
    puzzle_ids = _puzzle_ids_with_runs()

    lines: list[str] = []
    lines.append("# Rankings")
    lines.append("")
    lines.append(f"*Generated {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}*")
    lines.append("")

    if not puzzle_ids:
        lines.append("No runs yet.")

    for puzzle_id in puzzle_ids:
        runs = load_runs(puzzle_id)
        heading = titles.get(puzzle_id)
        lines.append(f"## {puzzle_id}: {heading}" if heading else f"## {puzzle_id}")
        lines.append("")

        stats = compute_stats(runs)
        lines.append(
            f"Players: {stats.total_players} · Attempts: {stats.attempts} · "
            f"Completion: {stats.completion_rate:.0f}%"
        )
        lines.append("")

        entries = compute_rankings(runs, limit=top)
        if not entries:
            lines.append("No completed runs.")
            lines.append("")
            continue

        lines.append("| # | Player | Time | Splits | Date |")
        lines.append("|---|--------|------|--------|------|")
        for e in entries:
            splits = " / ".join(format_compact(t) for t in e.segment_times)
            lines.append(
                f"| {e.rank} | {e.user_name or '--'} | **{format_precise(e.total_time_ms)}** "
                f"| {splits} | `{e.timestamp}` |"
            )
        lines.append("")

    out = config.report_path()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return out
