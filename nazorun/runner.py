"""nazorun runner — plays one puzzle interactively in the terminal.

Data flow per run:
1. Resolve the player (anonymous sign-in if nobody is signed in)
2. Load the puzzle from the catalog
3. Start a session (or resume the mirrored one with --resume)
4. Per question: show it, read input, gate it through validation, judge it
5. On a correct answer: record the segment time, auto-advance after a delay
6. On completion or :q, save a RunRecord and clear the session

Ctrl-C / EOF suspends instead: the mirrored session stays on disk so the run
can be resumed later.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from rich.console import Console
from rich.table import Table

from nazorun import config
from nazorun.catalog import Puzzle, Question, get_puzzle, get_question
from nazorun.errors import NazorunError
from nazorun.identity import IdentityProvider
from nazorun.judge import judge_question
from nazorun.models import RunRecord, Session
from nazorun.persistence import JsonSessionMirror
from nazorun.scorer import save_run
from nazorun.session import SessionManager
from nazorun.timing import Stopwatch, format_compact, format_precise, now_ms, time_style
from nazorun.validation import is_submittable, placeholder, validation_message

logger = logging.getLogger(__name__)

QUIT_COMMAND = ":q"
PAUSE_COMMAND = ":p"
HINT_COMMAND = ":h"


def _show_question(
    console: Console,
    puzzle: Puzzle,
    question: Question,
    session: Session,
    stopwatch: Stopwatch,
) -> None:
    elapsed = stopwatch.elapsed_ms()
    style = time_style(elapsed)
    console.print(
        f"\n[bold]{puzzle.title}[/bold]  "
        f"Q{session.question_number}/{session.total_questions} "
        f"[dim]({session.progress:.0f}%)[/dim]  "
        f"[{style}]{format_precise(elapsed)}[/{style}]"
    )
    if not session.has_next_question:
        console.print("  [bold magenta]Final question![/bold magenta]")
    console.print(f"  Image: {question.image_ref or '--'}")
    console.print(
        f"  [dim]Format: {', '.join(question.answer_format) or 'free'}  "
        f"({placeholder(question.answer_format)})[/dim]"
    )


def _suspend(console: Console, manager: SessionManager, puzzle: Puzzle) -> None:
    manager.cancel_advance()
    console.print(f"\n[yellow]Suspended.[/yellow] Continue with: nazorun play {puzzle.id} --resume")


def _show_summary(console: Console, puzzle: Puzzle, record: RunRecord) -> None:
    table = Table(
        title=f"{puzzle.title}: {format_precise(record.total_time_ms)}",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Q", justify="right")
    table.add_column("Answer")
    table.add_column("Split", justify="right")
    for i, (answer, split) in enumerate(zip(record.answers, record.segment_times), 1):
        table.add_row(str(i), answer or "[dim]--[/dim]", format_compact(split) if split else "--")
    console.print()
    console.print(table)
    console.print()


def _resume_or_start(
    puzzle: Puzzle,
    manager: SessionManager,
    mirror: JsonSessionMirror,
    resume: bool,
    console: Console,
) -> Session:
    if resume:
        saved = mirror.load()
        if saved and saved.puzzle_id == puzzle.id and not saved.is_completed:
            if saved.total_questions == puzzle.total_questions and manager.restore(saved):
                console.print(f"  Resuming at question {saved.question_number}")
                return manager.require_session()
        console.print("  [yellow]Nothing to resume, starting fresh.[/yellow]")
    return manager.start(puzzle.id, puzzle.total_questions)


def play_puzzle(
    puzzle_id: str,
    console: Console,
    *,
    read_input: Optional[Callable[[str], str]] = None,
    identity_provider: Optional[IdentityProvider] = None,
    manager: Optional[SessionManager] = None,
    mirror: Optional[JsonSessionMirror] = None,
    advance_delay_ms: Optional[int] = None,
    resume: bool = False,
    clock: Callable[[], int] = now_ms,
) -> Optional[RunRecord]:
    """Play a puzzle to completion, abandonment or suspension.

    Args:
        puzzle_id: Catalog id or package slug.
        console: Rich Console for all output.
        read_input: Prompt → line callable; defaults to console.input.
        identity_provider: Defaults to the configured identity file.
        manager: Session manager to drive (built if omitted); the mirror is
            attached to it as an observer.
        mirror: Session mirror; defaults to the configured session file.
        advance_delay_ms: Pause after a correct answer (config default).
        resume: Continue the mirrored session if it belongs to this puzzle.
        clock: Epoch-ms clock shared by the session and stopwatch.

    Returns:
        The saved RunRecord, or None if the puzzle could not be loaded or the
        run was suspended.
    """
    try:
        puzzle = get_puzzle(puzzle_id)
    except NazorunError as e:
        console.print(f"[red]Error:[/red] {e}")
        return None

    provider = identity_provider or IdentityProvider(config.identity_path())
    identity = provider.ensure_identity()
    mirror = mirror or JsonSessionMirror(config.session_path())
    manager = manager or SessionManager(clock=clock)
    manager.add_observer(mirror)
    delay_ms = config.advance_delay_ms() if advance_delay_ms is None else advance_delay_ms
    read = read_input or console.input

    console.print(f"\n[bold]Playing:[/bold] {puzzle.title} as {identity.display_name}")
    console.print(
        f"  {puzzle.total_questions} questions. "
        f"[dim]{HINT_COMMAND} format hint, {PAUSE_COMMAND} pause timer, {QUIT_COMMAND} give up[/dim]"
    )

    _resume_or_start(puzzle, manager, mirror, resume, console)
    stopwatch = Stopwatch(clock)
    stopwatch.start()
    abandoned = False

    while not abandoned:
        if not manager.has_session:
            break
        session = manager.require_session()
        if session.is_completed:
            break
        if session.current_question_index >= session.total_questions:
            # empty puzzle: nothing to answer
            manager.complete()
            break
        question = get_question(puzzle, session.current_question_index)
        _show_question(console, puzzle, question, session, stopwatch)

        while True:
            try:
                text = read("> ")
            except (EOFError, KeyboardInterrupt):
                _suspend(console, manager, puzzle)
                return None

            command = text.strip()
            if command == QUIT_COMMAND:
                abandoned = True
                break
            if command == PAUSE_COMMAND:
                paused = stopwatch.toggle()
                console.print("[yellow]Paused.[/yellow]" if paused else "Resumed.")
                continue
            if command == HINT_COMMAND:
                console.print(f"  Format: {', '.join(question.answer_format) or 'free'} "
                              f"({placeholder(question.answer_format)})")
                continue
            if stopwatch.is_paused:
                console.print(f"[yellow]Timer is paused, {PAUSE_COMMAND} to resume.[/yellow]")
                continue

            manager.update_answer(text)
            if not is_submittable(text, question.answer_format):
                console.print(f"  [red]{validation_message(question.answer_format)}[/red]")
                continue

            answer = text.strip()
            correct = judge_question(answer, question)
            manager.submit_answer(answer, correct)
            if not correct:
                console.print("  [red]Incorrect.[/red] Try again.")
                continue

            split = stopwatch.lap()
            manager.record_segment_time(session.current_question_index, split)
            console.print(f"  [green]Correct![/green] {format_compact(split)}")
            try:
                manager.schedule_advance(delay_ms)
                manager.wait_for_advance()
            except KeyboardInterrupt:
                # the answer is already in; move past it so a resume does not repeat it
                manager.cancel_advance()
                if manager.require_session().current_question_index == session.current_question_index:
                    manager.next_question()
                if manager.require_session().is_completed:
                    break
                _suspend(console, manager, puzzle)
                return None
            break

    final = manager.require_session()
    record = RunRecord.from_session(final, identity, now_ms=clock())
    run_dir = save_run(record)
    manager.clear()
    logger.debug("Saved run %s to %s", record.session_id, run_dir)

    if record.completed:
        console.print(f"[bold green]Cleared![/bold green] {format_precise(record.total_time_ms)}")
    else:
        console.print(f"[yellow]Gave up[/yellow] after {format_precise(record.total_time_ms)}")
    _show_summary(console, puzzle, record)
    return record
