"""Habit CLI commands: inspect state, add habits, log completions, ask the coach.

These commands open the state database directly. Do not point them at the
database of a running ``habitcoach serve``; the server's actors assume they
are the only writer.
"""

import asyncio
import sys

import click
import structlog
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from cli.utils import get_components
from habits import HabitError

console = Console()
logger = structlog.get_logger()

user_option = click.option(
    "-u", "--user", "user_key", default=None, help="User key (defaults to the configured default user)"
)


def _run(config, user_key, op):
    """Run one actor operation to completion, exiting non-zero on HabitError."""
    c = get_components(config)
    actor = c["registry"].get(user_key)
    try:
        return asyncio.run(op(actor))
    except HabitError as e:
        console.print(f"[red]Error ({type(e).__name__}):[/] {e.message}")
        sys.exit(1)


def _stats_table(state, stats) -> Table:
    table = Table(show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Habit", style="cyan")
    table.add_column("Target", justify="right")
    table.add_column("Last 7 days", justify="right")
    table.add_column("Rate", justify="right", style="green")

    habits = {h.id: h for h in state.habits}
    for s in stats:
        habit = habits[s.habit_id]
        target = f"{habit.target_per_period}/{habit.period.value}"
        table.add_row(
            s.habit_id[:8],
            s.name,
            target,
            f"{s.completed_last_7_days}/{s.target_per_week}",
            f"{s.completion_rate:.0%}",
        )
    return table


@click.command("state")
@user_option
@click.pass_obj
def state(config, user_key):
    """Show habits and 7-day stats."""
    snapshot = _run(config, user_key, lambda a: a.get_state())

    if not snapshot.state.habits:
        console.print("[yellow]No habits yet.[/] Add one with [bold]habitcoach add[/].")
        return
    console.print(_stats_table(snapshot.state, snapshot.stats))


@click.command("add")
@click.argument("name")
@click.option("-t", "--target", type=float, required=True, help="Completions per period")
@click.option(
    "-p", "--period", type=click.Choice(["day", "week"]), default="day", help="Period unit"
)
@click.option(
    "-f",
    "--frequency",
    type=click.Choice(["daily", "weekly"]),
    default=None,
    help="Frequency label (defaults to match the period)",
)
@user_option
@click.pass_obj
def add(config, name, target, period, frequency, user_key):
    """Create a habit.

    Writes the state database directly; stop `habitcoach serve` first if it
    uses the same database.
    """
    frequency = frequency or ("daily" if period == "day" else "weekly")
    target = int(target) if target.is_integer() else target
    result = _run(
        config, user_key, lambda a: a.create_habit(name, frequency, target, period)
    )
    console.print(f"[green]Created:[/] {result.habit.name} [dim]({result.habit.id})[/]")


@click.command("log")
@click.argument("habit_id")
@user_option
@click.pass_obj
def log(config, habit_id, user_key):
    """Record one completion of a habit.

    Writes the state database directly; stop `habitcoach serve` first if it
    uses the same database.
    """
    result = _run(config, user_key, lambda a: a.log_completion(habit_id))
    stat = next(s for s in result.stats if s.habit_id == result.log.habit_id)
    console.print(
        f"[green]Logged:[/] {stat.name} "
        f"({stat.completed_last_7_days}/{stat.target_per_week} this week, {stat.completion_rate:.0%})"
    )


@click.command("coach")
@click.argument("message")
@user_option
@click.pass_obj
def coach(config, message, user_key):
    """Ask the habit coach for feedback."""
    with console.status("Thinking..."):
        result = _run(config, user_key, lambda a: a.coach(message))
    console.print(Markdown(result.reply))
