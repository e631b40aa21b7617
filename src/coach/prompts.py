"""Prompt templates for habit coaching."""

import math
from typing import Sequence

from habits.models import HabitStat, UserState


class PromptTemplates:
    """Fixed coaching prompt; only the data and the message vary."""

    COACH = """You are an encouraging, practical AI habit coach.
You see the user's habit definitions and their performance over the last 7 days.
Give clear, concise feedback and *one or two* actionable suggestions.

Be:
- Short (2–4 paragraphs max)
- Concrete (numbers, patterns, examples)
- Supportive (no shaming).

User's habit data:

{habits_summary}

User's question or message:
"{message}\""""

    HABIT_BLOCK = """Habit: {name}
- Completed last 7 days: {completed}
- Target per week: {target}
- Completion rate: {percent}%"""

    NO_HABITS = "The user has not created any habits yet."


def _fmt_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _percent(rate: float) -> int:
    """Rate as a whole percentage, halves rounded up."""
    return math.floor(rate * 100 + 0.5)


def format_habit_block(stat: HabitStat) -> str:
    return PromptTemplates.HABIT_BLOCK.format(
        name=stat.name,
        completed=stat.completed_last_7_days,
        target=_fmt_number(stat.target_per_week),
        percent=_percent(stat.completion_rate),
    )


def build_coach_prompt(state: UserState, stats: Sequence[HabitStat], message: str) -> str:
    """Deterministic coaching prompt from state, stats and the user's message."""
    if not state.habits:
        summary = PromptTemplates.NO_HABITS
    else:
        summary = "\n\n".join(format_habit_block(s) for s in stats)
    return PromptTemplates.COACH.format(habits_summary=summary, message=message.strip())
