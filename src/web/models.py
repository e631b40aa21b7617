"""Pydantic request schemas for the web API.

Fields are deliberately loose (``Any``, all optional): presence and type
checks happen once, in the actor, so the API and the CLI reject the same
inputs with the same messages.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class HabitCreate(_Body):
    name: Any = None
    frequency: Any = None
    target_per_period: Any = Field(None, alias="targetPerPeriod")
    period: Any = None


class LogCreate(_Body):
    habit_id: Any = Field(None, alias="habitId")


class CoachAsk(_Body):
    message: Any = None
