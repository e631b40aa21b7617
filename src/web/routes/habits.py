"""Habit routes: one thin handler per actor operation."""

import structlog
from fastapi import APIRouter, Depends

from habits import UserActor
from web.deps import get_actor
from web.models import CoachAsk, HabitCreate, LogCreate

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["habits"])


@router.get("/state")
async def get_state(actor: UserActor = Depends(get_actor)):
    snapshot = await actor.get_state()
    return snapshot.to_wire()


@router.post("/habits")
async def create_habit(body: HabitCreate, actor: UserActor = Depends(get_actor)):
    result = await actor.create_habit(
        body.name, body.frequency, body.target_per_period, body.period
    )
    return result.to_wire()


@router.post("/log")
async def log_completion(body: LogCreate, actor: UserActor = Depends(get_actor)):
    result = await actor.log_completion(body.habit_id)
    return result.to_wire()


@router.post("/coach")
async def coach(body: CoachAsk, actor: UserActor = Depends(get_actor)):
    result = await actor.coach(body.message)
    return result.to_wire()
