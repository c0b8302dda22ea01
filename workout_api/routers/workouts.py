from typing import Annotated, List, TypeVar
from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from workout_api.auth.dependencies import ActiveIdentity, CurrentIdentity, OwnedWorkout
from workout_api.database import get_db
from workout_api.schemas.workouts import (
    CompletedExerciseCreate,
    CompletedExerciseResponse,
    WorkoutCreate,
    WorkoutDetail,
    WorkoutResponse,
    WorkoutUpdate,
)
from workout_api.services.workout_service import WorkoutService

router = APIRouter()

BodyT = TypeVar("BodyT", bound=BaseModel)


def _json_body(model: type[BaseModel], required: bool = True) -> dict:
    return {
        "requestBody": {
            "required": required,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


async def _read_body(request: Request, model: type[BodyT], required: bool = True) -> BodyT | None:
    # Called after the guard: token and ownership errors take precedence over body errors.
    raw = await request.body()
    if not raw.strip() and not required:
        return None
    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


@router.get("", response_model=List[WorkoutDetail])
async def list_workouts(
    identity: CurrentIdentity,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """List the caller's workouts with their completed exercises."""
    return await WorkoutService.list_for_user(db, identity.user_id)


@router.post("", response_model=WorkoutResponse, openapi_extra=_json_body(WorkoutCreate, required=False))
async def create_workout(
    identity: ActiveIdentity,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a workout owned by the caller; ``date`` defaults to now."""
    data = await _read_body(request, WorkoutCreate, required=False)
    date = data.date if data is not None else None
    workout = await WorkoutService.create(db, identity.user_id, date)
    return WorkoutResponse.model_validate(workout)


@router.get("/{workout_id}", response_model=WorkoutDetail)
async def get_workout(
    authorized: OwnedWorkout,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await WorkoutService.get_detail(db, authorized.workout)


@router.put("/{workout_id}", response_model=WorkoutResponse, openapi_extra=_json_body(WorkoutUpdate))
async def update_workout(
    authorized: OwnedWorkout,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Change the workout date. The owner cannot be changed."""
    data = await _read_body(request, WorkoutUpdate)
    workout = await WorkoutService.update_date(db, authorized.workout, data.date)
    return WorkoutResponse.model_validate(workout)


@router.delete("/{workout_id}", response_model=WorkoutDetail)
async def delete_workout(
    authorized: OwnedWorkout,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a workout and every completed exercise attached to it."""
    return await WorkoutService.delete(db, authorized.workout)


@router.post(
    "/{workout_id}/completed_exercises",
    response_model=CompletedExerciseResponse,
    openapi_extra=_json_body(CompletedExerciseCreate),
)
async def add_completed_exercise(
    authorized: OwnedWorkout,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    data = await _read_body(request, CompletedExerciseCreate)
    entry = await WorkoutService.add_completed_exercise(db, authorized.workout, data)
    return CompletedExerciseResponse.model_validate(entry)
