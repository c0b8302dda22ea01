from typing import Annotated, List
import uuid
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from workout_api.auth.dependencies import AdminIdentity
from workout_api.database import get_db
from workout_api.schemas.catalog import ExerciseCreate, ExerciseResponse
from workout_api.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=List[ExerciseResponse])
async def list_exercises(
    db: Annotated[AsyncSession, Depends(get_db)],
    muscle_id: uuid.UUID | None = Query(None),
):
    """List catalog exercises, optionally only those for one muscle."""
    exercises = await CatalogService.list_exercises(db, muscle_id)
    return [ExerciseResponse.model_validate(e) for e in exercises]


@router.get("/{exercise_id}", response_model=ExerciseResponse)
async def get_exercise(exercise_id: str, db: Annotated[AsyncSession, Depends(get_db)]):
    return ExerciseResponse.model_validate(await CatalogService.get_exercise(db, exercise_id))


@router.post("", response_model=ExerciseResponse)
async def create_exercise(
    data: ExerciseCreate,
    admin: AdminIdentity,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return ExerciseResponse.model_validate(await CatalogService.create_exercise(db, data))


@router.delete("/{exercise_id}", response_model=ExerciseResponse)
async def delete_exercise(
    exercise_id: str,
    admin: AdminIdentity,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return ExerciseResponse.model_validate(await CatalogService.delete_exercise(db, exercise_id))
