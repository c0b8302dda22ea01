from typing import Annotated, List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from workout_api.auth.dependencies import AdminIdentity
from workout_api.database import get_db
from workout_api.schemas.catalog import MuscleCreate, MuscleResponse
from workout_api.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=List[MuscleResponse])
async def list_muscles(db: Annotated[AsyncSession, Depends(get_db)]):
    muscles = await CatalogService.list_muscles(db)
    return [MuscleResponse.model_validate(m) for m in muscles]


@router.get("/{muscle_id}", response_model=MuscleResponse)
async def get_muscle(muscle_id: str, db: Annotated[AsyncSession, Depends(get_db)]):
    return MuscleResponse.model_validate(await CatalogService.get_muscle(db, muscle_id))


@router.post("", response_model=MuscleResponse)
async def create_muscle(
    data: MuscleCreate,
    admin: AdminIdentity,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return MuscleResponse.model_validate(await CatalogService.create_muscle(db, data))


@router.delete("/{muscle_id}", response_model=MuscleResponse)
async def delete_muscle(
    muscle_id: str,
    admin: AdminIdentity,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return MuscleResponse.model_validate(await CatalogService.delete_muscle(db, muscle_id))
