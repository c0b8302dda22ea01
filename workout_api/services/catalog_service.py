import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from workout_api.core.exceptions import InvalidInput, NotFound
from workout_api.core.ids import parse_id
from workout_api.models.catalog import Exercise, Muscle
from workout_api.models.workout import CompletedExercise
from workout_api.schemas.catalog import ExerciseCreate, MuscleCreate

logger = logging.getLogger(__name__)


class CatalogService:
    # --- Muscles ---

    @staticmethod
    async def list_muscles(db: AsyncSession) -> list[Muscle]:
        result = await db.execute(select(Muscle).order_by(Muscle.name))
        return list(result.scalars().all())

    @staticmethod
    async def get_muscle(db: AsyncSession, muscle_id: object) -> Muscle:
        parsed_id = parse_id(muscle_id)
        muscle = await db.get(Muscle, parsed_id) if parsed_id else None
        if muscle is None:
            raise NotFound("Muscle not found")
        return muscle

    @staticmethod
    async def create_muscle(db: AsyncSession, data: MuscleCreate) -> Muscle:
        existing = await db.execute(select(Muscle.id).where(Muscle.name == data.name))
        if existing.first() is not None:
            raise InvalidInput("Muscle exists already")

        muscle = Muscle(name=data.name)
        db.add(muscle)
        await db.commit()
        logger.info("Created muscle %s (%s)", muscle.id, muscle.name)
        return muscle

    @staticmethod
    async def delete_muscle(db: AsyncSession, muscle_id: object) -> Muscle:
        muscle = await CatalogService.get_muscle(db, muscle_id)
        in_use = await db.scalar(select(func.count()).select_from(Exercise).where(Exercise.muscle_id == muscle.id))
        if in_use:
            raise InvalidInput("Muscle is referenced by exercises")

        await db.delete(muscle)
        await db.commit()
        logger.info("Deleted muscle %s", muscle.id)
        return muscle

    # --- Exercises ---

    @staticmethod
    async def list_exercises(db: AsyncSession, muscle_id: uuid.UUID | None = None) -> list[Exercise]:
        stmt = select(Exercise).order_by(Exercise.name)
        if muscle_id is not None:
            stmt = stmt.where(Exercise.muscle_id == muscle_id)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_exercise(db: AsyncSession, exercise_id: object) -> Exercise:
        parsed_id = parse_id(exercise_id)
        exercise = await db.get(Exercise, parsed_id) if parsed_id else None
        if exercise is None:
            raise NotFound("Exercise not found")
        return exercise

    @staticmethod
    async def exercise_exists(db: AsyncSession, exercise_id: uuid.UUID) -> bool:
        result = await db.execute(select(Exercise.id).where(Exercise.id == exercise_id))
        return result.first() is not None

    @staticmethod
    async def create_exercise(db: AsyncSession, data: ExerciseCreate) -> Exercise:
        if await db.get(Muscle, data.muscle_id) is None:
            raise InvalidInput("Muscle not found")

        exercise = Exercise(name=data.name, muscle_id=data.muscle_id)
        db.add(exercise)
        await db.commit()
        logger.info("Created exercise %s (%s)", exercise.id, exercise.name)
        return exercise

    @staticmethod
    async def delete_exercise(db: AsyncSession, exercise_id: object) -> Exercise:
        exercise = await CatalogService.get_exercise(db, exercise_id)
        in_use = await db.scalar(
            select(func.count()).select_from(CompletedExercise).where(CompletedExercise.exercise_id == exercise.id)
        )
        if in_use:
            raise InvalidInput("Exercise is referenced by completed exercises")

        await db.delete(exercise)
        await db.commit()
        logger.info("Deleted exercise %s", exercise.id)
        return exercise
