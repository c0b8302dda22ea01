from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timezone
import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from workout_api.core.exceptions import InvalidInput
from workout_api.models.catalog import Exercise
from workout_api.models.workout import CompletedExercise, Workout
from workout_api.schemas.workouts import (
    CompletedExerciseCreate,
    CompletedExerciseDetail,
    ExerciseSummary,
    WorkoutDetail,
)
from workout_api.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


def _detail(entry: CompletedExercise, exercise: Exercise | None) -> CompletedExerciseDetail:
    return CompletedExerciseDetail(
        id=entry.id,
        exercise_id=ExerciseSummary.model_validate(exercise) if exercise is not None else None,
        workout_id=entry.workout_id,
        exercise_type=entry.exercise_type,
        sets=entry.sets,
        reps=entry.reps,
        load=entry.load,
        unilateral=entry.unilateral,
        mum=entry.mum,
    )


class WorkoutService:
    @staticmethod
    async def expand(db: AsyncSession, workouts: list[Workout]) -> list[WorkoutDetail]:
        """Attach completed exercises, with their catalog entry, to each workout.

        One query joins completed exercises to exercises for all requested
        workouts; results keep the order of ``workouts``.
        """
        grouped: dict[uuid.UUID, list[CompletedExerciseDetail]] = defaultdict(list)
        workout_ids = [workout.id for workout in workouts]
        if workout_ids:
            stmt = (
                select(CompletedExercise, Exercise)
                .outerjoin(Exercise, CompletedExercise.exercise_id == Exercise.id)
                .where(CompletedExercise.workout_id.in_(workout_ids))
                .order_by(CompletedExercise.created_at)
            )
            result = await db.execute(stmt)
            for entry, exercise in result.all():
                grouped[entry.workout_id].append(_detail(entry, exercise))

        return [
            WorkoutDetail(
                id=workout.id,
                date=workout.date,
                user_id=workout.user_id,
                exercises=grouped.get(workout.id, []),
            )
            for workout in workouts
        ]

    @staticmethod
    async def list_for_user(db: AsyncSession, user_id: uuid.UUID) -> list[WorkoutDetail]:
        stmt = select(Workout).where(Workout.user_id == user_id).order_by(Workout.created_at)
        result = await db.execute(stmt)
        workouts = list(result.scalars().all())
        return await WorkoutService.expand(db, workouts)

    @staticmethod
    async def get_detail(db: AsyncSession, workout: Workout) -> WorkoutDetail:
        [detail] = await WorkoutService.expand(db, [workout])
        return detail

    @staticmethod
    async def create(db: AsyncSession, user_id: uuid.UUID, date: datetime | None = None) -> Workout:
        now = datetime.now(timezone.utc)
        workout = Workout(user_id=user_id, date=date or now, created_at=now)
        db.add(workout)
        await db.commit()
        logger.info("Created workout %s for user %s", workout.id, user_id)
        return workout

    @staticmethod
    async def update_date(db: AsyncSession, workout: Workout, date: datetime) -> Workout:
        workout.date = date
        await db.commit()
        logger.info("Updated date of workout %s", workout.id)
        return workout

    @staticmethod
    async def delete(db: AsyncSession, workout: Workout) -> WorkoutDetail:
        """Delete a workout and its completed exercises in one transaction.

        Returns the representation the workout had before deletion.
        """
        snapshot = await WorkoutService.get_detail(db, workout)
        try:
            await db.execute(delete(CompletedExercise).where(CompletedExercise.workout_id == workout.id))
            await db.delete(workout)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Deleted workout %s with %d completed exercises", snapshot.id, len(snapshot.exercises))
        return snapshot

    @staticmethod
    async def add_completed_exercise(
        db: AsyncSession,
        workout: Workout,
        data: CompletedExerciseCreate,
    ) -> CompletedExercise:
        # A missing catalog entry is bad input, not a missing resource.
        if not await CatalogService.exercise_exists(db, data.exercise_id):
            raise InvalidInput("Exercise not found")

        entry = CompletedExercise(
            exercise_id=data.exercise_id,
            workout_id=workout.id,
            exercise_type=data.exercise_type,
            sets=data.sets,
            reps=data.reps,
            load=data.load,
            unilateral=data.unilateral,
            mum=data.mum,
            created_at=datetime.now(timezone.utc),
        )
        db.add(entry)
        await db.commit()
        logger.info("Added completed exercise %s to workout %s", entry.id, workout.id)
        return entry
