import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from workout_api.auth import security
from workout_api.auth.schemas import LoginRequest, UserCreate
from workout_api.core.exceptions import InvalidInput, NotFound
from workout_api.core.ids import parse_id
from workout_api.models.user import User
from workout_api.models.workout import CompletedExercise, Workout

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> User | None:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    @staticmethod
    async def register(db: AsyncSession, data: UserCreate) -> User:
        if await UserService.get_by_email(db, data.email):
            raise InvalidInput("Email exists already")

        user = User(
            name=data.name,
            email=data.email,
            password_digest=security.get_password_hash(data.password),
            admin=False,
        )
        db.add(user)
        await db.commit()
        logger.info("Registered user %s", user.id)
        return user

    @staticmethod
    async def authenticate(db: AsyncSession, data: LoginRequest) -> User:
        user = await UserService.get_by_email(db, data.email)
        if user is None or not security.verify_password(data.password, user.password_digest):
            logger.warning("Failed login attempt for %s", data.email)
            raise InvalidInput("Invalid email or password")
        return user

    @staticmethod
    async def list_users(db: AsyncSession) -> list[User]:
        result = await db.execute(select(User).order_by(User.name))
        return list(result.scalars().all())

    @staticmethod
    async def delete(db: AsyncSession, user_id: object) -> User:
        """Remove a user together with their workouts and completed exercises."""
        parsed_id = parse_id(user_id)
        user = await db.get(User, parsed_id) if parsed_id else None
        if user is None:
            raise NotFound("User ID not found")

        workout_ids = select(Workout.id).where(Workout.user_id == user.id)
        try:
            await db.execute(delete(CompletedExercise).where(CompletedExercise.workout_id.in_(workout_ids)))
            await db.execute(delete(Workout).where(Workout.user_id == user.id))
            await db.delete(user)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Deleted user %s", user.id)
        return user
