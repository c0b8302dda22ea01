from __future__ import annotations

from dataclasses import dataclass
import logging
import uuid

from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from workout_api.auth import security
from workout_api.auth.schemas import TokenPayload
from workout_api.core.exceptions import Forbidden, NotFound, Unauthenticated
from workout_api.core.ids import parse_id
from workout_api.models.workout import Workout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    user_id: uuid.UUID
    admin: bool = False


@dataclass(frozen=True)
class AuthorizedWorkout:
    identity: Identity
    workout: Workout


class AccessService:
    """Authentication and workout ownership checks.

    The checks always run in this order: token, identifier syntax,
    existence, ownership.  A caller without a valid token never learns
    whether a workout id is well formed or exists.
    """

    @staticmethod
    def authenticate(token: str | None) -> Identity:
        if not token:
            raise Unauthenticated()
        try:
            payload = TokenPayload.model_validate(security.decode_access_token(token))
        except (JWTError, ValidationError) as exc:
            logger.debug("Rejected token: %s", exc)
            raise Unauthenticated("Invalid token.") from exc
        return Identity(user_id=payload.id, admin=payload.admin)

    @staticmethod
    def require_admin(identity: Identity) -> Identity:
        if not identity.admin:
            raise Forbidden("Access denied. Administrator rights required.")
        return identity

    @staticmethod
    async def authorize_workout(db: AsyncSession, identity: Identity, workout_id: object) -> AuthorizedWorkout:
        parsed_id = parse_id(workout_id)
        if parsed_id is None:
            raise NotFound("Workout not found")

        workout = await db.get(Workout, parsed_id)
        if workout is None:
            raise NotFound("Workout not found")

        # Ownership is checked for admins too.
        if workout.user_id != identity.user_id:
            raise Forbidden("Workout belongs to another user")
        return AuthorizedWorkout(identity=identity, workout=workout)

    @classmethod
    async def check(cls, db: AsyncSession, token: str | None, workout_id: object) -> AuthorizedWorkout:
        identity = cls.authenticate(token)
        return await cls.authorize_workout(db, identity, workout_id)
