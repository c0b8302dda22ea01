from typing import Annotated
from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from workout_api.config import settings
from workout_api.core.exceptions import NotFound, Unauthenticated
from workout_api.database import get_db
from workout_api.models.user import User
from workout_api.services.access_service import AccessService, AuthorizedWorkout, Identity

token_header = APIKeyHeader(name=settings.TOKEN_HEADER, auto_error=False)


async def get_identity(
    token: Annotated[str | None, Depends(token_header)],
) -> Identity:
    return AccessService.authenticate(token)


async def get_active_identity(
    identity: Annotated[Identity, Depends(get_identity)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Identity:
    """Like ``get_identity`` but also requires the token's user to still exist."""
    if await db.get(User, identity.user_id) is None:
        raise Unauthenticated("User no longer exists.")
    return identity


async def get_admin_identity(
    identity: Annotated[Identity, Depends(get_identity)],
) -> Identity:
    return AccessService.require_admin(identity)


async def get_current_user(
    identity: Annotated[Identity, Depends(get_identity)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    user = await db.get(User, identity.user_id)
    if user is None:
        raise NotFound("User not found")
    return user


async def get_owned_workout(
    workout_id: str,
    token: Annotated[str | None, Depends(token_header)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthorizedWorkout:
    """Guard for ``/workouts/{workout_id}`` routes.

    ``workout_id`` is taken as a plain string so a malformed id surfaces as
    404 from the guard, after authentication, instead of a 422 from path
    parsing.
    """
    return await AccessService.check(db, token, workout_id)


CurrentIdentity = Annotated[Identity, Depends(get_identity)]
ActiveIdentity = Annotated[Identity, Depends(get_active_identity)]
AdminIdentity = Annotated[Identity, Depends(get_admin_identity)]
OwnedWorkout = Annotated[AuthorizedWorkout, Depends(get_owned_workout)]
