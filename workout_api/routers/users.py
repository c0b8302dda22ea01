from typing import Annotated, List
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from workout_api.auth import security
from workout_api.auth.dependencies import AdminIdentity, get_current_user
from workout_api.auth.schemas import RegisteredUser, UserCreate, UserResponse
from workout_api.config import settings
from workout_api.database import get_db
from workout_api.models.user import User
from workout_api.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=List[UserResponse])
async def list_users(
    admin: AdminIdentity,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Admin: list every user, sorted by name."""
    users = await UserService.list_users(db)
    return [UserResponse.model_validate(u) for u in users]


@router.post("", response_model=RegisteredUser)
async def register(
    user_in: UserCreate,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await UserService.register(db, user_in)
    response.headers[settings.TOKEN_HEADER] = security.create_access_token(user.id, user.admin)
    return RegisteredUser.model_validate(user)


@router.get("/me", response_model=UserResponse)
async def read_users_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    return UserResponse.model_validate(current_user)


@router.delete("/{user_id}", response_model=UserResponse)
async def delete_user(
    user_id: str,
    admin: AdminIdentity,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Admin: delete a user and everything they own."""
    user = await UserService.delete(db, user_id)
    return UserResponse.model_validate(user)
