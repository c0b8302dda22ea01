from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from workout_api.auth import security
from workout_api.auth.schemas import LoginRequest, LoginResponse
from workout_api.database import get_db
from workout_api.services.user_service import UserService

router = APIRouter()


@router.post("", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Exchange email and password for a signed token."""
    user = await UserService.authenticate(db, login_data)
    return LoginResponse(jwt=security.create_access_token(user.id, user.admin))
