from sqlalchemy.ext.asyncio import AsyncSession

from workout_api.auth.security import create_access_token, get_password_hash
from workout_api.config import settings
from workout_api.models.user import User

API = settings.API_PREFIX


async def create_user(
    db_session: AsyncSession,
    *,
    name: str,
    email: str,
    password: str = "123456",
    admin: bool = False,
) -> User:
    user = User(name=name, email=email, password_digest=get_password_hash(password), admin=admin)
    db_session.add(user)
    await db_session.commit()
    return user


def auth_headers(user: User) -> dict[str, str]:
    return {settings.TOKEN_HEADER: create_access_token(user.id, user.admin)}
