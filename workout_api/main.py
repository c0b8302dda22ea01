import logging
import uuid
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from workout_api.config import Settings, settings
from workout_api.core import exceptions
from workout_api.core.logging import setup_logging
from workout_api.database import create_db_engine, create_session_factory, create_tables, get_db
from workout_api.routers.exercises import router as exercises_router
from workout_api.routers.login import router as login_router
from workout_api.routers.muscles import router as muscles_router
from workout_api.routers.users import router as users_router
from workout_api.routers.workouts import router as workouts_router

logger = logging.getLogger(__name__)


def _validate_security_settings(app_settings: Settings) -> None:
    if app_settings.APP_ENV != "production":
        return

    errors: list[str] = []
    if len(app_settings.SECRET_KEY.strip()) < 24:
        errors.append("SECRET_KEY must be at least 24 characters in production.")

    if errors:
        raise RuntimeError("; ".join(errors))


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_settings: Settings = app.state.settings
    _validate_security_settings(app_settings)

    engine = create_db_engine(app_settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    if app_settings.CREATE_TABLES_ON_STARTUP:
        await create_tables(engine)
    logger.info("Database engine started (dialect=%s)", engine.dialect.name)
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("Database engine disposed")


def create_app(app_settings: Settings = settings) -> FastAPI:
    setup_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version=app_settings.VERSION,
        openapi_url=f"{app_settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    @app.middleware("http")
    async def attach_request_id(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    # Exception Handlers
    app.add_exception_handler(exceptions.AppError, exceptions.app_error_handler)  # type: ignore
    app.add_exception_handler(RequestValidationError, exceptions.validation_exception_handler)  # type: ignore
    app.add_exception_handler(IntegrityError, exceptions.integrity_exception_handler)  # type: ignore

    # Routers
    prefix = app_settings.API_PREFIX
    app.include_router(workouts_router, prefix=f"{prefix}/workouts", tags=["Workouts"])
    app.include_router(users_router, prefix=f"{prefix}/users", tags=["Users"])
    app.include_router(login_router, prefix=f"{prefix}/login", tags=["Auth"])
    app.include_router(muscles_router, prefix=f"{prefix}/muscles", tags=["Muscles"])
    app.include_router(exercises_router, prefix=f"{prefix}/exercises", tags=["Exercises"])

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    @app.get("/healthz")
    async def healthz(db: Annotated[AsyncSession, Depends(get_db)]):
        try:
            await db.execute(text("SELECT 1"))
        except Exception as exc:
            logger.exception("Health check failed")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="database unavailable",
            ) from exc
        return {"status": "ok", "database": "ok"}

    return app


app = create_app()
