from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"
    headers: dict[str, str] | None = None

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Access denied. No valid token provided."
    headers = {"WWW-Authenticate": "Token"}


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Operation not permitted"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class InvalidInput(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


async def app_error_handler(request: Request, exc: AppError):
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "request_id": request_id},
        headers=exc.headers,
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=InvalidInput.status_code,
        content={"detail": jsonable_encoder(exc.errors()), "message": "Validation Error", "request_id": request_id},
    )

async def integrity_exception_handler(request: Request, exc: IntegrityError):
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Database conflict. A record with this identifier likely already exists.", "request_id": request_id},
    )
