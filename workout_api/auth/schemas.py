import uuid
from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator


class TokenPayload(BaseModel):
    id: uuid.UUID = Field(validation_alias=AliasChoices("_id", "id"))
    admin: bool = False
    exp: int | None = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=255)


class LoginResponse(BaseModel):
    jwt: str


class UserCreate(BaseModel):
    name: str = Field(min_length=3, max_length=50)
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=5, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("name must be at least 3 characters")
        return value


class RegisteredUser(BaseModel):
    """Body returned from registration; the token travels in a header."""
    id: uuid.UUID
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    id: uuid.UUID = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    name: str
    email: str
    admin: bool = False

    model_config = ConfigDict(from_attributes=True)
