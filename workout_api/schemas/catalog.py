import uuid
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class MuscleCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class MuscleResponse(BaseModel):
    id: uuid.UUID = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    name: str

    model_config = ConfigDict(from_attributes=True)


class ExerciseCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    muscle_id: uuid.UUID

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class ExerciseResponse(BaseModel):
    id: uuid.UUID = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    name: str
    muscle_id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)
