"""Request/response schemas for director endpoints. birthYear is the external field name."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class DirectorWriteRequest(BaseModel):
    """Body for creating or replacing a director."""

    name: str | None = Field(default=None, description="Director name")
    birth_year: int | None = Field(
        default=None,
        validation_alias=AliasChoices("birthYear", "birth_year"),
        serialization_alias="birthYear",
        description="Year of birth (optional)",
    )


class DirectorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    birth_year: int | None = Field(
        default=None,
        validation_alias=AliasChoices("birthYear", "birth_year"),
        serialization_alias="birthYear",
    )


class DirectorDeleteResponse(BaseModel):
    message: str
    director: DirectorResponse
