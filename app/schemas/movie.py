"""Request/response schemas for movie endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class MovieWriteRequest(BaseModel):
    """Body for creating or replacing a movie. Required fields are checked by the service."""

    title: str | None = Field(default=None, description="Movie title")
    director_id: int | None = Field(default=None, description="Id of an existing director")
    year: int | None = Field(default=None, description="Release year")


class MovieResponse(BaseModel):
    """Movie with its director's name joined in."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    year: int
    director_id: int | None = None
    director_name: str | None = None


class MovieDeleteResponse(BaseModel):
    message: str
    movie: MovieResponse
