"""Pydantic models for OMDb catalog responses."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.exceptions import CatalogError

# OMDb fills missing fields with this literal instead of omitting them
UNAVAILABLE = "N/A"

T = TypeVar("T")


def _none_if_unavailable(value):
    if isinstance(value, str) and value.strip() in ("", UNAVAILABLE):
        return None
    return value


class MatchSummary(BaseModel):
    """A single row from the OMDb keyword search."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    imdb_id: str = Field(alias="imdbID")
    title: str = Field(alias="Title")
    year: str = Field(default="", alias="Year")
    poster: str | None = Field(default=None, alias="Poster")

    @field_validator("poster", mode="before")
    @classmethod
    def _poster_unavailable(cls, value):
        return _none_if_unavailable(value)


class DetailRecord(MatchSummary):
    """Full title record from the OMDb lookup-by-id endpoint."""

    rating: float | None = Field(default=None, alias="imdbRating")
    genre: str | None = Field(default=None, alias="Genre")
    plot: str | None = Field(default=None, alias="Plot")

    @field_validator("rating", "genre", "plot", mode="before")
    @classmethod
    def _field_unavailable(cls, value):
        return _none_if_unavailable(value)

    @property
    def rating_label(self) -> str:
        """Rating as displayed on cards; unrated titles show the OMDb sentinel."""
        return UNAVAILABLE if self.rating is None else f"{self.rating:g}"


class SearchEnvelope(BaseModel):
    """Raw OMDb search response: either a page of rows or an error reason."""

    response: str = Field(alias="Response")
    results: list[MatchSummary] = Field(default_factory=list, alias="Search")
    total_results: int = Field(default=0, alias="totalResults")
    error: str | None = Field(default=None, alias="Error")

    @property
    def succeeded(self) -> bool:
        return self.response.lower() == "true"


class DetailEnvelope(BaseModel):
    """The status part of an OMDb title response (the record itself is parsed separately)."""

    response: str = Field(alias="Response")
    error: str | None = Field(default=None, alias="Error")

    @property
    def succeeded(self) -> bool:
        return self.response.lower() == "true"


class CatalogSearchResponse(BaseModel):
    """Response for the catalog passthrough search endpoint."""

    query: str
    results: list[MatchSummary] = []
    total: int = 0


@dataclass(frozen=True)
class CatalogResult(Generic[T]):
    """Outcome of a catalog call: exactly one of ``value`` or ``error`` is set."""

    value: T | None = None
    error: CatalogError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "CatalogResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: CatalogError) -> "CatalogResult[T]":
        return cls(error=error)
