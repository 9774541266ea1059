from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, computed_field

T = TypeVar("T")

_RECORD_CONFIG = {
    "frozen": True,
    "extra": "ignore",
}


class ShowKind(str, Enum):
    """Kind of a search hit, guessed from the listing text."""

    SERIES = "series"
    SEASON = "season"
    MINI_SERIES = "mini_series"


class SearchHit(BaseModel):
    """One entry of a search listing page."""

    name: str = Field(min_length=1)
    original_name: str | None = None
    year: str | None = None
    kind: ShowKind = ShowKind.SERIES
    url: str
    id: int = Field(gt=0)

    model_config = _RECORD_CONFIG


class Season(BaseModel):
    """A season listed on a show's overview page."""

    id: int = Field(gt=0)
    name: str
    year: str | None = None
    episode_count: int = Field(default=0, ge=0)
    url: str

    model_config = _RECORD_CONFIG


class ShowDetail(BaseModel):
    """Metadata of a show together with its seasons."""

    id: int = Field(gt=0)
    name: str = Field(min_length=1)
    original_name: str | None = None
    year_range: str | None = None
    genres: list[str] = Field(default_factory=list)
    countries: list[str] = Field(default_factory=list)
    seasons: list[Season] = Field(default_factory=list)

    model_config = _RECORD_CONFIG


class Episode(BaseModel):
    """A single episode; ``rating`` is a percentage when the page shows one."""

    id: int = Field(gt=0)
    name: str
    season_number: int = Field(ge=0)
    episode_number: int = Field(ge=0)
    rating: float | None = Field(default=None, ge=0.0, le=100.0)
    url: str

    model_config = _RECORD_CONFIG

    @computed_field  # type: ignore[prop-decorator]
    @property
    def code(self) -> str:
        return format_episode_code(self.season_number, self.episode_number)


class Page(BaseModel, Generic[T]):
    """A page of results plus pagination state."""

    items: list[T] = Field(default_factory=list)
    current_page: int = Field(default=1, ge=1)
    has_next_page: bool = False

    model_config = _RECORD_CONFIG

    @classmethod
    def empty(cls) -> Page[T]:
        return cls()


def format_episode_code(season_number: int, episode_number: int) -> str:
    return f"S{season_number:02d}E{episode_number:02d}"
