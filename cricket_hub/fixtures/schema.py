"""Data contracts for fixtures: the canonical shape and the two raw sources."""

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

FixtureStatus = Literal["upcoming", "live", "completed"]
FixtureSource = Literal["live", "manual"]


class InningScore(BaseModel):
    runs: int = 0
    wickets: int = 0
    overs: float = 0
    inning: str = ""


class Fixture(BaseModel):
    """
    Canonical fixture used by the classifier, the cache and the HTTP layer.
    Both live API matches and curated rows are adapted into this shape.
    """

    id: str
    name: str = ""
    match_type: str = ""
    status: FixtureStatus = "upcoming"
    venue: str = ""
    date: Optional[datetime] = None
    teams: list[str] = Field(default_factory=list, max_length=2)
    score: list[InningScore] = Field(default_factory=list)
    series_id: Optional[str] = None
    source: FixtureSource = "live"
    is_international: bool = False

    @field_validator("date")
    @classmethod
    def _date_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class LiveScore(BaseModel):
    r: Optional[int] = None
    w: Optional[int] = None
    o: Optional[float] = None
    inning: Optional[str] = None


class LiveMatch(BaseModel):
    """One entry of the live API's ``data`` array (field names as sent)."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = None
    matchType: Optional[str] = None
    status: Optional[str] = None
    venue: Optional[str] = None
    date: Optional[str] = None
    dateTimeGMT: Optional[str] = None
    teams: Optional[list[str]] = None
    score: Optional[list[LiveScore]] = None
    series_id: Optional[str] = None
    matchStarted: Optional[bool] = None
    matchEnded: Optional[bool] = None

    @field_validator("teams", "score", mode="before")
    @classmethod
    def _drop_null_entries(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [item for item in value if item is not None]
        return value


class ManualFixtureRow(BaseModel):
    """A row of the curated ``fixtures`` collection."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    match_id: Optional[str] = None
    team1: Optional[str] = None
    team2: Optional[str] = None
    venue: Optional[str] = None
    match_date: Optional[Any] = None
    status: Optional[str] = None
    tournament: Optional[str] = None
    match_type: Optional[str] = None


class FixtureFeed(BaseModel):
    status: Literal["success", "manual"]
    data: list[Fixture]
    info: dict[str, Any] = Field(default_factory=dict)
