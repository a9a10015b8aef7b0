from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

PostType = Literal["news", "blog", "feature"]
RankingFormat = Literal["test", "odi", "t20"]
RankingCategory = Literal["team", "batter", "bowler", "allrounder"]
FixtureStatus = Literal["upcoming", "live", "completed"]


class PostIn(BaseModel):
    title: str = Field(min_length=1)
    content: str = ""
    category: str = ""
    type: PostType = "news"
    tags: Union[str, list[str]] = []
    thumbnail_url: Optional[str] = None
    is_published: bool = False
    author_id: Optional[str] = None


class PostSummaryOut(BaseModel):
    id: str
    title: str
    slug: str
    excerpt: str
    category: str
    type: str
    thumbnail_url: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class PostOut(PostSummaryOut):
    content: str
    tags: list[str]
    author_id: Optional[str]
    is_published: bool
    published_at: Optional[datetime]
    updated_at: Optional[datetime]


class PostIdsIn(BaseModel):
    ids: list[str]


class RankingIn(BaseModel):
    format: RankingFormat
    category: RankingCategory
    rank: int = Field(ge=1)
    team_name: str = Field(min_length=1)
    player_name: Optional[str] = None
    flag_emoji: Optional[str] = None
    rating: float
    points: Optional[float] = None
    matches: Optional[int] = None


class RankingOut(BaseModel):
    id: str
    format: str
    category: str
    rank: int
    team_name: str
    player_name: Optional[str]
    flag_emoji: Optional[str]
    rating: float
    points: Optional[float]
    matches: Optional[int]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class ManualFixtureIn(BaseModel):
    match_id: Optional[str] = None
    team1: str = ""
    team2: str = ""
    venue: str = ""
    match_date: Optional[datetime] = None
    status: FixtureStatus = "upcoming"
    tournament: str = ""
    match_type: Optional[str] = None


class FixtureStatusIn(BaseModel):
    status: FixtureStatus


class SettingsIn(BaseModel):
    cricapi_key: Optional[str] = None
    fixtures_cache_seconds: Optional[int] = Field(default=None, ge=1)
