import uuid

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String, Text, UniqueConstraint
from sqlalchemy.sql import func

from .db import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String, nullable=False, default="")
    slug = Column(String, nullable=False, unique=True, index=True)
    content = Column(Text, nullable=False, default="")    # HTML from the rich text editor
    category = Column(String, nullable=False, default="")
    type = Column(String, nullable=False, default="news")  # news | blog | feature
    tags = Column(JSON, nullable=False, default=list)
    author_id = Column(String, nullable=True)
    thumbnail_url = Column(String, nullable=True)
    is_published = Column(Boolean, nullable=False, default=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )


class ManualFixture(Base):
    """Curated fixture, used when the live API is out of quota or unreachable."""

    __tablename__ = "fixtures"
    __table_args__ = (UniqueConstraint("match_id", name="uq_fixtures_match_id"),)

    id = Column(String(36), primary_key=True, default=_uuid)
    match_id = Column(String, nullable=False)
    team1 = Column(String, nullable=False, default="")
    team2 = Column(String, nullable=False, default="")
    venue = Column(String, nullable=False, default="")
    match_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(String, nullable=False, default="upcoming")  # upcoming | live | completed
    tournament = Column(String, nullable=False, default="")
    match_type = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Ranking(Base):
    __tablename__ = "icc_rankings"

    id = Column(String(36), primary_key=True, default=_uuid)
    format = Column(String, nullable=False, index=True)    # test | odi | t20
    category = Column(String, nullable=False, index=True)  # team | batter | bowler | allrounder
    rank = Column(Integer, nullable=False)
    team_name = Column(String, nullable=False, default="")
    player_name = Column(String, nullable=True)
    flag_emoji = Column(String, nullable=True)
    rating = Column(Float, nullable=False, default=0.0)
    points = Column(Float, nullable=True)
    matches = Column(Integer, nullable=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )


class AppSettings(Base):
    __tablename__ = "app_settings"

    id = Column(Integer, primary_key=True)
    cricapi_key_enc = Column(Text, nullable=True)
    fixtures_cache_seconds = Column(Integer, nullable=False, default=60)
    updated_at_utc = Column(DateTime(timezone=True), nullable=True)
