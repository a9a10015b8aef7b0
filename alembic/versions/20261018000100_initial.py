"""initial

Revision ID: 20261018000100
Revises: 
Create Date: 2026-10-18 00:01:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261018000100"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "posts",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("author_id", sa.String(), nullable=True),
        sa.Column("thumbnail_url", sa.String(), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
    )
    op.create_index("ix_posts_slug", "posts", ["slug"], unique=True)

    op.create_table(
        "fixtures",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("match_id", sa.String(), nullable=False),
        sa.Column("team1", sa.String(), nullable=False),
        sa.Column("team2", sa.String(), nullable=False),
        sa.Column("venue", sa.String(), nullable=False),
        sa.Column("match_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("tournament", sa.String(), nullable=False),
        sa.Column("match_type", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
        sa.UniqueConstraint("match_id", name="uq_fixtures_match_id"),
    )

    op.create_table(
        "icc_rankings",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("format", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("rank", sa.Integer(), nullable=False),
        sa.Column("team_name", sa.String(), nullable=False),
        sa.Column("player_name", sa.String(), nullable=True),
        sa.Column("flag_emoji", sa.String(), nullable=True),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.Column("points", sa.Float(), nullable=True),
        sa.Column("matches", sa.Integer(), nullable=True),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
    )
    op.create_index("ix_icc_rankings_format", "icc_rankings", ["format"], unique=False)
    op.create_index("ix_icc_rankings_category", "icc_rankings", ["category"], unique=False)

    op.create_table(
        "app_settings",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("cricapi_key_enc", sa.Text(), nullable=True),
        sa.Column("fixtures_cache_seconds", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("updated_at_utc", sa.DateTime(timezone=True), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("app_settings")
    op.drop_index("ix_icc_rankings_category", table_name="icc_rankings")
    op.drop_index("ix_icc_rankings_format", table_name="icc_rankings")
    op.drop_table("icc_rankings")
    op.drop_table("fixtures")
    op.drop_index("ix_posts_slug", table_name="posts")
    op.drop_table("posts")
