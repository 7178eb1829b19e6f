"""Create users, publishers, zines, issues, pages, blocks and spreads tables"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "20261017_01"
down_revision = None
branch_labels = None
depends_on = None

_JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamps(*, updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        )
    ]
    if updated:
        columns.append(
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                server_default=sa.text("CURRENT_TIMESTAMP"),
                nullable=False,
            )
        )
    return columns


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(length=512), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=True),
        sa.Column("avatar_url", sa.String(length=512), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "refresh_tokens",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(updated=False),
    )
    op.create_index("ix_refresh_tokens_user_id", "refresh_tokens", ["user_id"])

    op.create_table(
        "publishers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("handle", sa.String(length=30), nullable=False, unique=True),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "zines",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "publisher_id",
            sa.Integer(),
            sa.ForeignKey("publishers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("cover_image_url", sa.String(length=512), nullable=True),
        sa.Column("visibility", sa.String(length=8), nullable=False, server_default="UNLISTED"),
        sa.Column("access_type", sa.String(length=8), nullable=False, server_default="OPEN"),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("issue_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint("publisher_id", "slug", name="uq_zines_publisher_slug"),
    )
    op.create_index("ix_zines_publisher_id", "zines", ["publisher_id"])

    op.create_table(
        "issues",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "zine_id",
            sa.Integer(),
            sa.ForeignKey("zines.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("issue_number", sa.Integer(), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reading_direction", sa.String(length=3), nullable=False, server_default="LTR"),
        sa.Column("page_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("spread_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint("zine_id", "issue_number", name="uq_issues_zine_issue_number"),
    )
    op.create_index("ix_issues_zine_id", "issues", ["zine_id"])

    op.create_table(
        "pages",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "issue_id",
            sa.Integer(),
            sa.ForeignKey("issues.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("page_number", sa.Integer(), nullable=False),
        sa.Column("canvas_width", sa.Integer(), nullable=False, server_default="900"),
        sa.Column("canvas_height", sa.Integer(), nullable=False, server_default="1200"),
        sa.Column("background_color", sa.String(length=16), nullable=True),
        sa.Column("metadata", _JSON, nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("issue_id", "page_number", name="uq_pages_issue_page_number"),
    )
    op.create_index("ix_pages_issue_id", "pages", ["issue_id"])

    op.create_table(
        "blocks",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "page_id",
            sa.Integer(),
            sa.ForeignKey("pages.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("block_type", sa.String(length=64), nullable=False),
        sa.Column("position_x", sa.Float(), nullable=False),
        sa.Column("position_y", sa.Float(), nullable=False),
        sa.Column("width", sa.Float(), nullable=False),
        sa.Column("height", sa.Float(), nullable=False),
        sa.Column("rotation", sa.Float(), nullable=False, server_default="0"),
        sa.Column("z_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("data", _JSON, nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index("ix_blocks_page_id", "blocks", ["page_id"])

    # Page references are weak: removing a page only clears the slot
    op.create_table(
        "spreads",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "issue_id",
            sa.Integer(),
            sa.ForeignKey("issues.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("spread_number", sa.Integer(), nullable=False),
        sa.Column(
            "left_page_id",
            sa.Integer(),
            sa.ForeignKey("pages.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "right_page_id",
            sa.Integer(),
            sa.ForeignKey("pages.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(updated=False),
        sa.UniqueConstraint("issue_id", "spread_number", name="uq_spreads_issue_spread_number"),
    )
    op.create_index("ix_spreads_issue_id", "spreads", ["issue_id"])


def downgrade() -> None:
    op.drop_index("ix_spreads_issue_id", table_name="spreads")
    op.drop_table("spreads")
    op.drop_index("ix_blocks_page_id", table_name="blocks")
    op.drop_table("blocks")
    op.drop_index("ix_pages_issue_id", table_name="pages")
    op.drop_table("pages")
    op.drop_index("ix_issues_zine_id", table_name="issues")
    op.drop_table("issues")
    op.drop_index("ix_zines_publisher_id", table_name="zines")
    op.drop_table("zines")
    op.drop_table("publishers")
    op.drop_index("ix_refresh_tokens_user_id", table_name="refresh_tokens")
    op.drop_table("refresh_tokens")
    op.drop_table("users")
