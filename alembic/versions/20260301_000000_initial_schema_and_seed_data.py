"""Initial schema and seed data for Gunpla Sekai

Revision ID: 20260301_000000
Revises: None
Create Date: 2026-03-01 00:00:00.000000

This is the initial migration that creates all tables and seeds default data
for the Gunpla Sekai service. This includes:
- Users synced from Clerk
- Catalog tables (timelines, series, grades, product lines, release types, mobile suits, kits)
- Community tables (uploads, collections, reviews, builds, milestones, likes, comments, gunpla cards)
- The standard Gunpla grades

Revision format: YYYYMMDD_HHMMSS_description

"""

import uuid
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

BUILD_STATUS = ("PLANNING", "IN_PROGRESS", "COMPLETED", "ON_HOLD")
COLLECTION_STATUS = ("WISHLIST", "PREORDER", "BACKLOG", "IN_PROGRESS", "BUILT")
MILESTONE_TYPE = (
    "ACQUISITION",
    "PLANNING",
    "BUILD",
    "PAINTING",
    "PANEL_LINING",
    "DECALS",
    "TOPCOAT",
    "PHOTOGRAPHY",
    "COMPLETION",
)
REVIEW_CATEGORY = (
    "BUILD_QUALITY_ENGINEERING",
    "ARTICULATION_POSEABILITY",
    "DETAIL_ACCURACY",
    "AESTHETICS_PROPORTIONS",
    "ACCESSORIES_GIMMICKS",
    "VALUE_EXPERIENCE",
)
KIT_UPLOAD_TYPE = ("BOX_ART", "PRODUCT_SHOTS", "RUNNERS", "MANUAL", "PROTOTYPE")

DEFAULT_GRADES = (
    ("Perfect Grade", "pg", "1/60 scale kits with the most parts and inner frame detail."),
    ("Master Grade", "mg", "1/100 scale kits with a full inner frame."),
    ("Real Grade", "rg", "1/144 scale kits with Master Grade level detail."),
    ("High Grade", "hg", "1/144 scale kits balancing detail and simplicity."),
    ("Entry Grade", "eg", "1/144 scale snap kits for first-time builders."),
    ("Full Mechanics", "fm", "1/100 scale kits with exposed mechanical detail."),
)


def _id() -> sa.Column:
    return sa.Column("id", sa.String(32), nullable=False)


def upgrade() -> None:
    """Create all tables and seed initial data."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("email", sa.String(), nullable=False, server_default=""),
        sa.Column("username", sa.String(64), nullable=True),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("avatar_url", sa.String(), nullable=True),
        sa.Column("bio", sa.String(), nullable=True),
        sa.Column("instagram_url", sa.String(), nullable=True),
        sa.Column("twitter_url", sa.String(), nullable=True),
        sa.Column("youtube_url", sa.String(), nullable=True),
        sa.Column("portfolio_url", sa.String(), nullable=True),
        sa.Column("banner_image_url", sa.String(), nullable=True),
        sa.Column("theme_color", sa.String(), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_collections", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_builds", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_activity", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_badges", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("email_notifications", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_users_email", "email"),
        sa.Index("ix_users_username", "username", unique=True),
    )

    # Create catalog tables
    op.create_table(
        "timelines",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_timelines_slug", "slug", unique=True),
    )

    op.create_table(
        "grades",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_grades_slug", "slug", unique=True),
    )

    op.create_table(
        "release_types",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_release_types_slug", "slug", unique=True),
    )

    op.create_table(
        "series",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("timeline_id", sa.String(32), nullable=True),
        sa.Column("scraped_images", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["timeline_id"], ["timelines.id"]),
        sa.Index("ix_series_slug", "slug", unique=True),
        sa.Index("ix_series_timeline_id", "timeline_id"),
    )

    op.create_table(
        "product_lines",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("logo", sa.String(), nullable=True),
        sa.Column("scraped_image", sa.String(), nullable=True),
        sa.Column("grade_id", sa.String(32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["grade_id"], ["grades.id"]),
        sa.Index("ix_product_lines_slug", "slug", unique=True),
        sa.Index("ix_product_lines_grade_id", "grade_id"),
    )

    op.create_table(
        "mobile_suits",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("series_id", sa.String(32), nullable=True),
        sa.Column("scraped_images", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["series_id"], ["series.id"]),
        sa.Index("ix_mobile_suits_name", "name"),
        sa.Index("ix_mobile_suits_slug", "slug", unique=True),
        sa.Index("ix_mobile_suits_series_id", "series_id"),
    )

    # Create uploads table (referenced by kits, builds and cards)
    op.create_table(
        "uploads",
        _id(),
        sa.Column("cloudinary_asset_id", sa.String(), nullable=False),
        sa.Column("public_id", sa.String(), nullable=False),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("eager_url", sa.String(), nullable=True),
        sa.Column("format", sa.String(), nullable=False),
        sa.Column("resource_type", sa.String(), nullable=False, server_default="image"),
        sa.Column("size", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("original_filename", sa.String(), nullable=False, server_default=""),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("uploaded_by_id", sa.String(64), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["uploaded_by_id"], ["users.id"]),
        sa.Index("ix_uploads_uploaded_at", "uploaded_at"),
        sa.Index("ix_uploads_uploaded_by_id", "uploaded_by_id"),
    )

    op.create_table(
        "kits",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=True),
        sa.Column("number", sa.String(), nullable=False, server_default=""),
        sa.Column("variant", sa.String(), nullable=True),
        sa.Column("release_date", sa.Date(), nullable=True),
        sa.Column("price_yen", sa.Integer(), nullable=True),
        sa.Column("region", sa.String(), nullable=True),
        sa.Column("box_art", sa.String(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("manual_links", sa.JSON(), nullable=False),
        sa.Column("scraped_images", sa.JSON(), nullable=False),
        sa.Column("grade_id", sa.String(32), nullable=False),
        sa.Column("product_line_id", sa.String(32), nullable=True),
        sa.Column("series_id", sa.String(32), nullable=True),
        sa.Column("release_type_id", sa.String(32), nullable=True),
        sa.Column("base_kit_id", sa.String(32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["grade_id"], ["grades.id"]),
        sa.ForeignKeyConstraint(["product_line_id"], ["product_lines.id"]),
        sa.ForeignKeyConstraint(["series_id"], ["series.id"]),
        sa.ForeignKeyConstraint(["release_type_id"], ["release_types.id"]),
        sa.ForeignKeyConstraint(["base_kit_id"], ["kits.id"]),
        sa.Index("ix_kits_name", "name"),
        sa.Index("ix_kits_slug", "slug", unique=True),
        sa.Index("ix_kits_release_date", "release_date"),
        sa.Index("ix_kits_grade_id", "grade_id"),
        sa.Index("ix_kits_product_line_id", "product_line_id"),
        sa.Index("ix_kits_series_id", "series_id"),
        sa.Index("ix_kits_release_type_id", "release_type_id"),
        sa.Index("ix_kits_base_kit_id", "base_kit_id"),
    )

    op.create_table(
        "kit_mobile_suits",
        _id(),
        sa.Column("kit_id", sa.String(32), nullable=False),
        sa.Column("mobile_suit_id", sa.String(32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["kit_id"], ["kits.id"]),
        sa.ForeignKeyConstraint(["mobile_suit_id"], ["mobile_suits.id"]),
        sa.UniqueConstraint("kit_id", "mobile_suit_id", name="uq_kit_mobile_suit"),
        sa.Index("ix_kit_mobile_suits_kit_id", "kit_id"),
        sa.Index("ix_kit_mobile_suits_mobile_suit_id", "mobile_suit_id"),
    )

    op.create_table(
        "kit_uploads",
        _id(),
        sa.Column("kit_id", sa.String(32), nullable=False),
        sa.Column("upload_id", sa.String(32), nullable=False),
        sa.Column("type", sa.Enum(*KIT_UPLOAD_TYPE, name="kituploadtype"), nullable=False),
        sa.Column("caption", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["kit_id"], ["kits.id"]),
        sa.ForeignKeyConstraint(["upload_id"], ["uploads.id"]),
        sa.Index("ix_kit_uploads_kit_id", "kit_id"),
        sa.Index("ix_kit_uploads_upload_id", "upload_id"),
    )

    # Create collection table
    op.create_table(
        "user_kit_collections",
        _id(),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("kit_id", sa.String(32), nullable=False),
        sa.Column("status", sa.Enum(*COLLECTION_STATUS, name="collectionstatus"), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["kit_id"], ["kits.id"]),
        sa.UniqueConstraint("user_id", "kit_id", name="uq_user_kit_collection"),
        sa.Index("ix_user_kit_collections_user_id", "user_id"),
        sa.Index("ix_user_kit_collections_kit_id", "kit_id"),
        sa.Index("ix_user_kit_collections_status", "status"),
        sa.Index("ix_user_kit_collections_added_at", "added_at"),
    )

    # Create review tables
    op.create_table(
        "reviews",
        _id(),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("kit_id", sa.String(32), nullable=False),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("content", sa.String(), nullable=True),
        sa.Column("overall_score", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["kit_id"], ["kits.id"]),
        sa.UniqueConstraint("user_id", "kit_id", name="uq_review_user_kit"),
        sa.Index("ix_reviews_user_id", "user_id"),
        sa.Index("ix_reviews_kit_id", "kit_id"),
        sa.Index("ix_reviews_created_at", "created_at"),
    )

    op.create_table(
        "review_scores",
        _id(),
        sa.Column("review_id", sa.String(32), nullable=False),
        sa.Column("category", sa.Enum(*REVIEW_CATEGORY, name="reviewcategory"), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["review_id"], ["reviews.id"]),
        sa.UniqueConstraint("review_id", "category", name="uq_review_score_category"),
        sa.CheckConstraint("score BETWEEN 1 AND 10", name="ck_review_score_range"),
        sa.Index("ix_review_scores_review_id", "review_id"),
    )

    op.create_table(
        "review_feedback",
        _id(),
        sa.Column("review_id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("is_helpful", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["review_id"], ["reviews.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.UniqueConstraint("review_id", "user_id", name="uq_review_feedback_user"),
        sa.Index("ix_review_feedback_review_id", "review_id"),
        sa.Index("ix_review_feedback_user_id", "user_id"),
    )

    # Create build tables
    op.create_table(
        "builds",
        _id(),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("kit_id", sa.String(32), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("status", sa.Enum(*BUILD_STATUS, name="buildstatus"), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("featured_image_id", sa.String(32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["kit_id"], ["kits.id"]),
        sa.ForeignKeyConstraint(["featured_image_id"], ["uploads.id"]),
        sa.Index("ix_builds_user_id", "user_id"),
        sa.Index("ix_builds_kit_id", "kit_id"),
        sa.Index("ix_builds_status", "status"),
        sa.Index("ix_builds_created_at", "created_at"),
    )

    op.create_table(
        "build_uploads",
        _id(),
        sa.Column("build_id", sa.String(32), nullable=False),
        sa.Column("upload_id", sa.String(32), nullable=False),
        sa.Column("caption", sa.String(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["build_id"], ["builds.id"]),
        sa.ForeignKeyConstraint(["upload_id"], ["uploads.id"]),
        sa.UniqueConstraint("build_id", "upload_id", name="uq_build_upload"),
        sa.Index("ix_build_uploads_build_id", "build_id"),
        sa.Index("ix_build_uploads_upload_id", "upload_id"),
    )

    op.create_table(
        "build_milestones",
        _id(),
        sa.Column("build_id", sa.String(32), nullable=False),
        sa.Column("type", sa.Enum(*MILESTONE_TYPE, name="milestonetype"), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["build_id"], ["builds.id"]),
        sa.Index("ix_build_milestones_build_id", "build_id"),
    )

    op.create_table(
        "build_milestone_uploads",
        _id(),
        sa.Column("build_milestone_id", sa.String(32), nullable=False),
        sa.Column("upload_id", sa.String(32), nullable=False),
        sa.Column("caption", sa.String(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["build_milestone_id"], ["build_milestones.id"]),
        sa.ForeignKeyConstraint(["upload_id"], ["uploads.id"]),
        sa.Index("ix_build_milestone_uploads_build_milestone_id", "build_milestone_id"),
        sa.Index("ix_build_milestone_uploads_upload_id", "upload_id"),
    )

    op.create_table(
        "build_likes",
        _id(),
        sa.Column("build_id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["build_id"], ["builds.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.UniqueConstraint("build_id", "user_id", name="uq_build_like"),
        sa.Index("ix_build_likes_build_id", "build_id"),
        sa.Index("ix_build_likes_user_id", "user_id"),
    )

    op.create_table(
        "build_comments",
        _id(),
        sa.Column("build_id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("content", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["build_id"], ["builds.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.Index("ix_build_comments_build_id", "build_id"),
        sa.Index("ix_build_comments_user_id", "user_id"),
        sa.Index("ix_build_comments_created_at", "created_at"),
    )

    # Create gunpla card table
    op.create_table(
        "gunpla_cards",
        _id(),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("kit_id", sa.String(32), nullable=False),
        sa.Column("upload_id", sa.String(32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["kit_id"], ["kits.id"]),
        sa.ForeignKeyConstraint(["upload_id"], ["uploads.id"]),
        sa.UniqueConstraint("user_id", "kit_id", name="uq_gunpla_card_user_kit"),
        sa.Index("ix_gunpla_cards_user_id", "user_id"),
        sa.Index("ix_gunpla_cards_kit_id", "kit_id"),
        sa.Index("ix_gunpla_cards_created_at", "created_at"),
    )

    # Seed default grades
    grades_table = sa.table(
        "grades",
        sa.column("id", sa.String),
        sa.column("name", sa.String),
        sa.column("slug", sa.String),
        sa.column("description", sa.String),
    )
    op.bulk_insert(
        grades_table,
        [
            {"id": uuid.uuid4().hex, "name": name, "slug": slug, "description": description}
            for name, slug, description in DEFAULT_GRADES
        ],
    )


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("gunpla_cards")
    op.drop_table("build_comments")
    op.drop_table("build_likes")
    op.drop_table("build_milestone_uploads")
    op.drop_table("build_milestones")
    op.drop_table("build_uploads")
    op.drop_table("builds")
    op.drop_table("review_feedback")
    op.drop_table("review_scores")
    op.drop_table("reviews")
    op.drop_table("user_kit_collections")
    op.drop_table("kit_uploads")
    op.drop_table("kit_mobile_suits")
    op.drop_table("kits")
    op.drop_table("uploads")
    op.drop_table("mobile_suits")
    op.drop_table("product_lines")
    op.drop_table("series")
    op.drop_table("release_types")
    op.drop_table("grades")
    op.drop_table("timelines")
    op.drop_table("users")

    # Drop the enum types
    for enum_name in ("buildstatus", "collectionstatus", "milestonetype", "reviewcategory", "kituploadtype"):
        op.execute(f"DROP TYPE IF EXISTS {enum_name}")
