"""profiles, properties, projects, requests, proposals and activity log

Revision ID: 0002
Revises: 0001
Create Date: 2025-01-24 10:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: Union[str, Sequence[str], None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _owner() -> sa.Column:
    return sa.Column(
        "user_id",
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )


def upgrade() -> None:
    # =======================
    # Profiles
    # =======================
    op.create_table(
        "homeowner_profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _owner(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255)),
        sa.Column("city", sa.String(100)),
        sa.Column("locality", sa.String(255)),
        sa.Column("profile_picture_url", sa.String()),
        *_timestamps(),
    )

    op.create_table(
        "designer_profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _owner(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("firm_name", sa.String(255)),
        sa.Column("bio", sa.String()),
        sa.Column("profile_picture_url", sa.String()),
        sa.Column("portfolio_images", sa.JSON(), nullable=False),
        sa.Column("services", sa.JSON(), nullable=False),
        sa.Column("service_cities", sa.JSON(), nullable=False),
        sa.Column("styles", sa.JSON(), nullable=False),
        sa.Column("price_range_min", sa.Integer()),
        sa.Column("price_range_max", sa.Integer()),
        sa.Column("experience_years", sa.Integer()),
        sa.Column("projects_completed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verified_at", sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index("ix_designer_profiles_is_verified", "designer_profiles", ["is_verified"])

    op.create_table(
        "contractor_profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _owner(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("profile_picture_url", sa.String()),
        sa.Column("trades", sa.JSON(), nullable=False),
        sa.Column("service_areas", sa.JSON(), nullable=False),
        sa.Column("work_photos", sa.JSON(), nullable=False),
        sa.Column("experience_years", sa.Integer()),
        sa.Column("bio", sa.String()),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verified_at", sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index("ix_contractor_profiles_is_verified", "contractor_profiles", ["is_verified"])

    # =======================
    # Properties & projects
    # =======================
    op.create_table(
        "properties",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "homeowner_id",
            sa.Uuid(),
            sa.ForeignKey("homeowner_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("address", sa.String()),
        sa.Column("city", sa.String(100)),
        sa.Column("locality", sa.String(255)),
        sa.Column("size_sqft", sa.Integer()),
        sa.Column("rooms", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_properties_homeowner_id", "properties", ["homeowner_id"])

    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "homeowner_id",
            sa.Uuid(),
            sa.ForeignKey("homeowner_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("property_id", sa.Uuid(), sa.ForeignKey("properties.id", ondelete="SET NULL")),
        sa.Column("designer_id", sa.Uuid(), sa.ForeignKey("designer_profiles.id", ondelete="SET NULL")),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("scope", sa.String(20), nullable=False),
        sa.Column("scope_details", sa.JSON()),
        sa.Column("status", sa.String(30), nullable=False, server_default="draft"),
        sa.Column("budget_min", sa.Integer()),
        sa.Column("budget_max", sa.Integer()),
        sa.Column("timeline_weeks", sa.Integer()),
        sa.Column("start_timeline", sa.String(50)),
        *_timestamps(),
    )
    op.create_index("ix_projects_homeowner_id", "projects", ["homeowner_id"])
    op.create_index("ix_projects_designer_id", "projects", ["designer_id"])
    op.create_index("ix_projects_status", "projects", ["status"])

    # =======================
    # Requests & proposals
    # =======================
    op.create_table(
        "project_requests",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "designer_id",
            sa.Uuid(),
            sa.ForeignKey("designer_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", sa.String(30), nullable=False, server_default="pending"),
        sa.Column("message", sa.String()),
        *_timestamps(),
    )
    op.create_index("ix_project_requests_project_id", "project_requests", ["project_id"])
    op.create_index("ix_project_requests_designer_id", "project_requests", ["designer_id"])
    op.create_index("ix_project_requests_status", "project_requests", ["status"])

    op.create_table(
        "proposals",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "project_request_id",
            sa.Uuid(),
            sa.ForeignKey("project_requests.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column(
            "designer_id",
            sa.Uuid(),
            sa.ForeignKey("designer_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("scope_description", sa.String(), nullable=False),
        sa.Column("approach", sa.String()),
        sa.Column("timeline_weeks", sa.Integer(), nullable=False),
        sa.Column("cost_estimate", sa.Integer(), nullable=False),
        sa.Column("cost_breakdown", sa.JSON()),
        sa.Column("notes", sa.String()),
        sa.Column("status", sa.String(20), nullable=False, server_default="submitted"),
        *_timestamps(),
    )
    op.create_index("ix_proposals_designer_id", "proposals", ["designer_id"])
    op.create_index("ix_proposals_status", "proposals", ["status"])

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL")),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("details", sa.JSON()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_activity_logs_project_id", "activity_logs", ["project_id"])


def downgrade() -> None:
    op.drop_table("activity_logs")
    op.drop_table("proposals")
    op.drop_table("project_requests")
    op.drop_table("projects")
    op.drop_table("properties")
    op.drop_table("contractor_profiles")
    op.drop_table("designer_profiles")
    op.drop_table("homeowner_profiles")
