"""Initial schema for cityprefs

Revision ID: 20261018_000000
Revises: None
Create Date: 2026-10-18 00:00:00.000000

Creates the four tables of the service:
- users and their favorite-city association rows (user_cities)
- cities and their historical weather rows

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261018_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list:
    return [
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_modified_by", sa.String(255), nullable=True),
        sa.Column("last_modified_date", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("min_population", sa.Integer(), nullable=True),
        sa.Column("max_population", sa.Integer(), nullable=True),
        sa.Column("min_rent", sa.Float(), nullable=True),
        sa.Column("max_rent", sa.Float(), nullable=True),
        sa.Column("min_house_cost", sa.Float(), nullable=True),
        sa.Column("max_house_cost", sa.Float(), nullable=True),
        sa.Column("cost_of_living", sa.Integer(), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "cities",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("population", sa.Integer(), nullable=True),
        sa.Column("population_density_rating", sa.Integer(), nullable=True),
        sa.Column("safety_rating_score", sa.Integer(), nullable=True),
        sa.Column("cost_of_living_score", sa.Integer(), nullable=True),
        sa.Column("average_income", sa.Float(), nullable=True),
        sa.Column("average_rent", sa.Float(), nullable=True),
        sa.Column("average_house_cost", sa.Float(), nullable=True),
        sa.Column("average_temperature", sa.Float(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_cities_name", "cities", ["name"], unique=True)

    op.create_table(
        "user_cities",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("city_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), server_default="0", nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["city_id"], ["cities.id"]),
        sa.UniqueConstraint("user_id", "city_id", name="uq_user_cities_user_city"),
    )
    op.create_index("ix_user_cities_user_id", "user_cities", ["user_id"])
    op.create_index("ix_user_cities_city_id", "user_cities", ["city_id"])

    op.create_table(
        "historical_weather",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("city_id", sa.Integer(), nullable=False),
        sa.Column("month", sa.String(32), nullable=False),
        sa.Column("precipitation", sa.Float(), nullable=False),
        sa.Column("temperature", sa.Float(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["city_id"], ["cities.id"]),
    )
    op.create_index("ix_historical_weather_city_id", "historical_weather", ["city_id"])


def downgrade() -> None:
    """Drop all tables."""

    op.drop_index("ix_historical_weather_city_id", table_name="historical_weather")
    op.drop_table("historical_weather")
    op.drop_index("ix_user_cities_city_id", table_name="user_cities")
    op.drop_index("ix_user_cities_user_id", table_name="user_cities")
    op.drop_table("user_cities")
    op.drop_index("ix_cities_name", table_name="cities")
    op.drop_table("cities")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
