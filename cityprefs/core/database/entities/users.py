"""
User entity models.

Row models for ``users`` and the ``user_cities`` association rows that record
a user's favorite cities.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cityprefs.core.models.domain import AuditMetadata

from ..base import Base, audit_composite
from .cities import CityRow


class UserRow(Base):
    """Row model for ``users``.

    ``username`` is unique and stored lowercase. Favorite cities live in
    ``user_cities`` and are written explicitly by the repository; there is no
    ORM-level cascade from this row.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    min_population: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    max_population: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    min_rent: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    max_rent: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    min_house_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    max_house_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    cost_of_living: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    audit: Mapped[AuditMetadata] = audit_composite()

    def __repr__(self) -> str:
        return f"UserRow(id={self.id}, username={self.username})"


class FavoriteCityRow(Base):
    """Row model for ``user_cities``.

    Links a user to a city. One row per (user, city) pair; ``position`` keeps
    the order of the user's favorites.
    """

    __tablename__ = "user_cities"
    __table_args__ = (UniqueConstraint("user_id", "city_id", name="uq_user_cities_user_city"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    city_id: Mapped[int] = mapped_column(ForeignKey("cities.id"), index=True)
    position: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    audit: Mapped[AuditMetadata] = audit_composite()

    city: Mapped[CityRow] = relationship(CityRow, lazy="raise")
