"""
City entity models.

Row models for ``cities`` and the ``historical_weather`` rows each city owns.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cityprefs.core.models.domain import AuditMetadata

from ..base import Base, audit_composite


class CityRow(Base):
    """Row model for ``cities``.

    ``name`` is unique; every other attribute is optional.
    """

    __tablename__ = "cities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    population: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    population_density_rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    safety_rating_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    cost_of_living_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    average_income: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    average_rent: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    average_house_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    average_temperature: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    audit: Mapped[AuditMetadata] = audit_composite()

    def __repr__(self) -> str:
        return f"CityRow(id={self.id}, name={self.name})"


class HistoricalWeatherRow(Base):
    """Row model for ``historical_weather``.

    Monthly averages for a city. Owned by the city: deleting the city deletes
    these rows.
    """

    __tablename__ = "historical_weather"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    city_id: Mapped[int] = mapped_column(ForeignKey("cities.id"), index=True)

    month: Mapped[str] = mapped_column(String(32))
    precipitation: Mapped[float] = mapped_column(Float)
    temperature: Mapped[float] = mapped_column(Float)

    audit: Mapped[AuditMetadata] = audit_composite()
