"""Unit tests for the assembled FastAPI application."""

from sqlalchemy import inspect
from sqlalchemy.orm import configure_mappers

from cityprefs.core.database.entities import CityRow, FavoriteCityRow, HistoricalWeatherRow, UserRow
from cityprefs.core.models.domain import AuditMetadata
from cityprefs.server.main import app


def test_app_registers_routers():
    paths = {route.path for route in app.routes}

    assert "/health" in paths
    assert "/version" in paths
    assert "/api/v1/users/{user_id}" in paths
    assert "/api/v1/users/{user_id}/favorites/{city_id}" in paths
    assert "/api/v1/cities/{city_id}/weather" in paths


def test_rows_map_audit_metadata_as_composite():
    configure_mappers()

    for row_type in (UserRow, FavoriteCityRow, CityRow, HistoricalWeatherRow):
        audit = inspect(row_type).composites["audit"]
        assert audit.composite_class is AuditMetadata
        assert [column.key for column in audit.columns] == [
            "created_by",
            "created_date",
            "last_modified_by",
            "last_modified_date",
        ]
