"""Unit tests for the city service over an in-memory database."""

import pytest

from cityprefs.core.errors import ConflictError, NotFoundError, ValidationError
from cityprefs.core.models.domain import City, HistoricalWeather
from cityprefs.server.services import CityService


@pytest.fixture
def service(session) -> CityService:
    return CityService(session)


class TestCityService:
    async def test_create_and_find(self, service):
        created = await service.create(City(name="Lisbon", population=545000))

        assert (await service.find_by_id(created.id)).population == 545000
        assert (await service.find_by_name("LISBON")).id == created.id
        assert [city.name for city in await service.find_by_name_containing("isb")] == ["Lisbon"]
        assert [city.name for city in await service.find_all()] == ["Lisbon"]

    async def test_missing_city(self, service):
        with pytest.raises(NotFoundError):
            await service.find_by_id(1)
        with pytest.raises(NotFoundError):
            await service.find_by_name("Atlantis")

    async def test_duplicate_name(self, service):
        await service.create(City(name="Porto"))
        with pytest.raises(ConflictError):
            await service.create(City(name="porto"))

    async def test_patch(self, service):
        city = await service.create(City(name="Porto", population=232000, average_rent=850.0))

        patched = await service.update(city.id, {"averageRent": "900", "latitude": None})

        assert patched.average_rent == 900.0
        assert patched.population == 232000
        assert patched.name == "Porto"

    async def test_patch_invalid_value(self, service):
        city = await service.create(City(name="Porto"))
        with pytest.raises(ValidationError):
            await service.update(city.id, {"population": "many"})

    async def test_delete(self, service):
        city = await service.create(City(name="Braga"))
        await service.delete(city.id)
        with pytest.raises(NotFoundError):
            await service.delete(city.id)

    async def test_weather(self, service):
        city = await service.create(City(name="Faro"))
        added = await service.add_weather(HistoricalWeather(city_id=city.id, month="August", precipitation=2.0, temperature=25.5))

        assert added.id is not None
        assert [(row.id, row.month) for row in await service.list_weather(city.id)] == [(added.id, "August")]
        with pytest.raises(NotFoundError):
            await service.list_weather(404)
