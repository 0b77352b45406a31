"""Unit tests for the API request/response schemas."""

import pydantic
import pytest

from cityprefs.core.models.domain import AuditMetadata, City, FavoriteCity, HistoricalWeather, User
from cityprefs.core.models.io import (
    CityCreate,
    CityRead,
    HistoricalWeatherCreate,
    HistoricalWeatherRead,
    UserCreate,
    UserRead,
    UserReplace,
)


class TestUserSchemas:
    def test_create_accepts_camel_case(self):
        payload = UserCreate.model_validate(
            {"username": "Arthur", "maxRent": 1200, "favoriteCities": [{"cityId": 3}, {"cityId": 4}]}
        )
        user = payload.to_domain()

        assert user.username == "arthur"
        assert user.max_rent == 1200.0
        assert user.favorite_city_ids() == [3, 4]
        assert user.id is None

    def test_create_accepts_snake_case(self):
        payload = UserCreate.model_validate({"username": "james", "min_population": 1000})
        assert payload.min_population == 1000

    def test_blank_username_is_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            UserCreate(username=" ")

    @pytest.mark.parametrize("field", ["minPopulation", "maxPopulation", "costOfLiving"])
    def test_int_preferences_must_fit_integer_column(self, field):
        with pytest.raises(pydantic.ValidationError):
            UserCreate.model_validate({"username": "arthur", field: 10**30})

    def test_favorite_city_id_must_fit_integer_column(self):
        with pytest.raises(pydantic.ValidationError):
            UserCreate.model_validate({"username": "arthur", "favoriteCities": [{"cityId": 2**31}]})

    def test_replace_carries_identity(self):
        user = UserReplace(username="james", favoriteCities=[{"cityId": 1}]).to_domain(9)
        assert user.id == 9
        assert user.favorite_cities[0].user_id == 9

    def test_read_serializes_camel_case(self):
        city = City(id=3, name="Lisbon")
        user = User(
            id=1,
            username="arthur",
            max_rent=900.0,
            favorite_cities=[FavoriteCity(id=5, user_id=1, city_id=3, city=city)],
            audit=AuditMetadata(created_by="SYSTEM"),
        )
        body = UserRead.from_domain(user).model_dump(by_alias=True, mode="json")

        assert body["id"] == 1
        assert body["maxRent"] == 900.0
        assert body["createdBy"] == "SYSTEM"
        assert body["favoriteCities"][0]["cityId"] == 3
        assert body["favoriteCities"][0]["city"]["name"] == "Lisbon"


class TestCitySchemas:
    def test_create_to_domain(self):
        city = CityCreate.model_validate({"name": "Porto", "averageRent": 800}).to_domain()
        assert city == City(name="Porto", average_rent=800.0)

    @pytest.mark.parametrize("average_rent", [float("inf"), float("nan")])
    def test_non_finite_numbers_are_rejected(self, average_rent):
        with pytest.raises(pydantic.ValidationError):
            CityCreate(name="Nowhere", average_rent=average_rent)

    def test_population_must_fit_integer_column(self):
        with pytest.raises(pydantic.ValidationError):
            CityCreate(name="Nowhere", population=2**31)

    @pytest.mark.parametrize("latitude", [-91, 91])
    def test_latitude_range(self, latitude):
        with pytest.raises(pydantic.ValidationError):
            CityCreate(name="Nowhere", latitude=latitude)

    def test_read_from_domain(self):
        body = CityRead.from_domain(City(id=2, name="Porto", safety_rating_score=8)).model_dump(by_alias=True)
        assert body["safetyRatingScore"] == 8
        assert body["lastModifiedBy"] is None

    def test_weather_round_trip_fields(self):
        weather = HistoricalWeatherCreate(month="January", precipitation=80.5, temperature=11.0).to_domain(2)
        assert weather == HistoricalWeather(city_id=2, month="January", precipitation=80.5, temperature=11.0)

        body = HistoricalWeatherRead.from_domain(weather.model_copy(update={"id": 4})).model_dump(by_alias=True)
        assert body["cityId"] == 2
        assert body["month"] == "January"
