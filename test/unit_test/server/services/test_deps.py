"""Unit tests for the service dependencies."""

from unittest.mock import MagicMock

from cityprefs.server.services import CityService, UserService
from cityprefs.server.services.deps import CityServiceDep, UserServiceDep, get_city_service, get_user_service


class TestServiceDeps:
    def test_annotated_dependencies(self):
        assert UserServiceDep.__metadata__[0].dependency is get_user_service
        assert CityServiceDep.__metadata__[0].dependency is get_city_service

    def test_services_share_the_session(self):
        session = MagicMock()
        users = get_user_service(session)
        cities = get_city_service(session)

        assert isinstance(users, UserService)
        assert isinstance(cities, CityService)
        assert users.repos.users.session is session
        assert cities.repos.cities.session is session
